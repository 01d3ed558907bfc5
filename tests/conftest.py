import numpy as np
import pytest


def make_pixels(width, height, rgb=(128, 128, 128), alpha=255):
    """Uniform RGBA buffer."""
    pixels = np.empty((height, width, 4), dtype=np.uint8)
    pixels[:, :, :3] = rgb
    pixels[:, :, 3] = alpha
    return pixels


def make_vertical_step(width, height, split=None, low=0, high=255):
    """RGBA buffer that is *low* left of column *split* and *high* from it on."""
    split = width // 2 if split is None else split
    pixels = make_pixels(width, height, (low, low, low))
    pixels[:, split:, :3] = high
    return pixels


@pytest.fixture
def random_pixels():
    rng = np.random.default_rng(1234)
    pixels = rng.integers(0, 256, size=(12, 16, 4), dtype=np.uint8)
    pixels[:, :, 3] = 255
    return pixels
