#!/usr/bin/env python3
"""
Image to ASCII Transcoder - Preprocessing
=========================================
Loads images with Pillow and resizes them to the character grid before
rendering.
"""

import logging
from typing import Optional, Tuple

import numpy as np
from PIL import Image, ImageFilter

from ascii_transcoder.config import RenderConfig
from ascii_transcoder.constants import FONT_ASPECT_RATIO
from ascii_transcoder.renderer import CharacterGrid, render

logger = logging.getLogger(__name__)


def load_image(path: str) -> Image.Image:
    """Load an image from *path* as RGBA."""
    with Image.open(path) as image:
        return image.convert('RGBA')


def ascii_height(image_width: int, image_height: int, ascii_width: int,
                 font_aspect: float = FONT_ASPECT_RATIO) -> int:
    """Row count that keeps the image proportions for a given column count."""
    if image_width <= 0 or image_height <= 0:
        raise ValueError(f"Image size must be positive, got {image_width}x{image_height}")
    rows = np.floor(image_height / image_width * ascii_width * font_aspect + 0.5)
    return max(1, int(rows))


def grid_size(image: Image.Image, ascii_width: int) -> Tuple[int, int]:
    return ascii_width, ascii_height(image.width, image.height, ascii_width)


def prepare_pixels(image: Image.Image, ascii_width: int, blur: float = 0.0) -> np.ndarray:
    """
    Resize an image to the character grid and return its RGBA samples.

    Args:
        image: Source image in any mode
        ascii_width: Output columns
        blur: Gaussian blur radius applied at grid resolution (0 disables it)

    Returns:
        (rows, ascii_width, 4) uint8 array
    """
    if blur < 0:
        raise ValueError("blur must not be negative")

    target = grid_size(image, ascii_width)
    logger.debug("Resizing %dx%d image to %dx%d cells", image.width, image.height, *target)

    resized = image.convert('RGBA').resize(target, Image.Resampling.LANCZOS)
    if blur > 0:
        resized = resized.filter(ImageFilter.GaussianBlur(radius=blur))
    return np.array(resized, dtype=np.uint8)


def image_to_ascii(image: Image.Image, config: Optional[RenderConfig] = None,
                   blur: float = 0.0) -> CharacterGrid:
    """Resize *image* for *config* and render it."""
    config = config or RenderConfig()
    pixels = prepare_pixels(image, config.ascii_width, blur)
    return render(pixels, config)
