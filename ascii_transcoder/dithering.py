#!/usr/bin/env python3
"""
Image to ASCII Transcoder - Quantization and Dithering
======================================================
Maps a tone buffer to palette levels, plainly or through one of four
dithering strategies. Every function returns an integer level array of the
same shape as the tone buffer; cells blanked by the ignore-white rule hold
IGNORED_LEVEL.
"""

from typing import Callable, Dict, Optional

import numpy as np

from ascii_transcoder.constants import BAYER_4X4, IGNORED_LEVEL, DitherAlgorithm


def round_half_up(values):
    """Round halves towards +inf; numpy's round() rounds halves to even."""
    return np.floor(np.asarray(values, dtype=np.float64) + 0.5)


def _ignore_mask(tone: np.ndarray, ignore: Optional[np.ndarray]) -> np.ndarray:
    if ignore is None:
        return np.zeros(tone.shape, dtype=bool)
    return np.asarray(ignore, dtype=bool)


def quantize_level(tone: float, n_levels: int) -> int:
    """Palette level for a single tone value."""
    if n_levels <= 1:
        return 0
    return int(np.floor(tone / 255 * (n_levels - 1) + 0.5))


def plain_levels(tone: np.ndarray, n_levels: int,
                 ignore: Optional[np.ndarray] = None) -> np.ndarray:
    """Quantize without dithering."""
    tone = np.asarray(tone, dtype=np.float64)
    if n_levels <= 1:
        levels = np.zeros(tone.shape, dtype=np.int64)
    else:
        levels = round_half_up(tone / 255 * (n_levels - 1)).astype(np.int64)
    levels[_ignore_mask(tone, ignore)] = IGNORED_LEVEL
    return levels


# =============================================================================
# ERROR DIFFUSION
# =============================================================================

FLOYD_STEINBERG_WEIGHTS = (
    (1, 0, 7 / 16),
    (-1, 1, 3 / 16),
    (0, 1, 5 / 16),
    (1, 1, 1 / 16),
)

# Atkinson spreads error/8 to six neighbours, discarding the remaining 2/8
ATKINSON_WEIGHTS = tuple(
    (dx, dy, 1 / 8)
    for dx, dy in [(1, 0), (2, 0), (-1, 1), (0, 1), (1, 1), (0, 2)]
)


def _diffuse(tone: np.ndarray, n_levels: int, weights,
             ignore: Optional[np.ndarray]) -> np.ndarray:
    """
    Row-major error diffusion over a private copy of *tone*.

    Args:
        tone: (height, width) tone buffer; left untouched
        n_levels: Palette size
        weights: (dx, dy, fraction) triples describing the diffusion stencil
        ignore: Optional mask of cells to skip; skipped cells keep no error

    Returns:
        Integer level array
    """
    result = np.array(tone, dtype=np.float64, copy=True)
    mask = _ignore_mask(result, ignore)
    h, w = result.shape
    levels = np.zeros((h, w), dtype=np.int64)

    for y in range(h):
        for x in range(w):
            if mask[y, x]:
                levels[y, x] = IGNORED_LEVEL
                continue

            old_val = result[y, x]
            level = quantize_level(old_val, n_levels)
            levels[y, x] = level
            if n_levels <= 1:
                continue

            new_val = level / (n_levels - 1) * 255
            error = old_val - new_val

            for dx, dy, fraction in weights:
                nx, ny = x + dx, y + dy
                if 0 <= nx < w and 0 <= ny < h:
                    result[ny, nx] = min(255.0, max(0.0, result[ny, nx] + error * fraction))

    return levels


def floyd_steinberg(tone: np.ndarray, n_levels: int,
                    ignore: Optional[np.ndarray] = None, **_) -> np.ndarray:
    """Floyd-Steinberg error diffusion (7/16, 3/16, 5/16, 1/16)."""
    return _diffuse(tone, n_levels, FLOYD_STEINBERG_WEIGHTS, ignore)


def atkinson(tone: np.ndarray, n_levels: int,
             ignore: Optional[np.ndarray] = None, **_) -> np.ndarray:
    """Atkinson error diffusion."""
    return _diffuse(tone, n_levels, ATKINSON_WEIGHTS, ignore)


# =============================================================================
# NOISE AND ORDERED DITHERING
# =============================================================================

def noise_dither(tone: np.ndarray, n_levels: int,
                 ignore: Optional[np.ndarray] = None,
                 seed: Optional[int] = None,
                 rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """
    Add uniform noise of amplitude 255/n_levels before plain quantization.

    Unseeded calls draw fresh noise every time.
    """
    tone = np.asarray(tone, dtype=np.float64)
    if rng is None:
        rng = np.random.default_rng(seed)
    noise = (rng.random(tone.shape) - 0.5) * (255 / n_levels)
    noisy = np.clip(tone + noise, 0, 255)
    return plain_levels(noisy, n_levels, ignore)


def ordered_dither(tone: np.ndarray, n_levels: int,
                   ignore: Optional[np.ndarray] = None, **_) -> np.ndarray:
    """Ordered dithering with a 4x4 Bayer threshold matrix."""
    tone = np.asarray(tone, dtype=np.float64)
    size = BAYER_4X4.shape[0]
    ys, xs = np.indices(tone.shape)
    threshold = (BAYER_4X4[ys % size, xs % size] + 0.5) / (size * size)

    value = np.clip(tone / 255 + threshold - 0.5, 0, 1)
    levels = np.floor(value * n_levels).astype(np.int64)
    levels = np.minimum(levels, n_levels - 1)
    levels[_ignore_mask(tone, ignore)] = IGNORED_LEVEL
    return levels


DITHERERS: Dict[DitherAlgorithm, Callable[..., np.ndarray]] = {
    DitherAlgorithm.FLOYD: floyd_steinberg,
    DitherAlgorithm.ATKINSON: atkinson,
    DitherAlgorithm.NOISE: noise_dither,
    DitherAlgorithm.ORDERED: ordered_dither,
}


def dither(tone: np.ndarray, algorithm, n_levels: int,
           ignore: Optional[np.ndarray] = None,
           seed: Optional[int] = None) -> np.ndarray:
    """Dispatch to the dithering strategy named by *algorithm*."""
    apply = DITHERERS[DitherAlgorithm.coerce(algorithm)]
    return apply(tone, n_levels, ignore=ignore, seed=seed)


def levels_to_lines(levels: np.ndarray, palette: str, blank: str = ' ') -> list:
    """Turn a level array into text rows; IGNORED_LEVEL cells become *blank*."""
    glyphs = np.array(list(palette) + [blank])
    # IGNORED_LEVEL (-1) indexes the trailing blank entry
    return [''.join(row) for row in glyphs[levels]]
