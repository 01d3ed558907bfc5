#!/usr/bin/env python3
"""
Image to ASCII Transcoder - Tone Mapping
========================================
Converts RGB(A) samples to adjusted luminance on a 0-255 scale.
"""

import numpy as np

from ascii_transcoder.config import RenderConfig
from ascii_transcoder.constants import LUMA_WEIGHTS


def validate_pixels(pixels: np.ndarray) -> np.ndarray:
    """Return *pixels* as an array, checking for an (h, w, 3|4) layout."""
    arr = np.asarray(pixels)
    if arr.ndim != 3 or arr.shape[2] not in (3, 4):
        raise ValueError(f"Expected an (height, width, 3 or 4) pixel array, got shape {arr.shape}")
    return arr


def luminance(pixels: np.ndarray) -> np.ndarray:
    """BT.601 luminance of an RGB(A) array; alpha is ignored."""
    arr = validate_pixels(pixels).astype(np.float64)
    wr, wg, wb = LUMA_WEIGHTS
    return wr * arr[:, :, 0] + wg * arr[:, :, 1] + wb * arr[:, :, 2]


def contrast_factor(contrast: float) -> float:
    return (259 * (contrast + 255)) / (255 * (259 - contrast))


def map_tone(pixels: np.ndarray, config: RenderConfig) -> np.ndarray:
    """
    Apply invert, contrast and brightness to the luminance of *pixels*.

    Args:
        pixels: (height, width, 3 or 4) array of 0-255 samples
        config: Render configuration

    Returns:
        (height, width) float64 tone buffer clamped to [0, 255]
    """
    lum = luminance(pixels)
    if config.invert:
        lum = 255 - lum

    factor = contrast_factor(config.contrast)
    adjusted = factor * (lum - 128) + 128 + config.brightness
    return np.clip(adjusted, 0, 255)
