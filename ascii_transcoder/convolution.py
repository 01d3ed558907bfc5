#!/usr/bin/env python3
"""
Image to ASCII Transcoder - Convolution
=======================================
Gaussian kernel construction and zero-padded 2D convolution.
"""

import numpy as np
from scipy import ndimage


def gaussian_kernel(sigma: float, kernel_size: int) -> np.ndarray:
    """
    Build a normalized 2D Gaussian kernel.

    Args:
        sigma: Standard deviation, must be positive
        kernel_size: Odd side length of the square kernel

    Returns:
        Square float64 array whose weights sum to 1
    """
    if sigma <= 0:
        raise ValueError(f"sigma must be positive, got {sigma}")
    if kernel_size <= 0 or kernel_size % 2 == 0:
        raise ValueError(f"kernel_size must be a positive odd integer, got {kernel_size}")

    half = kernel_size // 2
    offsets = np.arange(-half, half + 1, dtype=np.float64)
    x, y = np.meshgrid(offsets, offsets)
    kernel = np.exp(-(x**2 + y**2) / (2 * sigma * sigma))
    return kernel / kernel.sum()


def convolve2d(field: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """
    Apply a square kernel to a 2D scalar field.

    The kernel is centred on each cell and weights neighbours without
    flipping. Samples outside the field read as 0, which darkens values
    near the borders.
    """
    kernel = np.asarray(kernel, dtype=np.float64)
    if kernel.ndim != 2 or kernel.shape[0] != kernel.shape[1] or kernel.shape[0] % 2 == 0:
        raise ValueError(f"kernel must be square with an odd side, got shape {kernel.shape}")

    arr = np.asarray(field, dtype=np.float64)
    return ndimage.correlate(arr, kernel, mode='constant', cval=0.0)
