#!/usr/bin/env python3
"""
Image to ASCII Transcoder - Edge Detection
==========================================
This module contains the EdgeProcessor class: Sobel gradients, the binary
Sobel edge pass, Difference of Gaussians and non-maximum suppression for
contour glyphs.
"""

from typing import List, NamedTuple

import numpy as np
from scipy import ndimage

from ascii_transcoder.constants import (
    CONTOUR_CHARS,
    DOG_KERNEL_SIZE,
    DOG_SIGMA_1,
    DOG_SIGMA_2,
    SOBEL_NORMALIZER,
    SOBEL_X,
    SOBEL_Y,
)
from ascii_transcoder.convolution import convolve2d, gaussian_kernel


class GradientField(NamedTuple):
    """Gradient magnitude and angle (degrees, [0, 180)) per cell."""
    magnitude: np.ndarray
    angle: np.ndarray


# Orientation bins shared by suppression and glyph selection
HORIZONTAL, DIAGONAL_UP, VERTICAL, DIAGONAL_DOWN = range(4)

_BIN_CHARS = np.array([
    CONTOUR_CHARS['horizontal'],
    CONTOUR_CHARS['diagonal_up'],
    CONTOUR_CHARS['vertical'],
    CONTOUR_CHARS['diagonal_down'],
])


def orientation_bin(angle):
    """
    Bucket angles in degrees into the four orientation bins.

    [0, 22.5) and [157.5, 180] are horizontal, [22.5, 67.5) the 45 degree
    diagonal, [67.5, 112.5) vertical and [112.5, 157.5) the 135 degree diagonal.
    Works on scalars and arrays.
    """
    angle = np.asarray(angle, dtype=np.float64)
    bins = np.select(
        [angle < 22.5, angle < 67.5, angle < 112.5, angle < 157.5],
        [HORIZONTAL, DIAGONAL_UP, VERTICAL, DIAGONAL_DOWN],
        default=HORIZONTAL,
    )
    return bins.astype(np.intp)


class EdgeProcessor:
    """Edge detection and contour character mapping."""

    @staticmethod
    def _sobel_components(field: np.ndarray):
        """Sobel Gx, Gy over interior cells; border cells are 0."""
        arr = np.asarray(field, dtype=np.float64)
        gx = np.zeros_like(arr)
        gy = np.zeros_like(arr)
        if arr.shape[0] < 3 or arr.shape[1] < 3:
            return gx, gy

        interior = (slice(1, -1), slice(1, -1))
        gx[interior] = ndimage.correlate(arr, SOBEL_X, mode='constant')[interior]
        gy[interior] = ndimage.correlate(arr, SOBEL_Y, mode='constant')[interior]
        return gx, gy

    @staticmethod
    def sobel_threshold(tone: np.ndarray, threshold: float) -> np.ndarray:
        """
        Binary Sobel edge pass over a tone buffer.

        Args:
            tone: (height, width) tone buffer on a 0-255 scale
            threshold: Edge threshold on the normalized 0-255 magnitude scale

        Returns:
            Tone buffer where edge cells are 0 and every other cell,
            including the 1-pixel border, is 255
        """
        gx, gy = EdgeProcessor._sobel_components(tone)
        normalized = np.sqrt(gx**2 + gy**2) / SOBEL_NORMALIZER * 255

        edges = np.where(normalized > threshold, 0.0, 255.0)
        if edges.size == 0:
            return edges
        edges[0, :] = 255.0
        edges[-1, :] = 255.0
        edges[:, 0] = 255.0
        edges[:, -1] = 255.0
        return edges

    @staticmethod
    def sobel_gradient(field: np.ndarray) -> GradientField:
        """Gradient magnitude and angle folded into [0, 180) for interior cells."""
        gx, gy = EdgeProcessor._sobel_components(field)
        magnitude = np.sqrt(gx**2 + gy**2)

        angle = np.degrees(np.arctan2(gy, gx))
        angle[angle < 0] += 180
        angle[angle >= 180] -= 180
        return GradientField(magnitude, angle)

    @staticmethod
    def difference_of_gaussians(field: np.ndarray,
                                sigma1: float = DOG_SIGMA_1,
                                sigma2: float = DOG_SIGMA_2,
                                kernel_size: int = DOG_KERNEL_SIZE) -> np.ndarray:
        """Blur with two Gaussians and subtract the wider from the narrower."""
        blurred1 = convolve2d(field, gaussian_kernel(sigma1, kernel_size))
        blurred2 = convolve2d(field, gaussian_kernel(sigma2, kernel_size))
        return blurred1 - blurred2

    @staticmethod
    def non_max_suppression(magnitude: np.ndarray, angle: np.ndarray) -> np.ndarray:
        """Non-maximum suppression for edge thinning."""
        rows, cols = magnitude.shape
        result = np.zeros_like(magnitude, dtype=np.float64)
        bins = orientation_bin(angle)

        for i in range(1, rows - 1):
            for j in range(1, cols - 1):
                current = magnitude[i, j]
                direction = bins[i, j]

                if direction == HORIZONTAL:
                    q = magnitude[i, j - 1]
                    r = magnitude[i, j + 1]
                elif direction == DIAGONAL_UP:
                    q = magnitude[i - 1, j + 1]
                    r = magnitude[i + 1, j - 1]
                elif direction == VERTICAL:
                    q = magnitude[i - 1, j]
                    r = magnitude[i + 1, j]
                else:
                    q = magnitude[i - 1, j - 1]
                    r = magnitude[i + 1, j + 1]

                if current >= q and current >= r:
                    result[i, j] = current

        return result

    @staticmethod
    def contour_lines(suppressed: np.ndarray, angle: np.ndarray,
                      threshold: float) -> List[str]:
        """
        Map suppressed magnitudes to directional glyphs.

        The glyph follows the edge itself, so the gradient angle is turned
        by 90 degrees before binning.
        """
        edge_angle = np.fmod(angle + 90, 180)
        glyphs = _BIN_CHARS[orientation_bin(edge_angle)]
        glyphs = np.where(suppressed > threshold, glyphs, CONTOUR_CHARS['none'])
        return [''.join(row) for row in glyphs]

    @classmethod
    def detect_contours(cls, tone: np.ndarray, threshold: float) -> List[str]:
        """
        Full contour pipeline: DoG, Sobel gradient, suppression, glyphs.

        Args:
            tone: (height, width) tone buffer
            threshold: Minimum suppressed magnitude for a glyph

        Returns:
            One string per row of the buffer
        """
        dog = cls.difference_of_gaussians(tone)
        gradient = cls.sobel_gradient(dog)
        suppressed = cls.non_max_suppression(gradient.magnitude, gradient.angle)
        return cls.contour_lines(suppressed, gradient.angle, threshold)
