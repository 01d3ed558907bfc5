#!/usr/bin/env python3
"""
Image to ASCII Transcoder - Constants
=====================================
Enums, character palettes and the fixed numeric constants of the pipeline.
"""

from enum import Enum
from typing import Union

import numpy as np


# =============================================================================
# ENUMS
# =============================================================================

class _ValueEnum(Enum):
    """Enum that can be looked up from its string value."""

    @classmethod
    def coerce(cls, value: Union[str, "_ValueEnum"]):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            choices = ', '.join(member.value for member in cls)
            raise ValueError(f"Unknown {cls.__name__} {value!r} (expected one of: {choices})") from None


class EdgeMethod(_ValueEnum):
    """Render mode selected by the edge setting."""
    NONE = 'none'         # Tone quantization, optionally dithered
    SOBEL = 'sobel'       # Binary Sobel threshold
    DOG = 'dog'           # Difference of Gaussians contours


class DitherAlgorithm(_ValueEnum):
    """Dithering strategy for the plain render mode."""
    FLOYD = 'floyd'
    ATKINSON = 'atkinson'
    NOISE = 'noise'
    ORDERED = 'ordered'


class Charset(_ValueEnum):
    """Named character palettes."""
    STANDARD = 'standard'
    BLOCKS = 'blocks'
    BINARY = 'binary'
    MANUAL = 'manual'
    HEX = 'hex'
    DETAILED = 'detailed'


# =============================================================================
# CHARACTER SETS
# =============================================================================

# Palettes run from level 0 to level n-1 of the tone scale.
PALETTES = {
    Charset.STANDARD: "@%#*+=-:.",
    Charset.BLOCKS: "█▓▒░ ",
    Charset.BINARY: "01",
    Charset.HEX: "0123456789ABCDEF",
    Charset.DETAILED: "$@B%8&WM#*oahkbdpqwmZO0QLCJUYXzcvunxrjft/\\|()1{}[]?-_+~<>i!lI;:,\"^`'.",
}

DEFAULT_MANUAL_CHAR = '0'


def resolve_palette(charset: Union[str, Charset], manual_char: str = '') -> str:
    """
    Return the palette string for a charset.

    Args:
        charset: Named character set
        manual_char: Character used by the manual charset; only the first
            character counts and an empty value falls back to '0'

    Returns:
        Non-empty palette string
    """
    charset = Charset.coerce(charset)
    if charset == Charset.MANUAL:
        return (manual_char[:1] or DEFAULT_MANUAL_CHAR) + ' '
    return PALETTES[charset]


# Contour glyphs, indexed by orientation bin
CONTOUR_CHARS = {
    'horizontal': '-',
    'diagonal_up': '/',
    'vertical': '|',
    'diagonal_down': '\\',
    'none': ' ',
}

BLANK_CHAR = ' '


# =============================================================================
# NUMERIC CONSTANTS
# =============================================================================

# ITU BT.601 luma weights
LUMA_WEIGHTS = (0.299, 0.587, 0.114)

SOBEL_X = np.array([[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]], dtype=np.float64)
SOBEL_Y = np.array([[-1, -2, -1], [0, 0, 0], [1, 2, 1]], dtype=np.float64)

# Approximate maximum Sobel magnitude for 8-bit input; thresholds are calibrated to it
SOBEL_NORMALIZER = 1442.0

# Difference of Gaussians parameters
DOG_SIGMA_1 = 0.5
DOG_SIGMA_2 = 1.0
DOG_KERNEL_SIZE = 3

BAYER_4X4 = np.array([
    [0, 8, 2, 10],
    [12, 4, 14, 6],
    [3, 11, 1, 9],
    [15, 7, 13, 5]
], dtype=np.float64)

# Character cell height/width used to derive the grid height
FONT_ASPECT_RATIO = 0.55

# Level marker for cells rendered as blank by the ignore-white rule
IGNORED_LEVEL = -1
