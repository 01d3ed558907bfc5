#!/usr/bin/env python3
"""
Image to ASCII Transcoder - Renderer
====================================
Sequences tone mapping, edge detection and quantization into a character
grid. Each call owns its working buffers; nothing is cached between calls.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from ascii_transcoder.config import RenderConfig
from ascii_transcoder.constants import BLANK_CHAR, EdgeMethod
from ascii_transcoder.dithering import dither, levels_to_lines, plain_levels
from ascii_transcoder.edge_detection import EdgeProcessor
from ascii_transcoder.tone import map_tone, validate_pixels

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CharacterGrid:
    """Result of a render."""
    lines: Tuple[str, ...]                   # One string per output row
    width: int = 0                           # Output columns
    height: int = 0                          # Output rows

    @property
    def text(self) -> str:
        return '\n'.join(self.lines)

    def __str__(self) -> str:
        return self.text


# =============================================================================
# RENDER MODES
# =============================================================================

def _ignore_white_mask(original: np.ndarray, config: RenderConfig):
    if not config.ignore_white:
        return None
    return original == 255


def _render_plain(tone: np.ndarray, config: RenderConfig) -> List[str]:
    """Tone quantization, dithered when enabled."""
    palette = config.palette
    ignore = _ignore_white_mask(tone, config)
    if config.dithering_enabled:
        levels = dither(tone, config.dither_algorithm, len(palette),
                        ignore=ignore, seed=config.seed)
    else:
        levels = plain_levels(tone, len(palette), ignore)
    return levels_to_lines(levels, palette, BLANK_CHAR)


def _render_sobel(tone: np.ndarray, config: RenderConfig) -> List[str]:
    """Binary Sobel edges quantized against the palette, never dithered."""
    palette = config.palette
    ignore = _ignore_white_mask(tone, config)
    edges = EdgeProcessor.sobel_threshold(tone, config.edge_threshold)
    levels = plain_levels(edges, len(palette), ignore)
    return levels_to_lines(levels, palette, BLANK_CHAR)


def _render_dog(tone: np.ndarray, config: RenderConfig) -> List[str]:
    """Directional contour glyphs; palette and dithering do not apply."""
    return EdgeProcessor.detect_contours(tone, config.dog_edge_threshold)


RENDER_MODES: Dict[EdgeMethod, Callable[[np.ndarray, RenderConfig], List[str]]] = {
    EdgeMethod.NONE: _render_plain,
    EdgeMethod.SOBEL: _render_sobel,
    EdgeMethod.DOG: _render_dog,
}


# =============================================================================
# ENTRY POINTS
# =============================================================================

def render(pixels: np.ndarray, config: Optional[RenderConfig] = None) -> CharacterGrid:
    """
    Render a pre-resized pixel buffer as a character grid.

    Args:
        pixels: (height, width, 3 or 4) array of 0-255 samples whose width
            equals config.ascii_width
        config: Render configuration (defaults to RenderConfig())

    Returns:
        CharacterGrid with one line per pixel row
    """
    config = config or RenderConfig()
    arr = validate_pixels(pixels)
    height, width = arr.shape[:2]
    if width != config.ascii_width:
        raise ValueError(
            f"Pixel buffer is {width} columns wide but ascii_width is {config.ascii_width}"
        )

    tone = map_tone(arr, config)
    logger.debug("Rendering %dx%d grid in %s mode (%d palette levels)",
                 width, height, config.edge_method.value, config.n_levels)

    lines = RENDER_MODES[config.edge_method](tone, config)
    return CharacterGrid(lines=tuple(lines), width=width, height=height)


def render_text(pixels: np.ndarray, config: Optional[RenderConfig] = None) -> str:
    """Render and return the newline-joined text."""
    return render(pixels, config).text
