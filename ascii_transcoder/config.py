#!/usr/bin/env python3
"""
Image to ASCII Transcoder - Configuration
=========================================
Immutable render configuration passed to every render call.
"""

import numbers
from dataclasses import dataclass, replace as _dataclass_replace
from typing import Optional, Union

from ascii_transcoder.constants import (
    Charset,
    DitherAlgorithm,
    EdgeMethod,
    resolve_palette,
)


@dataclass(frozen=True)
class RenderConfig:
    """Configuration for a single render."""

    # Size
    ascii_width: int = 100                   # Output columns

    # Tone adjustments
    brightness: float = 0.0                  # Additive tone offset
    contrast: float = 0.0                    # Contrast input, must stay below 259
    invert: bool = False                     # Invert luminance before contrast
    ignore_white: bool = True                # Blank cells whose tone is exactly 255

    # Dithering (plain mode only)
    dithering_enabled: bool = True
    dither_algorithm: Union[DitherAlgorithm, str] = DitherAlgorithm.FLOYD
    seed: Optional[int] = None               # Noise dithering RNG seed

    # Character set
    charset: Union[Charset, str] = Charset.DETAILED
    manual_char: str = ''                    # Used by Charset.MANUAL
    custom_palette: str = ''                 # Overrides charset when non-empty

    # Edge detection
    edge_method: Union[EdgeMethod, str] = EdgeMethod.NONE
    edge_threshold: int = 100                # Binary Sobel threshold (0-255 scale)
    dog_edge_threshold: int = 100            # Contour magnitude threshold

    def __post_init__(self):
        object.__setattr__(self, 'dither_algorithm', DitherAlgorithm.coerce(self.dither_algorithm))
        object.__setattr__(self, 'charset', Charset.coerce(self.charset))
        object.__setattr__(self, 'edge_method', EdgeMethod.coerce(self.edge_method))

        if isinstance(self.ascii_width, bool) or not isinstance(self.ascii_width, numbers.Integral):
            raise ValueError(f"ascii_width must be an integer, got {self.ascii_width!r}")
        if self.ascii_width <= 0:
            raise ValueError("ascii_width must be positive")
        if self.contrast >= 259:
            raise ValueError("contrast must be below 259")
        if self.manual_char is None:
            object.__setattr__(self, 'manual_char', '')
        if self.custom_palette is None:
            object.__setattr__(self, 'custom_palette', '')

    @property
    def palette(self) -> str:
        """Resolved palette string for the configured charset."""
        if self.custom_palette:
            return self.custom_palette
        return resolve_palette(self.charset, self.manual_char)

    @property
    def n_levels(self) -> int:
        return len(self.palette)

    def replace(self, **changes) -> 'RenderConfig':
        """Return a copy with the given fields changed."""
        return _dataclass_replace(self, **changes)
