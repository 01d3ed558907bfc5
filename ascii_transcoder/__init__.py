"""
Image to ASCII Transcoder
=========================
Converts pixel buffers into character grids using tone quantization,
dithering, binary Sobel edges or Difference of Gaussians contours.

For debug logging:

    import logging
    logging.basicConfig(level=logging.DEBUG)
"""

import logging

from ascii_transcoder.config import RenderConfig
from ascii_transcoder.constants import Charset, DitherAlgorithm, EdgeMethod, resolve_palette
from ascii_transcoder.convolution import convolve2d, gaussian_kernel
from ascii_transcoder.dithering import dither, plain_levels
from ascii_transcoder.edge_detection import EdgeProcessor, GradientField
from ascii_transcoder.preprocess import image_to_ascii, load_image, prepare_pixels
from ascii_transcoder.renderer import CharacterGrid, render, render_text
from ascii_transcoder.tone import map_tone

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = '0.1.0'

__all__ = [
    # Configuration
    'RenderConfig',
    'Charset',
    'DitherAlgorithm',
    'EdgeMethod',
    'resolve_palette',

    # Pipeline stages
    'gaussian_kernel',
    'convolve2d',
    'map_tone',
    'EdgeProcessor',
    'GradientField',
    'dither',
    'plain_levels',

    # Rendering
    'CharacterGrid',
    'render',
    'render_text',

    # Image helpers
    'load_image',
    'prepare_pixels',
    'image_to_ascii',
]
