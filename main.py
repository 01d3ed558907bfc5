#!/usr/bin/env python3
"""
Image to ASCII Transcoder
=========================
Command line front end: loads an image, resizes it to the character grid
and prints (or saves) the rendered text.

Features:
- Tone-mapped ASCII art with six character sets
- Floyd-Steinberg, Atkinson, noise and ordered dithering
- Binary Sobel edge mode
- Difference of Gaussians contour mode
"""

import logging
import sys

from ascii_transcoder.config import RenderConfig
from ascii_transcoder.constants import Charset, DitherAlgorithm, EdgeMethod
from ascii_transcoder.preprocess import image_to_ascii, load_image


# =============================================================================
# COMMAND LINE INTERFACE
# =============================================================================

def create_argument_parser():
    """Create command line argument parser."""
    import argparse

    defaults = RenderConfig()

    parser = argparse.ArgumentParser(
        description='Convert images to ASCII art',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s image.png                          # Basic conversion
  %(prog)s image.png -w 80                    # Set width to 80 chars
  %(prog)s image.png --dither ordered         # Bayer dithering
  %(prog)s image.png --no-dither --charset blocks
  %(prog)s image.png -e sobel -t 60           # Binary edge detection
  %(prog)s image.png -e dog --dog-threshold 20  # Contour lines
        """
    )

    # Input/Output
    parser.add_argument('input', help='Input image file')
    parser.add_argument('-o', '--output', help='Write the text to this file instead of stdout')

    # Size options
    parser.add_argument('-w', '--width', type=int, default=defaults.ascii_width,
                        help='Output width in characters')
    parser.add_argument('--blur', type=float, default=0.0,
                        help='Gaussian blur radius applied after resizing')

    # Tone options
    parser.add_argument('--brightness', type=float, default=defaults.brightness,
                        help='Brightness offset added to each tone')
    parser.add_argument('--contrast', type=float, default=defaults.contrast,
                        help='Contrast adjustment (below 259)')
    parser.add_argument('-i', '--invert', action='store_true', help='Invert luminance')
    parser.add_argument('--keep-white', action='store_true',
                        help='Render pure white cells instead of blanking them')

    # Character set options
    parser.add_argument('--charset', choices=[c.value for c in Charset],
                        default=defaults.charset.value, help='Character set')
    parser.add_argument('--manual-char', default='',
                        help="Character for the manual charset (default '0')")
    parser.add_argument('--custom-charset', default='',
                        help='Custom palette string, level 0 first (overrides --charset)')

    # Dithering options
    parser.add_argument('--dither', choices=[d.value for d in DitherAlgorithm],
                        default=defaults.dither_algorithm.value, help='Dithering algorithm')
    parser.add_argument('--no-dither', action='store_true', help='Disable dithering')
    parser.add_argument('--seed', type=int, help='Random seed for noise dithering')

    # Edge detection options
    parser.add_argument('-e', '--edge', choices=[e.value for e in EdgeMethod],
                        default=defaults.edge_method.value, help='Edge detection mode')
    parser.add_argument('-t', '--threshold', type=int, default=defaults.edge_threshold,
                        help='Sobel edge threshold (0-255)')
    parser.add_argument('--dog-threshold', type=int, default=defaults.dog_edge_threshold,
                        help='Contour magnitude threshold')

    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')

    return parser


def main(argv=None):
    """Main entry point for command line usage."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    if args.width <= 0:
        parser.error('--width must be positive')
    if args.blur < 0:
        parser.error('--blur must not be negative')

    try:
        config = RenderConfig(
            ascii_width=args.width,
            brightness=args.brightness,
            contrast=args.contrast,
            invert=args.invert,
            ignore_white=not args.keep_white,
            dithering_enabled=not args.no_dither,
            dither_algorithm=args.dither,
            seed=args.seed,
            charset=args.charset,
            manual_char=args.manual_char,
            custom_palette=args.custom_charset,
            edge_method=args.edge,
            edge_threshold=args.threshold,
            dog_edge_threshold=args.dog_threshold,
        )
    except ValueError as e:
        parser.error(str(e))

    # Load image
    try:
        image = load_image(args.input)
    except OSError as e:
        print(f"Error loading image: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"Loaded image: {args.input}", file=sys.stderr)
        print(f"Size: {image.size}", file=sys.stderr)

    result = image_to_ascii(image, config, blur=args.blur)

    if args.verbose:
        print(f"Output size: {result.width}x{result.height}", file=sys.stderr)

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(result.text + '\n')
        print(f"Saved to {args.output}", file=sys.stderr)
    else:
        print(result.text)

    return 0


# =============================================================================
# ENTRY POINT
# =============================================================================

if __name__ == '__main__':
    sys.exit(main())
