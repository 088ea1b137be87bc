#!/usr/bin/env python3
"""
Convert an image into a palette for the Mandelbrot Metal renderer.

Samples evenly spaced colors along the middle row (or column) of an image,
optionally adjusts saturation / gamma / contrast, and prints either a Swift
registration snippet or a JSON palette file.

Pipeline: Load → Normalize → Sample → Adjust → Render
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from adjust import MODES, adjust_stops
from config import DEFAULT_NAME, DEFAULT_STEPS, PaletteConfig
from errors import ConfigError, DecodeError, InvalidDimensions
from normalize_image import load_image, normalize
from render_palette import FORMAT_ALIASES, FORMATS, Palette, render
from sampler import sample


EXAMPLES = """\
examples:
  # Swift code for a custom palette
  photo2palette.py --image source.png --name "My Palette"

  # JSON palette file
  photo2palette.py --image source.png --name "My Palette" --format data > MyPalette.json

  # 768 steps sampled vertically with a slight saturation boost
  photo2palette.py -i source.png -n "Tall Glow" -s 768 -v --sat 1.2

  # Per-channel gamma and channel range stretch
  photo2palette.py -i source.png --mode hsl --gamma 1.4 --auto-stretch
"""


def _status(config: PaletteConfig, message: str):
    if config.verbose:
        print(message, file=sys.stderr)


class _ArgumentParser(argparse.ArgumentParser):
    """Reports bad arguments as ConfigError instead of exiting."""

    def error(self, message):
        raise ConfigError(message)


# =============================================================================
# Pipeline
# =============================================================================

def build_palette(config: PaletteConfig) -> Palette:
    """
    Run load, normalize, sample and adjust for a validated configuration.

    Raises:
        DecodeError: If the image cannot be decoded.
        InvalidDimensions: If the image is empty or too large.
    """
    _status(config, f"Loading: {config.image_path}")
    img = load_image(config.image_path)
    _status(config, f"Source: {img.width}x{img.height} ({img.mode})")

    buffer = normalize(img, config.steps, vertical=config.vertical, resample=config.resample)
    _status(config, f"Sampling: {buffer.width}x{buffer.height}, "
                    f"{'vertical' if config.vertical else 'horizontal'}, {config.steps} steps")

    stops = sample(buffer, config.steps, vertical=config.vertical)

    settings = config.adjustment
    if not settings.is_identity:
        _status(config, f"Adjusting ({settings.mode}): sat={settings.saturation} "
                        f"gamma={settings.gamma} stretch={settings.stretch} "
                        f"auto_stretch={settings.auto_stretch}")
    stops = adjust_stops(stops, settings)

    return Palette(name=config.name, stops=tuple(stops))


# =============================================================================
# CLI
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog='photo2palette',
        description='Convert an image into a Mandelbrot Metal-compatible palette.',
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        '--image', '-i',
        default='',
        help='Source image file (PNG, JPG, etc.)'
    )
    parser.add_argument(
        '--name', '-n',
        default=DEFAULT_NAME,
        help=f'Palette name (default: "{DEFAULT_NAME}")'
    )
    parser.add_argument(
        '--steps', '-s',
        type=int,
        default=DEFAULT_STEPS,
        help=f'Number of samples/steps, greater than 1 (default: {DEFAULT_STEPS})'
    )
    parser.add_argument(
        '--vertical', '-v',
        action='store_true',
        help='Sample a vertical slice (default: horizontal)'
    )
    parser.add_argument(
        '--format', '-f',
        default='code',
        choices=FORMATS + tuple(FORMAT_ALIASES),
        help='code = Swift snippet for PaletteOption.swift (default), '
             'data = JSON palette file; swift/json are accepted as aliases'
    )
    parser.add_argument(
        '--output', '-o',
        default=None,
        help='Write the palette to this file instead of standard output'
    )

    group = parser.add_argument_group('color adjustment')
    group.add_argument(
        '--mode',
        default='hsv',
        choices=MODES,
        help='hsv: gamma on value, --stretch around the midtone (default); '
             'hsl: per-channel gamma, --auto-stretch of the channel range'
    )
    group.add_argument(
        '--sat', '--saturation',
        dest='saturation',
        type=float,
        default=1.0,
        help='Saturation multiplier (default: 1.0)'
    )
    group.add_argument(
        '--gamma',
        type=float,
        default=1.0,
        help='Gamma correction, must be positive (default: 1.0)'
    )
    group.add_argument(
        '--stretch',
        type=float,
        default=1.0,
        help='Contrast stretch around the midtone, hsv mode (default: 1.0)'
    )
    group.add_argument(
        '--auto-stretch',
        action='store_true',
        help='Stretch each color\'s channel range to fill 0-1, hsl mode'
    )
    group.add_argument(
        '--no-resample',
        dest='resample',
        action='store_false',
        help='Sample at native resolution even when steps exceed it'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Print progress to standard error'
    )
    return parser


def parse_args(argv: Optional[list] = None) -> PaletteConfig:
    """
    Parse command-line arguments into a validated configuration.

    Raises:
        ConfigError: If the arguments describe an invalid run.
    """
    args = build_parser().parse_args(argv)
    return PaletteConfig(
        image_path=args.image,
        name=args.name,
        steps=args.steps,
        vertical=args.vertical,
        format=args.format,
        saturation=args.saturation,
        gamma=args.gamma,
        stretch=args.stretch,
        auto_stretch=args.auto_stretch,
        mode=args.mode,
        resample=args.resample,
        output=args.output,
        verbose=args.verbose,
    ).validate()


def main(argv: Optional[list] = None) -> int:
    try:
        config = parse_args(argv)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        palette = build_palette(config)
    except (DecodeError, InvalidDimensions) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    text = render(palette, config.format)

    if config.output:
        output_path = Path(config.output)
        try:
            output_path.write_text(text + "\n")
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
        _status(config, f"Wrote: {output_path}")
    else:
        print(text)

    return 0


if __name__ == '__main__':
    sys.exit(main())
