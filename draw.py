"""Render a region of the Mandelbrot set to an image file.

Example::

    python draw.py mandel.png 8 200 1500x1000 -2.0,1.0 1.0,-1.0
"""

from __future__ import annotations

import logging
import re
import sys
from argparse import ArgumentParser, Namespace

from mandelbrot_set import (
    ComplexPoint,
    ConfigurationError,
    EncodingError,
    FatalRenderFault,
    Region,
    RenderConfig,
    Resolution,
    get_shader,
    render,
    resolve_image_format,
    write_image,
)
from mandelbrot_set.shading import SHADERS

EXAMPLE = "example: draw.py pic.png 8 100 1500x1000 -2.0,1.0 1.0,-1.0"

# options that consume the following token as their value
_VALUE_OPTIONS = {"--shader", "--colormap", "--inside-color", "--format"}
_NEGATIVE_VALUE = re.compile(r"^-\.?\d")


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        description="Render the Mandelbrot set over a rectangle of the complex plane.",
        epilog=EXAMPLE,
    )

    parser.add_argument('dest', metavar='DEST',
                        help='output image file; the extension selects the format unless --format is given')
    parser.add_argument('threads', type=int, metavar='THREADS',
                        help='number of worker threads, e.g. 8')
    parser.add_argument('iterations', type=int, metavar='ITERATIONS',
                        help='iteration bound before a point counts as inside the set, e.g. 100')
    parser.add_argument('resolution', metavar='RESOLUTION',
                        help='image size as WIDTHxHEIGHT, e.g. 1500x1000')
    parser.add_argument('upper_left', metavar='UPPER_LEFT',
                        help='upper-left corner as REAL,IMAGINARY, e.g. -2.0,1.0')
    parser.add_argument('lower_right', metavar='LOWER_RIGHT',
                        help='lower-right corner as REAL,IMAGINARY, e.g. 1.0,-1.0')

    parser.add_argument('--shader', choices=SHADERS, default='grayscale',
                        help='pixel mapping: linear grayscale (default), binary black/white, or a matplotlib colormap')
    parser.add_argument('--colormap', type=str, default='twilight_shifted', metavar='COLORMAP',
                        help='matplotlib colormap used by --shader colormap (e.g. "viridis", "inferno")')
    parser.add_argument('--inside-color', type=str, default='#000000',
                        help='hex color for points inside the set with --shader colormap')
    parser.add_argument('--format', type=str, default=None, metavar='FORMAT',
                        help='file format for the output. Can be any extension supported by Pillow. Default: from DEST, else "png".')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='enable verbose logging, including the work partition and timing')

    return parser


def _separate_positionals(argv: list[str]) -> list[str]:
    """Move positionals behind ``--`` so corners like ``-2.0,1.0`` are not read as options."""

    options: list[str] = []
    positionals: list[str] = []
    tokens = iter(argv)
    for token in tokens:
        if token == "--":
            positionals.extend(tokens)
            break
        if token.startswith("-") and not _NEGATIVE_VALUE.match(token):
            options.append(token)
            if token in _VALUE_OPTIONS:
                value = next(tokens, None)
                if value is not None:
                    options.append(value)
        else:
            positionals.append(token)
    return [*options, "--", *positionals]


def parse_config(opt: Namespace) -> RenderConfig:
    """Build the immutable render configuration from parsed arguments."""

    region = Region(ComplexPoint.parse(opt.upper_left), ComplexPoint.parse(opt.lower_right))
    return RenderConfig(
        region=region,
        resolution=Resolution.parse(opt.resolution),
        iteration_bound=opt.iterations,
        worker_count=opt.threads,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    opt = parser.parse_args(_separate_positionals(sys.argv[1:] if argv is None else list(argv)))

    logging.basicConfig(format="%(levelname)s: %(message)s")
    logging.getLogger("mandelbrot_set").setLevel(logging.DEBUG if opt.verbose else logging.WARNING)

    try:
        config = parse_config(opt)
        shader = get_shader(opt.shader, colormap=opt.colormap, inside_color=opt.inside_color)
        dest, image_format = resolve_image_format(opt.dest, opt.format)
    except ConfigurationError as exc:
        parser.error(str(exc))

    try:
        buffer = render(config, shader)
        write_image(buffer, dest, image_format)
    except (FatalRenderFault, EncodingError) as exc:
        print(f"{parser.prog}: error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
