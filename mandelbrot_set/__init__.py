"""Public API for parallel Mandelbrot rendering."""

from .encoder import resolve_image_format, write_image
from .errors import ConfigurationError, EncodingError, FatalRenderFault, MandelbrotError
from .escape import escape_time, escape_times
from .geometry import (
    ComplexPoint,
    Region,
    Resolution,
    nearest_pixel,
    parse_pair,
    pixel_grid,
    pixel_to_point,
)
from .partition import WorkRange, partition_rows
from .renderer import ImageBuffer, RenderConfig, render
from .shading import PixelShader, binary, colormap_shader, get_shader, grayscale

__all__ = [
    "ComplexPoint",
    "ConfigurationError",
    "EncodingError",
    "FatalRenderFault",
    "ImageBuffer",
    "MandelbrotError",
    "PixelShader",
    "Region",
    "RenderConfig",
    "Resolution",
    "WorkRange",
    "binary",
    "colormap_shader",
    "escape_time",
    "escape_times",
    "get_shader",
    "grayscale",
    "nearest_pixel",
    "parse_pair",
    "partition_rows",
    "pixel_grid",
    "pixel_to_point",
    "render",
    "resolve_image_format",
    "write_image",
]
