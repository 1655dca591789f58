"""Map escape-time counts to pixel values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np
from matplotlib import colormaps

from .errors import ConfigurationError

ShadeFunction = Callable[[np.ndarray, int], np.ndarray]

_MODE_CHANNELS = {"L": (), "RGB": (3,)}


@dataclass(frozen=True)
class PixelShader:
    """A pure escape-count to pixel mapping and the PIL mode of its output."""

    name: str
    mode: str
    function: ShadeFunction

    def __post_init__(self) -> None:
        if self.mode not in _MODE_CHANNELS:
            raise ConfigurationError(f"unsupported pixel mode {self.mode!r}")

    @property
    def channels(self) -> tuple[int, ...]:
        """Trailing array dimensions of one shaded pixel."""
        return _MODE_CHANNELS[self.mode]

    def __call__(self, counts: np.ndarray, iteration_bound: int) -> np.ndarray:
        return self.function(np.asarray(counts), iteration_bound)


def _grayscale(counts: np.ndarray, iteration_bound: int) -> np.ndarray:
    # integer floor division keeps the mapping exact for every bound
    intensity = 255 - (255 * counts.astype(np.int64)) // iteration_bound
    return intensity.astype(np.uint8)


def _binary(counts: np.ndarray, iteration_bound: int) -> np.ndarray:
    return np.where(counts >= iteration_bound, 0, 255).astype(np.uint8)


# immediate escape is white, inside the set is black
grayscale = PixelShader("grayscale", "L", _grayscale)
binary = PixelShader("binary", "L", _binary)


def _hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    hex_color = hex_color.lstrip("#")
    if len(hex_color) != 6:
        raise ConfigurationError("inside color must be in the form #RRGGBB.")
    try:
        return tuple(int(hex_color[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError as exc:
        raise ConfigurationError("inside color must contain only hexadecimal digits.") from exc


def colormap_shader(name: str, inside_color: str = "#000000") -> PixelShader:
    """Build an RGB shader from a matplotlib colormap such as ``"viridis"``."""

    try:
        cmap = colormaps[name]
    except KeyError:
        raise ConfigurationError(f"unknown matplotlib colormap {name!r}") from None
    inside_rgb = np.array(_hex_to_rgb(inside_color), dtype=np.uint8)

    def shade(counts: np.ndarray, iteration_bound: int) -> np.ndarray:
        rgba = cmap(counts / iteration_bound)
        rgb = np.uint8(np.clip(rgba[..., :3] * 255, 0, 255))
        rgb[counts >= iteration_bound] = inside_rgb
        return rgb

    return PixelShader(f"colormap:{name}", "RGB", shade)


SHADERS = ("grayscale", "binary", "colormap")


def get_shader(name: str, *, colormap: str = "twilight_shifted", inside_color: str = "#000000") -> PixelShader:
    """Resolve a shader by its command-line name."""

    if name == "grayscale":
        return grayscale
    if name == "binary":
        return binary
    if name == "colormap":
        return colormap_shader(colormap, inside_color)
    raise ConfigurationError(f"unknown shader {name!r}. Valid choices: {', '.join(SHADERS)}.")
