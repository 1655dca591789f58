"""Complex-plane geometry: points, regions, resolutions and pixel mapping."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, TypeVar

import numpy as np

from .errors import ConfigurationError

T = TypeVar("T")


def parse_pair(text: str, separator: str, convert: Callable[[str], T]) -> tuple[T, T]:
    """Split ``text`` at the first ``separator`` and convert both halves.

    ``parse_pair("1.25x0.42", "x", float)`` gives ``(1.25, 0.42)``.
    """

    left, found, right = text.partition(separator)
    if not found:
        raise ConfigurationError(f"expected two values separated by {separator!r}, got {text!r}")
    try:
        return convert(left), convert(right)
    except ValueError as exc:
        raise ConfigurationError(f"could not parse {text!r}: {exc}") from exc


def _require_positive_int(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise ConfigurationError(f"{name} must be at least 1, got {value}")
    return int(value)


@dataclass(frozen=True)
class ComplexPoint:
    """A finite point of the complex plane."""

    real: float
    imag: float

    def __post_init__(self) -> None:
        for name in ("real", "imag"):
            value = getattr(self, name)
            try:
                finite = math.isfinite(value)
            except TypeError:
                raise ConfigurationError(f"{name} part must be a number, got {value!r}") from None
            if not finite:
                raise ConfigurationError(f"{name} part must be finite, got {value!r}")
            object.__setattr__(self, name, float(value))

    @classmethod
    def parse(cls, text: str) -> "ComplexPoint":
        """Parse ``"RE,IM"``, e.g. ``"-1.25,0.42"``."""

        real, imag = parse_pair(text, ",", float)
        return cls(real, imag)

    def __complex__(self) -> complex:
        return complex(self.real, self.imag)


@dataclass(frozen=True)
class Region:
    """The rendered rectangle, given by its upper-left and lower-right corners."""

    upper_left: ComplexPoint
    lower_right: ComplexPoint

    def __post_init__(self) -> None:
        if not self.upper_left.real < self.lower_right.real:
            raise ConfigurationError(
                f"upper-left real part {self.upper_left.real} must be less than "
                f"lower-right real part {self.lower_right.real}"
            )
        if not self.upper_left.imag > self.lower_right.imag:
            raise ConfigurationError(
                f"upper-left imaginary part {self.upper_left.imag} must be greater than "
                f"lower-right imaginary part {self.lower_right.imag}"
            )

    @property
    def width(self) -> float:
        return self.lower_right.real - self.upper_left.real

    @property
    def height(self) -> float:
        return self.upper_left.imag - self.lower_right.imag

    def contains(self, point: ComplexPoint) -> bool:
        return (
            self.upper_left.real <= point.real <= self.lower_right.real
            and self.lower_right.imag <= point.imag <= self.upper_left.imag
        )


@dataclass(frozen=True)
class Resolution:
    """Output image size in pixels."""

    width: int
    height: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "width", _require_positive_int("width", self.width))
        object.__setattr__(self, "height", _require_positive_int("height", self.height))

    @classmethod
    def parse(cls, text: str) -> "Resolution":
        """Parse ``"WIDTHxHEIGHT"``, e.g. ``"1500x750"``."""

        width, height = parse_pair(text, "x", int)
        return cls(width, height)

    @property
    def shape(self) -> tuple[int, int]:
        return self.height, self.width


def pixel_to_point(row: int, col: int, resolution: Resolution, region: Region) -> ComplexPoint:
    """Map pixel ``(row, col)`` to the complex coordinate of its upper-left corner."""

    upper_left = region.upper_left
    lower_right = region.lower_right
    real = upper_left.real + col * (lower_right.real - upper_left.real) / resolution.width
    imag = upper_left.imag + row * (lower_right.imag - upper_left.imag) / resolution.height
    return ComplexPoint(real, imag)


def pixel_grid(row_start: int, row_stop: int, resolution: Resolution, region: Region) -> tuple[np.ndarray, np.ndarray]:
    """Return real and imaginary parts for rows ``[row_start, row_stop)``.

    Each element equals what :func:`pixel_to_point` gives for the same pixel,
    bit for bit, so banded and per-pixel evaluation agree.
    """

    upper_left = region.upper_left
    lower_right = region.lower_right
    cols = np.arange(resolution.width, dtype=np.float64)
    rows = np.arange(row_start, row_stop, dtype=np.float64)
    with np.errstate(over="ignore", invalid="ignore"):
        x = upper_left.real + cols * (lower_right.real - upper_left.real) / resolution.width
        y = upper_left.imag + rows * (lower_right.imag - upper_left.imag) / resolution.height
    real, imag = np.meshgrid(x, y)
    return real, imag


def nearest_pixel(point: ComplexPoint, resolution: Resolution, region: Region) -> tuple[int, int]:
    """Return the ``(row, col)`` whose mapped coordinate lies closest to ``point``."""

    col = round((point.real - region.upper_left.real) * resolution.width / region.width)
    row = round((region.upper_left.imag - point.imag) * resolution.height / region.height)
    row = min(max(int(row), 0), resolution.height - 1)
    col = min(max(int(col), 0), resolution.width - 1)
    return row, col
