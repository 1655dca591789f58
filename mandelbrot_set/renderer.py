"""Parallel rendering of Mandelbrot frames into a shared image buffer."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import numpy as np
import PIL.Image

from .errors import ConfigurationError, FatalRenderFault
from .escape import escape_times
from .geometry import Region, Resolution, pixel_grid
from .partition import WorkRange, partition_rows
from .shading import PixelShader, grayscale

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderConfig:
    """Parameters that describe a single render of the Mandelbrot set."""

    region: Region
    resolution: Resolution
    iteration_bound: int
    worker_count: int

    def __post_init__(self) -> None:
        if not isinstance(self.region, Region):
            raise ConfigurationError(f"region must be a Region, got {self.region!r}")
        if not isinstance(self.resolution, Resolution):
            raise ConfigurationError(f"resolution must be a Resolution, got {self.resolution!r}")
        for name in ("iteration_bound", "worker_count"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
            if value < 1:
                raise ConfigurationError(f"{name} must be at least 1, got {value}")
            object.__setattr__(self, name, int(value))


@dataclass(frozen=True)
class ImageBuffer:
    """A completed render: shaded pixels plus the escape counts behind them.

    Both arrays are read-only once the render returns.
    """

    pixels: np.ndarray
    iterations: np.ndarray
    mode: str
    config: RenderConfig

    @property
    def width(self) -> int:
        return self.config.resolution.width

    @property
    def height(self) -> int:
        return self.config.resolution.height

    def to_image(self) -> PIL.Image.Image:
        return PIL.Image.fromarray(self.pixels)


def _allocate(config: RenderConfig, shader: PixelShader) -> tuple[np.ndarray, np.ndarray]:
    shape = config.resolution.shape
    try:
        pixels = np.zeros(shape + shader.channels, dtype=np.uint8)
        iterations = np.zeros(shape, dtype=np.int64)
    except (MemoryError, ValueError) as exc:
        raise FatalRenderFault(f"could not allocate a {shape[1]}x{shape[0]} image buffer: {exc}") from exc
    return pixels, iterations


def _render_band(
    config: RenderConfig,
    shader: PixelShader,
    band: WorkRange,
    pixels: np.ndarray,
    iterations: np.ndarray,
) -> None:
    """Fill ``pixels`` and ``iterations``, the caller's views of ``band``'s rows."""

    c_real, c_imag = pixel_grid(band.start, band.stop, config.resolution, config.region)
    counts = escape_times(c_real, c_imag, config.iteration_bound)
    iterations[...] = counts
    pixels[...] = shader(counts, config.iteration_bound)


def render(config: RenderConfig, shader: PixelShader = grayscale) -> ImageBuffer:
    """Render ``config`` with one worker thread per row band and return the assembled buffer."""

    pixels, iterations = _allocate(config, shader)
    bands = partition_rows(config.resolution.height, config.worker_count)
    logger.debug(
        "rendering %dx%d, %d iterations, %d band(s): %s",
        config.resolution.width,
        config.resolution.height,
        config.iteration_bound,
        len(bands),
        ", ".join(f"{band.start}-{band.stop}" for band in bands),
    )

    started = time.perf_counter()
    with ThreadPoolExecutor(max_workers=len(bands), thread_name_prefix="mandelbrot") as pool:
        futures = [
            pool.submit(
                _render_band,
                config,
                shader,
                band,
                pixels[band.start:band.stop],
                iterations[band.start:band.stop],
            )
            for band in bands
        ]
    # leaving the executor joins every worker
    for band, future in zip(bands, futures):
        error = future.exception()
        if error is not None:
            raise FatalRenderFault(f"worker for rows {band.start}-{band.stop} failed: {error}") from error

    pixels.flags.writeable = False
    iterations.flags.writeable = False
    logger.info("rendered %d pixels in %.3fs", pixels.shape[0] * pixels.shape[1], time.perf_counter() - started)
    return ImageBuffer(pixels=pixels, iterations=iterations, mode=shader.mode, config=config)
