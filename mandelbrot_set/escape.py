"""Escape-time iteration of z <- z**2 + c."""

from __future__ import annotations

import logging
import math

import numpy as np

from .geometry import ComplexPoint

logger = logging.getLogger(__name__)

# |z|**2 above this means |z| > 2 and the orbit diverges.
HORIZON_SQUARED = 4.0


def escape_time(c: ComplexPoint | complex, iteration_bound: int) -> int:
    """Return the iteration at which ``c`` escapes, or ``iteration_bound`` if it never does.

    A non-finite squared magnitude along the orbit classifies the point as
    non-escaping.
    """

    c_real, c_imag = c.real, c.imag
    z_real = z_imag = 0.0
    for n in range(1, iteration_bound + 1):
        z_real, z_imag = z_real * z_real - z_imag * z_imag + c_real, 2.0 * z_real * z_imag + c_imag
        magnitude = z_real * z_real + z_imag * z_imag
        if not math.isfinite(magnitude):
            return iteration_bound
        if magnitude > HORIZON_SQUARED:
            return n
    return iteration_bound


def _escape_step(
    z_real: np.ndarray,
    z_imag: np.ndarray,
    c_real: np.ndarray,
    c_imag: np.ndarray,
    active: np.ndarray,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Advance every still-active orbit by one step and return its squared magnitude."""

    new_real = z_real * z_real - z_imag * z_imag + c_real
    new_imag = 2.0 * z_real * z_imag + c_imag
    z_real = np.where(active, new_real, z_real)
    z_imag = np.where(active, new_imag, z_imag)
    magnitude = z_real * z_real + z_imag * z_imag
    return z_real, z_imag, magnitude


def escape_times(c_real: np.ndarray, c_imag: np.ndarray, iteration_bound: int) -> np.ndarray:
    """Vectorized :func:`escape_time` over arrays of real and imaginary parts."""

    c_real = np.asarray(c_real, dtype=np.float64)
    c_imag = np.asarray(c_imag, dtype=np.float64)
    counts = np.full(c_real.shape, iteration_bound, dtype=np.int64)
    z_real = np.zeros_like(c_real)
    z_imag = np.zeros_like(c_imag)
    active = np.ones(c_real.shape, dtype=bool)
    anomalies = 0

    with np.errstate(over="ignore", invalid="ignore"):
        n = 0
        while n < iteration_bound and active.any():
            n += 1
            z_real, z_imag, magnitude = _escape_step(z_real, z_imag, c_real, c_imag, active)
            non_finite = active & ~np.isfinite(magnitude)
            if non_finite.any():
                anomalies += int(np.count_nonzero(non_finite))
                active &= ~non_finite
            escaped = active & (magnitude > HORIZON_SQUARED)
            counts[escaped] = n
            active &= ~escaped

    if anomalies:
        logger.debug("%d point(s) hit a non-finite value and were treated as inside the set", anomalies)
    return counts
