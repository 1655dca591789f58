import warnings

import numpy as np
import pytest

from mandelbrot_set import ComplexPoint, escape_time, escape_times


@pytest.mark.parametrize("bound", [1, 2, 10, 100, 1000])
def test_origin_never_escapes(bound):
    assert escape_time(ComplexPoint(0.0, 0.0), bound) == bound


def test_known_escape_counts():
    assert escape_time(ComplexPoint(3.0, 0.0), 50) == 1
    assert escape_time(ComplexPoint(-2.0, 1.0), 50) == 1
    # z = 2 sits exactly on the threshold, z = 6 is past it
    assert escape_time(ComplexPoint(2.0, 0.0), 50) == 2
    assert escape_time(ComplexPoint(0.5, 0.0), 100) == 5


def test_squared_magnitude_equal_to_four_is_not_escaped():
    # the orbit of -2 is -2, 2, 2, ... with |z|**2 == 4 forever
    assert escape_time(ComplexPoint(-2.0, 0.0), 64) == 64


def test_accepts_builtin_complex():
    assert escape_time(complex(3, 0), 10) == 1
    assert escape_time(-1 + 0j, 10) == 10


def test_non_finite_orbit_is_treated_as_inside():
    assert escape_time(complex(1e200, 0.0), 20) == 20
    assert escape_time(complex(float("nan"), 0.0), 20) == 20


def test_escape_time_is_deterministic_and_bounded():
    rng = np.random.default_rng(7)
    points = rng.uniform(-2.5, 1.5, size=(200, 2))
    for real, imag in points:
        first = escape_time(complex(real, imag), 40)
        assert first == escape_time(complex(real, imag), 40)
        assert 0 <= first <= 40


def test_vectorized_kernel_matches_scalar_evaluation():
    rng = np.random.default_rng(0)
    c_real = rng.uniform(-2.0, 1.0, size=(20, 30))
    c_imag = rng.uniform(-1.5, 1.5, size=(20, 30))

    counts = escape_times(c_real, c_imag, 75)

    assert counts.shape == (20, 30)
    expected = [
        [escape_time(complex(r, i), 75) for r, i in zip(row_real, row_imag)]
        for row_real, row_imag in zip(c_real, c_imag)
    ]
    np.testing.assert_array_equal(counts, expected)
    assert counts.min() >= 0
    assert counts.max() <= 75


def test_vectorized_kernel_recovers_from_non_finite_values():
    c_real = np.array([0.0, 3.0, 1e200, np.nan, np.inf, -2.0])
    c_imag = np.array([0.0, 0.0, 0.0, 0.0, 0.0, 0.0])

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        counts = escape_times(c_real, c_imag, 30)

    np.testing.assert_array_equal(counts, [30, 1, 30, 30, 30, 30])
