import numpy as np
import pytest

from mandelbrot_set import (
    ComplexPoint,
    ConfigurationError,
    FatalRenderFault,
    PixelShader,
    Region,
    RenderConfig,
    Resolution,
    binary,
    colormap_shader,
    escape_time,
    nearest_pixel,
    pixel_to_point,
    render,
)
from mandelbrot_set import renderer as renderer_module

FULL_SET = Region(ComplexPoint(-2.0, 1.0), ComplexPoint(1.0, -1.0))


def make_config(width=300, height=200, iterations=100, workers=4, region=FULL_SET):
    return RenderConfig(
        region=region,
        resolution=Resolution(width, height),
        iteration_bound=iterations,
        worker_count=workers,
    )


def test_full_set_scenario():
    config = make_config()

    buffer = render(config)

    assert buffer.pixels.shape == (200, 300)
    assert buffer.iterations.shape == (200, 300)
    assert (buffer.width, buffer.height) == (300, 200)
    assert buffer.mode == "L"

    origin = nearest_pixel(ComplexPoint(0.0, 0.0), config.resolution, config.region)
    assert buffer.iterations[origin] == 100
    assert buffer.pixels[origin] == 0

    corner = nearest_pixel(ComplexPoint(-2.0, 1.0), config.resolution, config.region)
    assert buffer.iterations[corner] < 100
    assert buffer.iterations[corner] <= 2
    assert buffer.pixels[corner] > 250


def test_every_pixel_matches_per_pixel_pipeline():
    config = make_config(width=37, height=23, iterations=60, workers=5)

    buffer = render(config)

    for row in range(23):
        for col in range(37):
            point = pixel_to_point(row, col, config.resolution, config.region)
            count = escape_time(point, 60)
            assert buffer.iterations[row, col] == count
            assert buffer.pixels[row, col] == 255 - (255 * count) // 60


@pytest.mark.parametrize("workers", [2, 3, 7, 16])
def test_result_is_independent_of_worker_count(workers):
    single = render(make_config(width=120, height=80, workers=1))
    parallel = render(make_config(width=120, height=80, workers=workers))

    np.testing.assert_array_equal(single.pixels, parallel.pixels)
    np.testing.assert_array_equal(single.iterations, parallel.iterations)


def test_more_workers_than_rows():
    buffer = render(make_config(width=7, height=3, workers=16))
    reference = render(make_config(width=7, height=3, workers=1))

    assert buffer.pixels.shape == (3, 7)
    np.testing.assert_array_equal(buffer.pixels, reference.pixels)


def test_single_pixel_image():
    buffer = render(make_config(width=1, height=1, workers=4))

    assert buffer.iterations.shape == (1, 1)
    assert buffer.iterations[0, 0] == escape_time(FULL_SET.upper_left, 100)


def test_buffer_is_read_only_after_render():
    buffer = render(make_config(width=10, height=10))

    assert not buffer.pixels.flags.writeable
    assert not buffer.iterations.flags.writeable
    with pytest.raises(ValueError):
        buffer.pixels[0, 0] = 1


def test_alternate_shaders():
    config = make_config(width=60, height=40)

    mono = render(config, binary)
    colored = render(config, colormap_shader("inferno"))

    assert set(np.unique(mono.pixels)) <= {0, 255}
    np.testing.assert_array_equal(mono.iterations, colored.iterations)
    assert colored.pixels.shape == (40, 60, 3)
    assert colored.mode == "RGB"
    assert colored.to_image().mode == "RGB"
    assert mono.to_image().size == (60, 40)


def test_degenerate_region_fails_before_rendering(monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("no worker may be spawned")

    monkeypatch.setattr(renderer_module, "ThreadPoolExecutor", fail)
    with pytest.raises(ConfigurationError):
        render(make_config(region=Region(ComplexPoint(1.0, 1.0), ComplexPoint(-2.0, -1.0))))


@pytest.mark.parametrize(
    "field, value",
    [("iteration_bound", 0), ("iteration_bound", -5), ("worker_count", 0), ("worker_count", 1.5)],
)
def test_render_config_validation(field, value):
    arguments = dict(region=FULL_SET, resolution=Resolution(10, 10), iteration_bound=10, worker_count=2)
    arguments[field] = value
    with pytest.raises(ConfigurationError):
        RenderConfig(**arguments)


def test_worker_failure_is_fatal():
    def explode(counts, bound):
        raise RuntimeError("boom")

    with pytest.raises(FatalRenderFault) as excinfo:
        render(make_config(width=20, height=20), PixelShader("broken", "L", explode))

    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_allocation_failure_is_fatal():
    with pytest.raises(FatalRenderFault):
        render(make_config(width=10**8, height=10**8))


def test_non_finite_coordinates_do_not_abort_render():
    # corners this far apart overflow the coordinate arithmetic
    region = Region(ComplexPoint(-1.7e308, 1.7e308), ComplexPoint(1.7e308, -1.7e308))

    buffer = render(make_config(width=8, height=6, iterations=12, region=region))

    assert buffer.iterations.shape == (6, 8)
    assert buffer.iterations.min() >= 0
    assert buffer.iterations.max() <= 12
