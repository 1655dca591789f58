"""Split the image rows into one contiguous band per worker."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import ConfigurationError


@dataclass(frozen=True)
class WorkRange:
    """Half-open span of rows ``[start, stop)`` owned by a single worker."""

    start: int
    stop: int

    def __len__(self) -> int:
        return self.stop - self.start

    @property
    def rows(self) -> range:
        return range(self.start, self.stop)


def partition_rows(height: int, worker_count: int) -> list[WorkRange]:
    """Divide ``height`` rows into at most ``worker_count`` bands of near-equal size.

    Band sizes differ by at most one row, with the larger bands first. When
    there are more workers than rows each row gets its own band and the
    remaining workers are left unused.
    """

    if height < 1:
        raise ConfigurationError(f"height must be at least 1, got {height}")
    if worker_count < 1:
        raise ConfigurationError(f"worker count must be at least 1, got {worker_count}")

    workers = min(worker_count, height)
    base, extra = divmod(height, workers)
    ranges = []
    start = 0
    for index in range(workers):
        stop = start + base + (1 if index < extra else 0)
        ranges.append(WorkRange(start, stop))
        start = stop
    return ranges
