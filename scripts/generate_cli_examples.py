from __future__ import annotations

import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

EXAMPLES_ROOT = Path("examples/cli-options")


@dataclass
class Example:
    name: str
    dest: Path
    threads: int = 4
    iterations: int = 100
    resolution: str = "300x200"
    corners: tuple[str, str] = ("-2.0,1.0", "1.0,-1.0")  # the full set
    options: tuple[str, ...] = ()
    expect_failure: bool = False

    def full_args(self) -> list[str]:
        return [
            sys.executable,
            "draw.py",
            str(self.dest),
            str(self.threads),
            str(self.iterations),
            self.resolution,
            *self.corners,
            *self.options,
        ]


EXAMPLES: list[Example] = [
    Example(name="default", dest=EXAMPLES_ROOT / "default" / "full-set.png"),
    Example(name="single-thread", dest=EXAMPLES_ROOT / "single-thread" / "full-set.png", threads=1),
    Example(name="many-threads", dest=EXAMPLES_ROOT / "many-threads" / "tiny.png", threads=64, resolution="40x10"),
    Example(name="iterations", dest=EXAMPLES_ROOT / "iterations" / "high-iterations.png", iterations=2000),
    Example(name="resolution", dest=EXAMPLES_ROOT / "resolution" / "wide.png", resolution="900x300"),
    Example(
        name="seahorse-valley",
        dest=EXAMPLES_ROOT / "seahorse-valley" / "seahorse.png",
        iterations=500,
        corners=("-0.8,0.2", "-0.7,0.1"),
    ),
    Example(name="binary", dest=EXAMPLES_ROOT / "binary" / "black-white.png", options=("--shader", "binary")),
    Example(
        name="colormap",
        dest=EXAMPLES_ROOT / "colormap" / "inferno.png",
        options=("--shader", "colormap", "--colormap", "inferno", "--inside-color", "#0a3ba0"),
    ),
    Example(name="format", dest=EXAMPLES_ROOT / "format" / "custom", options=("--format", "webp")),
    Example(name="verbose", dest=EXAMPLES_ROOT / "verbose" / "diagnostic.png", options=("--verbose",)),
    Example(
        name="degenerate-region",
        dest=EXAMPLES_ROOT / "degenerate-region" / "never-written.png",
        corners=("1.0,1.0", "-2.0,-1.0"),
        expect_failure=True,
    ),
]


def _ensure_clean(paths: Iterable[Path]) -> None:
    for path in paths:
        if path.exists():
            if path.is_dir():
                shutil.rmtree(path)
            else:
                path.unlink()


def _written_files(example: Example) -> list[Path]:
    directory = example.dest.parent
    if not directory.is_dir():
        return []
    return [path for path in directory.iterdir() if path.name.startswith(example.dest.stem)]


def _verify(example: Example, returncode: int) -> None:
    written = _written_files(example)
    if example.expect_failure:
        if returncode == 0:
            raise RuntimeError(f"Example {example.name} was expected to fail")
        if written:
            raise RuntimeError(f"Example {example.name} failed but still wrote {written[0]}")
        return
    if returncode != 0:
        raise RuntimeError(f"Example {example.name} failed with {returncode}")
    if not written:
        raise RuntimeError(f"Expected file {example.dest} was not created")


def main() -> None:
    EXAMPLES_ROOT.mkdir(parents=True, exist_ok=True)
    for example in EXAMPLES:
        print(f"\n[cli-example] {example.name}")
        _ensure_clean([example.dest.parent])
        completed = subprocess.run(example.full_args(), check=False)
        _verify(example, completed.returncode)
    print("\nAll CLI examples generated successfully.")


if __name__ == "__main__":
    main()
