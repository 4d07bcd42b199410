# Based on Taneli Hukkinen's https://github.com/hukkin/tomli-w/blob/master/benchmark/run.py

from __future__ import annotations

import functools
import io
import math
import timeit
from collections.abc import Callable

import shpcodec


def benchmark(
    name: str,
    run_count: int,
    func: Callable,
    col_widths: tuple,
    compare_to: float | None = None,
) -> float:
    placeholder = "Running..."
    print(f"{name:>{col_widths[0]}} | {placeholder}", end="", flush=True)
    time_taken = timeit.timeit(func, number=run_count)
    print("\b" * len(placeholder), end="")
    time_suffix = " s"
    print(f"{time_taken:{col_widths[1] - len(time_suffix)}.3g}{time_suffix}", end="")
    print()
    return time_taken


def circle(n_points: int, radius: float = 1.0) -> list[tuple[float, float]]:
    step = 2 * math.pi / n_points
    ring = [
        (radius * math.cos(i * step), radius * math.sin(i * step))
        for i in range(n_points)
    ]
    return ring + ring[:1]


SHAPES = {
    "Point": shpcodec.Point(-122.4, 37.8),
    "Polyline 100": shpcodec.Polyline(circle(100)[:-1]),
    "Polygon 10k": shpcodec.Polygon(circle(10_000)),
    "Polygon 100 rings": shpcodec.Polygon(*(circle(100, r) for r in range(1, 101))),
}

ENCODED = {name: shape.to_bytes() for name, shape in SHAPES.items()}


def write_shape(shape: shpcodec.Shape) -> None:
    b_io = io.BytesIO()
    ShapeClass = shpcodec.SHAPE_CLASS_FROM_SHAPETYPE[shape.shapeType]
    ShapeClass.write_to_byte_stream(b_io, shape, 1)


def read_shape(shapeType: int, data: bytes) -> None:
    shpcodec.shape_from_byte_stream(shapeType, io.BytesIO(data))


writer_benchmarks = [
    functools.partial(
        benchmark,
        name=f"Write {test_name}",
        func=functools.partial(write_shape, shape=shape),
    )
    for test_name, shape in SHAPES.items()
]

reader_benchmarks = [
    functools.partial(
        benchmark,
        name=f"Read {test_name}",
        func=functools.partial(
            read_shape, shapeType=SHAPES[test_name].shapeType, data=data
        ),
    )
    for test_name, data in ENCODED.items()
]


def run(run_count: int, benchmarks: list[Callable[[], None]]) -> None:
    col_widths = (22, 10)
    col_head = ("parser", "exec time", "performance (more is better)")
    print(f"Running benchmarks {run_count} times:")
    print("-" * col_widths[0] + "---" + "-" * col_widths[1])
    print(f"{col_head[0]:>{col_widths[0]}} | {col_head[1]:>{col_widths[1]}}")
    print("-" * col_widths[0] + "-+-" + "-" * col_widths[1])
    for benchmark in benchmarks:
        benchmark(  # type: ignore [call-arg]
            run_count=run_count,
            col_widths=col_widths,
        )


if __name__ == "__main__":
    print("Writer tests:")
    run(1000, writer_benchmarks)  # type: ignore [arg-type]
    print("\n\nReader tests:")
    run(1000, reader_benchmarks)  # type: ignore [arg-type]
