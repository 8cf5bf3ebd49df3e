"""Computation of a whole fragment task on a worker."""

from __future__ import annotations

from .desc import PixelData
from .fractals import CalcFractal
from .protocols import FragmentResult, FragmentTask


def run(fragment_task: FragmentTask) -> tuple[FragmentResult, bytes]:
    """Compute a task; return its result and the pixel bytes to append after the task data."""
    resolution = fragment_task.resolution
    pixels = PixelData(offset=fragment_task.id.count, count=resolution.nx * resolution.ny)
    result = FragmentResult(
        id=fragment_task.id,
        resolution=resolution,
        range=fragment_task.range,
        pixels=pixels,
    )
    fractal = fragment_task.fractal
    if not isinstance(fractal, CalcFractal):
        raise ValueError(f"{type(fractal).__name__} fractals are not supported")
    return result, fractal.make_image(fragment_task)