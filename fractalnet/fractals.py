"""Fractal descriptors and their per-pixel escape-time computations."""

from __future__ import annotations

import math
import struct
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping

from .complex import Complex, _to_f32
from .desc import _field, _float_field, _mapping

if TYPE_CHECKING:
    from .protocols import FragmentTask

_PIXEL = struct.Struct(">ff")


def _ratio(count: float, max_iteration: int) -> float:
    """count / max_iteration in single precision; NaN when max_iteration is 0."""
    if max_iteration == 0:
        return math.nan
    return _to_f32(_to_f32(count) / _to_f32(max_iteration))


class CalcFractal(ABC):
    """A fractal that can compute pixel intensities over a fragment."""

    @abstractmethod
    def determine_pixel_intensity(self, x: float, y: float, max_iteration: int) -> tuple[float, float]:
        """Return (zn, count) for the point x + iy, both in single precision."""

    def make_image(self, fragment_task: FragmentTask) -> bytes:
        """Compute every pixel of the task row by row as big-endian f32 pairs."""
        lo, hi = fragment_task.range.min, fragment_task.range.max
        width = fragment_task.resolution.nx
        height = fragment_task.resolution.ny
        out = bytearray()
        for py in range(height):
            mapped_y = lo.y + (py / height) * (hi.y - lo.y)
            for px in range(width):
                mapped_x = lo.x + (px / width) * (hi.x - lo.x)
                zn, count = self.determine_pixel_intensity(
                    mapped_x, mapped_y, fragment_task.max_iteration
                )
                out += _PIXEL.pack(zn, count)
        return bytes(out)


@dataclass(frozen=True)
class JuliaDescriptor(CalcFractal):
    """Julia set z ↦ z² + c."""

    c: Complex
    divergence_threshold_square: float

    def determine_pixel_intensity(self, x, y, max_iteration):
        z = Complex(x, y)
        i = 0
        while i < max_iteration and z.norm() < self.divergence_threshold_square:
            z = z * z + self.c
            i += 1
        return _to_f32(z.norm()), _ratio(i, max_iteration)

    def to_dict(self) -> dict[str, Any]:
        return {"c": self.c.to_dict(), "divergence_threshold_square": self.divergence_threshold_square}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> JuliaDescriptor:
        data = _mapping(data, "Julia")
        return cls(
            Complex.from_dict(_field(data, "c", "Julia")),
            _float_field(data, "divergence_threshold_square", "Julia"),
        )


@dataclass(frozen=True)
class Mandelbrot(CalcFractal):
    """Mandelbrot set, escaping once |z|² reaches 4."""

    def determine_pixel_intensity(self, x, y, max_iteration):
        c = Complex(x, y)
        z = Complex(0.0, 0.0)
        i = 0
        while i < max_iteration and z.norm() < 4.0:
            z = z * z + c
            i += 1
        return _to_f32(z.norm()), _ratio(i, max_iteration)

    def to_dict(self) -> dict[str, Any]:
        return {}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Mandelbrot:
        _mapping(data, "Mandelbrot")
        return cls()


@dataclass(frozen=True)
class IteratedSinZ(CalcFractal):
    """Iteration z ↦ c·sin(z), escaping once |z|² reaches 50."""

    c: Complex

    def determine_pixel_intensity(self, x, y, max_iteration):
        z = Complex(x, y)
        i = 0
        while i < max_iteration and z.norm() < 50.0:
            z = self.c * z.sin()
            i += 1
        return _to_f32(z.norm()), _ratio(i, max_iteration)

    def to_dict(self) -> dict[str, Any]:
        return {"c": self.c.to_dict()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> IteratedSinZ:
        data = _mapping(data, "IteratedSinZ")
        return cls(Complex.from_dict(_field(data, "c", "IteratedSinZ")))


@dataclass(frozen=True)
class NewtonRaphsonZ3(CalcFractal):
    """Newton-Raphson iteration for z³ - 1."""

    _DELTA = 1e-6

    @staticmethod
    def _fz(z: Complex) -> Complex:
        return z * z * z - Complex(1.0, 0.0)

    @staticmethod
    def _dfz(z: Complex) -> Complex:
        return Complex(3.0, 0.0) * z * z

    def determine_pixel_intensity(self, x, y, max_iteration):
        z = Complex(x, y)
        i = 0
        while True:
            z_next = z - self._fz(z) / self._dfz(z)
            if (z_next - z).norm_square() < self._DELTA or i >= max_iteration:
                break
            z = z_next
            i += 1

        zn = z.angle()
        if i < max_iteration:
            weight = Complex.convergence_value(
                _to_f32(z.norm_square()), self._DELTA, i, max_iteration
            )
        else:
            weight = 1.0
        return _to_f32(zn), _ratio(_to_f32(_to_f32(i) * weight), max_iteration)

    def to_dict(self) -> dict[str, Any]:
        return {}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NewtonRaphsonZ3:
        _mapping(data, "NewtonRaphsonZ3")
        return cls()


@dataclass(frozen=True)
class NewtonRaphsonZ4:
    """Newton-Raphson fractal for z⁴ - 1; it can be described but not computed."""

    def to_dict(self) -> dict[str, Any]:
        return {}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NewtonRaphsonZ4:
        _mapping(data, "NewtonRaphsonZ4")
        return cls()