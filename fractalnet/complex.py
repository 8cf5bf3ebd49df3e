"""Complex numbers in double precision, as used by the fractal kernels."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from typing import Any, Mapping

from .desc import _float_field, _mapping

_F32 = struct.Struct(">f")


def _to_f32(value: float) -> float:
    """Round a float to single precision, overflowing to infinity."""
    try:
        return _F32.unpack(_F32.pack(value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _div(numerator: float, denominator: float) -> float:
    """Divide with IEEE semantics instead of raising on zero."""
    try:
        return numerator / denominator
    except ZeroDivisionError:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def _sin(value: float) -> float:
    return math.sin(value) if math.isfinite(value) else math.nan


def _cos(value: float) -> float:
    return math.cos(value) if math.isfinite(value) else math.nan


def _sinh(value: float) -> float:
    try:
        return math.sinh(value)
    except OverflowError:
        return math.copysign(math.inf, value)


def _cosh(value: float) -> float:
    try:
        return math.cosh(value)
    except OverflowError:
        return math.inf


def _log10(value: float) -> float:
    if math.isnan(value) or value < 0:
        return math.nan
    if value == 0:
        return -math.inf
    return math.log10(value)


@dataclass(frozen=True)
class Complex:
    """A complex number with float components."""

    re: float
    im: float

    def norm(self) -> float:
        """Squared modulus, re² + im²."""
        return self.re * self.re + self.im * self.im

    def norm_square(self) -> float:
        """Squared modulus, re² + im²."""
        return self.re * self.re + self.im * self.im

    def angle(self) -> float:
        """Argument as a fraction of a full turn, in [0, 1)."""
        return (math.atan2(self.im, self.re) / (2.0 * math.pi)) % 1.0

    def sin(self) -> Complex:
        """Complex sine."""
        return Complex(
            _sin(self.re) * _cosh(self.im),
            _cos(self.re) * _sinh(self.im),
        )

    @staticmethod
    def convergence_value(pzn: float, threshold: float, count: int, nmax: int) -> float:
        """Smooth convergence weight in single precision; 1.0 once count reaches nmax."""
        if count >= nmax:
            return 1.0
        accuracy = _log10(_to_f32(threshold))
        ratio = _div(_log10(_to_f32(pzn)), accuracy)
        return _to_f32(0.5 - 0.5 * _cos(0.1 * (_to_f32(count) - ratio)))

    def __add__(self, other: object) -> Complex:
        if not isinstance(other, Complex):
            return NotImplemented
        return Complex(self.re + other.re, self.im + other.im)

    def __sub__(self, other: object) -> Complex:
        if not isinstance(other, Complex):
            return NotImplemented
        return Complex(self.re - other.re, self.im - other.im)

    def __mul__(self, other: object) -> Complex:
        if not isinstance(other, Complex):
            return NotImplemented
        return Complex(
            self.re * other.re - self.im * other.im,
            self.re * other.im + self.im * other.re,
        )

    def __truediv__(self, other: object) -> Complex:
        if not isinstance(other, Complex):
            return NotImplemented
        denom = other.re * other.re + other.im * other.im
        return Complex(
            _div(self.re * other.re + self.im * other.im, denom),
            _div(self.im * other.re - self.re * other.im, denom),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"re": self.re, "im": self.im}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Complex:
        data = _mapping(data, "Complex")
        return cls(_float_field(data, "re", "Complex"), _float_field(data, "im", "Complex"))