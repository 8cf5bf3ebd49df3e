"""Cosine colour palette mapping an intensity to RGB."""

from __future__ import annotations

import math

_A = (0.5, 0.5, 0.5)
_B = (0.5, 0.5, 0.5)
_C = (1.0, 1.0, 1.0)
_D = (0.0, 0.33, 0.67)


def _to_byte(value: float) -> int:
    """Truncate to an integer in 0..255, NaN becoming 0."""
    if math.isnan(value):
        return 0
    return int(min(max(value, 0.0), 255.0))


def _channel(c: float, d: float, t: float) -> int:
    phase = 2.0 * math.pi * (t + d)
    cosine = math.cos(phase) if math.isfinite(phase) else math.nan
    return _to_byte((_A[0] + _B[0] * cosine * c) * 255.0)


def color_palette(t: float) -> tuple[int, int, int]:
    """Return the (red, green, blue) colour for intensity t."""
    return (
        _channel(_C[0], _D[0], t),
        _channel(_C[1], _D[1], t),
        _channel(_C[2], _D[2], t),
    )