"""Plain value types describing regions, resolutions and pixel payloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{what} must be an object")
    return data


def _field(data: Mapping[str, Any], key: str, what: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"missing field {key!r} in {what}") from None


def _uint_field(data: Mapping[str, Any], key: str, what: str, bits: int = 32) -> int:
    value = _field(data, key, what)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field {key!r} in {what} must be an unsigned integer")
    if not 0 <= value < (1 << bits):
        raise ValueError(f"field {key!r} in {what} is out of range for u{bits}")
    return value


def _float_field(data: Mapping[str, Any], key: str, what: str) -> float:
    value = _field(data, key, what)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"field {key!r} in {what} must be a number")
    try:
        return float(value)
    except OverflowError:
        raise ValueError(f"field {key!r} in {what} is out of range") from None


@dataclass(frozen=True)
class U8Data:
    """Offset and length of a byte slice in a message's binary payload."""

    offset: int
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"offset": self.offset, "count": self.count}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> U8Data:
        data = _mapping(data, "U8Data")
        return cls(_uint_field(data, "offset", "U8Data"), _uint_field(data, "count", "U8Data"))


@dataclass(frozen=True)
class Point:
    """A point of the complex plane."""

    x: float
    y: float

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Point:
        data = _mapping(data, "Point")
        return cls(_float_field(data, "x", "Point"), _float_field(data, "y", "Point"))


@dataclass(frozen=True)
class Range:
    """A rectangle of the complex plane given by two corners."""

    min: Point
    max: Point

    def to_dict(self) -> dict[str, Any]:
        return {"min": self.min.to_dict(), "max": self.max.to_dict()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Range:
        data = _mapping(data, "Range")
        return cls(
            Point.from_dict(_field(data, "min", "Range")),
            Point.from_dict(_field(data, "max", "Range")),
        )


@dataclass(frozen=True)
class Resolution:
    """Image size in pixels; both sides fit in 16 bits."""

    nx: int
    ny: int

    def to_dict(self) -> dict[str, Any]:
        return {"nx": self.nx, "ny": self.ny}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Resolution:
        data = _mapping(data, "Resolution")
        return cls(
            _uint_field(data, "nx", "Resolution", bits=16),
            _uint_field(data, "ny", "Resolution", bits=16),
        )


@dataclass(frozen=True)
class PixelData:
    """Offset and number of pixels in a result's binary payload."""

    offset: int
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"offset": self.offset, "count": self.count}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PixelData:
        data = _mapping(data, "PixelData")
        return cls(_uint_field(data, "offset", "PixelData"), _uint_field(data, "count", "PixelData"))


@dataclass(frozen=True)
class PixelIntensity:
    """Final modulus and normalised iteration count of one pixel."""

    zn: float
    count: float

    def to_dict(self) -> dict[str, Any]:
        return {"zn": self.zn, "count": self.count}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PixelIntensity:
        data = _mapping(data, "PixelIntensity")
        return cls(
            _float_field(data, "zn", "PixelIntensity"),
            _float_field(data, "count", "PixelIntensity"),
        )