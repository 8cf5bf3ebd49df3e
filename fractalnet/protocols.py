"""Messages exchanged between workers and the server, and their JSON form."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping, Union

from .desc import (
    PixelData,
    Range,
    Resolution,
    U8Data,
    _field,
    _mapping,
    _uint_field,
)
from .fractals import (
    IteratedSinZ,
    JuliaDescriptor,
    Mandelbrot,
    NewtonRaphsonZ3,
    NewtonRaphsonZ4,
)

FractalDescriptor = Union[JuliaDescriptor, Mandelbrot, IteratedSinZ, NewtonRaphsonZ3, NewtonRaphsonZ4]

_FRACTAL_TYPES: dict[str, type] = {
    "Julia": JuliaDescriptor,
    "Mandelbrot": Mandelbrot,
    "IteratedSinZ": IteratedSinZ,
    "NewtonRaphsonZ3": NewtonRaphsonZ3,
    "NewtonRaphsonZ4": NewtonRaphsonZ4,
}
_FRACTAL_TAGS = {cls: tag for tag, cls in _FRACTAL_TYPES.items()}


class DecodeError(ValueError):
    """Raised when a message cannot be decoded into a fragment."""


def _untag(data: Any, what: str) -> tuple[str, Any]:
    data = _mapping(data, what)
    if len(data) != 1:
        raise ValueError(f"{what} must have exactly one variant key")
    ((tag, body),) = data.items()
    return tag, body


def _fractal_to_dict(fractal: FractalDescriptor) -> dict[str, Any]:
    try:
        tag = _FRACTAL_TAGS[type(fractal)]
    except KeyError:
        raise TypeError(f"not a fractal descriptor: {fractal!r}") from None
    return {tag: fractal.to_dict()}


def _fractal_from_dict(data: Any) -> FractalDescriptor:
    tag, body = _untag(data, "fractal")
    try:
        cls = _FRACTAL_TYPES[tag]
    except KeyError:
        raise ValueError(f"unknown fractal variant {tag!r}") from None
    return cls.from_dict(body)


@dataclass(frozen=True)
class FragmentRequest:
    """A worker asking for work."""

    worker_name: str
    maximal_work_load: int

    def to_dict(self) -> dict[str, Any]:
        return {"worker_name": self.worker_name, "maximal_work_load": self.maximal_work_load}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FragmentRequest:
        data = _mapping(data, "FragmentRequest")
        name = _field(data, "worker_name", "FragmentRequest")
        if not isinstance(name, str):
            raise ValueError("field 'worker_name' in FragmentRequest must be a string")
        return cls(name, _uint_field(data, "maximal_work_load", "FragmentRequest"))


@dataclass(frozen=True)
class FragmentTask:
    """A piece of a fractal image for a worker to compute."""

    id: U8Data
    fractal: FractalDescriptor
    max_iteration: int
    resolution: Resolution
    range: Range

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id.to_dict(),
            "fractal": _fractal_to_dict(self.fractal),
            "max_iteration": self.max_iteration,
            "resolution": self.resolution.to_dict(),
            "range": self.range.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FragmentTask:
        data = _mapping(data, "FragmentTask")
        return cls(
            id=U8Data.from_dict(_field(data, "id", "FragmentTask")),
            fractal=_fractal_from_dict(_field(data, "fractal", "FragmentTask")),
            max_iteration=_uint_field(data, "max_iteration", "FragmentTask"),
            resolution=Resolution.from_dict(_field(data, "resolution", "FragmentTask")),
            range=Range.from_dict(_field(data, "range", "FragmentTask")),
        )


@dataclass(frozen=True)
class FragmentResult:
    """A worker's answer describing where its pixels lie in the payload."""

    id: U8Data
    resolution: Resolution
    range: Range
    pixels: PixelData

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id.to_dict(),
            "resolution": self.resolution.to_dict(),
            "range": self.range.to_dict(),
            "pixels": self.pixels.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FragmentResult:
        data = _mapping(data, "FragmentResult")
        return cls(
            id=U8Data.from_dict(_field(data, "id", "FragmentResult")),
            resolution=Resolution.from_dict(_field(data, "resolution", "FragmentResult")),
            range=Range.from_dict(_field(data, "range", "FragmentResult")),
            pixels=PixelData.from_dict(_field(data, "pixels", "FragmentResult")),
        )


Fragment = Union[FragmentRequest, FragmentTask, FragmentResult]

_FRAGMENT_TYPES: dict[str, type] = {
    "FragmentRequest": FragmentRequest,
    "FragmentTask": FragmentTask,
    "FragmentResult": FragmentResult,
}
_FRAGMENT_TAGS = {cls: tag for tag, cls in _FRAGMENT_TYPES.items()}


def to_json(fragment: Fragment) -> str:
    """Serialise a fragment as compact JSON tagged with its variant name."""
    try:
        tag = _FRAGMENT_TAGS[type(fragment)]
    except KeyError:
        raise TypeError(f"not a fragment: {fragment!r}") from None
    return json.dumps({tag: fragment.to_dict()}, separators=(",", ":"), ensure_ascii=False)


def from_json(message: str | bytes) -> Fragment:
    """Parse a tagged JSON message into a fragment, raising DecodeError."""
    try:
        tag, body = _untag(json.loads(message), "fragment")
        try:
            cls = _FRAGMENT_TYPES[tag]
        except KeyError:
            raise ValueError(f"unknown fragment variant {tag!r}") from None
        return cls.from_dict(body)
    except (ValueError, TypeError) as exc:
        raise DecodeError(str(exc)) from exc