"""
Location models: Point, the `{"locations": [...]}` envelope and fetch outcomes.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Union

from places.domains.errors import FetchError


def _coordinate(raw: dict[str, Any], key: str) -> float:
    if key not in raw:
        raise KeyError(f"missing required field {key!r}")
    val = raw[key]
    # bool is an int subclass; JSON true/false is not a coordinate.
    if isinstance(val, bool) or not isinstance(val, (int, float)):
        raise TypeError(f"field {key!r} must be a number, got {type(val).__name__}")
    val = float(val)
    if not math.isfinite(val):
        raise ValueError(f"field {key!r} must be finite, got {val}")
    return val


@dataclass(frozen=True)
class Point:
    """
    One geographic location record.

    Equal fields mean interchangeable points, but lists keep duplicates.
    Coordinates are not range-checked here.
    """

    name: str | None
    latitude: float
    longitude: float

    @property
    def identity(self) -> int:
        return hash((self.name or "", self.latitude, self.longitude))

    @classmethod
    def from_dict(cls, raw: Any) -> Point:
        """
        Build a Point from its wire form `{"name"?: str, "lat": num, "long": num}`.

        Raises:
            TypeError, KeyError, ValueError: If the element does not match the wire shape.
        """
        if not isinstance(raw, dict):
            raise TypeError(f"location must be an object, got {type(raw).__name__}")
        name = raw.get("name")
        if name is not None and not isinstance(name, str):
            raise TypeError(f"field 'name' must be a string, got {type(name).__name__}")
        return cls(
            name=name,
            latitude=_coordinate(raw, "lat"),
            longitude=_coordinate(raw, "long"),
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.name is not None:
            out["name"] = self.name
        out["lat"] = self.latitude
        out["long"] = self.longitude
        return out


def points_from_json(data: Any) -> list[Point]:
    """Decode a JSON array of wire-form locations, preserving order and duplicates."""
    if not isinstance(data, list):
        raise TypeError(f"locations must be an array, got {type(data).__name__}")
    return [Point.from_dict(el) for el in data]


def points_to_json(points: list[Point]) -> list[dict[str, Any]]:
    return [p.to_dict() for p in points]


@dataclass(frozen=True)
class LocationsResponse:
    """Envelope returned by the locations endpoint."""

    locations: list[Point]

    @classmethod
    def from_dict(cls, raw: Any) -> LocationsResponse:
        if not isinstance(raw, dict):
            raise TypeError(f"response must be an object, got {type(raw).__name__}")
        if "locations" not in raw:
            raise KeyError("missing required field 'locations'")
        return cls(locations=points_from_json(raw["locations"]))


# --- Fetch outcomes ---

@dataclass(frozen=True)
class Success:
    """Fresh data straight from the network."""

    locations: list[Point]


@dataclass(frozen=True)
class SuccessWithFallback:
    """The network failed but a cached list was available."""

    cause: FetchError
    cached: list[Point]
    last_updated: datetime | None = field(default=None, compare=False)


@dataclass(frozen=True)
class Failure:
    """The network failed and nothing was cached."""

    cause: FetchError


FetchOutcome = Union[Success, SuccessWithFallback, Failure]
