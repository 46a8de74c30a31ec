"""Geometry Bounded Context - Value Objects.

Barriers are modeled as a tagged variant. Only polygons exist today; new
shapes add a model with their own ``kind`` literal and register a
containment function in ``domain.geometry.services``.

Coordinates are planar meters in the same space as the placement Area.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, field_validator

Position: TypeAlias = tuple[float, float]  # (x, y) in meters
Ring: TypeAlias = tuple[Position, ...]


class PolygonBarrier(BaseModel):
    """Exclusion zone bounded by a simple polygon (Value Object).

    The ring may repeat its first vertex at the end or not; both are
    accepted. Malformed rings (fewer than 3 distinct vertices, zero area)
    are still constructible; containment treats them as empty.
    """

    kind: Literal["polygon"] = "polygon"
    vertices: Ring

    model_config = ConfigDict(frozen=True)

    @field_validator("vertices", mode="before")
    @classmethod
    def coerce_vertices(cls, value: object) -> object:
        # Accept lists of lists or arrays from drawing tools
        if isinstance(value, Iterable) and not isinstance(value, str):
            return tuple(tuple(v) for v in value)
        return value


# Closed sum of barrier shapes; extend with ``PolygonBarrier | CircleBarrier``
Barrier: TypeAlias = PolygonBarrier
