"""Geometry Bounded Context - Domain Services.

Pure containment tests over barrier obstacles, backed by shapely. No side
effects.

Boundary policy: points lying on an edge or a vertex count as contained
(shapely ``intersects`` semantics). Degenerate rings (fewer than 3 distinct
vertices or zero area) never contain anything.

The scalar helpers delegate to the vectorized ``points_in_polygon`` so that a
single point and a whole candidate grid are always classified identically.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

import numpy as np
import shapely
from numpy.typing import ArrayLike, NDArray
from shapely.geometry import Polygon

from domain.geometry.value_objects import Barrier, PolygonBarrier, Position

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
AREA_TOLERANCE_M2 = 1e-12  # rings with smaller area are degenerate

PolygonLike = Barrier | Sequence[Position]


# ---------------------------------------------------------------------------
# Ring helpers
# ---------------------------------------------------------------------------
def normalize_ring(polygon: Sequence[Position] | ArrayLike) -> NDArray[np.float64]:
    """Return the ring as an (n, 2) float array without a duplicated closing vertex."""
    ring = np.asarray(polygon, dtype=np.float64).reshape(-1, 2)
    if len(ring) > 1 and np.array_equal(ring[0], ring[-1]):
        ring = ring[:-1]
    return ring


def to_shape(polygon: Sequence[Position] | ArrayLike) -> Polygon | None:
    """Build a prepared shapely Polygon, or None if the ring is degenerate."""
    ring = normalize_ring(polygon)
    if len(ring) < 3:
        return None
    shape = Polygon(ring)
    if shape.area <= AREA_TOLERANCE_M2:
        return None
    shapely.prepare(shape)
    return shape


def is_degenerate(polygon: Sequence[Position] | ArrayLike) -> bool:
    """True if the ring cannot enclose any point."""
    return to_shape(polygon) is None


def polygon_bounds(
    polygon: Sequence[Position] | ArrayLike,
) -> tuple[float, float, float, float]:
    """Return (min_x, min_y, max_x, max_y).

    Raises:
        ValueError: If the ring is degenerate
    """
    shape = to_shape(polygon)
    if shape is None:
        raise ValueError("Cannot compute bounds of a degenerate ring")
    return tuple(float(v) for v in shape.bounds)  # type: ignore[return-value]


# ---------------------------------------------------------------------------
# Vectorized containment
# ---------------------------------------------------------------------------
def _shape_mask(
    shape: Polygon | None, xs: ArrayLike, ys: ArrayLike
) -> NDArray[np.bool_]:
    px, py = np.broadcast_arrays(
        np.asarray(xs, dtype=np.float64), np.asarray(ys, dtype=np.float64)
    )
    if shape is None:
        return np.zeros(px.shape, dtype=bool)
    return np.asarray(shapely.intersects_xy(shape, px, py), dtype=bool)


def points_in_polygon(
    xs: ArrayLike, ys: ArrayLike, polygon: Sequence[Position] | ArrayLike
) -> NDArray[np.bool_]:
    """Containment mask for many points against one polygon.

    Args:
        xs: x coordinates (any shape broadcastable with ys)
        ys: y coordinates
        polygon: Ordered ring of vertices

    Returns:
        Boolean array, True where the point is inside or on the boundary.
    """
    return _shape_mask(to_shape(polygon), xs, ys)


def point_in_polygon(point: Position, polygon: Sequence[Position] | ArrayLike) -> bool:
    """True if point lies inside the polygon or on its boundary."""
    x, y = point
    return bool(points_in_polygon([x], [y], polygon)[0])


# ---------------------------------------------------------------------------
# Barrier dispatch
# ---------------------------------------------------------------------------
def _polygon_shape(barrier: PolygonBarrier) -> Polygon | None:
    return to_shape(barrier.vertices)


# kind -> shapely geometry builder (None for shapes that contain nothing)
_SHAPES: dict[str, Callable[..., Polygon | None]] = {
    "polygon": _polygon_shape,
}


def as_barrier(obstacle: PolygonLike) -> Barrier:
    """Coerce a raw vertex sequence into a PolygonBarrier; barriers pass through."""
    if isinstance(obstacle, PolygonBarrier):
        return obstacle
    return PolygonBarrier(vertices=obstacle)


def barrier_shape(barrier: Barrier) -> Polygon | None:
    """Shapely geometry for the barrier, dispatched on its kind tag."""
    return _SHAPES[barrier.kind](barrier)


def barrier_mask(barrier: Barrier, xs: ArrayLike, ys: ArrayLike) -> NDArray[np.bool_]:
    """Vectorized containment dispatched on the barrier's kind tag."""
    return _shape_mask(barrier_shape(barrier), xs, ys)


def barrier_bounds(barrier: Barrier) -> tuple[float, float, float, float] | None:
    """Bounding box of the barrier, or None if it cannot contain anything."""
    shape = barrier_shape(barrier)
    if shape is None:
        return None
    return tuple(float(v) for v in shape.bounds)  # type: ignore[return-value]


def barrier_contains(barrier: Barrier, point: Position) -> bool:
    """True if point lies inside the barrier or on its boundary."""
    x, y = point
    return bool(barrier_mask(barrier, [x], [y])[0])


def point_in_any_polygon(point: Position, polygons: Iterable[PolygonLike]) -> bool:
    """True if point is contained in at least one obstacle.

    Stops at the first containing obstacle.
    """
    return any(barrier_contains(as_barrier(p), point) for p in polygons)
