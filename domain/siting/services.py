"""Siting Bounded Context - Domain Services.

Grid placement engine. Candidates are laid out at ``step/2, 3*step/2, ...``
along each axis (strictly below the area size) and visited row-major: the
outer loop runs over y, the inner over x. Callers assign sequential ids in
this order, so the ordering is part of the contract.

A candidate is kept iff no obstacle contains it (boundary inclusive, see
``domain.geometry.services``).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

import numpy as np
import shapely
from numpy.typing import NDArray

from domain.errors import InvalidParameterError
from domain.geometry.services import PolygonLike, as_barrier, barrier_shape
from domain.geometry.value_objects import Position

logger = logging.getLogger(__name__)


def validate_step(step: float) -> float:
    """Return step as float or raise InvalidParameterError."""
    if not math.isfinite(step) or step <= 0:
        raise InvalidParameterError("step", step, "must be a finite value > 0")
    return float(step)


def grid_axis(limit: float, step: float) -> NDArray[np.float64]:
    """Candidate coordinates ``step/2 + k*step`` strictly below limit.

    Returns an empty array when limit <= 0.

    Raises:
        InvalidParameterError: If step is not a positive finite number
    """
    step = validate_step(step)
    if limit <= 0:
        return np.empty(0, dtype=np.float64)
    axis = np.arange(step / 2, limit, step, dtype=np.float64)
    # arange may overshoot the stop by one element on float rounding
    return axis[axis < limit]


def generate_grid(
    area_width: float,
    area_height: float,
    step: float,
    obstacles: Iterable[PolygonLike] = (),
) -> list[Position]:
    """Admissible grid points over ``[0, area_width) x [0, area_height)``.

    Args:
        area_width: Area size along x in meters
        area_height: Area size along y in meters
        step: Grid spacing in meters (> 0)
        obstacles: Barrier snapshot; barriers or raw vertex rings

    Returns:
        Row-major list of (x, y) tuples not contained in any obstacle.
        Empty if either area dimension is <= 0.

    Raises:
        InvalidParameterError: If step is not a positive finite number

    Example:
        >>> points = generate_grid(100, 100, 10)
        >>> len(points), points[0], points[-1]
        (100, (5.0, 5.0), (95.0, 95.0))
    """
    xs_axis = grid_axis(area_width, step)
    ys_axis = grid_axis(area_height, step)
    if xs_axis.size == 0 or ys_axis.size == 0:
        return []

    # indexing="xy" -> rows follow y, columns follow x; ravel() is row-major
    xs, ys = np.meshgrid(xs_axis, ys_axis, indexing="xy")
    xs = xs.ravel()
    ys = ys.ravel()
    blocked = np.zeros(xs.shape, dtype=bool)

    for obstacle in obstacles:
        barrier = as_barrier(obstacle)
        shape = barrier_shape(barrier)
        if shape is None:
            logger.debug("Skipping degenerate %s barrier", barrier.kind)
            continue

        # Bounding-box pre-filter; only the remaining unblocked candidates
        # inside the box go through the full containment test
        min_x, min_y, max_x, max_y = shape.bounds
        candidates = (
            ~blocked
            & (xs >= min_x)
            & (xs <= max_x)
            & (ys >= min_y)
            & (ys <= max_y)
        )
        if not candidates.any():
            continue
        idx = np.flatnonzero(candidates)
        blocked[idx] = shapely.intersects_xy(shape, xs[idx], ys[idx])

    keep = ~blocked
    return list(zip(xs[keep].tolist(), ys[keep].tolist()))
