"""Root pytest configuration for all tests.

Shared fixtures for the placement domain. Domain objects are constructed
directly; no I/O is involved anywhere in the suite.
"""

from __future__ import annotations

import pytest

from domain.geometry.value_objects import PolygonBarrier
from domain.placement.services import PlacementSession
from domain.placement.value_objects import Area

# West half of a 100 x 100 area: x in [0, 50]
WEST_HALF_RING = ((0.0, 0.0), (50.0, 0.0), (50.0, 100.0), (0.0, 100.0))


@pytest.fixture
def square_area() -> Area:
    """100 m x 100 m placement area."""
    return Area(width_m=100.0, height_m=100.0)


@pytest.fixture
def west_half_barrier() -> PolygonBarrier:
    """Barrier covering x in [0, 50] of the square area."""
    return PolygonBarrier(vertices=WEST_HALF_RING)


@pytest.fixture
def session(square_area: Area) -> PlacementSession:
    """Fresh session over the square area with default configuration."""
    return PlacementSession(square_area)
