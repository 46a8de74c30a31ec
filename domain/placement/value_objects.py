"""Placement Bounded Context - Value Objects.

Immutable entities materialized by the placement session. Validation occurs
at construction time via Pydantic.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from domain.coverage.value_objects import MIN_RANGE_M
from domain.geometry.value_objects import Position

# ---------------------------------------------------------------------------
# Configuration defaults
# ---------------------------------------------------------------------------
DEFAULT_RSSI_DBM = -70.0
DEFAULT_BEACON_STEP_M = 5.0
DEFAULT_ANTENNA_HEIGHT_M = 2.0
DEFAULT_ANTENNA_ANGLE_DEG = 0.0


class Area(BaseModel):
    """Rectangle ``[0, 0] x [width_m, height_m]`` in meters (Value Object)."""

    width_m: float = Field(ge=0)
    height_m: float = Field(ge=0)

    model_config = ConfigDict(frozen=True)

    def contains(self, position: Position) -> bool:
        """True if position lies within the area (inclusive)."""
        x, y = position
        return 0 <= x <= self.width_m and 0 <= y <= self.height_m


class Beacon(BaseModel):
    """Radio beacon at a fixed position (Entity, immutable)."""

    id: str
    position: Position
    rssi_dbm: float | None = None  # Declared signal strength, not measured

    model_config = ConfigDict(frozen=True)


class Antenna(BaseModel):
    """Antenna with a coverage radius captured at creation time (Entity, immutable).

    range_m is never recomputed when the session configuration changes later.
    """

    id: str
    position: Position
    height_m: float = Field(ge=0)
    angle_deg: float = Field(ge=0, le=360)
    range_m: float = Field(ge=MIN_RANGE_M)

    model_config = ConfigDict(frozen=True)


class PlacementConfig(BaseModel):
    """UI-sourced placement parameters.

    The recognized UI ranges (rssi roughly [-100, -30] dBm, beacon step
    roughly [1, 50] m) are not enforced here; only structurally invalid
    values are rejected.
    """

    rssi_dbm: float = DEFAULT_RSSI_DBM
    beacon_step_m: float = Field(
        default=DEFAULT_BEACON_STEP_M, gt=0, allow_inf_nan=False
    )
    antenna_height_m: float = Field(
        default=DEFAULT_ANTENNA_HEIGHT_M, ge=0, allow_inf_nan=False
    )
    antenna_angle_deg: float = Field(
        default=DEFAULT_ANTENNA_ANGLE_DEG, ge=0, le=360, allow_inf_nan=False
    )

    model_config = ConfigDict(frozen=True, extra="forbid")


class InteractionMode(str, Enum):
    """Mutually exclusive map interaction modes."""

    IDLE = "idle"
    PLACE_BEACON = "place_beacon"
    PLACE_ANTENNA = "place_antenna"
    DRAW_BARRIER = "draw_barrier"
