"""Coverage Bounded Context - Domain Services.

Heuristic coupling between antenna mounting and coverage radius:

    range = max(10, 5 + 2 * height + (angle / 360) * 5)
    step  = 0.75 * range

Height contributes linearly; a full 360 degree sweep adds at most 5 m. The
0.75 ratio makes neighbouring coverage circles overlap on the placement grid.
"""

from __future__ import annotations

import math

from domain.coverage.value_objects import MIN_RANGE_M, STEP_OVERLAP_RATIO, Coverage
from domain.errors import InvalidParameterError

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
BASE_RANGE_M = 5.0
HEIGHT_GAIN = 2.0  # meters of range per meter of mounting height
FULL_SWEEP_BONUS_M = 5.0  # bonus for angle == 360
MAX_ANGLE_DEG = 360.0


def validate_height(height_m: float) -> float:
    """Return height_m as float or raise InvalidParameterError."""
    if not math.isfinite(height_m) or height_m < 0:
        raise InvalidParameterError("height_m", height_m, "must be a finite value >= 0")
    return float(height_m)


def validate_angle(angle_deg: float) -> float:
    """Return angle_deg as float or raise InvalidParameterError."""
    if not math.isfinite(angle_deg) or not (0 <= angle_deg <= MAX_ANGLE_DEG):
        raise InvalidParameterError(
            "angle_deg", angle_deg, f"must be within [0, {MAX_ANGLE_DEG:g}]"
        )
    return float(angle_deg)


def coverage_range(height_m: float, angle_deg: float) -> float:
    """Coverage radius in meters for a mounting height and sweep angle.

    Raises:
        InvalidParameterError: If height is negative or angle outside [0, 360]
    """
    height_m = validate_height(height_m)
    angle_deg = validate_angle(angle_deg)
    raw = (
        BASE_RANGE_M
        + HEIGHT_GAIN * height_m
        + (angle_deg / MAX_ANGLE_DEG) * FULL_SWEEP_BONUS_M
    )
    return max(MIN_RANGE_M, raw)


def compute_coverage(height_m: float, angle_deg: float) -> Coverage:
    """Derive coverage radius and antenna re-tiling step.

    Args:
        height_m: Mounting height in meters (>= 0)
        angle_deg: Operating angle in degrees ([0, 360])

    Returns:
        Coverage with range_m >= 10 and step_m == 0.75 * range_m

    Raises:
        InvalidParameterError: If height is negative or angle outside [0, 360]

    Example:
        >>> compute_coverage(2, 0)
        Coverage(range_m=10.0, step_m=7.5)
    """
    range_m = coverage_range(height_m, angle_deg)
    return Coverage(range_m=range_m, step_m=range_m * STEP_OVERLAP_RATIO)
