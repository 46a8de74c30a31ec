"""Tests for the antenna coverage model (compute_coverage).

range = max(10, 5 + 2*height + angle/360*5); step = 0.75 * range
"""

from __future__ import annotations

import math

import pytest

from domain.coverage.services import compute_coverage, coverage_range
from domain.coverage.value_objects import MIN_RANGE_M, Coverage
from domain.errors import InvalidParameterError


# ===========================================================================
# Reference values
# ===========================================================================
def test_default_parameters_hit_range_floor():
    """height=2, angle=0: raw range 9 is floored to 10, step 7.5."""
    coverage = compute_coverage(2, 0)

    assert coverage.range_m == 10.0
    assert coverage.step_m == 7.5


@pytest.mark.parametrize(
    "height, angle, expected_range",
    [
        (0, 0, 10.0),  # floor
        (2.5, 0, 10.0),  # exactly 10
        (3, 0, 11.0),
        (3, 360, 16.0),  # full sweep bonus
        (10, 180, 27.5),
        (0, 360, 10.0),  # 5 + 5 == floor
    ],
)
def test_range_formula(height, angle, expected_range):
    coverage = compute_coverage(height, angle)

    assert coverage.range_m == pytest.approx(expected_range)
    assert coverage_range(height, angle) == coverage.range_m


def test_range_never_below_floor_and_step_ratio_exact():
    for height in [0, 0.1, 1, 2, 2.49, 5, 50]:
        for angle in [0, 1, 45, 90, 180, 270, 359.9, 360]:
            coverage = compute_coverage(height, angle)
            assert coverage.range_m >= MIN_RANGE_M
            assert coverage.step_m == 0.75 * coverage.range_m


def test_compute_coverage_returns_frozen_value_object():
    coverage = compute_coverage(4, 90)

    assert isinstance(coverage, Coverage)
    with pytest.raises(Exception):
        coverage.range_m = 1.0  # type: ignore[misc]


# ===========================================================================
# Invalid parameters
# ===========================================================================
@pytest.mark.parametrize("height", [-0.1, -5, math.nan, math.inf])
def test_invalid_height_rejected(height):
    with pytest.raises(InvalidParameterError) as exc_info:
        compute_coverage(height, 0)

    assert exc_info.value.name == "height_m"


@pytest.mark.parametrize("angle", [-1, 360.5, 720, math.nan])
def test_invalid_angle_rejected(angle):
    with pytest.raises(InvalidParameterError) as exc_info:
        compute_coverage(2, angle)

    assert exc_info.value.name == "angle_deg"


def test_invalid_parameter_error_is_value_error():
    with pytest.raises(ValueError):
        compute_coverage(-1, 0)


def test_coverage_rejects_inconsistent_step():
    with pytest.raises(ValueError):
        Coverage(range_m=10.0, step_m=5.0)
