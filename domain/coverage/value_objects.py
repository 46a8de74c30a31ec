"""Coverage Bounded Context - Value Objects."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

MIN_RANGE_M = 10.0  # Floor on any antenna coverage radius
STEP_OVERLAP_RATIO = 0.75  # Re-tiling step as a fraction of the radius


class Coverage(BaseModel):
    """Antenna coverage radius and the grid step it implies (Value Object).

    The range is a declared planning parameter, not a simulated signal
    footprint.
    """

    range_m: float = Field(ge=MIN_RANGE_M)  # Coverage radius in meters
    step_m: float = Field(gt=0)  # Spacing between auto-placed antennas

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_step(self) -> "Coverage":
        expected = self.range_m * STEP_OVERLAP_RATIO
        if self.step_m != expected:
            raise ValueError(
                f"step_m ({self.step_m}) must equal {STEP_OVERLAP_RATIO} * range_m "
                f"({expected})"
            )
        return self
