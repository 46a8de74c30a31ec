"""Beacon Planner Domain Layer.

This package contains the core placement logic organized by bounded contexts:
- geometry: Barrier shapes and point containment
- coverage: Antenna coverage radius derived from installation parameters
- siting: Barrier-aware grid generation of candidate sites
- placement: Planning session holding beacons, antennas and barriers
"""

# Imports alphabetized per project style (isort)
from domain import coverage, geometry, placement, siting

__all__ = ["coverage", "geometry", "placement", "siting"]
