"""Siting Bounded Context.

Responsible for laying out candidate installation sites:
- Services: generate_grid (barrier-aware row-major grid), grid_axis
"""
