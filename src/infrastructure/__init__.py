"""Infrastructure adapters for the beacon planner."""
