"""Placement Bounded Context.

Responsible for the mutable planning session:
- Value Objects: Area, Beacon, Antenna, PlacementConfig, InteractionMode
- Ports: BeaconObserver, ObstacleSource
- Services: PlacementSession
"""
