"""Geometry Bounded Context.

Responsible for planar containment tests over barrier obstacles:
- Value Objects: PolygonBarrier (Barrier variant)
- Services: point_in_polygon, point_in_any_polygon, points_in_polygon
"""
