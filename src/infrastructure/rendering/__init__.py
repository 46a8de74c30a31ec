"""Infrastructure adapters for the map renderer.

This module converts placement session state into GeoJSON-like feature
collections that a 2D map library can draw.
"""

from .feature_adapter import FeatureCollectionAdapter

__all__ = ["FeatureCollectionAdapter"]
