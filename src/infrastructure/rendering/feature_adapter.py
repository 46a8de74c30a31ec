"""GeoJSON-like feature adapter for map renderers.

Converts a PlacementSession snapshot into a FeatureCollection dict with one
layer per entity type:

- beacons: Point features (``rssi_dbm`` property)
- antennas: Point features (``height_m``, ``angle_deg``, ``range_m``); the
  renderer draws a coverage circle of radius ``range_m`` around each point
- barriers: Polygon features with a closed exterior ring

The map view places the scaled image on an extent ``[0, 0, width, height]``
in EPSG:3857, so session coordinates are already projected meters. With
``geographic=True`` positions are reprojected to EPSG:4326 (lon, lat) using
pyproj; ``range_m`` stays in map meters.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from pyproj import Transformer

from domain.geometry.services import normalize_ring
from domain.geometry.value_objects import Barrier, Position
from domain.placement.services import PlacementSession
from domain.placement.value_objects import Antenna, Beacon

# Module-level logger (reused across all calls)
logger = logging.getLogger(__name__)

MAP_CRS = "EPSG:3857"
GEOGRAPHIC_CRS = "EPSG:4326"

LAYERS = ("beacons", "antennas", "barriers")


class FeatureCollectionAdapter:
    """Renderer adapter producing FeatureCollection dicts.

    Parameters
    ----------
    geographic: bool
        Reproject coordinates from EPSG:3857 meters to EPSG:4326 lon/lat.
    layers: Iterable[str]
        Visible layers; hidden layers are omitted from the output.
    """

    def __init__(
        self, geographic: bool = False, layers: Iterable[str] = LAYERS
    ) -> None:
        self.layers = frozenset(layers)
        unknown = self.layers - set(LAYERS)
        if unknown:
            raise ValueError(f"Unknown layers: {sorted(unknown)}")
        self.geographic = geographic
        # always_xy keeps (x, y) == (lon, lat) ordering on both sides
        self._transformer = (
            Transformer.from_crs(MAP_CRS, GEOGRAPHIC_CRS, always_xy=True)
            if geographic
            else None
        )

    @property
    def crs(self) -> str:
        return GEOGRAPHIC_CRS if self.geographic else MAP_CRS

    def to_feature_collection(self, session: PlacementSession) -> dict[str, Any]:
        """Render the session's current entities as a FeatureCollection."""
        features: list[dict[str, Any]] = []
        if "beacons" in self.layers:
            features.extend(self.beacon_feature(b) for b in session.beacons)
        if "antennas" in self.layers:
            features.extend(self.antenna_feature(a) for a in session.antennas)
        if "barriers" in self.layers:
            for index, barrier in enumerate(session.barriers):
                feature = self.barrier_feature(barrier, index)
                if feature is not None:
                    features.append(feature)

        logger.debug("Rendered %d features (%s)", len(features), self.crs)
        return {
            "type": "FeatureCollection",
            "crs": self.crs,
            "features": features,
        }

    # ------------------------------------------------------------------
    # Per-entity features
    # ------------------------------------------------------------------
    def beacon_feature(self, beacon: Beacon) -> dict[str, Any]:
        return {
            "type": "Feature",
            "id": beacon.id,
            "geometry": {
                "type": "Point",
                "coordinates": self._project(beacon.position),
            },
            "properties": {"layer": "beacons", "rssi_dbm": beacon.rssi_dbm},
        }

    def antenna_feature(self, antenna: Antenna) -> dict[str, Any]:
        return {
            "type": "Feature",
            "id": antenna.id,
            "geometry": {
                "type": "Point",
                "coordinates": self._project(antenna.position),
            },
            "properties": {
                "layer": "antennas",
                "height_m": antenna.height_m,
                "angle_deg": antenna.angle_deg,
                "range_m": antenna.range_m,
            },
        }

    def barrier_feature(self, barrier: Barrier, index: int) -> dict[str, Any] | None:
        """Polygon feature for a barrier, or None for an empty ring."""
        ring = normalize_ring(barrier.vertices)
        if len(ring) == 0:
            logger.debug("Skipping empty barrier #%d", index)
            return None
        coords = [self._project((float(x), float(y))) for x, y in ring]
        coords.append(coords[0])  # GeoJSON rings are explicitly closed
        return {
            "type": "Feature",
            "id": f"barrier-{index}",
            "geometry": {"type": "Polygon", "coordinates": [coords]},
            "properties": {"layer": "barriers", "kind": barrier.kind},
        }

    def _project(self, position: Position) -> list[float]:
        x, y = position
        if self._transformer is None:
            return [float(x), float(y)]
        lon, lat = self._transformer.transform(x, y)
        return [float(lon), float(lat)]
