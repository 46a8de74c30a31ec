"""Placement Bounded Context - Domain Services.

PlacementSession owns the beacon, antenna and barrier collections of one
planning session and is the only component that mutates them. All methods
are synchronous and run to completion; hosts embedding a session in a
concurrent environment must serialize calls.

Id policy:
    Manual placements get ``beacon-<n>`` / ``antenna-<n>`` from a per-session
    monotonic counter. Auto placements get ``beacon-auto-<i>`` /
    ``antenna-auto-<i>`` numbered from 0 in grid order on every regeneration.
    Auto placement therefore yields identical ids for identical inputs, and
    the prefixes keep both schemes disjoint within a collection.

Only beacon mutations notify the observer; antennas and barriers have no
change callback.
"""

from __future__ import annotations

import itertools
import logging
import re
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from pydantic import ValidationError

from domain.coverage.services import compute_coverage
from domain.coverage.value_objects import Coverage
from domain.errors import InvalidParameterError
from domain.geometry.services import PolygonLike, as_barrier
from domain.geometry.value_objects import Barrier, Position
from domain.placement.ports import BeaconObserver
from domain.placement.value_objects import (
    Antenna,
    Area,
    Beacon,
    InteractionMode,
    PlacementConfig,
)
from domain.siting.services import generate_grid

logger = logging.getLogger(__name__)

BeaconCallback = Callable[[Sequence[Beacon]], None]

_MANUAL_BEACON_ID = re.compile(r"^beacon-(\d+)$")


def _next_manual_id(beacons: Sequence[Beacon]) -> int:
    """First manual counter value that cannot collide with restored ids.

    Raises:
        InvalidParameterError: If two restored beacons share an id
    """
    seen: set[str] = set()
    highest = 0
    for beacon in beacons:
        if beacon.id in seen:
            raise InvalidParameterError(
                "initial_beacons", beacon.id, "duplicate beacon id"
            )
        seen.add(beacon.id)
        match = _MANUAL_BEACON_ID.match(beacon.id)
        if match:
            highest = max(highest, int(match.group(1)))
    return highest + 1


def _resolve_observer(
    observer: BeaconObserver | BeaconCallback | None,
) -> BeaconCallback | None:
    """Accept either an object with ``notify`` or a plain callable."""
    if observer is None:
        return None
    notify = getattr(observer, "notify", None)
    if callable(notify):
        return notify
    return observer  # type: ignore[return-value]


class PlacementSession:
    """Mutable state of one placement session.

    Parameters
    ----------
    area: Area
        Physical extent covered by the scaled map image.
    config: PlacementConfig | None
        Initial parameters; defaults apply when omitted.
    observer: BeaconObserver | callable | None
        Receives the full beacon tuple after every beacon change. It is
        also called once at construction with the initial collection.
    initial_beacons: Iterable[Beacon]
        Beacons restored into the session at construction. Ids must be
        unique; manual numbering continues after the highest restored
        ``beacon-<n>``.
    """

    def __init__(
        self,
        area: Area,
        config: PlacementConfig | None = None,
        *,
        observer: BeaconObserver | BeaconCallback | None = None,
        initial_beacons: Iterable[Beacon] = (),
    ) -> None:
        self.area = area
        self._config = config or PlacementConfig()
        self._notify = _resolve_observer(observer)
        self._beacons: tuple[Beacon, ...] = tuple(initial_beacons)
        self._antennas: tuple[Antenna, ...] = ()
        self._barriers: tuple[Barrier, ...] = ()
        self._mode = InteractionMode.IDLE
        self._beacon_ids = itertools.count(_next_manual_id(self._beacons))
        self._antenna_ids = itertools.count(1)
        self._publish_beacons()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def config(self) -> PlacementConfig:
        return self._config

    @property
    def beacons(self) -> tuple[Beacon, ...]:
        return self._beacons

    @property
    def antennas(self) -> tuple[Antenna, ...]:
        return self._antennas

    @property
    def barriers(self) -> tuple[Barrier, ...]:
        return self._barriers

    @property
    def mode(self) -> InteractionMode:
        return self._mode

    @property
    def coverage(self) -> Coverage:
        """Coverage derived from the currently configured height and angle."""
        return compute_coverage(
            self._config.antenna_height_m, self._config.antenna_angle_deg
        )

    def barrier_snapshot(self) -> tuple[Barrier, ...]:
        """Current barrier set (ObstacleSource port)."""
        return self._barriers

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def configure(self, **changes: Any) -> PlacementConfig:
        """Update configuration fields and return the new configuration.

        Raises:
            InvalidParameterError: If a value is invalid or the field unknown
        """
        try:
            merged = {**self._config.model_dump(), **changes}
            self._config = PlacementConfig(**merged)
        except ValidationError as exc:
            error = exc.errors()[0]
            name = str(error["loc"][0]) if error["loc"] else "config"
            raise InvalidParameterError(name, changes.get(name), error["msg"]) from exc
        return self._config

    # ------------------------------------------------------------------
    # Beacons
    # ------------------------------------------------------------------
    def place_beacon_manually(
        self, position: Position, rssi_dbm: float | None = None
    ) -> Beacon:
        """Append a beacon at position; barriers are not consulted."""
        self._warn_outside_area("beacon", position)
        beacon = Beacon(
            id=f"beacon-{next(self._beacon_ids)}",
            position=position,
            rssi_dbm=rssi_dbm,
        )
        self._beacons = (*self._beacons, beacon)
        logger.debug("Placed beacon %s at %s", beacon.id, beacon.position)
        self._publish_beacons()
        return beacon

    def auto_place_beacons(
        self, step_m: float | None = None, rssi_dbm: float | None = None
    ) -> int:
        """Replace all beacons with a barrier-aware grid.

        Args:
            step_m: Grid spacing; defaults to config.beacon_step_m
            rssi_dbm: Declared RSSI for every beacon; defaults to config.rssi_dbm

        Returns:
            Number of beacons placed

        Raises:
            InvalidParameterError: If step_m is not a positive finite number
        """
        step = self._config.beacon_step_m if step_m is None else step_m
        rssi = self._config.rssi_dbm if rssi_dbm is None else rssi_dbm

        points = generate_grid(
            self.area.width_m, self.area.height_m, step, self._barriers
        )
        self._beacons = tuple(
            Beacon(id=f"beacon-auto-{i}", position=point, rssi_dbm=rssi)
            for i, point in enumerate(points)
        )
        self._mode = InteractionMode.IDLE
        logger.info(
            "Auto-placed %d beacons (step=%.2fm, %d barriers)",
            len(self._beacons),
            step,
            len(self._barriers),
        )
        self._publish_beacons()
        return len(self._beacons)

    def clear_beacons(self) -> None:
        self._beacons = ()
        logger.debug("Cleared beacons")
        self._publish_beacons()

    # ------------------------------------------------------------------
    # Antennas
    # ------------------------------------------------------------------
    def place_antenna_manually(
        self,
        position: Position,
        height_m: float | None = None,
        angle_deg: float | None = None,
    ) -> Antenna:
        """Append an antenna whose range is fixed from the height/angle in effect now.

        Raises:
            InvalidParameterError: If height is negative or angle outside [0, 360]
        """
        height = self._config.antenna_height_m if height_m is None else height_m
        angle = self._config.antenna_angle_deg if angle_deg is None else angle_deg
        coverage = compute_coverage(height, angle)
        self._warn_outside_area("antenna", position)

        antenna = Antenna(
            id=f"antenna-{next(self._antenna_ids)}",
            position=position,
            height_m=height,
            angle_deg=angle,
            range_m=coverage.range_m,
        )
        self._antennas = (*self._antennas, antenna)
        logger.debug(
            "Placed antenna %s at %s (range=%.2fm)",
            antenna.id,
            antenna.position,
            antenna.range_m,
        )
        return antenna

    def auto_place_antennas(
        self, height_m: float | None = None, angle_deg: float | None = None
    ) -> int:
        """Replace all antennas with a grid spaced by the derived coverage step.

        Returns:
            Number of antennas placed

        Raises:
            InvalidParameterError: If height is negative or angle outside [0, 360]
        """
        height = self._config.antenna_height_m if height_m is None else height_m
        angle = self._config.antenna_angle_deg if angle_deg is None else angle_deg
        coverage = compute_coverage(height, angle)

        points = generate_grid(
            self.area.width_m, self.area.height_m, coverage.step_m, self._barriers
        )
        self._antennas = tuple(
            Antenna(
                id=f"antenna-auto-{i}",
                position=point,
                height_m=height,
                angle_deg=angle,
                range_m=coverage.range_m,
            )
            for i, point in enumerate(points)
        )
        self._mode = InteractionMode.IDLE
        logger.info(
            "Auto-placed %d antennas (range=%.2fm, step=%.2fm, %d barriers)",
            len(self._antennas),
            coverage.range_m,
            coverage.step_m,
            len(self._barriers),
        )
        return len(self._antennas)

    def clear_antennas(self) -> None:
        self._antennas = ()
        logger.debug("Cleared antennas")

    # ------------------------------------------------------------------
    # Barriers
    # ------------------------------------------------------------------
    def add_barrier(self, barrier: PolygonLike) -> Barrier:
        """Publish a newly drawn barrier (ring or barrier model)."""
        added = as_barrier(barrier)
        self._barriers = (*self._barriers, added)
        logger.debug("Added %s barrier #%d", added.kind, len(self._barriers))
        return added

    def replace_barriers(self, barriers: Iterable[PolygonLike]) -> None:
        """Publish a complete barrier snapshot after interactive edits."""
        self._barriers = tuple(as_barrier(b) for b in barriers)

    def clear_barriers(self) -> None:
        self._barriers = ()
        logger.debug("Cleared barriers")

    # ------------------------------------------------------------------
    # Interaction modes
    # ------------------------------------------------------------------
    def toggle_mode(self, mode: InteractionMode | str) -> InteractionMode:
        """Enter mode, or return to IDLE if it is already active.

        Raises:
            InvalidParameterError: If mode is not a known interaction mode
        """
        try:
            mode = InteractionMode(mode)
        except ValueError as exc:
            raise InvalidParameterError(
                "mode", mode, "unknown interaction mode"
            ) from exc
        self._mode = InteractionMode.IDLE if self._mode == mode else mode
        return self._mode

    def handle_map_click(self, position: Position) -> Beacon | Antenna | None:
        """Dispatch a map click to manual placement according to the mode.

        Returns the placed entity, or None when the mode places nothing
        (IDLE, or DRAW_BARRIER where the drawing tool owns the click).
        """
        if self._mode is InteractionMode.PLACE_BEACON:
            return self.place_beacon_manually(position)
        if self._mode is InteractionMode.PLACE_ANTENNA:
            return self.place_antenna_manually(position)
        return None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _warn_outside_area(self, kind: str, position: Position) -> None:
        if not self.area.contains(position):
            logger.warning("Manual %s at %s lies outside the area", kind, position)

    def _publish_beacons(self) -> None:
        if self._notify is not None:
            self._notify(self._beacons)
