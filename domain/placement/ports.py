"""Domain Port(s) for the placement session.

Interfaces (Protocols) for the collaborators around the session. No concrete
rendering or UI here.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from domain.geometry.value_objects import Barrier
from domain.placement.value_objects import Beacon


@runtime_checkable
class BeaconObserver(Protocol):
    """Sink notified with the full beacon collection after every change."""

    def notify(self, beacons: Sequence[Beacon]) -> None:
        ...


@runtime_checkable
class ObstacleSource(Protocol):
    """Supplies a consistent, read-only barrier snapshot on demand."""

    def barrier_snapshot(self) -> Sequence[Barrier]:
        ...
