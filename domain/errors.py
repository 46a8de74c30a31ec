"""Cross-context error hierarchy.

Every bounded context validates its inputs synchronously and raises one of
these errors. Nothing in the domain performs I/O, so all failures here are
deterministic and never retryable.
"""

from __future__ import annotations

from typing import Any


class PlannerError(Exception):
    """Base error for placement planning operations."""


class InvalidParameterError(PlannerError, ValueError):
    """A parameter is structurally invalid (non-positive step, negative height, ...).

    Attributes:
        name: Name of the offending parameter
        value: The rejected value
    """

    def __init__(self, name: str, value: Any, reason: str) -> None:
        self.name = name
        self.value = value
        super().__init__(f"Invalid {name}={value!r}: {reason}")
