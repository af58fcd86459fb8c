"""Trip session data models."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from mg4_dashboard.vehicle.models import TelemetrySnapshot


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class NavigationState:
    """Whether a route is being followed, and which one.

    ``active_route`` is ``None`` exactly when ``is_navigating`` is False.
    """

    is_navigating: bool = False
    active_route: dict[str, Any] | None = None


@dataclass(frozen=True)
class TripStats:
    """Trip-scoped counters, zeroed by ``reset_trip``."""

    distance_km: float = 0.0
    battery_used_percent: float = 0.0
    started_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class SessionState:
    """Read-only projection of a :class:`TripSessionModel`.

    Route documents are copies; mutating them does not affect the session.
    """

    telemetry: TelemetrySnapshot
    navigation: NavigationState
    trip: TripStats
    planned_route: dict[str, Any] | None
    connection_type: str

    def to_dict(self) -> dict:
        """Return a dict (recursive via :func:`dataclasses.asdict`)."""
        return dataclasses.asdict(self)
