"""TripSessionModel — the single in-memory record of telemetry and navigation.

All mutations go through the methods below and are serialized by one
re-entrant lock, so the periodic tick thread and request handlers never
interleave a write.  Readers only ever get frozen values or copies.
"""

from __future__ import annotations

import copy
import dataclasses
import itertools
import logging
import random
import threading
from collections.abc import Callable
from typing import Any

from mg4_dashboard.session.models import NavigationState, SessionState, TripStats
from mg4_dashboard.vehicle.connection import VehicleConnection
from mg4_dashboard.vehicle.models import TelemetrySnapshot
from mg4_dashboard.vehicle.sources import SimulatedSource

_logger = logging.getLogger(__name__)


class NavigationError(RuntimeError):
    """Navigation was started before any route was planned."""


class TripSessionModel:
    """Owns the current :class:`TelemetrySnapshot`, trip counters, planned
    route and :class:`NavigationState` for one dashboard session.

    Parameters
    ----------
    connection:
        Vehicle connection to read telemetry from.  When omitted a simulated
        connection is created (seeded from *rng*) and connected.
    rng:
        Random generator for the default simulated source.  Only valid
        without *connection*; seed the caller's source instead.
    tick_interval_s:
        Seconds between ticks; used to integrate trip distance from speed.

    Raises
    ------
    ValueError
        If both *connection* and *rng* are given.
    """

    def __init__(
        self,
        connection: VehicleConnection | None = None,
        rng: random.Random | None = None,
        tick_interval_s: float = 5.0,
    ) -> None:
        if connection is not None and rng is not None:
            raise ValueError("rng only seeds the default connection; pass one or the other")
        if connection is None:
            connection = VehicleConnection(SimulatedSource(rng))
            connection.connect()
        self._connection = connection
        self._interval = tick_interval_s
        self._lock = threading.RLock()
        self._telemetry = TelemetrySnapshot(is_connected=connection.is_connected)
        self._navigation = NavigationState()
        self._trip = TripStats()
        self._planned_route: dict[str, Any] | None = None
        self._tokens = itertools.count(1)
        self._latest_token = 0
        self._callbacks: list[Callable[[SessionState], None]] = []

    # ------------------------------------------------------------------
    # Read API
    # ------------------------------------------------------------------

    @property
    def telemetry(self) -> TelemetrySnapshot:
        return self._telemetry

    @property
    def navigation(self) -> NavigationState:
        with self._lock:
            return NavigationState(
                self._navigation.is_navigating,
                copy.deepcopy(self._navigation.active_route),
            )

    @property
    def connection(self) -> VehicleConnection:
        """The vehicle connection this session reads telemetry from."""
        return self._connection

    @property
    def trip(self) -> TripStats:
        return self._trip

    @property
    def planned_route(self) -> dict[str, Any] | None:
        with self._lock:
            return copy.deepcopy(self._planned_route)

    def state(self) -> SessionState:
        """Return a consistent projection of the whole session."""
        with self._lock:
            return SessionState(
                telemetry=self._telemetry,
                navigation=self.navigation,
                trip=self._trip,
                planned_route=self.planned_route,
                connection_type=self._connection.connection_type,
            )

    def register_callback(self, callback: Callable[[SessionState], None]) -> None:
        """Register *callback* to receive the new :class:`SessionState` after
        every mutation."""
        self._callbacks.append(callback)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def tick(self) -> TelemetrySnapshot:
        """Advance telemetry by one reading and return the new snapshot.

        A disconnected vehicle only clears ``is_connected``; a failed read is
        logged and leaves the snapshot as it was.
        """
        with self._lock:
            current = self._telemetry
            if not self._connection.is_connected:
                if current.is_connected:
                    self._telemetry = dataclasses.replace(current, is_connected=False)
                    self._notify()
                return self._telemetry

            try:
                reading = self._connection.read(current)
            except Exception as exc:
                _logger.warning("Telemetry read via %s failed: %s",
                                self._connection.connection_type, exc)
                return current
            if reading is None:
                return current

            reading = dataclasses.replace(reading, is_connected=True)
            self._telemetry = reading
            self._trip = dataclasses.replace(
                self._trip,
                distance_km=self._trip.distance_km
                + reading.location.speed_kmh * self._interval / 3600.0,
                battery_used_percent=self._trip.battery_used_percent
                + max(0.0, current.battery_percent - reading.battery_percent),
            )
            self._notify()
            return reading

    def begin_planning(self) -> int:
        """Issue a token for a route request about to be sent.

        Passing the token back to :meth:`plan_route` makes responses to
        superseded requests harmless.
        """
        with self._lock:
            self._latest_token = next(self._tokens)
            return self._latest_token

    def plan_route(self, route: dict[str, Any], token: int | None = None) -> bool:
        """Record *route* as the planned route without starting navigation.

        Returns False (and changes nothing) when *token* belongs to a request
        that has since been superseded.
        """
        with self._lock:
            if token is not None and token != self._latest_token:
                _logger.info("Discarding stale route response (token %d, latest %d)",
                             token, self._latest_token)
                return False
            self._planned_route = copy.deepcopy(route)
            self._notify()
            return True

    def start_navigation(self) -> NavigationState:
        """Start following the most recently planned route.

        Raises
        ------
        NavigationError
            If :meth:`plan_route` has never been called.
        """
        with self._lock:
            if self._planned_route is None:
                raise NavigationError("No route planned; call plan_route first")
            self._navigation = NavigationState(
                is_navigating=True,
                active_route=copy.deepcopy(self._planned_route),
            )
            _logger.info("Navigation started")
            self._notify()
            return self.navigation

    def stop_navigation(self) -> NavigationState:
        """Stop navigating and clear the active route."""
        with self._lock:
            self._navigation = NavigationState()
            _logger.info("Navigation stopped")
            self._notify()
            return self.navigation

    def reset_trip(self) -> TripStats:
        """Zero the trip counters and restart the trip clock."""
        with self._lock:
            self._trip = TripStats()
            _logger.info("Trip data reset")
            self._notify()
            return self._trip

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _notify(self) -> None:
        if not self._callbacks:
            return
        snapshot = self.state()
        for cb in self._callbacks:
            cb(snapshot)
