"""VehicleConnection — owns one telemetry source and tracks connection state."""

from __future__ import annotations

import logging
from collections.abc import Callable

from mg4_dashboard.vehicle.models import TelemetrySnapshot
from mg4_dashboard.vehicle.sources import SimulatedSource, TelemetrySource

_logger = logging.getLogger(__name__)


class VehicleConnection:
    """Manages the link to the vehicle through a single telemetry source.

    Parameters
    ----------
    source:
        The transport to read from.  Defaults to :class:`SimulatedSource`.
        Constructed by the caller and passed in, so tests and the web app
        each own their own connection.
    """

    def __init__(self, source: TelemetrySource | None = None) -> None:
        self._source = source if source is not None else SimulatedSource()
        self._connected: bool = False
        self._callbacks: list[Callable[[bool], None]] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def is_connected(self) -> bool:
        """True when the source has successfully connected."""
        return self._connected

    @property
    def connection_type(self) -> str:
        return self._source.kind

    def connect(self) -> bool:
        """Open the source.

        Returns
        -------
        bool
            True if the source connected.  False otherwise (never raises).
        """
        try:
            self._source.connect()
            connected = True
        except Exception as exc:
            _logger.warning("MG4 connection via %s failed: %s", self.connection_type, exc)
            connected = False
        else:
            _logger.info("MG4 connected via %s", self.connection_type)

        self._set_state(connected)
        return self._connected

    def disconnect(self) -> None:
        """Close the source and notify callbacks.

        The connection reports disconnected even when ``close()`` raises;
        the error still propagates.
        """
        try:
            self._source.close()
        finally:
            if self._connected:
                _logger.info("MG4 disconnected")
            self._set_state(False)

    def read(self, current: TelemetrySnapshot) -> TelemetrySnapshot | None:
        """Read the next snapshot; ``None`` when disconnected or no new data.

        Source errors propagate.
        """
        if not self._connected:
            return None
        return self._source.read(current)

    def register_callback(self, callback: Callable[[bool], None]) -> None:
        """Register *callback* to be called whenever connection state changes.

        The callback receives a single bool argument: True = connected,
        False = disconnected.
        """
        self._callbacks.append(callback)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _set_state(self, state: bool) -> None:
        if state != self._connected:
            self._connected = state
            for cb in self._callbacks:
                cb(state)
