"""Telemetry sources — the transports a :class:`VehicleConnection` can use.

Every source exposes the same three calls:

``connect()``
    Open the transport.  Raises on failure.
``read(current)``
    Return the next :class:`TelemetrySnapshot`, built on top of *current*
    for any field the transport does not report, or ``None`` when no new
    data is available.
``close()``
    Release the transport.

Only the simulated and HTTP-polling sources are functional.  The OBD-II and
CAN variants are placeholders until hardware adapters exist.
"""

from __future__ import annotations

import dataclasses
import logging
import os
import random
from typing import Any

import requests

from mg4_dashboard.vehicle.models import TelemetrySnapshot

_logger = logging.getLogger(__name__)

BATTERY_FLOOR_PERCENT = 10.0
RANGE_FLOOR_KM = 50.0
EFFICIENCY_BASELINE = 4.2


class SourceError(Exception):
    """A telemetry transport could not connect or read."""


class TelemetrySource:
    """Base class for telemetry transports."""

    kind: str = "base"

    def connect(self) -> None:
        raise NotImplementedError

    def read(self, current: TelemetrySnapshot) -> TelemetrySnapshot | None:
        raise NotImplementedError

    def close(self) -> None:
        """Release the transport. No-op by default."""


# ---------------------------------------------------------------------------
# Simulation
# ---------------------------------------------------------------------------


class SimulatedSource(TelemetrySource):
    """Bounded random walk around the current snapshot.

    Battery and range only ever decrease and never drop below their floors;
    efficiency jitters ±0.1 around 4.2 km/kWh; heading drifts clockwise by up
    to 2° per read and speed by ±1 km/h.

    Parameters
    ----------
    rng:
        Random generator; pass a seeded ``random.Random`` for reproducible
        runs.
    """

    kind = "simulation"

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def connect(self) -> None:
        _logger.info("Starting MG4 simulation mode")

    def read(self, current: TelemetrySnapshot) -> TelemetrySnapshot:
        r = self._rng.random
        loc = current.location
        location = dataclasses.replace(
            loc,
            heading_deg=(loc.heading_deg + r() * 2.0) % 360.0,
            speed_kmh=max(0.0, loc.speed_kmh + (r() - 0.5) * 2.0),
        )
        return dataclasses.replace(
            current,
            battery_percent=max(BATTERY_FLOOR_PERCENT, current.battery_percent - r() * 0.1),
            range_km=max(RANGE_FLOOR_KM, current.range_km - r() * 0.5),
            efficiency_km_per_kwh=EFFICIENCY_BASELINE + (r() - 0.5) * 0.2,
            location=location,
        )


# ---------------------------------------------------------------------------
# Vehicle HTTP API polling
# ---------------------------------------------------------------------------


def parse_api_status(data: dict[str, Any], current: TelemetrySnapshot) -> TelemetrySnapshot:
    """Map a ``/vehicle/status`` payload onto *current*.

    Fields missing from the payload keep their current value.
    """
    battery = data.get("battery") or {}
    performance = data.get("performance") or {}
    loc = data.get("location") or {}

    def pick(section: dict[str, Any], key: str, default: float) -> float:
        value = section.get(key)
        return default if value is None else float(value)

    location = dataclasses.replace(
        current.location,
        lat=pick(loc, "lat", current.location.lat),
        lng=pick(loc, "lng", current.location.lng),
        heading_deg=pick(loc, "heading", current.location.heading_deg) % 360.0,
        speed_kmh=max(0.0, pick(performance, "speed", current.location.speed_kmh)),
    )
    temperature = dataclasses.replace(
        current.temperature_c,
        battery=pick(battery, "temperature", current.temperature_c.battery),
    )
    return dataclasses.replace(
        current,
        battery_percent=min(100.0, max(0.0, pick(battery, "level", current.battery_percent))),
        range_km=max(0.0, pick(battery, "range", current.range_km)),
        efficiency_km_per_kwh=pick(performance, "efficiency", current.efficiency_km_per_kwh),
        location=location,
        temperature_c=temperature,
    )


class ApiPollingSource(TelemetrySource):
    """Polls the vehicle's cloud API for its status.

    Parameters
    ----------
    base_url:
        API root; falls back to the ``MG4_API_URL`` environment variable.
    token:
        Bearer token; falls back to ``MG4_API_TOKEN``.
    session:
        ``requests.Session`` to send through; injected in tests.
    timeout:
        Request timeout in seconds.
    """

    kind = "api"

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        session: requests.Session | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._base_url = (base_url or os.environ.get("MG4_API_URL", "")).rstrip("/")
        self._token = token or os.environ.get("MG4_API_TOKEN", "")
        self._session = session or requests.Session()
        self._timeout = timeout

    def connect(self) -> None:
        if not self._base_url or not self._token:
            raise SourceError("MG4 API credentials not configured")
        response = self._get_status()
        if not response.ok:
            raise SourceError(f"API request failed: {response.status_code}")

    def read(self, current: TelemetrySnapshot) -> TelemetrySnapshot | None:
        response = self._get_status()
        if not response.ok:
            _logger.warning("MG4 API polling returned HTTP %d", response.status_code)
            return None
        return parse_api_status(response.json(), current)

    def close(self) -> None:
        self._session.close()

    def _get_status(self) -> requests.Response:
        return self._session.get(
            f"{self._base_url}/vehicle/status",
            headers={
                "Authorization": f"Bearer {self._token}",
                "Content-Type": "application/json",
            },
            timeout=self._timeout,
        )


# ---------------------------------------------------------------------------
# Hardware placeholders
# ---------------------------------------------------------------------------


class ObdSource(TelemetrySource):
    """OBD-II adapter. Placeholder until a PID decoder is written."""

    kind = "obd"

    def connect(self) -> None:
        raise NotImplementedError("OBD-II telemetry is not implemented")

    def read(self, current: TelemetrySnapshot) -> TelemetrySnapshot | None:
        raise NotImplementedError("OBD-II telemetry is not implemented")


class CanBusSource(TelemetrySource):
    """CAN bus reader. Placeholder until the MG4 message map is known."""

    kind = "can"

    def connect(self) -> None:
        raise NotImplementedError("CAN bus telemetry is not implemented")

    def read(self, current: TelemetrySnapshot) -> TelemetrySnapshot | None:
        raise NotImplementedError("CAN bus telemetry is not implemented")


_SOURCES: dict[str, type[TelemetrySource]] = {
    SimulatedSource.kind: SimulatedSource,
    ApiPollingSource.kind: ApiPollingSource,
    ObdSource.kind: ObdSource,
    CanBusSource.kind: CanBusSource,
}


def make_source(kind: str = "simulation", **kwargs: Any) -> TelemetrySource:
    """Construct the telemetry source registered under *kind*.

    Raises
    ------
    ValueError
        If *kind* is not one of ``simulation``, ``api``, ``obd``, ``can``.
    """
    try:
        cls = _SOURCES[kind]
    except KeyError:
        raise ValueError(
            f"Unknown telemetry source {kind!r}; expected one of {sorted(_SOURCES)}"
        ) from None
    return cls(**kwargs)
