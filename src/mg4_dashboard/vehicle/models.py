"""Vehicle telemetry data models."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Location:
    lat: float = 51.5074
    lng: float = -0.1278
    heading_deg: float = 0.0
    """Compass heading in degrees [0, 360)."""

    speed_kmh: float = 0.0
    """Ground speed in km/h. Clamped to >= 0."""


@dataclass(frozen=True)
class TirePressure:
    """Tyre pressures in bar."""

    front_left: float = 2.4
    front_right: float = 2.4
    rear_left: float = 2.3
    rear_right: float = 2.3


@dataclass(frozen=True)
class Temperatures:
    """Temperatures in degrees Celsius."""

    cabin: float = 22.0
    battery: float = 18.0
    motor: float = 45.0


@dataclass(frozen=True)
class TelemetrySnapshot:
    """One point-in-time reading of the vehicle.

    Defaults are the seed values a session starts from.  Instances are
    immutable; a new snapshot replaces the old one on every update.
    """

    battery_percent: float = 85.0
    """State of charge [0, 100]."""

    range_km: float = 245.0
    """Estimated remaining range. Clamped to >= 0."""

    efficiency_km_per_kwh: float = 4.2
    is_connected: bool = True
    location: Location = field(default_factory=Location)
    tire_pressure_bar: TirePressure = field(default_factory=TirePressure)
    temperature_c: Temperatures = field(default_factory=Temperatures)

    def to_dict(self) -> dict:
        """Return a JSON-serializable dict (recursive via :func:`dataclasses.asdict`)."""
        return dataclasses.asdict(self)
