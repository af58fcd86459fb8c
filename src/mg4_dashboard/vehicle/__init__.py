"""Vehicle data integration.

Public API
----------
TelemetrySnapshot   - one immutable reading of the vehicle
VehicleConnection   - owns a telemetry source, tracks connection state
TelemetrySource     - transport interface (simulation, api, obd, can)
make_source         - build a source by kind name
"""

from mg4_dashboard.vehicle.connection import VehicleConnection
from mg4_dashboard.vehicle.models import Location, Temperatures, TelemetrySnapshot, TirePressure
from mg4_dashboard.vehicle.sources import (
    ApiPollingSource,
    CanBusSource,
    ObdSource,
    SimulatedSource,
    SourceError,
    TelemetrySource,
    make_source,
    parse_api_status,
)

__all__ = [
    "ApiPollingSource",
    "CanBusSource",
    "Location",
    "ObdSource",
    "SimulatedSource",
    "SourceError",
    "TelemetrySnapshot",
    "TelemetrySource",
    "Temperatures",
    "TirePressure",
    "VehicleConnection",
    "make_source",
    "parse_api_status",
]
