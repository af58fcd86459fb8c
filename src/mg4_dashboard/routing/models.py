"""Trip request model for the routing gateway."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from mg4_dashboard.routing.errors import InvalidTripRequest

DEFAULT_CONSUMPTION = "15.0"
DEFAULT_INITIAL_CHARGE = "60"
DEFAULT_MAX_CHARGE = "80"
DEFAULT_CONNECTOR_TYPES = "iec62196Type2Combo,iec62196Type2_AC"
# (0-60 % at 50 kW; 60-80 % at 40 kW; 80-100 % at 25 kW)
DEFAULT_CHARGING_CURVE = "0,60,50;60,80,40;80,100,25"
DEFAULT_MAX_CHARGE_AFTER_STATION = "80"


def _as_param(value: Any) -> str | None:
    """Render a request value as a query-string literal.

    ``None`` and empty strings count as absent.  Whole floats lose their
    trailing ``.0`` and lists are comma-joined, matching what a browser
    client sends for the same JSON body.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        value = ",".join(str(v) for v in value)
    text = str(value)
    return text if text != "" else None


@dataclass(frozen=True)
class TripRequest:
    """A route-planning request with EV tuning parameters.

    Optional fields hold ``None`` when the caller did not send them; the
    provider defaults are resolved by the ``effective_*`` properties so the
    request still records what the caller actually asked for.
    """

    origin: str
    destination: str
    consumption: str | None = None
    ev_consumption: str | None = None
    initial_charge: str | None = None
    max_charge: str | None = None
    connector_types: str | None = None
    charging_curve: str | None = None
    max_charge_after_station: str | None = None

    def __post_init__(self) -> None:
        if not (self.origin or "").strip() or not (self.destination or "").strip():
            raise InvalidTripRequest()
        object.__setattr__(self, "origin", self.origin.strip())
        object.__setattr__(self, "destination", self.destination.strip())

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> TripRequest:
        """Build a request from query-string or JSON-body parameters.

        Raises:
            InvalidTripRequest: origin or destination missing or blank.
        """
        origin = _as_param(params.get("origin")) or ""
        destination = _as_param(params.get("destination")) or ""
        return cls(
            origin=origin,
            destination=destination,
            consumption=_as_param(params.get("consumption")),
            ev_consumption=_as_param(params.get("evConsumption")),
            initial_charge=_as_param(params.get("initialCharge")),
            max_charge=_as_param(params.get("maxCharge")),
            connector_types=_as_param(params.get("connectorTypes")),
            charging_curve=_as_param(params.get("chargingCurve")),
            max_charge_after_station=_as_param(params.get("maxChargeAfterChargingStation")),
        )

    @property
    def effective_consumption(self) -> str:
        """EV consumption override first, then general consumption, then default."""
        return self.ev_consumption or self.consumption or DEFAULT_CONSUMPTION

    @property
    def effective_initial_charge(self) -> str:
        return self.initial_charge or DEFAULT_INITIAL_CHARGE

    @property
    def effective_max_charge(self) -> str:
        return self.max_charge or DEFAULT_MAX_CHARGE

    @property
    def effective_connector_types(self) -> str:
        return self.connector_types or DEFAULT_CONNECTOR_TYPES

    @property
    def effective_charging_curve(self) -> str:
        return self.charging_curve or DEFAULT_CHARGING_CURVE

    @property
    def effective_max_charge_after_station(self) -> str:
        return self.max_charge_after_station or DEFAULT_MAX_CHARGE_AFTER_STATION
