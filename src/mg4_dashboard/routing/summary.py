"""Shape a HERE route document into display data for the route planner."""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, field
from typing import Any

# Average petrol car tailpipe emissions avoided per km driven electric.
CO2_SAVED_KG_PER_KM = 0.141

_CHARGE_ACTIONS = frozenset({"charge", "charging", "chargingSetup"})


@dataclass
class RouteStop:
    """A charging stop or the destination.

    ``distance_km`` is cumulative from the origin.  ``duration_min`` is the
    time spent at the stop (0 for the destination).
    """

    name: str
    type: str
    distance_km: float
    duration_min: int
    power_kw: float
    energy_kwh: float
    cost: float


@dataclass
class RouteSummary:
    distance_km: float
    duration_min: int
    charging_stops: list[RouteStop] = field(default_factory=list)
    total_cost: float = 0.0
    carbon_saved_kg: float = 0.0
    currency: str = "£"

    def to_dict(self) -> dict:
        """Return a JSON-serializable dict (recursive via :func:`dataclasses.asdict`)."""
        return dataclasses.asdict(self)


def format_duration(minutes: int) -> str:
    """``195`` -> ``"3h 15m"``."""
    hours, mins = divmod(int(minutes), 60)
    return f"{hours}h {mins}m"


def format_cost(amount: float, currency: str = "£") -> str:
    """``12.5`` -> ``"£12.50"``."""
    return f"{currency}{amount:.2f}"


def _object(value: Any, what: str) -> dict[str, Any]:
    """Return *value* as a JSON object; a missing value is an empty one."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"Route {what} is not an object")
    return value


def _list(value: Any, what: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"Route {what} is not a list")
    return value


def _number(fields: dict[str, Any], key: str) -> float:
    """Read numeric field *key*; a missing key counts as 0, null does not."""
    if key not in fields:
        return 0.0
    value = fields[key]
    if value is None or isinstance(value, bool):
        raise ValueError(f"Route field {key!r} is not a number: {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Route field {key!r} is not a number: {value!r}") from None
    if not math.isfinite(number):
        raise ValueError(f"Route field {key!r} is not finite: {value!r}")
    return number


def _place_name(place: dict[str, Any], fallback: str) -> str:
    name = place.get("name")
    if isinstance(name, str) and name:
        return name
    # HERE sometimes nests the station name under attributes
    attrs = _object(place.get("attributes"), "place attributes")
    return str(attrs.get("name") or fallback)


def summarize_route(
    document: dict[str, Any],
    price_per_kwh: float = 0.45,
    currency: str = "£",
) -> RouteSummary:
    """Summarize the first route alternative of *document*.

    Total duration covers driving plus time spent at charging stops.

    Raises
    ------
    ValueError
        If the document holds no route alternatives, or a route, section or
        numeric field does not have the HERE shape.
    """
    routes = _list(_object(document, "document").get("routes"), "routes")
    if not routes:
        raise ValueError("Route document contains no routes")

    sections = _list(_object(routes[0], "route").get("sections"), "sections")
    stops: list[RouteStop] = []
    length_m = 0.0
    duration_s = 0.0

    for i, raw_section in enumerate(sections):
        section = _object(raw_section, f"section {i}")
        summary = _object(section.get("summary"), f"section {i} summary")
        length_m += _number(summary, "length")
        duration_s += _number(summary, "duration")

        arrival = _object(section.get("arrival"), f"section {i} arrival")
        place = _object(arrival.get("place"), f"section {i} place")
        is_last = i == len(sections) - 1

        if place.get("type") == "chargingStation" and not is_last:
            charge_s = 0.0
            power_kw = 0.0
            energy_kwh = 0.0
            for raw_action in _list(section.get("postActions"), f"section {i} postActions"):
                action = _object(raw_action, f"section {i} postAction")
                kind = action.get("action")
                if not isinstance(kind, str) or kind not in _CHARGE_ACTIONS:
                    continue
                charge_s += _number(action, "duration")
                if "consumablePower" in action:
                    power_kw = _number(action, "consumablePower")
                if "targetCharge" in action and "arrivalCharge" in action:
                    energy_kwh += _number(action, "targetCharge") - _number(action, "arrivalCharge")
            duration_s += charge_s
            cost = round(energy_kwh * price_per_kwh, 2)
            stops.append(
                RouteStop(
                    name=_place_name(place, f"Charging stop {len(stops) + 1}"),
                    type="charging",
                    distance_km=round(length_m / 1000.0, 1),
                    duration_min=round(charge_s / 60.0),
                    power_kw=power_kw,
                    energy_kwh=round(energy_kwh, 2),
                    cost=cost,
                )
            )
        elif is_last:
            stops.append(
                RouteStop(
                    name=_place_name(place, "Destination"),
                    type="destination",
                    distance_km=round(length_m / 1000.0, 1),
                    duration_min=0,
                    power_kw=0.0,
                    energy_kwh=0.0,
                    cost=0.0,
                )
            )

    distance_km = round(length_m / 1000.0, 1)
    return RouteSummary(
        distance_km=distance_km,
        duration_min=round(duration_s / 60.0),
        charging_stops=stops,
        total_cost=round(sum(s.cost for s in stops), 2),
        carbon_saved_kg=round(distance_km * CO2_SAVED_KG_PER_KM, 1),
        currency=currency,
    )
