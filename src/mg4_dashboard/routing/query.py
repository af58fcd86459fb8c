"""HERE Routing v8 query construction."""

from __future__ import annotations

from mg4_dashboard.routing.models import TripRequest

RETURN_FIELDS = "polyline,summary,actions,instructions,travelSummary"


def build_route_query(request: TripRequest, api_key: str) -> dict[str, str]:
    """Return the query parameters for an EV-aware car route.

    The order of keys matches the order the provider documents them in;
    ``requests`` preserves it when encoding.
    """
    return {
        "apiKey": api_key,
        "transportMode": "car",
        "origin": request.origin,
        "destination": request.destination,
        "routingMode": "fast",
        "return": RETURN_FIELDS,
        "ev[initialCharge]": request.effective_initial_charge,
        "ev[maxCharge]": request.effective_max_charge,
        "ev[connectorTypes]": request.effective_connector_types,
        "ev[chargingCurve]": request.effective_charging_curve,
        "ev[maxChargeAfterChargingStation]": request.effective_max_charge_after_station,
        "ev[trafficEnabled]": "true",
        "ev[consumption]": request.effective_consumption,
    }
