"""Tests for TripRequest defaults and HERE query construction."""

from __future__ import annotations

import pytest

from mg4_dashboard.routing.errors import InvalidTripRequest
from mg4_dashboard.routing.models import TripRequest
from mg4_dashboard.routing.query import build_route_query

LONDON = "51.5,-0.1"
LIVERPOOL = "53.4,-2.9"


def _query(**params) -> dict[str, str]:
    params.setdefault("origin", LONDON)
    params.setdefault("destination", LIVERPOOL)
    return build_route_query(TripRequest.from_params(params), "secret-key")


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


def test_default_query_contains_ev_defaults():
    q = _query()
    assert q["transportMode"] == "car"
    assert q["routingMode"] == "fast"
    assert q["ev[initialCharge]"] == "60"
    assert q["ev[maxCharge]"] == "80"
    assert q["ev[consumption]"] == "15.0"
    assert q["ev[connectorTypes]"] == "iec62196Type2Combo,iec62196Type2_AC"


def test_default_query_charging_curve_and_station_cap():
    q = _query()
    assert q["ev[chargingCurve]"] == "0,60,50;60,80,40;80,100,25"
    assert q["ev[maxChargeAfterChargingStation]"] == "80"
    assert q["ev[trafficEnabled]"] == "true"


def test_query_requests_full_return_payload():
    q = _query()
    assert q["return"] == "polyline,summary,actions,instructions,travelSummary"


def test_query_carries_origin_destination_and_key():
    q = _query()
    assert q["origin"] == LONDON
    assert q["destination"] == LIVERPOOL
    assert q["apiKey"] == "secret-key"


# ---------------------------------------------------------------------------
# Overrides
# ---------------------------------------------------------------------------


def test_ev_consumption_wins_over_consumption():
    q = _query(consumption="18.5", evConsumption="13.2")
    assert q["ev[consumption]"] == "13.2"


def test_consumption_used_without_ev_override():
    q = _query(consumption="18.5")
    assert q["ev[consumption]"] == "18.5"


def test_explicit_values_override_defaults():
    q = _query(
        initialCharge="95",
        maxCharge="100",
        connectorTypes="iec62196Type2Combo",
        chargingCurve="0,100,50",
        maxChargeAfterChargingStation="90",
    )
    assert q["ev[initialCharge]"] == "95"
    assert q["ev[maxCharge]"] == "100"
    assert q["ev[connectorTypes]"] == "iec62196Type2Combo"
    assert q["ev[chargingCurve]"] == "0,100,50"
    assert q["ev[maxChargeAfterChargingStation]"] == "90"


def test_empty_string_counts_as_absent():
    q = _query(initialCharge="", consumption="")
    assert q["ev[initialCharge]"] == "60"
    assert q["ev[consumption]"] == "15.0"


def test_json_numbers_and_lists_rendered_as_literals():
    q = _query(initialCharge=70.0, consumption=16.5, connectorTypes=["a", "b"])
    assert q["ev[initialCharge]"] == "70"
    assert q["ev[consumption]"] == "16.5"
    assert q["ev[connectorTypes]"] == "a,b"


def test_origin_and_destination_are_trimmed():
    req = TripRequest.from_params({"origin": "  51.5,-0.1 ", "destination": "53.4,-2.9\n"})
    assert req.origin == LONDON
    assert req.destination == LIVERPOOL


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "params",
    [
        {},
        {"origin": LONDON},
        {"destination": LIVERPOOL},
        {"origin": "", "destination": LIVERPOOL},
        {"origin": LONDON, "destination": "   "},
        {"origin": "\t", "destination": " "},
    ],
)
def test_missing_origin_or_destination_rejected(params):
    with pytest.raises(InvalidTripRequest) as exc_info:
        TripRequest.from_params(params)
    assert exc_info.value.status_code == 400
    assert exc_info.value.envelope() == {
        "error": 'origin and destination are required as "lat,lng"'
    }
