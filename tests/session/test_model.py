"""Tests for TripSessionModel."""

from __future__ import annotations

import random
from unittest.mock import MagicMock

import pytest

from mg4_dashboard.session.model import NavigationError, TripSessionModel
from mg4_dashboard.session.models import NavigationState, SessionState, TripStats
from mg4_dashboard.vehicle.connection import VehicleConnection
from mg4_dashboard.vehicle.models import Location, TelemetrySnapshot
from mg4_dashboard.vehicle.sources import SimulatedSource

_ROUTE = {"routes": [{"id": "r1", "sections": [{"summary": {"length": 1000, "duration": 60}}]}]}


def make_model(seed: int = 42, interval: float = 5.0) -> TripSessionModel:
    return TripSessionModel(rng=random.Random(seed), tick_interval_s=interval)


# ---------------------------------------------------------------------------
# Initial state
# ---------------------------------------------------------------------------


def test_initial_snapshot_seed_values():
    snap = make_model().telemetry
    assert snap.battery_percent == 85.0
    assert snap.range_km == 245.0
    assert snap.efficiency_km_per_kwh == 4.2
    assert snap.is_connected is True
    assert snap.location == Location(51.5074, -0.1278, 0.0, 0.0)
    assert snap.tire_pressure_bar.front_left == 2.4
    assert snap.tire_pressure_bar.rear_right == 2.3
    assert snap.temperature_c.motor == 45.0


def test_initial_navigation_idle():
    model = make_model()
    assert model.navigation == NavigationState(is_navigating=False, active_route=None)
    assert model.planned_route is None


def test_connection_property_returns_given_connection():
    conn = VehicleConnection(SimulatedSource(random.Random(3)))
    conn.connect()
    model = TripSessionModel(connection=conn)
    assert model.connection is conn


def test_rng_with_connection_is_rejected():
    conn = VehicleConnection(SimulatedSource())
    with pytest.raises(ValueError, match="rng"):
        TripSessionModel(connection=conn, rng=random.Random(1))


# ---------------------------------------------------------------------------
# tick()
# ---------------------------------------------------------------------------


def test_tick_bounds_hold_over_many_iterations():
    model = make_model(seed=2024)
    for _ in range(5000):
        snap = model.tick()
        assert snap.battery_percent >= 10.0
        assert snap.range_km >= 50.0
        assert 0.0 <= snap.location.heading_deg < 360.0
        assert snap.location.speed_kmh >= 0.0
    assert model.telemetry.battery_percent == pytest.approx(10.0)
    assert model.telemetry.range_km == pytest.approx(50.0)


def test_tick_is_deterministic_for_seed():
    a, b = make_model(seed=9), make_model(seed=9)
    for _ in range(20):
        a.tick()
        b.tick()
    assert a.telemetry == b.telemetry


def test_tick_accumulates_trip_counters():
    source = MagicMock()
    source.kind = "mock"
    source.read.return_value = TelemetrySnapshot(
        battery_percent=84.0, location=Location(speed_kmh=72.0)
    )
    conn = VehicleConnection(source)
    conn.connect()
    model = TripSessionModel(connection=conn, tick_interval_s=10.0)
    model.tick()
    # 72 km/h for 10 s
    assert model.trip.distance_km == pytest.approx(0.2)
    assert model.trip.battery_used_percent == pytest.approx(1.0)


def test_tick_with_disconnected_vehicle_clears_flag_only():
    conn = VehicleConnection(SimulatedSource())
    conn.connect()
    model = TripSessionModel(connection=conn)
    conn.disconnect()
    snap = model.tick()
    assert snap.is_connected is False
    assert snap.battery_percent == 85.0


def test_tick_read_failure_keeps_snapshot(caplog):
    source = MagicMock()
    source.kind = "api"
    source.read.side_effect = OSError("timeout")
    conn = VehicleConnection(source)
    conn.connect()
    model = TripSessionModel(connection=conn)
    before = model.telemetry
    assert model.tick() == before
    assert "Telemetry read via api failed" in caplog.text


def test_readers_hold_immutable_snapshots():
    model = make_model()
    snap = model.telemetry
    with pytest.raises(AttributeError):
        snap.battery_percent = 1.0  # type: ignore[misc]
    model.tick()
    assert snap.battery_percent == 85.0


# ---------------------------------------------------------------------------
# Planning and navigation
# ---------------------------------------------------------------------------


def test_plan_route_does_not_start_navigation():
    model = make_model()
    assert model.plan_route(_ROUTE) is True
    assert model.planned_route == _ROUTE
    assert model.navigation.is_navigating is False


def test_start_navigation_requires_plan():
    with pytest.raises(NavigationError):
        make_model().start_navigation()


def test_start_navigation_activates_planned_route():
    model = make_model()
    model.plan_route(_ROUTE)
    nav = model.start_navigation()
    assert nav.is_navigating is True
    assert nav.active_route == _ROUTE


def test_start_then_stop_returns_to_initial_state():
    model = make_model()
    initial = model.navigation
    model.plan_route(_ROUTE)
    model.start_navigation()
    model.stop_navigation()
    assert model.navigation == initial
    assert model.navigation == NavigationState()


def test_stop_keeps_planned_route():
    model = make_model()
    model.plan_route(_ROUTE)
    model.start_navigation()
    model.stop_navigation()
    assert model.planned_route == _ROUTE


def test_route_copies_are_isolated():
    model = make_model()
    route = {"routes": [{"id": "r1"}]}
    model.plan_route(route)
    route["routes"].clear()
    model.planned_route["routes"].clear()
    assert model.planned_route == {"routes": [{"id": "r1"}]}


def test_stale_token_is_discarded():
    model = make_model()
    first = model.begin_planning()
    second = model.begin_planning()
    assert model.plan_route({"routes": ["newer"]}, token=second) is True
    assert model.plan_route({"routes": ["older"]}, token=first) is False
    assert model.planned_route == {"routes": ["newer"]}


# ---------------------------------------------------------------------------
# reset_trip and observers
# ---------------------------------------------------------------------------


def test_reset_trip_zeroes_counters():
    model = make_model()
    for _ in range(10):
        model.tick()
    before = model.trip.started_at
    stats = model.reset_trip()
    assert stats.distance_km == 0.0
    assert stats.battery_used_percent == 0.0
    assert stats.started_at >= before
    assert model.trip == stats


def test_reset_trip_leaves_telemetry_and_navigation():
    model = make_model()
    model.tick()
    model.plan_route(_ROUTE)
    model.start_navigation()
    snap = model.telemetry
    model.reset_trip()
    assert model.telemetry == snap
    assert model.navigation.is_navigating is True


def test_callbacks_receive_session_state():
    model = make_model()
    seen: list[SessionState] = []
    model.register_callback(seen.append)
    model.tick()
    model.plan_route(_ROUTE)
    model.start_navigation()
    model.stop_navigation()
    model.reset_trip()
    assert len(seen) == 5
    assert seen[2].navigation.is_navigating is True
    assert seen[3].navigation == NavigationState()
    assert isinstance(seen[4].trip, TripStats)
    assert seen[0].connection_type == "simulation"


def test_state_to_dict():
    model = make_model()
    model.plan_route(_ROUTE)
    d = model.state().to_dict()
    assert d["telemetry"]["battery_percent"] == 85.0
    assert d["navigation"] == {"is_navigating": False, "active_route": None}
    assert d["planned_route"] == _ROUTE
