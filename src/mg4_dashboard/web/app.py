"""FastAPI application — EV routing gateway and trip session API."""

from __future__ import annotations

import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response

from mg4_dashboard.routing.gateway import RoutingGateway
from mg4_dashboard.routing.summary import format_cost, format_duration, summarize_route
from mg4_dashboard.session.model import NavigationError, TripSessionModel
from mg4_dashboard.session.ticker import SessionTicker
from mg4_dashboard.vehicle.connection import VehicleConnection
from mg4_dashboard.vehicle.sources import make_source
from mg4_dashboard.web.schemas import (
    ConnectionResponse,
    HealthResponse,
    NavigationResponse,
    PlanningTokenResponse,
    PlanRouteRequest,
    PlanRouteResponse,
    RouteStopRecord,
    RouteSummaryResponse,
    TripResponse,
)

load_dotenv()  # loads .env from project root; must run before env vars are consumed

VERSION = "0.1.0"

_TICK_SECONDS = float(os.environ.get("MG4_TICK_SECONDS", "5.0"))
_TELEMETRY_SOURCE = os.environ.get("MG4_TELEMETRY_SOURCE", "simulation")
_PRICE_PER_KWH = float(os.environ.get("MG4_ENERGY_PRICE_PER_KWH", "0.45"))
_CURRENCY = os.environ.get("MG4_CURRENCY", "£")


# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    connection = VehicleConnection(make_source(_TELEMETRY_SOURCE))
    connection.connect()
    session = TripSessionModel(connection=connection, tick_interval_s=_TICK_SECONDS)
    ticker = SessionTicker(session, interval_s=_TICK_SECONDS)

    app.state.gateway = RoutingGateway()
    app.state.session = session
    app.state.ticker = ticker
    ticker.start()
    try:
        yield
    finally:
        ticker.stop()
        connection.disconnect()


app = FastAPI(title="MG4 Dashboard", version=VERSION, lifespan=lifespan)


def _session(request: Request) -> TripSessionModel:
    return request.app.state.session


# ---------------------------------------------------------------------------
# Routing gateway
# ---------------------------------------------------------------------------


@app.api_route("/api/ev-route", methods=["GET", "POST", "OPTIONS"])
@app.api_route("/.netlify/functions/ev-route", methods=["GET", "POST", "OPTIONS"])
async def ev_route(request: Request) -> Response:
    """Proxy an EV route request to HERE; status and envelope mirror the outcome."""
    gateway: RoutingGateway = request.app.state.gateway
    body = await request.body()
    result = await run_in_threadpool(
        gateway.handle, request.method, dict(request.query_params), body
    )
    if result.body is None:
        return Response(status_code=result.status_code, headers=result.headers)
    return JSONResponse(result.body, status_code=result.status_code, headers=result.headers)


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok", version=VERSION)


@app.get("/api/session")
def session_state(request: Request) -> dict:
    return _session(request).state().to_dict()


@app.get("/api/session/telemetry")
def telemetry(request: Request) -> dict:
    return _session(request).telemetry.to_dict()


@app.get("/api/session/connection", response_model=ConnectionResponse)
def connection_status(request: Request) -> ConnectionResponse:
    conn = _session(request).connection
    return ConnectionResponse(
        is_connected=conn.is_connected, connection_type=conn.connection_type
    )


@app.get("/api/session/navigation", response_model=NavigationResponse)
def navigation(request: Request) -> NavigationResponse:
    nav = _session(request).navigation
    return NavigationResponse(is_navigating=nav.is_navigating, active_route=nav.active_route)


@app.get("/api/session/trip", response_model=TripResponse)
def trip(request: Request) -> TripResponse:
    stats = _session(request).trip
    return TripResponse(
        distance_km=stats.distance_km,
        battery_used_percent=stats.battery_used_percent,
        started_at=stats.started_at,
    )


@app.post("/api/session/route/token", response_model=PlanningTokenResponse)
def planning_token(request: Request) -> PlanningTokenResponse:
    return PlanningTokenResponse(token=_session(request).begin_planning())


@app.post("/api/session/route", response_model=PlanRouteResponse)
def plan_route(request: Request, req: PlanRouteRequest) -> PlanRouteResponse:
    """Record a route document returned by ``/api/ev-route`` as the plan."""
    planned = _session(request).plan_route(req.route, token=req.token)
    return PlanRouteResponse(planned=planned)


@app.get("/api/session/route/summary", response_model=RouteSummaryResponse)
def route_summary(request: Request) -> RouteSummaryResponse:
    """Stops, charging cost and duration of the planned route."""
    route = _session(request).planned_route
    if route is None:
        raise HTTPException(status_code=404, detail="No route planned")
    try:
        summary = summarize_route(route, price_per_kwh=_PRICE_PER_KWH, currency=_CURRENCY)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    stops = [
        RouteStopRecord(
            name=s.name,
            type=s.type,
            distance_km=s.distance_km,
            duration_min=s.duration_min,
            power_kw=s.power_kw,
            energy_kwh=s.energy_kwh,
            cost=s.cost,
            cost_text=format_cost(s.cost, summary.currency),
        )
        for s in summary.charging_stops
    ]
    return RouteSummaryResponse(
        distance_km=summary.distance_km,
        duration_min=summary.duration_min,
        duration_text=format_duration(summary.duration_min),
        charging_stops=stops,
        total_cost=summary.total_cost,
        total_cost_text=format_cost(summary.total_cost, summary.currency),
        carbon_saved_kg=summary.carbon_saved_kg,
    )


@app.post("/api/session/navigation/start", response_model=NavigationResponse)
def start_navigation(request: Request) -> NavigationResponse:
    try:
        nav = _session(request).start_navigation()
    except NavigationError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return NavigationResponse(is_navigating=nav.is_navigating, active_route=nav.active_route)


@app.post("/api/session/navigation/stop", response_model=NavigationResponse)
def stop_navigation(request: Request) -> NavigationResponse:
    nav = _session(request).stop_navigation()
    return NavigationResponse(is_navigating=nav.is_navigating, active_route=nav.active_route)


@app.post("/api/session/trip/reset", response_model=TripResponse)
def reset_trip(request: Request) -> TripResponse:
    stats = _session(request).reset_trip()
    return TripResponse(
        distance_km=stats.distance_km,
        battery_used_percent=stats.battery_used_percent,
        started_at=stats.started_at,
    )
