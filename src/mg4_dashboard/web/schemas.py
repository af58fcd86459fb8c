"""Pydantic request/response schemas for the dashboard API."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    version: str


class PlanRouteRequest(BaseModel):
    route: dict[str, Any]
    token: int | None = None


class PlanRouteResponse(BaseModel):
    planned: bool


class PlanningTokenResponse(BaseModel):
    token: int


class NavigationResponse(BaseModel):
    is_navigating: bool
    active_route: dict[str, Any] | None = None


class TripResponse(BaseModel):
    distance_km: float
    battery_used_percent: float
    started_at: datetime


class ConnectionResponse(BaseModel):
    is_connected: bool
    connection_type: str


class RouteStopRecord(BaseModel):
    name: str
    type: str
    distance_km: float
    duration_min: int
    power_kw: float
    energy_kwh: float
    cost: float
    cost_text: str


class RouteSummaryResponse(BaseModel):
    distance_km: float
    duration_min: int
    duration_text: str
    charging_stops: list[RouteStopRecord]
    total_cost: float
    total_cost_text: str
    carbon_saved_kg: float
