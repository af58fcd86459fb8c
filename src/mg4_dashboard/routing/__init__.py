"""EV-aware route planning through the HERE Routing API.

Public API
----------
TripRequest         - origin/destination plus EV tuning parameters
build_route_query   - TripRequest → HERE query parameters
HereRoutingClient   - one-shot HTTP client for ``/v8/routes``
RoutingGateway      - validates, forwards and relays (HTTP-shaped handler)
summarize_route     - route document → stops/cost/duration display data
"""

from mg4_dashboard.routing.client import HereRoutingClient
from mg4_dashboard.routing.errors import (
    GatewayError,
    InvalidTripRequest,
    MissingCredential,
    ProviderError,
)
from mg4_dashboard.routing.gateway import GatewayResponse, RoutingGateway
from mg4_dashboard.routing.models import TripRequest
from mg4_dashboard.routing.query import build_route_query
from mg4_dashboard.routing.summary import (
    RouteStop,
    RouteSummary,
    format_cost,
    format_duration,
    summarize_route,
)

__all__ = [
    "GatewayError",
    "GatewayResponse",
    "HereRoutingClient",
    "InvalidTripRequest",
    "MissingCredential",
    "ProviderError",
    "RouteStop",
    "RouteSummary",
    "RoutingGateway",
    "TripRequest",
    "build_route_query",
    "format_cost",
    "format_duration",
    "summarize_route",
]
