"""RoutingGateway — brokers trip requests to the HERE EV routing API.

The gateway is stateless: every call reads the API key from the process
environment, validates the trip, sends exactly one provider request and
relays the outcome.  ``handle`` is the HTTP-shaped entry point used by the
web layer; ``plan_route`` is the plain Python operation underneath it.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from mg4_dashboard.routing.client import HereRoutingClient
from mg4_dashboard.routing.errors import (
    UNEXPECTED_ERROR_MESSAGE,
    GatewayError,
    InvalidTripRequest,
    MissingCredential,
    ProviderError,
)
from mg4_dashboard.routing.models import TripRequest
from mg4_dashboard.routing.query import build_route_query

_logger = logging.getLogger(__name__)

API_KEY_ENV = "HERE_API_KEY"

ALLOW_ORIGIN_HEADER = {"Access-Control-Allow-Origin": "*"}
PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "*",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
}


@dataclass
class GatewayResponse:
    """Status, JSON body (``None`` for an empty body) and headers."""

    status_code: int
    body: Any = None
    headers: dict[str, str] = field(default_factory=lambda: dict(ALLOW_ORIGIN_HEADER))


class RoutingGateway:
    """Translate trip requests into HERE queries and relay the result.

    Parameters
    ----------
    client:
        Provider client with ``fetch_route(params) -> (status, payload)``.
        Defaults to :class:`HereRoutingClient`.
    api_key_env:
        Name of the environment variable holding the provider key.
    """

    def __init__(
        self,
        client: HereRoutingClient | None = None,
        api_key_env: str = API_KEY_ENV,
    ) -> None:
        self._client = client
        self._api_key_env = api_key_env

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def plan_route(self, request: TripRequest) -> Any:
        """Fetch the route document for *request*.

        Raises
        ------
        MissingCredential
            The API key environment variable is unset or empty.
        ProviderError
            The provider answered with a non-2xx status.
        """
        api_key = os.environ.get(self._api_key_env, "")
        if not api_key:
            raise MissingCredential()

        params = build_route_query(request, api_key)
        status, payload = self._get_client().fetch_route(params)
        if not 200 <= status < 300:
            _logger.warning("HERE routing error: HTTP %d", status)
            raise ProviderError(status, payload)
        return payload

    def handle(
        self,
        method: str,
        query: Mapping[str, Any] | None = None,
        body: bytes | str | None = None,
    ) -> GatewayResponse:
        """Answer one HTTP request.  Never raises.

        ``GET`` reads parameters from *query*, ``POST`` from the JSON *body*.
        ``OPTIONS`` is answered as a CORS preflight before anything else.
        """
        if method.upper() == "OPTIONS":
            return GatewayResponse(204, None, dict(PREFLIGHT_HEADERS))

        try:
            params = self._read_params(method, query, body)
            request = TripRequest.from_params(params)
            return GatewayResponse(200, self.plan_route(request))
        except GatewayError as exc:
            return GatewayResponse(exc.status_code, exc.envelope())
        except Exception as exc:
            _logger.exception("Unexpected routing gateway failure")
            return GatewayResponse(
                500, {"error": UNEXPECTED_ERROR_MESSAGE, "details": str(exc)}
            )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _get_client(self) -> HereRoutingClient:
        if self._client is None:
            self._client = HereRoutingClient()
        return self._client

    @staticmethod
    def _read_params(
        method: str,
        query: Mapping[str, Any] | None,
        body: bytes | str | None,
    ) -> Mapping[str, Any]:
        if method.upper() == "GET":
            return query or {}

        if not body:
            return {}
        try:
            params = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise InvalidTripRequest() from exc
        if not isinstance(params, dict):
            raise InvalidTripRequest()
        return params
