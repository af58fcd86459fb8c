"""HERE Routing v8 HTTP client.

One GET per call: no retries, no caching.  The API key travels only in the
outbound query string and is never logged.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

_logger = logging.getLogger(__name__)


class HereRoutingClient:
    """Thin wrapper around the HERE ``/v8/routes`` endpoint.

    Args:
        session: ``requests.Session`` to send through; injected in tests.
        timeout: Request timeout in seconds.
    """

    BASE_URL = "https://router.hereapi.com/v8/routes"
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._session = session or requests.Session()
        self._timeout = timeout

    def fetch_route(self, params: dict[str, str]) -> tuple[int, Any]:
        """Send the route query and return ``(status_code, decoded_json)``.

        Transport errors and undecodable bodies propagate to the caller.
        """
        response = self._session.get(self.BASE_URL, params=params, timeout=self._timeout)
        _logger.info(
            "HERE routing %s -> %s: HTTP %d",
            params.get("origin"),
            params.get("destination"),
            response.status_code,
        )
        return response.status_code, response.json()
