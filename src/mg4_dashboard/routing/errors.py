"""Routing gateway error taxonomy.

Each error knows the HTTP status and JSON envelope it maps to, so the
gateway boundary can turn any of them into a response without a lookup
table.
"""

from __future__ import annotations

from typing import Any

INVALID_REQUEST_MESSAGE = 'origin and destination are required as "lat,lng"'
MISSING_CREDENTIAL_MESSAGE = "HERE_API_KEY not configured"
PROVIDER_ERROR_MESSAGE = "HERE routing error"
UNEXPECTED_ERROR_MESSAGE = "Unexpected server error"


class GatewayError(Exception):
    """Base class for failures surfaced by the routing gateway."""

    status_code: int = 500

    def envelope(self) -> dict[str, Any]:
        return {"error": str(self)}


class InvalidTripRequest(GatewayError):
    """Origin or destination missing, blank, or the body is unreadable."""

    status_code = 400

    def __init__(self, message: str = INVALID_REQUEST_MESSAGE) -> None:
        super().__init__(message)


class MissingCredential(GatewayError):
    """The routing provider API key is not configured on the server."""

    status_code = 500

    def __init__(self, message: str = MISSING_CREDENTIAL_MESSAGE) -> None:
        super().__init__(message)


class ProviderError(GatewayError):
    """The routing provider answered with a non-success status.

    Args:
        status_code: HTTP status returned by the provider.
        details: Decoded provider payload, relayed verbatim.
    """

    def __init__(self, status_code: int, details: Any) -> None:
        super().__init__(PROVIDER_ERROR_MESSAGE)
        self.status_code = status_code
        self.details = details

    def envelope(self) -> dict[str, Any]:
        return {"error": PROVIDER_ERROR_MESSAGE, "details": self.details}
