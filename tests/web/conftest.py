"""Shared fixtures for web tests."""

from __future__ import annotations

import random
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from mg4_dashboard.routing.gateway import RoutingGateway
from mg4_dashboard.session.model import TripSessionModel
from mg4_dashboard.web.app import app


def make_route_document(station: str = "BP Pulse - Birmingham") -> dict:
    """Build a minimal HERE route document with one charging stop."""
    return {
        "routes": [
            {
                "id": "r1",
                "sections": [
                    {
                        "summary": {"length": 180_000, "duration": 6_600},
                        "arrival": {"place": {"type": "chargingStation", "name": station}},
                        "postActions": [
                            {
                                "action": "charge",
                                "duration": 1_500,
                                "consumablePower": 50,
                                "arrivalCharge": 10.0,
                                "targetCharge": 40.0,
                            }
                        ],
                    },
                    {
                        "summary": {"length": 140_000, "duration": 4_500},
                        "arrival": {"place": {"type": "place", "name": "Manchester"}},
                    },
                ],
            }
        ]
    }


@pytest.fixture
def provider():
    """Mock HERE routing client returning a successful route."""
    mock = MagicMock()
    mock.fetch_route.return_value = (200, make_route_document())
    return mock


@pytest.fixture
def client(provider):
    """FastAPI test client with a mock provider and a seeded session."""
    with TestClient(app) as c:
        app.state.gateway = RoutingGateway(client=provider)
        app.state.session = TripSessionModel(rng=random.Random(1))
        yield c
