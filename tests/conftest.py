"""
Test configuration and fixtures for the ShipStation gateway tests.

ShipStation itself is simulated with ``httpx.MockTransport``: the
``upstream`` fixture records every outbound request and answers from a
table of stubbed (method, path) responses.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple
from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi.testclient import TestClient

from shipstation_gateway.config import Settings
from shipstation_gateway.main import create_app
from shipstation_gateway.mcp.dispatcher import Dispatcher
from shipstation_gateway.services.shipstation import ShipStationClient

TEST_API_KEY = "test-api-key"
TEST_BASE_URL = "https://ssapi.test"


class UpstreamRecorder:
    """Stand-in for the ShipStation API."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self._routes: Dict[Tuple[str, str], httpx.Response] = {}

    def stub(
        self,
        method: str,
        path: str,
        status_code: int = 200,
        json_body: Any = None,
        content: Optional[bytes] = None,
    ) -> None:
        if content is not None:
            response = httpx.Response(status_code, content=content)
        elif json_body is not None:
            response = httpx.Response(status_code, json=json_body)
        else:
            response = httpx.Response(status_code)
        self._routes[(method.upper(), path)] = response

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        stubbed = self._routes.get((request.method, request.url.path))
        if stubbed is None:
            return httpx.Response(404, json={"errors": [{"message": "not stubbed"}]})
        return httpx.Response(stubbed.status_code, content=stubbed.content, headers=stubbed.headers)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no upstream request was made"
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def upstream():
    return UpstreamRecorder()


@pytest.fixture
def shipstation(upstream):
    """ShipStationClient wired to the recorder."""
    return ShipStationClient(TEST_API_KEY, base_url=TEST_BASE_URL, transport=upstream.transport)


@pytest.fixture
def dispatcher(shipstation):
    return Dispatcher(shipstation)


@pytest.fixture
def mock_shipstation():
    """ShipStationClient double whose methods are AsyncMocks."""
    return AsyncMock(spec=ShipStationClient)


@pytest.fixture
def test_settings():
    return Settings(
        shipstation_api_key=TEST_API_KEY,
        shipstation_base_url=TEST_BASE_URL,
        cors_allowed_origins="*",
        _env_file=None,
    )


@pytest.fixture
def app(test_settings, shipstation):
    """Create FastAPI app instance for testing."""
    return create_app(test_settings, shipstation)


@pytest.fixture
def client(app):
    """Create test client for HTTP requests."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sample_address() -> Dict[str, Any]:
    return {
        "name": "Jane Doe",
        "address_line1": "525 S Winchester Blvd",
        "city_locality": "San Jose",
        "state_province": "CA",
        "postal_code": "95128",
        "country_code": "US",
    }


@pytest.fixture
def sample_shipment(sample_address) -> Dict[str, Any]:
    return {
        "carrier_id": "se-123890",
        "service_code": "usps_priority_mail",
        "ship_to": sample_address,
        "ship_from": {**sample_address, "name": "Warehouse 1", "postal_code": "78756", "state_province": "TX"},
        "packages": [{"weight": {"value": 2, "unit": "pound"}}],
    }
