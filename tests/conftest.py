"""Shared test fixtures for restgate."""

from __future__ import annotations

import pytest

from restgate.backend.client import RestClient
from restgate.config.schema import BackendConfig, GatewayConfig
from restgate.tools.dispatcher import ToolDispatcher
from tests.fixtures.backend import FakeBackend

BACKEND_URL = "https://db.example.test"
SERVICE_KEY = "service-role-key"


@pytest.fixture
def config() -> GatewayConfig:
    """Config pointing at the fake backend, with a credential set."""
    return GatewayConfig(
        backend=BackendConfig(url=BACKEND_URL, service_role_key=SERVICE_KEY),
    )


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def rest_client(config: GatewayConfig, backend: FakeBackend) -> RestClient:
    return RestClient(config, transport=backend.transport)


@pytest.fixture
def dispatcher(config: GatewayConfig, rest_client: RestClient) -> ToolDispatcher:
    return ToolDispatcher(config, client=rest_client)
