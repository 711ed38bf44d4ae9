"""Pytest fixtures."""

import os
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from starlette.requests import Request
from utils import UPSTREAM_URL, AppFactory, FakeUpstream


@pytest.fixture
def upstream() -> FakeUpstream:
    """Upstream answering 200 with a small JSON listing."""
    return FakeUpstream()


@pytest.fixture
def app_factory() -> AppFactory:
    """Factory for apps exposing a single lister route at ``/api/list``."""
    return AppFactory(listers={"/api/list": UPSTREAM_URL})


@pytest.fixture
def relay_client(app_factory: AppFactory, upstream: FakeUpstream) -> TestClient:
    """Client for an app relaying to the ``upstream`` fixture."""
    return TestClient(app_factory(client=upstream.client()))


@pytest.fixture
def build_request():
    """Build a bare inbound request with the given method."""

    def _build(method: str = "GET", headers=()) -> Request:
        return Request(
            {
                "type": "http",
                "method": method,
                "path": "/api/list",
                "headers": [(b"host", b"localhost:8000"), *headers],
            }
        )

    return _build


@pytest.fixture(autouse=True, scope="module")
def mock_env():
    """Clear environment variables to avoid poluting configs from runtime env."""
    with patch.dict(os.environ, clear=True):
        yield
