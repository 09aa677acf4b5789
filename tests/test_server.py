"""Tests for server wiring and the health check endpoint."""

import asyncio
from typing import Any

import pytest
from starlette.testclient import TestClient

from itamae_provisioner.middleware import ErrorHandlingMiddleware, LoggingMiddleware


class TestHealthCheck:
    """Tests for health check endpoint."""

    @pytest.fixture
    def client(self) -> TestClient:
        """Create test client for HTTP server."""
        from itamae_provisioner.server import create_server

        server = create_server()
        return TestClient(server.http_app())

    def test_health_returns_ok(self, client: Any) -> None:
        """Health endpoint returns OK status."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.text == "OK"

    def test_health_returns_plain_text(self, client: Any) -> None:
        """Health endpoint returns plain text content type."""
        response = client.get("/health")
        assert "text/plain" in response.headers["content-type"]


def test_tools_registered() -> None:
    """validate and provision are exposed as tools."""
    from itamae_provisioner.server import create_server

    server = create_server()
    tools = asyncio.run(server.get_tools())

    assert {"validate", "provision"} <= set(tools)


def test_middleware_order() -> None:
    """Error handling wraps logging."""
    from itamae_provisioner.server import create_server

    server = create_server()
    kinds = [type(m) for m in server.middleware]

    assert kinds.index(ErrorHandlingMiddleware) < kinds.index(LoggingMiddleware)
