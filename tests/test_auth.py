"""
Tests for the API key authentication middleware.
"""

from __future__ import annotations

import logging

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.config import Settings
from conftest import SECONDARY_API_KEY, TEST_API_KEY


class TestMissingOrInvalidKey:
    """Requests without a valid key are rejected before reaching handlers."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("method", "path"),
        [
            ("GET", "/api/user"),
            ("GET", "/api/user/1"),
            ("POST", "/api/user"),
            ("DELETE", "/api/user/1"),
            ("GET", "/api/user/test-error/server"),
            ("GET", "/not-a-route"),
        ],
    )
    async def test_missing_key_returns_401(
        self, anonymous_client: AsyncClient, method: str, path: str
    ) -> None:
        response = await anonymous_client.request(method, path)
        assert response.status_code == 401
        assert response.text == "API Key is missing"
        assert response.headers["content-type"].startswith("text/plain")

    @pytest.mark.asyncio
    async def test_invalid_key_returns_401(self, anonymous_client: AsyncClient) -> None:
        response = await anonymous_client.get(
            "/api/user", headers={"X-API-Key": "wrong-key"}
        )
        assert response.status_code == 401
        assert response.text == "Invalid API Key"

    @pytest.mark.asyncio
    async def test_key_comparison_is_exact(self, anonymous_client: AsyncClient) -> None:
        for candidate in (TEST_API_KEY.upper(), f"{TEST_API_KEY}x", TEST_API_KEY[:-1], ""):
            response = await anonymous_client.get(
                "/api/user", headers={"X-API-Key": candidate}
            )
            assert response.status_code == 401
            assert response.text == "Invalid API Key"

    @pytest.mark.asyncio
    async def test_rejected_request_does_not_mutate_store(
        self, anonymous_client: AsyncClient, client: AsyncClient
    ) -> None:
        response = await anonymous_client.delete("/api/user/1")
        assert response.status_code == 401

        response = await client.get("/api/user/1")
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_failures_are_logged(
        self, anonymous_client: AsyncClient, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.INFO, logger="app.api.middleware.auth")

        await anonymous_client.get("/api/user")
        await anonymous_client.get("/api/user", headers={"X-API-Key": "nope"})

        messages = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
        assert "API key missing from request to /api/user" in messages
        assert "Invalid API key attempted access to /api/user" in messages
        assert all("nope" not in m for m in messages)


class TestValidKey:
    """Requests with a configured key are forwarded."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("api_key", [TEST_API_KEY, SECONDARY_API_KEY])
    async def test_any_configured_key_accepted(
        self, anonymous_client: AsyncClient, api_key: str
    ) -> None:
        response = await anonymous_client.get("/api/user", headers={"X-API-Key": api_key})
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_header_name_is_case_insensitive(
        self, anonymous_client: AsyncClient
    ) -> None:
        response = await anonymous_client.get(
            "/api/user", headers={"x-api-key": TEST_API_KEY}
        )
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_success_is_logged(
        self, client: AsyncClient, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.INFO, logger="app.api.middleware.auth")
        await client.get("/api/user")
        assert any(
            "Authenticated request to /api/user" in r.getMessage() for r in caplog.records
        )


class TestAllowList:
    """Documentation, health and favicon paths need no key."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/health", "/docs", "/openapi.json", "/redoc"])
    async def test_public_paths_succeed_without_key(
        self, anonymous_client: AsyncClient, path: str
    ) -> None:
        response = await anonymous_client.get(path)
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_allow_list_is_case_insensitive(
        self, anonymous_client: AsyncClient
    ) -> None:
        response = await anonymous_client.get("/HEALTH")
        # Auth lets it through; routing itself is case-sensitive
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_favicon_is_not_gated(self, anonymous_client: AsyncClient) -> None:
        response = await anonymous_client.get("/favicon.ico")
        # No favicon route exists; the request reaches routing and 404s
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_prefix_match_respects_segments(
        self, anonymous_client: AsyncClient
    ) -> None:
        response = await anonymous_client.get("/healthcheck")
        assert response.status_code == 401


class TestCustomHeader:
    """The header name comes from configuration."""

    @pytest.mark.asyncio
    async def test_configured_header_used(self, make_app) -> None:
        settings = Settings(_env_file=None, api_keys=["k1"], api_key_header="X-Token")
        application = make_app(settings)

        async with application.router.lifespan_context(application):
            transport = ASGITransport(app=application)
            async with AsyncClient(transport=transport, base_url="http://test") as http:
                ok = await http.get("/api/user", headers={"X-Token": "k1"})
                missing = await http.get("/api/user", headers={"X-API-Key": "k1"})

        assert ok.status_code == 200
        assert missing.status_code == 401
        assert missing.text == "API Key is missing"
