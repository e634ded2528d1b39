"""Integration test fixtures: the real app served in-process, provider mocked."""

from __future__ import annotations

import httpx
import pytest

from stock_checker.api.app import create_app
from stock_checker.search.remote import RemoteGateway


@pytest.fixture
async def served_app(app_config):
    """A created app with its lifespan entered (client and gateways live)."""
    app = create_app(config=app_config)
    async with app.router.lifespan_context(app):
        yield app


@pytest.fixture
async def remote(served_app) -> RemoteGateway:
    """RemoteGateway talking to ``served_app`` over ASGI, English messages."""
    transport = httpx.ASGITransport(app=served_app)
    async with httpx.AsyncClient(transport=transport) as http:
        yield RemoteGateway("http://checker.test", language="en", http=http)
