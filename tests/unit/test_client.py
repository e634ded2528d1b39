"""Tests for stock_checker.market.client."""

from __future__ import annotations

import logging

import httpx
import pytest
import respx

from stock_checker.core.exceptions import MalformedPayloadError, UpstreamUnavailableError
from stock_checker.market.client import (
    GLOBAL_QUOTE,
    TIME_SERIES_DAILY,
    TRANSPORT_LOGGERS,
    AlphaVantageClient,
    quiet_transport_loggers,
)

pytestmark = pytest.mark.unit

_URL = "https://www.alphavantage.co/query"


class TestQuery:
    @respx.mock
    async def test_returns_decoded_object(self, provider_config):
        route = respx.get(_URL, params__contains={"function": GLOBAL_QUOTE}).mock(
            return_value=httpx.Response(200, json={"Global Quote": {}})
        )
        async with AlphaVantageClient(provider_config) as client:
            data = await client.query(GLOBAL_QUOTE, "AAPL", "demo")

        assert data == {"Global Quote": {}}
        assert route.call_count == 1

    @respx.mock
    async def test_extra_params_are_sent(self, provider_config):
        route = respx.get(
            _URL,
            params__contains={"function": TIME_SERIES_DAILY, "outputsize": "compact"},
        ).mock(return_value=httpx.Response(200, json={}))

        async with AlphaVantageClient(provider_config) as client:
            await client.query(TIME_SERIES_DAILY, "MSFT", "demo", outputsize="compact")

        assert route.called

    @respx.mock
    async def test_non_2xx_raises(self, provider_config):
        respx.get(_URL).mock(return_value=httpx.Response(503))
        async with AlphaVantageClient(provider_config) as client:
            with pytest.raises(UpstreamUnavailableError) as exc_info:
                await client.query(GLOBAL_QUOTE, "AAPL", "demo")
        assert exc_info.value.context["status_code"] == 503

    @respx.mock
    async def test_transport_error_message_hides_url(self, provider_config):
        respx.get(_URL).mock(side_effect=httpx.ConnectError("boom apikey=top-secret"))
        async with AlphaVantageClient(provider_config) as client:
            with pytest.raises(UpstreamUnavailableError) as exc_info:
                await client.query(GLOBAL_QUOTE, "AAPL", "top-secret")
        assert "top-secret" not in str(exc_info.value)
        assert exc_info.value.context["error"] == "ConnectError"

    @respx.mock
    @pytest.mark.parametrize(
        "response",
        [httpx.Response(200, text="not json"), httpx.Response(200, json=["a", "b"])],
    )
    async def test_non_object_body_raises(self, provider_config, response):
        respx.get(_URL).mock(return_value=response)
        async with AlphaVantageClient(provider_config) as client:
            with pytest.raises(MalformedPayloadError):
                await client.query(GLOBAL_QUOTE, "AAPL", "demo")

    @respx.mock
    async def test_api_key_never_logged(self, provider_config, caplog):
        respx.get(_URL).mock(return_value=httpx.Response(500))
        caplog.set_level(logging.DEBUG)
        async with AlphaVantageClient(provider_config) as client:
            with pytest.raises(UpstreamUnavailableError):
                await client.query(GLOBAL_QUOTE, "AAPL", "hunter2")
        assert "hunter2" not in caplog.text

    @respx.mock
    async def test_api_key_absent_from_success_logs(self, provider_config, caplog):
        respx.get(_URL).mock(return_value=httpx.Response(200, json={}))
        caplog.set_level(logging.DEBUG)
        async with AlphaVantageClient(provider_config) as client:
            await client.query(GLOBAL_QUOTE, "AAPL", "hunter2")
        assert "hunter2" not in caplog.text


class TestTransportLoggers:
    @pytest.mark.parametrize("name", TRANSPORT_LOGGERS)
    def test_held_at_warning_without_cli(self, name):
        assert logging.getLogger(name).level == logging.WARNING

    def test_quiet_restores_level(self):
        logging.getLogger("httpx").setLevel(logging.DEBUG)
        quiet_transport_loggers()
        assert logging.getLogger("httpx").getEffectiveLevel() == logging.WARNING


class TestOwnership:
    async def test_shared_client_left_open(self, provider_config):
        async with httpx.AsyncClient() as shared:
            async with AlphaVantageClient(provider_config, http=shared):
                pass
            assert not shared.is_closed

    async def test_owned_client_closed(self, provider_config):
        client = AlphaVantageClient(provider_config)
        await client.close()
        assert client._client.is_closed
