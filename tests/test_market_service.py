# tests/test_market_service.py
"""
Market Service Tests - Unit Tests for Failure Absorption

This module tests MarketService: successful calls pass entities through
unchanged, and every FetchError becomes the empty/absent sentinel together
with exactly one user notification.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- coinwatch.application.market_service (MarketService under test)
- coinwatch.domain.errors (FetchError)
- unittest.mock (AsyncMock providers)
- pytest, pytest-asyncio (testing framework)
"""
import logging  # Log level assertions
from unittest.mock import AsyncMock  # Async mocks for provider and notifier

import httpx  # Real HTTP failures through MockTransport
import pytest  # Testing framework for writing and running tests

from coinwatch.adapters.providers.coingecko import CoinGeckoProvider  # Provider over a mock transport
from coinwatch.application.market_service import (
    CATALOG_FAILED,
    LIST_FAILED,
    SEARCH_FAILED,
    MarketService,
    chart_failed,
    detail_failed,
)
from coinwatch.application.notifications import LoggingNotifier  # Default notifier
from coinwatch.domain.errors import FetchError  # Failure kind raised by providers


class TestMarketServiceSuccess:
    @pytest.mark.asyncio
    async def test_fetch_coin_list_passes_page(self, provider, notifier):
        service = MarketService(provider, notifier)

        coins = await service.fetch_coin_list(2, per_page=50)

        assert [c.id for c in coins] == ["bitcoin", "ethereum"]
        provider.get_markets.assert_awaited_once_with(page=2, per_page=50)
        assert notifier.messages == []

    @pytest.mark.asyncio
    async def test_fetch_coin_list_default_page_size(self, provider, notifier):
        await MarketService(provider, notifier).fetch_coin_list()
        provider.get_markets.assert_awaited_once_with(page=1, per_page=25)

    @pytest.mark.asyncio
    async def test_fetch_coin_detail(self, provider, notifier):
        detail = await MarketService(provider, notifier).fetch_coin_detail("bitcoin")
        assert detail.name == "Bitcoin"
        provider.get_coin.assert_awaited_once_with("bitcoin")

    @pytest.mark.asyncio
    async def test_fetch_historical_series(self, provider, notifier):
        series = await MarketService(provider, notifier).fetch_historical_series("bitcoin", days=90)
        assert len(series.prices) == 3
        provider.get_market_chart.assert_awaited_once_with("bitcoin", days=90)

    @pytest.mark.asyncio
    async def test_every_call_hits_the_provider(self, provider, notifier):
        service = MarketService(provider, notifier)
        await service.fetch_coin_detail("bitcoin")
        await service.fetch_coin_detail("bitcoin")
        assert provider.get_coin.await_count == 2


class TestMarketServiceFailures:
    @pytest.mark.asyncio
    async def test_list_failure(self, provider, notifier):
        provider.get_markets.side_effect = FetchError("CoinGecko returned HTTP 500")

        result = await MarketService(provider, notifier).fetch_coin_list()

        assert result == []
        assert notifier.messages == [LIST_FAILED]

    @pytest.mark.asyncio
    async def test_detail_failure(self, provider, notifier):
        provider.get_coin.side_effect = FetchError("CoinGecko returned HTTP 404")

        result = await MarketService(provider, notifier).fetch_coin_detail("nope")

        assert result is None
        assert notifier.messages == [detail_failed("nope")]
        assert "nope" in notifier.messages[0]

    @pytest.mark.asyncio
    async def test_chart_failure(self, provider, notifier):
        provider.get_market_chart.side_effect = FetchError("timeout")

        result = await MarketService(provider, notifier).fetch_historical_series("bitcoin")

        assert result is None
        assert notifier.messages == [chart_failed("bitcoin")]

    @pytest.mark.asyncio
    async def test_catalog_and_hydration_failures(self, provider, notifier):
        provider.get_coin_list.side_effect = FetchError("boom")
        provider.get_markets_by_ids.side_effect = FetchError("boom")
        service = MarketService(provider, notifier)

        assert await service.fetch_all_coin_identities() == []
        assert await service.fetch_coins_by_ids(["bitcoin"]) == []
        assert notifier.messages == [CATALOG_FAILED, SEARCH_FAILED]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [404, 500])
    async def test_http_status_end_to_end(self, notifier, status):
        client = httpx.AsyncClient(
            base_url="https://api.coingecko.test/api/v3",
            transport=httpx.MockTransport(lambda request: httpx.Response(status, json={})),
        )
        service = MarketService(CoinGeckoProvider(client=client), notifier)

        assert await service.fetch_coin_list() == []
        assert await service.fetch_coin_detail("bitcoin") is None
        assert await service.fetch_historical_series("bitcoin") is None
        assert len(notifier.messages) == 3

    @pytest.mark.asyncio
    async def test_failure_is_logged(self, provider, notifier, caplog):
        provider.get_markets.side_effect = FetchError("CoinGecko returned HTTP 503")

        with caplog.at_level(logging.ERROR, logger="coinwatch.application.market_service"):
            await MarketService(provider, notifier).fetch_coin_list(4)

        assert "fetch_coin_list(page=4) failed: CoinGecko returned HTTP 503" in caplog.text

    @pytest.mark.asyncio
    async def test_broken_notifier_does_not_raise(self, provider):
        provider.get_coin.side_effect = FetchError("boom")
        broken = AsyncMock()
        broken.notify.side_effect = RuntimeError("chat gone")

        assert await MarketService(provider, broken).fetch_coin_detail("bitcoin") is None
        broken.notify.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unexpected_errors_propagate(self, provider, notifier):
        provider.get_markets.side_effect = KeyError("bug")

        with pytest.raises(KeyError):
            await MarketService(provider, notifier).fetch_coin_list()
        assert notifier.messages == []


class TestLoggingNotifier:
    @pytest.mark.asyncio
    async def test_default_notifier_logs(self, provider, caplog):
        provider.get_markets.side_effect = FetchError("boom")

        with caplog.at_level(logging.WARNING, logger="coinwatch.application.notifications"):
            await MarketService(provider).fetch_coin_list()

        assert f"User notification: {LIST_FAILED}" in caplog.text
        assert isinstance(MarketService(provider).notifier, LoggingNotifier)
