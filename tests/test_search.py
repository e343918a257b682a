# tests/test_search.py
"""
Search Tests - Unit Tests for Catalog Matching and Hydration

This module tests local substring matching over the coin catalog, truncation
in catalog order, and the two-request composition of search_coins.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- coinwatch.application.search (match_identities, search_coins)
- coinwatch.application.market_service (MarketService over a mock provider)
- pytest, pytest-asyncio (testing framework)
"""
import pytest  # Testing framework for writing and running tests

from coinwatch.application.market_service import CATALOG_FAILED, MarketService
from coinwatch.application.search import match_identities, search_coins
from coinwatch.config import settings
from coinwatch.domain.errors import FetchError
from coinwatch.domain.models import CoinIdentity

from conftest import CATALOG  # Shared catalog payload


@pytest.fixture
def catalog():
    return [CoinIdentity.model_validate(c) for c in CATALOG]


class TestMatchIdentities:
    def test_matches_name_symbol_or_id(self, catalog):
        assert [c.id for c in match_identities(catalog, "bitcoin")] == [
            "bitcoin",
            "bitcoin-cash",
            "wrapped-bitcoin",
        ]
        # symbol only
        assert [c.id for c in match_identities(catalog, "bch")] == ["bitcoin-cash"]
        # id only
        assert [c.id for c in match_identities(catalog, "wrapped-")] == ["wrapped-bitcoin"]

    def test_case_insensitive(self, catalog):
        assert [c.id for c in match_identities(catalog, "DOGE")] == ["dogecoin"]
        assert [c.id for c in match_identities(catalog, "EtH")] == ["ethereum"]

    def test_no_match(self, catalog):
        assert match_identities(catalog, "solana") == []

    def test_empty_query_matches_nothing(self, catalog):
        assert match_identities(catalog, "") == []

    def test_truncates_in_catalog_order(self):
        big = [CoinIdentity(id=f"coin-{i}", name=f"Token {i}", symbol=f"t{i}") for i in range(40)]
        matched = match_identities(big, "token", limit=25)
        assert len(matched) == 25
        assert [c.id for c in matched] == [f"coin-{i}" for i in range(25)]


class TestSearchCoins:
    @pytest.mark.asyncio
    async def test_empty_query_makes_no_calls(self, provider, notifier):
        result = await search_coins(MarketService(provider, notifier), "")

        assert result == []
        provider.get_coin_list.assert_not_awaited()
        provider.get_markets_by_ids.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_hydrates_matches_in_one_call(self, provider, notifier):
        result = await search_coins(MarketService(provider, notifier), "bit")

        assert [c.id for c in result] == ["bitcoin"]
        provider.get_coin_list.assert_awaited_once()
        provider.get_markets_by_ids.assert_awaited_once_with(["bitcoin", "bitcoin-cash", "wrapped-bitcoin"])

    @pytest.mark.asyncio
    async def test_more_than_limit_forwards_first_25(self, provider, notifier):
        provider.get_coin_list.return_value = [
            CoinIdentity(id=f"coin-{i}", name=f"Token {i}", symbol=f"t{i}") for i in range(60)
        ]

        await search_coins(MarketService(provider, notifier), "token", limit=25)

        (ids,), _ = provider.get_markets_by_ids.await_args
        assert ids == [f"coin-{i}" for i in range(25)]

    @pytest.mark.asyncio
    async def test_zero_limit_returns_nothing(self, provider, notifier):
        result = await search_coins(MarketService(provider, notifier), "bit", limit=0)

        assert result == []
        provider.get_coin_list.assert_not_awaited()
        provider.get_markets_by_ids.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_default_limit_comes_from_settings(self, provider, notifier, monkeypatch):
        monkeypatch.setattr(settings, "search_result_limit", 2)

        await search_coins(MarketService(provider, notifier), "bit")

        provider.get_markets_by_ids.assert_awaited_once_with(["bitcoin", "bitcoin-cash"])

    @pytest.mark.asyncio
    async def test_no_matches_skips_hydration(self, provider, notifier):
        result = await search_coins(MarketService(provider, notifier), "zzz")

        assert result == []
        provider.get_markets_by_ids.assert_not_awaited()
        assert notifier.messages == []

    @pytest.mark.asyncio
    async def test_catalog_failure(self, provider, notifier):
        provider.get_coin_list.side_effect = FetchError("CoinGecko returned HTTP 429")

        result = await search_coins(MarketService(provider, notifier), "bit")

        assert result == []
        provider.get_markets_by_ids.assert_not_awaited()
        assert notifier.messages == [CATALOG_FAILED]
