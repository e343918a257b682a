# tests/conftest.py
"""
Shared Test Fixtures - CoinGecko Payloads and Test Doubles

Payloads are trimmed copies of real CoinGecko responses. RecordingNotifier
collects failure messages so tests can assert exactly one notification.

Files that USE this module:
- pytest (fixture discovery for every test module)

Files that this module USES:
- coinwatch.domain.models (entities built from the payloads)
- coinwatch.adapters.providers.base (MarketDataProvider spec for mocks)
"""
from __future__ import annotations

from typing import List
from unittest.mock import AsyncMock

import pytest

from coinwatch.adapters.providers.base import MarketDataProvider
from coinwatch.domain.models import CoinDetail, CoinIdentity, CoinSummary, HistoricalSeries

BITCOIN_ROW = {
    "id": "bitcoin",
    "symbol": "btc",
    "name": "Bitcoin",
    "image": "https://assets.coingecko.com/coins/images/1/large/bitcoin.png",
    "current_price": 67012.34,
    "market_cap": 1320500000000,
    "market_cap_rank": 1,
    "fully_diluted_valuation": 1407000000000,
    "total_volume": 35100000000,
    "high_24h": 67500.0,
    "low_24h": 65210.5,
    "price_change_24h": 1540.12,
    "price_change_percentage_24h": 2.35,
    "market_cap_change_24h": 30200000000,
    "market_cap_change_percentage_24h": 2.34,
    "circulating_supply": 19700000.0,
    "total_supply": 21000000.0,
    "max_supply": 21000000.0,
    "ath": 73738,
    "ath_change_percentage": -9.1,
    "ath_date": "2024-03-14T07:10:36.635Z",
    "atl": 67.81,
    "atl_change_percentage": 98700.0,
    "atl_date": "2013-07-06T00:00:00.000Z",
    "roi": None,
    "last_updated": "2024-05-01T12:00:00.000Z",
}

ETHEREUM_ROW = {
    "id": "ethereum",
    "symbol": "eth",
    "name": "Ethereum",
    "image": "https://assets.coingecko.com/coins/images/279/large/ethereum.png",
    "current_price": 3120.5,
    "market_cap": 375000000000,
    "market_cap_rank": 2,
    "total_volume": 15200000000,
    "price_change_24h": -45.2,
    "price_change_percentage_24h": -1.43,
    "roi": {"times": 62.1, "currency": "btc", "percentage": 6210.0},
}

DOGE_ROW = {
    "id": "dogecoin",
    "symbol": "doge",
    "name": "Dogecoin",
    "current_price": 0.1523,
    "market_cap": 22000000000,
    "market_cap_rank": 9,
    "total_volume": 1100000000,
    "price_change_24h": 0.0,
    "price_change_percentage_24h": 0.0,
}

BITCOIN_DETAIL = {
    "id": "bitcoin",
    "symbol": "btc",
    "name": "Bitcoin",
    "description": {
        "en": (
            "<p>Bitcoin is the first successful internet money based on "
            '<a href="https://www.coingecko.com/en?hashing_algorithm=SHA-256">SHA-256</a>.</p>'
            "<script>alert('x')</script>"
        )
    },
    "image": {
        "thumb": "https://assets.coingecko.com/coins/images/1/thumb/bitcoin.png",
        "small": "https://assets.coingecko.com/coins/images/1/small/bitcoin.png",
        "large": "https://assets.coingecko.com/coins/images/1/large/bitcoin.png",
    },
    "market_data": {
        "current_price": {"usd": 67012.34, "eur": 62500.0},
        "market_cap": {"usd": 1320500000000, "eur": 1231000000000},
        "price_change_percentage_24h": 2.35,
        "price_change_percentage_7d": -1.2,
        "price_change_percentage_30d": 10.5,
        "price_change_percentage_1y": 140.25,
    },
    "links": {"homepage": ["http://www.bitcoin.org"]},
}

# 2024-03-01, 2024-03-02, 2024-03-03 at 00:00 UTC
MARKET_CHART = {
    "prices": [
        [1709251200000, 62000.0],
        [1709337600000, 61000.0],
        [1709424000000, 63000.0],
    ],
    "market_caps": [],
    "total_volumes": [],
}

CATALOG = [
    {"id": "bitcoin", "symbol": "btc", "name": "Bitcoin"},
    {"id": "bitcoin-cash", "symbol": "bch", "name": "Bitcoin Cash"},
    {"id": "ethereum", "symbol": "eth", "name": "Ethereum"},
    {"id": "dogecoin", "symbol": "doge", "name": "Dogecoin"},
    {"id": "wrapped-bitcoin", "symbol": "wbtc", "name": "Wrapped Bitcoin"},
]


class RecordingNotifier:
    """Notifier that records every message it receives."""

    def __init__(self):
        self.messages: List[str] = []

    async def notify(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def provider() -> AsyncMock:
    """MarketDataProvider mock with successful default responses."""
    mock = AsyncMock(spec=MarketDataProvider)
    mock.get_markets.return_value = [CoinSummary.model_validate(BITCOIN_ROW), CoinSummary.model_validate(ETHEREUM_ROW)]
    mock.get_markets_by_ids.return_value = [CoinSummary.model_validate(BITCOIN_ROW)]
    mock.get_coin.return_value = CoinDetail.model_validate(BITCOIN_DETAIL)
    mock.get_market_chart.return_value = HistoricalSeries.from_pairs("bitcoin", 7, MARKET_CHART["prices"])
    mock.get_coin_list.return_value = [CoinIdentity.model_validate(c) for c in CATALOG]
    return mock


@pytest.fixture
def bitcoin() -> CoinSummary:
    return CoinSummary.model_validate(BITCOIN_ROW)


@pytest.fixture
def bitcoin_detail() -> CoinDetail:
    return CoinDetail.model_validate(BITCOIN_DETAIL)
