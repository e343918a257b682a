"""
Provider Adapters - External API Clients

This package contains adapters for external market data APIs.
All providers implement the MarketDataProvider interface.
"""

from coinwatch.adapters.providers.base import MarketDataProvider
from coinwatch.adapters.providers.coingecko import CoinGeckoProvider

__all__ = [
    "MarketDataProvider",
    "CoinGeckoProvider",
]
