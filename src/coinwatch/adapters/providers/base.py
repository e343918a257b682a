"""
Base Provider Interface for Market Data Providers

This module defines the abstract base class for market data providers.
Implementations raise FetchError on any failure; absorbing errors is the
job of coinwatch.application.market_service.

Files that USE this module:
- coinwatch.adapters.providers.coingecko (CoinGeckoProvider implements MarketDataProvider)
- coinwatch.application.market_service (depends on the interface only)

Files that this module USES:
- coinwatch.domain.models (return types)
"""
from abc import ABC, abstractmethod
from typing import List, Sequence

from coinwatch.domain.models import CoinDetail, CoinIdentity, CoinSummary, HistoricalSeries


class MarketDataProvider(ABC):
    @abstractmethod
    async def get_markets(self, page: int = 1, per_page: int = 25) -> List[CoinSummary]:
        """Return one page of coins ordered by market cap, descending."""
        raise NotImplementedError

    @abstractmethod
    async def get_markets_by_ids(self, ids: Sequence[str]) -> List[CoinSummary]:
        """Return market rows for exactly the given coin ids."""
        raise NotImplementedError

    @abstractmethod
    async def get_coin(self, coin_id: str) -> CoinDetail:
        """Return full detail for one coin."""
        raise NotImplementedError

    @abstractmethod
    async def get_market_chart(self, coin_id: str, days: int = 7) -> HistoricalSeries:
        """Return the price series over the trailing number of days."""
        raise NotImplementedError

    @abstractmethod
    async def get_coin_list(self) -> List[CoinIdentity]:
        """Return the full id/name/symbol catalog."""
        raise NotImplementedError

    async def close(self) -> None:
        """Release network resources."""
