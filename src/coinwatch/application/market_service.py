"""
Market Service - Consumer Contract for Market Data

This module is the boundary between the CoinGecko client and everything that
displays data. Every operation returns either the parsed entity or an explicit
empty/absent sentinel, never an exception. On failure it logs the error and
sends exactly one user-visible notification naming the failed operation.

Files that USE this module:
- coinwatch.application.search (catalog fetch and hydration)
- coinwatch.application.views (polling views)
- coinwatch.adapters.telegram.handlers (one service per chat request)
- tests.test_market_service (unit tests)

Files that this module USES:
- coinwatch.adapters.providers.base (MarketDataProvider interface)
- coinwatch.application.notifications (Notifier side channel)
- coinwatch.domain (entities and FetchError)
- coinwatch.config (default page size)
"""
from __future__ import annotations  # Enable postponed evaluation of annotations

import logging  # Standard library for logging messages
from typing import Awaitable, List, Optional, Sequence, TypeVar  # Type hints

from coinwatch.adapters.providers.base import MarketDataProvider  # Provider interface
from coinwatch.application.notifications import LoggingNotifier, Notifier  # Failure side channel
from coinwatch.config import settings  # Application configuration
from coinwatch.domain.errors import FetchError  # The single remote failure kind
from coinwatch.domain.models import (
    CoinDetail,
    CoinIdentity,
    CoinSummary,
    HistoricalSeries,
)

log = logging.getLogger(__name__)

T = TypeVar("T")

LIST_FAILED = "Failed to fetch cryptocurrency data. Please try again later."
SEARCH_FAILED = "Failed to search cryptocurrencies. Please try again later."
CATALOG_FAILED = "Failed to fetch the coin catalog. Please try again later."


def detail_failed(coin_id: str) -> str:
    return f"Failed to fetch details for {coin_id}. Please try again later."


def chart_failed(coin_id: str) -> str:
    return f"Failed to fetch chart data for {coin_id}. Please try again later."


class MarketService:
    """
    Fetch operations with failures absorbed at the boundary.

    Holds no state across calls: every call goes to the provider.
    """

    def __init__(self, provider: MarketDataProvider, notifier: Optional[Notifier] = None):
        """
        Initialize market service.

        Args:
            provider: MarketDataProvider instance (typically CoinGeckoProvider)
            notifier: Where failure messages go (defaults to LoggingNotifier)
        """
        self.provider = provider
        self.notifier = notifier or LoggingNotifier()

    async def _absorb(self, call: Awaitable[T], fallback: T, operation: str, message: str) -> T:
        """
        Await a provider call, turning a FetchError into the fallback value.

        Args:
            call: Provider coroutine
            fallback: Sentinel returned on failure ([] or None)
            operation: Short name for the log
            message: User-visible notification text
        """
        try:
            return await call
        except FetchError as e:
            log.error("%s failed: %s", operation, e)
            await self._notify(message)
            return fallback

    async def _notify(self, message: str) -> None:
        try:
            await self.notifier.notify(message)
        except Exception as e:
            log.warning("Failed to deliver notification %r: %s", message, e)

    async def fetch_coin_list(self, page: int = 1, per_page: Optional[int] = None) -> List[CoinSummary]:
        """
        Get one page of coins ordered by market cap.

        Returns:
            List of CoinSummary, or [] on failure
        """
        per_page = per_page or settings.coins_per_page
        return await self._absorb(
            self.provider.get_markets(page=page, per_page=per_page),
            [],
            f"fetch_coin_list(page={page})",
            LIST_FAILED,
        )

    async def fetch_coin_detail(self, coin_id: str) -> Optional[CoinDetail]:
        """
        Get full detail for one coin.

        Returns:
            CoinDetail, or None on failure
        """
        return await self._absorb(
            self.provider.get_coin(coin_id),
            None,
            f"fetch_coin_detail({coin_id})",
            detail_failed(coin_id),
        )

    async def fetch_historical_series(self, coin_id: str, days: int = 7) -> Optional[HistoricalSeries]:
        """
        Get the price series over the trailing number of days.

        Returns:
            HistoricalSeries, or None on failure
        """
        return await self._absorb(
            self.provider.get_market_chart(coin_id, days=days),
            None,
            f"fetch_historical_series({coin_id}, days={days})",
            chart_failed(coin_id),
        )

    async def fetch_all_coin_identities(self) -> List[CoinIdentity]:
        """
        Get the full id/name/symbol catalog.

        Returns:
            List of CoinIdentity, or [] on failure
        """
        return await self._absorb(
            self.provider.get_coin_list(),
            [],
            "fetch_all_coin_identities",
            CATALOG_FAILED,
        )

    async def fetch_coins_by_ids(self, ids: Sequence[str]) -> List[CoinSummary]:
        """
        Hydrate market rows for the given ids (one request).

        Returns:
            List of CoinSummary ordered by market cap, or [] on failure
        """
        return await self._absorb(
            self.provider.get_markets_by_ids(list(ids)),
            [],
            f"fetch_coins_by_ids({len(ids)} ids)",
            SEARCH_FAILED,
        )
