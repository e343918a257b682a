"""
CoinGecko API Provider for Cryptocurrency Market Data

This module implements the CoinGecko REST client: the paged market list,
single coin detail, historical price series, the full id/name/symbol catalog
and the ids-scoped market query used by search.

Each method performs exactly one request. There is no caching and no retry.
Any failure (transport, timeout, HTTP status, JSON, schema) is raised as
FetchError.

Files that USE this module:
- coinwatch.app (creates the shared provider instance)
- tests.test_providers (unit tests)

Files that this module USES:
- coinwatch.adapters.providers.base (MarketDataProvider interface)
- coinwatch.adapters.providers.params (query parameter models)
- coinwatch.domain (entities and FetchError)
- coinwatch.config (settings for base URL and timeout)
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter, ValidationError

from coinwatch.adapters.providers.base import MarketDataProvider
from coinwatch.adapters.providers.params import (
    CoinDetailParams,
    MarketChartParams,
    MarketsByIdsParams,
    MarketsParams,
)
from coinwatch.config import settings
from coinwatch.domain.errors import FetchError
from coinwatch.domain.models import CoinDetail, CoinIdentity, CoinSummary, HistoricalSeries

log = logging.getLogger(__name__)

_SUMMARIES = TypeAdapter(List[CoinSummary])
_IDENTITIES = TypeAdapter(List[CoinIdentity])


class CoinGeckoProvider(MarketDataProvider):
    """
    Async client for the public CoinGecko v3 API.

    Coin ids are CoinGecko slugs ('bitcoin', 'usd-coin'). The full list is
    served by /coins/list.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize CoinGecko provider.

        Args:
            base_url: Optional API base URL (defaults to settings.coingecko_base_url)
            timeout: Optional HTTP timeout in seconds (defaults to settings.http_timeout_seconds)
            client: Optional preconfigured httpx.AsyncClient (tests inject a mock transport)
        """
        self.base_url = (base_url or settings.coingecko_base_url).rstrip("/")
        self.timeout = timeout or settings.http_timeout_seconds
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers={"Accept": "application/json"},
        )

    async def _get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Issue one GET request and decode the JSON body.

        Raises:
            FetchError: On any transport, status or decoding failure
        """
        try:
            log.debug("GET %s params=%s", path, params)
            resp = await self._client.get(path, params=params)
            resp.raise_for_status()
            return resp.json()
        except httpx.TimeoutException:
            log.error("CoinGecko timeout after %d seconds: %s", self.timeout, path)
            raise FetchError(f"CoinGecko timeout after {self.timeout}s", resource=path)
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            log.error("CoinGecko returned HTTP %d for %s", status, path)
            raise FetchError(f"CoinGecko returned HTTP {status}", resource=path)
        except httpx.HTTPError as e:
            log.error("CoinGecko request failed for %s: %s", path, e)
            raise FetchError(f"CoinGecko request failed: {e}", resource=path)
        except ValueError as e:
            log.error("CoinGecko returned invalid JSON for %s: %s", path, e)
            raise FetchError(f"CoinGecko returned invalid JSON: {e}", resource=path)

    @staticmethod
    def _coin_path(coin_id: str, suffix: str = "") -> str:
        # The id becomes one path segment; never let it add segments or a query
        return f"/coins/{quote(coin_id, safe='')}{suffix}"

    async def get_markets(self, page: int = 1, per_page: int = 25) -> List[CoinSummary]:
        """
        Get one page of coins ordered by market cap, descending.

        Args:
            page: 1-indexed page number
            per_page: Rows per page

        Returns:
            List of CoinSummary in the order returned by the API
        """
        params = MarketsParams(page=page, per_page=per_page).model_dump()
        data = await self._get_json("/coins/markets", params=params)
        coins = self._parse_summaries(data, "/coins/markets")
        log.info("CoinGecko markets page=%d per_page=%d -> %d coins", page, per_page, len(coins))
        return coins

    async def get_markets_by_ids(self, ids: Sequence[str]) -> List[CoinSummary]:
        """
        Get market rows for exactly the given ids, ordered by market cap.

        Args:
            ids: CoinGecko ids to hydrate

        Returns:
            List of CoinSummary (ids unknown to the API are simply absent)
        """
        if not ids:
            return []
        params = MarketsByIdsParams(ids=",".join(ids), per_page=len(ids)).model_dump()
        data = await self._get_json("/coins/markets", params=params)
        coins = self._parse_summaries(data, "/coins/markets")
        log.info("CoinGecko markets for %d ids -> %d coins", len(ids), len(coins))
        return coins

    async def get_coin(self, coin_id: str) -> CoinDetail:
        """
        Get full detail for one coin (market data on, tickers/community/developer off).
        """
        path = self._coin_path(coin_id)
        data = await self._get_json(path, params=CoinDetailParams().model_dump())
        try:
            return CoinDetail.model_validate(data)
        except ValidationError as e:
            log.error("CoinGecko detail payload for %s failed validation: %s", coin_id, e)
            raise FetchError(f"Unexpected coin detail payload for {coin_id}", resource=path)

    async def get_market_chart(self, coin_id: str, days: int = 7) -> HistoricalSeries:
        """
        Get the USD price series for a coin over the trailing number of days.

        Returns:
            HistoricalSeries with points in the order returned (chronological)
        """
        path = self._coin_path(coin_id, "/market_chart")
        data = await self._get_json(path, params=MarketChartParams(days=days).model_dump())
        if not isinstance(data, dict) or not isinstance(data.get("prices"), list):
            log.error("CoinGecko market_chart for %s missing 'prices' list", coin_id)
            raise FetchError(f"Market chart for {coin_id} is missing 'prices'", resource=path)
        try:
            series = HistoricalSeries.from_pairs(coin_id, days, data["prices"])
        except (ValueError, TypeError) as e:
            log.error("CoinGecko market_chart for %s has malformed prices: %s", coin_id, e)
            raise FetchError(f"Malformed price series for {coin_id}", resource=path)
        log.debug("CoinGecko market_chart %s days=%d -> %d points", coin_id, days, len(series.prices))
        return series

    async def get_coin_list(self) -> List[CoinIdentity]:
        """Get the full catalog of coin ids, names and symbols."""
        data = await self._get_json("/coins/list")
        try:
            coins = _IDENTITIES.validate_python(data)
        except ValidationError as e:
            log.error("CoinGecko coin list failed validation: %s", e)
            raise FetchError("Unexpected coin list payload", resource="/coins/list")
        log.info("CoinGecko catalog loaded: %d coins", len(coins))
        return coins

    @staticmethod
    def _parse_summaries(data: Any, path: str) -> List[CoinSummary]:
        try:
            return _SUMMARIES.validate_python(data)
        except ValidationError as e:
            log.error("CoinGecko markets payload failed validation: %s", e)
            raise FetchError("Unexpected markets payload", resource=path)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
