"""
Search - Free-text Coin Lookup

Resolves a query to at most N coins: the full catalog is fetched, filtered
locally by case-insensitive substring match on name, symbol or id, truncated
in catalog order, then hydrated with market data in a single request.

Files that USE this module:
- coinwatch.adapters.telegram.handlers (/search command)
- tests.test_search (unit tests)

Files that this module USES:
- coinwatch.application.market_service (catalog fetch and hydration)
- coinwatch.config (result limit)
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from coinwatch.application.market_service import MarketService
from coinwatch.config import settings
from coinwatch.domain.models import CoinIdentity, CoinSummary

log = logging.getLogger(__name__)


def match_identities(
    catalog: Iterable[CoinIdentity], query: str, limit: int = 25
) -> List[CoinIdentity]:
    """
    Filter catalog entries whose name, symbol or id contains the query.

    Matching is a plain case-insensitive substring test on each field.
    Results keep catalog order; there is no relevance ranking.

    Args:
        catalog: Catalog entries in source order
        query: Free text; an empty query matches nothing
        limit: Maximum number of entries returned

    Returns:
        The first `limit` matching entries
    """
    if not query or limit <= 0:
        return []

    needle = query.lower()
    matches: List[CoinIdentity] = []
    for coin in catalog:
        if (
            needle in coin.name.lower()
            or needle in coin.symbol.lower()
            or needle in coin.id.lower()
        ):
            matches.append(coin)
            if len(matches) >= limit:
                break
    return matches


async def search_coins(
    service: MarketService, query: str, limit: Optional[int] = None
) -> List[CoinSummary]:
    """
    Search coins by free text and return hydrated market rows.

    Args:
        service: MarketService used for both requests
        query: Free text; empty means no results and no requests (so does limit <= 0)
        limit: Maximum number of matches to hydrate (defaults to settings.search_result_limit)

    Returns:
        Matching CoinSummary rows ordered by market cap, or [] when nothing
        matches or a request failed (the failure has been notified)
    """
    if not query:
        return []

    if limit is None:
        limit = settings.search_result_limit
    if limit <= 0:
        return []
    catalog = await service.fetch_all_coin_identities()
    if not catalog:
        return []

    matched = match_identities(catalog, query, limit=limit)
    log.info("Search %r matched %d of %d catalog entries", query, len(matched), len(catalog))
    if not matched:
        return []

    return await service.fetch_coins_by_ids([coin.id for coin in matched])
