"""Query parameter models for the CoinGecko REST endpoints."""
from pydantic import BaseModel


class MarketsParams(BaseModel):
    """Params for /coins/markets (paged listing)."""

    vs_currency: str = "usd"
    order: str = "market_cap_desc"
    per_page: int = 25
    page: int = 1
    sparkline: str = "false"
    price_change_percentage: str = "24h"


class MarketsByIdsParams(BaseModel):
    """Params for /coins/markets scoped to a set of ids (search hydration)."""

    vs_currency: str = "usd"
    ids: str
    order: str = "market_cap_desc"
    per_page: int  # one page holding every requested id
    sparkline: str = "false"


class CoinDetailParams(BaseModel):
    """Params for /coins/{id}."""

    localization: str = "false"
    tickers: str = "false"
    market_data: str = "true"
    community_data: str = "false"
    developer_data: str = "false"


class MarketChartParams(BaseModel):
    """Params for /coins/{id}/market_chart."""

    vs_currency: str = "usd"
    days: int = 7
