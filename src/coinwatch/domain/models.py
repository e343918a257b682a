"""
Domain Models - Market Data Snapshots

This module contains the entities parsed from CoinGecko payloads:
- Coin summaries (one row of the market list)
- Coin details (single coin page)
- Historical price series
- Catalog identities (search corpus)
- Chart time windows

Every entity is an immutable snapshot validated on construction. Unknown keys
in the payload are ignored; wrong shapes raise pydantic's ValidationError.

Files that USE this module:
- coinwatch.adapters.providers.coingecko (parses responses into these models)
- coinwatch.application.* (services, search, charts and views)
- coinwatch.adapters.formatting.formatter (renders them)
- tests.* (tests build them as fixtures)

Files that this module USES:
- pydantic (schema validation)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from enum import Enum  # Enumeration base for chart windows
from typing import Optional  # Type hints for optional values

from pydantic import BaseModel, ConfigDict, Field, field_validator  # Schema-validated models


class _Snapshot(BaseModel):
    """Base for read-only payload snapshots."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class Roi(_Snapshot):
    """Return on investment block of a market row."""
    times: Optional[float] = None
    currency: Optional[str] = None
    percentage: Optional[float] = None


class CoinIdentity(_Snapshot):
    """Catalog entry used as the search corpus."""
    id: str
    name: str
    symbol: str


class CoinSummary(_Snapshot):
    """
    One row of the market list, ordered by market cap.

    Attributes:
        id: Stable lowercase slug, the join key across entities
        symbol: Ticker symbol (lowercase as returned, e.g. 'btc')
        name: Display name
        image: Icon URL
        current_price: Price in USD
        market_cap: Market capitalization in USD
        market_cap_rank: Rank by market cap, absent for unranked coins
        total_volume: 24h trading volume in USD
        price_change_24h: Signed 24h price change in USD
        price_change_percentage_24h: Signed 24h price change in percent
    """
    id: str
    symbol: str
    name: str
    image: Optional[str] = None
    current_price: Optional[float] = Field(default=None, ge=0)
    market_cap: Optional[float] = Field(default=None, ge=0)
    market_cap_rank: Optional[int] = Field(default=None, ge=1)
    total_volume: Optional[float] = Field(default=None, ge=0)
    price_change_24h: Optional[float] = None
    price_change_percentage_24h: Optional[float] = None

    # Carried through unmodified
    fully_diluted_valuation: Optional[float] = None
    high_24h: Optional[float] = None
    low_24h: Optional[float] = None
    market_cap_change_24h: Optional[float] = None
    market_cap_change_percentage_24h: Optional[float] = None
    circulating_supply: Optional[float] = None
    total_supply: Optional[float] = None
    max_supply: Optional[float] = None
    ath: Optional[float] = None
    ath_change_percentage: Optional[float] = None
    ath_date: Optional[str] = None
    atl: Optional[float] = None
    atl_change_percentage: Optional[float] = None
    atl_date: Optional[str] = None
    roi: Optional[Roi] = None
    last_updated: Optional[str] = None


class CoinDescription(_Snapshot):
    """Long-form description; 'en' holds untrusted HTML."""
    en: str = ""

    @field_validator("en", mode="before")
    @classmethod
    def _none_to_empty(cls, v):
        return "" if v is None else v


class CoinImages(_Snapshot):
    thumb: Optional[str] = None
    small: Optional[str] = None
    large: Optional[str] = None


class UsdAmount(_Snapshot):
    """Per-currency amount block, only the USD entry is kept."""
    usd: Optional[float] = None


class CoinMarketData(_Snapshot):
    """USD-denominated market block of a coin detail."""
    current_price: UsdAmount = UsdAmount()
    market_cap: UsdAmount = UsdAmount()
    price_change_percentage_24h: Optional[float] = None
    price_change_percentage_7d: Optional[float] = None
    price_change_percentage_30d: Optional[float] = None
    price_change_percentage_1y: Optional[float] = None


class CoinDetail(_Snapshot):
    """Full detail for a single coin."""
    id: str
    symbol: str
    name: str
    description: CoinDescription = CoinDescription()
    image: CoinImages = CoinImages()
    market_data: CoinMarketData = CoinMarketData()


class PricePoint(_Snapshot):
    """A (timestamp, price) sample; timestamp in milliseconds since the epoch."""
    timestamp_ms: int
    price: float


class HistoricalSeries(_Snapshot):
    """
    Price series for a coin over the trailing window.

    Points keep the chronological order returned by the source.
    """
    coin_id: str
    days: int
    prices: tuple[PricePoint, ...] = ()

    @classmethod
    def from_pairs(cls, coin_id: str, days: int, pairs: list) -> "HistoricalSeries":
        """Build a series from the raw [[timestamp, price], ...] list."""
        points = []
        for pair in pairs:
            if not isinstance(pair, (list, tuple)) or len(pair) < 2:
                raise ValueError(f"Malformed price pair: {pair!r}")
            points.append(PricePoint(timestamp_ms=int(pair[0]), price=pair[1]))
        return cls(coin_id=coin_id, days=days, prices=tuple(points))


class TimeFrame(str, Enum):
    """Chart window selectable by the user."""
    WEEK = "7d"
    MONTH = "30d"
    QUARTER = "90d"
    YEAR = "1y"

    @property
    def days(self) -> int:
        return _TIMEFRAME_DAYS[self]

    @classmethod
    def parse(cls, text: str) -> "TimeFrame":
        """
        Parse a window label such as '7d' or '1Y'.

        Raises:
            ValueError: If the label is not one of 7d, 30d, 90d, 1y
        """
        try:
            return cls(text.strip().lower())
        except ValueError:
            choices = ", ".join(tf.value for tf in cls)
            raise ValueError(f"Unknown time window {text!r}, expected one of {choices}") from None


_TIMEFRAME_DAYS = {
    TimeFrame.WEEK: 7,
    TimeFrame.MONTH: 30,
    TimeFrame.QUARTER: 90,
    TimeFrame.YEAR: 365,
}
