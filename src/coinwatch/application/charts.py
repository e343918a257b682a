"""
Charts - Time-windowed Price Chart Shaping

Turns a HistoricalSeries into display-ready chart data: labelled points,
price range, a padded y-axis domain and the change over the window.

Files that USE this module:
- coinwatch.application.views (CoinDetailView keeps the shaped chart)
- coinwatch.adapters.formatting.formatter (chart card)
- tests.test_charts (unit tests)

Files that this module USES:
- coinwatch.domain.models (HistoricalSeries, TimeFrame)
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from coinwatch.domain.models import HistoricalSeries, TimeFrame

DOMAIN_PADDING = 0.1  # 10% of the price range above and below


@dataclass(frozen=True)
class ChartPoint:
    timestamp: datetime
    label: str  # e.g. "Mar 5"
    price: float


@dataclass(frozen=True)
class PriceChart:
    """
    Chart data for one coin over one window.

    Attributes:
        title: Chart title, e.g. "Bitcoin Price (7d)"
        timeframe: Window the series covers
        points: Samples in chronological order
        low: Lowest price (None when empty)
        high: Highest price (None when empty)
        domain: Y-axis range padded by DOMAIN_PADDING of (high - low)
    """
    title: str
    timeframe: TimeFrame
    points: tuple[ChartPoint, ...]
    low: Optional[float] = None
    high: Optional[float] = None
    domain: Optional[tuple[float, float]] = None

    @property
    def is_empty(self) -> bool:
        return not self.points

    @property
    def first_price(self) -> Optional[float]:
        return self.points[0].price if self.points else None

    @property
    def last_price(self) -> Optional[float]:
        return self.points[-1].price if self.points else None

    @property
    def change_percentage(self) -> Optional[float]:
        """Change from first to last sample in percent, None if undefined."""
        first, last = self.first_price, self.last_price
        if first is None or last is None or first == 0:
            return None
        return (last - first) / first * 100.0


def point_label(ts: datetime) -> str:
    """Format a sample time as 'MMM d' (e.g. 'Jan 7')."""
    return f"{ts:%b} {ts.day}"


def shape_chart(series: HistoricalSeries, timeframe: TimeFrame, title: str) -> PriceChart:
    """
    Shape a historical series into chart data.

    Timestamps are interpreted as UTC.

    Args:
        series: Series returned by the API
        timeframe: Window the series was requested for
        title: Display title

    Returns:
        PriceChart; empty series give a chart without points or range
    """
    samples = []
    for p in series.prices:
        ts = datetime.fromtimestamp(p.timestamp_ms / 1000, tz=timezone.utc)
        samples.append(ChartPoint(timestamp=ts, label=point_label(ts), price=p.price))
    points = tuple(samples)

    if not points:
        return PriceChart(title=title, timeframe=timeframe, points=())

    prices = [p.price for p in points]
    low, high = min(prices), max(prices)
    padding = (high - low) * DOMAIN_PADDING
    return PriceChart(
        title=title,
        timeframe=timeframe,
        points=points,
        low=low,
        high=high,
        domain=(low - padding, high + padding),
    )


def chart_title(coin_name: str, timeframe: TimeFrame) -> str:
    return f"{coin_name} Price ({timeframe.value})"
