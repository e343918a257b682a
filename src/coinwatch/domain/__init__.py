"""
Domain Layer - Market Data Entities

This package contains the immutable market data snapshots and domain errors.
No dependencies on infrastructure or external systems.
"""

from coinwatch.domain.models import (
    CoinDetail,
    CoinIdentity,
    CoinSummary,
    HistoricalSeries,
    PricePoint,
    TimeFrame,
)
from coinwatch.domain.errors import DomainError, FetchError

__all__ = [
    "CoinSummary",
    "CoinDetail",
    "CoinIdentity",
    "HistoricalSeries",
    "PricePoint",
    "TimeFrame",
    "DomainError",
    "FetchError",
]
