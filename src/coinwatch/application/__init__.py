"""
Application Layer - Use Cases and Services

This package contains the services that sit between the CoinGecko client and
the bot: failure-absorbing fetches, search, chart shaping and polling views.
"""

from coinwatch.application.market_service import MarketService
from coinwatch.application.notifications import LoggingNotifier, Notifier
from coinwatch.application.search import match_identities, search_coins
from coinwatch.application.charts import PriceChart, shape_chart
from coinwatch.application.views import CoinDetailView, MarketListView, RequestSequencer

__all__ = [
    "MarketService",
    "Notifier",
    "LoggingNotifier",
    "search_coins",
    "match_identities",
    "PriceChart",
    "shape_chart",
    "MarketListView",
    "CoinDetailView",
    "RequestSequencer",
]
