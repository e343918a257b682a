"""
Views - Polling Consumers of the Market Service

A view holds the latest displayed snapshot for one screen (a market list page,
or a coin detail with its chart) and knows how to refresh it. Views are driven
by repeating jobs; each refresh is independent of the previous one.

Two rules apply to every slot a view owns:
- Only the most recently initiated request may update the slot. A slower
  response for superseded inputs (an old page, an old time window) is dropped.
- Once closed, a view issues no further fetches and drops in-flight responses.

Files that USE this module:
- coinwatch.adapters.telegram.handlers (creates views for /watch)
- coinwatch.adapters.telegram.jobs (refreshes watched views)
- tests.test_views (unit tests)

Files that this module USES:
- coinwatch.application.market_service (fetch operations)
- coinwatch.application.charts (chart shaping)
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from coinwatch.application.charts import PriceChart, chart_title, shape_chart
from coinwatch.application.market_service import MarketService
from coinwatch.domain.models import CoinDetail, CoinSummary, TimeFrame

log = logging.getLogger(__name__)


class RequestSequencer:
    """Issues increasing tokens; only the latest token is current."""

    def __init__(self) -> None:
        self._latest = 0

    def issue(self) -> int:
        self._latest += 1
        return self._latest

    def is_current(self, token: int) -> bool:
        return token == self._latest

    def invalidate(self) -> None:
        """Make every token issued so far stale."""
        self._latest += 1


class PollingView:
    """Base for views refreshed on a timer."""

    def __init__(self, service: MarketService):
        self.service = service
        self.closed = False
        self.updated_at: Optional[datetime] = None

    def close(self) -> None:
        """Stop the view: no more fetches, pending responses are discarded."""
        self.closed = True

    def _accept(self, seq: RequestSequencer, token: int, what: str) -> bool:
        if self.closed:
            log.debug("Dropping %s response: view closed", what)
            return False
        if not seq.is_current(token):
            log.debug("Dropping stale %s response (token %d)", what, token)
            return False
        self.updated_at = datetime.now(timezone.utc)
        return True


class MarketListView(PollingView):
    """One page of the market list ordered by market cap."""

    def __init__(self, service: MarketService, page: int = 1, per_page: Optional[int] = None):
        super().__init__(service)
        self.page = max(1, page)
        self.per_page = per_page
        self.coins: tuple[CoinSummary, ...] = ()
        self._seq = RequestSequencer()

    def set_page(self, page: int) -> None:
        page = max(1, page)
        if page != self.page:
            self.page = page
            self._seq.invalidate()

    async def refresh(self) -> bool:
        """
        Fetch the current page.

        Returns:
            True if the response was applied to the view
        """
        if self.closed:
            return False
        token = self._seq.issue()
        coins = await self.service.fetch_coin_list(self.page, per_page=self.per_page)
        if not self._accept(self._seq, token, "coin list"):
            return False
        self.coins = tuple(coins)
        return True


class CoinDetailView(PollingView):
    """Detail card plus price chart for one coin."""

    def __init__(self, service: MarketService, coin_id: str, timeframe: TimeFrame = TimeFrame.WEEK):
        super().__init__(service)
        self.coin_id = coin_id
        self.timeframe = timeframe
        self.detail: Optional[CoinDetail] = None
        self.chart: Optional[PriceChart] = None
        self._detail_seq = RequestSequencer()
        self._chart_seq = RequestSequencer()

    def set_timeframe(self, timeframe: TimeFrame) -> None:
        if timeframe != self.timeframe:
            self.timeframe = timeframe
            self._chart_seq.invalidate()

    async def refresh(self) -> bool:
        """Fetch the coin detail; True if applied."""
        if self.closed:
            return False
        token = self._detail_seq.issue()
        detail = await self.service.fetch_coin_detail(self.coin_id)
        if not self._accept(self._detail_seq, token, "coin detail"):
            return False
        self.detail = detail
        return True

    async def refresh_chart(self) -> bool:
        """Fetch the price series for the current window; True if applied."""
        if self.closed:
            return False
        timeframe = self.timeframe
        token = self._chart_seq.issue()
        series = await self.service.fetch_historical_series(self.coin_id, days=timeframe.days)
        if not self._accept(self._chart_seq, token, "chart"):
            return False
        if series is None:
            self.chart = None
        else:
            name = self.detail.name if self.detail else self.coin_id
            self.chart = shape_chart(series, timeframe, chart_title(name, timeframe))
        return True
