# src/coinwatch/adapters/telegram/jobs.py
"""
Telegram Jobs - Scheduled Refresh of Watched Views

A chat that runs /watch gets one repeating job holding one view: either a
MarketListView (a market page) or a CoinDetailView (a coin's detail card and
price chart). Each tick refreshes the view and edits the message that shows
it (the first tick sends that message). Buttons under that message change the
watched page or chart window and refresh through the same view, so a slower
tick for the old page or window is dropped instead of overwriting the new one.
Ticks are independent: a failed fetch only affects its own tick. /unwatch
closes the view and removes the job.

Files that USE this module:
- coinwatch.adapters.telegram.handlers (schedules, drives and removes watch jobs)
- tests.test_telegram (unit tests)

Files that this module USES:
- coinwatch.application.views (MarketListView, CoinDetailView)
- coinwatch.adapters.formatting.formatter (message layouts)
- coinwatch.adapters.telegram.keyboards (buttons on watch messages)
- coinwatch.config (description length)
"""
from __future__ import annotations  # Enable postponed evaluation of annotations

import logging  # Standard library for logging messages
from dataclasses import dataclass  # Decorator for creating data classes
from typing import Optional, Tuple, Union  # Type hints

from telegram import Bot, InlineKeyboardMarkup  # Telegram bot API types
from telegram.error import BadRequest, TelegramError  # Telegram API exceptions
from telegram.ext import ContextTypes  # Telegram bot context type for job callbacks

from coinwatch.adapters.formatting.formatter import (  # Message layouts
    chart_card,
    coin_detail_card,
    coin_table,
    updated_footer,
)
from coinwatch.adapters.telegram.keyboards import (  # Buttons on watch messages
    WATCH_PAGE_CALLBACK,
    page_keyboard,
    watch_timeframe_keyboard,
)
from coinwatch.application.views import CoinDetailView, MarketListView, PollingView
from coinwatch.config import settings  # Description length for the detail card

logger = logging.getLogger(__name__)

WATCH_JOB_PREFIX = "watch:"


def watch_job_name(chat_id: Union[int, str]) -> str:
    """Job name used to find the watch job of a chat."""
    return f"{WATCH_JOB_PREFIX}{chat_id}"


@dataclass
class WatchState:
    """Per-chat state carried in job.data."""
    view: PollingView
    message_id: Optional[int] = None


async def _refresh_view(view: PollingView) -> bool:
    """Refresh a view; True when there is something new to show."""
    if isinstance(view, CoinDetailView):
        if not await view.refresh() or view.detail is None:
            return False
        return await view.refresh_chart()
    return await view.refresh()


def render_watch(view: PollingView) -> Tuple[str, Optional[InlineKeyboardMarkup]]:
    """Message text and buttons for a watched view."""
    if isinstance(view, CoinDetailView):
        text = "\n\n".join([
            coin_detail_card(view.detail, description_max_chars=settings.description_max_chars),
            chart_card(view.chart),
            updated_footer(view.updated_at),
        ])
        return text, watch_timeframe_keyboard(view.timeframe)
    if isinstance(view, MarketListView):
        text = coin_table(view.coins, page=view.page, updated_at=view.updated_at)
        return text, page_keyboard(view.page, has_next=bool(view.coins), prefix=WATCH_PAGE_CALLBACK)
    raise TypeError(f"Cannot render {type(view).__name__}")


async def refresh_watch(bot: Bot, chat_id: int, state: WatchState) -> None:
    """
    Refresh a watched view and show it in the chat.

    Sends a new message when state.message_id is None, edits it otherwise.
    Nothing is sent when the view is closed or the response was superseded.
    """
    if not await _refresh_view(state.view):
        return

    text, keyboard = render_watch(state.view)
    try:
        if state.message_id is None:
            message = await bot.send_message(chat_id=chat_id, text=text, reply_markup=keyboard)
            state.message_id = message.message_id
        else:
            await bot.edit_message_text(
                chat_id=chat_id,
                message_id=state.message_id,
                text=text,
                reply_markup=keyboard,
            )
    except BadRequest as e:
        reason = str(e).lower()
        if "not modified" in reason:
            logger.debug("Watch message for chat %s unchanged", chat_id)
        elif "too long" in reason:
            # Resending would fail the same way; keep the last good message
            logger.error("Watch message for chat %s exceeds the Telegram limit (%d chars)", chat_id, len(text))
        else:
            # Most likely deleted by the user; post a fresh message next tick
            logger.info("Watch message for chat %s not editable (%s), resending next tick", chat_id, e)
            state.message_id = None
    except TelegramError as e:
        logger.warning("Failed to deliver watch update to chat %s: %s", chat_id, e)


async def refresh_watch_job(context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Job callback: one tick of a chat's watch.

    Args:
        context: Job context; context.job.data is a WatchState and
            context.job.chat_id the target chat
    """
    job = context.job
    state: WatchState = job.data

    if state.view.closed:
        # Closed between ticks: make sure nothing fires again
        job.schedule_removal()
        return

    await refresh_watch(context.bot, job.chat_id, state)
