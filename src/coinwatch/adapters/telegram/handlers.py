# src/coinwatch/adapters/telegram/handlers.py
"""
Telegram Handlers - Command Processing and User Interaction

This module contains the bot commands: the market list (/top), coin detail
(/coin), price charts (/chart), search (/search) and live watching of a market
page or a coin (/watch, /unwatch). Market lists carry Prev/Next buttons and
charts carry one button per time window; on a watched message those buttons
steer the running watch instead of fetching on their own. User input is
validated before any request is made.
Fetch failures reach the chat through TelegramNotifier; handlers never see
exceptions from the data layer.

Files that USE this module:
- coinwatch.adapters.telegram.bot (build_handlers registers these handlers)

Files that this module USES:
- coinwatch.application.market_service (MarketService per request)
- coinwatch.application.search (search_coins)
- coinwatch.application.views (MarketListView, CoinDetailView)
- coinwatch.adapters.formatting.formatter (message layouts)
- coinwatch.adapters.telegram.jobs (watch job callback, naming and refresh)
- coinwatch.adapters.telegram.keyboards (inline buttons and callback data)
- coinwatch.adapters.telegram.notifier (TelegramNotifier)
- coinwatch.shared.validators (input validation)
- coinwatch.config (settings)
"""
from __future__ import annotations

import logging
from typing import List, Optional

from telegram import CallbackQuery, InlineKeyboardMarkup, Update
from telegram.error import BadRequest
from telegram.ext import BaseHandler, CallbackQueryHandler, CommandHandler, ContextTypes

from coinwatch.adapters.formatting.formatter import (
    chart_card,
    coin_detail_card,
    coin_table,
    search_results,
)
from coinwatch.adapters.telegram.jobs import WatchState, refresh_watch, refresh_watch_job, watch_job_name
from coinwatch.adapters.telegram.keyboards import (
    CHART_CALLBACK,
    TOP_CALLBACK,
    WATCH_CHART_CALLBACK,
    WATCH_PAGE_CALLBACK,
    page_keyboard,
    timeframe_keyboard,
)
from coinwatch.adapters.telegram.notifier import TelegramNotifier
from coinwatch.application.market_service import MarketService
from coinwatch.application.search import search_coins
from coinwatch.application.views import CoinDetailView, MarketListView
from coinwatch.config import settings
from coinwatch.domain.models import TimeFrame
from coinwatch.shared.validators import parse_page, sanitize_query, validate_coin_id

logger = logging.getLogger(__name__)

PROVIDER_KEY = "provider"

HELP_TEXT = (
    "🪙 CoinWatch - cryptocurrency market data from CoinGecko\n"
    "\n"
    "/top [page] - top coins by market cap\n"
    "/coin <id> - coin details (e.g. /coin bitcoin)\n"
    "/chart <id> [7d|30d|90d|1y] - price chart\n"
    "/search <query> - search by name, symbol or id\n"
    "/watch [page] - keep a market page updated every minute\n"
    "/watch <id> [7d|30d|90d|1y] - keep a coin and its chart updated\n"
    "/unwatch - stop watching"
)


def _service(update: Update, context: ContextTypes.DEFAULT_TYPE) -> MarketService:
    """Build a MarketService whose failure notifications go to the current chat."""
    provider = context.bot_data[PROVIDER_KEY]
    notifier = TelegramNotifier(context.bot, update.effective_chat.id)
    return MarketService(provider, notifier)


def _coin_id_arg(args: List[str]) -> Optional[str]:
    if not args:
        return None
    coin_id = args[0].strip().lower()
    return coin_id if validate_coin_id(coin_id) else None


async def _edit(query: CallbackQuery, text: str, reply_markup: Optional[InlineKeyboardMarkup]) -> None:
    try:
        await query.edit_message_text(text, reply_markup=reply_markup)
    except BadRequest as e:
        # Same button pressed twice
        if "not modified" not in str(e).lower():
            raise
        logger.debug("Callback message unchanged: %s", query.data)


async def _chart_view(update: Update, context: ContextTypes.DEFAULT_TYPE, coin_id: str, timeframe: TimeFrame) -> Optional[CoinDetailView]:
    """Load detail then chart; None when the coin could not be loaded (already notified)."""
    view = CoinDetailView(_service(update, context), coin_id, timeframe)
    await view.refresh()
    if view.detail is None:
        return None
    await view.refresh_chart()
    return view


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start and /help - show usage."""
    await update.message.reply_text(HELP_TEXT)


async def top(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /top [page] - one page of coins ordered by market cap."""
    try:
        page = parse_page(context.args[0] if context.args else None)
    except ValueError:
        await update.message.reply_text("Usage: /top [page] (page is a positive number)")
        return

    coins = await _service(update, context).fetch_coin_list(page)
    await update.message.reply_text(
        coin_table(coins, page=page),
        reply_markup=page_keyboard(page, has_next=bool(coins)),
    )


async def top_page_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle Prev/Next buttons under a market list."""
    query = update.callback_query
    await query.answer()

    try:
        page = parse_page(query.data[len(TOP_CALLBACK):])
    except ValueError:
        await query.edit_message_text("Invalid page selection")
        return

    coins = await _service(update, context).fetch_coin_list(page)
    await _edit(query, coin_table(coins, page=page), page_keyboard(page, has_next=bool(coins)))


async def coin(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /coin <id> - detail card for one coin."""
    coin_id = _coin_id_arg(context.args)
    if coin_id is None:
        await update.message.reply_text("Usage: /coin <id> (e.g. /coin bitcoin)")
        return

    view = CoinDetailView(_service(update, context), coin_id)
    await view.refresh()
    if view.detail is None:
        await update.message.reply_text(
            "Cryptocurrency not found\n"
            "The cryptocurrency you are looking for does not exist or could not be loaded."
        )
        return
    await update.message.reply_text(
        coin_detail_card(view.detail, description_max_chars=settings.description_max_chars)
    )


async def chart(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /chart <id> [window] - price chart for a time window."""
    coin_id = _coin_id_arg(context.args)
    try:
        timeframe = TimeFrame.parse(context.args[1] if len(context.args) > 1 else settings.default_timeframe)
    except ValueError:
        timeframe = None
    if coin_id is None or timeframe is None:
        await update.message.reply_text("Usage: /chart <id> [7d|30d|90d|1y] (e.g. /chart bitcoin 30d)")
        return

    view = await _chart_view(update, context, coin_id, timeframe)
    if view is None:
        return
    await update.message.reply_text(
        chart_card(view.chart),
        reply_markup=timeframe_keyboard(coin_id, timeframe),
    )


async def chart_window_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle the time window buttons under a chart."""
    query = update.callback_query
    await query.answer()

    window, _, coin_id = query.data[len(CHART_CALLBACK):].partition(":")
    try:
        timeframe = TimeFrame.parse(window)
    except ValueError:
        timeframe = None
    if timeframe is None or not validate_coin_id(coin_id):
        await query.edit_message_text("Invalid chart selection")
        return

    view = await _chart_view(update, context, coin_id, timeframe)
    if view is None:
        return
    await _edit(query, chart_card(view.chart), timeframe_keyboard(coin_id, timeframe))


async def search(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /search <query> - free-text search over the coin catalog."""
    query = sanitize_query(" ".join(context.args or []))
    if not query:
        await update.message.reply_text("Usage: /search <query> (e.g. /search doge)")
        return

    await update.message.reply_text(f'Searching for "{query}"...')
    results = await search_coins(_service(update, context), query)
    await update.message.reply_text(search_results(query, results))


def _remove_watch_jobs(context: ContextTypes.DEFAULT_TYPE, chat_id: int) -> int:
    """Close and unschedule every watch job of a chat; returns how many were removed."""
    jobs = context.job_queue.get_jobs_by_name(watch_job_name(chat_id))
    for job in jobs:
        job.data.view.close()
        job.schedule_removal()
    return len(jobs)


def _watch_state(context: ContextTypes.DEFAULT_TYPE, chat_id: int) -> Optional[WatchState]:
    """The running watch of a chat, if any."""
    if context.job_queue is None:
        return None
    for job in context.job_queue.get_jobs_by_name(watch_job_name(chat_id)):
        if not job.data.view.closed:
            return job.data
    return None


async def watch(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /watch [page] and /watch <id> [window].

    A number (or nothing) watches a market page; anything else is a coin id
    whose detail card and chart are refreshed every poll interval. A chat has
    at most one watch; starting a new one replaces it.
    """
    if context.job_queue is None:
        logger.error("JobQueue unavailable; install python-telegram-bot[job-queue]")
        await update.message.reply_text("⚠️ Live updates are not available on this bot.")
        return

    args = context.args or []
    if args and not args[0].lstrip("+-").isdigit():
        coin_id = _coin_id_arg(args)
        try:
            timeframe = TimeFrame.parse(args[1] if len(args) > 1 else settings.default_timeframe)
        except ValueError:
            timeframe = None
        if coin_id is None or timeframe is None:
            await update.message.reply_text("Usage: /watch <id> [7d|30d|90d|1y] (e.g. /watch bitcoin 30d)")
            return
        view = CoinDetailView(_service(update, context), coin_id, timeframe)
        target = f"{coin_id} ({timeframe.value})"
    else:
        try:
            page = parse_page(args[0] if args else None)
        except ValueError:
            await update.message.reply_text("Usage: /watch [page] (page is a positive number)")
            return
        view = MarketListView(_service(update, context), page)
        target = f"page {page}"

    chat_id = update.effective_chat.id
    _remove_watch_jobs(context, chat_id)

    context.job_queue.run_repeating(
        callback=refresh_watch_job,
        interval=settings.poll_interval_seconds,
        first=0,  # post immediately
        name=watch_job_name(chat_id),
        chat_id=chat_id,
        data=WatchState(view=view),
    )
    logger.info("Chat %s watching %s every %ds", chat_id, target, settings.poll_interval_seconds)
    await update.message.reply_text(
        f"👀 Watching {target}, updated every {settings.poll_interval_seconds} seconds. /unwatch to stop."
    )


async def _watch_ended(query: CallbackQuery) -> None:
    await query.answer("This watch has stopped. Use /watch to start a new one.")
    try:
        await query.edit_message_reply_markup(reply_markup=None)
    except BadRequest as e:
        logger.debug("Could not remove stale watch buttons: %s", e)


async def watch_page_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle Prev/Next under a watched market page: move the watch to that page."""
    query = update.callback_query
    chat_id = update.effective_chat.id
    state = _watch_state(context, chat_id)
    if state is None or not isinstance(state.view, MarketListView):
        await _watch_ended(query)
        return

    try:
        page = parse_page(query.data[len(WATCH_PAGE_CALLBACK):])
    except ValueError:
        await query.answer("Invalid page selection")
        return

    await query.answer()
    state.view.set_page(page)
    state.message_id = query.message.message_id
    await refresh_watch(context.bot, chat_id, state)


async def watch_chart_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle window buttons under a watched coin: switch the watch to that window."""
    query = update.callback_query
    chat_id = update.effective_chat.id
    state = _watch_state(context, chat_id)
    if state is None or not isinstance(state.view, CoinDetailView):
        await _watch_ended(query)
        return

    try:
        timeframe = TimeFrame.parse(query.data[len(WATCH_CHART_CALLBACK):])
    except ValueError:
        await query.answer("Invalid chart selection")
        return

    await query.answer()
    state.view.set_timeframe(timeframe)
    state.message_id = query.message.message_id
    await refresh_watch(context.bot, chat_id, state)


async def unwatch(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /unwatch - stop the watch job of this chat."""
    if context.job_queue is None:
        await update.message.reply_text("Nothing to stop.")
        return

    chat_id = update.effective_chat.id
    removed = _remove_watch_jobs(context, chat_id)
    if removed:
        logger.info("Chat %s stopped watching", chat_id)
        await update.message.reply_text("✅ Stopped live updates.")
    else:
        await update.message.reply_text("Nothing to stop.")


async def on_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Log errors raised inside handlers and jobs."""
    logger.error("Unhandled error while processing %r", update, exc_info=context.error)


def build_handlers() -> List[BaseHandler]:
    """
    Build and return list of Telegram bot handlers.

    Returns:
        List of handler instances for registration with bot
    """
    return [
        CommandHandler(["start", "help"], start),
        CommandHandler("top", top),
        CommandHandler("coin", coin),
        CommandHandler("chart", chart),
        CommandHandler("search", search),
        CommandHandler("watch", watch),
        CommandHandler("unwatch", unwatch),
        CallbackQueryHandler(top_page_callback, pattern=f"^{TOP_CALLBACK}"),
        CallbackQueryHandler(chart_window_callback, pattern=f"^{CHART_CALLBACK}"),
        CallbackQueryHandler(watch_page_callback, pattern=f"^{WATCH_PAGE_CALLBACK}"),
        CallbackQueryHandler(watch_chart_callback, pattern=f"^{WATCH_CHART_CALLBACK}"),
    ]
