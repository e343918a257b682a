# src/coinwatch/adapters/telegram/bot.py
"""
Telegram Bot - Application Builder

This module builds the Telegram application: registers command handlers and
the error handler, stores the shared market data provider in bot_data, and
closes the provider's HTTP session on shutdown.

Files that USE this module:
- coinwatch.app (build_application at startup)

Files that this module USES:
- coinwatch.adapters.telegram.handlers (build_handlers, on_error)
- coinwatch.adapters.providers.base (MarketDataProvider)
"""

from __future__ import annotations

import logging

from telegram.ext import Application

from coinwatch.adapters.providers.base import MarketDataProvider
from coinwatch.adapters.telegram.handlers import PROVIDER_KEY, build_handlers, on_error

logger = logging.getLogger(__name__)


def build_application(bot_token: str, provider: MarketDataProvider) -> Application:
    """
    Build Telegram bot application with handlers and the shared provider.

    Args:
        bot_token: Telegram bot token
        provider: Market data provider shared by all chats

    Returns:
        Configured Application instance
    """

    async def _close_provider(application: Application) -> None:
        logger.info("Closing market data provider")
        await provider.close()

    app = Application.builder().token(bot_token).post_shutdown(_close_provider).build()
    app.bot_data[PROVIDER_KEY] = provider

    for h in build_handlers():
        app.add_handler(h)
    app.add_error_handler(on_error)
    return app
