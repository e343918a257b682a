# src/coinwatch/app.py
"""
Application Entry Point - Bot Initialization and Startup

This module serves as the composition root for the CoinWatch Telegram bot.
It wires the CoinGecko provider into the Telegram application and starts
polling.

Files that USE this module:
- coinwatch console script (pyproject.toml [project.scripts])

Files that this module USES:
- coinwatch.shared.logging_conf (setup_logging for logging configuration)
- coinwatch.config (settings for configuration management)
- coinwatch.adapters.providers.coingecko (CoinGeckoProvider for market data)
- coinwatch.adapters.telegram.bot (build_application)
"""

from __future__ import annotations

import logging

from telegram.error import Conflict, NetworkError, TimedOut

from coinwatch.adapters.providers.coingecko import CoinGeckoProvider
from coinwatch.adapters.telegram.bot import build_application
from coinwatch.config import settings
from coinwatch.shared.logging_conf import setup_logging


def main() -> None:
    """
    Initialize and start the Telegram bot application.

    This function:
    1. Sets up logging and validates configuration
    2. Creates the CoinGecko provider shared by all chats
    3. Builds the Telegram application with its handlers
    4. Starts the bot polling loop
    """
    setup_logging(
        level=logging.INFO,
        log_file=settings.log_file,
        log_dir=settings.log_dir,
        log_stdout=settings.log_stdout,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )
    logger = logging.getLogger(__name__)

    if not settings.bot_token:
        raise RuntimeError("BOT_TOKEN missing")

    provider = CoinGeckoProvider()
    app = build_application(settings.bot_token, provider)

    logger.info(
        "Starting bot polling… api=%s, page size=%d, watch interval=%ds",
        settings.coingecko_base_url,
        settings.coins_per_page,
        settings.poll_interval_seconds,
    )

    # run_polling calls initialize(), which verifies the token with get_me()
    try:
        app.run_polling(allowed_updates=None, drop_pending_updates=False)
    except Conflict as e:
        logger.error("Telegram Conflict error: %s (type: %s)", e, type(e).__name__, exc_info=True)
        logger.error(
            "Another instance is already polling with this token.\n"
            "Telegram only allows ONE bot instance to poll at a time; stop the other one and restart."
        )
        raise
    except (TimedOut, NetworkError) as e:
        logger.error(
            "Network error during bot operation (timeout connecting to Telegram API): %s (type: %s)",
            e,
            type(e).__name__,
            exc_info=True,
        )
        raise
    except KeyboardInterrupt:
        logger.info("Bot stopped by user (KeyboardInterrupt)")
        raise
    except Exception as e:
        logger.exception("Unexpected error during bot operation: %s (type: %s)", e, type(e).__name__)
        raise


if __name__ == "__main__":
    main()
