# src/coinwatch/adapters/telegram/__init__.py
"""
Telegram Adapters - Bot Interface

This package contains Telegram bot adapters:
- Bot application builder
- Command handlers
- Watch jobs
- Failure notifier
"""

from coinwatch.adapters.telegram.bot import build_application
from coinwatch.adapters.telegram.handlers import build_handlers
from coinwatch.adapters.telegram.jobs import refresh_watch_job
from coinwatch.adapters.telegram.notifier import TelegramNotifier

__all__ = [
    "build_application",
    "build_handlers",
    "refresh_watch_job",
    "TelegramNotifier",
]
