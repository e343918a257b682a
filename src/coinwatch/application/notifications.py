"""
Notifications - User-visible Failure Side Channel

Fetch failures are never raised to callers; instead the user gets a short
transient message. This module defines the notifier interface used for that
channel and a default implementation that only logs.

Files that USE this module:
- coinwatch.application.market_service (notifies once per failed fetch)
- coinwatch.adapters.telegram.notifier (chat implementation)

Files that this module USES:
- None
"""
from __future__ import annotations

import logging
from typing import Protocol

log = logging.getLogger(__name__)


class Notifier(Protocol):
    """Receives one short message per failed operation."""

    async def notify(self, message: str) -> None:
        ...


class LoggingNotifier:
    """Notifier that writes messages to the log (used when no chat is attached)."""

    def __init__(self, level: int = logging.WARNING):
        self.level = level

    async def notify(self, message: str) -> None:
        log.log(self.level, "User notification: %s", message)
