"""
Telegram Notifier - Failure Notifications in Chat

Delivers MarketService failure messages to the chat that issued the request.
"""
from __future__ import annotations

from typing import Union

from telegram import Bot

from coinwatch.adapters.formatting.formatter import failure_notice


class TelegramNotifier:
    """Notifier that posts a short warning message to one chat."""

    def __init__(self, bot: Bot, chat_id: Union[int, str]):
        self.bot = bot
        self.chat_id = chat_id

    async def notify(self, message: str) -> None:
        await self.bot.send_message(chat_id=self.chat_id, text=failure_notice(message))
