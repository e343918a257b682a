# src/coinwatch/adapters/telegram/keyboards.py
"""
Inline Keyboards - Buttons Under Bot Messages

Callback data layouts:
- top:<page>            Prev/Next under a /top reply (stateless, refetches)
- chart:<window>:<id>   window buttons under a /chart reply (stateless)
- wpage:<page>          Prev/Next under a watched market page
- wchart:<window>       window buttons under a watched coin

The w* buttons carry no coin id: they act on the chat's running watch.

Files that USE this module:
- coinwatch.adapters.telegram.handlers (reply keyboards and callback parsing)
- coinwatch.adapters.telegram.jobs (keyboards on watch messages)

Files that this module USES:
- coinwatch.domain.models (TimeFrame)
"""
from __future__ import annotations

from typing import Optional

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from coinwatch.domain.models import TimeFrame

TOP_CALLBACK = "top:"
CHART_CALLBACK = "chart:"
WATCH_PAGE_CALLBACK = "wpage:"
WATCH_CHART_CALLBACK = "wchart:"
MAX_CALLBACK_BYTES = 64  # Telegram limit for callback_data


def page_keyboard(page: int, has_next: bool, prefix: str = TOP_CALLBACK) -> Optional[InlineKeyboardMarkup]:
    """Prev/Next buttons for a market list page."""
    buttons = []
    if page > 1:
        buttons.append(InlineKeyboardButton("◀️ Prev", callback_data=f"{prefix}{page - 1}"))
    if has_next:
        buttons.append(InlineKeyboardButton("Next ▶️", callback_data=f"{prefix}{page + 1}"))
    return InlineKeyboardMarkup([buttons]) if buttons else None


def _window_label(tf: TimeFrame, current: TimeFrame) -> str:
    return f"• {tf.value} •" if tf is current else tf.value


def timeframe_keyboard(coin_id: str, current: TimeFrame) -> Optional[InlineKeyboardMarkup]:
    """One button per chart window; None if the coin id does not fit in callback data."""
    buttons = []
    for tf in TimeFrame:
        data = f"{CHART_CALLBACK}{tf.value}:{coin_id}"
        if len(data.encode("utf-8")) > MAX_CALLBACK_BYTES:
            return None
        buttons.append(InlineKeyboardButton(_window_label(tf, current), callback_data=data))
    return InlineKeyboardMarkup([buttons])


def watch_timeframe_keyboard(current: TimeFrame) -> InlineKeyboardMarkup:
    """Window buttons for a watched coin."""
    return InlineKeyboardMarkup([[
        InlineKeyboardButton(_window_label(tf, current), callback_data=f"{WATCH_CHART_CALLBACK}{tf.value}")
        for tf in TimeFrame
    ]])
