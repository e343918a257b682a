"""
Input Validation Utilities - Security and Data Validation

This module provides input validation for configuration values and chat
commands. Coin ids end up in URL paths, so they are checked against a strict
slug pattern before any request is made.

Files that USE this module:
- coinwatch.config.settings (validate_bot_token in Settings field validators)
- coinwatch.adapters.telegram.handlers (coin id, page and query validation)

Files that this module USES:
- None (pure utility functions)
"""
import re
from typing import Optional

_COIN_ID_RE = re.compile(r"^[a-z0-9][a-z0-9._-]{0,99}$")


def validate_bot_token(token: str) -> bool:
    """
    Validate Telegram bot token format.

    Args:
        token: Bot token to validate

    Returns:
        True if valid, False otherwise
    """
    if not token:
        return False

    # Bot tokens should be in format: 123456789:ABCDEFghijklmnopQRSTUVwxyz
    pattern = r'^\d{8,10}:[A-Za-z0-9_-]{35}$'
    return bool(re.match(pattern, token))


def validate_coin_id(coin_id: str) -> bool:
    """
    Validate a CoinGecko coin id (lowercase slug such as 'bitcoin' or 'usd-coin').

    Args:
        coin_id: Candidate coin id

    Returns:
        True if valid, False otherwise
    """
    if not coin_id:
        return False
    return bool(_COIN_ID_RE.match(coin_id))


def parse_page(value: Optional[str], default: int = 1) -> int:
    """
    Parse a 1-indexed page number from user input.

    Args:
        value: Raw argument, or None when the user gave none
        default: Page used when no argument is given

    Returns:
        The page number

    Raises:
        ValueError: If the value is not a positive integer
    """
    if value is None or value == "":
        return default
    if not value.isdigit():
        raise ValueError(f"Invalid page: {value!r}")
    page = int(value)
    if page < 1:
        raise ValueError(f"Invalid page: {value!r}")
    return page


def sanitize_query(text: str, max_length: int = 64) -> str:
    """
    Sanitize a free-text search query.

    Control characters are removed, surrounding whitespace stripped and the
    result capped at max_length characters.
    """
    if not text:
        return ""

    cleaned = "".join(ch for ch in text if ch.isprintable())
    return cleaned.strip()[:max_length]
