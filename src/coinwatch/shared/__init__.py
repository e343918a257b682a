"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation
- Untrusted markup handling
- Logging configuration
"""

from coinwatch.shared.validators import (
    parse_page,
    sanitize_query,
    validate_bot_token,
    validate_coin_id,
)
from coinwatch.shared.markup import html_to_text, truncate_text

__all__ = [
    "validate_bot_token",
    "validate_coin_id",
    "parse_page",
    "sanitize_query",
    "html_to_text",
    "truncate_text",
]
