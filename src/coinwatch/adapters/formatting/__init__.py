"""
Formatting Adapters - Output Presentation

Number formatters and chat message layouts.
"""

from coinwatch.adapters.formatting.formatter import (
    format_currency,
    format_number,
    format_percentage,
)

__all__ = [
    "format_currency",
    "format_number",
    "format_percentage",
]
