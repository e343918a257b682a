"""
Markup Utilities - Untrusted HTML Handling

Coin descriptions arrive from CoinGecko as raw HTML written by third parties.
This module reduces them to plain text so nothing from the payload is ever
rendered as markup.

Files that USE this module:
- coinwatch.adapters.formatting.formatter (coin detail card)

Files that this module USES:
- bs4 (HTML parsing)
"""
from __future__ import annotations

import re

from bs4 import BeautifulSoup  # HTML parser used to strip untrusted markup

_WHITESPACE_RE = re.compile(r"[ \t\r\f\v]+")
_BLANK_LINES_RE = re.compile(r"\n\s*\n+")

# Elements whose text content must never be shown
_DROPPED_TAGS = ["script", "style", "iframe", "object", "embed", "noscript", "template"]
_BLOCK_TAGS = ["p", "div", "li", "h1", "h2", "h3", "h4", "h5", "h6"]


def html_to_text(html: str) -> str:
    """
    Convert an untrusted HTML fragment to plain text.

    Script-like elements are removed together with their content, every other
    tag is unwrapped, line breaks and paragraphs become newlines, and runs of
    whitespace are collapsed.

    Args:
        html: HTML fragment (may be empty)

    Returns:
        Plain text, stripped
    """
    if not html:
        return ""

    soup = BeautifulSoup(html, "html.parser")
    for tag in soup.find_all(_DROPPED_TAGS):
        tag.decompose()
    for br in soup.find_all("br"):
        br.replace_with("\n")
    for block in soup.find_all(_BLOCK_TAGS):
        block.insert_after("\n")

    text = soup.get_text()
    lines = [_WHITESPACE_RE.sub(" ", line).strip() for line in text.split("\n")]
    text = "\n".join(lines)
    return _BLANK_LINES_RE.sub("\n\n", text).strip()


def truncate_text(text: str, max_chars: int) -> str:
    """
    Truncate text at a word boundary, appending an ellipsis when shortened.
    """
    if len(text) <= max_chars:
        return text
    cut = text[: max_chars - 1]
    space = cut.rfind(" ")
    if space > max_chars // 2:
        cut = cut[:space]
    return cut.rstrip(" ,.;:") + "…"
