"""
Message Formatter - Number Formatting and Chat Presentation

This module holds the pure number formatters (currency, abbreviated magnitude,
percentage) and the plain-text message layouts the bot sends: the coin table,
the coin detail card, the chart card and search results.

Files that USE this module:
- coinwatch.adapters.telegram.handlers (all message layouts)
- coinwatch.adapters.telegram.jobs (watched pages and watched coins)
- tests.test_formatter (unit tests)

Files that this module USES:
- coinwatch.domain.models (CoinSummary, CoinDetail)
- coinwatch.application.charts (PriceChart)
- coinwatch.shared.markup (untrusted description to plain text)
"""
from __future__ import annotations

from datetime import datetime
from decimal import Context, Decimal, ROUND_HALF_UP
from typing import List, Optional, Sequence, Tuple

from coinwatch.application.charts import PriceChart
from coinwatch.domain.models import CoinDetail, CoinSummary
from coinwatch.shared.markup import html_to_text, truncate_text

# Enough precision to quantize any finite float without InvalidOperation
_CTX = Context(prec=400, rounding=ROUND_HALF_UP)
_CENT = Decimal("0.01")
_MICRO = Decimal("0.000001")

_SPARK_BLOCKS = "▁▂▃▄▅▆▇█"

# Telegram rejects messages longer than this, counted in UTF-16 code units
MAX_MESSAGE_LENGTH = 4096


def message_length(text: str) -> int:
    """Length of text as Telegram counts it (UTF-16 code units; emoji count as 2)."""
    return len(text.encode("utf-16-le")) // 2


def _fit_rows(head: List[str], rows: Sequence[str], tail: List[str]) -> str:
    """
    Join head, rows and tail into one message no longer than MAX_MESSAGE_LENGTH.

    Rows are dropped from the end until the message fits; the dropped count
    is reported in a '… and N more' line.
    """
    text = "\n".join([*head, *rows, *tail])
    kept = len(rows)
    while message_length(text) > MAX_MESSAGE_LENGTH and kept > 0:
        kept -= 1
        more = f"… and {len(rows) - kept} more"
        text = "\n".join([*head, *rows[:kept], more, *tail])
    return text


def _to_decimal(value: float) -> Decimal:
    # str() keeps the shortest repr, so 1.005 stays 1.005 rather than 1.00499...
    return Decimal(str(value))


def _round2(value: float) -> str:
    return format(_to_decimal(value).quantize(_CENT, context=_CTX), "f")


def format_currency(value: float) -> str:
    """
    Format a value as US dollars.

    Amounts below one dollar in magnitude keep 4 to 6 fractional digits so
    micro-priced assets stay readable; everything else gets exactly 2.

    Examples:
        1234.5   -> '$1,234.50'
        0.000123 -> '$0.000123'
        0.5      -> '$0.5000'
        -42      -> '-$42.00'
    """
    amount = _to_decimal(value)
    if abs(amount) < 1:
        rounded = amount.quantize(_MICRO, context=_CTX)
        whole, _, frac = format(abs(rounded), "f").partition(".")
        frac = frac.rstrip("0").ljust(4, "0")
        text = f"{whole}.{frac}"
    else:
        rounded = amount.quantize(_CENT, context=_CTX)
        text = format(abs(rounded), ",.2f")
    sign = "-" if rounded < 0 else ""
    return f"{sign}${text}"


def format_number(value: float) -> str:
    """
    Abbreviate a magnitude with B/M/K and two decimals.

    Boundaries take the larger suffix (1000 -> '1.00K'). Values below 1000
    are returned as the plain number ('999', '12.5').
    """
    if value >= 1_000_000_000:
        return f"{_round2(value / 1_000_000_000)}B"
    if value >= 1_000_000:
        return f"{_round2(value / 1_000_000)}M"
    if value >= 1_000:
        return f"{_round2(value / 1_000)}K"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_percentage(value: float) -> str:
    """Format a percentage with two decimals, keeping the sign ('-3.46%')."""
    return f"{_round2(value)}%"


# -------- chat layouts (plain text) --------

def _trend_arrow(change: Optional[float]) -> str:
    """📈 for gains, 📉 for losses, ⏸ for flat or unknown."""
    if change is None or change == 0:
        return "⏸"
    return "📈" if change > 0 else "📉"


def _fmt_change(change: Optional[float]) -> str:
    if change is None:
        return "—"
    return f"{format_percentage(change)} {_trend_arrow(change)}"


def _fmt_usd(value: Optional[float]) -> str:
    return "—" if value is None else format_currency(value)


def _fmt_usd_short(value: Optional[float]) -> str:
    return "—" if value is None else f"${format_number(value)}"


def coin_line(coin: CoinSummary) -> str:
    """
    Two-line summary of a market row.

    Example:
        #1 Bitcoin (BTC)
           $67,012.34 | 24h 2.35% 📈 | MCap $1320.50B | Vol $35.10B
    """
    rank = f"#{coin.market_cap_rank}" if coin.market_cap_rank else "#—"
    return (
        f"{rank} {coin.name} ({coin.symbol.upper()})\n"
        f"   {_fmt_usd(coin.current_price)} | 24h {_fmt_change(coin.price_change_percentage_24h)}"
        f" | MCap {_fmt_usd_short(coin.market_cap)} | Vol {_fmt_usd_short(coin.total_volume)}"
    )


def updated_footer(updated_at: datetime) -> str:
    return f"⏱️ Updated {updated_at:%Y-%m-%d %H:%M} UTC"


def coin_table(
    coins: Sequence[CoinSummary],
    page: Optional[int] = None,
    updated_at: Optional[datetime] = None,
) -> str:
    """
    Format a page of market rows.

    Args:
        coins: Rows in display order
        page: Page number shown in the header (omitted when None)
        updated_at: Refresh time shown in the footer (omitted when None)

    Rows that would push the message past MAX_MESSAGE_LENGTH are left out.
    """
    header = "Top Cryptocurrencies"
    if page is not None:
        header = f"{header} (page {page})"
    if not coins:
        return f"{header}\n\nNo cryptocurrencies found."

    footer: List[str] = []
    if updated_at is not None:
        footer = ["", updated_footer(updated_at)]
    return _fit_rows([header, ""], [coin_line(c) for c in coins], footer)


def coin_detail_card(detail: CoinDetail, description_max_chars: int = 800) -> str:
    """
    Format a coin detail card.

    The description is third-party HTML; it is reduced to plain text and
    truncated before display.
    """
    md = detail.market_data
    lines = [
        f"{detail.name} ({detail.symbol.upper()})  {_fmt_change(md.price_change_percentage_24h)}",
        "",
        f"💵 Current Price: {_fmt_usd(md.current_price.usd)}",
        f"🏦 Market Cap: {_fmt_usd(md.market_cap.usd)}",
        f"24h Change: {_fmt_change(md.price_change_percentage_24h)}",
        f"7d Change: {_fmt_change(md.price_change_percentage_7d)}",
        f"30d Change: {_fmt_change(md.price_change_percentage_30d)}",
        f"1y Change: {_fmt_change(md.price_change_percentage_1y)}",
    ]
    about = html_to_text(detail.description.en)
    if about:
        lines.append("")
        lines.append(f"About {detail.name}")
        lines.append(truncate_text(about, description_max_chars))
    return "\n".join(lines)


def sparkline(
    prices: Sequence[float],
    width: int = 24,
    domain: Optional[Tuple[float, float]] = None,
) -> str:
    """
    Render prices as a row of block characters.

    Long series are averaged into `width` buckets. With a domain the blocks
    are scaled to that (low, high) axis, so a padded domain keeps the extremes
    off the lowest and highest blocks; otherwise the series' own min and max
    are used.
    """
    if not prices:
        return ""
    if len(prices) > width:
        size = len(prices) / width
        buckets: List[float] = []
        for i in range(width):
            chunk = prices[int(i * size):int((i + 1) * size)]
            buckets.append(sum(chunk) / len(chunk))
        prices = buckets
    low, high = domain if domain is not None else (min(prices), max(prices))
    if high <= low:
        return _SPARK_BLOCKS[len(_SPARK_BLOCKS) // 2] * len(prices)
    top = len(_SPARK_BLOCKS) - 1
    scale = top / (high - low)
    return "".join(_SPARK_BLOCKS[min(top, max(0, round((p - low) * scale)))] for p in prices)


def chart_card(chart: Optional[PriceChart]) -> str:
    """Format a price chart as text: sparkline, range and change over the window."""
    if chart is None or chart.is_empty:
        title = chart.title if chart is not None else "Price Chart"
        return f"{title}\n\nNo chart data available"

    first, last = chart.points[0], chart.points[-1]
    lines = [
        chart.title,
        "",
        sparkline([p.price for p in chart.points], domain=chart.domain),
        f"{first.label} → {last.label}",
        "",
        f"Open: {format_currency(first.price)}",
        f"Last: {format_currency(last.price)}",
        f"Low: {format_currency(chart.low)}",
        f"High: {format_currency(chart.high)}",
        f"Change: {_fmt_change(chart.change_percentage)}",
    ]
    return "\n".join(lines)


def search_results(query: str, coins: Sequence[CoinSummary]) -> str:
    """Format search results with a count header, trimmed to one message."""
    if not coins:
        return f'No results found for "{query}"'
    head = [f'Found {len(coins)} results for "{query}"', ""]
    return _fit_rows(head, [coin_line(c) for c in coins], [])


def failure_notice(message: str) -> str:
    return f"⚠️ {message}"
