# tests/test_validators.py
"""
Validator and Markup Tests - Unit Tests for Shared Utilities

This module tests chat input validation (coin ids, pages, search queries),
bot token validation, settings validation, and the reduction of untrusted
description HTML to plain text.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- coinwatch.shared.validators (input validation)
- coinwatch.shared.markup (html_to_text, truncate_text)
- coinwatch.config.settings (Settings validators)
"""
import pytest  # Testing framework for writing and running tests
from pydantic import ValidationError  # Raised by Settings on bad values

from coinwatch.config.settings import Settings
from coinwatch.shared.markup import html_to_text, truncate_text
from coinwatch.shared.validators import parse_page, sanitize_query, validate_bot_token, validate_coin_id

VALID_TOKEN = "123456789:" + "A" * 35


class TestValidators:
    @pytest.mark.parametrize("coin_id", ["bitcoin", "usd-coin", "wrapped-bitcoin", "0x", "matic-network", "terra-luna-2"])
    def test_valid_coin_ids(self, coin_id):
        assert validate_coin_id(coin_id)

    @pytest.mark.parametrize("coin_id", ["", "Bitcoin", "bit coin", "../global", "a/b", "-abc", "x" * 101])
    def test_invalid_coin_ids(self, coin_id):
        assert not validate_coin_id(coin_id)

    def test_parse_page(self):
        assert parse_page(None) == 1
        assert parse_page("") == 1
        assert parse_page("3") == 3
        assert parse_page(None, default=2) == 2

    @pytest.mark.parametrize("value", ["0", "-1", "abc", "1.5"])
    def test_parse_page_rejects(self, value):
        with pytest.raises(ValueError, match="Invalid page"):
            parse_page(value)

    def test_sanitize_query(self):
        assert sanitize_query("  doge\x00 ") == "doge"
        assert sanitize_query("") == ""
        assert len(sanitize_query("x" * 100)) == 64

    def test_validate_bot_token(self):
        assert validate_bot_token(VALID_TOKEN)
        assert not validate_bot_token("")
        assert not validate_bot_token("not-a-token")


class TestSettings:
    def test_defaults(self):
        s = Settings()
        assert s.coingecko_base_url == "https://api.coingecko.com/api/v3"
        assert s.coins_per_page == 25
        assert s.search_result_limit == 25
        assert s.poll_interval_seconds == 60
        assert s.default_timeframe == "7d"

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("COINGECKO_BASE_URL", "http://localhost:8080/api/v3/")
        monkeypatch.setenv("DEFAULT_TIMEFRAME", "1Y")
        monkeypatch.setenv("BOT_TOKEN", VALID_TOKEN)
        s = Settings()
        assert s.coingecko_base_url == "http://localhost:8080/api/v3"
        assert s.default_timeframe == "1y"
        assert s.bot_token == VALID_TOKEN

    @pytest.mark.parametrize(
        "env, value",
        [
            ("BOT_TOKEN", "bogus"),
            ("DEFAULT_TIMEFRAME", "2w"),
            ("POLL_INTERVAL_SECONDS", "1"),
            ("COINS_PER_PAGE", "41"),
            ("SEARCH_RESULT_LIMIT", "250"),
        ],
    )
    def test_invalid_values(self, monkeypatch, env, value):
        monkeypatch.setenv(env, value)
        with pytest.raises(ValidationError):
            Settings()


class TestMarkup:
    def test_empty(self):
        assert html_to_text("") == ""

    def test_tags_are_removed(self):
        html = '<p>Bitcoin is <b>digital</b> <a href="https://bitcoin.org">money</a>.</p>'
        assert html_to_text(html) == "Bitcoin is digital money."

    def test_script_content_is_dropped(self):
        html = "<script>steal()</script><style>p{}</style><iframe src='x'>frame</iframe>Safe text"
        assert html_to_text(html) == "Safe text"

    def test_line_breaks_and_blocks(self):
        assert html_to_text("a<br>b") == "a\nb"
        assert html_to_text("<p>One</p><p>Two</p>") == "One\nTwo"

    def test_whitespace_collapsed(self):
        assert html_to_text("a   b\t c\r\n\r\n\r\n\r\nd") == "a b c\n\nd"

    def test_entities_are_decoded_not_executed(self):
        assert html_to_text("&lt;script&gt;") == "<script>"

    def test_truncate(self):
        assert truncate_text("short", 10) == "short"
        assert truncate_text("the quick brown fox jumps", 15) == "the quick…"
