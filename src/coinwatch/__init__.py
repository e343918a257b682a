# src/coinwatch/__init__.py
"""
CoinWatch - Cryptocurrency Market Dashboard Bot

A Telegram bot that lists coins by market cap, shows per-coin details with
historical price charts, and searches the CoinGecko catalog. Watched pages
refresh every minute.
"""

__version__ = "0.3.0"
