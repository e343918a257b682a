"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- Providers (CoinGecko API)
- Telegram (bot interface)
- Formatting (output)
"""

__all__ = []
