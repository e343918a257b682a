"""
Configuration Module

Provides centralized configuration management using Pydantic Settings.
Values come from environment variables and an optional .env file.
"""

from coinwatch.config.settings import Settings, settings

__all__ = ["Settings", "settings"]
