"""
TxKV Configuration Settings

This module contains all configuration constants for the TxKV store.
Values can be overridden through environment variables.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Store and session configuration settings."""

    # Value settings
    INT_BITS: int = int(os.environ.get("TXKV_INT_BITS", "64"))
    MAX_KEY_LENGTH: int = int(os.environ.get("TXKV_MAX_KEY_LENGTH", "256"))

    # Reply settings
    QUEUED_MESSAGE: str = "QUEUED"
    MULTI_MESSAGE: str = "OK"
    VERBOSE_EXEC: bool = os.environ.get("TXKV_VERBOSE_EXEC", "false").lower() == "true"

    # Logging settings
    DEBUG: bool = os.environ.get("TXKV_DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.environ.get("TXKV_LOG_LEVEL", "INFO")


# Global settings instance
settings = Settings()
