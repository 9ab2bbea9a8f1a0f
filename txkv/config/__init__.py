"""Configuration module for TxKV."""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
