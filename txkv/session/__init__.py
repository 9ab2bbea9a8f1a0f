"""Session module for TxKV."""

from .stream_session import Session

__all__ = ["Session"]
