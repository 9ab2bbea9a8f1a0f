"""Cache module for TxKV."""

from .store import KVStore, wrap_integer

__all__ = ["KVStore", "wrap_integer"]
