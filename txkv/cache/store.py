"""
Key-Value Store Module

This module implements the integer key-value storage used by the
command executor.

Values are fixed-width signed integers. Every value written to the
store is normalized into the configured width, so INCR past the
maximum wraps around to the minimum (two's complement), exactly as a
native integer of that width would.
"""

from typing import Optional, Dict, Any

from ..config.settings import settings


def wrap_integer(value: int, bits: int) -> int:
    """
    Normalize an integer into the signed range of the given width.

    Args:
        value: Any Python integer
        bits: Integer width in bits

    Returns:
        The two's complement value of `value` truncated to `bits` bits

    Examples:
        >>> wrap_integer(2 ** 63, 64)
        -9223372036854775808
        >>> wrap_integer(-1, 64)
        -1
    """
    modulus = 1 << bits
    value %= modulus
    if value >= modulus >> 1:
        value -= modulus
    return value


class KVStore:
    """
    In-memory mapping from string keys to fixed-width integers.

    This class provides O(1) average-case time complexity for:
    - get: Retrieve a value by key
    - set: Insert or overwrite a key
    - delete: Remove a key
    - increment: Add one to a key, creating it at 0 first if absent

    delete_by_value is O(n) in the number of keys.

    A key that is present always maps to exactly one value. Absence is
    reported as None, which never collides with a stored value (zero
    included).

    Attributes:
        bits: Width of stored integers (default from settings.INT_BITS)
        min_value: Smallest representable value
        max_value: Largest representable value
    """

    def __init__(self, bits: int = None):
        """
        Initialize the store.

        Args:
            bits: Integer width in bits (default from settings.INT_BITS)

        Raises:
            ValueError: If bits is not positive
        """
        self.bits = bits if bits is not None else settings.INT_BITS
        if self.bits <= 0:
            raise ValueError("bits must be positive")

        self.min_value = -(1 << (self.bits - 1))
        self.max_value = (1 << (self.bits - 1)) - 1
        self._store: Dict[str, int] = {}

    def get(self, key: str) -> Optional[int]:
        """
        Retrieve the value for a given key.

        Args:
            key: The key to look up

        Returns:
            The stored value, or None if the key is absent
        """
        return self._store.get(key)

    def set(self, key: str, value: int) -> None:
        """
        Insert or overwrite a key.

        Args:
            key: The key to store
            value: Integer value, wrapped into the store's width
        """
        self._store[key] = wrap_integer(value, self.bits)

    def delete(self, key: str) -> bool:
        """
        Delete a key if present.

        Deleting an absent key is a no-op; other keys are untouched.

        Returns:
            True if the key was removed, False if it did not exist
        """
        return self._store.pop(key, None) is not None

    def delete_by_value(self, value: int) -> int:
        """
        Remove every key currently mapped to exactly `value`.

        Args:
            value: The value to match

        Returns:
            Number of keys removed (0 if none matched)
        """
        matches = [k for k, v in self._store.items() if v == value]
        for key in matches:
            del self._store[key]
        return len(matches)

    def increment(self, key: str) -> int:
        """
        Add one to the value of a key.

        An absent key is initialized to 0 first, so the result is 1.
        Incrementing max_value wraps to min_value.

        Returns:
            The new value
        """
        value = wrap_integer(self._store.get(key, 0) + 1, self.bits)
        self._store[key] = value
        return value

    def exists(self, key: str) -> bool:
        """Check if a key is present."""
        return key in self._store

    def size(self) -> int:
        """Get the current number of keys in the store."""
        return len(self._store)

    def clear(self) -> None:
        """Remove all keys from the store."""
        self._store.clear()

    def snapshot(self) -> Dict[str, int]:
        """Return a copy of the current contents."""
        return dict(self._store)

    def get_stats(self) -> Dict[str, Any]:
        """
        Get statistics about the store.

        Returns:
            Dictionary containing:
            - total_keys: Keys currently stored
            - bits: Integer width
            - min_value / max_value: Representable range
        """
        return {
            "total_keys": len(self._store),
            "bits": self.bits,
            "min_value": self.min_value,
            "max_value": self.max_value,
        }
