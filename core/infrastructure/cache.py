"""
Cache abstraction (port).

Interface of the cache that holds account lookups for the MT5 endpoint.
"""
from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional


class CachePort(ABC):
    """
    Abstract cache port.

    Implementations must never raise on backend failures; a broken
    cache degrades to cache misses.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """
        Get a value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        """
        Set a value in cache.

        Args:
            key: Cache key
            value: Value to cache
            timeout: Timeout in seconds (None for no expiration)
        """
        pass

    @abstractmethod
    async def delete_many(self, keys: Iterable[str]) -> None:
        """
        Delete several values from cache.

        Args:
            keys: Cache keys
        """
        pass
