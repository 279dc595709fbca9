"""
Cache adapter implementations.

Provides the Django cache implementation of CachePort.
"""

import logging
from typing import Any, Iterable, Optional

from asgiref.sync import sync_to_async
from django.core.cache import cache

from core.infrastructure.cache import CachePort
from core.metrics import cache_hits_total, cache_misses_total

logger = logging.getLogger(__name__)


class DjangoCacheAdapter(CachePort):
    """
    Django cache adapter implementing CachePort.

    Uses Django's cache framework (Redis in deployments, locmem in tests).
    """

    def __init__(self, namespace: str = "default"):
        self.namespace = namespace

    async def get(self, key: str) -> Optional[Any]:
        """
        Get a value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found
        """
        try:
            value = await sync_to_async(cache.get)(key)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error getting from cache: %s", e, exc_info=True)
            return None
        if value is not None:
            cache_hits_total.labels(cache_name=self.namespace).inc()
            logger.debug("Cache hit: %s", key)
        else:
            cache_misses_total.labels(cache_name=self.namespace).inc()
            logger.debug("Cache miss: %s", key)
        return value

    async def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        """
        Set a value in cache.

        Args:
            key: Cache key
            value: Value to cache
            timeout: Timeout in seconds (None for no expiration)
        """
        try:
            await sync_to_async(cache.set)(key, value, timeout=timeout)
            logger.debug("Cache set: %s (timeout=%s)", key, timeout)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error setting cache: %s", e, exc_info=True)

    async def delete_many(self, keys: Iterable[str]) -> None:
        keys = list(keys)
        if not keys:
            return
        try:
            await sync_to_async(cache.delete_many)(keys)
            logger.debug("Cache delete: %d key(s)", len(keys))
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error deleting from cache: %s", e, exc_info=True)


# Global cache adapter instance
cache_adapter = DjangoCacheAdapter(namespace="licensing")
