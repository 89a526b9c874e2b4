"""
Cache key and state storage utilities.

Provides standardized cache key generation and a persistent key/value
store on top of the Django cache framework for small pieces of site state
(flags that must survive restarts but do not deserve a database table).
"""

import hashlib
import logging
from typing import Any, Optional

from django.conf import settings
from django.core.cache import caches

logger = logging.getLogger(__name__)


class CacheKeyGenerator:
    """Generate standardized cache keys with consistent formatting."""

    @staticmethod
    def generate_cache_key(prefix: str, *args, **kwargs) -> str:
        """
        Generate a standardized cache key.

        Args:
            prefix: Cache key prefix (e.g., 'state', 'fastly')
            *args: Positional arguments to include in key
            **kwargs: Keyword arguments to include in key (sorted by key)

        Returns:
            Formatted cache key string
        """
        key_parts = [prefix]

        for arg in args:
            if arg is not None:
                key_parts.append(str(arg))

        if kwargs:
            for key, value in sorted(kwargs.items()):
                if value is not None:
                    key_parts.extend([key, str(value)])

        key_string = ':'.join(key_parts)
        if len(key_string) > 200:  # memcached/redis key length consideration
            key_hash = hashlib.md5(key_string.encode()).hexdigest()[:8]
            key_string = f"{prefix}:{key_hash}"

        return key_string


class StateStore:
    """
    Persistent key/value store for site state.

    Values are written with no expiry to the configured cache alias, so the
    alias should point at a backend that does not evict (Redis without an
    eviction policy, or locmem in tests).
    """

    KEY_PREFIX = "state"

    def __init__(self, cache_alias: Optional[str] = None):
        """
        Initialize the state store.

        Args:
            cache_alias: Django cache alias to use; defaults to the
                ``STATE_CACHE_ALIAS`` setting, then ``default``.
        """
        self.cache_alias = cache_alias or getattr(settings, 'STATE_CACHE_ALIAS', 'default')

    @property
    def cache(self):
        return caches[self.cache_alias]

    def _key(self, name: str) -> str:
        return cache_key_generator.generate_cache_key(self.KEY_PREFIX, name)

    def get(self, name: str, default: Any = None) -> Any:
        return self.cache.get(self._key(name), default)

    def set(self, name: str, value: Any) -> None:
        self.cache.set(self._key(name), value, timeout=None)
        logger.debug(f"State '{name}' updated in cache alias '{self.cache_alias}'")


cache_key_generator = CacheKeyGenerator()

