"""Cache tags invalidator that invalidates Fastly."""
from __future__ import annotations

from typing import List, Optional

from core.cache_tags import EXTENSION_CACHE_TAG, CacheTagsInvalidator

from .api import FastlyApi
from .services import get_fastly_api
from .surrogate_keys import cache_tags_to_hashes


class FastlyCacheTagsInvalidator(CacheTagsInvalidator):
    """Translates cache tag invalidations into Fastly purges."""

    def __init__(self, fastly_api: Optional[FastlyApi] = None):
        self._fastly_api = fastly_api

    @property
    def fastly_api(self) -> FastlyApi:
        if self._fastly_api is not None:
            return self._fastly_api
        return get_fastly_api()

    def invalidate_tags(self, tags: List[str]) -> None:
        # Installing or removing an app can change any page: purge everything.
        if EXTENSION_CACHE_TAG in tags:
            self.fastly_api.purge_all()
            return

        # Responses advertise hashes, not raw tags, so purge by hash.
        self.fastly_api.purge_keys(cache_tags_to_hashes(tags))


fastly_cache_tags_invalidator = FastlyCacheTagsInvalidator()
