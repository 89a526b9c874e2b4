"""
Surrogate key middleware.

Advertises the cache tags of a response to Fastly so the cached object can
later be purged by tag.
"""

import logging

from django.http import HttpRequest, HttpResponse
from django.utils.deprecation import MiddlewareMixin

from core.cache_tags import get_response_cache_tags

from .conf import get_fastly_settings
from .constants import Headers
from .surrogate_keys import cache_tags_to_hashes

logger = logging.getLogger(__name__)


class SurrogateKeyMiddleware(MiddlewareMixin):
    """
    Set the ``Surrogate-Key`` header from the response's cache tags.

    Fastly strips the header before the response reaches the client and
    indexes the object under each key. Keys are the hashed tags, matching
    what `FastlyCacheTagsInvalidator` purges.
    """

    def _should_tag_response(self, response: HttpResponse) -> bool:
        if not get_fastly_settings().enabled:
            return False

        # Only successful responses end up cached
        if not (200 <= response.status_code < 300):
            return False

        return bool(get_response_cache_tags(response))

    def process_response(self, request: HttpRequest, response: HttpResponse) -> HttpResponse:
        if not self._should_tag_response(response):
            return response

        hashes = cache_tags_to_hashes(get_response_cache_tags(response))
        existing = response.get(Headers.SURROGATE_KEY, '').split()
        response[Headers.SURROGATE_KEY] = ' '.join(dict.fromkeys([*existing, *hashes]))

        logger.debug("Tagged %s with %s surrogate keys", request.path, len(hashes))
        return response
