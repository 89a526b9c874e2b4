"""
Cache tag invalidation.

Cache tags name the data a response was built from (``auth.user:42``,
``auth.user_list``). When that data changes, the tags are invalidated and
every registered invalidator gets a chance to drop what it has cached for
them, be it a local cache or a CDN in front of the site.
"""
from __future__ import annotations

import logging
from functools import wraps
from typing import Callable, Iterable, List, Optional

from django.db import transaction
from django.dispatch import Signal
from django.http import HttpResponse

logger = logging.getLogger(__name__)

# Invalidated whenever the set of installed apps or their schema changes.
EXTENSION_CACHE_TAG = "config:core.extension"

RESPONSE_CACHE_TAGS_ATTR = "cache_tags"

cache_tags_invalidated = Signal()


class CacheTagsInvalidator:
    """Base class for anything that reacts to cache tag invalidation."""

    def invalidate_tags(self, tags: List[str]) -> None:
        raise NotImplementedError


class CacheTagsInvalidatorRegistry:
    """Ordered collection of invalidators notified on every invalidation."""

    def __init__(self):
        self._invalidators: List[CacheTagsInvalidator] = []

    def register(self, invalidator: CacheTagsInvalidator) -> CacheTagsInvalidator:
        if invalidator not in self._invalidators:
            self._invalidators.append(invalidator)
            logger.debug("Registered cache tags invalidator %s", type(invalidator).__name__)
        return invalidator

    def unregister(self, invalidator: CacheTagsInvalidator) -> None:
        if invalidator in self._invalidators:
            self._invalidators.remove(invalidator)

    @property
    def invalidators(self) -> List[CacheTagsInvalidator]:
        return list(self._invalidators)

    def invalidate_tags(self, tags: Iterable[str]) -> List[str]:
        """
        Pass tags to every registered invalidator.

        Args:
            tags: Cache tags to invalidate; duplicates and empty values are dropped

        Returns:
            The normalized list of tags that was dispatched
        """
        normalized = normalize_tags(tags)
        if not normalized:
            return normalized

        for invalidator in self.invalidators:
            try:
                invalidator.invalidate_tags(list(normalized))
            except Exception:
                logger.exception(
                    "Cache tags invalidator %s failed for tags %s",
                    type(invalidator).__name__,
                    " ".join(normalized),
                )

        cache_tags_invalidated.send(sender=self.__class__, tags=normalized)
        return normalized


def normalize_tags(tags: Iterable[str]) -> List[str]:
    seen = set()
    normalized = []
    for tag in tags or []:
        if not tag:
            continue
        tag = str(tag)
        if tag not in seen:
            seen.add(tag)
            normalized.append(tag)
    return normalized


cache_tags_invalidators = CacheTagsInvalidatorRegistry()


def invalidate_tags(tags: Iterable[str]) -> List[str]:
    """Convenience function for cache_tags_invalidators.invalidate_tags."""
    return cache_tags_invalidators.invalidate_tags(tags)


def invalidate_tags_on_commit(tags: Iterable[str]) -> None:
    """Invalidate once the current transaction commits (immediately outside one)."""
    normalized = normalize_tags(tags)
    if not normalized:
        return

    transaction.on_commit(lambda: cache_tags_invalidators.invalidate_tags(normalized))


def get_model_list_cache_tag(model) -> str:
    return f"{model._meta.label_lower}_list"


def get_model_cache_tags(instance) -> List[str]:
    """Return the tags identifying a model instance and its listing."""
    model = type(instance)
    tags = []
    if instance.pk is not None:
        tags.append(f"{model._meta.label_lower}:{instance.pk}")
    tags.append(get_model_list_cache_tag(model))
    return tags


def add_cache_tags(response: HttpResponse, tags: Iterable[str]) -> HttpResponse:
    """Attach cache tags to a response so middleware can advertise them."""
    existing = getattr(response, RESPONSE_CACHE_TAGS_ATTR, [])
    setattr(response, RESPONSE_CACHE_TAGS_ATTR, normalize_tags([*existing, *tags]))
    return response


def get_response_cache_tags(response: HttpResponse) -> List[str]:
    return list(getattr(response, RESPONSE_CACHE_TAGS_ATTR, []))


def cache_tags(*tags: str, tags_func: Optional[Callable] = None):
    """
    Decorator tagging a view's response.

    Args:
        *tags: Static tags added to every response
        tags_func: Optional callable ``(request, response, *args, **kwargs)``
            returning extra tags computed per request
    """
    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            response = view_func(request, *args, **kwargs)
            extra = tags_func(request, response, *args, **kwargs) if tags_func else []
            return add_cache_tags(response, [*tags, *extra])
        return wrapper
    return decorator
