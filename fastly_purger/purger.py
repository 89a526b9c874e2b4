"""
Queued purging through Fastly.

Invalidation requests (a tag, a URL, or everything) are collected, handed to
`FastlyPurger.invalidate()` in batches and come back with their state set.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Optional

from fastly_cdn.api import FastlyApi
from fastly_cdn.services import get_fastly_api
from fastly_cdn.surrogate_keys import cache_tags_to_hashes

logger = logging.getLogger(__name__)


class InvalidationType:
    TAG = "tag"
    URL = "url"
    EVERYTHING = "everything"

    ALL: List[str] = [TAG, URL, EVERYTHING]


class InvalidationState:
    FRESH = "fresh"
    PROCESSING = "processing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    NOT_SUPPORTED = "not_supported"


@dataclass
class Invalidation:
    type: str
    expression: Optional[str] = None
    state: str = InvalidationState.FRESH

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Invalidation":
        return cls(
            type=data.get("type", ""),
            expression=data.get("expression"),
            state=data.get("state", InvalidationState.FRESH),
        )

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def mark(self, succeeded: bool) -> None:
        self.state = InvalidationState.SUCCEEDED if succeeded else InvalidationState.FAILED


class FastlyPurger:
    """Purger backed by the Fastly API."""

    plugin_id = "fastly"
    label = "Fastly"
    types = tuple(InvalidationType.ALL)

    def __init__(self, fastly_api: Optional[FastlyApi] = None):
        self.fastly_api = fastly_api or get_fastly_api()

    def invalidate(self, invalidations: Iterable[Invalidation]) -> List[Invalidation]:
        """
        Process a batch of invalidations.

        All tags in the batch go out in a single surrogate key purge. A
        successful purge of everything settles the rest of the batch without
        further requests.
        """
        invalidations = list(invalidations)
        by_type: Dict[str, List[Invalidation]] = {invalidation_type: [] for invalidation_type in self.types}

        for invalidation in invalidations:
            if invalidation.type not in by_type:
                invalidation.state = InvalidationState.NOT_SUPPORTED
                continue
            if invalidation.type != InvalidationType.EVERYTHING and not invalidation.expression:
                invalidation.state = InvalidationState.FAILED
                continue
            invalidation.state = InvalidationState.PROCESSING
            by_type[invalidation.type].append(invalidation)

        if by_type[InvalidationType.EVERYTHING]:
            purged = self.fastly_api.purge_all()
            for invalidation in by_type[InvalidationType.EVERYTHING]:
                invalidation.mark(purged)
            if purged:
                for invalidation in by_type[InvalidationType.TAG] + by_type[InvalidationType.URL]:
                    invalidation.mark(True)
                return invalidations

        tag_invalidations = by_type[InvalidationType.TAG]
        if tag_invalidations:
            hashes = cache_tags_to_hashes(invalidation.expression for invalidation in tag_invalidations)
            purged = self.fastly_api.purge_keys(hashes)
            for invalidation in tag_invalidations:
                invalidation.mark(purged)

        for invalidation in by_type[InvalidationType.URL]:
            invalidation.mark(self.fastly_api.purge_url(invalidation.expression))

        failed = sum(1 for invalidation in invalidations if invalidation.state != InvalidationState.SUCCEEDED)
        if failed:
            logger.warning("Fastly purger left %s of %s invalidation(s) unprocessed.", failed, len(invalidations))
        return invalidations
