"""Celery tasks for the `fastly_purger` app."""
from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Dict, List

from celery import shared_task

from .purger import FastlyPurger, Invalidation

logger = logging.getLogger(__name__)


@shared_task(name="fastly_purger.process_invalidations")
def process_invalidations_task(items: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Run queued invalidations through the Fastly purger.

    Args:
        items: Serialized invalidations (``{"type": ..., "expression": ...}``)

    Returns:
        Dictionary with per-state counts and the processed invalidations
    """
    invalidations = FastlyPurger().invalidate(Invalidation.from_dict(item) for item in items)
    states = Counter(invalidation.state for invalidation in invalidations)

    logger.info(
        "Processed %s Fastly invalidation(s): %s",
        len(invalidations),
        ", ".join(f"{state}={count}" for state, count in sorted(states.items())) or "none",
    )
    return {
        'total': len(invalidations),
        'states': dict(states),
        'invalidations': [invalidation.as_dict() for invalidation in invalidations],
    }
