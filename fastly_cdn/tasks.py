"""Celery tasks for the `fastly_cdn` app."""
from __future__ import annotations

import logging

from celery import shared_task

from .conf import get_fastly_settings
from .services import get_fastly_state

logger = logging.getLogger(__name__)


@shared_task(name="fastly_cdn.refresh_credentials_state")
def refresh_credentials_state_task() -> bool:
    """Re-validate the configured API key so revoked tokens stop purges."""

    config = get_fastly_settings()
    if not config.enabled:
        return False
    is_valid = get_fastly_state().refresh_purge_credentials_state(config.api_key)
    logger.info("Refreshed Fastly credentials state via scheduled task: %s.", "valid" if is_valid else "invalid")
    return is_valid
