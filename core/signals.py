from __future__ import annotations

import logging

from django.conf import settings
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .cache_tags import EXTENSION_CACHE_TAG, get_model_cache_tags, invalidate_tags, invalidate_tags_on_commit

logger = logging.getLogger(__name__)


def _is_ignored(sender) -> bool:
    ignored_apps = getattr(settings, "CACHE_TAGS_IGNORED_APPS", [])
    return sender._meta.app_label in ignored_apps


@receiver(post_save)
@receiver(post_delete)
def invalidate_model_cache_tags(sender, instance, raw: bool = False, **kwargs):
    if raw or _is_ignored(sender):
        return
    invalidate_tags_on_commit(get_model_cache_tags(instance))


def invalidate_extension_cache_tag(sender, **kwargs):
    """Connected to `post_migrate` for the core app only, so it fires once per migrate run."""
    logger.info("Schema or installed apps changed, invalidating %s.", EXTENSION_CACHE_TAG)
    invalidate_tags([EXTENSION_CACHE_TAG])
