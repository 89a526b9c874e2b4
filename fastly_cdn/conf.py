"""Access to the ``FASTLY`` settings dict."""
from __future__ import annotations

from dataclasses import dataclass

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from .constants import DEFAULT_API_HOST, DEFAULT_CACHE_TAG_HASH_LENGTH, PurgeMethods


@dataclass(frozen=True)
class FastlySettings:
    enabled: bool = True
    api_key: str = ""
    service_id: str = ""
    host: str = DEFAULT_API_HOST
    purge_method: str = PurgeMethods.INSTANT
    timeout: int = 10
    cache_tag_hash_length: int = DEFAULT_CACHE_TAG_HASH_LENGTH
    site_id: str = ""
    state_cache_alias: str = "default"
    credentials_check_interval: int = 60 * 60

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.service_id)

    @property
    def soft_purge(self) -> bool:
        return self.purge_method == PurgeMethods.SOFT


def get_fastly_settings() -> FastlySettings:
    """Build a `FastlySettings` from ``settings.FASTLY``, applying defaults."""
    raw = getattr(settings, "FASTLY", {}) or {}

    purge_method = (raw.get("PURGE_METHOD") or PurgeMethods.INSTANT).lower()
    if purge_method not in PurgeMethods.ALL:
        raise ImproperlyConfigured(
            f"FASTLY['PURGE_METHOD'] must be one of {', '.join(PurgeMethods.ALL)}, got {purge_method!r}."
        )

    hash_length = int(raw.get("CACHE_TAG_HASH_LENGTH") or DEFAULT_CACHE_TAG_HASH_LENGTH)
    if hash_length < 1:
        raise ImproperlyConfigured("FASTLY['CACHE_TAG_HASH_LENGTH'] must be a positive integer.")

    return FastlySettings(
        enabled=bool(raw.get("ENABLED", True)),
        api_key=raw.get("API_KEY") or "",
        service_id=raw.get("SERVICE_ID") or "",
        host=raw.get("HOST") or DEFAULT_API_HOST,
        purge_method=purge_method,
        timeout=int(raw.get("TIMEOUT") or 10),
        cache_tag_hash_length=hash_length,
        site_id=raw.get("SITE_ID") or "",
        state_cache_alias=raw.get("STATE_CACHE_ALIAS") or "default",
        credentials_check_interval=int(raw.get("CREDENTIALS_CHECK_INTERVAL") or 60 * 60),
    )
