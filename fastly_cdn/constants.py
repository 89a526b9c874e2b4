"""Constants for the `fastly_cdn` app."""
from __future__ import annotations

from typing import FrozenSet, List

DEFAULT_API_HOST = "https://api.fastly.com/"
DEFAULT_CACHE_TAG_HASH_LENGTH = 4

# Fastly rejects batch purges with more surrogate keys than this.
MAX_KEYS_PER_PURGE = 256


class PurgeMethods:
    """Enumerates supported purge methods."""

    INSTANT = "instant"
    SOFT = "soft"

    ALL: List[str] = [INSTANT, SOFT]


class TokenScopes:
    """Token scopes relevant to purging."""

    GLOBAL = "global"
    PURGE_ALL = "purge_all"
    PURGE_SELECT = "purge_select"

    # Purge tokens need both; global tokens defer to the user's role.
    PURGE: FrozenSet[str] = frozenset({PURGE_ALL, PURGE_SELECT})


class UserRoles:
    """Fastly account roles."""

    USER = "user"
    BILLING = "billing"
    ENGINEER = "engineer"
    SUPERUSER = "superuser"

    CAN_PURGE: FrozenSet[str] = frozenset({ENGINEER, SUPERUSER})


class Headers:
    FASTLY_KEY = "Fastly-Key"
    SOFT_PURGE = "Fastly-Soft-Purge"
    SURROGATE_KEY = "Surrogate-Key"
