"""Cache tag to surrogate key conversion."""
from __future__ import annotations

import base64
import hashlib
from typing import Iterable, List, Optional

from .conf import get_fastly_settings


def cache_tag_to_hash(tag: str, length: int, site_id: str = "") -> str:
    digest = hashlib.md5(tag.encode("utf-8")).digest()
    return f"{site_id}{base64.b64encode(digest).decode('ascii')[:length]}"


def cache_tags_to_hashes(
    tags: Iterable[str],
    length: Optional[int] = None,
    site_id: Optional[str] = None,
) -> List[str]:
    """
    Convert cache tags to short surrogate keys.

    Fastly caps the Surrogate-Key response header at 16 KB; pages built from
    thousands of entities would blow past it with raw tag names, so each tag
    is replaced by a few characters of its hash. Several sites sharing one
    Fastly service are told apart by `site_id`.

    Args:
        tags: Cache tags
        length: Characters of the base64 MD5 digest to keep
        site_id: Prefix prepended to every hash

    Returns:
        Hashes in tag order, without duplicates
    """
    if length is None or site_id is None:
        config = get_fastly_settings()
        length = config.cache_tag_hash_length if length is None else length
        site_id = config.site_id if site_id is None else site_id

    hashes = (cache_tag_to_hash(tag, length, site_id) for tag in tags if tag)
    return list(dict.fromkeys(hashes))
