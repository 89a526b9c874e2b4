from __future__ import annotations

import base64
import hashlib

from django.test import SimpleTestCase, override_settings

from fastly_cdn.surrogate_keys import cache_tag_to_hash, cache_tags_to_hashes


def expected_hash(tag: str, length: int = 4) -> str:
    return base64.b64encode(hashlib.md5(tag.encode()).digest()).decode()[:length]


class CacheTagsToHashesTests(SimpleTestCase):
    def test_hash_is_prefix_of_base64_md5(self):
        self.assertEqual(cache_tag_to_hash("auth.user:1", 4), expected_hash("auth.user:1"))
        self.assertEqual(len(cache_tag_to_hash("auth.user:1", 6)), 6)

    def test_site_id_is_prepended(self):
        self.assertEqual(cache_tag_to_hash("auth.user:1", 4, "site1"), "site1" + expected_hash("auth.user:1"))

    def test_order_is_kept_and_duplicates_dropped(self):
        hashes = cache_tags_to_hashes(["b", "a", "b", ""], length=4, site_id="")
        self.assertEqual(hashes, [expected_hash("b"), expected_hash("a")])

    @override_settings(FASTLY={"CACHE_TAG_HASH_LENGTH": 8, "SITE_ID": "www-"})
    def test_defaults_come_from_settings(self):
        self.assertEqual(cache_tags_to_hashes(["auth.user_list"]), ["www-" + expected_hash("auth.user_list", 8)])
