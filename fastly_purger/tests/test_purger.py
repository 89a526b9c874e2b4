from __future__ import annotations

from unittest.mock import Mock

from django.test import SimpleTestCase

from fastly_cdn.surrogate_keys import cache_tags_to_hashes
from fastly_purger.purger import FastlyPurger, Invalidation, InvalidationState, InvalidationType


class FastlyPurgerTests(SimpleTestCase):
    def setUp(self):
        self.api = Mock()
        self.api.purge_all.return_value = True
        self.api.purge_keys.return_value = True
        self.api.purge_url.return_value = True
        self.purger = FastlyPurger(self.api)

    def test_tags_are_purged_in_one_request(self):
        invalidations = [
            Invalidation(InvalidationType.TAG, "auth.user:1"),
            Invalidation(InvalidationType.TAG, "auth.user_list"),
        ]

        self.purger.invalidate(invalidations)

        self.api.purge_keys.assert_called_once_with(cache_tags_to_hashes(["auth.user:1", "auth.user_list"]))
        self.assertEqual({i.state for i in invalidations}, {InvalidationState.SUCCEEDED})

    def test_urls_are_purged_individually(self):
        self.api.purge_url.side_effect = [True, False]
        invalidations = [
            Invalidation(InvalidationType.URL, "https://example.com/a"),
            Invalidation(InvalidationType.URL, "https://example.com/b"),
        ]

        with self.assertLogs("fastly_purger.purger", level="WARNING"):
            self.purger.invalidate(invalidations)

        self.assertEqual(
            [i.state for i in invalidations],
            [InvalidationState.SUCCEEDED, InvalidationState.FAILED],
        )

    def test_everything_settles_the_batch(self):
        invalidations = [
            Invalidation(InvalidationType.TAG, "auth.user:1"),
            Invalidation(InvalidationType.EVERYTHING),
            Invalidation(InvalidationType.URL, "https://example.com/"),
        ]

        self.purger.invalidate(invalidations)

        self.api.purge_all.assert_called_once_with()
        self.api.purge_keys.assert_not_called()
        self.api.purge_url.assert_not_called()
        self.assertEqual({i.state for i in invalidations}, {InvalidationState.SUCCEEDED})

    def test_failed_everything_still_processes_the_rest(self):
        self.api.purge_all.return_value = False
        invalidations = [
            Invalidation(InvalidationType.EVERYTHING),
            Invalidation(InvalidationType.TAG, "auth.user:1"),
        ]

        with self.assertLogs("fastly_purger.purger", level="WARNING"):
            self.purger.invalidate(invalidations)

        self.assertEqual(invalidations[0].state, InvalidationState.FAILED)
        self.assertEqual(invalidations[1].state, InvalidationState.SUCCEEDED)

    def test_unsupported_and_empty_invalidations(self):
        invalidations = [
            Invalidation("wildcardurl", "https://example.com/*"),
            Invalidation(InvalidationType.TAG, ""),
        ]

        with self.assertLogs("fastly_purger.purger", level="WARNING"):
            self.purger.invalidate(invalidations)

        self.assertEqual(invalidations[0].state, InvalidationState.NOT_SUPPORTED)
        self.assertEqual(invalidations[1].state, InvalidationState.FAILED)
        self.api.purge_keys.assert_not_called()

    def test_round_trip_through_dict(self):
        invalidation = Invalidation.from_dict({"type": "url", "expression": "https://example.com/"})
        self.assertEqual(invalidation.state, InvalidationState.FRESH)
        self.assertEqual(invalidation.as_dict()["expression"], "https://example.com/")
