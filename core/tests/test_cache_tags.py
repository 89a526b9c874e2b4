"""Tests for cache tag invalidation plumbing."""

from unittest.mock import Mock

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.test import SimpleTestCase, TestCase

from core.cache_tags import (
    CacheTagsInvalidator,
    CacheTagsInvalidatorRegistry,
    cache_tags_invalidated,
    get_model_cache_tags,
    get_model_list_cache_tag,
    normalize_tags,
)


class RecordingInvalidator(CacheTagsInvalidator):
    def __init__(self):
        self.calls = []

    def invalidate_tags(self, tags):
        self.calls.append(tags)


class BrokenInvalidator(CacheTagsInvalidator):
    def invalidate_tags(self, tags):
        raise RuntimeError("backend down")


class CacheTagsInvalidatorRegistryTest(SimpleTestCase):
    """Dispatch behaviour of the invalidator registry."""

    def setUp(self):
        self.registry = CacheTagsInvalidatorRegistry()

    def test_invalidators_receive_normalized_tags(self):
        first, second = RecordingInvalidator(), RecordingInvalidator()
        self.registry.register(first)
        self.registry.register(second)

        dispatched = self.registry.invalidate_tags(["a", "", "b", "a"])

        self.assertEqual(dispatched, ["a", "b"])
        self.assertEqual(first.calls, [["a", "b"]])
        self.assertEqual(second.calls, [["a", "b"]])

    def test_register_is_idempotent(self):
        invalidator = RecordingInvalidator()
        self.registry.register(invalidator)
        self.registry.register(invalidator)

        self.registry.invalidate_tags(["a"])
        self.assertEqual(len(invalidator.calls), 1)

    def test_failing_invalidator_does_not_block_others(self):
        recording = RecordingInvalidator()
        self.registry.register(BrokenInvalidator())
        self.registry.register(recording)

        with self.assertLogs("core.cache_tags", level="ERROR"):
            self.registry.invalidate_tags(["a"])

        self.assertEqual(recording.calls, [["a"]])

    def test_empty_tags_dispatch_nothing(self):
        recording = RecordingInvalidator()
        self.registry.register(recording)

        self.assertEqual(self.registry.invalidate_tags([]), [])
        self.assertEqual(recording.calls, [])

    def test_unregister(self):
        recording = RecordingInvalidator()
        self.registry.register(recording)
        self.registry.unregister(recording)

        self.registry.invalidate_tags(["a"])
        self.assertEqual(recording.calls, [])

    def test_signal_is_sent(self):
        receiver = Mock()
        cache_tags_invalidated.connect(receiver)
        self.addCleanup(cache_tags_invalidated.disconnect, receiver)

        self.registry.invalidate_tags(["x"])

        receiver.assert_called_once()
        self.assertEqual(receiver.call_args.kwargs["tags"], ["x"])

    def test_normalize_tags(self):
        self.assertEqual(normalize_tags(None), [])
        self.assertEqual(normalize_tags(["b", "a", "b", None]), ["b", "a"])


class ModelCacheTagsTest(TestCase):
    def test_instance_tags(self):
        group = Group.objects.create(name="editors")
        self.assertEqual(get_model_cache_tags(group), [f"auth.group:{group.pk}", "auth.group_list"])

    def test_unsaved_instance_only_has_list_tag(self):
        self.assertEqual(get_model_cache_tags(Group(name="draft")), ["auth.group_list"])

    def test_list_tag(self):
        self.assertEqual(get_model_list_cache_tag(get_user_model()), "auth.user_list")
