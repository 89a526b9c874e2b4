from __future__ import annotations

from unittest.mock import Mock

from django.core.cache import caches
from django.test import TestCase, override_settings

from core.cache_utils import StateStore
from fastly_cdn.services import get_fastly_api, get_fastly_state, reset_fastly_services
from fastly_cdn.state import FastlyState


class FastlyStateTests(TestCase):
    def setUp(self):
        caches["state"].clear()
        self.api = Mock()
        self.state = FastlyState(StateStore("state"), api=self.api, api_key="configured-key")

    def test_missing_state_reads_as_invalid(self):
        self.assertFalse(self.state.get_purge_credentials_state())

    def test_state_round_trips_through_store(self):
        self.state.set_purge_credentials_state(True)

        other = FastlyState(StateStore("state"))
        self.assertTrue(other.get_purge_credentials_state())
        self.assertTrue(StateStore("state").get(FastlyState.VALID_PURGE_CREDENTIALS))

    def test_set_defaults_to_invalid(self):
        self.state.set_purge_credentials_state(True)
        self.state.set_purge_credentials_state()
        self.assertFalse(self.state.get_purge_credentials_state())

    def test_validate_purge_credentials_requires_key(self):
        self.assertFalse(self.state.validate_purge_credentials(""))
        self.api.validate_purge_credentials.assert_not_called()

    def test_validate_purge_credentials_delegates_to_api(self):
        self.api.validate_purge_credentials.return_value = True

        self.assertTrue(self.state.validate_purge_credentials("new-key"))
        self.api.validate_purge_credentials.assert_called_once_with("new-key")
        # Validation alone does not change the stored state.
        self.assertFalse(self.state.get_purge_credentials_state())

    def test_refresh_uses_configured_key_and_stores_result(self):
        self.api.validate_purge_credentials.return_value = True

        with self.assertLogs("fastly_cdn.state", level="INFO"):
            self.assertTrue(self.state.refresh_purge_credentials_state())
        self.api.validate_purge_credentials.assert_called_once_with("configured-key")
        self.assertTrue(self.state.get_purge_credentials_state())
        self.api.set_api_key.assert_called_once_with("configured-key")

    def test_refresh_records_revoked_credentials(self):
        self.state.set_purge_credentials_state(True)
        self.api.validate_purge_credentials.return_value = False

        with self.assertLogs("fastly_cdn.state", level="WARNING"):
            self.assertFalse(self.state.refresh_purge_credentials_state("revoked-key"))
        self.assertFalse(self.state.get_purge_credentials_state())
        self.api.set_api_key.assert_not_called()


class FastlyServicesTests(TestCase):
    def setUp(self):
        reset_fastly_services()

    def tearDown(self):
        reset_fastly_services()

    def test_api_and_state_are_wired_together(self):
        api = get_fastly_api()
        state = get_fastly_state()

        self.assertIs(api.state, state)
        self.assertIs(state.api, api)
        self.assertIs(get_fastly_api(), api)
        self.assertEqual(api.service_id, "test-service")

    def test_overriding_settings_rebuilds_services(self):
        original = get_fastly_api()

        with override_settings(FASTLY={"API_KEY": "k", "SERVICE_ID": "other", "STATE_CACHE_ALIAS": "state"}):
            overridden = get_fastly_api()
            self.assertIsNot(overridden, original)
            self.assertEqual(overridden.service_id, "other")

        self.assertEqual(get_fastly_api().service_id, "test-service")
