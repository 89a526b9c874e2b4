"""Tests for the periodic Fastly credentials refresh."""
from __future__ import annotations

from unittest.mock import patch

import pytest
from django.test import override_settings

from fastly_cdn.tasks import refresh_credentials_state_task
from tests.factories.fastly import FastlyResponseFactory

pytestmark = pytest.mark.fastly


@pytest.fixture(autouse=True)
def _use_mocked_fastly(fastly_api):
    with patch("fastly_cdn.tasks.get_fastly_state", return_value=fastly_api.state):
        yield


def test_revoked_token_disables_purging(fastly_api, fastly_session):
    fastly_session.request.return_value = FastlyResponseFactory(status_code=401, payload={"msg": "Unauthorized"})

    assert refresh_credentials_state_task.delay().get() is False
    assert fastly_api.state.get_purge_credentials_state() is False
    assert fastly_session.request.call_args.kwargs["headers"]["Fastly-Key"] == "test-api-key"


def test_valid_token_enables_purging(fastly_api, fastly_session):
    fastly_api.state.set_purge_credentials_state(False)
    fastly_session.request.return_value = FastlyResponseFactory(payload={"scopes": ["purge_select", "purge_all"]})

    assert refresh_credentials_state_task.delay().get() is True
    assert fastly_api.state.get_purge_credentials_state() is True


@override_settings(FASTLY={"ENABLED": False})
def test_disabled_integration_is_skipped(fastly_session):
    assert refresh_credentials_state_task.delay().get() is False
    fastly_session.request.assert_not_called()
