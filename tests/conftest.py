"""Shared pytest fixtures for the edgecms project."""
from __future__ import annotations

from unittest.mock import Mock

import pytest
import requests
from django.core.cache import caches
from rest_framework.test import APIClient

from fastly_cdn.services import reset_fastly_services
from tests.factories.authentication import StaffUserFactory, UserFactory
from tests.factories.fastly import build_fastly_api


@pytest.fixture
def api_client() -> APIClient:
    """Return a DRF APIClient instance."""
    return APIClient()


@pytest.fixture
def user():
    return UserFactory()


@pytest.fixture
def staff_user():
    """Return a staff/admin user with elevated privileges."""
    return StaffUserFactory()


@pytest.fixture
def staff_client(api_client: APIClient, staff_user):
    api_client.force_authenticate(user=staff_user)
    return api_client


@pytest.fixture
def fastly_session() -> Mock:
    """Mocked `requests.Session` handed to the Fastly API client."""
    return Mock(spec=requests.Session)


@pytest.fixture
def fastly_api(fastly_session):
    """Fastly API client with validated credentials and a mocked session."""
    return build_fastly_api(session=fastly_session)


@pytest.fixture(autouse=True)
def _clear_caches():
    """Start each test with empty caches and freshly built Fastly services."""
    for alias in ("default", "state"):
        caches[alias].clear()
    reset_fastly_services()
    yield
    reset_fastly_services()


@pytest.fixture(autouse=True)
def _enable_db_access_for_all_tests(db):  # noqa: PT004
    """Enable database access for all tests by default."""
    yield
