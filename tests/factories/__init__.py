"""Factory Boy factories for edgecms tests."""
from tests.factories.authentication import UserFactory, StaffUserFactory
from tests.factories.fastly import FastlyResponseFactory, FastlySettingsFactory, build_fastly_api

__all__ = [
    "UserFactory",
    "StaffUserFactory",
    "FastlyResponseFactory",
    "FastlySettingsFactory",
    "build_fastly_api",
]
