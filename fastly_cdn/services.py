"""
Shared Fastly service instances.

The API client and the credential state reference each other, so they are
built together and cached for the life of the process. Changing
``settings.FASTLY`` (e.g. with ``override_settings`` in tests) rebuilds them.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Tuple

from django.core.signals import setting_changed
from django.dispatch import receiver

from core.cache_utils import StateStore

from .api import FastlyApi
from .conf import get_fastly_settings
from .state import FastlyState


@lru_cache(maxsize=None)
def _build_services() -> Tuple[FastlyApi, FastlyState]:
    config = get_fastly_settings()
    state = FastlyState(StateStore(config.state_cache_alias), api_key=config.api_key)
    api = FastlyApi(config, state)
    state.api = api
    return api, state


def get_fastly_api() -> FastlyApi:
    return _build_services()[0]


def get_fastly_state() -> FastlyState:
    return _build_services()[1]


def reset_fastly_services() -> None:
    _build_services.cache_clear()


@receiver(setting_changed)
def _reset_on_settings_change(sender, setting: str, **kwargs) -> None:
    if setting in ("FASTLY", "CACHES"):
        reset_fastly_services()
