"""Tracks validity of the credentials used by the Fastly API."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from core.cache_utils import StateStore

if TYPE_CHECKING:  # pragma: no cover
    from .api import FastlyApi

logger = logging.getLogger(__name__)


class FastlyState:
    """
    Whether the configured Fastly credentials can perform every supported
    type of purge request.

    The flag lives in the site's state store so that purges, which happen on
    nearly every content change, never pay for a token lookup.
    """

    VALID_PURGE_CREDENTIALS = "fastly.state.valid_purge_credentials"

    def __init__(self, store: StateStore, api: Optional["FastlyApi"] = None, api_key: str = ""):
        self.store = store
        self.api = api
        self.api_key = api_key

    def validate_purge_credentials(self, api_key: str = "") -> bool:
        """
        Check an API token for purge related scope.

        Returns:
            True if the token is capable of the necessary purge actions.
        """
        if not api_key or self.api is None:
            return False
        return self.api.validate_purge_credentials(api_key)

    def get_purge_credentials_state(self) -> bool:
        return bool(self.store.get(self.VALID_PURGE_CREDENTIALS, False))

    def set_purge_credentials_state(self, state: bool = False) -> None:
        self.store.set(self.VALID_PURGE_CREDENTIALS, bool(state))

    def refresh_purge_credentials_state(self, api_key: Optional[str] = None) -> bool:
        """
        Validate `api_key` (the configured key by default) and store the outcome.

        Only a valid key replaces the one the API client sends with purges.
        """
        api_key = self.api_key if api_key is None else api_key
        is_valid = self.validate_purge_credentials(api_key)
        if is_valid and self.api is not None:
            self.api.set_api_key(api_key)
        previous = self.get_purge_credentials_state()
        self.set_purge_credentials_state(is_valid)

        if is_valid != previous:
            log = logger.info if is_valid else logger.warning
            log("Fastly purge credentials are now %s.", "valid" if is_valid else "invalid")
        return is_valid
