"""
Fastly API client.

Wraps the handful of Fastly REST endpoints the site needs: token
introspection for credential validation, and the purge endpoints used to
invalidate cached objects. See https://developer.fastly.com/reference/api/
for the endpoints themselves.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Any, Dict, Iterable, Iterator, List, Optional

import requests
from django.core.exceptions import ValidationError
from django.core.validators import URLValidator

from .conf import FastlySettings
from .constants import MAX_KEYS_PER_PURGE, Headers, PurgeMethods, TokenScopes, UserRoles

if TYPE_CHECKING:  # pragma: no cover
    from .state import FastlyState

logger = logging.getLogger(__name__)

_url_validator = URLValidator(schemes=["http", "https"])


class FastlyApiError(Exception):
    """Raised when the Fastly API cannot be reached or answers with garbage."""


def is_valid_purge_url(url: str) -> bool:
    """Only absolute http(s) URLs without spaces can be purged."""
    if not url or "http" not in url:
        return False
    if " " in url:
        return False
    try:
        _url_validator(url)
    except ValidationError:
        return False
    return True


def _batched(keys: List[str], size: int) -> Iterator[List[str]]:
    for start in range(0, len(keys), size):
        yield keys[start:start + size]


class FastlyApi:
    """
    Fastly API for the site.

    Purge operations are gated by the credential state tracked in
    `FastlyState`: until a key has been validated, nothing is sent.
    """

    def __init__(
        self,
        config: FastlySettings,
        state: "FastlyState",
        session: Optional[requests.Session] = None,
    ):
        self.config = config
        self.api_key = config.api_key
        self.service_id = config.service_id
        self.purge_method = config.purge_method
        self.host = config.host
        self.timeout = config.timeout
        self.state = state
        self.http_client = session or requests.Session()

    def set_api_key(self, api_key: str) -> None:
        self.api_key = api_key

    def validate_api_key(self) -> bool:
        """
        Check that the current key may perform purge actions.

        ``GET /tokens/self`` lists the token scopes. Tokens scoped to both
        ``purge_all`` and ``purge_select`` are enough on their own; a
        ``global`` token additionally needs the engineer or superuser role,
        looked up with ``GET /current_user``.

        Returns:
            False if any corrupt data comes back, the request fails, or the
            token scope is inadequate.
        """
        try:
            response = self.query("/tokens/self")
            if response.status_code != 200:
                return False
            token = self.json(response)
            scopes = set(token.get("scopes") or []) if isinstance(token, dict) else set()
            if not scopes:
                return False

            if TokenScopes.PURGE <= scopes:
                return True
            if TokenScopes.GLOBAL not in scopes:
                return False

            response = self.query("/current_user")
            if response.status_code != 200:
                return False
            user = self.json(response)
            role = user.get("role") if isinstance(user, dict) else None
            return role in UserRoles.CAN_PURGE
        except FastlyApiError as exc:
            logger.warning("Unable to validate Fastly API key: %s", exc)
            return False

    def validate_purge_credentials(self, api_key: str = "") -> bool:
        """Validate `api_key` on a separate client; this client keeps its own key."""
        if not api_key:
            return False
        candidate = type(self)(
            replace(self.config, api_key=api_key),
            self.state,
            session=self.http_client,
        )
        return candidate.validate_api_key()

    def get_services(self) -> List[Dict[str, Any]]:
        """List the services of the current customer."""
        response = self.query("service")
        if not response.ok:
            raise FastlyApiError(f"Listing Fastly services failed with status {response.status_code}.")
        return self.json(response)

    def purge_all(self) -> bool:
        """
        Purge the whole service.

        Returns:
            False if the purge failed or was not attempted, True if successful.
        """
        if not self._credentials_are_valid():
            return False

        try:
            response = self.query(f"service/{self.service_id}/purge_all", method="POST")
            result = self.json(response)
        except FastlyApiError as exc:
            logger.critical(str(exc))
            return False

        status = result.get("status") if isinstance(result, dict) else None
        if status == "ok":
            logger.info("Successfully purged all on Fastly.")
            return True

        logger.critical("Unable to purge all on Fastly. Response status: %s.", status)
        return False

    def purge_url(self, url: str = "") -> bool:
        """
        Purge a single URL.

        Args:
            url: The full, valid URL to purge

        Returns:
            False if the purge failed or the URL is invalid, True if successful.
        """
        if not is_valid_purge_url(url):
            logger.debug("Refusing to purge invalid URL %r.", url)
            return False

        if not self._credentials_are_valid():
            return False

        # POST to purge/<url> keeps purges of plain http URLs authenticated.
        try:
            response = self.query(f"purge/{url}", method="POST")
            result = self.json(response)
        except FastlyApiError as exc:
            logger.critical(str(exc))
            return False

        if isinstance(result, dict) and result.get("status") == "ok":
            logger.info(
                "Successfully purged URL %s. Purge Method: %s.",
                url,
                self.purge_method,
            )
            return True

        logger.critical(
            "Unable to purge URL %s from Fastly. Purge Method: %s.",
            url,
            self.purge_method,
        )
        return False

    def purge_keys(self, keys: Iterable[str] = ()) -> bool:
        """
        Purge cached objects by surrogate key.

        Args:
            keys: Surrogate key values; for this site, hashed cache tags

        Returns:
            False if any batch failed or there was nothing to purge, True if
            every batch succeeded.
        """
        if not self._credentials_are_valid():
            return False

        unique_keys = list(dict.fromkeys(key for key in keys if key))
        if not unique_keys:
            logger.debug("No surrogate keys to purge.")
            return False

        for batch in _batched(unique_keys, MAX_KEYS_PER_PURGE):
            joined = " ".join(batch)
            try:
                response = self.query(
                    f"service/{self.service_id}/purge",
                    method="POST",
                    headers={Headers.SURROGATE_KEY: joined},
                )
                result = self.json(response)
            except FastlyApiError as exc:
                logger.critical(str(exc))
                return False

            # A successful batch purge maps every key to its purge id.
            if not (response.ok and isinstance(result, dict) and len(result) > 0):
                logger.critical(
                    "Unable to purge key(s) %s from Fastly. Purge Method: %s.",
                    joined,
                    self.purge_method,
                )
                return False

            logger.info(
                "Successfully purged key(s) %s. Purge Method: %s.",
                joined,
                self.purge_method,
            )

        return True

    def query(self, uri: str, method: str = "GET", headers: Optional[Dict[str, str]] = None) -> requests.Response:
        """
        Perform an HTTP request against the Fastly API.

        Args:
            uri: Path appended to the API host; for PURGE, the absolute URL
            method: GET, POST or PURGE
            headers: Extra headers to send

        Returns:
            The response, whatever its status code

        Raises:
            FastlyApiError: On an unsupported method or a transport failure
        """
        request_headers = dict(headers or {})
        request_headers["Accept"] = "application/json"
        request_headers[Headers.FASTLY_KEY] = self.api_key
        if self.purge_method == PurgeMethods.SOFT:
            request_headers[Headers.SOFT_PURGE] = "1"

        method = method.upper()
        if method in ("GET", "POST"):
            url = self._url(uri)
        elif method == "PURGE":
            url = uri
        else:
            raise FastlyApiError(f"Method {method} is not valid for Fastly service.")

        try:
            return self.http_client.request(method, url, headers=request_headers, timeout=self.timeout)
        except requests.RequestException as exc:
            raise FastlyApiError(f"Fastly request {method} {url} failed: {exc}") from exc

    def json(self, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise FastlyApiError(
                f"Fastly returned a non-JSON response (status {response.status_code})."
            ) from exc

    def _url(self, uri: str) -> str:
        return f"{self.host.rstrip('/')}/{uri.lstrip('/')}"

    def _credentials_are_valid(self) -> bool:
        try:
            if self.state.get_purge_credentials_state():
                return True
        except Exception as exc:
            logger.critical("Unable to read the Fastly credentials state: %s", exc)
            return False
        logger.debug("Fastly purge skipped: API credentials have not been validated.")
        return False
