"""Authenticated client for the business REST backend.

Sends the session's bearer token, refreshes it once on 401 and maps HTTP
failures onto the exceptions in outletdesk.exceptions.
"""

import logging
from collections.abc import Callable
from typing import Any

import requests

from outletdesk.config import get_settings
from outletdesk.exceptions import (
    AuthenticationError,
    IntegrationError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
)
from outletdesk.http_client import get_session
from outletdesk.models.auth import Session

logger = logging.getLogger(__name__)

REFRESH_PATH = "/auth/refresh"


def unwrap(payload: Any) -> Any:
    """Return payload["data"] for enveloped responses, the payload otherwise."""
    if isinstance(payload, dict) and payload.get("data") is not None:
        return payload["data"]
    return payload


def _extract_token(payload: Any) -> str | None:
    if not isinstance(payload, dict):
        return None
    for source in (payload, unwrap(payload)):
        if isinstance(source, dict):
            token = source.get("access_token") or source.get("token")
            if token:
                return token
    return None


def _handle_response(response: requests.Response) -> None:
    """Check response status and raise the matching exception."""
    status = response.status_code
    if status == 401:
        raise AuthenticationError("Backend session expired. Sign in again via POST /auth/login.")
    if status == 403:
        raise PermissionDeniedError("The backend refused this operation for the signed-in user.")
    if status == 404:
        raise NotFoundError(f"Backend resource not found: {response.request.method} {response.url}")
    if status == 429:
        raise RateLimitError("Backend rate limit hit. Wait a moment and retry.")
    if status >= 400:
        raise IntegrationError(f"Backend error (HTTP {status}): {response.text[:500]}")


class BackendClient:
    def __init__(
        self,
        session: Session | None = None,
        on_refresh: Callable[[Session], None] | None = None,
        base_url: str | None = None,
    ):
        self.session = session
        self.on_refresh = on_refresh
        self.base_url = (base_url or get_settings().api_base_url).rstrip("/")

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self) -> dict:
        headers = {"Accept": "application/json"}
        if self.session is not None and self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"
        return headers

    def _send(self, method: str, path: str, params: dict | None, json: Any) -> requests.Response:
        url = self._url(path)
        logger.debug("%s %s", method, url)
        try:
            return get_session().request(method, url, headers=self._headers(), params=params, json=json)
        except requests.RequestException as e:
            raise IntegrationError(f"Backend unreachable ({method} {url}): {e}") from e

    def _refresh(self) -> None:
        resp = self._send("POST", REFRESH_PATH, None, None)
        if resp.status_code >= 400:
            logger.warning("Token refresh failed for account %s (HTTP %s)", self.session.account, resp.status_code)
            raise AuthenticationError("Backend session expired. Sign in again via POST /auth/login.")
        try:
            token = _extract_token(resp.json())
        except ValueError:
            token = None
        if token:
            self.session.token = token
            if self.on_refresh is not None:
                self.on_refresh(self.session)

    def request(self, method: str, path: str, params: dict | None = None, json: Any = None) -> Any:
        resp = self._send(method, path, params, json)
        if resp.status_code == 401 and self.session is not None and path != REFRESH_PATH:
            self._refresh()
            resp = self._send(method, path, params, json)
        _handle_response(resp)
        if resp.status_code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise IntegrationError(f"Backend returned non-JSON body for {method} {path}") from e

    def get(self, path: str, params: dict | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None, params: dict | None = None) -> Any:
        return self.request("POST", path, params=params, json=json)

    def patch(self, path: str, json: Any = None) -> Any:
        return self.request("PATCH", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)
