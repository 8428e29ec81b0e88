"""Thin JSON-over-HTTP client shared by the backend repositories."""

from __future__ import annotations

from typing import Any

import requests
from loguru import logger

from utils.constants import REQUEST_TIMEOUT_SECONDS
from utils.errors import RemoteRequestError


class ApiClient:
    """Wraps a ``requests.Session`` bound to one API base URL.

    Every failure mode (connection errors, non-2xx statuses, undecodable
    bodies) surfaces as ``RemoteRequestError``.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self._request("GET", path, params=params)

    def post_json(self, path: str, payload: dict[str, Any]) -> Any:
        return self._request("POST", path, json=payload)

    def delete_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self._request("DELETE", path, params=params)

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = self.url_for(path)
        logger.debug(f"{method} {url}")
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logger.error(f"{method} {url} failed: {exc}")
            raise RemoteRequestError(f"Network error: {exc}") from exc

        if not response.ok:
            message = self._error_message(response)
            logger.error(f"{method} {url} returned {response.status_code}: {message}")
            raise RemoteRequestError(message, status_code=response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            logger.error(f"{method} {url} returned a non-JSON body")
            raise RemoteRequestError(
                "Unexpected response from server", status_code=response.status_code
            ) from exc

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return f"HTTP error! status: {response.status_code}"
