"""HTTP client used by the site to talk to the JSON API.

Every call goes through :func:`request_json`. Any network failure or non-2xx
response is raised as :class:`ApiError`; views translate it into a Turkish
message for the action that failed.
"""

from __future__ import annotations

import logging
from typing import Any

import requests
from django.conf import settings  # type: ignore

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A failed API call. ``status`` is ``None`` for network errors."""

    def __init__(self, message: str, status: int | None = None, payload: Any = None):
        super().__init__(message)
        self.status = status
        self.payload = payload

    @property
    def is_not_found(self) -> bool:
        return self.status == 404


def api_url(path: str) -> str:
    return f"{settings.API_BASE_URL}/{path.lstrip('/')}"


def _headers(token: str | None) -> dict[str, str]:
    headers = {"Accept": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def _payload(response: requests.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def request_json(
    method: str,
    path: str,
    *,
    token: str | None = None,
    params: dict[str, Any] | None = None,
    json: Any = None,
    files: Any = None,
    data: Any = None,
) -> Any:
    url = api_url(path)
    try:
        response = requests.request(
            method,
            url,
            params=params,
            json=json,
            files=files,
            data=data,
            headers=_headers(token),
            timeout=settings.API_TIMEOUT,
        )
    except requests.RequestException as exc:
        logger.warning("API %s %s failed: %s", method, url, exc)
        raise ApiError(str(exc)) from exc

    if not 200 <= response.status_code < 300:
        payload = _payload(response)
        logger.warning("API %s %s returned %s", method, url, response.status_code)
        raise ApiError(f"{method} {path} returned {response.status_code}", response.status_code, payload)
    return _payload(response)


def fetch_json(path: str, *, token: str | None = None, params: dict[str, Any] | None = None) -> Any:
    return request_json("GET", path, token=token, params=params)


def fetch_json_optional(path: str, *, token: str | None = None, params: dict[str, Any] | None = None) -> Any:
    """Like :func:`fetch_json` but ``None`` on 404."""
    try:
        return fetch_json(path, token=token, params=params)
    except ApiError as exc:
        if exc.is_not_found:
            return None
        raise


def post_json(path: str, body: Any, *, token: str | None = None) -> Any:
    return request_json("POST", path, token=token, json=body)


def patch_json(path: str, body: Any, *, token: str | None = None) -> Any:
    return request_json("PATCH", path, token=token, json=body)


def delete(path: str, *, token: str | None = None) -> Any:
    return request_json("DELETE", path, token=token)
