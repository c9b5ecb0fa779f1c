"""A fake JSON API for web tier tests, patched over ``requests.request``."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import requests
from django.conf import settings
from django.core.cache import cache
from django.test import TestCase


def fake_response(status: int = 200, data=None) -> MagicMock:
    response = MagicMock(spec=requests.Response)
    response.status_code = status
    response.content = json.dumps(data).encode() if data is not None else b""
    response.json.return_value = data
    return response


class FakeApi:
    """Routes ``(method, path)`` to ``(status, data)``; anything else is a 404.

    A route value may also be an exception instance, which is raised.
    """

    def __init__(self, routes: dict | None = None):
        self.routes = dict(routes or {})
        self.calls: list[dict] = []

    def __call__(self, method, url, **kwargs):
        path = url[len(settings.API_BASE_URL):]
        self.calls.append({"method": method, "path": path, "url": url, **kwargs})
        route = self.routes.get((method, path))
        if route is None:
            return fake_response(404, {"detail": "Not found."})
        if isinstance(route, Exception):
            raise route
        status, data = route
        return fake_response(status, data)

    def calls_to(self, method: str, path: str) -> list[dict]:
        return [call for call in self.calls if call["method"] == method and call["path"] == path]


class WebTestCase(TestCase):
    """Patches the HTTP client with a :class:`FakeApi` built from ``routes``."""

    routes: dict = {}

    def setUp(self) -> None:
        cache.clear()
        self.api = FakeApi(self.routes)
        patcher = patch("apps.web.api.requests.request", new=self.api)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(cache.clear)
