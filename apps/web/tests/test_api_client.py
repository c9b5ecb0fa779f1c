"""Tests for the HTTP client, design loading and reference data."""

from __future__ import annotations

from unittest.mock import patch

import pytest
import requests
from django.core.cache import cache

from apps.web import references
from apps.web.api import ApiError, fetch_json, fetch_json_optional, post_json
from apps.web.context_processors import DEFAULT_DESIGN, invalidate_design, load_design

from .fakes import FakeApi


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


def test_fetch_json_sends_bearer_token_and_timeout(settings):
    api = FakeApi({("GET", "/cities"): (200, [{"id": 1, "name": "Konya"}])})
    with patch("apps.web.api.requests.request", new=api):
        data = fetch_json("/cities", token="tok")

    assert data == [{"id": 1, "name": "Konya"}]
    call = api.calls[0]
    assert call["url"] == "http://api.test/api/v1/cities"
    assert call["headers"]["Authorization"] == "Bearer tok"
    assert call["timeout"] == settings.API_TIMEOUT


def test_non_2xx_raises_api_error_with_payload():
    api = FakeApi({("POST", "/requests/customer"): (400, {"phone": ["This field is required."]})})
    with patch("apps.web.api.requests.request", new=api):
        with pytest.raises(ApiError) as excinfo:
            post_json("/requests/customer", {"fullName": "Ali"})

    assert excinfo.value.status == 400
    assert excinfo.value.payload == {"phone": ["This field is required."]}
    assert "Authorization" not in api.calls[0]["headers"]


def test_network_failure_raises_api_error_without_status():
    api = FakeApi({("GET", "/cities"): requests.ConnectionError("refused")})
    with patch("apps.web.api.requests.request", new=api):
        with pytest.raises(ApiError) as excinfo:
            fetch_json("/cities")
    assert excinfo.value.status is None


def test_fetch_json_optional_returns_none_on_404_only():
    api = FakeApi({("GET", "/listings/broken"): (500, {"detail": "boom"})})
    with patch("apps.web.api.requests.request", new=api):
        assert fetch_json_optional("/listings/99999") is None
        with pytest.raises(ApiError):
            fetch_json_optional("/listings/broken")


def test_design_is_cached_until_invalidated():
    api = FakeApi({("GET", "/settings"): (200, {"siteName": "Özcan Aktaş", "primaryColor": "#112233", "logoUrl": None})})
    with patch("apps.web.api.requests.request", new=api):
        first = load_design()
        second = load_design()
        assert len(api.calls_to("GET", "/settings")) == 1
        invalidate_design()
        load_design()

    assert first is not None and first == second
    assert first["primaryColor"] == "#112233"
    # null values fall back to defaults
    assert first["logoUrl"] == ""
    assert first["fontFamily"] == DEFAULT_DESIGN["fontFamily"]
    assert len(api.calls_to("GET", "/settings")) == 2


def test_design_falls_back_to_defaults_without_caching():
    api = FakeApi({("GET", "/settings"): (503, None)})
    with patch("apps.web.api.requests.request", new=api):
        assert load_design() == DEFAULT_DESIGN
        load_design()
    assert len(api.calls_to("GET", "/settings")) == 2


def test_reference_loaders_degrade_to_empty_lists():
    api = FakeApi(
        {
            ("GET", "/cities"): (503, None),
            ("GET", "/districts"): (200, [{"id": 10, "name": "Meram"}]),
        }
    )
    with patch("apps.web.api.requests.request", new=api):
        assert references.load_cities() == []
        assert references.load_districts(1) == [{"id": 10, "name": "Meram"}]
        assert references.load_districts(None) == []
        assert references.load_neighborhoods("") == []
        assert references.load_attribute_definitions(None) == []

    assert api.calls_to("GET", "/districts")[0]["params"] == {"cityId": 1}
    # no request is made without a parent selection
    assert len(api.calls) == 2
