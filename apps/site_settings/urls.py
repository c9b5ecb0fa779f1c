"""URL routing for site settings."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import SiteSettingView

urlpatterns = [
    path("settings", SiteSettingView.as_view(), name="detail"),
]
