"""URL routing for CMS pages."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import PageSettingViewSet

page_list = PageSettingViewSet.as_view({"get": "list", "post": "create"})
page_admin_list = PageSettingViewSet.as_view({"get": "admin_list"})
page_by_slug = PageSettingViewSet.as_view({"get": "by_slug"})
page_detail = PageSettingViewSet.as_view(
    {"get": "retrieve", "patch": "partial_update", "put": "update", "delete": "destroy"}
)

urlpatterns = [
    path("pages", page_list, name="list"),
    path("pages/admin/all", page_admin_list, name="admin-list"),
    path("pages/slug/<slug:slug>", page_by_slug, name="by-slug"),
    path("pages/<int:pk>", page_detail, name="detail"),
]
