"""URL routing for branches."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import BranchViewSet

branch_list = BranchViewSet.as_view({"get": "list", "post": "create"})
branch_detail = BranchViewSet.as_view(
    {"get": "retrieve", "patch": "partial_update", "put": "update", "delete": "destroy"}
)
branch_by_slug = BranchViewSet.as_view({"get": "by_slug"})
branch_neighborhoods = BranchViewSet.as_view({"get": "neighborhoods"})

urlpatterns = [
    path("branches", branch_list, name="list"),
    path("branches/<int:pk>", branch_detail, name="detail"),
    path("branches/by-slug/<slug:slug>", branch_by_slug, name="by-slug"),
    path("branches/<int:pk>/neighborhoods", branch_neighborhoods, name="neighborhoods"),
]
