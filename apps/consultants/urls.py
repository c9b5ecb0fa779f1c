"""URL routing for consultants."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import ConsultantViewSet

consultant_list = ConsultantViewSet.as_view({"get": "list", "post": "create"})
consultant_detail = ConsultantViewSet.as_view(
    {"get": "retrieve", "patch": "partial_update", "delete": "destroy"}
)

urlpatterns = [
    path("consultants", consultant_list, name="list"),
    path("consultants/<int:pk>", consultant_detail, name="detail"),
]
