"""URL routing for location reference data."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import (
    CityViewSet,
    DistrictListView,
    NeighborhoodListView,
    NeighborhoodNeighborsView,
)

city_list = CityViewSet.as_view({"get": "list", "post": "create"})
city_detail = CityViewSet.as_view(
    {"get": "retrieve", "patch": "partial_update", "put": "update", "delete": "destroy"}
)

urlpatterns = [
    path("cities", city_list, name="city-list"),
    path("cities/<int:pk>", city_detail, name="city-detail"),
    path("districts", DistrictListView.as_view(), name="district-list"),
    path("neighborhoods", NeighborhoodListView.as_view(), name="neighborhood-list"),
    path("neighborhoods/<int:pk>/neighbors", NeighborhoodNeighborsView.as_view(), name="neighborhood-neighbors"),
]
