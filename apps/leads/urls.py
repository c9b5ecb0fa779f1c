"""URL routing for lead capture."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import ConsultantRequestViewSet, CustomerRequestViewSet

customer_list = CustomerRequestViewSet.as_view({"get": "list", "post": "create"})
customer_status = CustomerRequestViewSet.as_view({"patch": "set_status"})
consultant_list = ConsultantRequestViewSet.as_view({"get": "list", "post": "create"})
consultant_status = ConsultantRequestViewSet.as_view({"patch": "set_status"})

urlpatterns = [
    path("requests/customer", customer_list, name="customer-list"),
    path("requests/customer/<int:pk>/status", customer_status, name="customer-status"),
    path("requests/consultant", consultant_list, name="consultant-list"),
    path("requests/consultant/<int:pk>/status", consultant_status, name="consultant-status"),
]
