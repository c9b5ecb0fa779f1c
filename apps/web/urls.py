"""Routes of the public site and the back office (``/yonetim``)."""

from __future__ import annotations

from django.urls import path  # type: ignore

from . import backoffice, views

urlpatterns = [
    path("", views.home, name="home"),
    path("arama", views.listing_search, name="search"),
    path("ara", views.search_redirect, name="search-redirect"),
    path("firsatlar", views.opportunities, name="opportunities"),
    path("subeler/<slug:slug>", views.branch_detail, name="branch"),
    path("ilan/<str:identifier>", views.listing_detail, name="listing-detail"),
    path("satilik-kiralik-talep", views.customer_request, name="customer-request"),
    path("sayfa/<slug:slug>", views.page_detail, name="page"),
    # Back office
    path("yonetim", backoffice.dashboard, name="backoffice"),
    path("yonetim/giris", backoffice.login, name="login"),
    path("yonetim/cikis", backoffice.logout, name="logout"),
    path("yonetim/talepler", backoffice.leads, name="backoffice-leads-default"),
    path("yonetim/talepler/<str:kind>", backoffice.leads, name="backoffice-leads"),
    path("yonetim/<slug:resource>", backoffice.resource_view, name="backoffice-resource"),
]
