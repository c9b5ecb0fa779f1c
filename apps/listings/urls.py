"""URL routing for listings and the listing attribute schema."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import BranchListingSearchView, ListingAttributeViewSet, ListingViewSet

listing_list = ListingViewSet.as_view({"get": "list", "post": "create"})
listing_detail = ListingViewSet.as_view(
    {"get": "retrieve", "patch": "partial_update", "delete": "destroy"}
)
listing_images = ListingViewSet.as_view({"post": "images"})
listing_image_cover = ListingViewSet.as_view({"patch": "cover_image"})
listing_image_detail = ListingViewSet.as_view({"delete": "delete_image"})
listing_transfer = ListingViewSet.as_view({"patch": "transfer"})

attribute_list = ListingAttributeViewSet.as_view({"get": "list", "post": "create"})
attribute_detail = ListingAttributeViewSet.as_view(
    {"get": "retrieve", "patch": "partial_update", "put": "update", "delete": "destroy"}
)

urlpatterns = [
    path("listings", listing_list, name="list"),
    path("listings/search", BranchListingSearchView.as_view(), name="search"),
    path("listings/<uuid:pk>/images", listing_images, name="images"),
    path("listings/<uuid:pk>/images/<uuid:image_id>/cover", listing_image_cover, name="image-cover"),
    path("listings/<uuid:pk>/images/<uuid:image_id>", listing_image_detail, name="image-detail"),
    path("listings/<uuid:pk>/transfer", listing_transfer, name="transfer"),
    # id, slug or 5-digit listing number
    path("listings/<str:identifier>", listing_detail, name="detail"),
    path("listing-attributes", attribute_list, name="attribute-list"),
    path("listing-attributes/<int:pk>", attribute_detail, name="attribute-detail"),
]
