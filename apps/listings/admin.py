"""Admin registrations for listings."""

from __future__ import annotations

from django.contrib import admin

from .models import Listing, ListingAttributeDefinition, ListingCounter, ListingImage


class ListingImageInline(admin.TabularInline):
    model = ListingImage
    extra = 0
    fields = ("url", "image", "is_cover", "sort_order")


@admin.register(Listing)
class ListingAdmin(admin.ModelAdmin):
    list_display = (
        "listing_no",
        "title",
        "status",
        "category",
        "price",
        "city",
        "branch",
        "consultant",
        "is_opportunity",
        "created_at",
    )
    list_filter = ("status", "category", "is_opportunity", "branch", "city")
    search_fields = ("listing_no", "title", "slug", "description")
    raw_id_fields = ("city", "district", "neighborhood", "consultant", "created_by")
    inlines = (ListingImageInline,)
    readonly_fields = ("created_at", "updated_at")


@admin.register(ListingAttributeDefinition)
class ListingAttributeDefinitionAdmin(admin.ModelAdmin):
    list_display = ("category", "status", "sub_property_type", "key", "label", "type", "sort_order")
    list_filter = ("category", "status", "type")
    search_fields = ("key", "label", "group_name")


@admin.register(ListingCounter)
class ListingCounterAdmin(admin.ModelAdmin):
    list_display = ("id", "last_number")
