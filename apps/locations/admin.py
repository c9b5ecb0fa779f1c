"""Admin registrations for locations."""

from __future__ import annotations

from django.contrib import admin
from mptt.admin import MPTTModelAdmin

from .models import Location, NeighborhoodNeighbor


@admin.register(Location)
class LocationAdmin(MPTTModelAdmin):
    list_display = ("name", "kind", "parent", "is_active", "created_at")
    list_filter = ("kind", "is_active")
    search_fields = ("name", "slug")
    prepopulated_fields = {"slug": ("name",)}
    mptt_level_indent = 20


@admin.register(NeighborhoodNeighbor)
class NeighborhoodNeighborAdmin(admin.ModelAdmin):
    list_display = ("neighborhood", "neighbor", "distance")
    search_fields = ("neighborhood__name", "neighbor__name")
    raw_id_fields = ("neighborhood", "neighbor")
