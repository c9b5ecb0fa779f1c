"""Admin registrations for branches."""

from __future__ import annotations

from django.contrib import admin

from .models import Branch


@admin.register(Branch)
class BranchAdmin(admin.ModelAdmin):
    list_display = ("name", "city", "district", "phone", "created_at")
    list_filter = ("city",)
    search_fields = ("name", "slug", "address")
    prepopulated_fields = {"slug": ("name",)}
    filter_horizontal = ("neighborhoods",)
    readonly_fields = ("created_at", "updated_at")
