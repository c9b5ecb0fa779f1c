"""Admin registration for CMS pages."""

from __future__ import annotations

from django.contrib import admin

from .models import PageSetting


@admin.register(PageSetting)
class PageSettingAdmin(admin.ModelAdmin):
    list_display = ("title", "slug", "is_published", "show_in_menu", "menu_order")
    list_filter = ("is_published", "show_in_menu")
    search_fields = ("title", "slug")
    prepopulated_fields = {"slug": ("title",)}
    readonly_fields = ("created_at", "updated_at")
