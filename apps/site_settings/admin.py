"""Admin registration for site settings."""

from __future__ import annotations

from django.contrib import admin

from .models import SiteSetting


@admin.register(SiteSetting)
class SiteSettingAdmin(admin.ModelAdmin):
    list_display = ("site_name", "owner_name", "phone_number", "updated_at")
    readonly_fields = ("updated_at",)

    def has_add_permission(self, request) -> bool:  # type: ignore
        return not SiteSetting.objects.exists()
