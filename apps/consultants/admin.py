"""Admin registrations for consultants."""

from __future__ import annotations

from django.contrib import admin

from .models import Consultant


@admin.register(Consultant)
class ConsultantAdmin(admin.ModelAdmin):
    list_display = ("user", "branch", "title", "contact_phone", "created_at")
    list_filter = ("branch",)
    search_fields = ("user__email", "user__name", "title")
    raw_id_fields = ("user",)
