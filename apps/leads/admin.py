"""Admin registrations for leads."""

from __future__ import annotations

from django.contrib import admin

from .models import ConsultantRequest, CustomerRequest


@admin.register(CustomerRequest)
class CustomerRequestAdmin(admin.ModelAdmin):
    list_display = ("full_name", "phone", "type", "status", "created_at")
    list_filter = ("type", "status")
    search_fields = ("full_name", "phone", "email")
    readonly_fields = ("created_at", "updated_at")


@admin.register(ConsultantRequest)
class ConsultantRequestAdmin(admin.ModelAdmin):
    list_display = ("customer_name", "customer_phone", "consultant", "status", "created_at")
    list_filter = ("status",)
    search_fields = ("customer_name", "customer_phone")
    raw_id_fields = ("consultant", "created_by")
    readonly_fields = ("created_at", "updated_at")
