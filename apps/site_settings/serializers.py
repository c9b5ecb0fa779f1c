"""Serializers for site settings."""

from __future__ import annotations

import re

from rest_framework import serializers  # type: ignore

from .models import SiteSetting

COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")


def _color(value: str) -> str:
    if value and not COLOR_RE.match(value):
        raise serializers.ValidationError("Renk #rrggbb biçiminde olmalı.")
    return value


class SiteSettingSerializer(serializers.ModelSerializer):
    """camelCase representation; ``id`` is always ``default``.

    Unknown keys in a PATCH body are ignored, only the declared fields can
    be written.
    """

    siteName = serializers.CharField(source="site_name", required=False, max_length=120)
    logoUrl = serializers.CharField(source="logo_url", required=False, allow_blank=True, max_length=500)
    faviconUrl = serializers.CharField(source="favicon_url", required=False, allow_blank=True, max_length=500)
    ownerName = serializers.CharField(source="owner_name", required=False, max_length=120)
    ownerTitle = serializers.CharField(source="owner_title", required=False, allow_blank=True, max_length=120)
    showOwnerTitle = serializers.BooleanField(source="show_owner_title", required=False)
    phoneNumber = serializers.CharField(source="phone_number", required=False, allow_blank=True, max_length=40)
    whatsappNumber = serializers.CharField(
        source="whatsapp_number", required=False, allow_blank=True, max_length=40
    )
    email = serializers.CharField(required=False, allow_blank=True, max_length=120)
    supportEmail = serializers.CharField(source="support_email", required=False, allow_blank=True, max_length=120)
    address = serializers.CharField(required=False, allow_blank=True, max_length=500)
    primaryColor = serializers.CharField(source="primary_color", required=False, max_length=20, validators=[_color])
    accentColor = serializers.CharField(source="accent_color", required=False, max_length=20, validators=[_color])
    backgroundColor = serializers.CharField(
        source="background_color", required=False, max_length=20, validators=[_color]
    )
    textColor = serializers.CharField(source="text_color", required=False, max_length=20, validators=[_color])
    fontFamily = serializers.CharField(source="font_family", required=False, max_length=60)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = SiteSetting
        fields = [
            "id",
            "siteName",
            "logoUrl",
            "faviconUrl",
            "ownerName",
            "ownerTitle",
            "showOwnerTitle",
            "phoneNumber",
            "whatsappNumber",
            "email",
            "supportEmail",
            "address",
            "primaryColor",
            "accentColor",
            "backgroundColor",
            "textColor",
            "fontFamily",
            "updatedAt",
        ]
        read_only_fields = ["id"]
