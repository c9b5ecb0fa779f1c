"""Serializers for CMS pages."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .blocks import BLOCK_TYPES
from .models import PageSetting


class ContentBlockSerializer(serializers.Serializer):
    id = serializers.CharField(required=False, allow_blank=True, max_length=100)
    type = serializers.ChoiceField(choices=BLOCK_TYPES)
    content = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
    imageUrl = serializers.CharField(required=False, allow_blank=True, max_length=1000)
    alt = serializers.CharField(required=False, allow_blank=True, max_length=255)
    linkUrl = serializers.CharField(required=False, allow_blank=True, max_length=1000)

    def validate(self, attrs):  # type: ignore
        if attrs["type"] == "image" and not attrs.get("imageUrl"):
            raise serializers.ValidationError({"imageUrl": "Görsel bloğu için adres gerekli."})
        return attrs


class PageSettingSerializer(serializers.ModelSerializer):
    metaTitle = serializers.CharField(source="meta_title", required=False, allow_blank=True, max_length=255)
    metaDescription = serializers.CharField(
        source="meta_description", required=False, allow_blank=True, max_length=500
    )
    metaKeywords = serializers.CharField(source="meta_keywords", required=False, allow_blank=True, max_length=500)
    ogImage = serializers.CharField(source="og_image", required=False, allow_blank=True, max_length=500)
    content = serializers.ListField(child=ContentBlockSerializer(), required=False)
    isPublished = serializers.BooleanField(source="is_published", required=False)
    showInMenu = serializers.BooleanField(source="show_in_menu", required=False)
    menuOrder = serializers.IntegerField(source="menu_order", required=False, min_value=0)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = PageSetting
        fields = [
            "id",
            "slug",
            "title",
            "metaTitle",
            "metaDescription",
            "metaKeywords",
            "ogImage",
            "content",
            "isPublished",
            "showInMenu",
            "menuOrder",
            "template",
            "createdAt",
            "updatedAt",
        ]
        extra_kwargs = {"template": {"required": False, "allow_blank": True}}
