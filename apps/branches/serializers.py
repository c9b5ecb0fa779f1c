"""Serializers for branches."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.locations.models import Location
from apps.locations.serializers import CitySerializer, DistrictShortSerializer

from .models import Branch


class BranchSerializer(serializers.ModelSerializer):
    """Read representation with nested city/district."""

    city = CitySerializer(read_only=True)
    district = DistrictShortSerializer(read_only=True)
    cityId = serializers.IntegerField(source="city_id", read_only=True)
    districtId = serializers.IntegerField(source="district_id", read_only=True)
    whatsappNumber = serializers.CharField(source="whatsapp_number", read_only=True)
    mapUrl = serializers.CharField(source="map_url", read_only=True)
    workingHours = serializers.CharField(source="working_hours", read_only=True)
    photoUrl = serializers.CharField(source="photo_url", read_only=True)

    class Meta:
        model = Branch
        fields = [
            "id",
            "name",
            "slug",
            "cityId",
            "city",
            "districtId",
            "district",
            "address",
            "phone",
            "whatsappNumber",
            "email",
            "mapUrl",
            "workingHours",
            "photoUrl",
        ]


class BranchWriteSerializer(serializers.ModelSerializer):
    name = serializers.CharField(min_length=2)
    slug = serializers.SlugField(min_length=2)
    cityId = serializers.PrimaryKeyRelatedField(
        source="city", queryset=Location.objects.cities()
    )
    districtId = serializers.PrimaryKeyRelatedField(
        source="district",
        queryset=Location.objects.districts(),
        required=False,
        allow_null=True,
    )
    neighborhoodIds = serializers.PrimaryKeyRelatedField(
        source="neighborhoods",
        queryset=Location.objects.neighborhoods(),
        many=True,
        required=False,
    )
    whatsappNumber = serializers.CharField(source="whatsapp_number", required=False, allow_blank=True)
    mapUrl = serializers.URLField(source="map_url", required=False, allow_blank=True)
    workingHours = serializers.CharField(source="working_hours", required=False, allow_blank=True)
    photoUrl = serializers.CharField(source="photo_url", required=False, allow_blank=True)

    class Meta:
        model = Branch
        fields = [
            "name",
            "slug",
            "cityId",
            "districtId",
            "neighborhoodIds",
            "address",
            "phone",
            "whatsappNumber",
            "email",
            "mapUrl",
            "workingHours",
            "photoUrl",
        ]

    def validate(self, attrs):  # type: ignore
        city = attrs.get("city") or getattr(self.instance, "city", None)
        district = attrs.get("district")
        if district is not None and city is not None and district.parent_id != city.id:
            raise serializers.ValidationError({"districtId": "İlçe seçilen ile ait değil."})
        return attrs

    def to_representation(self, instance):  # type: ignore
        return BranchSerializer(instance, context=self.context).data
