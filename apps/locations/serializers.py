"""Serializers for location reference data."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Location


class CitySerializer(serializers.ModelSerializer):
    slug = serializers.SlugField(required=False, allow_blank=True)

    class Meta:
        model = Location
        fields = ["id", "name", "slug"]

    def create(self, validated_data):  # type: ignore
        validated_data["kind"] = Location.Kind.CITY
        return super().create(validated_data)


class DistrictSerializer(serializers.ModelSerializer):
    cityId = serializers.IntegerField(source="parent_id", read_only=True)

    class Meta:
        model = Location
        fields = ["id", "name", "slug", "cityId"]


class DistrictShortSerializer(serializers.ModelSerializer):
    class Meta:
        model = Location
        fields = ["id", "name"]


class NeighborhoodSerializer(serializers.ModelSerializer):
    districtId = serializers.IntegerField(source="parent_id", read_only=True)
    district = DistrictShortSerializer(source="parent", read_only=True)

    class Meta:
        model = Location
        fields = ["id", "name", "slug", "districtId", "district", "latitude", "longitude"]


class NeighborSerializer(serializers.Serializer):
    """Neighbor of a neighborhood with its distance in km."""

    id = serializers.IntegerField(source="neighbor.id")
    name = serializers.CharField(source="neighbor.name")
    slug = serializers.CharField(source="neighbor.slug")
    district = DistrictShortSerializer(source="neighbor.parent")
    distance = serializers.DecimalField(max_digits=6, decimal_places=2, coerce_to_string=False)
