"""Serializers for customer and consultant requests."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.consultants.models import Consultant
from apps.locations.models import Location

from .models import ConsultantRequest, CustomerRequest, RequestStatus


class CustomerRequestSerializer(serializers.ModelSerializer):
    fullName = serializers.CharField(source="full_name", min_length=2, max_length=255)
    phone = serializers.CharField(max_length=40)
    email = serializers.EmailField(required=False, allow_blank=True)
    criteria = serializers.DictField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True)
    cityId = serializers.PrimaryKeyRelatedField(
        source="city", queryset=Location.objects.cities(), required=False, allow_null=True
    )
    districtId = serializers.PrimaryKeyRelatedField(
        source="district", queryset=Location.objects.districts(), required=False, allow_null=True
    )
    neighborhoodId = serializers.PrimaryKeyRelatedField(
        source="neighborhood", queryset=Location.objects.neighborhoods(), required=False, allow_null=True
    )
    status = serializers.CharField(read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = CustomerRequest
        fields = [
            "id",
            "fullName",
            "phone",
            "email",
            "type",
            "criteria",
            "notes",
            "cityId",
            "districtId",
            "neighborhoodId",
            "status",
            "createdAt",
        ]


class ConsultantRequestSerializer(serializers.ModelSerializer):
    consultantId = serializers.PrimaryKeyRelatedField(source="consultant", queryset=Consultant.objects.all())
    consultantName = serializers.CharField(source="consultant.user.get_full_name", read_only=True)
    customerName = serializers.CharField(source="customer_name", min_length=2, max_length=255)
    customerPhone = serializers.CharField(source="customer_phone", max_length=40)
    customerEmail = serializers.EmailField(source="customer_email", required=False, allow_blank=True)
    requestText = serializers.CharField(source="request_text", required=False, allow_blank=True)
    criteria = serializers.DictField(required=False, allow_null=True)
    status = serializers.CharField(read_only=True)
    createdById = serializers.IntegerField(source="created_by_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = ConsultantRequest
        fields = [
            "id",
            "consultantId",
            "consultantName",
            "customerName",
            "customerPhone",
            "customerEmail",
            "requestText",
            "criteria",
            "status",
            "createdById",
            "createdAt",
        ]


class RequestStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=RequestStatus.choices)
