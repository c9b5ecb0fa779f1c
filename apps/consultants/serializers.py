"""Serializers for consultants."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.branches.models import Branch

from .models import Consultant


class ConsultantBranchSerializer(serializers.ModelSerializer):
    cityName = serializers.CharField(source="city.name", read_only=True)

    class Meta:
        model = Branch
        fields = ["id", "name", "slug", "cityName"]


class ConsultantSerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source="user_id", read_only=True)
    name = serializers.CharField(source="user.name", read_only=True)
    email = serializers.EmailField(source="user.email", read_only=True)
    branchId = serializers.IntegerField(source="branch_id", read_only=True)
    branch = ConsultantBranchSerializer(read_only=True)
    whatsappNumber = serializers.CharField(source="whatsapp_number", read_only=True)
    contactPhone = serializers.CharField(source="contact_phone", read_only=True)
    photoUrl = serializers.CharField(source="photo_url", read_only=True)

    class Meta:
        model = Consultant
        fields = [
            "id",
            "userId",
            "name",
            "email",
            "branchId",
            "branch",
            "title",
            "whatsappNumber",
            "contactPhone",
            "bio",
            "photoUrl",
        ]


class ConsultantWriteSerializer(serializers.Serializer):
    """Account + profile fields; password is required on create only."""

    name = serializers.CharField(min_length=2)
    email = serializers.EmailField()
    password = serializers.CharField(min_length=6, write_only=True)
    branchId = serializers.PrimaryKeyRelatedField(source="branch", queryset=Branch.objects.all())
    title = serializers.CharField(required=False, allow_blank=True)
    whatsappNumber = serializers.CharField(source="whatsapp_number", required=False, allow_blank=True)
    contactPhone = serializers.CharField(source="contact_phone", required=False, allow_blank=True)
    bio = serializers.CharField(required=False, allow_blank=True)
    photoUrl = serializers.CharField(source="photo_url", required=False, allow_blank=True)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.instance is not None:
            self.fields["password"].required = False

    def to_representation(self, instance):  # type: ignore
        return ConsultantSerializer(instance, context=self.context).data
