"""Serializers for user-related API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Profile returned on login."""

    class Meta:
        model = User
        fields = ["id", "name", "email", "role"]
        read_only_fields = fields
