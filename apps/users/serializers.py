"""Serializers for user-related API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Public view of an account."""

    class Meta:
        model = User
        fields = ["id", "email", "name", "phone", "created_at"]
        read_only_fields = ["id", "email", "created_at"]


class CustomerInfoSerializer(serializers.Serializer):
    """Contact details captured by the booking form."""

    name = serializers.CharField(max_length=100, error_messages={"blank": "Name is required"})
    email = serializers.EmailField(error_messages={"invalid": "Invalid email format"})
    phone = serializers.CharField(
        min_length=10,
        max_length=20,
        error_messages={
            "min_length": "Phone number must be at least 10 digits",
            "max_length": "Phone number must be less than 20 digits",
        },
    )
