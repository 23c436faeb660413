from __future__ import annotations

import logging
import re
from typing import Optional

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from .models import RoleRequest

User = get_user_model()
logger = logging.getLogger(__name__)

MOBILE_PATTERN = re.compile(r"^\+?[0-9][0-9\s\-()]{5,19}$")

INACTIVE_STATUS_MESSAGES = {
    "pending": "Your account is pending approval.",
    "suspended": "Your account has been suspended.",
}


def normalize_mobile(raw_mobile: Optional[str]) -> str:
    """Strip formatting characters from a mobile number, keeping a leading '+'."""
    value = (raw_mobile or "").strip()
    if not value:
        return ""
    if not MOBILE_PATTERN.match(value):
        raise serializers.ValidationError("Enter a valid mobile number.")
    digits = re.sub(r"[^0-9]", "", value)
    return f"+{digits}" if value.startswith("+") else digits


class ProfileSerializer(serializers.ModelSerializer):
    """Read-only profile as shown on the settings page and in the layout."""

    avatar_url = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "name",
            "mobile",
            "role",
            "status",
            "avatar_url",
            "kyc_verified",
            "date_joined",
        ]
        read_only_fields = fields

    def get_avatar_url(self, obj: User) -> str:
        return obj.avatar_url


class ProfileUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=2, max_length=150, required=False)
    mobile = serializers.CharField(max_length=32, required=False, allow_blank=True)
    avatar = serializers.URLField(
        max_length=1024,
        required=False,
        allow_blank=True,
        allow_null=True,
    )

    def validate_name(self, value: str) -> str:
        value = value.strip()
        if len(value) < 2:
            raise serializers.ValidationError("Name must be at least 2 characters.")
        return value

    def validate_mobile(self, value: str) -> str:
        return normalize_mobile(value)

    def validate_avatar(self, value: Optional[str]) -> str:
        return (value or "").strip()


class SignupSerializer(serializers.ModelSerializer):
    """Self-service registration with email and password. New accounts start as renters."""

    password = serializers.CharField(write_only=True)
    confirm_password = serializers.CharField(write_only=True)
    email = serializers.EmailField()
    name = serializers.CharField(min_length=2, max_length=150)

    class Meta:
        model = User
        fields = ["id", "email", "name", "password", "confirm_password"]

    def validate_email(self, value: str) -> str:
        email = value.strip().lower()
        if User.objects.filter(email__iexact=email).exists():
            raise serializers.ValidationError("A user with this email already exists.")
        return email

    def validate_password(self, value: str) -> str:
        validate_password(value)
        return value

    def validate(self, attrs: dict) -> dict:
        if attrs.get("password") != attrs.get("confirm_password"):
            raise serializers.ValidationError({"confirm_password": ["Passwords don't match."]})
        return attrs

    def create(self, validated_data: dict) -> User:
        validated_data.pop("confirm_password", None)
        password = validated_data.pop("password")
        validated_data["username"] = self._generate_username(validated_data["email"])
        return User.objects.create_user(password=password, **validated_data)

    def _generate_username(self, email: str) -> str:
        """Derive a unique username from the local part of the email."""
        base = re.sub(r"[^a-z0-9]+", "", email.split("@")[0].lower()) or "user"
        candidate = base
        suffix = 1
        while User.objects.filter(username=candidate).exists():
            candidate = f"{base}{suffix}"
            suffix += 1
        return candidate


class FlexibleTokenObtainPairSerializer(TokenObtainPairSerializer):
    """
    Accepts an email or username for authentication and returns a JWT pair.

    Pending and suspended accounts are refused with a status-specific message.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["identifier"] = serializers.CharField(required=False, allow_blank=True)
        if self.username_field in self.fields:
            self.fields[self.username_field].required = False

    def validate(self, attrs: dict) -> dict:
        identifier = attrs.get("identifier") or attrs.get(self.username_field) or ""
        password = attrs.get("password")
        if not identifier or not password:
            raise serializers.ValidationError(
                {"non_field_errors": ["Provide credentials to log in."]}
            )

        user = self._resolve_user(identifier)
        if not user:
            raise AuthenticationFailed(self.error_messages["no_active_account"])
        if user.status in INACTIVE_STATUS_MESSAGES and user.check_password(password):
            logger.info("users: refused login for %s account %s", user.status, user.pk)
            raise AuthenticationFailed(INACTIVE_STATUS_MESSAGES[user.status])

        attrs[self.username_field] = user.get_username()
        data = super().validate(attrs)
        data["role"] = self.user.role
        return data

    def _resolve_user(self, identifier: str) -> Optional[User]:
        value = identifier.strip()
        if not value:
            return None
        if "@" in value:
            user = User.objects.filter(email__iexact=value).first()
            if user:
                return user
        return User.objects.filter(username__iexact=value).first()


class RoleRequestSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(read_only=True)
    user_name = serializers.CharField(source="user.display_name", read_only=True)
    user_email = serializers.EmailField(source="user.email", read_only=True)

    class Meta:
        model = RoleRequest
        fields = [
            "id",
            "user_id",
            "user_name",
            "user_email",
            "requested_role",
            "status",
            "user_notes",
            "admin_notes",
            "requested_at",
            "processed_at",
        ]
        read_only_fields = fields


class RoleRequestCreateSerializer(serializers.Serializer):
    user_notes = serializers.CharField(max_length=1000, required=False, allow_blank=True)
