from __future__ import annotations

from rest_framework import serializers

from operator_settings.models import DbSetting


class PlatformSettingsSerializer(serializers.Serializer):
    """Platform-wide settings, keyed the way the dashboard stores them."""

    platformName = serializers.CharField(min_length=1, max_length=120)
    logoUrl = serializers.URLField(max_length=1024, allow_blank=True)
    maintenanceMode = serializers.BooleanField()
    allowNewRegistrations = serializers.BooleanField()
    defaultBookingFee = serializers.DecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=0,
        coerce_to_string=False,
    )
    adminEmail = serializers.EmailField()
    termsAndConditions = serializers.CharField(allow_blank=True, max_length=20000)

    def validate_platformName(self, value: str) -> str:
        value = value.strip()
        if not value:
            raise serializers.ValidationError("Platform name is required.")
        return value


class DbSettingSerializer(serializers.ModelSerializer):
    updated_by_id = serializers.IntegerField(read_only=True)
    updated_by_name = serializers.SerializerMethodField(read_only=True)

    class Meta:
        model = DbSetting
        fields = [
            "id",
            "key",
            "value_type",
            "value_json",
            "updated_at",
            "updated_by_id",
            "updated_by_name",
        ]
        read_only_fields = fields

    def get_updated_by_name(self, obj: DbSetting) -> str | None:
        user = obj.updated_by
        return user.display_name if user else None
