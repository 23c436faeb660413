from __future__ import annotations

from rest_framework import serializers

from contact.serializers import ContactMessageSerializer
from notifications.models import NotificationLog


class OperatorContactMessageSerializer(ContactMessageSerializer):
    user_name = serializers.SerializerMethodField()

    class Meta(ContactMessageSerializer.Meta):
        fields = ContactMessageSerializer.Meta.fields + ["user_name"]
        read_only_fields = fields

    def get_user_name(self, obj) -> str | None:
        return obj.user.display_name if obj.user_id else None


class OperatorNotificationLogSerializer(serializers.ModelSerializer):
    user_email = serializers.SerializerMethodField()

    class Meta:
        model = NotificationLog
        fields = ["id", "type", "status", "error", "related_id", "user", "user_email", "created_at"]
        read_only_fields = fields

    def get_user_email(self, obj: NotificationLog) -> str | None:
        return obj.user.email if obj.user_id else None
