from rest_framework import serializers

from .models import ContactMessage


class ContactMessageSerializer(serializers.ModelSerializer):
    class Meta:
        model = ContactMessage
        fields = [
            "id",
            "user",
            "name",
            "email",
            "subject",
            "message",
            "status",
            "reply_text",
            "reply_timestamp",
            "has_admin_reply",
            "created_at",
        ]
        read_only_fields = fields


class ContactMessageCreateSerializer(serializers.Serializer):
    name = serializers.CharField(
        min_length=2,
        max_length=120,
        error_messages={"min_length": "Name must be at least 2 characters."},
    )
    email = serializers.EmailField(error_messages={"invalid": "Invalid email address."})
    subject = serializers.CharField(
        min_length=3,
        max_length=200,
        error_messages={"min_length": "Subject must be at least 3 characters."},
    )
    message = serializers.CharField(
        min_length=10,
        error_messages={"min_length": "Message must be at least 10 characters."},
    )


class AdminReplySerializer(serializers.Serializer):
    reply_text = serializers.CharField(
        min_length=1,
        max_length=5000,
        error_messages={"blank": "Reply cannot be empty."},
    )
