from django.contrib.auth import get_user_model
from rest_framework import serializers

from users.serializers import RoleRequestSerializer

User = get_user_model()


class OperatorUserListSerializer(serializers.ModelSerializer):
    display_name = serializers.CharField(read_only=True)
    avatar_url = serializers.CharField(read_only=True)
    properties_count = serializers.IntegerField(read_only=True)
    bookings_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "display_name",
            "mobile",
            "role",
            "status",
            "is_active",
            "is_staff",
            "avatar_url",
            "kyc_verified",
            "date_joined",
            "properties_count",
            "bookings_count",
        ]
        read_only_fields = fields


class OperatorRoleRequestSerializer(RoleRequestSerializer):
    user_role = serializers.CharField(source="user.role", read_only=True)
    user_status = serializers.CharField(source="user.status", read_only=True)

    class Meta(RoleRequestSerializer.Meta):
        fields = RoleRequestSerializer.Meta.fields + ["user_role", "user_status"]
        read_only_fields = fields


class UpdateRoleSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=User.Role.choices)
    reason = serializers.CharField(required=False, allow_blank=True)
