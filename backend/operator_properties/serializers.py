from rest_framework import serializers

from properties.models import PropertyReport
from properties.serializers import PropertySerializer


class OperatorPropertySerializer(PropertySerializer):
    owner_email = serializers.ReadOnlyField(source="owner.email")

    class Meta(PropertySerializer.Meta):
        fields = PropertySerializer.Meta.fields + ["owner_email"]
        read_only_fields = fields


class OperatorPropertyReportSerializer(serializers.ModelSerializer):
    property_title = serializers.ReadOnlyField(source="property.title")
    owner_id = serializers.ReadOnlyField(source="property.owner_id")
    reporter_email = serializers.ReadOnlyField(source="reporter.email")

    class Meta:
        model = PropertyReport
        fields = [
            "id",
            "property",
            "property_title",
            "owner_id",
            "reporter",
            "reporter_email",
            "reason",
            "status",
            "created_at",
            "reviewed_at",
        ]
        read_only_fields = fields
