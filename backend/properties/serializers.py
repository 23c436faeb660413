from rest_framework import serializers

from .models import Property

PROPERTY_FIELDS = [
    "id",
    "owner",
    "owner_name",
    "title",
    "description",
    "price",
    "city",
    "property_type",
    "amenities",
    "image_url",
    "pano_image_url",
    "status",
    "rejection_reason",
    "latitude",
    "longitude",
    "bedrooms",
    "bathrooms",
    "balconies",
    "kitchen_available",
    "hall_available",
    "size",
    "floor_number",
    "total_floors",
    "facing",
    "gallery_images",
    "tags",
    "created_at",
    "updated_at",
]


class PropertySerializer(serializers.ModelSerializer):
    owner = serializers.PrimaryKeyRelatedField(read_only=True)
    owner_name = serializers.ReadOnlyField(source="owner.display_name")

    class Meta:
        model = Property
        fields = PROPERTY_FIELDS
        read_only_fields = PROPERTY_FIELDS


class PropertyWriteSerializer(serializers.ModelSerializer):
    """Validates owner-submitted property data for create and update."""

    title = serializers.CharField(
        min_length=5,
        max_length=140,
        error_messages={"min_length": "Title must be at least 5 characters."},
    )
    description = serializers.CharField(
        min_length=10,
        error_messages={"min_length": "Description must be at least 10 characters."},
    )
    price = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=1,
        error_messages={"min_value": "Price must be a positive number."},
    )
    city = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=80)
    property_type = serializers.ChoiceField(
        choices=Property.PropertyType.choices,
        required=False,
        allow_blank=True,
        allow_null=True,
    )
    amenities = serializers.ListField(
        child=serializers.CharField(max_length=64), required=False, allow_null=True
    )
    image_url = serializers.URLField(required=False, allow_blank=True, allow_null=True)
    pano_image_url = serializers.URLField(required=False, allow_blank=True, allow_null=True)
    bedrooms = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    bathrooms = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    balconies = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    size = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    floor_number = serializers.IntegerField(required=False, allow_null=True)
    total_floors = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    facing = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    gallery_images = serializers.ListField(
        child=serializers.URLField(), required=False, allow_null=True
    )
    tags = serializers.ListField(
        child=serializers.CharField(max_length=64), required=False, allow_null=True
    )

    class Meta:
        model = Property
        fields = [
            "title",
            "description",
            "price",
            "city",
            "property_type",
            "amenities",
            "image_url",
            "pano_image_url",
            "latitude",
            "longitude",
            "bedrooms",
            "bathrooms",
            "balconies",
            "kitchen_available",
            "hall_available",
            "size",
            "floor_number",
            "total_floors",
            "facing",
            "gallery_images",
            "tags",
        ]

    def validate_facing(self, value):
        normalized = (value or "").strip().lower()
        if normalized in ("", "none"):
            return ""
        if normalized not in Property.Facing.values:
            raise serializers.ValidationError("Invalid facing direction.")
        return normalized

    def validate(self, attrs):
        floor_number = attrs.get("floor_number")
        total_floors = attrs.get("total_floors")
        if floor_number is not None and total_floors is not None and floor_number > total_floors:
            raise serializers.ValidationError(
                {"floor_number": "Floor number cannot exceed total floors."}
            )
        # Nullable form inputs are stored as blanks/empty lists.
        for field_name in ("city", "property_type", "image_url", "pano_image_url"):
            if field_name in attrs and attrs[field_name] is None:
                attrs[field_name] = ""
        for field_name in ("amenities", "gallery_images", "tags"):
            if field_name in attrs and attrs[field_name] is None:
                attrs[field_name] = []
        return attrs
