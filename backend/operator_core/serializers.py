from __future__ import annotations

from rest_framework import serializers

from operator_core.models import OperatorAuditEvent


class OperatorAuditEventListSerializer(serializers.ModelSerializer):
    actor = serializers.SerializerMethodField()

    class Meta:
        model = OperatorAuditEvent
        fields = [
            "id",
            "action",
            "entity_type",
            "entity_id",
            "reason",
            "before_json",
            "after_json",
            "created_at",
            "actor",
        ]
        read_only_fields = fields

    def get_actor(self, obj: OperatorAuditEvent) -> dict | None:
        actor = obj.actor
        if not actor:
            return None
        return {"id": actor.id, "name": actor.display_name, "email": actor.email}
