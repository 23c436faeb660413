from __future__ import annotations

import django_filters as filters
from django.db.models import Q

from operator_core.models import OperatorAuditEvent


class OperatorAuditEventFilter(filters.FilterSet):
    actor_id = filters.NumberFilter(field_name="actor_id")
    actor = filters.CharFilter(method="filter_actor")
    entity_type = filters.ChoiceFilter(choices=OperatorAuditEvent.EntityType.choices)
    entity_id = filters.CharFilter(field_name="entity_id")
    action = filters.CharFilter(field_name="action", lookup_expr="icontains")
    created_at_after = filters.IsoDateTimeFilter(field_name="created_at", lookup_expr="gte")
    created_at_before = filters.IsoDateTimeFilter(field_name="created_at", lookup_expr="lte")

    class Meta:
        model = OperatorAuditEvent
        fields = ["actor_id", "entity_type", "entity_id", "action"]

    def filter_actor(self, queryset, name, value):
        search = (value or "").strip()
        if not search:
            return queryset
        return queryset.filter(
            Q(actor__email__icontains=search)
            | Q(actor__username__icontains=search)
            | Q(actor__name__icontains=search)
        )
