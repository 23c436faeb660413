import django_filters as filters
from django.db.models import Q

from contact.models import ContactMessage
from notifications.models import NotificationLog


class ContactMessageFilter(filters.FilterSet):
    status = filters.ChoiceFilter(choices=ContactMessage.Status.choices)
    has_admin_reply = filters.BooleanFilter(field_name="has_admin_reply")
    registered = filters.BooleanFilter(field_name="user", lookup_expr="isnull", exclude=True)
    search = filters.CharFilter(method="filter_search")

    class Meta:
        model = ContactMessage
        fields = ["status", "has_admin_reply", "registered"]

    def filter_search(self, queryset, name, value):
        search = (value or "").strip()
        if not search:
            return queryset
        return queryset.filter(
            Q(subject__icontains=search) | Q(email__icontains=search) | Q(name__icontains=search)
        )


class NotificationLogFilter(filters.FilterSet):
    type = filters.CharFilter(field_name="type", lookup_expr="iexact")
    status = filters.ChoiceFilter(choices=NotificationLog.Status.choices)
    user = filters.NumberFilter(field_name="user_id")
    created_at_after = filters.IsoDateTimeFilter(field_name="created_at", lookup_expr="gte")
    created_at_before = filters.IsoDateTimeFilter(field_name="created_at", lookup_expr="lte")

    class Meta:
        model = NotificationLog
        fields = ["type", "status", "user"]
