import django_filters as filters
from django.db.models import Q

from properties.models import Property, PropertyReport


class OperatorPropertyFilter(filters.FilterSet):
    owner = filters.NumberFilter(field_name="owner_id")
    status = filters.ChoiceFilter(choices=Property.Status.choices)
    city = filters.CharFilter(field_name="city", lookup_expr="icontains")
    property_type = filters.ChoiceFilter(choices=Property.PropertyType.choices)
    search = filters.CharFilter(method="filter_search")
    created_at_after = filters.IsoDateTimeFilter(field_name="created_at", lookup_expr="gte")
    created_at_before = filters.IsoDateTimeFilter(field_name="created_at", lookup_expr="lte")

    class Meta:
        model = Property
        fields = ["owner", "status", "city", "property_type"]

    def filter_search(self, queryset, name, value):
        search = (value or "").strip()
        if not search:
            return queryset
        return queryset.filter(
            Q(title__icontains=search)
            | Q(owner__name__icontains=search)
            | Q(owner__email__icontains=search)
        )


class OperatorPropertyReportFilter(filters.FilterSet):
    status = filters.ChoiceFilter(choices=PropertyReport.Status.choices)
    property = filters.UUIDFilter(field_name="property_id")
    reporter = filters.NumberFilter(field_name="reporter_id")

    class Meta:
        model = PropertyReport
        fields = ["status", "property", "reporter"]
