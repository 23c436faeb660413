import django_filters as filters
from django.contrib.auth import get_user_model
from django.db.models import Q

from users.models import RoleRequest

User = get_user_model()


class OperatorUserFilter(filters.FilterSet):
    email = filters.CharFilter(field_name="email", lookup_expr="icontains")
    name = filters.CharFilter(method="filter_name")
    mobile = filters.CharFilter(field_name="mobile", lookup_expr="icontains")
    role = filters.ChoiceFilter(choices=User.Role.choices)
    status = filters.ChoiceFilter(choices=User.Status.choices)
    is_active = filters.BooleanFilter(field_name="is_active")
    date_joined_after = filters.IsoDateTimeFilter(field_name="date_joined", lookup_expr="gte")
    date_joined_before = filters.IsoDateTimeFilter(field_name="date_joined", lookup_expr="lte")

    class Meta:
        model = User
        fields = ["email", "name", "mobile", "role", "status", "is_active"]

    def filter_name(self, queryset, name, value):
        if not value:
            return queryset
        return queryset.filter(
            Q(name__icontains=value)
            | Q(first_name__icontains=value)
            | Q(last_name__icontains=value)
            | Q(username__icontains=value)
            | Q(email__icontains=value)
        )


class RoleRequestFilter(filters.FilterSet):
    status = filters.ChoiceFilter(choices=RoleRequest.Status.choices)
    user = filters.NumberFilter(field_name="user_id")

    class Meta:
        model = RoleRequest
        fields = ["status", "user"]
