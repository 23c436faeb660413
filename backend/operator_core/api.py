from django.contrib.auth import get_user_model
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import generics
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from operator_core.api_base import OperatorAPIView, OperatorThrottleMixin
from operator_core.filters import OperatorAuditEventFilter
from operator_core.models import OperatorAuditEvent
from operator_core.permissions import OPERATOR_ADMIN, HasOperatorRole, IsOperator
from operator_core.serializers import OperatorAuditEventListSerializer

User = get_user_model()


class OperatorPagination(PageNumberPagination):
    page_size = 20
    page_size_query_param = "page_size"
    max_page_size = 200


class OperatorMeView(OperatorAPIView):
    permission_classes = [IsOperator]
    http_method_names = ["get"]

    def get(self, request):
        user: User = request.user
        roles = list(user.groups.values_list("name", flat=True))
        if user.role == User.Role.ADMIN and OPERATOR_ADMIN not in roles:
            roles.append(OPERATOR_ADMIN)

        return Response(
            {
                "id": user.id,
                "email": user.email,
                "name": user.display_name,
                "role": user.role,
                "is_staff": user.is_staff,
                "roles": roles,
            }
        )


class OperatorAuditEventListView(OperatorThrottleMixin, generics.ListAPIView):
    """Audit trail of admin console actions, newest first."""

    serializer_class = OperatorAuditEventListSerializer
    permission_classes = [IsOperator, HasOperatorRole.with_roles([OPERATOR_ADMIN])]
    filter_backends = [DjangoFilterBackend]
    filterset_class = OperatorAuditEventFilter
    pagination_class = OperatorPagination
    http_method_names = ["get"]

    def get_queryset(self):
        return OperatorAuditEvent.objects.select_related("actor").order_by("-created_at", "-id")
