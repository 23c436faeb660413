from django.contrib.auth import get_user_model
from django.db.models import Count
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import generics, status
from rest_framework.response import Response

from operator_core.api import OperatorPagination
from operator_core.api_base import (
    OperatorAPIView,
    OperatorThrottleMixin,
    reason_required_response,
    request_payload,
)
from operator_core.models import OperatorAuditEvent
from operator_core.permissions import (
    OPERATOR_ADMIN,
    OPERATOR_MODERATOR,
    OPERATOR_ROLES,
    HasOperatorRole,
    IsOperator,
)
from operator_users import services
from operator_users.filters import OperatorUserFilter, RoleRequestFilter
from operator_users.serializers import (
    OperatorRoleRequestSerializer,
    OperatorUserListSerializer,
    UpdateRoleSerializer,
)
from users.models import RoleRequest

User = get_user_model()

ACCOUNT_ACTION_ROLES = (OPERATOR_MODERATOR, OPERATOR_ADMIN)


class OperatorUserListView(OperatorThrottleMixin, generics.ListAPIView):
    serializer_class = OperatorUserListSerializer
    permission_classes = [IsOperator, HasOperatorRole.with_roles(OPERATOR_ROLES)]
    filter_backends = [DjangoFilterBackend]
    filterset_class = OperatorUserFilter
    pagination_class = OperatorPagination
    http_method_names = ["get"]

    def get_queryset(self):
        return services.get_admin_users().annotate(
            properties_count=Count("properties", distinct=True),
            bookings_count=Count("bookings", distinct=True),
        )


class OperatorUserActionBase(OperatorAPIView):
    permission_classes = [IsOperator, HasOperatorRole.with_roles(ACCOUNT_ACTION_ROLES)]
    audit_entity_type = OperatorAuditEvent.EntityType.USER


class OperatorUserRoleView(OperatorUserActionBase):
    http_method_names = ["post"]

    def post(self, request, pk: int):
        serializer = UpdateRoleSerializer(data=request_payload(request))
        serializer.is_valid(raise_exception=True)
        reason = self.require_reason(serializer.validated_data)
        if not reason:
            return reason_required_response()

        new_role = serializer.validated_data["role"]
        result = services.update_user_role(pk, new_role)
        return self.respond(
            request,
            result,
            action="operator.user.update_role",
            entity_id=pk,
            reason=reason,
            before={"role": result.data.get("previous_role")},
            after={"role": new_role},
        )


class OperatorUserToggleSuspensionView(OperatorUserActionBase):
    http_method_names = ["post"]

    def post(self, request, pk: int):
        reason = self.require_reason(request_payload(request))
        if not reason:
            return reason_required_response()

        result = services.toggle_user_suspension(pk)
        return self.respond(
            request,
            result,
            action="operator.user.toggle_suspension",
            entity_id=pk,
            reason=reason,
            before={"status": result.data.get("previous_status")},
            after={"status": result.data.get("new_status")},
        )


class OperatorUserDeleteView(OperatorUserActionBase):
    permission_classes = [IsOperator, HasOperatorRole.with_roles([OPERATOR_ADMIN])]
    http_method_names = ["delete"]

    def delete(self, request, pk: int):
        reason = self.require_reason(request_payload(request)) or self.require_reason(
            request.query_params
        )
        if not reason:
            return reason_required_response()

        result = services.delete_user_account(pk)
        return self.respond(
            request,
            result,
            action="operator.user.delete",
            entity_id=pk,
            reason=reason,
            before=result.data.get("user"),
        )


class OperatorRoleRequestListView(OperatorThrottleMixin, generics.ListAPIView):
    serializer_class = OperatorRoleRequestSerializer
    permission_classes = [IsOperator, HasOperatorRole.with_roles(OPERATOR_ROLES)]
    filter_backends = [DjangoFilterBackend]
    filterset_class = RoleRequestFilter
    pagination_class = OperatorPagination
    http_method_names = ["get"]

    def get_queryset(self):
        return services.get_role_requests()


class OperatorRoleRequestActionBase(OperatorAPIView):
    permission_classes = [IsOperator, HasOperatorRole.with_roles(ACCOUNT_ACTION_ROLES)]
    audit_entity_type = OperatorAuditEvent.EntityType.ROLE_REQUEST


class OperatorRoleRequestApproveView(OperatorRoleRequestActionBase):
    http_method_names = ["post"]

    def post(self, request, pk: int):
        payload = request_payload(request)
        admin_notes = str(payload.get("admin_notes") or "").strip()
        reason = self.require_reason(payload) or admin_notes or "Role request approved"

        result = services.approve_role_request(pk, admin_notes)
        return self.respond(
            request,
            result,
            action="operator.role_request.approve",
            entity_id=pk,
            reason=reason,
            before={"status": RoleRequest.Status.PENDING},
            after={"status": RoleRequest.Status.APPROVED, "user_role": User.Role.OWNER},
        )


class OperatorRoleRequestRejectView(OperatorRoleRequestActionBase):
    http_method_names = ["post"]

    def post(self, request, pk: int):
        payload = request_payload(request)
        admin_notes = self.require_reason(payload, "admin_notes") or self.require_reason(payload)
        if not admin_notes:
            return Response(
                {
                    "success": False,
                    "message": "Reason for rejection is required.",
                    "error": "validation",
                },
                status=status.HTTP_400_BAD_REQUEST,
            )

        result = services.reject_role_request(pk, admin_notes)
        return self.respond(
            request,
            result,
            action="operator.role_request.reject",
            entity_id=pk,
            reason=admin_notes,
            before={"status": RoleRequest.Status.PENDING},
            after={"status": RoleRequest.Status.REJECTED},
        )
