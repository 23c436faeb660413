from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import generics

from contact import services
from notifications.models import NotificationLog
from operator_comms.filters import ContactMessageFilter, NotificationLogFilter
from operator_comms.serializers import (
    OperatorContactMessageSerializer,
    OperatorNotificationLogSerializer,
)
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
    OPERATOR_ROLES,
    OPERATOR_SUPPORT,
    HasOperatorRole,
    IsOperator,
)

SUPPORT_ROLES = (OPERATOR_SUPPORT, OPERATOR_ADMIN)


class OperatorContactMessageListView(OperatorThrottleMixin, generics.ListAPIView):
    serializer_class = OperatorContactMessageSerializer
    permission_classes = [IsOperator, HasOperatorRole.with_roles(OPERATOR_ROLES)]
    filter_backends = [DjangoFilterBackend]
    filterset_class = ContactMessageFilter
    pagination_class = OperatorPagination
    http_method_names = ["get"]

    def get_queryset(self):
        return services.get_all_contact_messages()


class OperatorContactMessageActionBase(OperatorAPIView):
    permission_classes = [IsOperator, HasOperatorRole.with_roles(SUPPORT_ROLES)]
    audit_entity_type = OperatorAuditEvent.EntityType.CONTACT_MESSAGE


class OperatorContactMessageSeenView(OperatorContactMessageActionBase):
    http_method_names = ["post"]

    def post(self, request, pk: int):
        reason = self.require_reason(request_payload(request)) or "Message reviewed"
        result = services.mark_message_seen(pk)
        return self.respond(
            request,
            result,
            action="operator.contact.mark_seen",
            entity_id=pk,
            reason=reason,
            after={"status": "seen"},
        )


class OperatorContactMessageReplyView(OperatorContactMessageActionBase):
    http_method_names = ["post"]

    def post(self, request, pk: int):
        payload = request_payload(request)
        reason = self.require_reason(payload) or "Admin reply"
        result = services.send_admin_reply(pk, {"reply_text": payload.get("reply_text")})
        return self.respond(
            request,
            result,
            action="operator.contact.reply",
            entity_id=pk,
            reason=reason,
            after={"has_admin_reply": True},
        )


class OperatorContactMessageDeleteView(OperatorContactMessageActionBase):
    http_method_names = ["delete"]

    def delete(self, request, pk: int):
        reason = self.require_reason(request_payload(request)) or self.require_reason(
            request.query_params
        )
        if not reason:
            return reason_required_response()
        result = services.delete_contact_message(pk)
        return self.respond(
            request,
            result,
            action="operator.contact.delete",
            entity_id=pk,
            reason=reason,
        )


class OperatorNotificationLogListView(OperatorThrottleMixin, generics.ListAPIView):
    """Outbound email attempts, newest first."""

    serializer_class = OperatorNotificationLogSerializer
    permission_classes = [IsOperator, HasOperatorRole.with_roles(SUPPORT_ROLES)]
    filter_backends = [DjangoFilterBackend]
    filterset_class = NotificationLogFilter
    pagination_class = OperatorPagination
    http_method_names = ["get"]

    def get_queryset(self):
        return NotificationLog.objects.select_related("user").order_by("-created_at", "-id")
