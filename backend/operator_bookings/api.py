from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import generics

from bookings import services
from bookings.serializers import BookingSerializer
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
from operator_bookings.filters import OperatorBookingFilter


class OperatorBookingListView(OperatorThrottleMixin, generics.ListAPIView):
    serializer_class = BookingSerializer
    permission_classes = [IsOperator, HasOperatorRole.with_roles(OPERATOR_ROLES)]
    filter_backends = [DjangoFilterBackend]
    filterset_class = OperatorBookingFilter
    pagination_class = OperatorPagination
    http_method_names = ["get"]

    def get_queryset(self):
        return services.get_all_bookings()


class OperatorBookingActionBase(OperatorAPIView):
    permission_classes = [IsOperator, HasOperatorRole.with_roles([OPERATOR_SUPPORT, OPERATOR_ADMIN])]
    audit_entity_type = OperatorAuditEvent.EntityType.BOOKING


class OperatorBookingCancelView(OperatorBookingActionBase):
    http_method_names = ["post"]

    def post(self, request, pk):
        reason = self.require_reason(request_payload(request))
        if not reason:
            return reason_required_response()
        result = services.admin_cancel_booking(pk)
        return self.respond(
            request,
            result,
            action="operator.booking.cancel",
            entity_id=pk,
            reason=reason,
            after={"status": "cancelled"},
        )


class OperatorBookingDeleteView(OperatorBookingActionBase):
    permission_classes = [IsOperator, HasOperatorRole.with_roles([OPERATOR_ADMIN])]
    http_method_names = ["delete"]

    def delete(self, request, pk):
        reason = self.require_reason(request_payload(request)) or self.require_reason(
            request.query_params
        )
        if not reason:
            return reason_required_response()
        result = services.delete_booking(pk)
        return self.respond(
            request,
            result,
            action="operator.booking.delete",
            entity_id=pk,
            reason=reason,
        )
