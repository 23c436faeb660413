import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import generics

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
from operator_properties import services
from operator_properties.filters import OperatorPropertyFilter, OperatorPropertyReportFilter
from operator_properties.serializers import (
    OperatorPropertyReportSerializer,
    OperatorPropertySerializer,
)
from properties.models import Property, PropertyReport

logger = logging.getLogger(__name__)


class OperatorPropertyListView(OperatorThrottleMixin, generics.ListAPIView):
    serializer_class = OperatorPropertySerializer
    permission_classes = [IsOperator, HasOperatorRole.with_roles(OPERATOR_ROLES)]
    filter_backends = [DjangoFilterBackend]
    filterset_class = OperatorPropertyFilter
    pagination_class = OperatorPagination
    http_method_names = ["get"]

    def get_queryset(self):
        return services.get_admin_properties()


class OperatorPropertyActionBase(OperatorAPIView):
    permission_classes = [
        IsOperator,
        HasOperatorRole.with_roles([OPERATOR_MODERATOR, OPERATOR_ADMIN]),
    ]
    audit_entity_type = OperatorAuditEvent.EntityType.PROPERTY


class OperatorPropertyApproveView(OperatorPropertyActionBase):
    http_method_names = ["post"]

    def post(self, request, pk):
        reason = self.require_reason(request_payload(request)) or "Property verified"
        result = services.approve_property(pk)
        return self.respond(
            request,
            result,
            action="operator.property.approve",
            entity_id=pk,
            reason=reason,
            before={"status": Property.Status.PENDING},
            after={"status": Property.Status.VERIFIED},
        )


class OperatorPropertyRejectView(OperatorPropertyActionBase):
    http_method_names = ["post"]

    def post(self, request, pk):
        reason = self.require_reason(request_payload(request))
        if not reason:
            return reason_required_response()
        result = services.reject_property(pk, reason)
        return self.respond(
            request,
            result,
            action="operator.property.reject",
            entity_id=pk,
            reason=reason,
            before={"status": Property.Status.PENDING},
            after={"status": Property.Status.REJECTED},
        )


class OperatorPropertyDeleteView(OperatorPropertyActionBase):
    http_method_names = ["delete"]

    def delete(self, request, pk):
        reason = self.require_reason(request_payload(request)) or self.require_reason(
            request.query_params
        )
        if not reason:
            return reason_required_response()
        result = services.delete_property(pk)
        return self.respond(
            request,
            result,
            action="operator.property.delete",
            entity_id=pk,
            reason=reason,
            before=result.data.get("property"),
        )


class OperatorPropertyReportListView(OperatorThrottleMixin, generics.ListAPIView):
    serializer_class = OperatorPropertyReportSerializer
    permission_classes = [IsOperator, HasOperatorRole.with_roles(OPERATOR_ROLES)]
    filter_backends = [DjangoFilterBackend]
    filterset_class = OperatorPropertyReportFilter
    pagination_class = OperatorPagination
    http_method_names = ["get"]

    def get_queryset(self):
        return services.get_property_reports()


class OperatorPropertyReportActionBase(OperatorPropertyActionBase):
    audit_entity_type = OperatorAuditEvent.EntityType.PROPERTY_REPORT


class OperatorPropertyReportReviewView(OperatorPropertyReportActionBase):
    http_method_names = ["post"]

    def post(self, request, pk):
        reason = self.require_reason(request_payload(request)) or "Report reviewed"
        result = services.mark_report_reviewed(pk)
        return self.respond(
            request,
            result,
            action="operator.property_report.review",
            entity_id=pk,
            reason=reason,
            before={"status": PropertyReport.Status.PENDING},
            after={"status": PropertyReport.Status.REVIEWED},
        )


class OperatorPropertyReportDeleteView(OperatorPropertyReportActionBase):
    http_method_names = ["delete"]

    def delete(self, request, pk):
        reason = self.require_reason(request_payload(request)) or self.require_reason(
            request.query_params
        )
        if not reason:
            return reason_required_response()
        result = services.delete_report(pk)
        return self.respond(
            request,
            result,
            action="operator.property_report.delete",
            entity_id=pk,
            reason=reason,
            before=result.data.get("report"),
        )
