"""Shared plumbing for admin console endpoints: throttling, reasons, audit and results."""

from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from operator_core.audit import audit
from operator_core.permissions import OPERATOR_ROLES, HasOperatorRole, IsOperator

logger = logging.getLogger(__name__)


def request_payload(request) -> dict:
    return request.data if isinstance(request.data, dict) else {}


def reason_required_response() -> Response:
    return Response(
        {"success": False, "message": "reason is required", "error": "validation"},
        status=status.HTTP_400_BAD_REQUEST,
    )


class OperatorThrottleMixin:
    throttle_scope = "operator"
    throttle_classes = [ScopedRateThrottle]


class OperatorAPIView(OperatorThrottleMixin, APIView):
    """
    Base view for admin console actions.

    Subclasses set ``audit_entity_type`` and call ``respond`` with the service
    result; successful results are written to the audit log before responding.
    """

    permission_classes = [IsOperator, HasOperatorRole.with_roles(OPERATOR_ROLES)]
    audit_entity_type: str | None = None

    def require_reason(self, payload, field: str = "reason") -> str | None:
        reason = str(payload.get(field) or "").strip()
        return reason or None

    def record_audit(self, request, *, action, entity_id, reason, before=None, after=None):
        return audit(
            actor=request.user,
            action=action,
            entity_type=self.audit_entity_type,
            entity_id=entity_id,
            reason=reason,
            before=before,
            after=after,
            request=request,
        )

    def respond(self, request, result, *, action, entity_id, reason, before=None, after=None):
        if result.success:
            self.record_audit(
                request,
                action=action,
                entity_id=entity_id,
                reason=reason,
                before=before,
                after=after,
            )
        else:
            logger.info(
                "operator: %s on %s refused for %s: %s",
                action,
                entity_id,
                request.user.pk,
                result.message,
            )
        return Response(result.as_dict(), status=result.http_status)
