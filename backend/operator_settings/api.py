from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.response import Response

from core import view_cache
from operator_core.api_base import OperatorAPIView, reason_required_response, request_payload
from operator_core.models import OperatorAuditEvent
from operator_core.permissions import OPERATOR_ADMIN, OPERATOR_ROLES, HasOperatorRole, IsOperator
from operator_settings import services
from operator_settings.models import DbSetting
from operator_settings.serializers import DbSettingSerializer, PlatformSettingsSerializer

logger = logging.getLogger(__name__)


class OperatorSettingsView(OperatorAPIView):
    """GET the current platform settings; PUT a partial update (operator admins only)."""

    http_method_names = ["get", "put"]
    audit_entity_type = OperatorAuditEvent.EntityType.SETTING

    def get_permissions(self):
        if self.request.method == "PUT":
            return [IsOperator(), HasOperatorRole.with_roles([OPERATOR_ADMIN])()]
        return [IsOperator(), HasOperatorRole.with_roles(OPERATOR_ROLES)()]

    def get(self, request):
        def _produce():
            return dict(PlatformSettingsSerializer(services.get_platform_settings()).data)

        return Response(
            view_cache.cached_view(view_cache.PLATFORM_SETTINGS, "platform", None, _produce)
        )

    def put(self, request):
        payload = dict(request_payload(request))
        reason = self.require_reason(payload)
        if not reason:
            return reason_required_response()
        payload.pop("reason", None)

        result = services.update_platform_settings(payload, actor=request.user)
        if result.success and not result.data.get("changed"):
            return Response(result.as_dict(), status=status.HTTP_200_OK)

        return self.respond(
            request,
            result,
            action="operator.settings.update",
            entity_id="platform",
            reason=reason,
            before=result.data.get("before"),
            after=result.data.get("after"),
        )


class OperatorSettingsHistoryView(OperatorAPIView):
    """Every stored version of the platform settings, newest first."""

    http_method_names = ["get"]

    def get(self, request):
        qs = DbSetting.objects.select_related("updated_by").order_by("-updated_at", "-id")
        key = (request.query_params.get("key") or "").strip()
        if key:
            qs = qs.filter(key=key)
        return Response(DbSettingSerializer(qs[:200], many=True).data)
