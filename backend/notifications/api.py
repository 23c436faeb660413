from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from . import services
from .serializers import NotificationSerializer


class NotificationViewSet(viewsets.ViewSet):
    """The caller's own notifications."""

    permission_classes = [IsAuthenticated]
    lookup_value_regex = r"\d+"

    def list(self, request):
        status_filter = (request.query_params.get("status") or "all").strip().lower()
        if status_filter not in services.STATUS_FILTERS:
            return Response(
                {"detail": "Invalid status filter."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        notifications = services.get_user_notifications(request.user.id, status_filter)
        return Response(NotificationSerializer(notifications, many=True).data)

    @action(detail=True, methods=["post"], url_path="read")
    def read(self, request, pk=None):
        result = services.mark_notification_read(pk, request.user.id)
        return Response(result.as_dict(), status=result.http_status)

    @action(detail=False, methods=["post"], url_path="read-all")
    def read_all(self, request):
        result = services.mark_all_notifications_read(request.user.id)
        return Response(result.as_dict(), status=result.http_status)
