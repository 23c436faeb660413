import logging

from rest_framework import permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from core import view_cache

from . import services
from .serializers import PropertySerializer

logger = logging.getLogger(__name__)

UUID_REGEX = "[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"


class IsPropertyOwnerRole(permissions.BasePermission):
    """Owners (and admins acting as owners) may manage properties."""

    message = "Only property owners can manage properties."

    def has_permission(self, request, view):
        user = getattr(request, "user", None)
        return bool(
            user
            and user.is_authenticated
            and getattr(user, "role", None) in ("owner", "admin")
        )


def _result_response(result, success_status=status.HTTP_200_OK):
    code = success_status if result.success else result.http_status
    return Response(result.as_dict(), status=code)


class PropertyViewSet(viewsets.ViewSet):
    """Public catalogue: verified properties by default."""

    permission_classes = [AllowAny]
    lookup_value_regex = UUID_REGEX

    def list(self, request):
        params = request.query_params
        filters = {key: params.get(key) for key in params.keys()}
        if "amenities" in params:
            filters["amenities"] = params.getlist("amenities")
            if len(filters["amenities"]) == 1:
                filters["amenities"] = filters["amenities"][0]

        def _produce():
            props = services.get_public_properties(filters)
            return list(PropertySerializer(props, many=True).data)

        payload = view_cache.cached_view(view_cache.BROWSE_PROPERTIES, "public", params, _produce)
        return Response(payload)

    def retrieve(self, request, pk=None):
        prop = services.get_property(pk)
        if prop is None:
            return Response({"detail": "Property not found."}, status=status.HTTP_404_NOT_FOUND)
        return Response(PropertySerializer(prop).data)

    def get_permissions(self):
        if self.action in ("enquire", "report"):
            return [IsAuthenticated()]
        return super().get_permissions()

    @action(detail=True, methods=["post"], url_path="enquire")
    def enquire(self, request, pk=None):
        result = services.send_property_enquiry(pk, request.user.id)
        return _result_response(result)

    @action(detail=True, methods=["post"], url_path="report")
    def report(self, request, pk=None):
        reason = request.data.get("reason") if isinstance(request.data, dict) else None
        result = services.submit_property_report(pk, request.user.id, reason)
        return _result_response(result, status.HTTP_201_CREATED)


class OwnerPropertyViewSet(viewsets.ViewSet):
    """An owner's own properties."""

    permission_classes = [IsAuthenticated, IsPropertyOwnerRole]
    lookup_value_regex = UUID_REGEX

    def list(self, request):
        def _produce():
            props = services.get_owner_properties(request.user.id)
            return list(PropertySerializer(props, many=True).data)

        payload = view_cache.cached_view(
            view_cache.OWNER_PROPERTIES, request.user.id, None, _produce
        )
        return Response(payload)

    def create(self, request):
        result = services.add_property(request.user.id, request.data)
        return _result_response(result, status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        result = services.update_property(pk, request.user.id, request.data)
        return _result_response(result)

    def update(self, request, pk=None):
        return self.partial_update(request, pk=pk)

    def destroy(self, request, pk=None):
        result = services.delete_property(pk, request.user.id)
        return _result_response(result)

    @action(detail=True, methods=["post"], url_path="request-pano")
    def request_pano(self, request, pk=None):
        result = services.request_property_pano(pk, request.user.id)
        return _result_response(result)

    @action(detail=False, methods=["get"], url_path="stats")
    def stats(self, request):
        return Response(services.get_owner_dashboard_stats(request.user.id))

