from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView

from core import view_cache
from core.settings_resolver import get_bool

from . import services
from .serializers import (
    FlexibleTokenObtainPairSerializer,
    ProfileSerializer,
    RoleRequestCreateSerializer,
    RoleRequestSerializer,
    SignupSerializer,
)

User = get_user_model()
logger = logging.getLogger(__name__)


class SignupView(generics.CreateAPIView):
    """Create a renter account with email and password."""

    serializer_class = SignupSerializer
    permission_classes = [permissions.AllowAny]

    def create(self, request, *args, **kwargs):
        if not get_bool("allowNewRegistrations", True):
            return Response(
                {"success": False, "message": "New registrations are currently disabled."},
                status=status.HTTP_403_FORBIDDEN,
            )
        response = super().create(request, *args, **kwargs)
        view_cache.invalidate_views(view_cache.ADMIN_USERS)
        return response


class FlexibleTokenObtainPairView(TokenObtainPairView):
    """Log in with an email or username."""

    permission_classes = [permissions.AllowAny]
    serializer_class = FlexibleTokenObtainPairSerializer


class MeView(APIView):
    """Return or update the authenticated user's profile."""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        user = services.get_user_profile(request.user.id)
        return Response(ProfileSerializer(user).data)

    def patch(self, request):
        result = services.update_user_profile(request.user.id, request.data)
        if not result.success:
            return Response(result.as_dict(), status=result.http_status)
        payload = result.as_dict()
        payload["profile"] = ProfileSerializer(services.get_user_profile(request.user.id)).data
        return Response(payload)


class RoleRequestView(APIView):
    """The caller's latest owner role request, and submitting a new one."""

    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        latest = services.check_existing_role_request(request.user.id)
        if latest is None:
            return Response({"request": None})
        return Response({"request": RoleRequestSerializer(latest).data})

    def post(self, request):
        serializer = RoleRequestCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = services.request_owner_role_upgrade(
            request.user.id,
            serializer.validated_data.get("user_notes", ""),
        )
        code = status.HTTP_201_CREATED if result.success else result.http_status
        return Response(result.as_dict(), status=code)
