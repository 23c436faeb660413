from rest_framework import generics, status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from . import services
from .serializers import ContactMessageSerializer


class ContactMessageCreateView(APIView):
    """Public contact form. Signed-in senders are linked to their account."""

    permission_classes = [AllowAny]
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "contact"

    def post(self, request):
        user = getattr(request, "user", None)
        user_id = user.id if user and user.is_authenticated else None
        result = services.save_contact_message(request.data, user_id=user_id)
        code = status.HTTP_201_CREATED if result.success else result.http_status
        return Response(result.as_dict(), status=code)


class MyContactMessagesView(generics.ListAPIView):
    serializer_class = ContactMessageSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = None

    def get_queryset(self):
        return services.get_user_contact_messages(self.request.user.id)
