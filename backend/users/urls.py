from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from .api import FlexibleTokenObtainPairView, MeView, RoleRequestView, SignupView

app_name = "users"

urlpatterns = [
    path("signup/", SignupView.as_view(), name="signup"),
    path("token/", FlexibleTokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("me/", MeView.as_view(), name="me"),
    path("role-request/", RoleRequestView.as_view(), name="role_request"),
]
