"""URL routing for the property catalogue."""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .api import OwnerPropertyViewSet, PropertyViewSet

app_name = "properties"

router = DefaultRouter()
router.register("mine", OwnerPropertyViewSet, basename="owner-property")
router.register("", PropertyViewSet, basename="property")

urlpatterns = [
    path("", include(router.urls)),
]
