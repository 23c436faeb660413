from django.conf import settings
from django.contrib import admin
from django.urls import include, path

from core.maintenance import maintenance_status

urlpatterns = [
    path("api/maintenance/", maintenance_status, name="maintenance_status"),
    path("api/users/", include("users.urls")),
    path("api/properties/", include("properties.urls")),
    path("api/bookings/", include(("bookings.urls", "bookings"), namespace="bookings")),
    path("api/notifications/", include("notifications.urls")),
    path("api/contact/", include("contact.urls")),
]

if settings.ENABLE_DJANGO_ADMIN:
    urlpatterns.insert(0, path("admin/", admin.site.urls))

if settings.ENABLE_OPERATOR:
    urlpatterns.append(path("api/operator/", include("operator_core.urls")))
