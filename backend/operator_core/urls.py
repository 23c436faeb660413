from django.urls import include, path

from operator_core.api import OperatorAuditEventListView, OperatorMeView
from operator_core.dashboard_api import OperatorDashboardView

urlpatterns = [
    path("me/", OperatorMeView.as_view(), name="operator_me"),
    path("dashboard/", OperatorDashboardView.as_view(), name="operator_dashboard"),
    path("audit-events/", OperatorAuditEventListView.as_view(), name="operator_audit_events"),
    path("", include("operator_settings.urls")),
    path("", include("operator_users.urls")),
    path("", include("operator_comms.urls")),
    path("properties/", include("operator_properties.urls")),
    path("bookings/", include("operator_bookings.urls")),
]
