from django.urls import path

from operator_settings.api import OperatorSettingsHistoryView, OperatorSettingsView

app_name = "operator_settings"

urlpatterns = [
    path("settings/", OperatorSettingsView.as_view(), name="operator_settings"),
    path(
        "settings/history/",
        OperatorSettingsHistoryView.as_view(),
        name="operator_settings_history",
    ),
]
