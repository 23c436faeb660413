from django.urls import path

from operator_properties.api import (
    OperatorPropertyApproveView,
    OperatorPropertyDeleteView,
    OperatorPropertyListView,
    OperatorPropertyRejectView,
    OperatorPropertyReportDeleteView,
    OperatorPropertyReportListView,
    OperatorPropertyReportReviewView,
)

urlpatterns = [
    path("", OperatorPropertyListView.as_view(), name="operator_property_list"),
    path("reports/", OperatorPropertyReportListView.as_view(), name="operator_property_report_list"),
    path(
        "reports/<int:pk>/review/",
        OperatorPropertyReportReviewView.as_view(),
        name="operator_property_report_review",
    ),
    path(
        "reports/<int:pk>/",
        OperatorPropertyReportDeleteView.as_view(),
        name="operator_property_report_delete",
    ),
    path(
        "<uuid:pk>/approve/",
        OperatorPropertyApproveView.as_view(),
        name="operator_property_approve",
    ),
    path(
        "<uuid:pk>/reject/",
        OperatorPropertyRejectView.as_view(),
        name="operator_property_reject",
    ),
    path("<uuid:pk>/", OperatorPropertyDeleteView.as_view(), name="operator_property_delete"),
]
