from django.urls import path

from operator_users.api import (
    OperatorRoleRequestApproveView,
    OperatorRoleRequestListView,
    OperatorRoleRequestRejectView,
    OperatorUserDeleteView,
    OperatorUserListView,
    OperatorUserRoleView,
    OperatorUserToggleSuspensionView,
)

urlpatterns = [
    path("users/", OperatorUserListView.as_view(), name="operator_user_list"),
    path("users/<int:pk>/role/", OperatorUserRoleView.as_view(), name="operator_user_role"),
    path(
        "users/<int:pk>/toggle-suspension/",
        OperatorUserToggleSuspensionView.as_view(),
        name="operator_user_toggle_suspension",
    ),
    path("users/<int:pk>/", OperatorUserDeleteView.as_view(), name="operator_user_delete"),
    path(
        "role-requests/",
        OperatorRoleRequestListView.as_view(),
        name="operator_role_request_list",
    ),
    path(
        "role-requests/<int:pk>/approve/",
        OperatorRoleRequestApproveView.as_view(),
        name="operator_role_request_approve",
    ),
    path(
        "role-requests/<int:pk>/reject/",
        OperatorRoleRequestRejectView.as_view(),
        name="operator_role_request_reject",
    ),
]
