from django.urls import path

from operator_comms.api import (
    OperatorContactMessageDeleteView,
    OperatorContactMessageListView,
    OperatorContactMessageReplyView,
    OperatorContactMessageSeenView,
    OperatorNotificationLogListView,
)

urlpatterns = [
    path("messages/", OperatorContactMessageListView.as_view(), name="operator_message_list"),
    path(
        "messages/<int:pk>/seen/",
        OperatorContactMessageSeenView.as_view(),
        name="operator_message_seen",
    ),
    path(
        "messages/<int:pk>/reply/",
        OperatorContactMessageReplyView.as_view(),
        name="operator_message_reply",
    ),
    path(
        "messages/<int:pk>/",
        OperatorContactMessageDeleteView.as_view(),
        name="operator_message_delete",
    ),
    path("email-logs/", OperatorNotificationLogListView.as_view(), name="operator_email_logs"),
]
