from django.urls import path

from .api import ContactMessageCreateView, MyContactMessagesView

app_name = "contact"

urlpatterns = [
    path("", ContactMessageCreateView.as_view(), name="contact_create"),
    path("mine/", MyContactMessagesView.as_view(), name="contact_mine"),
]
