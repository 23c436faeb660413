from django.conf import settings
from django.db import models


class ContactMessage(models.Model):
    """Message submitted through the public contact form, with an optional admin reply."""

    class Status(models.TextChoices):
        UNSEEN = "unseen", "Unseen"
        SEEN = "seen", "Seen"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="contact_messages",
    )
    name = models.CharField(max_length=120)
    email = models.EmailField()
    subject = models.CharField(max_length=200)
    message = models.TextField()
    status = models.CharField(max_length=8, choices=Status.choices, default=Status.UNSEEN)
    reply_text = models.TextField(blank=True, default="")
    reply_timestamp = models.DateTimeField(null=True, blank=True)
    has_admin_reply = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["status", "created_at"], name="contact_status_created_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.subject} <{self.email}> ({self.status})"
