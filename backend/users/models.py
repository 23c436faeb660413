from __future__ import annotations

from urllib.parse import quote_plus

from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """Marketplace account: renters, property owners and administrators."""

    class Role(models.TextChoices):
        USER = "user", "User"
        OWNER = "owner", "Owner"
        ADMIN = "admin", "Admin"

    class Status(models.TextChoices):
        ACTIVE = "active", "Active"
        PENDING = "pending", "Pending"
        SUSPENDED = "suspended", "Suspended"

    name = models.CharField(max_length=150, blank=True, default="")
    role = models.CharField(max_length=8, choices=Role.choices, default=Role.USER)
    status = models.CharField(max_length=12, choices=Status.choices, default=Status.ACTIVE)
    mobile = models.CharField(
        max_length=32,
        blank=True,
        default="",
        help_text="Optional contact number shown to owners and admins.",
    )
    avatar = models.URLField(
        max_length=1024,
        blank=True,
        default="",
        help_text="Optional profile photo URL.",
    )
    kyc_verified = models.BooleanField(default=False)

    def is_owner(self) -> bool:
        return self.role == self.Role.OWNER

    def is_admin_role(self) -> bool:
        return self.role == self.Role.ADMIN

    @property
    def display_name(self) -> str:
        return (self.name or self.get_full_name() or self.username or "").strip()

    @property
    def avatar_url(self) -> str:
        """Return the stored avatar URL or a deterministic placeholder."""
        if self.avatar:
            return self.avatar
        seed = quote_plus(self.display_name or f"user-{self.pk or 'anon'}")
        return f"https://api.dicebear.com/7.x/initials/svg?seed={seed}"


class RoleRequest(models.Model):
    """A user's request to be promoted to the owner role."""

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        APPROVED = "approved", "Approved"
        REJECTED = "rejected", "Rejected"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="role_requests",
    )
    requested_role = models.CharField(
        max_length=8,
        choices=User.Role.choices,
        default=User.Role.OWNER,
    )
    status = models.CharField(max_length=12, choices=Status.choices, default=Status.PENDING)
    user_notes = models.TextField(blank=True, default="")
    admin_notes = models.TextField(blank=True, default="")
    requested_at = models.DateTimeField(auto_now_add=True)
    processed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ("-requested_at", "-id")
        indexes = [
            models.Index(fields=("user", "status"), name="role_request_user_status_idx"),
            models.Index(fields=("status", "requested_at"), name="role_request_status_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.user} -> {self.requested_role} ({self.status})"
