from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import RoleRequest, User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ("username", "email", "name", "role", "status", "is_staff", "is_active")
    list_filter = BaseUserAdmin.list_filter + ("role", "status")
    search_fields = ("username", "email", "name", "mobile")
    fieldsets = BaseUserAdmin.fieldsets + (
        ("Marketplace", {"fields": ("name", "role", "status", "mobile", "avatar", "kyc_verified")}),
    )
    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        ("Marketplace", {"fields": ("name", "email", "role", "status")}),
    )


@admin.register(RoleRequest)
class RoleRequestAdmin(admin.ModelAdmin):
    list_display = ("user", "requested_role", "status", "requested_at", "processed_at")
    list_filter = ("status", "requested_role", "requested_at")
    search_fields = ("user__username", "user__email", "user__name")
    readonly_fields = ("requested_at", "processed_at")
    date_hierarchy = "requested_at"
    ordering = ("-requested_at",)
