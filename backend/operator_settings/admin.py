from django.contrib import admin

from .models import DbSetting


@admin.register(DbSetting)
class DbSettingAdmin(admin.ModelAdmin):
    list_display = ("key", "value_type", "value_json", "updated_at", "updated_by")
    search_fields = ("key", "description")
    list_filter = ("value_type",)
    date_hierarchy = "updated_at"
    ordering = ("-updated_at",)

    def save_model(self, request, obj, form, change):
        if getattr(request, "user", None) and request.user.is_authenticated:
            obj.updated_by = request.user
        super().save_model(request, obj, form, change)
