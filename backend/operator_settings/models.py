from django.conf import settings
from django.db import models


class DbSetting(models.Model):
    """
    One version of a platform setting.

    Rows are append-only: saving a changed instance inserts a new row, so the
    newest row per key is the current value and older rows are its history.
    """

    class ValueType(models.TextChoices):
        BOOL = "bool", "bool"
        INT = "int", "int"
        DECIMAL = "decimal", "decimal"
        STR = "str", "str"
        JSON = "json", "json"

    key = models.CharField(max_length=128, db_index=True)
    value_json = models.JSONField()
    value_type = models.CharField(max_length=16, choices=ValueType.choices)
    description = models.TextField(blank=True, default="")
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="platform_settings_updated",
    )
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=["key", "updated_at"], name="opset_db_key_updated_idx"),
        ]
        ordering = ["-updated_at", "-id"]

    def __str__(self) -> str:
        return f"{self.key} ({self.value_type})"

    def _has_versioning_changes(self, existing: "DbSetting") -> bool:
        return (
            existing.key != self.key
            or existing.value_json != self.value_json
            or existing.value_type != self.value_type
            or existing.description != self.description
            or existing.updated_by_id != self.updated_by_id
        )

    def save(self, *args, **kwargs):
        if self.pk is not None:
            using = kwargs.get("using") or self._state.db
            existing = type(self).objects.using(using).filter(pk=self.pk).first()
            if existing is not None:
                if not self._has_versioning_changes(existing):
                    return
                self.pk = None
                self._state.adding = True
                kwargs.pop("force_update", None)
                kwargs.pop("update_fields", None)
                kwargs["force_insert"] = True
        super().save(*args, **kwargs)
