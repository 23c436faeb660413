"""Structured outcomes returned by service functions instead of raising."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

from rest_framework import status


class ErrorKind(str, enum.Enum):
    NOT_FOUND_OR_UNAUTHORIZED = "not_found_or_unauthorized"
    INVALID_STATE_TRANSITION = "invalid_state_transition"
    STORE_FAILURE = "store_failure"
    VALIDATION = "validation"


_HTTP_STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND_OR_UNAUTHORIZED: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_STATE_TRANSITION: status.HTTP_409_CONFLICT,
    ErrorKind.STORE_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
}


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a mutating action: ``{success, message}`` plus optional payload."""

    success: bool
    message: str
    error: ErrorKind | None = None
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def ok(cls, message: str, **data: Any) -> "ActionResult":
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, error: ErrorKind, message: str, **data: Any) -> "ActionResult":
        return cls(success=False, message=message, error=error, data=data)

    @classmethod
    def store_failure(cls, exc: Exception, fallback: str) -> "ActionResult":
        detail = str(exc) or fallback
        return cls.fail(ErrorKind.STORE_FAILURE, f"Database Error: {detail}")

    @property
    def http_status(self) -> int:
        if self.success:
            return status.HTTP_200_OK
        return _HTTP_STATUS_BY_KIND.get(self.error, status.HTTP_400_BAD_REQUEST)

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"success": self.success, "message": self.message}
        if self.error is not None:
            payload["error"] = self.error.value
        payload.update(self.data)
        return payload


def validation_failure(errors: dict[str, Any]) -> ActionResult:
    """Flatten serializer/field errors into the ``Validation failed: ...`` message."""
    parts = []
    for field_name, messages in errors.items():
        if isinstance(messages, (list, tuple)):
            text = " ".join(str(m) for m in messages)
        else:
            text = str(messages)
        parts.append(f"{field_name}: {text}")
    return ActionResult.fail(
        ErrorKind.VALIDATION,
        f"Validation failed: {'; '.join(parts)}",
        errors=errors,
    )
