"""Write the admin console audit trail."""

from __future__ import annotations

from operator_core.models import OperatorAuditEvent

USER_AGENT_MAX_LENGTH = 512


def client_address(request) -> tuple[str, str]:
    """``(ip, user_agent)`` of the caller; the first ``X-Forwarded-For`` hop wins."""
    meta = getattr(request, "META", None) or {}
    forwarded = (meta.get("HTTP_X_FORWARDED_FOR") or "").split(",")[0].strip()
    ip = forwarded or meta.get("REMOTE_ADDR", "") or ""
    user_agent = (meta.get("HTTP_USER_AGENT") or "")[:USER_AGENT_MAX_LENGTH]
    return ip, user_agent


def audit(
    *,
    actor,
    action: str,
    entity_type: str,
    entity_id,
    reason: str,
    before=None,
    after=None,
    meta=None,
    request=None,
) -> OperatorAuditEvent:
    """
    Record one admin console change.

    A blank ``reason`` or an entity type outside ``OperatorAuditEvent.EntityType``
    raises ``ValueError``, so callers check the reason before they apply the
    change. When ``request`` is given the caller's address and user agent are
    stored with the event.
    """
    if not reason:
        raise ValueError("reason is required for audit events")
    if entity_type not in OperatorAuditEvent.EntityType.values:
        raise ValueError(f"unknown audit entity type: {entity_type!r}")

    ip, user_agent = client_address(request) if request is not None else ("", "")
    return OperatorAuditEvent.objects.create(
        actor=actor if getattr(actor, "pk", None) else None,
        action=action,
        entity_type=entity_type,
        entity_id=str(entity_id),
        reason=reason,
        before_json=before,
        after_json=after,
        meta_json=meta,
        ip=ip,
        user_agent=user_agent,
    )
