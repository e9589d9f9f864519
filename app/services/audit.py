"""Audit logging for privileged (admin) mutations.

Each event goes to the ``app.audit`` logger as one ``AUDIT key=value`` line
so it is easy to index, and is also appended to the admin_audit_log table.
"""
from __future__ import annotations
import logging
from typing import Optional, Any, Dict

from sqlalchemy.orm import Session

from app.models.admin_audit_log import AdminAuditLog
from app.utils.datetime import utc_now, isoformat_utc

_logger = logging.getLogger("app.audit")


def _emit(event: str, user_id: Optional[str] = None, **data: Any):
    payload = {"ts": isoformat_utc(utc_now()), "event": event}
    if user_id:
        payload["user_id"] = user_id
    payload.update(data)
    parts = [f"{k}={repr(v)}" for k, v in payload.items()]
    _logger.info("AUDIT " + " ".join(parts))


def log_admin_action(
    db: Session,
    admin_user_id: str,
    action: str,
    resource_type: str,
    resource_id: Any = None,
    metadata: Optional[Dict[str, Any]] = None,
    commit: bool = True,
) -> AdminAuditLog:
    """Record one admin mutation (create/update/delete/grant/reset)."""
    entry = AdminAuditLog(
        admin_user_id=admin_user_id,
        action=action,
        resource_type=resource_type,
        resource_id=str(resource_id) if resource_id is not None else None,
        details=metadata or {},
    )
    db.add(entry)
    if commit:
        db.commit()
    _emit(f"{resource_type}.{action}", user_id=admin_user_id, resource_id=entry.resource_id, metadata=metadata or {})
    return entry


def serialize_entry(entry: AdminAuditLog) -> Dict[str, Any]:
    return {
        "id": entry.id,
        "admin_user_id": entry.admin_user_id,
        "action": entry.action,
        "resource_type": entry.resource_type,
        "resource_id": entry.resource_id,
        "metadata": entry.details or {},
        "created_at": isoformat_utc(entry.created_at),
    }
