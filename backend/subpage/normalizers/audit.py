from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Tuple
from subpage.domain.exceptions import InvariantViolation
from subpage.models.audit_log import AuditLog


def normalize_audit_entry(entry: AuditLog) -> Dict[str, Any]:
    """
    Audit row → API entry. Deletions also report how many module
    deletion warnings they collected.
    """
    data = {
        "id": entry.id,
        "action": entry.action,
        "actor_id": entry.actor_id,
        "subpage_id": entry.subpage_id,
        "entity": {"type": entry.entity_type, "id": entry.entity_id},
        "details": entry.payload or {},
        "created_at": entry.created_at.isoformat(),
    }
    if "warnings" in data["details"]:
        data["warning_count"] = len(entry.warnings)
    return data


def audit_cursor(entry: AuditLog) -> str:
    return f"{entry.created_at.isoformat()}|{entry.id}"


def parse_audit_cursor(cursor: str) -> Tuple[datetime, str]:
    created_at, sep, entry_id = cursor.partition("|")
    if not sep or not entry_id:
        raise InvariantViolation(f"Invalid audit cursor: {cursor}")
    try:
        return datetime.fromisoformat(created_at), entry_id
    except ValueError:
        raise InvariantViolation(f"Invalid audit cursor: {cursor}")
