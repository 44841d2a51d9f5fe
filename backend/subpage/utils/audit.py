from typing import Optional
from subpage.extensions import db
from subpage.models.audit_log import AuditLog


def log_action(
    *,
    course_id: str,
    actor_id: Optional[str],
    action: str,
    entity_type: str,
    entity_id: Optional[str],
    subpage_id: Optional[str] = None,
    payload: dict | None = None,
    session=None,
) -> AuditLog:
    """Adds an audit entry to the session; the caller's transaction commits it."""
    session = session or db.session

    entry = AuditLog()
    entry.course_id = course_id
    entry.subpage_id = subpage_id
    entry.actor_id = actor_id
    entry.action = action
    entry.entity_type = entity_type
    entry.entity_id = entity_id
    entry.payload = payload or {}

    session.add(entry)
    return entry
