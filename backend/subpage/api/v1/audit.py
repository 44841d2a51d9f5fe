from flask import request, jsonify
from flask_jwt_extended import jwt_required
from sqlalchemy import select, or_, and_
from subpage.extensions import db
from subpage.models.audit_log import AuditLog
from subpage.normalizers.audit import normalize_audit_entry, audit_cursor, parse_audit_cursor
from subpage.utils.decorators import roles_required, course_scoped
from . import v1_bp

FILTERS = ("action", "actor_id", "subpage_id", "entity_id")


@v1_bp.route("/courses/<course_id>/audit", methods=["GET"])
@jwt_required()
@roles_required("manager")
@course_scoped
def list_course_audit(course_id):
    limit = max(1, min(request.args.get("limit", 20, type=int), 100))

    stmt = select(AuditLog).where(AuditLog.course_id == course_id)
    for field in FILTERS:
        if value := request.args.get(field):
            stmt = stmt.where(getattr(AuditLog, field) == value)

    # Newest first; the cursor is the last entry of the previous page
    if cursor := request.args.get("cursor"):
        created_at, last_id = parse_audit_cursor(cursor)
        stmt = stmt.where(
            or_(
                AuditLog.created_at < created_at,
                and_(AuditLog.created_at == created_at, AuditLog.id < last_id),
            )
        )

    entries = db.session.execute(
        stmt.order_by(AuditLog.created_at.desc(), AuditLog.id.desc()).limit(limit + 1)
    ).scalars().all()

    has_more = len(entries) > limit
    entries = entries[:limit]

    return jsonify({
        "data": [normalize_audit_entry(entry) for entry in entries],
        "meta": {
            "next_cursor": audit_cursor(entries[-1]) if has_more else None,
            "has_more": has_more,
        },
    }), 200
