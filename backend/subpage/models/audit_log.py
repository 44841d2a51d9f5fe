from sqlalchemy import event
from subpage.extensions import db
from .base import BaseModel

SECTION_ADDED = "subpage.section.add"
SECTION_DELETED = "subpage.section.delete"
MODULE_DELETED = "course.module.delete"


class AuditLog(BaseModel):
    """
    Who changed what on a course. Rows are written inside the transaction of
    the change they record and are never updated or deleted afterwards.
    """
    __tablename__ = "audit_logs"

    __table_args__ = (
        db.Index("ix_audit_course_created", "course_id", "created_at", "id"),
        db.Index("ix_audit_course_subpage", "course_id", "subpage_id"),
    )

    course_id = db.Column(db.String(36), nullable=False, index=True)
    # Set for section changes; module deletions may happen outside a subpage
    subpage_id = db.Column(db.String(36), nullable=True)
    actor_id = db.Column(db.String(36), nullable=True, index=True)
    action = db.Column(db.String(50), nullable=False, index=True)

    entity_type = db.Column(db.String(50), nullable=False)
    entity_id = db.Column(db.String(36), nullable=False, index=True)

    payload = db.Column(db.JSON, nullable=False, default=dict)

    @property
    def warnings(self):
        return (self.payload or {}).get("warnings", [])


@event.listens_for(AuditLog, "before_update")
@event.listens_for(AuditLog, "before_delete")
def _reject_audit_change(mapper, connection, target):
    raise RuntimeError(f"Audit entry {target.id} is immutable")
