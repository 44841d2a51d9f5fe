from subpage.extensions import db
from .base import BaseModel

class SubpageSection(BaseModel):
    __tablename__ = "subpage_sections"

    subpage_id = db.Column(db.String(36), db.ForeignKey("subpages.id"), nullable=False)
    section_id = db.Column(db.String(36), db.ForeignKey("course_sections.id"), nullable=False)
    pageorder = db.Column(db.Integer, nullable=False)
    stealth = db.Column(db.Boolean, nullable=False, default=False)

    subpage = db.relationship("Subpage", back_populates="links")
    section = db.relationship("CourseSection")

    # pageorder is not unique: a move briefly holds two links at the same position
    __table_args__ = (
        db.UniqueConstraint("section_id", name="uq_subpage_section_section"),
        db.Index("idx_subpage_section_order", "subpage_id", "pageorder"),
    )
