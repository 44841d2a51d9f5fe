from subpage.extensions import db
from .base import BaseModel

FORMAT_HTML = "html"
FORMAT_PLAIN = "plain"

class CourseSection(BaseModel):
    __tablename__ = "course_sections"

    course_id = db.Column(db.String(36), db.ForeignKey("courses.id"), nullable=False, index=True)
    section = db.Column(db.Integer, nullable=False)
    name = db.Column(db.String(255), nullable=True)
    summary = db.Column(db.Text, nullable=False, default="")
    summary_format = db.Column(db.String(20), nullable=False, default=FORMAT_HTML)
    sequence = db.Column(db.JSON, nullable=False, default=list)  # ordered course module ids
    visible = db.Column(db.Boolean, nullable=False, default=True)

    __table_args__ = (
        db.UniqueConstraint("course_id", "section", name="uq_course_section_number"),
    )
