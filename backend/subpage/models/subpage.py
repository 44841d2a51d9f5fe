from subpage.extensions import db
from .base import BaseModel
from .course_section import FORMAT_HTML

class Subpage(BaseModel):
    __tablename__ = "subpages"

    course_id = db.Column(db.String(36), db.ForeignKey("courses.id"), nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    intro = db.Column(db.Text, nullable=True)
    intro_format = db.Column(db.String(20), nullable=False, default=FORMAT_HTML)

    # Links to course sections, in display order
    links = db.relationship(
        "SubpageSection",
        back_populates="subpage",
        order_by="SubpageSection.pageorder",
        cascade="all, delete-orphan"
    )
