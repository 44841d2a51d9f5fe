from subpage.extensions import db
from .base import BaseModel

class CourseModule(BaseModel):
    __tablename__ = "course_modules"

    course_id = db.Column(db.String(36), db.ForeignKey("courses.id"), nullable=False, index=True)
    section_id = db.Column(db.String(36), db.ForeignKey("course_sections.id"), nullable=True, index=True)
    modname = db.Column(db.String(50), nullable=False, index=True)  # subpage, forum, resource, ...
    instance = db.Column(db.String(36), nullable=False)
    name = db.Column(db.String(255), nullable=False, default="")
    icon = db.Column(db.String(255), nullable=True)
