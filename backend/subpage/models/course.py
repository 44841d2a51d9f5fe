from subpage.extensions import db
from .base import BaseModel

class Course(BaseModel):
    __tablename__ = "courses"

    fullname = db.Column(db.String(255), nullable=False)
    shortname = db.Column(db.String(100), nullable=False, index=True)
    format = db.Column(db.String(50), nullable=False, default="topics")  # topics, weeks, ...

    # Sections 0..numsections are managed by the course itself
    numsections = db.Column(db.Integer, nullable=False, default=10)

    # Bumped every time the derived course cache (module info) is rebuilt
    cache_rev = db.Column(db.Integer, nullable=False, default=0)
    modinfo = db.Column(db.JSON(none_as_null=True), nullable=True)
