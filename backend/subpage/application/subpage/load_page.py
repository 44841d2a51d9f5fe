from dataclasses import dataclass
from typing import Dict
from sqlalchemy import select
from subpage.extensions import db
from subpage.domain.exceptions import NotFoundError
from subpage.models.course import Course
from subpage.models.course_module import CourseModule
from subpage.models.subpage import Subpage

MODNAME = "subpage"


@dataclass(frozen=True)
class LoadedSubpage:
    """A subpage together with its course module and course."""
    subpage: Subpage
    cm: CourseModule
    course: Course

    @property
    def id(self):
        return self.subpage.id

    @property
    def name(self):
        return self.subpage.name

    @property
    def intro(self):
        return self.subpage.intro

    @property
    def intro_format(self):
        return self.subpage.intro_format

    @property
    def has_intro(self) -> bool:
        return bool(self.subpage.intro)


def load_page(*, cmid: str, session=None) -> LoadedSubpage:
    """
    Resolve a course module id to its subpage, course module and course.

    Raises NotFoundError when any of the three records is missing.
    """
    session = session or db.session

    cm = session.execute(
        select(CourseModule).where(
            CourseModule.id == cmid,
            CourseModule.modname == MODNAME,
        )
    ).scalar_one_or_none()
    if not cm:
        raise NotFoundError(f"Course module {cmid} not found")

    subpage = session.get(Subpage, cm.instance)
    if not subpage:
        raise NotFoundError(f"Subpage {cm.instance} not found")

    course = session.get(Course, cm.course_id)
    if not course:
        raise NotFoundError(f"Course {cm.course_id} not found")

    return LoadedSubpage(subpage=subpage, cm=cm, course=course)


def list_course_subpages(*, course_id: str, session=None) -> Dict[str, LoadedSubpage]:
    """All subpages on a course, keyed by course module id."""
    session = session or db.session

    cmids = session.execute(
        select(CourseModule.id)
        .where(CourseModule.course_id == course_id, CourseModule.modname == MODNAME)
        .order_by(CourseModule.created_at.asc(), CourseModule.id.asc())
    ).scalars().all()

    return {cmid: load_page(cmid=cmid, session=session) for cmid in cmids}
