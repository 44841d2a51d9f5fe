from sqlalchemy import select
from subpage.extensions import db
from subpage.models.course import Course
from subpage.models.course_module import CourseModule
from subpage.models.course_section import CourseSection


def build_modinfo(course_id, session=None):
    session = session or db.session
    rows = session.execute(
        select(CourseModule, CourseSection.section)
        .outerjoin(CourseSection, CourseSection.id == CourseModule.section_id)
        .where(CourseModule.course_id == course_id)
    ).all()

    return {
        cm.id: {
            "name": cm.name,
            "modname": cm.modname,
            "instance": cm.instance,
            "section": section_number,
            "icon": cm.icon,
        }
        for cm, section_number in rows
    }


def rebuild_course_cache(course_id, session=None):
    """Recomputes the course's module info and bumps its cache revision."""
    session = session or db.session
    course = session.get(Course, course_id)
    if course is None:
        return None

    session.flush()
    course.modinfo = build_modinfo(course_id, session)
    course.cache_rev = (course.cache_rev or 0) + 1
    return course
