from sqlalchemy import select
from subpage.extensions import db
from subpage.models.course_section import CourseSection


def get_section(*, course_id: str, section_number: int, session=None):
    session = session or db.session
    return session.execute(
        select(CourseSection).where(
            CourseSection.course_id == course_id,
            CourseSection.section == section_number,
        )
    ).scalar_one_or_none()


def create_section(*, course_id: str, section_number: int, session=None) -> CourseSection:
    """
    Returns the course section with this number, creating an empty one
    when the course does not have it yet.
    """
    session = session or db.session

    section = get_section(course_id=course_id, section_number=section_number, session=session)
    if section is not None:
        return section

    section = CourseSection()
    section.course_id = course_id
    section.section = section_number
    section.summary = ""
    section.sequence = []
    section.visible = True

    session.add(section)
    session.flush()  # ensures section.id is available
    return section


def list_course_sections(*, course_id: str, session=None):
    session = session or db.session
    return session.execute(
        select(CourseSection)
        .where(CourseSection.course_id == course_id)
        .order_by(CourseSection.section.asc())
    ).scalars().all()
