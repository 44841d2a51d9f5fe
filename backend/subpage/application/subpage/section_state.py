from sqlalchemy import select, update, func
from subpage.extensions import db
from subpage.models.course_module import CourseModule
from subpage.models.subpage_section import SubpageSection
from subpage.utils.transaction import transactional


def set_section_stealth(*, section_id: str, stealth: bool, session=None) -> int:
    """
    Hide or show a subpage section. Returns the number of links updated.
    """
    session = session or db.session

    with transactional(session):
        result = session.execute(
            update(SubpageSection)
            .where(SubpageSection.section_id == section_id)
            .values(stealth=bool(stealth)),
            execution_options={"synchronize_session": "evaluate"},
        )

    return result.rowcount


def is_section_empty(*, course_id: str, section_id: str, session=None) -> bool:
    """True when no course module is placed in the section."""
    session = session or db.session

    count = session.execute(
        select(func.count(CourseModule.id)).where(
            CourseModule.course_id == course_id,
            CourseModule.section_id == section_id,
        )
    ).scalar()

    return not count
