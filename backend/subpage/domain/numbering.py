from flask import current_app
from sqlalchemy import select, and_
from sqlalchemy.orm import aliased
from subpage.extensions import db
from subpage.models.course_section import CourseSection
from subpage.models.subpage import Subpage
from subpage.models.subpage_section import SubpageSection
from .exceptions import CapacityExceededError

# Start of the section numbers used by subpages. Above any likely week or
# topic number, low enough not to bloat the sections table.
SECTION_NUMBER_MIN = 100

# End (exclusive) of the subpage section number band: 900 sections per course.
SECTION_NUMBER_MAX = 1000


def in_subpage_band(section_number: int) -> bool:
    return SECTION_NUMBER_MIN <= section_number < SECTION_NUMBER_MAX


def allocate_section_number(*, course_id: str, session=None) -> int:
    """
    Pick the section number for a new subpage section on a course.

    Finds the first subpage-linked section whose successor number is not
    itself a subpage-linked section and returns that successor, so gaps left
    by deleted sections are filled before the band grows.
    """
    session = session or db.session

    cs = aliased(CourseSection)
    cs2 = aliased(CourseSection)
    ss = aliased(SubpageSection)
    ss2 = aliased(SubpageSection)

    stmt = (
        select((cs.section + 1).label("num"))
        .select_from(Subpage)
        .join(ss, ss.subpage_id == Subpage.id)
        .join(cs, and_(cs.id == ss.section_id, cs.course_id == Subpage.course_id))
        .outerjoin(cs2, and_(cs2.course_id == Subpage.course_id, cs2.section == cs.section + 1))
        .outerjoin(ss2, ss2.section_id == cs2.id)
        .where(Subpage.course_id == course_id, ss2.id.is_(None))
        .order_by(cs.section.asc())
        .limit(1)
    )

    number = session.execute(stmt).scalar_one_or_none()
    if number is None:
        number = SECTION_NUMBER_MIN

    if number >= SECTION_NUMBER_MAX:
        current_app.logger.warning(
            f"Subpage section limit reached on course {course_id}"
        )
        raise CapacityExceededError(
            f"Course {course_id} has no free subpage section numbers "
            f"({SECTION_NUMBER_MIN}..{SECTION_NUMBER_MAX - 1} in use)"
        )

    return number
