from dataclasses import dataclass
from typing import List, Optional
from sqlalchemy import select, func
from subpage.extensions import db
from subpage.models.course_section import CourseSection
from subpage.models.subpage_section import SubpageSection


@dataclass(frozen=True)
class SectionEntry:
    """A course section as placed on a subpage."""
    record: CourseSection
    pageorder: Optional[int] = None
    stealth: bool = False

    @property
    def id(self):
        return self.record.id

    @property
    def number(self):
        return self.record.section

    @property
    def name(self):
        return self.record.name

    @property
    def summary(self):
        return self.record.summary

    @property
    def sequence(self):
        return self.record.sequence or []


def list_sections(*, subpage_id: str, session=None) -> List[SectionEntry]:
    """Sections of a subpage in display order. Queried afresh on every call."""
    session = session or db.session

    rows = session.execute(
        select(CourseSection, SubpageSection.pageorder, SubpageSection.stealth)
        .join(SubpageSection, SubpageSection.section_id == CourseSection.id)
        .where(SubpageSection.subpage_id == subpage_id)
        .order_by(SubpageSection.pageorder.asc())
    ).all()

    return [
        SectionEntry(record=section, pageorder=pageorder, stealth=bool(stealth))
        for section, pageorder, stealth in rows
    ]


def last_section_pageorder(*, subpage_id: str, session=None) -> Optional[int]:
    session = session or db.session
    return session.execute(
        select(func.max(SubpageSection.pageorder)).where(SubpageSection.subpage_id == subpage_id)
    ).scalar()


def page_links(*, subpage_id: str, session=None) -> List[SubpageSection]:
    session = session or db.session
    return session.execute(
        select(SubpageSection)
        .where(SubpageSection.subpage_id == subpage_id)
        .order_by(SubpageSection.pageorder.asc(), SubpageSection.id.asc())
    ).scalars().all()
