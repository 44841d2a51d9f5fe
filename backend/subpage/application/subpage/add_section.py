from dataclasses import dataclass
from typing import Optional
from flask import current_app
from subpage.extensions import db
from subpage.domain.exceptions import NotFoundError
from subpage.domain.numbering import allocate_section_number
from subpage.host.sections import create_section
from subpage.models.subpage import Subpage
from subpage.models.subpage_section import SubpageSection
from subpage.models.audit_log import SECTION_ADDED
from subpage.signals import subpage_section_added, send_on_commit
from subpage.utils.audit import log_action
from subpage.utils.text import format_string, format_text
from subpage.utils.transaction import transactional
from .list_sections import last_section_pageorder


@dataclass(frozen=True)
class AddedSection:
    link_id: str
    section_id: str
    section_number: int
    pageorder: int


def add_section(
    *,
    subpage_id: str,
    actor_id: Optional[str] = None,
    name: Optional[str] = None,
    summary: Optional[str] = None,
    session=None,
) -> AddedSection:
    """
    Append a new course section to the end of a subpage.

    Responsibilities:
    - pick a free number in the subpage section band
    - create the course section, with name/summary when given
    - link it to the subpage after the current last section
    - audit logging

    Either every step commits or none does.
    """
    session = session or db.session

    subpage = session.get(Subpage, subpage_id)
    if not subpage:
        raise NotFoundError(f"Subpage {subpage_id} not found")

    with transactional(session):
        number = allocate_section_number(course_id=subpage.course_id, session=session)

        section = create_section(
            course_id=subpage.course_id,
            section_number=number,
            session=session,
        )

        if name or summary:
            section.name = format_string(name) or None
            section.summary = format_text(summary)

        pageorder = (last_section_pageorder(subpage_id=subpage.id, session=session) or 0) + 1

        link = SubpageSection()
        link.subpage_id = subpage.id
        link.section_id = section.id
        link.pageorder = pageorder
        link.stealth = False

        session.add(link)
        session.flush()  # ensures link.id is available

        log_action(
            course_id=subpage.course_id,
            actor_id=actor_id,
            action=SECTION_ADDED,
            entity_type="course_section",
            entity_id=section.id,
            subpage_id=subpage.id,
            payload={
                "section": number,
                "pageorder": pageorder,
            },
            session=session,
        )

        added = AddedSection(
            link_id=link.id,
            section_id=section.id,
            section_number=number,
            pageorder=pageorder,
        )

        send_on_commit(
            subpage_section_added,
            session,
            subpage_id=subpage.id,
            section_id=section.id,
            course_id=subpage.course_id,
            actor_id=actor_id,
        )

    current_app.logger.info(
        f"Added section {added.section_number} to subpage {subpage_id} at position {pageorder}"
    )
    return added
