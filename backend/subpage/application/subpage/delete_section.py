from typing import List, Optional
from sqlalchemy import select
from subpage.extensions import db
from subpage.domain.exceptions import NotFoundError, ModuleDeletionWarning
from subpage.domain.invariants.subpage import assert_page_order
from subpage.domain.registry import DeletionContext, SubpageRegistry, current_registry
from subpage.host.modules import delete_module
from subpage.models.audit_log import SECTION_DELETED
from subpage.models.course_module import CourseModule
from subpage.models.course_section import CourseSection
from subpage.models.subpage import Subpage
from subpage.models.subpage_section import SubpageSection
from subpage.signals import subpage_section_deleted, send_on_commit
from subpage.utils.audit import log_action
from subpage.utils.order import compact_order
from subpage.utils.transaction import transactional
from .list_sections import page_links


def delete_section(
    *,
    subpage_id: str,
    section_id: str,
    actor_id: Optional[str] = None,
    registry: Optional[SubpageRegistry] = None,
    session=None,
) -> List[ModuleDeletionWarning]:
    """
    Delete a section of a subpage, with every module placed in it.

    Notes:
    - Modules → link → course section (bottom-up), then the remaining
      links are renumbered 1..k
    - Module deletion failures are returned as warnings and never abort
      the section deletion; each is logged where it is raised
    - subpage_section_deleted is sent once the transaction commits
    """
    session = session or db.session
    registry = registry or current_registry()

    subpage = session.get(Subpage, subpage_id)
    if not subpage:
        raise NotFoundError(f"Subpage {subpage_id} not found")

    warnings: List[ModuleDeletionWarning] = []

    with transactional(session):
        link = session.execute(
            select(SubpageSection).where(
                SubpageSection.subpage_id == subpage.id,
                SubpageSection.section_id == section_id,
            )
        ).scalar_one_or_none()
        if not link:
            raise NotFoundError(f"Section {section_id} is not on subpage {subpage_id}")

        cms = session.execute(
            select(CourseModule).where(
                CourseModule.course_id == subpage.course_id,
                CourseModule.section_id == section_id,
            )
        ).scalars().all()

        context = DeletionContext(session=session, actor_id=actor_id, registry=registry)
        for cm in cms:
            warnings.extend(delete_module(cm=cm, context=context))

        session.delete(link)

        section = session.get(CourseSection, section_id)
        if section is not None and section.course_id == subpage.course_id:
            session.delete(section)

        remaining = compact_order(page_links(subpage_id=subpage.id, session=session))
        assert_page_order(remaining)

        log_action(
            course_id=subpage.course_id,
            actor_id=actor_id,
            action=SECTION_DELETED,
            entity_type="course_section",
            entity_id=section_id,
            subpage_id=subpage.id,
            payload={
                "modules": len(cms),
                "warnings": [w.to_dict() for w in warnings],
            },
            session=session,
        )

        send_on_commit(
            subpage_section_deleted,
            session,
            subpage_id=subpage.id,
            section_id=section_id,
            course_id=subpage.course_id,
            actor_id=actor_id,
        )

    return warnings
