from flask import current_app
from subpage.extensions import db
from subpage.domain.exceptions import NotFoundError
from subpage.domain.invariants.subpage import assert_page_order, assert_target_order
from subpage.utils.transaction import transactional
from .list_sections import page_links


def move_section(
    *,
    subpage_id: str,
    section_id: str,
    pageorder: int,
    session=None,
) -> None:
    """
    Move a section within its subpage so it ends up at ``pageorder``.

    The moved link takes the target position; every other link is
    renumbered in its current order, skipping that position.
    """
    session = session or db.session

    with transactional(session):
        links = page_links(subpage_id=subpage_id, session=session)

        target = next((link for link in links if link.section_id == section_id), None)
        if target is None:
            raise NotFoundError(f"Section {section_id} is not on subpage {subpage_id}")

        assert_target_order(pageorder, len(links))

        target.pageorder = pageorder

        next_order = 1
        for link in links:
            if link is target:
                continue
            if next_order == pageorder:
                next_order += 1
            link.pageorder = next_order
            next_order += 1

        assert_page_order(links)

    current_app.logger.debug(f"Moved section {section_id} on subpage {subpage_id} to {pageorder}")
