from subpage.domain.registry import DeletionContext
from subpage.models.subpage import Subpage
from .delete_section import delete_section
from .list_sections import page_links


def delete_subpage_instance(instance_id: str, context: DeletionContext) -> bool:
    """
    Deletion handler for course modules of type ``subpage``: removes every
    section of the subpage, then the subpage itself.
    """
    session = context.session

    subpage = session.get(Subpage, instance_id)
    if not subpage:
        return False

    for link in page_links(subpage_id=subpage.id, session=session):
        delete_section(
            subpage_id=subpage.id,
            section_id=link.section_id,
            actor_id=context.actor_id,
            registry=context.registry,
            session=session,
        )

    session.delete(subpage)
    return True
