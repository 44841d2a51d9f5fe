from typing import List
from flask import current_app
from sqlalchemy import delete
from subpage.domain.exceptions import ModuleDeletionWarning
from subpage.domain.registry import DeletionContext
from subpage.models.audit_log import MODULE_DELETED
from subpage.models.course_module import CourseModule
from subpage.models.course_section import CourseSection
from subpage.signals import module_deleted, send_on_commit
from subpage.utils.audit import log_action
from subpage.utils.media import delete_area_files
from .cache import rebuild_course_cache


def delete_module(*, cm: CourseModule, context: DeletionContext) -> List[ModuleDeletionWarning]:
    """
    Removes a course module and everything hanging off it.

    Steps:
    - module type handler deletes the instance
    - stored files of the module are removed
    - the course module row is removed
    - the module is dropped from its section's sequence
    - the action is audited and the course cache rebuilt
    - module_deleted is sent once the transaction commits

    A step that fails adds a warning; the remaining steps still run.
    """
    session = context.session
    cmid, course_id, modname = cm.id, cm.course_id, cm.modname
    instance, section_id = cm.instance, cm.section_id

    warnings: List[ModuleDeletionWarning] = []

    def warn(step, message):
        current_app.logger.warning(f"Module {cmid} ({modname}): {message}")
        warnings.append(ModuleDeletionWarning(cmid=cmid, modname=modname, step=step, message=message))

    handler = context.registry.modules.get(modname)
    if handler is None:
        warn("handler", f"No deletion handler registered for {modname}")
    elif not handler(instance, context):
        warn("instance", f"Could not delete the {modname} (instance)")

    if not delete_area_files(cmid, session):
        warn("files", f"Could not delete the {modname} files")

    result = session.execute(
        delete(CourseModule).where(CourseModule.id == cmid),
        execution_options={"synchronize_session": False},
    )
    if cm in session:
        session.expunge(cm)
    if result.rowcount != 1:
        warn("coursemodule", f"Could not delete the {modname} (coursemodule)")

    section = session.get(CourseSection, section_id) if section_id else None
    if section is None or cmid not in (section.sequence or []):
        warn("sequence", f"Could not delete the {modname} from that section")
    else:
        section.sequence = [m for m in section.sequence if m != cmid]

    send_on_commit(
        module_deleted,
        session,
        modname=modname,
        cmid=cmid,
        course_id=course_id,
        actor_id=context.actor_id,
    )

    log_action(
        course_id=course_id,
        actor_id=context.actor_id,
        action=MODULE_DELETED,
        entity_type="course_module",
        entity_id=cmid,
        payload={"modname": modname, "instance": instance},
        session=session,
    )

    rebuild_course_cache(course_id, session)

    return warnings
