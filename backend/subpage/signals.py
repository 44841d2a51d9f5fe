from blinker import Namespace
from flask import current_app
from subpage.utils.transaction import on_commit

_signals = Namespace()

# Sent after a course module has been removed.
# kwargs: modname, cmid, course_id, actor_id
module_deleted = _signals.signal("module-deleted")

# Sent after a section has been added to / removed from a subpage.
# kwargs: subpage_id, section_id, course_id, actor_id
subpage_section_added = _signals.signal("subpage-section-added")
subpage_section_deleted = _signals.signal("subpage-section-deleted")


def send_on_commit(signal, session=None, **kwargs):
    """
    Sends signal once the surrounding transaction commits.
    Nothing is sent if it rolls back.
    """
    sender = current_app._get_current_object()
    on_commit(lambda: signal.send(sender, **kwargs), session)
