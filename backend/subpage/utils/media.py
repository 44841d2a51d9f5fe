import os
import shutil
import uuid
from flask import current_app
from subpage.utils.transaction import on_commit, on_rollback


def module_area_path(cmid):
    upload_folder = current_app.config.get("UPLOAD_FOLDER", "uploads")
    if not os.path.isabs(upload_folder):
        upload_folder = os.path.join(current_app.root_path, upload_folder)
    return os.path.join(upload_folder, "modules", str(cmid))


def delete_area_files(cmid, session=None):
    """
    Deletes every stored file of a course module.

    The area is moved aside at once and only removed when the transaction
    commits; a rollback moves it back.
    Returns False only when an existing area could not be moved.
    """
    area = module_area_path(cmid)

    if not os.path.exists(area):
        return True

    staged = os.path.join(os.path.dirname(area), f".deleted-{cmid}-{uuid.uuid4().hex}")
    logger = current_app.logger

    try:
        os.rename(area, staged)
    except OSError as e:
        logger.error(f"Failed to delete file area {area}: {e}")
        return False

    def purge():
        try:
            shutil.rmtree(staged)
        except OSError as e:
            logger.error(f"Failed to purge file area {staged}: {e}")

    def restore():
        try:
            os.rename(staged, area)
        except OSError as e:
            logger.error(f"Failed to restore file area {area}: {e}")

    on_commit(purge, session)
    on_rollback(restore, session)
    return True
