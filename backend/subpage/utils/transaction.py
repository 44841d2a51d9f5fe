from contextlib import contextmanager
from sqlalchemy import event
from sqlalchemy.orm import Session
from subpage.extensions import db

_DEPTH_KEY = "subpage.transaction_depth"
_ON_COMMIT_KEY = "subpage.on_commit"
_ON_ROLLBACK_KEY = "subpage.on_rollback"
_COMMITTED_KEY = "subpage.committed"

@contextmanager
def transactional(session=None):
    """
    Context manager for database transactions.

    Nested blocks join the outermost one: only the outermost block commits,
    and a failure anywhere rolls the whole unit back.
    """
    session = session or db.session
    depth = session.info.get(_DEPTH_KEY, 0)
    session.info[_DEPTH_KEY] = depth + 1
    try:
        yield session
        if depth == 0:
            session.commit()
    except Exception:
        if depth == 0:
            session.rollback()
        raise
    finally:
        session.info[_DEPTH_KEY] = depth


def on_commit(callback, session=None):
    """
    Runs callback after the session's current transaction commits.
    Dropped if the transaction rolls back instead.
    """
    session = session or db.session
    session.info.setdefault(_ON_COMMIT_KEY, []).append(callback)


def on_rollback(callback, session=None):
    """
    Runs callback if the session's current transaction ends without
    committing. Callbacks run newest first.
    """
    session = session or db.session
    session.info.setdefault(_ON_ROLLBACK_KEY, []).append(callback)


@event.listens_for(Session, "after_commit")
def _mark_committed(session):
    # Savepoint commits do not count
    if not session.in_nested_transaction():
        session.info[_COMMITTED_KEY] = True


@event.listens_for(Session, "after_transaction_end")
def _run_callbacks(session, transaction):
    # Runs once the session has left the transaction, so callbacks may query
    if transaction.parent is not None:
        return
    committed = session.info.pop(_COMMITTED_KEY, False)
    commit_callbacks = session.info.pop(_ON_COMMIT_KEY, [])
    rollback_callbacks = session.info.pop(_ON_ROLLBACK_KEY, [])

    if committed:
        for callback in commit_callbacks:
            callback()
    else:
        for callback in reversed(rollback_callbacks):
            callback()
