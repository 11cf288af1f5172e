from contextlib import contextmanager
from flask import current_app
from content_tree.extensions import db

@contextmanager
def transactional(label: str = "transaction"):
    """
    Run the enclosed writes as one database transaction.

    Commits when the block exits cleanly, rolls back and re-raises otherwise.
    """
    try:
        yield db.session
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.warning(f"Rolled back {label}")
        raise
