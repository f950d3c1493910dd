from contextlib import contextmanager
from pagetree.extensions import db

@contextmanager
def transactional():
    """Commits the session on success, rolls it back on any error."""
    try:
        yield
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
