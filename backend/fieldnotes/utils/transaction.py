from contextlib import contextmanager
from fieldnotes.extensions import db

@contextmanager
def transactional():
    """
    Commit everything done inside the block as one unit.
    Any exception rolls the whole unit back and is re-raised.
    """
    try:
        yield
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
