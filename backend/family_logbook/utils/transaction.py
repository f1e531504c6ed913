from contextlib import contextmanager
from flask import current_app
from family_logbook.extensions import db


@contextmanager
def transactional():
    """
    Commit on clean exit, roll back and re-raise otherwise.

    Services open one of these per unit of work; audit rows added inside
    it are committed or discarded together with the change they describe.
    """
    try:
        yield db.session
        db.session.commit()
    except Exception as exc:
        db.session.rollback()
        current_app.logger.debug("Transaction rolled back: %s", type(exc).__name__)
        raise
