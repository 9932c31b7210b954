from contextlib import contextmanager
from sqlalchemy.exc import SQLAlchemyError
from constructor_pages.extensions import db
from constructor_pages.domain.exceptions import TransactionError

@contextmanager
def transactional():
    """Context manager for database transactions."""
    try:
        yield
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise TransactionError(str(exc.orig if getattr(exc, "orig", None) else exc)) from exc
    except Exception:
        db.session.rollback()
        raise
