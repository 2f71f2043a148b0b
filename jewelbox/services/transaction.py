"""
Commit/rollback wrapper shared by the write paths of every service.
"""
import functools
import logging
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from jewelbox.exceptions import BackendError, ConflictError, JewelBoxError

logger = logging.getLogger(__name__)


@contextmanager
def write_transaction(db: Session, action: str, conflict_message: str = None):
    """
    Run a block of writes and commit it; on any failure roll back and raise.

    - Domain errors raised inside the block propagate unchanged.
    - IntegrityError becomes ConflictError (a unique/foreign key was violated,
      usually by a concurrent writer).
    - Any other SQLAlchemyError becomes BackendError with the original chained.
    """
    try:
        yield
        db.commit()
    except JewelBoxError:
        db.rollback()
        raise
    except IntegrityError as e:
        db.rollback()
        logger.warning("%s: integrity error: %s", action, e.orig if e.orig is not None else e)
        raise ConflictError(conflict_message or f"{action} conflicts with existing data") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("%s failed", action)
        raise BackendError(f"{action} failed: {e.__class__.__name__}") from e


def read_guard(action: str):
    """Decorator: turn SQLAlchemyError from a read into BackendError."""
    def wrap(fn):
        @functools.wraps(fn)
        def inner(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except SQLAlchemyError as e:
                logger.exception("%s failed", action)
                raise BackendError(f"{action} failed: {e.__class__.__name__}") from e
        return inner
    return wrap
