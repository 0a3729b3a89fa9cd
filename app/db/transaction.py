from functools import wraps
from typing import Optional
import logging

from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import TransactionConflictException

logger = logging.getLogger(__name__)

# PostgreSQL serialization_failure and deadlock_detected
CONFLICT_PGCODES = {"40001", "40P01"}
SQLITE_LOCKED_MESSAGES = ("database is locked", "database table is locked")


def is_transaction_conflict(error: DBAPIError) -> bool:
    """
    True when another transaction won the race: a unique violation, a
    serialization failure or deadlock, or a locked SQLite database. Broken
    connections and schema or I/O errors are not conflicts.
    """
    if error.connection_invalidated:
        return False
    if isinstance(error, IntegrityError):
        return True
    if not isinstance(error, OperationalError):
        return False

    if getattr(error.orig, "pgcode", None) in CONFLICT_PGCODES:
        return True
    message = str(error.orig).lower()
    return any(locked in message for locked in SQLITE_LOCKED_MESSAGES)


def atomic(retries: Optional[int] = None):
    """
    Run the decorated function as one unit of work on the session passed as
    its first argument.

    The body runs and is committed; any failure rolls the session back so no
    partial write survives. Store-level conflicts re-run the whole body (it
    re-reads current state) up to ``retries`` more times, then surface as
    TransactionConflictException. Every other exception, including domain
    errors and non-conflict database errors, is re-raised untouched after the
    rollback.
    """
    def decorator(method):
        @wraps(method)
        def wrapper(db: Session, *args, **kwargs):
            extra_attempts = settings.TRANSACTION_RETRY_ATTEMPTS if retries is None else retries
            attempt = 0
            while True:
                try:
                    result = method(db, *args, **kwargs)
                    db.commit()
                    return result
                except DBAPIError as e:
                    db.rollback()
                    if not is_transaction_conflict(e):
                        logger.error(f"{method.__name__} failed with a database error: {e}")
                        raise
                    if attempt >= extra_attempts:
                        logger.error(f"{method.__name__} failed after {attempt + 1} attempt(s): {e}")
                        raise TransactionConflictException() from e
                    attempt += 1
                    logger.warning(f"{method.__name__} hit a transaction conflict, retrying ({attempt}/{extra_attempts})")
                except Exception:
                    db.rollback()
                    raise

        return wrapper

    return decorator
