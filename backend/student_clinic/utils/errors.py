from contextlib import contextmanager
from typing import Optional

from sqlalchemy.orm import Session

from ..app_logger import get_logger
from ..exceptions import ClinicError, OperationFailedError

log = get_logger("errors")


@contextmanager
def failure_boundary(action: str, db: Optional[Session] = None):
    """Turn unexpected faults into an opaque ``Failed to <action>`` error.

    Domain errors pass through unchanged. The session, when given, is rolled
    back on any failure so a half-applied unit of work is never committed.
    """
    try:
        yield
    except ClinicError:
        if db is not None:
            db.rollback()
        raise
    except Exception as exc:
        if db is not None:
            db.rollback()
        log.exception("Failed to %s", action)
        raise OperationFailedError(f"Failed to {action}") from exc
