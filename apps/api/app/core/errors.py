# apps/api/app/core/errors.py
from __future__ import annotations
import functools
import logging

from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class SchedulingError(Exception):
    """Expected failure; message and status are returned to the caller as-is."""
    status_code = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(SchedulingError):
    status_code = 400

class AuthenticationError(SchedulingError):
    status_code = 401

class AuthorizationError(SchedulingError):
    status_code = 403

class NotFoundError(SchedulingError):
    status_code = 404

class ConflictError(SchedulingError):
    status_code = 409

class InternalError(SchedulingError):
    status_code = 500


def service_call(action: str):
    """
    Wraps a service function whose first argument is the Session.

    Typed errors pass through after a rollback. Any other SQLAlchemy failure
    is logged with its traceback and surfaced as InternalError("Failed to <action>").
    """
    def deco(fn):
        @functools.wraps(fn)
        def inner(db, *args, **kwargs):
            try:
                return fn(db, *args, **kwargs)
            except SchedulingError:
                db.rollback()
                raise
            except SQLAlchemyError:
                db.rollback()
                logger.exception("[%s] database error", action)
                raise InternalError(f"Failed to {action}")
        return inner
    return deco
