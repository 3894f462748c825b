# apps/api/app/services/shift_service.py
"""
Shift ledger.

A shift has no start time of its own: it is anchored at the start of the
employee's availability window for that weekday, so the only bound to check is
``emp_start + length <= emp_end``. Without an availability row the shift is
unconstrained. The (esin, day, week, month) unique constraint allows a single
shift per employee per day slot, which rules out same-day overlaps.
"""
from __future__ import annotations
import logging
import math
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import service_call, ValidationError, AuthorizationError, NotFoundError, ConflictError
from app.db.models_scheduling import Shift, Availability, WEEKDAYS
from app.models.org import Employee
from app.services.availability_service import get_window
from app.services.identity_directory import department_of, get_manager
from app.services.schedule_service import find_assignment

logger = logging.getLogger(__name__)

# floating point slack for decimal-hour sums (9.1 + 7.9 must fit in 9.1-17.0)
_EPS = 1e-9


def weekday_of(day: int) -> str:
    return WEEKDAYS[day - 1]


def _require(**fields) -> None:
    missing = [k for k, v in fields.items() if v is None or v == ""]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")


def _int_in_range(value, field: str, lo: int, hi: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not lo <= value <= hi:
        raise ValidationError(f"{field} must be an integer between {lo} and {hi}")
    return value


def _positive_length(length) -> float:
    if isinstance(length, bool) or not isinstance(length, (int, float)) or not math.isfinite(length) or length <= 0:
        raise ValidationError("length must be a positive number of hours")
    return float(length)


def validate_key(day, week, month, esin) -> None:
    _require(day=day, week=week, month=month, esin=esin)
    _int_in_range(day, "day", 1, 7)
    _int_in_range(week, "week", 1, 52)
    _int_in_range(month, "month", 1, 12)


def check_availability(db: Session, esin: str, day: int, length: float) -> Optional[Availability]:
    window = get_window(db, esin, weekday_of(day))
    if window is not None and window.emp_start + length > window.emp_end + _EPS:
        raise ValidationError(
            f"Shift exceeds employee availability ({window.weekday} "
            f"{window.emp_start:g}-{window.emp_end:g}, requested {length:g}h)"
        )
    return window


def find_shift(db: Session, esin: str, day: int, week: int, month: int) -> Shift | None:
    return db.query(Shift).filter(
        Shift.esin == esin,
        Shift.day == day,
        Shift.week == week,
        Shift.month == month,
    ).first()


def _require_same_department(db: Session, msin: str, esin: str) -> None:
    dept = department_of(db, msin, "manager")
    if dept is None or dept != department_of(db, esin, "employee"):
        raise AuthorizationError("Not authorized to modify shifts outside your department")


@service_call("create shift")
def create_shift(db: Session, msin: str, day, week, month, esin: str, length) -> Shift:
    validate_key(day, week, month, esin)
    _require(length=length)
    length = _positive_length(length)

    if not find_assignment(db, esin, week):
        raise ValidationError("Employee is not scheduled for this week")
    check_availability(db, esin, day, length)

    s = Shift(esin=esin, msin=msin, day=day, week=week, month=month, length=length)
    db.add(s)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Shift already exists for this employee, day, week and month")
    db.refresh(s)
    logger.info("[shift] created %s d=%s w=%s m=%s len=%s by %s", esin, day, week, month, length, msin)
    return s


@service_call("update shift")
def update_shift(db: Session, msin: str, day, week, month, esin: str, length) -> Shift:
    """Only the length of an existing shift can change; the key is immutable."""
    validate_key(day, week, month, esin)
    _require(length=length)
    length = _positive_length(length)

    s = find_shift(db, esin, day, week, month)
    if not s:
        raise NotFoundError("Shift not found")
    _require_same_department(db, msin, esin)
    check_availability(db, esin, day, length)

    s.length = length
    db.commit()
    db.refresh(s)
    logger.info("[shift] updated %s d=%s w=%s m=%s len=%s by %s", esin, day, week, month, length, msin)
    return s


@service_call("delete shift")
def delete_shift(db: Session, msin: str, day, week, month, esin: str) -> None:
    validate_key(day, week, month, esin)

    s = find_shift(db, esin, day, week, month)
    if not s:
        raise NotFoundError("Shift not found")
    _require_same_department(db, msin, esin)

    db.delete(s)
    db.commit()
    logger.info("[shift] deleted %s d=%s w=%s m=%s by %s", esin, day, week, month, msin)


@service_call("fetch shifts")
def list_shifts_for_employee(db: Session, esin: str, month: int) -> list[Shift]:
    _int_in_range(month, "month", 1, 12)
    return db.query(Shift).filter(Shift.esin == esin, Shift.month == month).all()


@service_call("fetch department shifts")
def list_shifts_for_department(db: Session, msin: str, week: Optional[int] = None, month: Optional[int] = None) -> list[dict]:
    manager = get_manager(db, msin)
    if not manager or not manager.departmentid:
        return []
    q = (
        db.query(Shift, Employee.name)
        .join(Employee, Employee.sin == Shift.esin)
        .filter(Employee.departmentid == manager.departmentid)
    )
    if week is not None:
        q = q.filter(Shift.week == _int_in_range(week, "week", 1, 52))
    if month is not None:
        q = q.filter(Shift.month == _int_in_range(month, "month", 1, 12))
    rows = q.order_by(Shift.week.asc(), Shift.day.asc(), Employee.name.asc()).all()
    return [
        {
            "esin": s.esin,
            "msin": s.msin,
            "name": name,
            "day": s.day,
            "weekday": weekday_of(s.day),
            "week": s.week,
            "month": s.month,
            "length": s.length,
        }
        for s, name in rows
    ]
