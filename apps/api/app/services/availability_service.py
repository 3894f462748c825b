# apps/api/app/services/availability_service.py
from __future__ import annotations
import logging
from datetime import datetime, time
from typing import Optional

from sqlalchemy import case
from sqlalchemy.orm import Session

from app.core.errors import service_call, ValidationError, AuthorizationError
from app.db.models_scheduling import Availability, WEEKDAYS
from app.db.upsert import upsert

logger = logging.getLogger(__name__)

_WEEKDAY_ORDER = case({name: i for i, name in enumerate(WEEKDAYS, start=1)}, value=Availability.weekday)


def normalize_weekday(value: str | None) -> str:
    name = (value or "").strip().capitalize()
    if name not in WEEKDAYS:
        raise ValidationError(f"weekday must be one of {', '.join(WEEKDAYS)}")
    return name


def parse_hours(value, field: str) -> float:
    """9, 9.5, "9.5", "09:30" or "09:30:00" -> decimal hours."""
    if value is None or value == "":
        raise ValidationError(f"{field} is required")
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a time of day")
    if isinstance(value, (int, float)):
        hours = float(value)
    else:
        s = str(value).strip()
        try:
            hours = float(s)
        except ValueError:
            if s == "24:00":
                hours = 24.0
            else:
                try:
                    t = time.fromisoformat(s)
                except ValueError:
                    raise ValidationError(f"{field} must be decimal hours or HH:MM")
                hours = t.hour + t.minute / 60 + t.second / 3600
    if not 0 <= hours <= 24:
        raise ValidationError(f"{field} must be between 0 and 24")
    return hours


@service_call("set availability")
def set_availability(db: Session, sin: str, weekday: str, emp_start, emp_end) -> Availability:
    if not sin:
        raise ValidationError("Employee SIN is required")
    day = normalize_weekday(weekday)
    start = parse_hours(emp_start, "emp_start")
    end = parse_hours(emp_end, "emp_end")
    if start >= end:
        raise ValidationError("emp_start must be earlier than emp_end")

    upsert(db, Availability, {"sin": sin, "weekday": day, "emp_start": start, "emp_end": end,
                              "updated_at": datetime.utcnow()},
           key=["sin", "weekday"])
    db.commit()
    logger.info("[availability] %s %s %.2f-%.2f", sin, day, start, end)
    return get_window(db, sin, day)


def get_window(db: Session, sin: str, weekday: str) -> Availability | None:
    return db.query(Availability).filter(Availability.sin == sin, Availability.weekday == weekday).first()


@service_call("fetch availability")
def list_availability(db: Session, role: str, weekday: Optional[str] = None, sin: Optional[str] = None):
    if role != "manager":
        raise AuthorizationError("Only managers can view availability")
    q = db.query(Availability)
    if weekday:
        q = q.filter(Availability.weekday == normalize_weekday(weekday))
    if sin:
        q = q.filter(Availability.sin == sin)
    return q.order_by(_WEEKDAY_ORDER, Availability.emp_start).all()
