# apps/api/app/services/schedule_service.py
from __future__ import annotations
import logging
from datetime import datetime

from sqlalchemy.orm import Session

from app.core.errors import service_call, ValidationError, AuthorizationError, NotFoundError
from app.db.models_scheduling import Availability, ScheduleAssignment
from app.db.upsert import upsert
from app.services.identity_directory import get_employee

logger = logging.getLogger(__name__)


def check_week(week) -> int:
    if week is None or week == "":
        raise ValidationError("week is required")
    if isinstance(week, bool) or not isinstance(week, int) or not 1 <= week <= 52:
        raise ValidationError("week must be an integer between 1 and 52")
    return week


def find_assignment(db: Session, esin: str, week: int) -> ScheduleAssignment | None:
    return db.query(ScheduleAssignment).filter(
        ScheduleAssignment.esin == esin,
        ScheduleAssignment.week == week,
    ).first()


@service_call("update schedule")
def assign_schedule(db: Session, msin: str, role: str, esin: str, week) -> ScheduleAssignment:
    """
    Marks `esin` as scheduled for `week`, recording the confirming manager.
    Re-assigning the same week only moves `msin` to the latest manager.
    """
    if role != "manager":
        raise AuthorizationError("Only managers can update schedules")
    if not esin:
        raise ValidationError("employeeSin is required")
    week = check_week(week)
    if not get_employee(db, esin):
        raise NotFoundError("Employee not found")

    windows = db.query(Availability).filter(Availability.sin == esin).count()
    upsert(db, ScheduleAssignment, {"esin": esin, "week": week, "msin": msin, "updated_at": datetime.utcnow()},
           key=["esin", "week"])
    db.commit()
    logger.info("[schedule] %s scheduled for week %s by %s (availability rows=%s)", esin, week, msin, windows)
    return find_assignment(db, esin, week)
