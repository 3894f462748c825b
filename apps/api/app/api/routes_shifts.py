# apps/api/app/api/routes_shifts.py
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pytz import timezone
from sqlalchemy.orm import Session

from app.core.config import settings
from app.deps import get_db, RolesAllowed
from app.schemas.auth import CurrentUser
from app.schemas.scheduling import ShiftIn, ShiftKeyIn, ShiftOut, DepartmentShiftsOut
from app.services import shift_service

router = APIRouter(tags=["shifts"])

def _current_month() -> int:
    return datetime.now(timezone(settings.TZ)).month

@router.post("/shift", status_code=201, response_model=ShiftOut)
def create_shift(body: ShiftIn, db: Session = Depends(get_db),
                 user: CurrentUser = Depends(RolesAllowed("manager"))):
    return shift_service.create_shift(db, user.sin, body.day, body.week, body.month, body.esin, body.length)

@router.put("/shift", response_model=ShiftOut)
def update_shift(body: ShiftIn, db: Session = Depends(get_db),
                 user: CurrentUser = Depends(RolesAllowed("manager"))):
    return shift_service.update_shift(db, user.sin, body.day, body.week, body.month, body.esin, body.length)

@router.delete("/shift")
def delete_shift(body: ShiftKeyIn, db: Session = Depends(get_db),
                 user: CurrentUser = Depends(RolesAllowed("manager"))):
    shift_service.delete_shift(db, user.sin, body.day, body.week, body.month, body.esin)
    return {"message": "Shift deleted successfully"}

@router.get("/shifts", response_model=List[ShiftOut])
def my_shifts(month: Optional[int] = Query(None, ge=1, le=12), db: Session = Depends(get_db),
              user: CurrentUser = Depends(RolesAllowed("employee"))):
    return shift_service.list_shifts_for_employee(db, user.sin, month or _current_month())

@router.get("/shifts/department", response_model=DepartmentShiftsOut)
def department_shifts(
    week: Optional[int] = Query(None, ge=1, le=52),
    month: Optional[int] = Query(None, ge=1, le=12),
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(RolesAllowed("manager")),
):
    return {"shifts": shift_service.list_shifts_for_department(db, user.sin, week=week, month=month)}
