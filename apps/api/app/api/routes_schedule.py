# apps/api/app/api/routes_schedule.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.deps import get_db, get_current_user
from app.schemas.auth import CurrentUser
from app.schemas.scheduling import ScheduleIn, ScheduleOut
from app.services.schedule_service import assign_schedule

router = APIRouter(prefix="/schedule", tags=["schedule"])

@router.post("", response_model=ScheduleOut)
def update_schedule(body: ScheduleIn, db: Session = Depends(get_db),
                    user: CurrentUser = Depends(get_current_user)):
    return assign_schedule(db, user.sin, user.role, body.employeeSin, body.week)
