# apps/api/app/api/routes_availability.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.deps import get_db, get_current_user, RolesAllowed
from app.schemas.auth import CurrentUser
from app.schemas.scheduling import AvailabilityIn, AvailabilityOut
from app.services.availability_service import set_availability, list_availability

router = APIRouter(prefix="/availability", tags=["availability"])

@router.post("", response_model=AvailabilityOut)
def submit_availability(body: AvailabilityIn, db: Session = Depends(get_db),
                        user: CurrentUser = Depends(RolesAllowed("employee"))):
    """Replaces the caller's window for that weekday."""
    return set_availability(db, user.sin, body.weekday, body.emp_start, body.emp_end)

@router.get("", response_model=List[AvailabilityOut])
def get_availability(
    weekday: Optional[str] = Query(None),
    sin: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    return list_availability(db, user.role, weekday=weekday, sin=sin)
