# apps/api/app/api/routes_notifications.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.deps import get_db, get_current_user, RolesAllowed
from app.schemas.auth import CurrentUser
from app.schemas.requests import NotificationOut
from app.services.request_service import list_notifications, mark_notification_read

router = APIRouter(prefix="/notifications", tags=["notifications"])

@router.get("/manager", response_model=List[NotificationOut])
def manager_notifications(db: Session = Depends(get_db), user: CurrentUser = Depends(RolesAllowed("manager"))):
    return list_notifications(db, user.sin, "manager")

@router.get("/employee", response_model=List[NotificationOut])
def employee_notifications(db: Session = Depends(get_db), user: CurrentUser = Depends(RolesAllowed("employee"))):
    return list_notifications(db, user.sin, "employee")

@router.patch("/{notification_id}/read")
def mark_read(notification_id: int, db: Session = Depends(get_db), user: CurrentUser = Depends(get_current_user)):
    mark_notification_read(db, notification_id, user.sin)
    return {"message": "Notification marked as read"}
