# apps/api/app/services/request_service.py
from __future__ import annotations
import logging
from datetime import datetime
from typing import Dict, Optional

from sqlalchemy.orm import Session

from app.core.errors import service_call, ValidationError, NotFoundError, ConflictError
from app.db.models_requests import Request, Notification, AuthorizationState, RecipientRole
from app.services.identity_directory import manager_of

logger = logging.getLogger(__name__)

# The UI parses these; keep the wording literal.
NEW_REQUEST_TEMPLATE = "New request from employee {employee} for {type}"
DECISION_TEMPLATE = "Your request for {type} has been {decision}"

TYPE_MAX_LEN = 64  # request.type column width


def render_template(tpl: str, ctx: Dict[str, str]) -> str:
    out = tpl
    for k, v in ctx.items():
        out = out.replace("{" + k + "}", str(v))
    return out


def _positive_id(value, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f"{field} must be a positive integer")
    return value


def _notify(db: Session, to_sin: str, to_role: RecipientRole, request_id: int, message: str) -> Notification:
    n = Notification(to_sin=to_sin, to_role=to_role, request_id=request_id, message=message, is_read=False)
    db.add(n)
    return n


@service_call("add request")
def create_request(db: Session, esin: str, week, day, type_: Optional[str]) -> Request:
    if week is None or day is None or not (type_ or "").strip():
        raise ValidationError("Week, day, and type are required.")
    if isinstance(week, bool) or not isinstance(week, int) or not 1 <= week <= 52:
        raise ValidationError("week must be an integer between 1 and 52")
    if isinstance(day, bool) or not isinstance(day, int) or not 1 <= day <= 7:
        raise ValidationError("day must be an integer between 1 and 7")
    type_ = type_.strip()
    if len(type_) > TYPE_MAX_LEN:
        raise ValidationError(f"type must be at most {TYPE_MAX_LEN} characters")

    msin = manager_of(db, esin)
    if not msin:
        # unresolved employee is a client problem on this endpoint
        raise NotFoundError("Employee SIN not found", status_code=400)

    r = Request(week=week, day=day, type=type_, fromsin=esin, tosin=msin,
                authorized=AuthorizationState.pending)
    db.add(r)
    db.flush()  # id for the notification
    _notify(db, msin, RecipientRole.manager, r.id,
            render_template(NEW_REQUEST_TEMPLATE, {"employee": esin, "type": type_}))
    db.commit()
    db.refresh(r)
    logger.info("[request] #%s %s -> %s (%s)", r.id, esin, msin, type_)
    return r


@service_call("authorize request")
def authorize_request(db: Session, msin: str, request_id, authorized) -> Request:
    """
    pending -> approved | rejected, once. The update is conditional on the
    request being addressed to `msin` and still pending.
    """
    request_id = _positive_id(request_id, "request id")
    if not isinstance(authorized, bool):
        raise ValidationError("authorized must be a boolean")
    state = AuthorizationState.approved if authorized else AuthorizationState.rejected

    updated = (
        db.query(Request)
        .filter(
            Request.id == request_id,
            Request.tosin == msin,
            Request.authorized == AuthorizationState.pending,
        )
        .update({Request.authorized: state, Request.decided_at: datetime.utcnow()}, synchronize_session=False)
    )
    if updated == 0:
        r = db.query(Request).filter(Request.id == request_id, Request.tosin == msin).first()
        if r is None:
            raise NotFoundError("Request not found or not authorized to update")
        raise ConflictError(f"Request has already been {r.authorized.value}")

    r = db.get(Request, request_id)
    db.refresh(r)
    _notify(db, r.fromsin, RecipientRole.employee, r.id,
            render_template(DECISION_TEMPLATE, {"type": r.type, "decision": state.value}))
    db.commit()
    db.refresh(r)
    logger.info("[request] #%s %s by %s", r.id, state.value, msin)
    return r


@service_call("fetch requests")
def list_requests(db: Session, sin: str, role: str, state: Optional[AuthorizationState] = None) -> list[Request]:
    q = db.query(Request)
    q = q.filter(Request.tosin == sin) if role == "manager" else q.filter(Request.fromsin == sin)
    if state:
        q = q.filter(Request.authorized == state)
    return q.order_by(Request.created_at.desc(), Request.id.desc()).all()


@service_call("fetch notifications")
def list_notifications(db: Session, sin: str, role: str) -> list[Notification]:
    return (
        db.query(Notification)
        .filter(Notification.to_sin == sin, Notification.to_role == RecipientRole(role))
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .all()
    )


@service_call("update notification")
def mark_notification_read(db: Session, notification_id, sin: str) -> None:
    """Already-read and foreign notifications are reported as not found."""
    notification_id = _positive_id(notification_id, "notification id")
    updated = (
        db.query(Notification)
        .filter(
            Notification.id == notification_id,
            Notification.to_sin == sin,
            Notification.is_read == False,
        )
        .update({Notification.is_read: True}, synchronize_session=False)
    )
    if updated == 0:
        raise NotFoundError("Notification not found or already read")
    db.commit()
