# apps/api/app/db/models_requests.py
from datetime import datetime
import enum

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, Enum, ForeignKey

from app.db.base import Base


class AuthorizationState(str, enum.Enum):
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class RecipientRole(str, enum.Enum):
    manager = "manager"
    employee = "employee"


class Request(Base):
    __tablename__ = "request"

    id = Column(Integer, primary_key=True, autoincrement=True)
    week = Column(Integer, nullable=False)
    day = Column(Integer, nullable=False)
    type = Column(String(64), nullable=False)        # vacation/sick/swap/... free-form
    fromsin = Column(String(32), ForeignKey("employee.sin"), nullable=False, index=True)
    tosin = Column(String(32), ForeignKey("manager.sin"), nullable=False, index=True)  # msin at creation time
    authorized = Column(Enum(AuthorizationState), nullable=False, default=AuthorizationState.pending)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    decided_at = Column(DateTime, nullable=True)


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    to_sin = Column(String(32), nullable=False, index=True)
    to_role = Column(Enum(RecipientRole), nullable=False)
    request_id = Column(Integer, ForeignKey("request.id"), nullable=True)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    is_read = Column(Boolean, nullable=False, default=False)
