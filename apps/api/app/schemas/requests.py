# apps/api/app/schemas/requests.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool

from app.db.models_requests import AuthorizationState, RecipientRole


class RequestIn(BaseModel):
    week: int
    day: int
    type: str = Field(max_length=64)

class RequestOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    week: int
    day: int
    type: str
    fromsin: str
    tosin: str
    authorized: AuthorizationState
    created_at: datetime
    decided_at: Optional[datetime] = None

class AuthorizeIn(BaseModel):
    authorized: StrictBool


class NotificationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    to_sin: str
    to_role: RecipientRole
    request_id: Optional[int] = None
    message: str
    created_at: datetime
    is_read: bool
