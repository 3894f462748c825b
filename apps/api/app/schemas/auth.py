from pydantic import BaseModel, EmailStr
from typing import Literal

Role = Literal["manager", "employee"]

class LoginIn(BaseModel):
    email: EmailStr
    password: str

class UserBrief(BaseModel):
    name: str
    role: Role

class TokenOut(BaseModel):
    message: str = "Authentication successful"
    user: UserBrief
    token: str
    token_type: str = "bearer"

class CurrentUser(BaseModel):
    """Authenticated subject as resolved by the identity directory."""
    sin: str
    role: Role
    name: str
    departmentid: str | None = None
    msin: str | None = None  # employees only
