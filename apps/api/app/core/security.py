# apps/api/app/core/security.py
# bcrypt_sha256 pre-hashes with SHA256 before bcrypt, so the 72 byte limit does not apply.
# Plain "bcrypt" stays in the list so older hashes still verify.

from __future__ import annotations
from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError
from passlib.context import CryptContext

from app.core.config import settings
from app.core.errors import AuthenticationError

pwd_context = CryptContext(
    schemes=["bcrypt_sha256", "bcrypt"],
    deprecated="auto",
)

MAX_PASSWORD_LEN = 4096


def get_password_hash(password: str) -> str:
    if not isinstance(password, str):
        password = str(password or "")
    if len(password) > MAX_PASSWORD_LEN:
        password = password[:MAX_PASSWORD_LEN]
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Unknown hash formats verify as False so the caller answers 401
    instead of bubbling a 500.
    """
    try:
        return pwd_context.verify(plain_password or "", hashed_password or "")
    except (ValueError, TypeError):
        return False


def create_access_token(sub: str, role: str, name: str | None = None, expires_minutes: int | None = None) -> str:
    minutes = expires_minutes if expires_minutes is not None else settings.ACCESS_TOKEN_EXPIRE_MINUTES
    payload = {
        "sub": sub,
        "role": role,
        "name": name,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=minutes),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGO)


def decode_access_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGO])
    except JWTError:
        raise AuthenticationError("Invalid or expired token.", status_code=403)
    if not payload.get("sub") or payload.get("role") not in ("manager", "employee"):
        raise AuthenticationError("Invalid token payload", status_code=403)
    return payload
