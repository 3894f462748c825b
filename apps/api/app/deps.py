from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core.errors import AuthenticationError, AuthorizationError
from app.core.security import decode_access_token
from app.db.session import get_db
from app.schemas.auth import CurrentUser
from app.services.identity_directory import resolve_subject

def _bearer(request: Request) -> str | None:
    auth = request.headers.get("authorization")
    if auth and auth.lower().startswith("bearer "):
        return auth.split(" ", 1)[1].strip() or None
    return None

def get_current_user(request: Request, db: Session = Depends(get_db)) -> CurrentUser:
    raw = _bearer(request)
    if not raw:
        raise AuthenticationError("Access denied. Token missing.")
    payload = decode_access_token(raw)
    user = resolve_subject(db, payload["sub"], payload["role"])
    if not user:
        raise AuthenticationError("User not found", status_code=403)
    return user

def get_optional_user(request: Request, db: Session = Depends(get_db)) -> CurrentUser | None:
    if not _bearer(request):
        return None
    return get_current_user(request, db)

def RolesAllowed(*roles: str):
    def dep(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if user.role not in roles:
            raise AuthorizationError("Forbidden")
        return user
    return dep
