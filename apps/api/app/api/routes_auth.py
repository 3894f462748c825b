from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.deps import get_db, get_current_user
from app.schemas.auth import LoginIn, TokenOut, CurrentUser
from app.services.account_service import authenticate

router = APIRouter(tags=["auth"])

@router.post("/authenticate", response_model=TokenOut)
def login(body: LoginIn, db: Session = Depends(get_db)):
    return authenticate(db, body.email, body.password)

@router.get("/me", response_model=CurrentUser)
def me(user: CurrentUser = Depends(get_current_user)):
    return user
