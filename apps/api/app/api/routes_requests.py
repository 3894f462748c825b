# apps/api/app/api/routes_requests.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from app.db.models_requests import AuthorizationState
from app.deps import get_db, get_current_user, RolesAllowed
from app.schemas.auth import CurrentUser
from app.schemas.requests import RequestIn, RequestOut, AuthorizeIn
from app.services import request_service

router = APIRouter(tags=["requests"])

@router.post("/add-request", status_code=201)
def add_request(body: RequestIn, db: Session = Depends(get_db),
                user: CurrentUser = Depends(RolesAllowed("employee"))):
    r = request_service.create_request(db, user.sin, body.week, body.day, body.type)
    return {"message": "Request created successfully and manager notified",
            "request": RequestOut.model_validate(r)}

@router.patch("/authorize-request/{request_id}")
def authorize_request(body: AuthorizeIn, request_id: int = Path(...), db: Session = Depends(get_db),
                      user: CurrentUser = Depends(RolesAllowed("manager"))):
    r = request_service.authorize_request(db, user.sin, request_id, body.authorized)
    return {"message": f"Request {r.authorized.value} successfully",
            "request": RequestOut.model_validate(r)}

@router.get("/requests", response_model=List[RequestOut])
def list_requests(state: Optional[AuthorizationState] = None, db: Session = Depends(get_db),
                  user: CurrentUser = Depends(get_current_user)):
    return request_service.list_requests(db, user.sin, user.role, state)
