# apps/api/app/api/routes_org.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.errors import AuthenticationError, AuthorizationError
from app.deps import get_db, get_optional_user, RolesAllowed
from app.schemas.auth import CurrentUser
from app.schemas.org import DepartmentIn, DepartmentOut, ManagerCreateIn, EmployeeCreateIn, PersonOut, EmployeeOut
from app.services import account_service

router = APIRouter(tags=["org"])

def _bootstrap_or_manager(
    db: Session = Depends(get_db),
    user: CurrentUser | None = Depends(get_optional_user),
) -> CurrentUser | None:
    # open until the first manager exists, manager-only afterwards
    if not account_service.has_managers(db):
        return user
    if user is None:
        raise AuthenticationError("Access denied. Token missing.")
    if user.role != "manager":
        raise AuthorizationError("Forbidden")
    return user

@router.post("/departments", status_code=201, response_model=DepartmentOut, dependencies=[Depends(_bootstrap_or_manager)])
def create_department(body: DepartmentIn, db: Session = Depends(get_db)):
    return account_service.create_department(db, body.departmentid.strip(), body.name)

@router.post("/create-manager", status_code=201, dependencies=[Depends(_bootstrap_or_manager)])
def create_manager(body: ManagerCreateIn, db: Session = Depends(get_db)):
    m = account_service.create_manager(db, **body.model_dump())
    return {"message": "Manager account created successfully", "managerId": m.sin,
            "manager": PersonOut.model_validate(m)}

@router.post("/add-employee", status_code=201)
def add_employee(body: EmployeeCreateIn, db: Session = Depends(get_db),
                 user: CurrentUser = Depends(RolesAllowed("manager"))):
    e = account_service.create_employee(db, **body.model_dump())
    return {"message": "Employee account created successfully", "employee": EmployeeOut.model_validate(e)}
