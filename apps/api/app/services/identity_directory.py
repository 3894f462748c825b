# apps/api/app/services/identity_directory.py
from sqlalchemy.orm import Session

from app.models.org import Employee, Manager
from app.schemas.auth import CurrentUser

def get_employee(db: Session, sin: str) -> Employee | None:
    return db.get(Employee, sin) if sin else None

def get_manager(db: Session, sin: str) -> Manager | None:
    return db.get(Manager, sin) if sin else None

def manager_of(db: Session, esin: str) -> str | None:
    """msin of the employee's current manager, or None when the link is missing."""
    emp = get_employee(db, esin)
    if not emp or not emp.msin:
        return None
    return emp.msin if get_manager(db, emp.msin) else None

def department_of(db: Session, sin: str, role: str) -> str | None:
    rec = get_manager(db, sin) if role == "manager" else get_employee(db, sin)
    return rec.departmentid if rec else None

def resolve_subject(db: Session, sin: str, role: str) -> CurrentUser | None:
    if role == "manager":
        m = get_manager(db, sin)
        if not m:
            return None
        return CurrentUser(sin=m.sin, role="manager", name=m.name, departmentid=m.departmentid)
    e = get_employee(db, sin)
    if not e:
        return None
    return CurrentUser(sin=e.sin, role="employee", name=e.name, departmentid=e.departmentid, msin=e.msin)

def find_by_email(db: Session, email: str) -> tuple[str, Manager | Employee] | None:
    # managers win when the same e-mail exists in both tables
    m = db.query(Manager).filter(Manager.email == email).first()
    if m:
        return "manager", m
    e = db.query(Employee).filter(Employee.email == email).first()
    if e:
        return "employee", e
    return None
