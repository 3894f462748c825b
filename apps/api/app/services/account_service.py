# apps/api/app/services/account_service.py
from __future__ import annotations
import logging
import math

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import service_call, ValidationError, AuthenticationError, ConflictError
from app.core.security import get_password_hash, verify_password, create_access_token
from app.models.org import Department, Manager, Employee
from app.services.identity_directory import find_by_email, get_manager

logger = logging.getLogger(__name__)


def has_managers(db: Session) -> bool:
    return db.query(Manager.sin).first() is not None


@service_call("authenticate")
def authenticate(db: Session, email: str, password: str) -> dict:
    if not email or not password:
        raise ValidationError("Email and password are required")
    found = find_by_email(db, email)
    if not found:
        raise ValidationError("Email not found in Manager or Employee records")
    role, user = found
    if not verify_password(password, user.password):
        raise AuthenticationError("Invalid password")
    token = create_access_token(sub=user.sin, role=role, name=user.name)
    logger.info("[auth] %s %s authenticated", role, user.sin)
    return {"user": {"name": user.name, "role": role}, "token": token}


@service_call("create department")
def create_department(db: Session, departmentid: str, name: str | None = None, manager_sin: str | None = None) -> Department:
    if db.get(Department, departmentid):
        raise ConflictError("Department already exists")
    d = Department(departmentid=departmentid, name=name, manager_sin=manager_sin)
    db.add(d)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Department already exists")
    db.refresh(d)
    return d


@service_call("create Manager")
def create_manager(db: Session, *, sin: str, name: str, address: str, email: str, password: str,
                   phone: str | None = None, departmentid: str | None = None) -> Manager:
    dept = None
    if departmentid:
        dept = db.get(Department, departmentid)
        if not dept:
            raise ValidationError("Invalid department ID")
    exists = db.query(Manager).filter(or_(Manager.sin == sin, Manager.email == email)).first()
    if exists:
        raise ConflictError("SIN or E-mail already exists")

    m = Manager(
        sin=sin, name=name, phone=phone, address=address, email=email,
        password=get_password_hash(password), departmentid=departmentid,
    )
    db.add(m)
    # one manager owns the department; the first one attached becomes its owner
    if dept is not None and not dept.manager_sin:
        dept.manager_sin = sin
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("SIN or E-mail already exists")
    db.refresh(m)
    logger.info("[org] manager %s created (department=%s)", sin, departmentid)
    return m


@service_call("create Employee")
def create_employee(db: Session, *, sin: str, name: str, address: str, email: str, password: str,
                    departmentid: str, msin: str, rate: float, phone: str | None = None) -> Employee:
    if rate is None or not math.isfinite(rate) or rate <= 0:
        raise ValidationError("rate must be a positive number")
    if not get_manager(db, msin):
        raise ValidationError("Invalid Manager SIN")
    if not db.get(Department, departmentid):
        raise ValidationError("Invalid department ID")
    exists = db.query(Employee).filter(or_(Employee.sin == sin, Employee.email == email)).first()
    if exists:
        raise ConflictError("SIN or E-mail already exists")

    e = Employee(
        sin=sin, name=name, phone=phone, address=address, email=email,
        password=get_password_hash(password), departmentid=departmentid, msin=msin, rate=rate,
    )
    db.add(e)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("SIN or E-mail already exists")
    db.refresh(e)
    logger.info("[org] employee %s created (manager=%s, department=%s)", sin, msin, departmentid)
    return e
