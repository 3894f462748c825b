import os
import tempfile

# settings are read at import time; point them at a throwaway database first
_DB_DIR = tempfile.mkdtemp(prefix="wfs-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_DIR}/test.db"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.core.security import create_access_token
from app.db.base import Base
from app.db.session import engine, SessionLocal
from app.models.org import Department, Manager, Employee


@pytest.fixture
def db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    with TestClient(app) as c:
        yield c


def _manager(sin, dept, email):
    return Manager(sin=sin, name=f"Manager {sin}", address="1 Main St", email=email,
                   password="not-a-hash", departmentid=dept)


def _employee(sin, name, dept, msin, email):
    return Employee(sin=sin, name=name, address="2 Side St", email=email, password="not-a-hash",
                    departmentid=dept, msin=msin, rate=18.5)


@pytest.fixture
def org(db):
    """
    D1: manager M1, employees E1 (Alice) and E2 (Bob)
    D2: manager M2, employee E3 (Carol)
    """
    db.add_all([
        Department(departmentid="D1", name="Bakery", manager_sin="M1"),
        Department(departmentid="D2", name="Deli", manager_sin="M2"),
    ])
    db.add_all([_manager("M1", "D1", "m1@example.com"), _manager("M2", "D2", "m2@example.com")])
    db.add_all([
        _employee("E1", "Alice", "D1", "M1", "e1@example.com"),
        _employee("E2", "Bob", "D1", "M1", "e2@example.com"),
        _employee("E3", "Carol", "D2", "M2", "e3@example.com"),
    ])
    db.commit()
    return db


def auth(sin, role):
    return {"Authorization": f"Bearer {create_access_token(sub=sin, role=role, name=sin)}"}


@pytest.fixture
def as_m1():
    return auth("M1", "manager")


@pytest.fixture
def as_m2():
    return auth("M2", "manager")


@pytest.fixture
def as_e1():
    return auth("E1", "employee")


@pytest.fixture
def as_e3():
    return auth("E3", "employee")
