import json

import pytest
from conftest import auth

from app.models.org import Department, Employee


def _manager_body(**over):
    body = {"sin": "M1", "name": "Dana", "address": "3 Elm", "departmentid": "D1",
            "email": "dana@example.com", "password": "s3cret"}
    body.update(over)
    return body


def _employee_body(**over):
    body = {"sin": "E5", "name": "Eve", "address": "4 Oak", "departmentid": "D1", "email": "eve@example.com",
            "password": "pw", "msin": "M1", "rate": 21.0}
    body.update(over)
    return body


def test_bootstrap_then_locked(client, db):
    assert client.post("/departments", json={"departmentid": "D1", "name": "Bakery"}).status_code == 201
    r = client.post("/create-manager", json=_manager_body())
    assert r.status_code == 201
    assert r.json()["managerId"] == "M1"
    assert db.get(Department, "D1").manager_sin == "M1"

    # a manager exists now, anonymous setup is closed
    assert client.post("/departments", json={"departmentid": "D2"}).status_code == 401
    assert client.post("/create-manager", json=_manager_body(sin="M2", email="x@example.com")).status_code == 401
    r = client.post("/departments", json={"departmentid": "D2"}, headers=auth("M1", "manager"))
    assert r.status_code == 201


def test_manager_validation(client, db):
    assert client.post("/create-manager", json=_manager_body(departmentid="NOPE")).status_code == 400
    bad = _manager_body()
    del bad["address"]
    assert client.post("/create-manager", json=bad).status_code == 400


def test_add_employee(client, org, as_m1):
    r = client.post("/add-employee", json=_employee_body(), headers=as_m1)
    assert r.status_code == 201
    assert r.json()["employee"]["msin"] == "M1"


def test_add_employee_failures(client, org, as_m1, as_e1):
    assert client.post("/add-employee", json=_employee_body(), headers=as_e1).status_code == 403
    assert client.post("/add-employee", json=_employee_body(msin="NOPE"), headers=as_m1).status_code == 400
    assert client.post("/add-employee", json=_employee_body(departmentid="NOPE"), headers=as_m1).status_code == 400
    assert client.post("/add-employee", json=_employee_body(rate=0), headers=as_m1).status_code == 400
    assert client.post("/add-employee", json=_employee_body(sin="E1"), headers=as_m1).status_code == 409
    assert client.post("/add-employee", json=_employee_body(email="e1@example.com"), headers=as_m1).status_code == 409


@pytest.mark.parametrize("field,value", [
    ("name", "x" * 256), ("phone", "1" * 33), ("departmentid", "D" * 33), ("msin", "M" * 33),
])
def test_add_employee_rejects_values_wider_than_columns(client, org, as_m1, field, value):
    r = client.post("/add-employee", json=_employee_body(**{field: value}), headers=as_m1)
    assert r.status_code == 400
    assert field in r.json()["detail"]
    assert org.query(Employee).filter_by(sin="E5").count() == 0


@pytest.mark.parametrize("literal", ["Infinity", "NaN"])
def test_add_employee_rejects_non_finite_rate(client, org, as_m1, literal):
    body = json.dumps({k: v for k, v in _employee_body().items() if k != "rate"})
    body = body[:-1] + ', "rate": %s}' % literal
    r = client.post("/add-employee", content=body, headers={**as_m1, "Content-Type": "application/json"})
    assert r.status_code == 400
    assert org.query(Employee).filter_by(sin="E5").count() == 0


def test_create_manager_rejects_long_name(client, db):
    r = client.post("/create-manager", json=_manager_body(name="x" * 256))
    assert r.status_code == 400
    assert "name" in r.json()["detail"]


def test_healthz(client):
    assert client.get("/healthz").json() == {"ok": True}
