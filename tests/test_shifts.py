import pytest

from app.api.routes_shifts import _current_month
from app.db.models_scheduling import Shift


def _shift(day=1, week=3, month=1, esin="E1", length=8):
    return {"day": day, "week": week, "month": month, "esin": esin, "length": length}


@pytest.fixture
def scheduled(client, org, as_e1, as_m1):
    """E1: Monday 9-17, scheduled for week 3."""
    client.post("/availability", json={"weekday": "Monday", "emp_start": 9.0, "emp_end": 17.0}, headers=as_e1)
    client.post("/schedule", json={"employeeSin": "E1", "week": 3}, headers=as_m1)
    return org


def test_shift_fitting_availability_is_created(client, scheduled, as_m1):
    r = client.post("/shift", json=_shift(length=8), headers=as_m1)
    assert r.status_code == 201
    assert r.json() == {"esin": "E1", "msin": "M1", "day": 1, "week": 3, "month": 1, "length": 8.0}


def test_shift_exceeding_availability_is_rejected(client, scheduled, as_m1):
    r = client.post("/shift", json=_shift(length=10), headers=as_m1)
    assert r.status_code == 400
    assert "exceeds" in r.json()["detail"]
    assert scheduled.query(Shift).count() == 0


def test_availability_checked_before_duplicate_key(client, scheduled, as_m1):
    assert client.post("/shift", json=_shift(length=8), headers=as_m1).status_code == 201
    r = client.post("/shift", json=_shift(length=10), headers=as_m1)
    assert r.status_code == 400


def test_unscheduled_week_is_rejected(client, scheduled, as_m1):
    r = client.post("/shift", json=_shift(week=4, length=1), headers=as_m1)
    assert r.status_code == 400
    assert "not scheduled" in r.json()["detail"]


def test_no_availability_for_weekday_means_unconstrained(client, scheduled, as_m1):
    # day 2 == Tuesday, E1 has no Tuesday window
    r = client.post("/shift", json=_shift(day=2, length=14), headers=as_m1)
    assert r.status_code == 201


def test_duplicate_key_is_a_conflict(client, scheduled, as_m1):
    assert client.post("/shift", json=_shift(length=4), headers=as_m1).status_code == 201
    r = client.post("/shift", json=_shift(length=5), headers=as_m1)
    assert r.status_code == 409
    assert scheduled.query(Shift).count() == 1


@pytest.mark.parametrize("field,value", [
    ("day", 0), ("day", 8), ("week", 0), ("week", 53),
    ("month", 0), ("month", 13), ("length", 0), ("length", -2),
])
def test_out_of_range_fields_are_named(client, scheduled, as_m1, field, value):
    r = client.post("/shift", json=_shift(**{field: value}), headers=as_m1)
    assert r.status_code == 400
    assert field in r.json()["detail"]


@pytest.mark.parametrize("literal", ["Infinity", "-Infinity", "NaN"])
def test_non_finite_length_is_rejected(client, scheduled, as_m1, literal):
    headers = {**as_m1, "Content-Type": "application/json"}
    body = '{"day": 2, "week": 3, "month": 1, "esin": "E1", "length": %s}' % literal
    r = client.post("/shift", content=body, headers=headers)
    assert r.status_code == 400
    assert "length" in r.json()["detail"]
    assert scheduled.query(Shift).count() == 0

    client.post("/shift", json=_shift(day=2, length=4), headers=as_m1)
    r = client.put("/shift", content=body, headers=headers)
    assert r.status_code == 400
    assert scheduled.query(Shift).one().length == 4.0


def test_missing_field(client, scheduled, as_m1):
    body = _shift()
    del body["esin"]
    r = client.post("/shift", json=body, headers=as_m1)
    assert r.status_code == 400
    assert "esin" in r.json()["detail"]


def test_employee_cannot_create_shift(client, scheduled, as_e1):
    assert client.post("/shift", json=_shift(), headers=as_e1).status_code == 403


def test_update_changes_length_only(client, scheduled, as_m1):
    client.post("/shift", json=_shift(length=4), headers=as_m1)
    r = client.put("/shift", json=_shift(length=6), headers=as_m1)
    assert r.status_code == 200
    assert r.json()["length"] == 6.0
    assert scheduled.query(Shift).count() == 1


def test_update_revalidates_availability(client, scheduled, as_m1):
    client.post("/shift", json=_shift(length=4), headers=as_m1)
    r = client.put("/shift", json=_shift(length=9), headers=as_m1)
    assert r.status_code == 400


def test_update_missing_shift(client, scheduled, as_m1):
    r = client.put("/shift", json=_shift(month=2), headers=as_m1)
    assert r.status_code == 404


def test_update_from_other_department_is_forbidden(client, scheduled, as_m1, as_m2):
    client.post("/shift", json=_shift(length=4), headers=as_m1)
    r = client.put("/shift", json=_shift(length=5), headers=as_m2)
    assert r.status_code == 403


def test_delete_shift(client, scheduled, as_m1):
    client.post("/shift", json=_shift(length=4), headers=as_m1)
    key = {k: v for k, v in _shift().items() if k != "length"}
    r = client.request("DELETE", "/shift", json=key, headers=as_m1)
    assert r.status_code == 200
    assert scheduled.query(Shift).count() == 0

    again = client.request("DELETE", "/shift", json=key, headers=as_m1)
    assert again.status_code == 404


def test_delete_from_other_department_is_forbidden(client, scheduled, as_m1, as_m2):
    client.post("/shift", json=_shift(length=4), headers=as_m1)
    key = {k: v for k, v in _shift().items() if k != "length"}
    r = client.request("DELETE", "/shift", json=key, headers=as_m2)
    assert r.status_code == 403
    assert scheduled.query(Shift).count() == 1


def test_delete_missing_field(client, scheduled, as_m1):
    r = client.request("DELETE", "/shift", json={"day": 1, "week": 3, "esin": "E1"}, headers=as_m1)
    assert r.status_code == 400


def test_employee_sees_own_shifts_for_month(client, scheduled, as_m1, as_e1):
    client.post("/shift", json=_shift(day=1, month=1, length=4), headers=as_m1)
    client.post("/shift", json=_shift(day=2, month=1, length=5), headers=as_m1)
    client.post("/shift", json=_shift(day=1, month=2, length=6), headers=as_m1)

    january = client.get("/shifts", params={"month": 1}, headers=as_e1).json()
    assert sorted(s["length"] for s in january) == [4.0, 5.0]
    february = client.get("/shifts", params={"month": 2}, headers=as_e1).json()
    assert [s["length"] for s in february] == [6.0]


def test_department_shifts_are_ordered_and_named(client, org, as_m1, as_m2):
    for esin, week in (("E1", 5), ("E2", 4), ("E3", 4)):
        mgr = as_m1 if esin != "E3" else as_m2
        client.post("/schedule", json={"employeeSin": esin, "week": week}, headers=mgr)
    client.post("/shift", json=_shift(esin="E1", day=3, week=5, month=2, length=4), headers=as_m1)
    client.post("/shift", json=_shift(esin="E2", day=6, week=4, month=1, length=4), headers=as_m1)
    client.post("/shift", json=_shift(esin="E2", day=2, week=4, month=1, length=4), headers=as_m1)
    client.post("/shift", json=_shift(esin="E3", day=1, week=4, month=1, length=4), headers=as_m2)

    r = client.get("/shifts/department", headers=as_m1)
    assert r.status_code == 200
    shifts = r.json()["shifts"]
    assert [(s["name"], s["week"], s["day"]) for s in shifts] == [("Bob", 4, 2), ("Bob", 4, 6), ("Alice", 5, 3)]
    assert shifts[0]["weekday"] == "Tuesday"

    week5 = client.get("/shifts/department", params={"week": 5}, headers=as_m1).json()["shifts"]
    assert [s["esin"] for s in week5] == ["E1"]
    month1 = client.get("/shifts/department", params={"month": 1}, headers=as_m1).json()["shifts"]
    assert {s["esin"] for s in month1} == {"E2"}


def test_shifts_default_to_current_month(client, scheduled, as_m1, as_e1):
    month = _current_month()
    other = month % 12 + 1
    client.post("/shift", json=_shift(day=1, month=month, length=4), headers=as_m1)
    client.post("/shift", json=_shift(day=1, month=other, length=6), headers=as_m1)

    r = client.get("/shifts", headers=as_e1)
    assert r.status_code == 200
    assert [(s["month"], s["length"]) for s in r.json()] == [(month, 4.0)]
