# apps/api/app/schemas/scheduling.py
from __future__ import annotations
from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Times come in either as decimal hours (9.5) or "HH:MM"; the service normalizes.
HourValue = Union[float, str]


class AvailabilityIn(BaseModel):
    weekday: str
    emp_start: HourValue
    emp_end: HourValue

class AvailabilityOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    sin: str
    weekday: str
    emp_start: float
    emp_end: float


class ScheduleIn(BaseModel):
    employeeSin: str
    week: int

class ScheduleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    esin: str
    week: int
    msin: str
    updated_at: Optional[datetime] = None


class ShiftKeyIn(BaseModel):
    day: int
    week: int
    month: int
    esin: str

class ShiftIn(ShiftKeyIn):
    length: float = Field(allow_inf_nan=False)

class ShiftOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    esin: str
    msin: str
    day: int
    week: int
    month: int
    length: float

class DepartmentShiftOut(ShiftOut):
    name: str
    weekday: str

class DepartmentShiftsOut(BaseModel):
    shifts: List[DepartmentShiftOut] = Field(default_factory=list)
