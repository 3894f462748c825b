# apps/api/app/schemas/org.py
from pydantic import BaseModel, ConfigDict, EmailStr, Field

class DepartmentIn(BaseModel):
    departmentid: str = Field(min_length=1, max_length=32)
    name: str | None = Field(None, max_length=120)

class DepartmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    departmentid: str
    name: str | None
    manager_sin: str | None

class ManagerCreateIn(BaseModel):
    sin: str = Field(min_length=1, max_length=32)
    name: str = Field(min_length=1, max_length=255)
    phone: str | None = Field(None, max_length=32)
    address: str = Field(min_length=1)
    departmentid: str | None = Field(None, max_length=32)
    email: EmailStr
    password: str = Field(min_length=1)

class EmployeeCreateIn(BaseModel):
    sin: str = Field(min_length=1, max_length=32)
    name: str = Field(min_length=1, max_length=255)
    phone: str | None = Field(None, max_length=32)
    address: str = Field(min_length=1)
    departmentid: str = Field(min_length=1, max_length=32)
    email: EmailStr
    password: str = Field(min_length=1)
    msin: str = Field(min_length=1, max_length=32)
    rate: float = Field(allow_inf_nan=False)

class PersonOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    sin: str
    name: str
    email: EmailStr
    phone: str | None = None
    departmentid: str | None = None

class EmployeeOut(PersonOut):
    msin: str
    rate: float
