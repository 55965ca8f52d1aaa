# dritu/server/models/employee.py
from datetime import date
from enum import Enum
from sqlmodel import SQLModel, Field
from typing import Optional


class EmployeeRole(str, Enum):
    admin = "admin"
    sub_admin = "sub-admin"
    employee = "employee"
    engineer = "engineer"
    salesperson = "salesperson"


class EmployeeStatus(str, Enum):
    active = "active"
    inactive = "inactive"


class EmployeeBase(SQLModel):
    name: str
    email: str = ""
    phone: str = ""
    role: EmployeeRole = EmployeeRole.employee
    joining_date: Optional[date] = None
    status: EmployeeStatus = EmployeeStatus.active
    department: str = ""


class Employee(EmployeeBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
