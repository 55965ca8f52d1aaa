# dritu/server/models/company.py
from enum import Enum
from sqlmodel import SQLModel, Field
from typing import Optional


class CompanyType(str, Enum):
    client = "client"
    manufacturer = "manufacturer"


class CompanyBase(SQLModel):
    name: str
    type: CompanyType = CompanyType.client
    contact_person: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    gst_number: str = ""


class Company(CompanyBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
