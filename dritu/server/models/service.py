# dritu/server/models/service.py
from enum import Enum
from sqlalchemy import JSON, Column
from sqlmodel import SQLModel, Field
from typing import List, Optional


class WarrantyApplicable(str, Enum):
    yes = "Yes"
    no = "No"
    conditional = "Conditional"


class BillingType(str, Enum):
    chargeable = "Chargeable"
    free = "Free"
    under_warranty = "Under Warranty"


class ServiceBase(SQLModel):
    name: str
    short_name: str = ""
    category: str = ""
    warranty_applicable: WarrantyApplicable = WarrantyApplicable.no
    billing_type: BillingType = BillingType.chargeable
    linked_products: List[str] = Field(default_factory=list)


class Service(ServiceBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    linked_products: List[str] = Field(default_factory=list, sa_column=Column(JSON))
