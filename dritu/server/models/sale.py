# dritu/server/models/sale.py
from datetime import date
from enum import Enum
from sqlmodel import SQLModel, Field
from typing import Optional


class SaleStatus(str, Enum):
    paid = "paid"
    pending = "pending"
    cancelled = "cancelled"


class SaleBase(SQLModel):
    name: str
    stage: str = ""
    value: float = Field(default=0.0, ge=0)   # rupees
    status: SaleStatus = SaleStatus.pending
    sale_date: Optional[date] = None


class Sale(SaleBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
