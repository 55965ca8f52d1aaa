# dritu/server/models/tender.py
from datetime import date
from enum import Enum
from sqlmodel import SQLModel, Field
from typing import Optional


class TenderStatus(str, Enum):
    pending = "Pending"
    won = "Won"
    lost = "Lost"


class EmdStatus(str, Enum):
    pending = "Pending"
    returned = "Returned"
    forfeited = "Forfeited"


class TenderBase(SQLModel):
    reference: str = ""
    title: str
    client: str
    description: str = ""
    submission_date: date
    status: TenderStatus = TenderStatus.pending
    fee_amount: float = Field(default=0.0, ge=0)
    emd_amount: float = Field(default=0.0, ge=0)
    security_deposit: float = Field(default=0.0, ge=0)
    security_return_date: Optional[date] = None


class Tender(TenderBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)


class EmdBase(SQLModel):
    tender_reference: str
    tender_title: str = ""
    client: str = ""
    amount: float = Field(default=0.0, ge=0)
    payment_date: Optional[date] = None
    status: EmdStatus = EmdStatus.pending
    return_date: Optional[date] = None
    remarks: str = ""


class Emd(EmdBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
