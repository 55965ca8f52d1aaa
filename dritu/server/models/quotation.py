# dritu/server/models/quotation.py
from datetime import date
from enum import Enum
from sqlmodel import SQLModel, Field
from typing import Optional


class QuotationStatus(str, Enum):
    draft = "draft"
    sent = "sent"
    accepted = "accepted"
    rejected = "rejected"


class Quotation(SQLModel, table=True):
    # subtotal / gst_total / grand_total are never stored, see services.quotation_service
    id: Optional[int] = Field(default=None, primary_key=True)
    reference_id: str = Field(index=True, unique=True)
    quote_date: date
    valid_until: date
    client_id: Optional[int] = Field(default=None, foreign_key="client.id")
    client_name: str = ""
    client_company: str = ""
    validity: str = ""
    delivery_time: str = ""
    warranty: str = ""
    payment_terms: str = ""
    status: QuotationStatus = QuotationStatus.draft


class QuotationLine(SQLModel, table=True):
    __tablename__ = "quotation_line"
    id: Optional[int] = Field(default=None, primary_key=True)
    quotation_id: int = Field(foreign_key="quotation.id", index=True)
    product_id: Optional[int] = Field(default=None, foreign_key="product.id")
    position: int = 0
    name: str
    make: str = ""
    model: str = ""
    specification: str = ""
    hsn_code: str = ""
    unit_price: float = 0.0
    quantity: int = 1
    tax_rate: float = 0.0
