from datetime import date
from pydantic import BaseModel, Field
from typing import List, Optional

from dritu.server.models import QuotationStatus

DEFAULT_VALIDITY = "30 days from the date of quotation"
DEFAULT_DELIVERY_TIME = "2-3 weeks after order confirmation"
DEFAULT_WARRANTY = "1 year standard warranty"
DEFAULT_PAYMENT_TERMS = "100% advance payment"


class TermsConditions(BaseModel):
    validity: str = DEFAULT_VALIDITY
    delivery_time: str = DEFAULT_DELIVERY_TIME
    warranty: str = DEFAULT_WARRANTY
    payment_terms: str = DEFAULT_PAYMENT_TERMS


class QuotationLineIn(BaseModel):
    """One product picked in the quotation builder."""
    product_id: int
    quantity: int = Field(default=1, ge=1)
    tax_rate: Optional[float] = Field(default=None, ge=0, le=100)   # None -> product gst_rate


class QuotationLineUpdate(BaseModel):
    quantity: Optional[int] = Field(default=None, ge=1)
    tax_rate: Optional[float] = Field(default=None, ge=0, le=100)


class QuotationDraftIn(BaseModel):
    lines: List[QuotationLineIn]


class QuotationCreate(BaseModel):
    client_id: Optional[int] = None
    lines: List[QuotationLineIn] = []
    terms: TermsConditions = TermsConditions()


class QuotationUpdate(BaseModel):
    status: Optional[QuotationStatus] = None
    terms: Optional[TermsConditions] = None
    valid_until: Optional[date] = None


class QuotationLineOut(BaseModel):
    id: Optional[int] = None
    product_id: Optional[int] = None
    name: str
    make: str = ""
    model: str = ""
    specification: str = ""
    hsn_code: str = ""
    unit_price: float
    quantity: int
    tax_rate: float
    line_tax: float
    line_total: float


class QuotationTotalsOut(BaseModel):
    subtotal: float = 0.0
    gst_total: float = 0.0
    grand_total: float = 0.0


class QuotationDraftOut(QuotationTotalsOut):
    lines: List[QuotationLineOut]


class QuotationOut(QuotationTotalsOut):
    id: int
    reference_id: str
    quote_date: date
    valid_until: date
    client_id: Optional[int] = None
    client_name: str = ""
    client_company: str = ""
    status: QuotationStatus
    terms: TermsConditions
    lines: List[QuotationLineOut]
