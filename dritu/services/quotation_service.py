"""
Quotation builder.

Flow (same as the quotation screen):
  - pick a client and one or more products with quantities
  - every line snapshots the product (name, make, model, price, GST rate)
  - line tax/total and quotation totals come from core.totals, at read time
  - lines can be added, re-quantified or removed afterwards

Totals are never persisted; serialize_quotation() recomputes them from the
current lines every time.
"""

import logging
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from sqlmodel import Session, col, select

from dritu.core.exceptions import RecordNotFoundError, ValidationError
from dritu.core.totals import coerce_amount, coerce_quantity, compute_line, compute_totals
from dritu.server.models import Client, Product, Quotation, QuotationLine
from dritu.server.repository import Repository
from dritu.server.schemas.quotation import (
    QuotationCreate,
    QuotationLineIn,
    QuotationLineUpdate,
    QuotationUpdate,
    TermsConditions,
)
from dritu.server.settings.config import settings

logger = logging.getLogger(__name__)


# ==============================
# HELPERS
# ==============================

def _line_payload(
    product: Product,
    quantity: int,
    tax_rate: Optional[float],
) -> Dict[str, Any]:
    """Snapshot of a product as a quotation line (no id / quotation_id yet)."""
    rate = product.gst_rate if tax_rate is None else tax_rate
    return {
        "product_id": product.id,
        "name": product.name,
        "make": product.make,
        "model": product.model,
        "specification": product.specification,
        "hsn_code": product.hsn_code,
        "unit_price": float(product.price),
        "quantity": quantity,
        "tax_rate": float(rate),
    }


def serialize_line(line: Any) -> Dict[str, Any]:
    d = line if isinstance(line, dict) else line.model_dump()
    amounts = compute_line(d.get("unit_price"), d.get("quantity"), d.get("tax_rate"))
    return {
        "id": d.get("id"),
        "product_id": d.get("product_id"),
        "name": d.get("name") or "",
        "make": d.get("make") or "",
        "model": d.get("model") or "",
        "specification": d.get("specification") or "",
        "hsn_code": d.get("hsn_code") or "",
        "unit_price": coerce_amount(d.get("unit_price")),
        "quantity": coerce_quantity(d.get("quantity")),
        "tax_rate": coerce_amount(d.get("tax_rate")),
        "line_tax": amounts.tax,
        "line_total": amounts.total,
    }


def _totals_dict(lines: List[Any]) -> Dict[str, float]:
    totals = compute_totals(lines)
    return {
        "subtotal": totals.subtotal,
        "gst_total": totals.tax_total,
        "grand_total": totals.grand_total,
    }


def _resolve_lines(lines: List[QuotationLineIn], products: Repository[Product]) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for item in lines:
        product = products.get(item.product_id)
        out.append(_line_payload(product, item.quantity, item.tax_rate))
    return out


def get_lines(session: Session, quotation_id: int) -> List[QuotationLine]:
    stmt = (
        select(QuotationLine)
        .where(QuotationLine.quotation_id == quotation_id)
        .order_by(QuotationLine.position, QuotationLine.id)
    )
    return list(session.exec(stmt).all())


def next_reference_id(session: Session, today: Optional[date] = None) -> str:
    """
    QT-<year>-<NNN>, numbered per year. Skips numbers that are already taken
    (a deleted quotation must not make the next one collide).
    """
    today = today or date.today()
    prefix = f"{settings.quotation_prefix}-{today.year}-"
    existing = set(
        session.exec(
            select(Quotation.reference_id).where(col(Quotation.reference_id).startswith(prefix))
        ).all()
    )
    n = len(existing) + 1
    while f"{prefix}{n:03d}" in existing:
        n += 1
    return f"{prefix}{n:03d}"


def serialize_quotation(q: Quotation, session: Session) -> Dict[str, Any]:
    lines = get_lines(session, q.id)
    return {
        "id": q.id,
        "reference_id": q.reference_id,
        "quote_date": q.quote_date,
        "valid_until": q.valid_until,
        "client_id": q.client_id,
        "client_name": q.client_name,
        "client_company": q.client_company,
        "status": q.status,
        "terms": {
            "validity": q.validity,
            "delivery_time": q.delivery_time,
            "warranty": q.warranty,
            "payment_terms": q.payment_terms,
        },
        "lines": [serialize_line(l) for l in lines],
        **_totals_dict(lines),
    }


def get_quotation(session: Session, quotation_id: int) -> Quotation:
    q = session.get(Quotation, quotation_id)
    if q is None:
        raise RecordNotFoundError("Quotation", quotation_id)
    return q


def _get_line(session: Session, quotation_id: int, line_id: int) -> QuotationLine:
    line = session.get(QuotationLine, line_id)
    if line is None or line.quotation_id != quotation_id:
        raise RecordNotFoundError("QuotationLine", line_id)
    return line


# ==============================
# DRAFT
# ==============================

def draft_quotation(*, lines: List[QuotationLineIn], products: Repository[Product]) -> Dict[str, Any]:
    """Price a list of picked products without saving anything."""
    resolved = _resolve_lines(lines, products)
    return {
        "lines": [serialize_line(l) for l in resolved],
        **_totals_dict(resolved),
    }


# ==============================
# CREATE / UPDATE / DELETE
# ==============================

def create_quotation(*, payload: QuotationCreate, session: Session, today: Optional[date] = None) -> Quotation:
    if payload.client_id is None or not payload.lines:
        raise ValidationError("Please select a client and at least one product")

    client = session.get(Client, payload.client_id)
    if client is None:
        raise ValidationError("Selected client not found", field="client_id")

    products = Repository(session, Product)
    resolved = _resolve_lines(payload.lines, products)

    today = today or date.today()
    terms = payload.terms or TermsConditions()
    quotation = Quotation(
        reference_id=next_reference_id(session, today),
        quote_date=today,
        valid_until=today + timedelta(days=settings.quotation_validity_days),
        client_id=client.id,
        client_name=client.name,
        client_company=client.institution,
        validity=terms.validity,
        delivery_time=terms.delivery_time,
        warranty=terms.warranty,
        payment_terms=terms.payment_terms,
    )
    session.add(quotation)
    session.commit()
    session.refresh(quotation)

    for position, data in enumerate(resolved):
        session.add(QuotationLine(quotation_id=quotation.id, position=position, **data))
    session.commit()

    logger.info("[Quotation] Created %s with %d line(s)", quotation.reference_id, len(resolved))
    return quotation


def update_quotation(*, quotation_id: int, payload: QuotationUpdate, session: Session) -> Quotation:
    q = get_quotation(session, quotation_id)

    if payload.status is not None:
        q.status = payload.status
    if payload.valid_until is not None:
        q.valid_until = payload.valid_until
    if payload.terms is not None:
        q.validity = payload.terms.validity
        q.delivery_time = payload.terms.delivery_time
        q.warranty = payload.terms.warranty
        q.payment_terms = payload.terms.payment_terms

    session.add(q)
    session.commit()
    session.refresh(q)
    logger.info("[Quotation] Updated %s", q.reference_id)
    return q


def delete_quotation(*, quotation_id: int, session: Session) -> None:
    q = get_quotation(session, quotation_id)
    for line in get_lines(session, quotation_id):
        session.delete(line)
    session.delete(q)
    session.commit()
    logger.info("[Quotation] Deleted %s", q.reference_id)


# ==============================
# LINES
# ==============================

def add_line(*, quotation_id: int, payload: QuotationLineIn, session: Session) -> Quotation:
    q = get_quotation(session, quotation_id)
    product = Repository(session, Product).get(payload.product_id)

    existing = get_lines(session, quotation_id)
    position = max((l.position for l in existing), default=-1) + 1
    session.add(
        QuotationLine(
            quotation_id=q.id,
            position=position,
            **_line_payload(product, payload.quantity, payload.tax_rate),
        )
    )
    session.commit()
    return q


def update_line(*, quotation_id: int, line_id: int, payload: QuotationLineUpdate, session: Session) -> Quotation:
    q = get_quotation(session, quotation_id)
    line = _get_line(session, quotation_id, line_id)

    if payload.quantity is not None:
        line.quantity = payload.quantity
    if payload.tax_rate is not None:
        line.tax_rate = payload.tax_rate

    session.add(line)
    session.commit()
    return q


def remove_line(*, quotation_id: int, line_id: int, session: Session) -> Quotation:
    q = get_quotation(session, quotation_id)
    line = _get_line(session, quotation_id, line_id)
    session.delete(line)
    session.commit()
    return q


def list_quotations(*, session: Session, skip: int = 0, limit: int = 50, status: Optional[str] = None) -> List[Dict[str, Any]]:
    stmt = select(Quotation)
    if status:
        stmt = stmt.where(Quotation.status == status)
    rows = session.exec(stmt.order_by(Quotation.id).offset(skip).limit(limit)).all()
    return [serialize_quotation(q, session) for q in rows]
