# dritu/services/local_storage.py
"""
Import of a browser local-storage snapshot into the database.

The old dashboard kept every screen's list as a JSON array under a fixed
key ("dritu-enterprise-products", ...). A snapshot is a mapping of those
keys to either the decoded list or the raw JSON string, e.g. produced by

    JSON.stringify(Object.fromEntries(Object.entries(localStorage)))

Records come in the browser's camelCase shape and are mapped onto the typed
entities by the explicit functions below. Browser ids are not kept; client
and product ids referenced by quotations are remapped to the new rows.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import date, datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

from sqlmodel import Session, select

from dritu.core.totals import coerce_amount, coerce_quantity, round_currency
from dritu.server.entities import ENTITIES, STORAGE_KEY_PREFIX, EntityConfig
from dritu.server.models import (
    Client,
    Quotation,
    QuotationLine,
    QuotationStatus,
)
from dritu.server.repository import Repository
from dritu.server.settings.config import settings
from dritu.services.quotation_service import next_reference_id

logger = logging.getLogger(__name__)

PRODUCTS_KEY = STORAGE_KEY_PREFIX + "products"
COMPANIES_KEY = STORAGE_KEY_PREFIX + "companies"
CLIENTS_KEY = STORAGE_KEY_PREFIX + "clients"
EMPLOYEES_KEY = STORAGE_KEY_PREFIX + "employees"
SALES_KEY = STORAGE_KEY_PREFIX + "sales"
QUOTATIONS_KEY = STORAGE_KEY_PREFIX + "quotations"

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


# ==============================
# HELPERS
# ==============================

def _decode(raw: Any) -> List[Dict[str, Any]]:
    if isinstance(raw, str):
        raw = json.loads(raw) if raw.strip() else []
    if not isinstance(raw, list):
        raise ValueError("local-storage value must be a JSON array")
    return [r for r in raw if isinstance(r, dict)]


def _parse_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def camel_to_snake(name: str) -> str:
    return _CAMEL.sub("_", name).lower()


# ==============================
# MAPPERS (browser record -> entity fields)
# ==============================

def map_product(rec: Dict[str, Any]) -> Dict[str, Any]:
    price = coerce_amount(rec.get("price"))
    gst = coerce_amount(rec.get("gst"))
    rate = round_currency(gst * 100 / price) if price > 0 and gst > 0 else settings.gst_rate
    return {
        "name": _text(rec.get("name")),
        "make": _text(rec.get("make")),
        "model": _text(rec.get("model")),
        "specification": _text(rec.get("specification")),
        "hsn_code": _text(rec.get("hsnCode")),
        "price": price,
        "gst_rate": rate,
    }


def map_company(rec: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "name": _text(rec.get("name")),
        "type": rec.get("type") or "client",
        "contact_person": _text(rec.get("contactPerson")),
        "email": _text(rec.get("email")),
        "phone": _text(rec.get("phone")),
        "address": _text(rec.get("address")),
        "gst_number": _text(rec.get("gstNumber")),
    }


def map_client(rec: Dict[str, Any]) -> Dict[str, Any]:
    data = {
        "name": _text(rec.get("name")),
        "institution": _text(rec.get("institution")),
        "department": _text(rec.get("department")),
        "phone": _text(rec.get("phone")),
        "email": _text(rec.get("email")),
        "message": _text(rec.get("message")),
    }
    if rec.get("drProfile"):
        data["dr_profile"] = rec["drProfile"]
    if rec.get("jobRole"):
        data["job_role"] = rec["jobRole"]
    created = _parse_date(rec.get("createdAt"))
    if created:
        data["created_at"] = created
    return data


def map_employee(rec: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "name": _text(rec.get("name")),
        "email": _text(rec.get("email")),
        "phone": _text(rec.get("phone")),
        "role": rec.get("role") or "employee",
        "joining_date": _parse_date(rec.get("joiningDate")),
        "status": rec.get("status") or "active",
        "department": _text(rec.get("department")),
    }


def map_sale(rec: Dict[str, Any]) -> Dict[str, Any]:
    """Sales kept value as a display string ("₹25000") and dates like "12 Jun 2025"."""
    raw_value = re.sub(r"[^0-9.]", "", _text(rec.get("value")))
    sale_date = None
    for fmt in ("%d %b %Y", "%d %B %Y", "%Y-%m-%d"):
        try:
            sale_date = datetime.strptime(_text(rec.get("date")), fmt).date()
            break
        except ValueError:
            continue
    return {
        "name": _text(rec.get("name")),
        "stage": _text(rec.get("stage")),
        "value": coerce_amount(raw_value),
        "status": rec.get("status") or "pending",
        "sale_date": sale_date,
    }


def map_quotation_line(item: Dict[str, Any]) -> Dict[str, Any]:
    """
    The browser stored gst and totalPrice already multiplied by quantity,
    while price was scaled or not depending on how the line was edited.
    totalPrice - gst is the line base in both cases.
    """
    qty = coerce_quantity(item.get("quantity"))
    gst = coerce_amount(item.get("gst"))
    total = coerce_amount(item.get("totalPrice"))

    base = total - gst
    if total > 0 and base > 0:
        unit_price = base / qty
        rate = gst * 100 / base
    else:
        unit_price = coerce_amount(item.get("price"))
        rate = settings.gst_rate

    return {
        "name": _text(item.get("name")),
        "make": _text(item.get("make")),
        "model": _text(item.get("model")),
        "specification": _text(item.get("specification")),
        "hsn_code": _text(item.get("hsnCode")),
        "unit_price": unit_price,
        "quantity": qty,
        "tax_rate": rate,
    }


def _generic_mapper(entity: EntityConfig) -> Callable[[Dict[str, Any]], Dict[str, Any]]:
    fields = set(entity.payload.model_fields)

    def _map(rec: Dict[str, Any]) -> Dict[str, Any]:
        out = {}
        for key, value in rec.items():
            name = camel_to_snake(key)
            if name in fields:
                out[name] = value
        return out

    return _map


# ==============================
# IMPORT
# ==============================

def _key(value: Any) -> Any:
    """Browser ids are numbers or strings; anything else cannot be looked up."""
    return value if isinstance(value, (int, str)) and not isinstance(value, bool) else None


def _import_records(
    session: Session,
    entity: EntityConfig,
    records: List[Dict[str, Any]],
    mapper: Callable[[Dict[str, Any]], Dict[str, Any]],
) -> Dict[Any, int]:
    """Stages the records (no commit), returns {browser id: new id}."""
    repo = Repository(session, entity.model)
    id_map: Dict[Any, int] = {}
    for rec in records:
        obj = repo.create(entity.prepare_data(mapper(rec)), commit=False)
        if _key(rec.get("id")) is not None:
            id_map[rec["id"]] = obj.id
    return id_map


def _import_quotations(
    session: Session,
    records: List[Dict[str, Any]],
    client_ids: Dict[Any, int],
    product_ids: Dict[Any, int],
) -> int:
    created = 0
    for rec in records:
        quote_date = _parse_date(rec.get("date")) or date.today()
        valid_until = _parse_date(rec.get("validUntil")) or quote_date + timedelta(
            days=settings.quotation_validity_days
        )

        reference_id = _text(rec.get("referenceId"))
        taken = session.exec(select(Quotation).where(Quotation.reference_id == reference_id)).first()
        if not reference_id or taken is not None:
            reference_id = next_reference_id(session, quote_date)

        status = rec.get("status")
        if not isinstance(status, str) or status not in {s.value for s in QuotationStatus}:
            status = QuotationStatus.draft.value
        terms = rec.get("termsConditions")
        if not isinstance(terms, dict):
            terms = {}
        client_id = client_ids.get(_key(rec.get("clientId")))

        q = Quotation(
            reference_id=reference_id,
            quote_date=quote_date,
            valid_until=valid_until,
            client_id=client_id if client_id and session.get(Client, client_id) else None,
            client_name=_text(rec.get("clientName")),
            client_company=_text(rec.get("clientCompany")),
            validity=_text(terms.get("validity")),
            delivery_time=_text(terms.get("deliveryTime")),
            warranty=_text(terms.get("warranty")),
            payment_terms=_text(terms.get("paymentTerms")),
            status=QuotationStatus(status),
        )
        session.add(q)
        session.flush()

        items = rec.get("products")
        for position, item in enumerate(items if isinstance(items, list) else []):
            if not isinstance(item, dict):
                continue
            session.add(
                QuotationLine(
                    quotation_id=q.id,
                    product_id=product_ids.get(_key(item.get("id"))),
                    position=position,
                    **map_quotation_line(item),
                )
            )
        session.flush()
        created += 1
    return created


_EXPLICIT_MAPPERS: Dict[str, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    PRODUCTS_KEY: map_product,
    COMPANIES_KEY: map_company,
    CLIENTS_KEY: map_client,
    EMPLOYEES_KEY: map_employee,
    SALES_KEY: map_sale,
}


def import_local_storage(snapshot: Dict[str, Any], session: Session) -> Dict[str, Any]:
    """
    Imports every known key of the snapshot in one transaction; a bad record
    rolls the whole import back. Returns
      {"imported": {storage_key: count}, "skipped": [unknown keys]}
    """
    by_storage_key = {e.storage_key: e for e in ENTITIES}
    known = set(by_storage_key) | {QUOTATIONS_KEY}

    skipped = sorted(k for k in snapshot if k not in known)
    for key in skipped:
        logger.warning("Unknown local-storage key %r skipped", key)

    imported: Dict[str, int] = {}
    id_maps: Dict[str, Dict[Any, int]] = {}

    try:
        for key, entity in by_storage_key.items():
            if key not in snapshot:
                continue
            records = _decode(snapshot[key])
            mapper = _EXPLICIT_MAPPERS.get(key) or _generic_mapper(entity)
            id_maps[key] = _import_records(session, entity, records, mapper)
            imported[key] = len(records)

        if QUOTATIONS_KEY in snapshot:
            imported[QUOTATIONS_KEY] = _import_quotations(
                session,
                _decode(snapshot[QUOTATIONS_KEY]),
                id_maps.get(CLIENTS_KEY, {}),
                id_maps.get(PRODUCTS_KEY, {}),
            )
        session.commit()
    except Exception:
        session.rollback()
        logger.warning("Local-storage import rolled back")
        raise

    logger.info("Local-storage import: %s", imported)
    return {"imported": imported, "skipped": skipped}
