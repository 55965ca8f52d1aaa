# dritu/services/spreadsheets.py
from __future__ import annotations

import io
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd
from openpyxl.styles import Font
from sqlmodel import Session, select

from dritu.server.entities import ENTITIES, ENTITIES_BY_KEY
from dritu.server.models import Quotation
from dritu.server.repository import Repository
from dritu.services.quotation_service import serialize_quotation

logger = logging.getLogger(__name__)

HEADER_FONT = Font(bold=True)

QUOTATION_COLUMNS = [
    "reference_id", "quote_date", "valid_until", "client_name", "client_company",
    "status", "lines", "subtotal", "gst_total", "grand_total",
]

# Column headings accepted for product sheets (lower-cased) -> field
PRODUCT_COLUMNS = {
    "name": "name",
    "product": "name",
    "make": "make",
    "model": "model",
    "specification": "specification",
    "hsn code": "hsn_code",
    "hsn_code": "hsn_code",
    "hsncode": "hsn_code",
    "price": "price",
    "gst rate": "gst_rate",
    "gst_rate": "gst_rate",
    "gst %": "gst_rate",
}


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    return value


def _quotation_rows(session: Session) -> List[Dict[str, Any]]:
    rows: List[Dict[str, Any]] = []
    for q in session.exec(select(Quotation).order_by(Quotation.id)).all():
        data = serialize_quotation(q, session)
        rows.append(
            {
                "reference_id": data["reference_id"],
                "quote_date": data["quote_date"],
                "valid_until": data["valid_until"],
                "client_name": data["client_name"],
                "client_company": data["client_company"],
                "status": _plain(data["status"]),
                "lines": len(data["lines"]),
                "subtotal": data["subtotal"],
                "gst_total": data["gst_total"],
                "grand_total": data["grand_total"],
            }
        )
    return rows


def export_workbook(session: Session) -> bytes:
    """
    One sheet per entity plus a quotations sheet with computed totals.
    Returns the .xlsx file content.
    """
    sheets: Dict[str, pd.DataFrame] = {}
    for entity in ENTITIES:
        columns = list(entity.model.model_fields)
        records = [
            {c: _plain(getattr(obj, c)) for c in columns}
            for obj in Repository(session, entity.model).all()
        ]
        sheets[entity.key] = pd.DataFrame(records, columns=columns)
    sheets["quotations"] = pd.DataFrame(_quotation_rows(session), columns=QUOTATION_COLUMNS)

    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        for name, df in sheets.items():
            df.to_excel(writer, sheet_name=name[:31], index=False)
            ws = writer.sheets[name[:31]]
            for cell in ws[1]:
                cell.font = HEADER_FONT
    return buf.getvalue()


def read_product_sheet(path: Path) -> List[Dict[str, Any]]:
    """
    Reads a product list from .csv / .xlsx. Headings are matched loosely
    (see PRODUCT_COLUMNS); rows without a name are dropped.
    """
    path = Path(path)
    if path.suffix.lower() in (".xlsx", ".xlsm"):
        df = pd.read_excel(path, dtype=str, engine="openpyxl")
    else:
        df = pd.read_csv(path, dtype=str)

    df.columns = [str(c).strip().lower() for c in df.columns]
    df = df.rename(columns={c: PRODUCT_COLUMNS[c] for c in df.columns if c in PRODUCT_COLUMNS})
    keep = [c for c in dict.fromkeys(PRODUCT_COLUMNS.values()) if c in df.columns]
    if "name" not in keep:
        raise ValueError(f"{path}: no product name column")

    df = df[keep].fillna("")
    df = df[df["name"].str.strip() != ""]

    records: List[Dict[str, Any]] = []
    for row in df.to_dict(orient="records"):
        rec = {k: str(v).strip() for k, v in row.items()}
        rec["price"] = pd.to_numeric(rec.get("price", ""), errors="coerce")
        if "gst_rate" in rec:
            rate = pd.to_numeric(rec["gst_rate"].rstrip("%"), errors="coerce")
            rec["gst_rate"] = None if pd.isna(rate) else float(rate)
        rec["price"] = 0.0 if pd.isna(rec["price"]) else float(rec["price"])
        records.append(rec)
    return records


def import_products(path: Path, session: Session) -> int:
    entity = ENTITIES_BY_KEY["products"]
    repo = Repository(session, entity.model)
    records = read_product_sheet(path)
    try:
        for rec in records:
            repo.create(entity.prepare_data(rec), commit=False)
        session.commit()
    except Exception:
        session.rollback()
        raise
    logger.info("Imported %d product(s) from %s", len(records), path)
    return len(records)
