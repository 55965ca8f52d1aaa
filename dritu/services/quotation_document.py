from __future__ import annotations

import html
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from dritu.core.currency import format_display_date, format_inr
from dritu.server.settings.config import Settings, settings as default_settings


# Project root (the directory holding templates/)
ROOT = Path(__file__).resolve().parents[2]
TEMPLATE_PATH = ROOT / "templates" / "quotation_document.html"

_PLACEHOLDER = re.compile(r"\[\[[a-zA-Z0-9_]+\]\]")


def _esc(value: Any) -> str:
    return html.escape("" if value is None else str(value))


def build_rows_html(lines: Iterable[Dict[str, Any]]) -> str:
    """
    Table rows (tbody) for the quotation lines. Each line is a serialized
    line from quotation_service.serialize_line().
    """
    html_rows: List[str] = []
    for line in lines or []:
        make_model = " ".join(p for p in (line.get("make"), line.get("model")) if p)
        row_html = (
            "<tr>"
            f"<td><strong>{_esc(line.get('name'))}</strong><br/><small>{_esc(make_model)}</small></td>"
            f"<td>{_esc(line.get('specification'))}</td>"
            f'<td class="text-right">{format_inr(line.get("unit_price"))}</td>'
            f'<td class="text-right">{_esc(line.get("quantity"))}</td>'
            f'<td class="text-right">{format_inr(line.get("line_tax"))}</td>'
            f'<td class="text-right">{format_inr(line.get("line_total"))}</td>'
            "</tr>"
        )
        html_rows.append(row_html)

    return "\n          ".join(html_rows)


def build_context_from_quotation(
    quotation: Dict[str, Any],
    *,
    company: Optional[Settings] = None,
    document_title: str = "QUOTATION",
) -> Dict[str, str]:
    """
    Context dict for the template, from a serialized quotation
    (quotation_service.serialize_quotation or the same shape loaded from JSON).
    """
    c = company or default_settings
    q = dict(quotation)
    terms = q.get("terms") or {}

    return {
        "document_title": _esc(document_title),
        "reference_id": _esc(q.get("reference_id")),
        "quote_date": _esc(format_display_date(q.get("quote_date"))),
        "valid_until": _esc(format_display_date(q.get("valid_until"))),
        "client_name": _esc(q.get("client_name")),
        "client_company": _esc(q.get("client_company")),
        "rows_html": build_rows_html(q.get("lines") or []),
        "subtotal": format_inr(q.get("subtotal")),
        "gst_total": format_inr(q.get("gst_total")),
        "grand_total": format_inr(q.get("grand_total")),
        "validity": _esc(terms.get("validity")),
        "delivery_time": _esc(terms.get("delivery_time")),
        "warranty": _esc(terms.get("warranty")),
        "payment_terms": _esc(terms.get("payment_terms")),
        "company_name": _esc(c.company_name),
        "company_address": _esc(c.company_address),
        "company_phone": _esc(c.company_phone),
        "company_email": _esc(c.company_email),
    }


def render_quotation_html(context: Dict[str, Any], template_path: Path = TEMPLATE_PATH) -> str:
    """
    Reads the HTML template and replaces every [[key]] with the context value.
    Unknown placeholders are removed.
    """
    doc = template_path.read_text(encoding="utf-8")
    for key, value in context.items():
        doc = doc.replace(f"[[{key}]]", str(value))
    return _PLACEHOLDER.sub("", doc)
