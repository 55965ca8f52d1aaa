from datetime import date

from dritu.services.quotation_document import (
    build_context_from_quotation,
    build_rows_html,
    render_quotation_html,
)


QUOTATION = {
    "reference_id": "QT-2025-001",
    "quote_date": date(2025, 5, 15),
    "valid_until": "2025-06-14",
    "client_name": "Dr. Rahul Sharma",
    "client_company": "City Hospital",
    "terms": {"validity": "30 days", "delivery_time": "2-3 weeks", "warranty": "1 year", "payment_terms": "50% advance"},
    "lines": [
        {"name": "Laptop", "make": "Dell", "model": "XPS 13", "specification": "i7",
         "unit_price": 85000, "quantity": 1, "line_tax": 15300, "line_total": 100300},
    ],
    "subtotal": 85000,
    "gst_total": 15300,
    "grand_total": 100300,
}


def test_context_formats_amounts_and_dates():
    ctx = build_context_from_quotation(QUOTATION)
    assert ctx["quote_date"] == "15 May 2025"
    assert ctx["valid_until"] == "14 Jun 2025"
    assert ctx["grand_total"] == "1,00,300.00"
    assert ctx["company_name"] == "DRITU ENTERPRISE"


def test_rows_are_escaped():
    rows = build_rows_html([{"name": "<b>X</b>", "unit_price": 1, "quantity": 1}])
    assert "&lt;b&gt;X&lt;/b&gt;" in rows
    assert "<b>X</b>" not in rows


def test_render_fills_every_placeholder():
    html = render_quotation_html(build_context_from_quotation(QUOTATION))
    assert "QT-2025-001" in html
    assert "Dell XPS 13" in html
    assert "85,000.00" in html
    assert "50% advance" in html
    assert "[[" not in html


def test_unknown_placeholders_are_removed(tmp_path):
    tpl = tmp_path / "t.html"
    tpl.write_text("<p>[[reference_id]] [[nope]]</p>", encoding="utf-8")
    assert render_quotation_html({"reference_id": "QT-1"}, template_path=tpl) == "<p>QT-1 </p>"
