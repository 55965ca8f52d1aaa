import json

import pytest
from sqlmodel import select

from dritu.server.models import Client, Product, Quotation, QuotationLine, Sale, Tender
from dritu.services.local_storage import (
    camel_to_snake,
    import_local_storage,
    map_product,
    map_quotation_line,
    map_sale,
)
from dritu.services.quotation_service import serialize_quotation


SNAPSHOT = {
    "dritu-enterprise-products": json.dumps([
        {"id": 1, "name": "Laptop", "make": "Dell", "model": "XPS 13", "specification": "i7",
         "hsnCode": "8471300", "price": 85000, "gst": 15300, "totalPrice": 100300},
    ]),
    "dritu-enterprise-clients": [
        {"id": 7, "name": "Dr. Rahul Sharma", "institution": "City Hospital", "drProfile": "Doctor",
         "jobRole": "Decision Maker", "createdAt": "2025-05-01"},
    ],
    "dritu-enterprise-tenders": [
        {"id": 3, "reference": "TND-1", "title": "Imaging", "client": "City Hospital",
         "submissionDate": "2025-06-01", "status": "Won", "securityDeposit": 5000},
    ],
    "dritu-enterprise-quotations": [
        {"id": 11, "referenceId": "QT-2025-001", "date": "2025-05-15", "validUntil": "2025-06-14",
         "clientId": 7, "clientName": "Dr. Rahul Sharma", "clientCompany": "City Hospital",
         "status": "sent",
         "products": [{"id": 1, "name": "Laptop", "price": 170000, "quantity": 2, "gst": 30600, "totalPrice": 200600}],
         "termsConditions": {"validity": "30 days", "deliveryTime": "2 weeks", "warranty": "1 year", "paymentTerms": "Advance"}},
    ],
    "some-other-app": "[]",
}


def test_camel_to_snake():
    assert camel_to_snake("securityReturnDate") == "security_return_date"
    assert camel_to_snake("name") == "name"


def test_map_product_recovers_rate():
    d = map_product({"name": "P", "price": 1000, "gst": 50})
    assert d["gst_rate"] == 5
    assert map_product({"name": "P", "price": 1000})["gst_rate"] == 18


def test_map_quotation_line_unscales_price():
    d = map_quotation_line({"name": "Laptop", "price": 170000, "quantity": 2, "gst": 30600, "totalPrice": 200600})
    assert d["unit_price"] == pytest.approx(85000)
    assert d["quantity"] == 2
    assert d["tax_rate"] == pytest.approx(18)


def test_map_quotation_line_without_totals():
    d = map_quotation_line({"name": "X", "price": 100})
    assert d["unit_price"] == 100
    assert d["quantity"] == 1
    assert d["tax_rate"] == 18


def test_map_sale_parses_display_values():
    d = map_sale({"name": "S", "value": "₹25,000", "date": "12 Jun 2025", "status": "completed"})
    assert d["value"] == 25000
    assert d["sale_date"].isoformat() == "2025-06-12"


def test_import_snapshot(session):
    result = import_local_storage(SNAPSHOT, session)
    assert result["skipped"] == ["some-other-app"]
    assert result["imported"] == {
        "dritu-enterprise-products": 1,
        "dritu-enterprise-clients": 1,
        "dritu-enterprise-tenders": 1,
        "dritu-enterprise-quotations": 1,
    }

    product = session.exec(select(Product)).one()
    assert product.gst == 15300
    client = session.exec(select(Client)).one()
    tender = session.exec(select(Tender)).one()
    assert tender.security_deposit == 5000
    assert tender.submission_date.isoformat() == "2025-06-01"

    q = session.exec(select(Quotation)).one()
    assert q.reference_id == "QT-2025-001"
    assert q.client_id == client.id
    assert q.delivery_time == "2 weeks"
    line = session.exec(select(QuotationLine)).one()
    assert line.product_id == product.id

    data = serialize_quotation(q, session)
    assert data["grand_total"] == pytest.approx(200600)


def test_reference_collision_gets_new_id(session):
    import_local_storage({"dritu-enterprise-quotations": SNAPSHOT["dritu-enterprise-quotations"]}, session)
    import_local_storage({"dritu-enterprise-quotations": SNAPSHOT["dritu-enterprise-quotations"]}, session)
    refs = sorted(q.reference_id for q in session.exec(select(Quotation)).all())
    assert refs == ["QT-2025-001", "QT-2025-002"]
    assert all(q.client_id is None for q in session.exec(select(Quotation)).all())


def test_sales_import(session):
    import_local_storage({"dritu-enterprise-sales": [{"name": "S", "value": "₹100", "date": "1 Jan 2025"}]}, session)
    assert session.exec(select(Sale)).one().value == 100


def test_bad_json_raises(session):
    with pytest.raises(ValueError):
        import_local_storage({"dritu-enterprise-products": "{not json"}, session)


def test_import_endpoint(client):
    r = client.post("/import/local-storage", json={"dritu-enterprise-products": [{"name": "A", "price": 10}]})
    assert r.status_code == 200
    assert r.json()["imported"] == {"dritu-enterprise-products": 1}
    assert client.get("/products").json()[0]["gst_rate"] == 18

    r = client.post("/import/local-storage", json={"dritu-enterprise-products": {"not": "a list"}})
    assert r.status_code == 400


def test_failing_snapshot_leaves_nothing_behind(session):
    snapshot = {
        "dritu-enterprise-products": [{"id": 1, "name": "Laptop", "price": 85000}],
        "dritu-enterprise-clients": [
            {"id": 1, "name": "A", "drProfile": "Doctor"},
            {"id": 2, "name": "B", "drProfile": "Wizard"},
        ],
    }
    with pytest.raises(ValueError):
        import_local_storage(snapshot, session)
    assert session.exec(select(Client)).all() == []
    assert session.exec(select(Product)).all() == []


def test_failing_snapshot_endpoint_is_400_and_atomic(client):
    r = client.post("/import/local-storage", json={
        "dritu-enterprise-clients": [{"name": "A"}, {"name": "B", "drProfile": "Wizard"}],
    })
    assert r.status_code == 400
    assert client.get("/clients").json() == []


def test_malformed_quotation_fields_fall_back(session):
    import_local_storage({
        "dritu-enterprise-quotations": [{
            "referenceId": "QT-2025-010",
            "date": "2025-05-15",
            "clientId": [7],
            "status": {"value": "sent"},
            "termsConditions": "30 days",
            "products": [{"id": {"x": 1}, "name": "Laptop", "price": 100}],
        }],
    }, session)
    q = session.exec(select(Quotation)).one()
    assert q.client_id is None
    assert q.status == "draft"
    assert q.validity == ""
    line = session.exec(select(QuotationLine)).one()
    assert line.product_id is None
    assert line.unit_price == 100
