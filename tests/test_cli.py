import json

from dritu.cli.__main__ import main


def test_totals_command(tmp_path, capsys):
    path = tmp_path / "lines.json"
    path.write_text(json.dumps([
        {"unit_price": 85000, "quantity": 1, "tax_rate": 18},
        {"unit_price": 90000, "quantity": 1, "tax_rate": 18},
    ]), encoding="utf-8")
    main(["totals", str(path)])
    out = json.loads(capsys.readouterr().out)
    assert out == {"subtotal": 175000.0, "tax_total": 31500.0, "grand_total": 206500.0}


def test_render_command(tmp_path):
    path = tmp_path / "q.json"
    path.write_text(json.dumps({
        "reference_id": "QT-2025-007",
        "client_name": "Dr. Rahul Sharma",
        "lines": [{"name": "Laptop", "unit_price": 85000, "quantity": 2, "tax_rate": 18}],
    }), encoding="utf-8")
    out = tmp_path / "q.html"
    main(["render", str(path), f"--out={out}"])
    html = out.read_text(encoding="utf-8")
    assert "QT-2025-007" in html
    assert "2,00,600.00" in html


def test_render_command_with_malformed_numbers(tmp_path):
    path = tmp_path / "q.json"
    path.write_text(json.dumps({
        "reference_id": "QT-2025-008",
        "lines": [
            {"name": "Broken", "unit_price": "abc", "quantity": "2.5", "tax_rate": -5},
            {"name": "Cable", "unit_price": 100, "quantity": -3, "tax_rate": 18},
        ],
    }), encoding="utf-8")
    out = tmp_path / "q.html"
    main(["render", str(path), f"--out={out}"])
    html = out.read_text(encoding="utf-8")
    assert "QT-2025-008" in html
    assert "118.00" in html


def test_serialized_line_matches_its_amounts():
    from dritu.services.quotation_service import serialize_line

    line = serialize_line({"name": "X", "unit_price": -100, "quantity": -3, "tax_rate": -5})
    assert (line["unit_price"], line["quantity"], line["tax_rate"]) == (0.0, 1, 0.0)
    assert line["line_total"] == 0.0

    line = serialize_line({"name": "Y", "unit_price": "250", "quantity": "2.5", "tax_rate": "12"})
    assert (line["unit_price"], line["quantity"], line["tax_rate"]) == (250.0, 2, 12.0)
    assert line["line_total"] == line["unit_price"] * line["quantity"] + line["line_tax"]
