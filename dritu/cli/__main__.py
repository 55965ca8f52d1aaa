# dritu/cli/__main__.py
import sys, json
from pathlib import Path

from sqlmodel import Session

from dritu.core.totals import compute_totals
from dritu.server.db.session import engine, init_db
from dritu.services.local_storage import import_local_storage
from dritu.services.quotation_document import build_context_from_quotation, render_quotation_html
from dritu.services.quotation_service import serialize_line
from dritu.services.seed import seed_database
from dritu.services.spreadsheets import export_workbook, import_products

USAGE = """Usage:
  python -m dritu.cli totals <lines.json>
  python -m dritu.cli render <quotation.json> [--out=out.html]
  python -m dritu.cli import <snapshot.json>
  python -m dritu.cli import-products <products.csv|products.xlsx>
  python -m dritu.cli export <out.xlsx>
  python -m dritu.cli seed

Examples:
  python -m dritu.cli totals examples/lines.json
  python -m dritu.cli render examples/quotation.json --out=quotation.html
"""

def _load_json(p: str):
    try:
        return json.loads(Path(p).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        print(f"Error reading JSON '{p}': {e}", file=sys.stderr)
        sys.exit(2)

def _lines_of(data):
    if isinstance(data, dict):
        return data.get("lines") or []
    return data

def _priced_quotation(data: dict) -> dict:
    """A quotation dict with line tax/total and totals recomputed from its lines."""
    lines = [serialize_line(l) for l in _lines_of(data)]
    totals = compute_totals(lines)
    return {
        **data,
        "lines": lines,
        "subtotal": totals.subtotal,
        "gst_total": totals.tax_total,
        "grand_total": totals.grand_total,
    }

def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print(USAGE, file=sys.stderr); sys.exit(1)

    cmd = argv[0].lower()
    args = [a for a in argv[1:] if not a.startswith("--")]
    out_path = None
    for arg in argv[1:]:
        if arg.startswith("--out="):
            out_path = arg.split("=", 1)[1]

    if cmd == "totals" and args:
        totals = compute_totals(_lines_of(_load_json(args[0])))
        print(json.dumps(totals.as_dict(), indent=2))
        return

    if cmd == "render" and args:
        data = _load_json(args[0])
        if not isinstance(data, dict):
            print("Quotation JSON must be an object", file=sys.stderr); sys.exit(2)
        html = render_quotation_html(build_context_from_quotation(_priced_quotation(data)))
        if out_path:
            Path(out_path).write_text(html, encoding="utf-8")
        else:
            sys.stdout.write(html)
        return

    if cmd in ("import", "import-products", "export", "seed"):
        init_db()
        with Session(engine) as session:
            if cmd == "seed":
                print(json.dumps(seed_database(session)))
                return
            if not args:
                print(USAGE, file=sys.stderr); sys.exit(1)
            if cmd == "import":
                try:
                    result = import_local_storage(_load_json(args[0]), session)
                except ValueError as e:
                    print(f"Import failed: {e}", file=sys.stderr); sys.exit(2)
                print(json.dumps(result, indent=2))
            elif cmd == "import-products":
                try:
                    n = import_products(Path(args[0]), session)
                except (OSError, ValueError) as e:
                    print(f"Import failed: {e}", file=sys.stderr); sys.exit(2)
                print(f"Imported {n} product(s)")
            else:
                Path(args[0]).write_bytes(export_workbook(session))
                print(f"Wrote {args[0]}")
        return

    print(USAGE, file=sys.stderr); sys.exit(1)

if __name__ == "__main__":
    main()
