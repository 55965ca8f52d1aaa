"""
Quotation totals engine.

Basic idea:
- Every line item carries unit_price, quantity and tax_rate (GST percent).
- line_tax   = unit_price * quantity * tax_rate / 100
- line_total = unit_price * quantity + line_tax
- subtotal = sum(unit_price * quantity), tax_total = sum(line_tax),
  grand_total = subtotal + tax_total

The module is standalone and works on lists of dicts or objects, e.g. the
quotation lines coming from the database or a draft payload.

Numbers are never rejected: NaN, infinite, negative or unparsable values are
coerced to 0 (quantity to 1). Full float precision is kept; use
round_currency() for display only.
"""

import math
from dataclasses import asdict, dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, Iterable


@dataclass(frozen=True)
class LineAmounts:
    tax: float
    total: float


@dataclass(frozen=True)
class QuotationTotals:
    subtotal: float = 0.0
    tax_total: float = 0.0
    grand_total: float = 0.0

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


def coerce_amount(value: Any) -> float:
    """
    Money or percentage input -> non-negative finite float, else 0.0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        num = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(num) or math.isinf(num) or num < 0:
        return 0.0
    return num


def coerce_quantity(value: Any) -> int:
    """
    Quantity input -> integer >= 1. Anything invalid becomes 1.
    """
    if value is None or isinstance(value, bool):
        return 1
    try:
        num = float(value)
    except (TypeError, ValueError):
        return 1
    if math.isnan(num) or math.isinf(num):
        return 1
    qty = int(num)
    return qty if qty >= 1 else 1


def compute_line(unit_price: Any, quantity: Any, tax_rate: Any) -> LineAmounts:
    price = coerce_amount(unit_price)
    qty = coerce_quantity(quantity)
    rate = coerce_amount(tax_rate)

    base = price * qty
    tax = base * rate / 100
    return LineAmounts(tax=tax, total=base + tax)


def _field(item: Any, *names: str) -> Any:
    """Read the first present field from a mapping or an object."""
    for name in names:
        if isinstance(item, dict):
            if item.get(name) is not None:
                return item[name]
        else:
            value = getattr(item, name, None)
            if value is not None:
                return value
    return None


def compute_totals(line_items: Iterable[Any]) -> QuotationTotals:
    """
    Aggregates subtotal, tax total and grand total over line items.

    Accepted item shapes:
      - {"unit_price": ..., "quantity": ..., "tax_rate": ...}
      - {"price": ..., "quantity": ..., "tax_rate": ...}
      - any object with unit_price/quantity/tax_rate attributes

    Empty input gives all-zero totals.
    """
    subtotal = 0.0
    tax_total = 0.0

    for item in line_items or []:
        price = coerce_amount(_field(item, "unit_price", "price"))
        qty = coerce_quantity(_field(item, "quantity", "qty"))
        amounts = compute_line(price, qty, _field(item, "tax_rate", "gst_rate"))

        subtotal += price * qty
        tax_total += amounts.tax

    return QuotationTotals(
        subtotal=subtotal,
        tax_total=tax_total,
        grand_total=subtotal + tax_total,
    )


def round_currency(value: Any) -> float:
    """Half-up rounding to paise, for display."""
    try:
        num = Decimal(str(float(value)))
    except (TypeError, ValueError):
        return 0.0
    if not num.is_finite():
        return 0.0
    try:
        return float(num.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
    except InvalidOperation:
        # more digits than the decimal context holds
        return float(num)
