from typing import Any, Dict

from dritu.core.totals import coerce_amount, compute_line, round_currency
from dritu.server.settings.config import settings


def apply_product_gst(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Sets gst and total_price on a product payload from price and gst_rate.

    Missing gst_rate falls back to the configured GST_RATE (18 % by default).
    Stored values are rounded to paise, the same as the product screen shows.
    """
    out = dict(data)
    price = coerce_amount(out.get("price"))
    rate = out.get("gst_rate")
    rate = settings.gst_rate if rate is None else coerce_amount(rate)

    amounts = compute_line(price, 1, rate)
    out["price"] = price
    out["gst_rate"] = rate
    out["gst"] = round_currency(amounts.tax)
    out["total_price"] = round_currency(amounts.total)
    return out
