# dritu/core/currency.py
"""
Display formatting for rupee amounts and dates (en-IN conventions):
  206500     -> "2,06,500.00"
  1234567.5  -> "12,34,567.50"
  2025-05-15 -> "15 May 2025"
"""

from datetime import date, datetime
from typing import Any, List, Optional, Union

from dritu.core.totals import round_currency

RUPEE = "₹"


def _group_indian(int_str: str) -> str:
    """Last three digits, then groups of two from the right."""
    s = "".join(ch for ch in int_str if ch.isdigit())
    if len(s) <= 3:
        return s
    head, tail = s[:-3], s[-3:]
    parts: List[str] = []
    while head:
        parts.append(head[-2:])
        head = head[:-2]
    return ",".join(reversed(parts)) + "," + tail


def format_inr(value: Any, *, symbol: bool = False) -> str:
    rounded = round_currency(value)
    sign = "-" if rounded < 0 else ""
    int_part, dec_part = "{:.2f}".format(abs(rounded)).split(".")
    prefix = RUPEE if symbol else ""
    return "{}{}{}.{}".format(sign, prefix, _group_indian(int_part), dec_part)


def format_display_date(value: Optional[Union[date, datetime, str]]) -> str:
    if value is None or value == "":
        return ""
    if isinstance(value, str):
        try:
            value = date.fromisoformat(value[:10])
        except ValueError:
            return value
    return "{} {}".format(value.day, value.strftime("%b %Y"))
