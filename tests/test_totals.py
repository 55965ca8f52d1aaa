import math

import pytest

from dritu.core.totals import (
    coerce_amount,
    coerce_quantity,
    compute_line,
    compute_totals,
    round_currency,
)


def test_single_line_example():
    a = compute_line(85000, 1, 18)
    assert a.tax == pytest.approx(15300)
    assert a.total == pytest.approx(100300)


def test_two_line_quotation_example():
    t = compute_totals([
        {"unit_price": 85000, "quantity": 1, "tax_rate": 18},
        {"unit_price": 90000, "quantity": 1, "tax_rate": 18},
    ])
    assert t.subtotal == pytest.approx(175000)
    assert t.tax_total == pytest.approx(31500)
    assert t.grand_total == pytest.approx(206500)


def test_empty_list_gives_zero_totals():
    assert compute_totals([]).as_dict() == {"subtotal": 0.0, "tax_total": 0.0, "grand_total": 0.0}
    assert compute_totals(None).grand_total == 0.0


def test_doubling_quantity_doubles_line():
    one = compute_line(1200, 1, 12)
    two = compute_line(1200, 2, 12)
    assert two.tax == pytest.approx(one.tax * 2)
    assert two.total == pytest.approx(one.total * 2)


def test_zero_rate_means_no_tax():
    a = compute_line(500, 3, 0)
    assert a.tax == 0
    assert a.total == pytest.approx(1500)


def test_grand_total_is_subtotal_plus_tax():
    lines = [
        {"price": 99.99, "qty": 3, "gst_rate": 5},
        {"unit_price": 10.5, "quantity": 7, "tax_rate": 28},
        {"unit_price": 1, "quantity": 1, "tax_rate": 12.5},
    ]
    t = compute_totals(lines)
    assert t.grand_total == pytest.approx(t.subtotal + t.tax_total)
    assert t.tax_total == pytest.approx(sum(compute_line(*v).tax for v in [(99.99, 3, 5), (10.5, 7, 28), (1, 1, 12.5)]))


def test_objects_are_accepted():
    class Line:
        unit_price = 100
        quantity = 2
        tax_rate = 18

    t = compute_totals([Line()])
    assert t.subtotal == pytest.approx(200)
    assert t.tax_total == pytest.approx(36)


@pytest.mark.parametrize("raw", [None, "abc", float("nan"), float("inf"), -5, True])
def test_bad_amounts_become_zero(raw):
    assert coerce_amount(raw) == 0.0


@pytest.mark.parametrize("raw,expected", [(None, 1), ("x", 1), (0, 1), (-3, 1), (2.7, 2), ("4", 4), (float("nan"), 1)])
def test_quantity_coercion(raw, expected):
    assert coerce_quantity(raw) == expected


def test_invalid_inputs_never_raise():
    a = compute_line("not a price", None, float("nan"))
    assert a.tax == 0.0 and a.total == 0.0
    assert not math.isnan(compute_totals([{"unit_price": "x"}]).grand_total)


def test_round_currency_half_up():
    assert round_currency(2.675) == 2.68
    assert round_currency(1.005) == 1.01
    assert round_currency("bad") == 0.0


def test_round_currency_beyond_decimal_precision():
    assert round_currency(1.18e27) == pytest.approx(1.18e27)
    assert round_currency(1e300) == pytest.approx(1e300)
