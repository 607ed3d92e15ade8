"""
Tests for Row Builder and Sales Cross-Check
"""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from audit_models import LineItem, Row
from extractor.row_builder import (
    build_row,
    build_rows,
    reconcile_total_sales,
    round_half_up,
)


@pytest.mark.parametrize("value, expected", [
    (2.5, 3),
    (2.4, 2),
    (0.5, 1),
    (7, 7),
])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_missing_counts_default_to_zero():
    row = build_row(LineItem(brand_name="ROYAL STAG", size_ml=750, closing=6.0))
    assert row == Row(brand_name="ROYAL STAG", size_ml=750, closing=6)
    assert row.rate is None
    assert row.sales_amount is None


def test_counts_rounded_money_untouched():
    item = LineItem(
        brand_name="BEER", size_ml=650,
        opening=9.5, received=2, total=11.5, others=0,
        closing=5.4, sales_qty=6, rate=120.5, sales_amount=723.25,
    )
    row = build_row(item)
    assert (row.opening, row.total, row.closing) == (10, 12, 5)
    assert isinstance(row.opening, int)
    assert row.rate == 120.5
    assert row.sales_amount == 723.25


def test_build_rows_keeps_order_and_length():
    items = [LineItem(brand_name=name) for name in ("A1", "B2", "C3")]
    rows = build_rows(items)
    assert [r.brand_name for r in rows] == ["A1", "B2", "C3"]


def _items(*amounts):
    return [LineItem(brand_name=f"BRAND {i}", sales_amount=a) for i, a in enumerate(amounts)]


def test_declared_total_wins_over_row_sum():
    assert reconcile_total_sales(50000.0, _items(40000, 8000)) == 50000.0


def test_row_sum_used_without_declared_total():
    assert reconcile_total_sales(None, _items(40000, 8000, None)) == 48000


def test_zero_row_sum_gives_no_total():
    assert reconcile_total_sales(None, _items(None, 0)) is None
    assert reconcile_total_sales(None, []) is None


def test_declared_total_kept_when_rows_have_no_amounts():
    assert reconcile_total_sales(1200.0, _items(None)) == 1200.0
