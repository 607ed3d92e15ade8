"""
Row Builder + Sales Cross-Check
===============================
LineItem → Row projection and reconciliation of the declared total sales
against the sum of per-row sales amounts.
"""

import math
from typing import Iterable, List, Optional, Sequence

from loguru import logger

from audit_models import LineItem, Row


COUNT_FIELDS = ("opening", "received", "total", "others", "closing", "sales_qty")


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _count(value: Optional[float]) -> int:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return 0
    return round_half_up(value)


def build_row(item: LineItem) -> Row:
    """
    Default every missing stock count to 0 and round counts to integers.
    Rate and sales amount are money: left as-is, None stays None.
    """
    counts = {name: _count(getattr(item, name)) for name in COUNT_FIELDS}
    return Row(
        brand_name=item.brand_name,
        size_ml=item.size_ml,
        rate=item.rate,
        sales_amount=item.sales_amount,
        **counts,
    )


def build_rows(items: Iterable[LineItem]) -> List[Row]:
    """One Row per LineItem, same order; nothing is dropped here."""
    return [build_row(item) for item in items]


def computed_total_sales(items: Sequence[LineItem]) -> float:
    return sum(item.sales_amount or 0 for item in items)


def reconcile_total_sales(
    declared: Optional[float],
    items: Sequence[LineItem],
) -> Optional[float]:
    """
    Printed total wins; otherwise the row sum when it is positive.

    Returns None when neither source gives a usable figure.
    """
    computed = computed_total_sales(items)

    if declared is not None:
        if computed > 0 and abs(declared - computed) > 0.5:
            logger.warning(
                f"[CrossCheck] declared total_sales={declared} differs from "
                f"row sum={computed}; keeping declared value"
            )
        return declared

    if computed > 0:
        logger.info(f"[CrossCheck] no declared total_sales, using row sum={computed}")
        return computed
    return None
