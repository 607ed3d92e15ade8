"""
Row Merger
Merges freshly extracted columns into a previously loaded row set.

Operators often re-upload a clearer scan of just one column (sales amount,
sometimes sales quantity).  Rows are matched on the normalised brand name
(trimmed, case-insensitive), optionally together with bottle size.
"""

from dataclasses import fields, replace
from typing import Dict, Iterable, List, Sequence, Tuple

from loguru import logger

from audit_models import Row
from extractor.row_builder import COUNT_FIELDS

MERGEABLE_FIELDS = tuple(
    f.name for f in fields(Row) if f.name not in ("brand_name", "size_ml")
)


def is_unset(name: str, value) -> bool:
    """None money, or a count still at the Row default of 0."""
    return value is None or (name in COUNT_FIELDS and value == 0)


def brand_key(brand_name: str) -> str:
    return (brand_name or "").strip().lower()


def row_key(row: Row, match_size: bool = False) -> Tuple:
    if match_size:
        return (brand_key(row.brand_name), row.size_ml)
    return (brand_key(row.brand_name),)


def merge_rows(
    existing: Sequence[Row],
    incoming: Iterable[Row],
    fields_to_merge: Sequence[str] = ("sales_amount",),
    match_size: bool = False,
) -> List[Row]:
    """
    Copy the selected fields from matching incoming rows.

    Args:
        existing:        Rows currently loaded (order is preserved)
        incoming:        Newly extracted rows; later duplicates win
        fields_to_merge: Row fields to take from incoming when set
                         (money not None, counts not 0)
        match_size:      Require the bottle size to match as well

    Returns:
        New list of rows; incoming rows without a match are ignored

    Raises:
        ValueError: unknown field name
    """
    unknown = [f for f in fields_to_merge if f not in MERGEABLE_FIELDS]
    if unknown:
        raise ValueError(f"Cannot merge fields {unknown}. Allowed: {list(MERGEABLE_FIELDS)}")

    lookup: Dict[Tuple, Row] = {row_key(r, match_size): r for r in incoming}

    merged: List[Row] = []
    updated = 0
    for row in existing:
        newer = lookup.get(row_key(row, match_size))
        if newer is None:
            merged.append(row)
            continue

        changes = {}
        for name in fields_to_merge:
            value = getattr(newer, name)
            if not is_unset(name, value):
                changes[name] = value

        if changes:
            updated += 1
            merged.append(replace(row, **changes))
        else:
            merged.append(row)

    logger.info(
        f"[RowMerger] merged {list(fields_to_merge)} into {updated}/{len(existing)} row(s)"
    )
    return merged
