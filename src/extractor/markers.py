"""
Daily Sheet Vocabulary
======================
Every tunable word list the extractor relies on lives here, so new OCR
artifacts or header spellings can be added without touching parsing code.
config/sheet_config.yaml may override any of these (see
DailySheetExtractor._load_config).

Column layouts
--------------
Keyed by numeric-token count (capped at 8).  Each entry lists
(field, offset-from-end) pairs: offset 1 is the last token on the line.
The right edge (rate, sales amount) is the most reliably recognised part of
a row, so mapping is anchored there.
"""

from typing import Dict, Tuple


# ─── Row-level noise ──────────────────────────────────────────────────────────

NOISE_TOKENS: Tuple[str, ...] = ("Q", "P", "N")

HEADER_FRAGMENTS: Tuple[str, ...] = (
    r'Daily\s*Sheet',
    r'\bSl\s*\.?\s*No\b',
    r'Brand\s*Name.*O\s*\.?\s*B',
    r'Name\s+of\s+the\s+shop',
)

# ─── Table terminators ────────────────────────────────────────────────────────

# Anywhere in the line
SUMMARY_MARKERS: Tuple[str, ...] = (
    r'Opening\s*Balance',
    r'Office\s*Cash',
    r'Expendit',
    r'\bBalance\b',
    r'Total\s*Sales',
)

# Only at the start of the line
FOOTER_MARKERS: Tuple[str, ...] = (
    r'Total\b',
    r'Grand\b',
    r'Signature\b',
)

# ─── Table header ─────────────────────────────────────────────────────────────

STRICT_HEADER_PARTS: Tuple[str, ...] = (
    r'Brand\s*Name',
    r'\bO\s*\.?\s*B\b',
    r'Received',
    r'\bC\s*\.?\s*B\b',
    r'Sales',
)

LOOSE_HEADER = (
    r'Brand\s*Name.*?O\.?\s*B.*?Received.*?Total.*?C\.?\s*B'
    r'.*?Sales.*?Sales\s*Amount'
)

# ─── Bottle sizes (ml) ────────────────────────────────────────────────────────

BOTTLE_SIZES_ML: Tuple[int, ...] = (
    180, 200, 275, 300, 330, 375, 500, 650,
    700, 720, 750, 900, 1000, 1500, 1800, 2000,
)

DEFAULT_SIZE_ML = 750

MIN_NUMERIC_COLUMNS = 5

# ─── Column mapping ───────────────────────────────────────────────────────────

COLUMN_LAYOUTS: Dict[int, Tuple[Tuple[str, int], ...]] = {
    8: (
        ("sales_amount", 1),
        ("rate",         2),
        ("sales_qty",    3),
        ("closing",      4),
        ("others",       5),
        ("total",        6),
        ("received",     7),
        ("opening",      8),
    ),
    7: (
        ("rate",      1),
        ("sales_qty", 2),
        ("closing",   3),
        ("others",    4),
        ("total",     5),
        ("received",  6),
        ("opening",   7),
    ),
    6: (
        ("sales_qty", 1),
        ("closing",   2),
        ("others",    3),
        ("total",     4),
        ("received",  5),
        ("opening",   6),
    ),
    # Weakest branch: the five tokens read left to right
    5: (
        ("closing",  1),
        ("others",   2),
        ("total",    3),
        ("received", 4),
        ("opening",  5),
    ),
}

MAX_NUMERIC_COLUMNS = max(COLUMN_LAYOUTS)
