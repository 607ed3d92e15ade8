"""
Summary Field Extractor
=======================
Pulls the audit date and the six document-level money totals out of the
normalized sheet text.

Each field owns an ordered tuple of LabelMatcher entries; the first matcher
that yields a value wins.  A missing label is not an error, the field is
simply None.

Value text accepts thousands separators, decimal points, spaces between
digit groups and the letter O standing in for 0:
  "Opening Balance : 1,2O0"   → 1200.0
  "Expenditure- 3 500.50"     → 3500.5
"""

import re
from dataclasses import dataclass
from datetime import date
from typing import Dict, Optional, Tuple

from loguru import logger


# ─── Shared compiled patterns ─────────────────────────────────────────────────

# Starts with a digit (or -digit).  O/o only counts when it is not part of a
# word, and a space only continues the number when another digit group follows.
_VALUE = (
    r'(-?\d(?:[\d,.]|[Oo](?![A-Za-z])| (?=[\dOo](?![A-Za-z])))*)'
)
_LABEL_SEPARATOR = r'\s*[:\-]?\s*'

_NUMBER = re.compile(r'-?\d+(?:\.\d+)?')

_DATE = re.compile(r'(?<!\d)(\d{1,2})[/\-](\d{1,2})[/\-](\d{2,4})(?!\d)')


@dataclass(frozen=True)
class LabelMatcher:
    """
    One label phrase for a summary field.

    label         regex for the label text itself
    not_after     optional regex; a match whose preceding text ends with it
                  is ignored (e.g. "Balance" right after "Opening")
    """
    label: str
    not_after: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(
            self, "_pattern",
            re.compile(self.label + _LABEL_SEPARATOR + _VALUE, re.IGNORECASE),
        )
        guard = None
        if self.not_after:
            guard = re.compile(r'(?:' + self.not_after + r')\s*$', re.IGNORECASE)
        object.__setattr__(self, "_guard", guard)

    def find(self, text: str) -> Optional[float]:
        for m in self._pattern.finditer(text):
            if self._guard is not None and self._guard.search(text[:m.start()]):
                continue
            value = parse_amount(m.group(1))
            if value is not None:
                return value
        return None


SUMMARY_MATCHERS: Dict[str, Tuple[LabelMatcher, ...]] = {
    "opening_balance": (
        LabelMatcher(r'Opening\s*Balance'),
    ),
    "office_cash_night": (
        LabelMatcher(r'Office\s*Cash\s*\(?\s*Night\s*\)?'),
        LabelMatcher(r'Office\s*Cash\s*Night'),
    ),
    "office_cash_sheet": (
        LabelMatcher(r'Office\s*Cash\s*\(?\s*Sheet\s*\)?'),
        LabelMatcher(r'Office\s*Cash\s*Sheet'),
    ),
    "expenditure": (
        LabelMatcher(r'Expendit\w*'),
    ),
    "balance": (
        LabelMatcher(r'\bBalance', not_after=r'Opening'),
    ),
    # Advisory only: DailySheetExtractor reconciles it against the rows
    "total_sales": (
        LabelMatcher(r'Total\s*Sales'),
        LabelMatcher(r'Sales\s*Amount\s*Total'),
    ),
}


def parse_amount(text: Optional[str]) -> Optional[float]:
    """
    Parse an OCR'd money value.

    Strips separators and spaces, reads O/o as 0, then takes the first
    signed decimal number.  Returns None when no digits remain.
    """
    if not text:
        return None
    cleaned = re.sub(r'[,\s]', '', text)
    cleaned = cleaned.replace('O', '0').replace('o', '0')
    m = _NUMBER.search(cleaned)
    if not m:
        return None
    return float(m.group(0))


def extract_audit_date(text: str) -> Optional[str]:
    """
    First D/M/Y token in the document as YYYY-MM-DD.

    2-digit years are read as 20YY, 3-digit years as 2YYY.  A first token
    that is not a real calendar date gives None; later tokens are never
    consulted.
    """
    m = _DATE.search(text)
    if not m:
        return None

    day, month, year = m.group(1), m.group(2), m.group(3)
    if len(year) == 2:
        year = "20" + year
    elif len(year) == 3:
        year = "2" + year

    try:
        return date(int(year), int(month), int(day)).isoformat()
    except ValueError:
        logger.debug(f"[SummaryExtractor] Ignoring impossible date {m.group(0)!r}")
        return None


def extract_field(text: str, field_name: str) -> Optional[float]:
    """Run the matcher chain for one summary field."""
    for matcher in SUMMARY_MATCHERS[field_name]:
        value = matcher.find(text)
        if value is not None:
            return value
    return None


def extract_summary(text: str) -> Dict[str, Optional[float]]:
    """
    Extract every summary field from normalized text.

    Returns
    -------
    Dict with keys: audit_date, opening_balance, total_sales,
    office_cash_night, office_cash_sheet, expenditure, balance
    """
    result: Dict = {"audit_date": extract_audit_date(text)}
    for field_name in SUMMARY_MATCHERS:
        result[field_name] = extract_field(text, field_name)

    found = [k for k, v in result.items() if v is not None]
    logger.debug(f"[SummaryExtractor] found={found}")
    return result
