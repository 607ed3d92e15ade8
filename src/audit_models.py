"""
Audit Models
============
Typed records produced by the daily-sheet extraction engine.

  LineItem     - one brand's raw extracted values (None = not recognised)
  Row          - defaulted, display-ready projection of a LineItem
  AuditSummary - audit date + six document-level money totals
  ParsedAudit  - everything above plus the original text

All records are frozen; use ParsedAudit.with_audit_date() (or
dataclasses.replace) to derive an overridden copy.
"""

from dataclasses import dataclass, field, asdict, replace
from datetime import date, datetime
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class LineItem:
    """One brand row as read from the sheet, before defaulting."""
    brand_name: str
    size_ml: Optional[int] = None
    opening: Optional[float] = None
    received: Optional[float] = None
    total: Optional[float] = None
    others: Optional[float] = None
    closing: Optional[float] = None
    sales_qty: Optional[float] = None
    rate: Optional[float] = None
    sales_amount: Optional[float] = None


@dataclass(frozen=True)
class Row:
    """Display-ready row. Counts default to 0, money stays optional."""
    brand_name: str
    size_ml: Optional[int]
    opening: int = 0
    received: int = 0
    total: int = 0
    others: int = 0
    closing: int = 0
    sales_qty: int = 0
    rate: Optional[float] = None
    sales_amount: Optional[float] = None


@dataclass(frozen=True)
class AuditSummary:
    audit_date: Optional[str] = None        # YYYY-MM-DD
    opening_balance: Optional[float] = None
    total_sales: Optional[float] = None
    office_cash_night: Optional[float] = None
    office_cash_sheet: Optional[float] = None
    expenditure: Optional[float] = None
    balance: Optional[float] = None


@dataclass(frozen=True)
class ParsedAudit:
    """Result of one extraction call."""
    audit_date: Optional[str] = None
    opening_balance: Optional[float] = None
    total_sales: Optional[float] = None
    office_cash_night: Optional[float] = None
    office_cash_sheet: Optional[float] = None
    expenditure: Optional[float] = None
    balance: Optional[float] = None
    line_items: Tuple[LineItem, ...] = field(default_factory=tuple)
    rows: Tuple[Row, ...] = field(default_factory=tuple)
    raw_text: str = ""

    @property
    def summary(self) -> AuditSummary:
        return AuditSummary(
            audit_date=self.audit_date,
            opening_balance=self.opening_balance,
            total_sales=self.total_sales,
            office_cash_night=self.office_cash_night,
            office_cash_sheet=self.office_cash_sheet,
            expenditure=self.expenditure,
            balance=self.balance,
        )

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def is_empty(self) -> bool:
        """True when nothing at all was recognised (no rows, no summary)."""
        return not self.rows and all(
            v is None for v in asdict(self.summary).values()
        )

    def with_audit_date(self, value) -> "ParsedAudit":
        """
        Return a copy with the audit date replaced.

        Accepts a date, a datetime (time dropped) or an ISO 'YYYY-MM-DD' string.
        Raises ValueError for anything that is not a real calendar date.
        """
        if isinstance(value, datetime):
            iso = value.date().isoformat()
        elif isinstance(value, date):
            iso = value.isoformat()
        else:
            iso = date.fromisoformat(str(value).strip()).isoformat()
        return replace(self, audit_date=iso)

    def to_dict(self) -> Dict:
        return {
            "audit_date":        self.audit_date,
            "opening_balance":   self.opening_balance,
            "total_sales":       self.total_sales,
            "office_cash_night": self.office_cash_night,
            "office_cash_sheet": self.office_cash_sheet,
            "expenditure":       self.expenditure,
            "balance":           self.balance,
            "line_items":        [asdict(li) for li in self.line_items],
            "rows":              [asdict(r) for r in self.rows],
            "raw_text":          self.raw_text,
        }
