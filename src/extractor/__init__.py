"""
Extractor package: daily store ledger (daily sheet) text extraction.

Stages live in their own modules and are wired together by
DailySheetExtractor:

  summary_extractor  - audit date + six money totals
  table_locator      - where the brand table starts
  row_parser         - table lines → LineItem
  row_builder        - LineItem → Row, total-sales cross-check
  markers            - tunable vocabulary (noise, headers, sizes, layouts)

Usage
-----
from extractor import DailySheetExtractor
audit = DailySheetExtractor().extract(raw_text)
"""

from extractor.daily_sheet_extractor import DailySheetExtractor, parse_daily_sheet_text

__all__ = ["DailySheetExtractor", "parse_daily_sheet_text"]
