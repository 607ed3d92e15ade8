"""
Daily Sheet Extractor
=====================
Single-pass, stateless pipeline from raw sheet text to a ParsedAudit:

    raw text
      → normalize lines
      → summary fields (date + six money totals)
      → locate table header
      → parse rows until a terminator
      → build defaulted rows
      → reconcile total sales

Configuration is read once in __init__; extract() touches no I/O, clock or
shared state, so one instance can serve concurrent callers.

Usage
-----
    extractor = DailySheetExtractor()
    audit     = extractor.extract(raw_text)
"""

import os
from pathlib import Path
from typing import Dict, Optional

import yaml
from loguru import logger

from audit_models import ParsedAudit
from extractor import markers
from extractor.row_builder import build_rows, reconcile_total_sales
from extractor.row_parser import RowParser
from extractor.summary_extractor import extract_summary
from extractor.table_locator import TableLocator
from text_normalizer import normalize_lines


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "sheet_config.yaml"


class DailySheetExtractor:
    """Daily store ledger text → structured audit record."""

    def __init__(self, config_path: Optional[str] = None):
        self.config = self._load_config(config_path)
        parsing = self.config.get('parsing', {})

        self.locator = TableLocator()
        self.row_parser = RowParser(
            noise_tokens=parsing.get('noise_tokens', markers.NOISE_TOKENS),
            header_fragments=parsing.get('header_fragments', markers.HEADER_FRAGMENTS),
            summary_markers=parsing.get('summary_markers', markers.SUMMARY_MARKERS),
            footer_markers=parsing.get('footer_markers', markers.FOOTER_MARKERS),
            bottle_sizes_ml=parsing.get('bottle_sizes_ml', markers.BOTTLE_SIZES_ML),
            default_size_ml=parsing.get('default_size_ml', markers.DEFAULT_SIZE_ML),
            min_numeric_columns=parsing.get('min_numeric_columns', markers.MIN_NUMERIC_COLUMNS),
        )
        logger.debug("[DailySheetExtractor] initialised")

    def _load_config(self, config_path: Optional[str] = None) -> Dict:
        """Load configuration from YAML file"""
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH

        if not os.path.exists(config_path):
            logger.warning(f"Config file not found: {config_path}, using defaults")
            return self._default_config()

        with open(config_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f) or {}

        return config

    def _default_config(self) -> Dict:
        """Return default configuration"""
        return {
            'parsing': {
                'noise_tokens': list(markers.NOISE_TOKENS),
                'header_fragments': list(markers.HEADER_FRAGMENTS),
                'summary_markers': list(markers.SUMMARY_MARKERS),
                'footer_markers': list(markers.FOOTER_MARKERS),
                'bottle_sizes_ml': list(markers.BOTTLE_SIZES_ML),
                'default_size_ml': markers.DEFAULT_SIZE_ML,
                'min_numeric_columns': markers.MIN_NUMERIC_COLUMNS,
            },
            'text_source': {
                'min_native_chars': 80,
            },
        }

    # ── Public entry point ────────────────────────────────────────────────────

    def extract(self, raw_text: str) -> ParsedAudit:
        """
        Extract the audit record from concatenated page text.

        Never raises for text input: anything not recognised is None, and
        garbage input yields an audit with zero rows.
        """
        lines = normalize_lines(raw_text)
        if not lines:
            logger.info("[DailySheetExtractor] empty document")
            return ParsedAudit(raw_text=raw_text)

        summary = extract_summary('\n'.join(lines))

        start, header_found = self.locator.locate(lines)
        line_items = self.row_parser.parse(lines, start=start, header_found=header_found)
        rows = build_rows(line_items)

        total_sales = reconcile_total_sales(summary['total_sales'], line_items)

        audit = ParsedAudit(
            audit_date=summary['audit_date'],
            opening_balance=summary['opening_balance'],
            total_sales=total_sales,
            office_cash_night=summary['office_cash_night'],
            office_cash_sheet=summary['office_cash_sheet'],
            expenditure=summary['expenditure'],
            balance=summary['balance'],
            line_items=tuple(line_items),
            rows=tuple(rows),
            raw_text=raw_text,
        )

        logger.info(
            f"[DailySheetExtractor] date={audit.audit_date!r} "
            f"header={'yes' if header_found else 'no'} rows={len(rows)} "
            f"total_sales={audit.total_sales!r}"
        )
        return audit


_default_extractor: Optional[DailySheetExtractor] = None


def parse_daily_sheet_text(raw_text: str) -> ParsedAudit:
    """Extract with a lazily created, shared default extractor."""
    global _default_extractor
    if _default_extractor is None:
        _default_extractor = DailySheetExtractor()
    return _default_extractor.extract(raw_text)
