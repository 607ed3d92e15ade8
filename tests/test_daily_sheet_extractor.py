"""
Tests for Daily Sheet Extractor
"""

import pytest
import sys
from datetime import date, datetime
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from audit_models import ParsedAudit
from extractor import DailySheetExtractor, parse_daily_sheet_text
from extractor.row_builder import build_row


SAMPLE_SHEET = "\n".join([
    "Daily Sheet",
    "Date: 07/08/24",
    "Sl. No | Brand Name | O.B | Received | Total | Others | C.B | Sales | Rate | Sales Amount",
    "1 ROYAL STAG 750 | 10 | 2 | 12 | 0 | 6 | 6 | 3500 | 21000",
    "2 OFFICERS CHOICE 180ml 40 0 40 0 25 15 120 1800",
    "3 KINGFISHER STRONG 650 24 12 36 0 12 24 200 4800",
    "Q",
    "TOTAL 74 14 88 0 43 45 27600",
    "Opening Balance: 1,2O0",
    "Total Sales: 27600",
    "Office Cash (Night): 5000",
    "Office Cash (Sheet): 4,500",
    "Expenditure - 350",
    "Balance: 23000",
])


@pytest.fixture(scope="module")
def extractor():
    return DailySheetExtractor()


def test_sample_sheet_summary(extractor):
    audit = extractor.extract(SAMPLE_SHEET)

    assert audit.audit_date == "2024-08-07"
    assert audit.opening_balance == 1200.0
    assert audit.total_sales == 27600.0
    assert audit.office_cash_night == 5000.0
    assert audit.office_cash_sheet == 4500.0
    assert audit.expenditure == 350.0
    assert audit.balance == 23000.0
    assert audit.raw_text == SAMPLE_SHEET


def test_sample_sheet_rows(extractor):
    audit = extractor.extract(SAMPLE_SHEET)

    assert [r.brand_name for r in audit.rows] == [
        "ROYAL STAG 750",
        "OFFICERS CHOICE 180ml",
        "KINGFISHER STRONG 650",
    ]
    assert [r.size_ml for r in audit.rows] == [750, 180, 650]

    royal = audit.rows[0]
    assert (royal.opening, royal.received, royal.total, royal.others) == (10, 2, 12, 0)
    assert (royal.closing, royal.sales_qty) == (6, 6)
    assert (royal.rate, royal.sales_amount) == (3500, 21000)


def test_rows_are_projection_of_line_items(extractor):
    audit = extractor.extract(SAMPLE_SHEET)
    assert len(audit.rows) == len(audit.line_items)
    for item, row in zip(audit.line_items, audit.rows):
        assert row == build_row(item)


def test_extraction_is_repeatable(extractor):
    assert extractor.extract(SAMPLE_SHEET) == extractor.extract(SAMPLE_SHEET)


def test_total_sales_from_rows_when_not_printed(extractor):
    text = SAMPLE_SHEET.replace("Total Sales: 27600\n", "")
    audit = extractor.extract(text)
    assert audit.total_sales == 27600


def test_sheet_without_header(extractor):
    text = "\n".join([
        "Opening Balance: 1000",
        "ROYAL STAG 10 2 12 0 6 6 3500 21000",
        "Balance: 500",
    ])
    audit = extractor.extract(text)
    assert [r.brand_name for r in audit.rows] == ["ROYAL STAG"]
    assert audit.opening_balance == 1000.0
    assert audit.balance == 500.0


def test_empty_input(extractor):
    audit = extractor.extract("")
    assert audit == ParsedAudit(raw_text="")
    assert audit.is_empty
    assert audit.row_count == 0


def test_garbage_input_gives_no_rows(extractor):
    audit = extractor.extract("~~ lorem ipsum ~~\n|||\n12 apples")
    assert audit.rows == ()
    assert audit.total_sales is None
    assert audit.is_empty


def test_config_override(tmp_path):
    config_file = tmp_path / "sheet_config.yaml"
    config_file.write_text("parsing:\n  default_size_ml: 1000\n", encoding="utf-8")

    extractor = DailySheetExtractor(str(config_file))
    audit = extractor.extract("IMPERIAL BLUE 10 2 12 0 6 6 400 2400")
    assert audit.rows[0].size_ml == 1000


def test_missing_config_uses_defaults(tmp_path):
    extractor = DailySheetExtractor(str(tmp_path / "missing.yaml"))
    assert extractor.config["parsing"]["default_size_ml"] == 750
    assert extractor.extract("IMPERIAL BLUE 10 2 12 0 6 6 400 2400").rows[0].size_ml == 750


def test_module_level_helper():
    audit = parse_daily_sheet_text(SAMPLE_SHEET)
    assert audit.row_count == 3


def test_audit_date_override(extractor):
    audit = extractor.extract(SAMPLE_SHEET)

    assert audit.with_audit_date("2024-09-01").audit_date == "2024-09-01"
    assert audit.with_audit_date(date(2024, 9, 2)).audit_date == "2024-09-02"
    assert audit.with_audit_date(datetime(2024, 9, 3, 10, 30)).audit_date == "2024-09-03"
    assert audit.audit_date == "2024-08-07"

    with pytest.raises(ValueError):
        audit.with_audit_date("2024-02-31")


def test_to_dict_shape(extractor):
    data = extractor.extract(SAMPLE_SHEET).to_dict()
    assert data["total_sales"] == 27600.0
    assert len(data["rows"]) == 3
    assert data["rows"][0]["brand_name"] == "ROYAL STAG 750"
    assert data["line_items"][0]["sales_amount"] == 21000
