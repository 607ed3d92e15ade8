"""
Tests for the Daily Sheet API
"""

import pytest
import sys
from datetime import date
from pathlib import Path

# Add project root and src to path
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fastapi.testclient import TestClient

from main import app


SHEET_TEXT = "\n".join([
    "Daily Sheet 07/08/24",
    "Brand Name | O.B | Received | Total | Others | C.B | Sales | Rate | Sales Amount",
    "1 ROYAL STAG 750 10 2 12 0 6 6 3500 21000",
    "2 KINGFISHER STRONG 650 24 12 36 0 12 24 200 4800",
    "Opening Balance: 12000",
    "Total Sales: 25800",
    "Balance: 37800",
])


@pytest.fixture(scope="module")
def client():
    return TestClient(app)


def _submission(**overrides):
    body = {
        "audit_date": "2024-08-07",
        "opening_balance": 12000,
        "total_sales": 25800,
        "office_cash_night": 0,
        "office_cash_sheet": 0,
        "expenditure": 0,
        "balance": 37800,
        "line_items": [
            {"brand_name": "ROYAL STAG 750", "size_ml": 750, "opening": 10, "closing": 6,
             "sales_qty": 6, "rate": 3500, "sales_amount": 21000},
        ],
    }
    body.update(overrides)
    return body


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_parse_text(client):
    response = client.post("/api/v1/daily-sheet/parse", json={"text": SHEET_TEXT})
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "success"
    assert data["audit_date"] == "2024-08-07"
    assert data["opening_balance"] == 12000.0
    assert data["total_sales"] == 25800.0
    assert data["rows_detected"] == 2
    assert data["rows"][1]["brand_name"] == "KINGFISHER STRONG 650"
    assert data["rows"][1]["size_ml"] == 650
    assert data["text_source"] is None


def test_parse_text_without_rows(client):
    response = client.post("/api/v1/daily-sheet/parse", json={"text": "nothing useful"})
    assert response.status_code == 200
    assert response.json()["status"] == "no_rows_found"
    assert response.json()["rows"] == []


def test_parse_text_requires_text(client):
    response = client.post("/api/v1/daily-sheet/parse", json={})
    assert response.status_code == 422


def test_parse_pages_uses_text_layer(client):
    response = client.post(
        "/api/v1/daily-sheet/parse-pages",
        json={"pages": [SHEET_TEXT], "ocr_pages": ["unused"]},
    )
    data = response.json()
    assert data["text_source"] == "text_layer"
    assert data["rows_detected"] == 2


def test_parse_pages_falls_back_to_ocr(client):
    response = client.post(
        "/api/v1/daily-sheet/parse-pages",
        json={"pages": ["", ""], "ocr_pages": SHEET_TEXT.split("Opening")},
    )
    data = response.json()
    assert data["text_source"] == "ocr"
    assert data["rows_detected"] == 2


def test_merge_sales_amount(client):
    body = {
        "existing": [{"brand_name": "ROYAL STAG", "size_ml": 750, "sales_qty": 6}],
        "incoming": [{"brand_name": "royal stag", "size_ml": 750, "sales_amount": 21000}],
    }
    response = client.post("/api/v1/daily-sheet/merge", json=body)
    assert response.status_code == 200
    row = response.json()["rows"][0]
    assert row["brand_name"] == "ROYAL STAG"
    assert row["sales_qty"] == 6
    assert row["sales_amount"] == 21000.0


def test_merge_unknown_column(client):
    body = {"existing": [], "incoming": [], "columns": ["colour"]}
    response = client.post("/api/v1/daily-sheet/merge", json=body)
    assert response.status_code == 400
    assert "colour" in response.json()["detail"]


def test_storage_record_column_mapping(client):
    response = client.post("/api/v1/daily-sheet/storage-record", json=_submission())
    assert response.status_code == 200

    data = response.json()
    assert data["daily_audit"]["audit_date"] == "2024-08-07"
    assert data["daily_audit"]["total_sales"] == 25800.0
    item = data["line_items"][0]
    assert item["ob"] == 10.0
    assert item["cb"] == 6.0
    assert "opening" not in item


def test_storage_record_defaults_date_to_today(client):
    response = client.post("/api/v1/daily-sheet/storage-record", json=_submission(audit_date=None))
    assert response.json()["daily_audit"]["audit_date"] == date.today().isoformat()


def test_storage_record_rejects_bad_date(client):
    response = client.post(
        "/api/v1/daily-sheet/storage-record", json=_submission(audit_date="31/02/2024")
    )
    assert response.status_code == 400


def test_storage_record_requires_totals(client):
    body = _submission()
    del body["balance"]
    response = client.post("/api/v1/daily-sheet/storage-record", json=body)
    assert response.status_code == 422


def test_storage_record_rejects_blank_brand(client):
    body = _submission(line_items=[{"brand_name": ""}])
    response = client.post("/api/v1/daily-sheet/storage-record", json=body)
    assert response.status_code == 422
