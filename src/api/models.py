"""
API Models: Request and Response schemas
Using Pydantic for automatic validation and documentation

Field names mirror audit_models; the storage record mirrors the
daily_audits / audit_line_items columns used by the persistence layer.
"""

from dataclasses import asdict
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from audit_models import ParsedAudit, Row


# ─── Extraction Models ────────────────────────────────────────────────────────

class LineItemModel(BaseModel):
    """One brand row as read from the sheet (None = not recognised)."""
    brand_name: str              = Field(..., description="Brand name")
    size_ml: Optional[int]       = Field(None, description="Bottle size in ml")
    opening: Optional[float]     = Field(None, description="Opening stock (O.B)")
    received: Optional[float]    = Field(None, description="Received")
    total: Optional[float]       = Field(None, description="Total")
    others: Optional[float]      = Field(None, description="Others")
    closing: Optional[float]     = Field(None, description="Closing stock (C.B)")
    sales_qty: Optional[float]   = Field(None, description="Sales quantity")
    rate: Optional[float]        = Field(None, description="Rate")
    sales_amount: Optional[float] = Field(None, description="Sales amount")


class RowModel(BaseModel):
    """Display-ready row: counts defaulted to 0, money optional."""
    brand_name: str
    size_ml: Optional[int]        = None
    opening: int                  = 0
    received: int                 = 0
    total: int                    = 0
    others: int                   = 0
    closing: int                  = 0
    sales_qty: int                = 0
    rate: Optional[float]         = None
    sales_amount: Optional[float] = None

    def to_row(self) -> Row:
        return Row(**self.model_dump())

    @classmethod
    def from_row(cls, row: Row) -> "RowModel":
        return cls(**asdict(row))


class ParseTextRequest(BaseModel):
    text: str = Field(..., description="Concatenated page text, in page order")


class ParsePagesRequest(BaseModel):
    pages: List[str] = Field(..., description="Text-layer text per page")
    ocr_pages: Optional[List[str]] = Field(
        None, description="OCR text per page, used when the text layer is too thin"
    )


class ParsedAuditResponse(BaseModel):
    """Structured audit extracted from one daily sheet."""
    status: str                           = Field("success", description="Response status")
    audit_date: Optional[str]             = Field(None, description="YYYY-MM-DD")
    opening_balance: Optional[float]      = None
    total_sales: Optional[float]          = None
    office_cash_night: Optional[float]    = None
    office_cash_sheet: Optional[float]    = None
    expenditure: Optional[float]          = None
    balance: Optional[float]              = None
    line_items: List[LineItemModel]       = Field(default_factory=list)
    rows: List[RowModel]                  = Field(default_factory=list)
    rows_detected: int                    = Field(0, description="Number of table rows")
    text_source: Optional[str]            = Field(None, description="'text_layer' or 'ocr'")
    raw_text: str                         = Field("", description="Original document text")
    processing_time_ms: int               = Field(0, description="Processing time in milliseconds")

    class Config:
        json_schema_extra = {
            "example": {
                "status": "success",
                "audit_date": "2024-08-07",
                "opening_balance": 12000.0,
                "total_sales": 21000.0,
                "office_cash_night": 5000.0,
                "office_cash_sheet": 5000.0,
                "expenditure": 250.0,
                "balance": 26750.0,
                "line_items": [
                    {
                        "brand_name": "ROYAL STAG 750",
                        "size_ml": 750,
                        "opening": 10, "received": 2, "total": 12,
                        "others": 0, "closing": 6, "sales_qty": 6,
                        "rate": 3500, "sales_amount": 21000,
                    }
                ],
                "rows_detected": 1,
                "text_source": "text_layer",
                "processing_time_ms": 3,
            }
        }

    @classmethod
    def from_result(cls, result: Dict[str, Any]) -> "ParsedAuditResponse":
        audit: ParsedAudit = result['audit']
        data = audit.to_dict()
        return cls(
            status=result.get('status', 'success'),
            rows_detected=result.get('rows_detected', audit.row_count),
            text_source=result.get('text_source'),
            processing_time_ms=result.get('processing_time_ms', 0),
            **data,
        )


# ─── Merge Models ─────────────────────────────────────────────────────────────

class MergeRowsRequest(BaseModel):
    existing: List[RowModel]  = Field(..., description="Rows currently loaded")
    incoming: List[RowModel]  = Field(..., description="Newly extracted rows")
    columns: List[str]        = Field(["sales_amount"], description="Row fields to copy")
    match_size: bool          = Field(False, description="Match on brand + bottle size")


class MergeRowsResponse(BaseModel):
    status: str = "success"
    rows: List[RowModel]


# ─── Storage Models ───────────────────────────────────────────────────────────

class AuditLineItemIn(BaseModel):
    brand_name: str               = Field(..., min_length=1)
    size_ml: Optional[int]        = None
    opening: Optional[float]      = None
    received: Optional[float]     = None
    total: Optional[float]        = None
    others: Optional[float]       = None
    closing: Optional[float]      = None
    sales_qty: Optional[float]    = None
    rate: Optional[float]         = None
    sales_amount: Optional[float] = None


class AuditSubmission(BaseModel):
    """An operator-confirmed audit, ready to be stored."""
    audit_date: Optional[str] = Field(None, description="YYYY-MM-DD, required for storage")
    opening_balance: float
    total_sales: float
    office_cash_night: float
    office_cash_sheet: float
    expenditure: float
    balance: float
    line_items: List[AuditLineItemIn] = Field(default_factory=list)

    def to_storage_record(self) -> Dict[str, Any]:
        """One daily_audits row plus its audit_line_items rows."""
        return {
            "daily_audit": {
                "audit_date":        self.audit_date,
                "opening_balance":   self.opening_balance,
                "total_sales":       self.total_sales,
                "office_cash_night": self.office_cash_night,
                "office_cash_sheet": self.office_cash_sheet,
                "expenditure":       self.expenditure,
                "balance":           self.balance,
            },
            "line_items": [
                {
                    "brand_name":   li.brand_name,
                    "size_ml":      li.size_ml,
                    "ob":           li.opening,
                    "received":     li.received,
                    "total":        li.total,
                    "others":       li.others,
                    "cb":           li.closing,
                    "sales_qty":    li.sales_qty,
                    "rate":         li.rate,
                    "sales_amount": li.sales_amount,
                }
                for li in self.line_items
            ],
        }


class StorageRecordResponse(BaseModel):
    status: str = "success"
    daily_audit: Dict[str, Any]
    line_items: List[Dict[str, Any]]


# ─── Health Model ─────────────────────────────────────────────────────────────

class HealthResponse(BaseModel):
    """Health check response."""
    status: str  = Field("healthy",           description="Health status")
    service: str = Field("daily-sheet-audit", description="Service name")
    version: str = Field("1.0.0",             description="API version")
