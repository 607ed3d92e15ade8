"""
API Routes - All API endpoints
Daily sheet extraction, row merging and storage-record mapping
"""

from datetime import date

from fastapi import APIRouter, HTTPException
from loguru import logger

from api.models import (
    AuditSubmission,
    MergeRowsRequest,
    MergeRowsResponse,
    ParsedAuditResponse,
    ParsePagesRequest,
    ParseTextRequest,
    RowModel,
    StorageRecordResponse,
)
from daily_sheet_processor import DailySheetProcessor
from row_merger import merge_rows

# Create router
router = APIRouter()

# Initialize sheet processor
processor = DailySheetProcessor()


# ==================== API ENDPOINTS ====================

@router.post("/daily-sheet/parse", response_model=ParsedAuditResponse, tags=["Daily Sheet"])
async def parse_text(request: ParseTextRequest):
    """
    **Extract an audit from daily sheet text**

    Send the text of all pages (in page order) and get back the summary
    totals, audit date and brand table.

    **Example:**
    ```bash
    curl -X POST http://localhost:8000/api/v1/daily-sheet/parse \\
      -H "Content-Type: application/json" \\
      -d '{"text": "Daily Sheet 07/08/24\\nBrand Name O.B Received ..."}'
    ```
    """
    try:
        result = processor.process_text(request.text)
        return ParsedAuditResponse.from_result(result)
    except Exception as e:
        logger.error(f"Error parsing sheet text: {e}")
        logger.exception("Full traceback:")
        raise HTTPException(500, str(e))


@router.post("/daily-sheet/parse-pages", response_model=ParsedAuditResponse, tags=["Daily Sheet"])
async def parse_pages(request: ParsePagesRequest):
    """
    **Extract an audit from per-page text**

    `pages` is the PDF text layer per page.  When it is too thin to be a
    real sheet and `ocr_pages` is supplied, the OCR text is used instead.
    """
    ocr_fallback = None
    if request.ocr_pages is not None:
        ocr_pages = list(request.ocr_pages)

        def ocr_fallback():
            return ocr_pages

    try:
        result = processor.process_pages(request.pages, ocr_fallback)
        return ParsedAuditResponse.from_result(result)
    except Exception as e:
        logger.error(f"Error parsing sheet pages: {e}")
        logger.exception("Full traceback:")
        raise HTTPException(500, str(e))


@router.post("/daily-sheet/merge", response_model=MergeRowsResponse, tags=["Daily Sheet"])
async def merge(request: MergeRowsRequest):
    """
    **Merge re-extracted columns into loaded rows**

    Rows match on brand name (case-insensitive), optionally with bottle size.
    Only the listed `columns` are copied, and only when the new value is set.
    """
    try:
        merged = merge_rows(
            [r.to_row() for r in request.existing],
            [r.to_row() for r in request.incoming],
            fields_to_merge=request.columns,
            match_size=request.match_size,
        )
    except ValueError as e:
        raise HTTPException(400, detail=str(e))

    return MergeRowsResponse(rows=[RowModel.from_row(r) for r in merged])


@router.post("/daily-sheet/storage-record", response_model=StorageRecordResponse, tags=["Daily Sheet"])
async def storage_record(submission: AuditSubmission):
    """
    **Map a confirmed audit onto the storage schema**

    Returns one `daily_audit` row and its `line_items` rows.  A missing
    audit date falls back to today.
    """
    if submission.audit_date:
        try:
            iso_date = date.fromisoformat(submission.audit_date.strip()).isoformat()
        except ValueError:
            raise HTTPException(
                400, detail=f"Invalid audit_date: {submission.audit_date!r}. Use YYYY-MM-DD"
            )
    else:
        iso_date = date.today().isoformat()

    record = submission.model_copy(update={"audit_date": iso_date}).to_storage_record()
    logger.info(
        f"Storage record for {iso_date}: {len(record['line_items'])} line item(s)"
    )
    return StorageRecordResponse(**record)
