"""
Integrated Daily Sheet Processing Pipeline
Combines text-source selection and extraction into a unified workflow
"""

import time
from typing import Callable, Dict, List, Optional, Sequence

from loguru import logger

from audit_models import ParsedAudit
from document_text import DEFAULT_MIN_NATIVE_CHARS, select_document_text
from extractor import DailySheetExtractor
from utils import format_processing_time


class DailySheetProcessor:
    """
    End-to-end daily sheet processing pipeline

    Workflow:
    1. Choose text layer or OCR text for the document
    2. Concatenate pages in order
    3. Extract the structured audit record
    """

    def __init__(self, config_path: Optional[str] = None):
        """Initialize all processing components"""
        logger.info("Initializing Daily Sheet Processor")

        self.extractor = DailySheetExtractor(config_path)
        self.min_native_chars = (
            self.extractor.config
            .get('text_source', {})
            .get('min_native_chars', DEFAULT_MIN_NATIVE_CHARS)
        )

        logger.success("Daily Sheet Processor ready")

    def process_text(self, raw_text: str) -> Dict:
        """
        Extract an audit from already concatenated document text.

        Returns:
            Processing result dictionary
        """
        start = time.perf_counter()
        audit = self.extractor.extract(raw_text)
        return self._result(audit, text_source=None, started=start)

    def process_pages(
        self,
        native_pages: Sequence[Optional[str]],
        ocr_pages: Optional[Callable[[], List[str]]] = None,
    ) -> Dict:
        """
        Process one uploaded document given its per-page text.

        Args:
            native_pages: Text-layer text per page
            ocr_pages:    Callable returning OCR text per page, used only
                          when the text layer is too thin

        Returns:
            Processing result dictionary
        """
        start = time.perf_counter()
        logger.info(f"Processing document with {len(native_pages)} page(s)")

        raw_text, source = select_document_text(
            native_pages, ocr_pages, min_chars=self.min_native_chars
        )
        audit = self.extractor.extract(raw_text)
        return self._result(audit, text_source=source, started=start)

    @staticmethod
    def _result(audit: ParsedAudit, text_source: Optional[str], started: float) -> Dict:
        elapsed_ms = int((time.perf_counter() - started) * 1000)
        status = 'success' if audit.row_count else 'no_rows_found'
        if audit.row_count:
            logger.info(
                f"Extracted {audit.row_count} row(s) in {format_processing_time(elapsed_ms)}"
            )
        else:
            logger.warning("No table rows recognised in document")

        return {
            'status': status,
            'text_source': text_source,
            'rows_detected': audit.row_count,
            'processing_time_ms': elapsed_ms,
            'audit': audit,
        }
