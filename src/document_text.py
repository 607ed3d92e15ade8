"""
Document Text Assembly
Chooses and concatenates per-page text before extraction.

A scanned sheet PDF either carries a usable text layer or it doesn't.
The text layer is preferred (fast, exact); when it is too thin the OCR
stage is asked for its page texts instead.  Page rendering and OCR are
external: they are passed in as a callable returning one string per page.
"""

from typing import Callable, List, Optional, Sequence, Tuple

from loguru import logger

TEXT_LAYER = "text_layer"
OCR = "ocr"

DEFAULT_MIN_NATIVE_CHARS = 80


def concatenate_pages(pages: Sequence[Optional[str]]) -> str:
    """
    Join page texts in page order, one line break between pages.

    Args:
        pages: Text per page (None treated as an empty page)

    Returns:
        Single document string
    """
    return '\n'.join(p or '' for p in pages)


def _visible_chars(text: str) -> int:
    return sum(1 for ch in text if not ch.isspace())


def select_document_text(
    native_pages: Sequence[Optional[str]],
    ocr_pages: Optional[Callable[[], List[str]]] = None,
    min_chars: int = DEFAULT_MIN_NATIVE_CHARS,
) -> Tuple[str, str]:
    """
    Pick the text layer when it has enough content, else fall back to OCR.

    Args:
        native_pages: Text-layer text per page
        ocr_pages:    Callable producing OCR text per page (only called when needed)
        min_chars:    Minimum non-blank characters for the text layer to count

    Returns:
        (document_text, source) where source is 'text_layer' or 'ocr'
    """
    native = concatenate_pages(native_pages)
    native_chars = _visible_chars(native)

    if native_chars >= min_chars or ocr_pages is None:
        if native_chars < min_chars:
            logger.warning(
                f"[DocumentText] text layer has only {native_chars} chars "
                f"and no OCR fallback was provided"
            )
        return native, TEXT_LAYER

    logger.info(
        f"[DocumentText] text layer too thin ({native_chars} < {min_chars} chars), "
        f"using OCR"
    )
    return concatenate_pages(ocr_pages()), OCR
