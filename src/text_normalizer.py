"""
Text Normalizer
Cleans raw concatenated OCR / text-layer output into canonical lines.

Examples:
- "Brand\tName | O.B"   → "Brand Name O.B"
- "\r\n\r\n"            → single line break
- "  ROYAL   STAG  "    → "ROYAL STAG"
"""

import re
from typing import List

_CARRIAGE_RETURN = re.compile(r'\r')
_TABLE_SEPARATORS = re.compile(r'[\t|]')
_MULTI_NEWLINE = re.compile(r'\n{2,}')
_MULTI_SPACE = re.compile(r' {2,}')


def normalize_lines(raw_text: str) -> List[str]:
    """
    Split raw document text into trimmed, non-empty lines.

    Args:
        raw_text: Concatenated page text (any line-ending style)

    Returns:
        Lines in document order; empty list for blank input
    """
    if not isinstance(raw_text, str):
        raise TypeError(f"raw_text must be str, got {type(raw_text).__name__}")

    text = _CARRIAGE_RETURN.sub('\n', raw_text)
    text = _TABLE_SEPARATORS.sub(' ', text)
    text = _MULTI_NEWLINE.sub('\n', text)
    text = _MULTI_SPACE.sub(' ', text)

    return [line.strip() for line in text.split('\n') if line.strip()]


def normalize_text(raw_text: str) -> str:
    """Normalized lines joined back with single line breaks."""
    return '\n'.join(normalize_lines(raw_text))
