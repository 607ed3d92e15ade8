"""
Row Parser
==========
Turns candidate table lines into LineItem records.

Per line, in document order:
  1. Noise rejection    - lone OCR letters ("Q"), header fragments
  2. Early termination  - summary section / footer reached, stop
  3. Token extraction   - every signed decimal number on the line
  4. Minimum columns    - fewer than 5 numbers → not a data row
  5. Brand text         - text before the trailing numeric run
  6. Brand cleanup      - serial prefix, stray letters, punctuation
  7. Bottle size        - standard volume in the brand text, else 750
  8. Column mapping     - right-anchored layout keyed by token count

Typical line:
  "3 ROYAL STAG 180 10 2 12 0 6 6 3500 21000"
   └serial └brand  └size └──────── 8 columns ────────┘
"""

import re
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from loguru import logger

from audit_models import LineItem
from extractor import markers


# ─── Patterns ─────────────────────────────────────────────────────────────────

_NUMBER_TOKEN = re.compile(r'-?\d+(?:\.\d+)?')

# A whitespace/comma separated piece that is a number, optionally followed by
# trailing punctuation such as "21000/-"
_NUMERIC_PIECE = re.compile(r'^[-+]?\d+(?:\.\d+)?[^\w\s]*$')
_PIECE = re.compile(r'[^\s,]+')

# "21,000" → "21000"; comma-delimited columns ("6,350,2100") are left alone
_GROUPED_NUMBER = re.compile(r'(?<![\d,])\d{1,3}(?:,\d{3})+(?![\d,])')

# Whole tokens made of digits plus O/o read as digits ("1O", "2o0")
_DIGITISH_TOKEN = re.compile(r'(?<!\S)[\dOo.\-]*\d[\dOo.\-]*(?!\S)')

_SERIAL_PREFIX = re.compile(r'^\d+[.)]?\s+')
_BRAND_PUNCT = re.compile(r"[^\w &.'()\-]|_")
_MULTI_SPACE = re.compile(r'\s{2,}')


def _to_number(token: str):
    return float(token) if '.' in token else int(token)


class RowParser:
    """
    Stateless line → LineItem parser.  All vocabulary is injected so it can
    be tuned from config/sheet_config.yaml.
    """

    def __init__(
        self,
        noise_tokens: Iterable[str] = markers.NOISE_TOKENS,
        header_fragments: Iterable[str] = markers.HEADER_FRAGMENTS,
        summary_markers: Iterable[str] = markers.SUMMARY_MARKERS,
        footer_markers: Iterable[str] = markers.FOOTER_MARKERS,
        bottle_sizes_ml: Iterable[int] = markers.BOTTLE_SIZES_ML,
        default_size_ml: int = markers.DEFAULT_SIZE_ML,
        min_numeric_columns: int = markers.MIN_NUMERIC_COLUMNS,
        column_layouts: Mapping[int, Sequence[Tuple[str, int]]] = markers.COLUMN_LAYOUTS,
    ):
        self.noise_tokens = {t.upper() for t in noise_tokens}
        self.header_fragments = [re.compile(p, re.IGNORECASE) for p in header_fragments]
        self.summary_markers = [re.compile(p, re.IGNORECASE) for p in summary_markers]
        self.footer_markers = [re.compile(r'^' + p, re.IGNORECASE) for p in footer_markers]

        sizes = sorted({int(s) for s in bottle_sizes_ml}, key=lambda s: -len(str(s)))
        self._size_pattern = re.compile(
            r'(?<!\d)(' + '|'.join(str(s) for s in sizes) + r')(?!\d)'
        ) if sizes else None
        self.default_size_ml = default_size_ml

        self.min_numeric_columns = min_numeric_columns
        self.column_layouts = dict(column_layouts)
        self.max_numeric_columns = max(self.column_layouts)

    # ── Public entry point ────────────────────────────────────────────────────

    def parse(
        self,
        lines: List[str],
        start: int = 0,
        header_found: bool = True,
    ) -> List[LineItem]:
        """
        Parse lines[start:] into LineItems until a table terminator.

        When no header was found (degraded mode) terminators only end the
        table once at least one row has been accepted; summary lines printed
        above the table are skipped instead.
        """
        items: List[LineItem] = []

        for idx in range(start, len(lines)):
            line = lines[idx].strip()
            if not line:
                continue

            if self.is_noise(line):
                logger.debug(f"[RowParser] line {idx} noise: {line!r}")
                continue

            if self.is_terminator(line):
                if header_found or items:
                    logger.debug(f"[RowParser] line {idx} ends table: {line!r}")
                    break
                logger.debug(f"[RowParser] line {idx} summary before table: {line!r}")
                continue

            item = self.parse_line(line)
            if item is None:
                logger.debug(f"[RowParser] line {idx} rejected: {line!r}")
                continue
            items.append(item)

        logger.info(f"[RowParser] accepted {len(items)} row(s) from line {start}")
        return items

    def parse_line(self, line: str) -> Optional[LineItem]:
        """Parse one candidate line; None when it cannot be a data row."""
        prepared = self.prepare_numbers(line)

        tokens = _NUMBER_TOKEN.findall(prepared)
        if len(tokens) < self.min_numeric_columns:
            return None

        brand_text = self.brand_text(prepared)
        if len(brand_text) < 2:
            return None

        brand = self.clean_brand(brand_text)
        if len(brand) < 2:
            return None

        values = self.map_columns([_to_number(t) for t in tokens])
        return LineItem(brand_name=brand, size_ml=self.infer_size(brand), **values)

    # ── Line classification ───────────────────────────────────────────────────

    def is_noise(self, line: str) -> bool:
        if line.upper() in self.noise_tokens:
            return True
        return any(p.search(line) for p in self.header_fragments)

    def is_terminator(self, line: str) -> bool:
        if any(p.search(line) for p in self.summary_markers):
            return True
        return any(p.match(line) for p in self.footer_markers)

    # ── Tokens and brand ──────────────────────────────────────────────────────

    @staticmethod
    def prepare_numbers(line: str) -> str:
        """Drop thousands separators and read O/o as 0 inside numeric tokens."""
        text = _GROUPED_NUMBER.sub(lambda m: m.group(0).replace(',', ''), line)
        return _DIGITISH_TOKEN.sub(
            lambda m: m.group(0).replace('O', '0').replace('o', '0'), text
        )

    def brand_text(self, line: str) -> str:
        """
        Text before the trailing numeric run.

        A run shorter than the minimum column count is not a table tail and
        is left in place.  Numbers ahead of the last max-column tokens stay
        with the brand (a bare "180" size, for instance).
        """
        pieces = list(_PIECE.finditer(line))
        run = 0
        for piece in reversed(pieces):
            if not _NUMERIC_PIECE.match(piece.group(0)):
                break
            run += 1

        if run < self.min_numeric_columns:
            return line.strip()

        run = min(run, self.max_numeric_columns)
        cut = pieces[len(pieces) - run].start()
        return line[:cut].strip()

    def clean_brand(self, text: str) -> str:
        text = _SERIAL_PREFIX.sub('', text.strip())
        text = _BRAND_PUNCT.sub('', text)
        words = [w for w in text.split() if w.upper() not in self.noise_tokens]
        return _MULTI_SPACE.sub(' ', ' '.join(words)).strip()

    def infer_size(self, brand: str) -> int:
        if self._size_pattern is not None:
            m = self._size_pattern.search(brand)
            if m:
                return int(m.group(1))
        return self.default_size_ml

    # ── Column mapping ────────────────────────────────────────────────────────

    def map_columns(self, numbers: List) -> Dict[str, Optional[float]]:
        """
        Assign numbers to fields using the layout for their count.

        Counts above the largest layout use that layout on the last tokens.
        """
        key = min(len(numbers), self.max_numeric_columns)
        layout = self.column_layouts.get(key, ())
        values: Dict[str, Optional[float]] = {}
        for field_name, offset in layout:
            values[field_name] = numbers[-offset]
        return values
