"""
Table Locator
=============
Finds where the brand table starts.

  1. Strict  - one line containing Brand Name, O.B, Received, C.B and Sales
               in any order
  2. Loose   - Brand Name ... O.B ... Received ... Total ... C.B ... Sales
               ... Sales Amount, in that order, no word boundaries
  3. None    - degraded mode, every line from the top is offered to the
               row parser
"""

import re
from typing import List, Optional, Sequence, Tuple

from loguru import logger

from extractor import markers


class TableLocator:

    def __init__(
        self,
        strict_parts: Sequence[str] = markers.STRICT_HEADER_PARTS,
        loose_header: str = markers.LOOSE_HEADER,
    ):
        self._strict = [re.compile(p, re.IGNORECASE) for p in strict_parts]
        self._loose = re.compile(loose_header, re.IGNORECASE)

    def is_strict_header(self, line: str) -> bool:
        return all(p.search(line) for p in self._strict)

    def is_loose_header(self, line: str) -> bool:
        return self._loose.search(line) is not None

    def find_header(self, lines: List[str]) -> Optional[int]:
        """Index of the header line, strict match preferred over loose."""
        for idx, line in enumerate(lines):
            if self.is_strict_header(line):
                logger.debug(f"[TableLocator] strict header at line {idx}")
                return idx
        for idx, line in enumerate(lines):
            if self.is_loose_header(line):
                logger.debug(f"[TableLocator] loose header at line {idx}")
                return idx
        return None

    def locate(self, lines: List[str]) -> Tuple[int, bool]:
        """
        Returns
        -------
        (start_index, header_found)
            start_index is the line right after the header, or 0 when no
            header was recognised.
        """
        header_idx = self.find_header(lines)
        if header_idx is None:
            logger.info("[TableLocator] no table header found, scanning whole document")
            return 0, False
        return header_idx + 1, True


def find_table_start(lines: List[str]) -> int:
    """Convenience wrapper using the default header vocabulary."""
    start, _ = TableLocator().locate(lines)
    return start
