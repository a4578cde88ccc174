"""
Block segmentation — split the accumulated model output into one block per lead.

A new block starts on a line that opens with a list marker ("1.", "2)") or
with the **Business Name:** label, so numbered and un-numbered output both
segment the same way. Runs over the whole buffer every time; nothing is
carried between calls.
"""
import re
from typing import List

BLOCK_BOUNDARY = re.compile(r'\n\s*(?=\d[.)]|\*\*Business Name:)', re.IGNORECASE)


def segment(text: str) -> List[str]:
    """Split `text` into candidate lead blocks in document order, dropping blank ones."""
    if not text:
        return []
    return [block for block in BLOCK_BOUNDARY.split(text) if block.strip()]
