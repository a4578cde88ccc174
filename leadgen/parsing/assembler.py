"""
Record assembly — turn one block into a validated Lead, or nothing.

A block without a business name is dropped: mid-stream it is usually the tail
of a lead that is still being generated, and it will assemble on a later pass.
"""
from typing import List, Optional

from leadgen.config import PLACEHOLDER_IMAGE_URL, PRIORITIES
from leadgen.models.lead import Lead, SocialMedia
from leadgen.parsing.fields import (
    extract_field, NAME_PATTERN, FIELD_PATTERNS, SOCIAL_PATTERNS,
    PRIORITY_PATTERN, NOTES_PATTERN,
)
from leadgen.parsing.segmenter import segment

_CANONICAL_PRIORITY = {p.lower(): p for p in PRIORITIES}


def _extract_priority(block: str) -> str:
    """Priority in canonical case ('High'), or '' for anything outside the enum."""
    raw = extract_field(block, PRIORITY_PATTERN)
    return _CANONICAL_PRIORITY.get(raw.lower(), '')


def assemble(block: str, image_url: str = PLACEHOLDER_IMAGE_URL) -> Optional[Lead]:
    """
    Build a Lead from a single block.

    Args:
        block:     One segment of model output.
        image_url: Placeholder image assigned to every lead.

    Returns:
        The Lead, or None when the block has no (non-N/A) business name.
    """
    name = extract_field(block, NAME_PATTERN)
    if not name:
        return None

    fields = {key: extract_field(block, pattern) for key, pattern in FIELD_PATTERNS.items()}
    social = {key: extract_field(block, pattern) for key, pattern in SOCIAL_PATTERNS.items()}

    return Lead(
        name=name,
        priority=_extract_priority(block),
        notes=extract_field(block, NOTES_PATTERN),
        social_media=SocialMedia(**social),
        image_url=image_url,
        **fields,
    )


def parse_leads(text: str, image_url: str = PLACEHOLDER_IMAGE_URL) -> List[Lead]:
    """Segment the full text and assemble every block that yields a lead."""
    leads = []
    for block in segment(text):
        lead = assemble(block, image_url=image_url)
        if lead is not None:
            leads.append(lead)
    return leads
