"""
Citation de-duplication — collapse raw citation entries into unique sources.
"""
from typing import Any, Iterable, List

from leadgen.config import UNKNOWN_SOURCE_TITLE
from leadgen.models.source import GroundingSource


def _get(entry: Any, key: str) -> str:
    """Read `key` from a dict or an attribute-style object."""
    if isinstance(entry, dict):
        value = entry.get(key)
    else:
        value = getattr(entry, key, None)
    return (value or '').strip() if isinstance(value, str) else ''


def dedupe_sources(citations: Iterable[Any]) -> List[GroundingSource]:
    """
    Unique sources by uri, in order of first appearance.

    Entries without a uri are skipped. The first title seen for a uri wins;
    later duplicates are dropped entirely. A missing title becomes
    UNKNOWN_SOURCE_TITLE.
    """
    seen = set()
    sources = []
    for entry in citations or []:
        uri = _get(entry, 'uri')
        if not uri or uri in seen:
            continue
        seen.add(uri)
        sources.append(GroundingSource(uri=uri, title=_get(entry, 'title') or UNKNOWN_SOURCE_TITLE))
    return sources
