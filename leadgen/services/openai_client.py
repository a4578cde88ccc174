"""
OpenAI API helpers — streaming web-search lead generation and outreach emails.
"""
import logging
from typing import Any, Dict, Iterator, List, Optional, Union

from leadgen.config import (
    LEAD_SEARCH_MODEL, LEAD_SEARCH_TOOL, OUTREACH_MODEL,
    DEFAULT_LEAD_COUNT, MAX_LEAD_COUNT,
)
from leadgen.errors import InvalidCredentialsError, OutreachGenerationError
from leadgen.extensions import openai_client as client
from leadgen.models.lead import Lead
from leadgen.pipeline.base import StreamChunk
from leadgen.prompts import LEAD_SYSTEM_INSTRUCTION, build_lead_prompt, build_outreach_prompt

logger = logging.getLogger('services.openai')


def _call(func, **kwargs):
    """Route an OpenAI call through the openai circuit breaker."""
    from leadgen.services.circuit_breaker import get_breaker
    cb = get_breaker('openai')
    return cb.call(func, **kwargs)


def _get(obj: Any, key: str, default=None):
    """Field access for SDK models and plain dicts alike (annotations arrive as either)."""
    if isinstance(obj, dict):
        return obj.get(key, default)
    return getattr(obj, key, default)


def clamp_count(count) -> int:
    """Requested lead count limited to 1..MAX_LEAD_COUNT; junk → DEFAULT_LEAD_COUNT."""
    try:
        count = int(count)
    except (TypeError, ValueError):
        return DEFAULT_LEAD_COUNT
    return max(1, min(count, MAX_LEAD_COUNT))


def citation_from_annotation(annotation: Any) -> Optional[Dict[str, str]]:
    """A {uri, title} citation from a url_citation annotation, or None for other kinds."""
    if _get(annotation, 'type') != 'url_citation':
        return None
    uri = _get(annotation, 'url') or ''
    if not uri:
        return None
    return {'uri': uri, 'title': _get(annotation, 'title') or ''}


def _citations_from_response(response: Any) -> List[Dict[str, str]]:
    """All url citations attached to the output text of a finished response."""
    citations = []
    for item in _get(response, 'output') or []:
        for part in _get(item, 'content') or []:
            for annotation in _get(part, 'annotations') or []:
                citation = citation_from_annotation(annotation)
                if citation:
                    citations.append(citation)
    return citations


def _error_message(error: Any) -> str:
    if error is None:
        return 'unknown error'
    return _get(error, 'message') or str(error)


def stream_lead_search(query: str, count: int) -> Iterator[StreamChunk]:
    """
    Stream a web-search-grounded lead search from the Responses API.

    Yields a StreamChunk per output text delta and per url citation. Raises on
    any delivery failure; the caller (LeadStream) decides what to surface.
    """
    if client is None:
        raise InvalidCredentialsError()

    count = clamp_count(count)
    logger.info("Starting lead search (%d leads): %s", count, query, extra={'query': query})

    events = _call(
        client.responses.create,
        model=LEAD_SEARCH_MODEL,
        instructions=LEAD_SYSTEM_INSTRUCTION,
        input=build_lead_prompt(query, count),
        tools=[{"type": LEAD_SEARCH_TOOL}],
        stream=True,
    )

    try:
        yield from _chunks_from_events(events)
    except Exception as e:
        # Mid-stream failures count against the breaker as well
        from leadgen.services.circuit_breaker import get_breaker
        get_breaker('openai').record_failure(e)
        raise


def _chunks_from_events(events) -> Iterator[StreamChunk]:
    for event in events:
        kind = _get(event, 'type')

        if kind == 'response.output_text.delta':
            delta = _get(event, 'delta') or ''
            if delta:
                yield StreamChunk(text=delta)

        elif kind == 'response.output_text.annotation.added':
            citation = citation_from_annotation(_get(event, 'annotation'))
            if citation:
                yield StreamChunk(citations=[citation])

        elif kind == 'response.completed':
            # Citations are repeated on the final response; dedup drops the repeats
            citations = _citations_from_response(_get(event, 'response'))
            if citations:
                yield StreamChunk(citations=citations)

        elif kind == 'response.incomplete':
            details = _get(_get(event, 'response'), 'incomplete_details')
            logger.warning("Lead search ended early: %s", _get(details, 'reason', 'unknown'))

        elif kind == 'response.failed':
            error = _get(_get(event, 'response'), 'error')
            raise RuntimeError(f"Lead search failed: {_error_message(error)}")

        elif kind == 'error':
            raise RuntimeError(f"Lead search stream error: {_error_message(event)}")


def generate_outreach_message(lead: Union[Lead, Dict[str, Any]]) -> str:
    """Write a short personalized outreach email body for one lead."""
    if isinstance(lead, dict):
        lead = Lead.from_dict(lead)

    if client is None:
        logger.error("Outreach requested for '%s' but OPENAI_API_KEY is not set", lead.name)
        raise OutreachGenerationError()

    prompt = build_outreach_prompt(lead.name, lead.category, lead.notes, lead.website)
    try:
        response = _call(
            client.chat.completions.create,
            model=OUTREACH_MODEL,
            messages=[{"role": "user", "content": prompt}],
            temperature=0.7,
        )
        return (response.choices[0].message.content or '').strip()
    except Exception as e:
        logger.error("Error generating outreach message for '%s': %s", lead.name, e)
        raise OutreachGenerationError() from e
