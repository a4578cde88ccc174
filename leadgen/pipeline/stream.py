"""
Lead stream controller — turns a growing text stream into lead/source snapshots.

Lifecycle per request:
  IDLE → STREAMING → COMPLETED | FAILED

Every text fragment triggers a full re-parse of the accumulated buffer and a
call to on_leads_update with the complete lead list (never a delta). Every
citation batch triggers a full de-duplication of the citation pool and a call
to on_sources_update.

While streaming only complete lines are parsed: a value still arriving on the
unterminated last line is absent until its newline lands, so a half-received
value ('(512) 55', 'N/') never reaches a snapshot and every snapshot carries
at least the information of the one before it. complete() parses the whole
buffer and emits one last snapshot if the trailing line added anything.
"""
import logging
import uuid
from typing import Any, Iterable, Iterator, List, Optional

from leadgen.config import PLACEHOLDER_IMAGE_URL
from leadgen.errors import LeadGenerationError, StreamStateError, classify_delivery_error
from leadgen.models.lead import Lead
from leadgen.models.source import GroundingSource
from leadgen.parsing.assembler import parse_leads
from leadgen.parsing.sources import dedupe_sources
from leadgen.pipeline.base import (
    IDLE, STREAMING, COMPLETED, FAILED, TERMINAL_STATES,
    StreamChunk, LeadsCallback, SourcesCallback,
)

logger = logging.getLogger('pipeline.stream')


class LeadStream:
    """
    Owns the buffer and citation pool for exactly one generation request.

    Not reusable: start a new LeadStream for every request.
    """

    def __init__(
        self,
        on_leads_update: Optional[LeadsCallback] = None,
        on_sources_update: Optional[SourcesCallback] = None,
        image_url: str = PLACEHOLDER_IMAGE_URL,
        stream_id: Optional[str] = None,
    ):
        self.id = stream_id or uuid.uuid4().hex[:12]
        self.on_leads_update = on_leads_update
        self.on_sources_update = on_sources_update
        self.image_url = image_url

        self.state = IDLE
        self.text = ''
        self.citations: List[Any] = []
        self.leads: List[Lead] = []
        self.sources: List[GroundingSource] = []
        self.error: Optional[LeadGenerationError] = None

    @property
    def _log_extra(self):
        return {'stream_id': self.id}

    def _require(self, *states):
        if self.state not in states:
            raise StreamStateError(
                f"Lead stream {self.id} is {self.state}; expected {' or '.join(states)}"
            )

    # ── Transitions ───────────────────────────────────────────────────

    def start(self):
        self._require(IDLE)
        self.state = STREAMING
        logger.debug("Lead stream %s started", self.id, extra=self._log_extra)

    @property
    def committed_text(self) -> str:
        """The buffer up to and including its last newline."""
        return self.text[:self.text.rfind('\n') + 1]

    def _emit_leads(self):
        if self.on_leads_update:
            self.on_leads_update(list(self.leads))

    def feed_text(self, fragment: str) -> List[Lead]:
        """Append a text fragment and emit the lead list parsed from complete lines."""
        self._require(STREAMING)
        self.text += fragment or ''
        self.leads = parse_leads(self.committed_text, image_url=self.image_url)
        self._emit_leads()
        return self.leads

    def feed_citations(self, batch: Iterable[Any]) -> List[GroundingSource]:
        """Append a citation batch and emit the full de-duplicated source list."""
        self._require(STREAMING)
        self.citations.extend(batch or [])
        self.sources = dedupe_sources(self.citations)
        if self.on_sources_update:
            self.on_sources_update(list(self.sources))
        return self.sources

    def feed(self, chunk: StreamChunk):
        """Route one chunk from the generation service."""
        if chunk.text:
            self.feed_text(chunk.text)
        if chunk.citations:
            self.feed_citations(chunk.citations)

    def complete(self) -> List[Lead]:
        """
        End of stream: one final full re-parse, returned as the request result.

        The unterminated last line is included now. If that changes the lead
        list, the new list is emitted first, so the result always equals the
        last snapshot passed to on_leads_update. An empty list means "no leads
        found", not a failure.
        """
        self._require(STREAMING)
        final = parse_leads(self.text, image_url=self.image_url)
        if final != self.leads:
            self.leads = final
            self._emit_leads()
        self.state = COMPLETED
        if self.leads:
            logger.info(
                "Lead stream %s completed: %d leads, %d sources (%d chars)",
                self.id, len(self.leads), len(self.sources), len(self.text),
                extra=self._log_extra,
            )
        else:
            logger.info("Lead stream %s completed with no leads", self.id, extra=self._log_extra)
        return list(self.leads)

    def fail(self, exc: Exception) -> LeadGenerationError:
        """
        Delivery failed: mark the stream FAILED and return the error to raise.

        Snapshots already emitted are not promoted to a result.
        """
        if self.state in TERMINAL_STATES:
            raise StreamStateError(f"Lead stream {self.id} already {self.state}")
        self.state = FAILED
        self.error = classify_delivery_error(exc)
        logger.error(
            "Lead stream %s failed after %d chars: %s",
            self.id, len(self.text), exc, extra=self._log_extra,
        )
        return self.error

    def consume(self, chunks: Iterable[StreamChunk]) -> Iterator[StreamChunk]:
        """
        Feed every chunk from `chunks`, yielding each one once its snapshots
        have been emitted.

        A failure while pulling the next chunk marks the stream FAILED and
        raises the classified LeadGenerationError. Exceptions raised by the
        update callbacks are not delivery failures and propagate unchanged.
        """
        try:
            iterator = iter(chunks)
        except Exception as e:
            self._raise_failure(e)

        while True:
            try:
                chunk = next(iterator)
            except StopIteration:
                return
            except Exception as e:
                self._raise_failure(e)
            self.feed(chunk)
            yield chunk

    def _raise_failure(self, exc: Exception):
        error = self.fail(exc)
        if error is exc:
            raise exc
        raise error from exc


def generate_leads_stream(
    query: str,
    count: int,
    on_leads_update: Optional[LeadsCallback] = None,
    on_sources_update: Optional[SourcesCallback] = None,
    chunks: Optional[Iterable[StreamChunk]] = None,
    image_url: str = PLACEHOLDER_IMAGE_URL,
) -> List[Lead]:
    """
    Run one lead search end to end.

    Args:
        query:             What to search for, e.g. "coffee shops in Austin".
        count:             How many leads to ask the model for.
        on_leads_update:   Called with the full lead list after every text fragment.
        on_sources_update: Called with the full source list after every citation batch.
        chunks:            StreamChunk iterable to consume. Defaults to a live
                           OpenAI web-search stream for `query`.
        image_url:         Placeholder image assigned to every lead.

    Returns:
        The final lead list (may be empty).

    Raises:
        LeadGenerationError: the generation service failed (InvalidCredentialsError
        for credential problems).
    """
    stream = LeadStream(on_leads_update, on_sources_update, image_url=image_url)
    stream.start()

    if chunks is None:
        from leadgen.services.openai_client import stream_lead_search
        chunks = stream_lead_search(query, count)

    for _ in stream.consume(chunks):
        pass

    return stream.complete()
