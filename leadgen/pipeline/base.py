"""
Lead stream contracts.

The generation adapter yields StreamChunk objects; the LeadStream controller
consumes them. Anything that can produce an iterable of StreamChunk (the
OpenAI adapter, a recorded fixture, a test list) can drive a stream.
"""
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Sequence

from leadgen.models.lead import Lead
from leadgen.models.source import GroundingSource


# ── Stream states ─────────────────────────────────────────────────────────────
IDLE = 'idle'
STREAMING = 'streaming'
COMPLETED = 'completed'
FAILED = 'failed'

TERMINAL_STATES = (COMPLETED, FAILED)


@dataclass
class StreamChunk:
    """One increment from the generation service: a text fragment, a citation batch, or both."""
    text: str = ''
    citations: List[Dict[str, str]] = field(default_factory=list)


LeadsCallback = Callable[[Sequence[Lead]], None]
SourcesCallback = Callable[[Sequence[GroundingSource]], None]
