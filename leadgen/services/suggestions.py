"""
Search suggestions — related lead-search queries for a partial query.

Anthropic answers when ANTHROPIC_API_KEY is set, local Ollama otherwise; each
sits behind its own circuit breaker. Best effort: any failure is logged and
yields no suggestions.
"""
import logging
import re
from typing import List

import requests

from leadgen.config import SUGGESTION_MODEL, OLLAMA_URL, OLLAMA_MODEL, MAX_SUGGESTIONS
from leadgen.prompts import SUGGESTION_SYSTEM_PROMPT
from leadgen.services.circuit_breaker import get_breaker

logger = logging.getLogger('services.suggestions')

MIN_QUERY_LENGTH = 3
OLLAMA_TIMEOUT = 30

# "1." / "2)" / "3:" numbering or a "-", "*", "•" bullet at the start of a line
_LIST_MARKER = re.compile(r'^(?:\d+[.):]|[-*•])\s*')


def clean_suggestion(line: str) -> str:
    """
    One model output line as a bare query.

    >>> clean_suggestion('1. **"gyms in Tulsa"**')
    'gyms in Tulsa'
    """
    text = line.replace('**', '').strip()
    text = _LIST_MARKER.sub('', text)
    return text.strip().strip('"\'').strip()


def _ask_anthropic(client, user_input: str) -> str:
    response = client.messages.create(
        model=SUGGESTION_MODEL,
        max_tokens=256,
        system=SUGGESTION_SYSTEM_PROMPT,
        messages=[{"role": "user", "content": user_input}],
    )
    return ''.join(getattr(block, 'text', '') for block in response.content)


def _ask_ollama(user_input: str) -> str:
    resp = requests.post(
        f"{OLLAMA_URL}/api/chat",
        json={
            "model": OLLAMA_MODEL,
            "messages": [
                {"role": "system", "content": SUGGESTION_SYSTEM_PROMPT},
                {"role": "user", "content": user_input},
            ],
            "stream": False,
        },
        timeout=OLLAMA_TIMEOUT,
    )
    resp.raise_for_status()
    return resp.json()["message"]["content"]


def _ask_model(user_input: str) -> str:
    from leadgen.extensions import anthropic_client

    if anthropic_client:
        return get_breaker('anthropic').call(_ask_anthropic, anthropic_client, user_input)
    return get_breaker('ollama').call(_ask_ollama, user_input)


def get_search_suggestions(query: str) -> List[str]:
    """Up to MAX_SUGGESTIONS search queries related to a partial `query`."""
    query = (query or '').strip()
    if len(query) < MIN_QUERY_LENGTH:
        return []

    try:
        raw = _ask_model(f'Partial query: "{query}"')
    except Exception as e:
        logger.error("Search suggestion error for '%s': %s", query, e, extra={'query': query})
        return []

    suggestions = []
    seen = {query.lower()}
    for line in (raw or '').splitlines():
        suggestion = clean_suggestion(line)
        # Leftover punctuation from a bare "-" or "1." line
        if len(suggestion) < 2 or suggestion.lower() in seen:
            continue
        seen.add(suggestion.lower())
        suggestions.append(suggestion)
        if len(suggestions) == MAX_SUGGESTIONS:
            break
    return suggestions
