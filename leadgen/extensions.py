"""
Shared client instances — Redis, OpenAI, Anthropic.

Created at import but never connect eagerly, so importing this module is
always safe (even when env vars are missing during tests). A client whose key
is not configured is left as None.
"""
import logging
import redis

from leadgen.config import REDIS_URL, OPENAI_API_KEY, ANTHROPIC_API_KEY

logger = logging.getLogger('leadgen.extensions')

# ── Redis (circuit breaker state) ─────────────────────────────────────────────
redis_client = redis.from_url(REDIS_URL, decode_responses=True)

# ── OpenAI ────────────────────────────────────────────────────────────────────
openai_client = None
if OPENAI_API_KEY:
    try:
        from openai import OpenAI
        openai_client = OpenAI(api_key=OPENAI_API_KEY)
        logger.info("OpenAI client initialized successfully")
    except Exception as e:
        logger.error("Error initializing OpenAI client: %s", e)
else:
    logger.warning("OPENAI_API_KEY not set — lead search and outreach are unavailable")

# ── Anthropic ─────────────────────────────────────────────────────────────────
anthropic_client = None
if ANTHROPIC_API_KEY:
    try:
        import anthropic
        anthropic_client = anthropic.Anthropic(api_key=ANTHROPIC_API_KEY)
        logger.info("Anthropic client initialized successfully")
    except Exception as e:
        logger.error("Error initializing Anthropic client: %s", e)
else:
    logger.info("ANTHROPIC_API_KEY not set — search suggestions will use Ollama")
