"""
Centralized configuration — all env vars and lead-search constants.
"""
import os


# ── Logging ──────────────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOG_FORMAT = os.getenv('LOG_FORMAT', 'text')

# ── Redis (circuit breaker state) ─────────────────────────────────────────────
REDIS_URL = os.getenv('REDIS_URL', 'redis://localhost:6379/0')

# ── OpenAI ────────────────────────────────────────────────────────────────────
OPENAI_API_KEY = os.getenv('OPENAI_API_KEY')
LEAD_SEARCH_MODEL = os.getenv('LEAD_SEARCH_MODEL', 'gpt-4.1')
LEAD_SEARCH_TOOL = os.getenv('LEAD_SEARCH_TOOL', 'web_search')
OUTREACH_MODEL = os.getenv('OUTREACH_MODEL', 'gpt-4o-mini')

# ── Anthropic ─────────────────────────────────────────────────────────────────
ANTHROPIC_API_KEY = os.getenv('ANTHROPIC_API_KEY')
SUGGESTION_MODEL = os.getenv('SUGGESTION_MODEL', 'claude-haiku-4-5-20251001')

# ── Ollama (local LLM) ──────────────────────────────────────────────────────
OLLAMA_URL = os.getenv('OLLAMA_URL', 'http://localhost:11434')
OLLAMA_MODEL = os.getenv('OLLAMA_MODEL', 'gemma3:1b')

# ── Leads ─────────────────────────────────────────────────────────────────────
PLACEHOLDER_IMAGE_URL = os.getenv(
    'PLACEHOLDER_IMAGE_URL',
    'https://images.pexels.com/photos/163064/play-stone-network-networked-163064.jpeg'
    '?auto=compress&cs=tinysrgb&w=1260&h=750&dpr=1',
)
UNKNOWN_SOURCE_TITLE = 'Unknown Source'
DEFAULT_LEAD_COUNT = int(os.getenv('DEFAULT_LEAD_COUNT', '10'))
MAX_LEAD_COUNT = int(os.getenv('MAX_LEAD_COUNT', '50'))
MAX_SUGGESTIONS = 5

# ── Agency (used in prompts) ──────────────────────────────────────────────────
AGENCY_NAME = os.getenv('AGENCY_NAME', 'code.serve')

# ── Flask ─────────────────────────────────────────────────────────────────────
SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-change-me')

# ── Priority values accepted from model output ───────────────────────────────
PRIORITIES = [
    'High',
    'Medium',
    'Low',
]
