"""Shared test fixtures."""
import pytest
from unittest.mock import patch


class FakeRedis:
    """Minimal in-memory Redis fake covering the hash commands the breakers use."""

    def __init__(self):
        self.hashes = {}

    def hgetall(self, key):
        return dict(self.hashes.get(key, {}))

    def hget(self, key, field):
        return self.hashes.get(key, {}).get(field)

    def hset(self, key, field=None, value=None, mapping=None):
        h = self.hashes.setdefault(key, {})
        if field is not None:
            h[field] = str(value)
        for k, v in (mapping or {}).items():
            h[k] = str(v)
        return 1

    def hincrby(self, key, field, amount=1):
        h = self.hashes.setdefault(key, {})
        h[field] = str(int(h.get(field, 0)) + amount)
        return int(h[field])

    def hdel(self, key, *fields):
        h = self.hashes.get(key, {})
        for f in fields:
            h.pop(f, None)
        return len(fields)


class DownRedis:
    """Redis stand-in whose every command fails, like an unreachable server."""

    def __getattr__(self, name):
        def _fail(*args, **kwargs):
            raise ConnectionError("Redis unavailable")
        return _fail


@pytest.fixture(autouse=True)
def fake_redis():
    """Route the shared Redis client to an in-memory fake and start every test with no breakers."""
    from leadgen.services import circuit_breaker
    fake = FakeRedis()
    circuit_breaker._registry.clear()
    with patch('leadgen.extensions.redis_client', fake):
        yield fake
    circuit_breaker._registry.clear()


@pytest.fixture
def down_redis():
    """A Redis client that cannot reach its server."""
    return DownRedis()


@pytest.fixture
def app():
    """Flask test app."""
    from leadgen import create_app
    app = create_app()
    app.config['TESTING'] = True
    yield app


@pytest.fixture
def client(app):
    """Flask test client."""
    with app.test_client() as c:
        yield c


SAMPLE_OUTPUT = """Here are the leads I found:

1. **Business Name:** Joe's Cafe
**Category:** Coffee Shop
**Address:** 12 Main St, Austin, TX
**Phone:** (512) 555-0100
**Website:** N/A
**Email:** hello@joescafe.com
**Social Media:**
- Facebook: https://facebook.com/joescafe
- LinkedIn: N/A
- Instagram: https://instagram.com/joescafe
- Twitter: n/a
**Priority:** High
**Notes:** Popular cafe with no website.
Relies entirely on Facebook.

2. **Business Name:** Lone Star Legal
**Category:** Law Firm
**Address:** 400 Congress Ave, Austin, TX
**Phone:** (512) 555-0199
**Website:** https://lonestarlegal.com
**Email:** N/A
**Social Media:**
- Facebook: N/A
- LinkedIn: https://linkedin.com/company/lonestarlegal
- Instagram: N/A
- Twitter: N/A
**Priority:** medium
**Notes:** Site works but is not mobile friendly.
"""


@pytest.fixture
def sample_output():
    """Two complete leads in the labeled format the lead-search prompt asks for."""
    return SAMPLE_OUTPUT
