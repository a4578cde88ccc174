"""
Circuit breaker for outbound AI calls, with state in one Redis hash per service.

States:
  - CLOSED    → calls pass through
  - OPEN      → `failure_threshold` consecutive failures; calls short-circuit
                with ServiceUnavailableError until `reset_timeout` elapses
  - HALF_OPEN → reset_timeout elapsed; the next call is a probe. Success
                closes the circuit, failure re-opens it.

Hash layout (`breaker:<name>`): state, failures, opened_at, plus lifetime
health counters (success, failure, last_success, last_failure, last_error)
served by GET /api/health. If Redis is unreachable the breaker fails open.
"""
import logging
import time
from functools import wraps

from leadgen.errors import LeadgenError

logger = logging.getLogger('services.circuit_breaker')

CLOSED = 'closed'
OPEN = 'open'
HALF_OPEN = 'half_open'


class ServiceUnavailableError(LeadgenError):
    """Raised instead of calling a service whose circuit is open."""
    def __init__(self, name, retry_after=None):
        self.name = name
        self.retry_after = retry_after
        super().__init__(f"Service '{name}' is unavailable (circuit open)")


class ServiceBreaker:
    """
    Usage:
        breaker = ServiceBreaker('openai', redis_client, failure_threshold=5, reset_timeout=60)
        stream = breaker.call(client.responses.create, model=..., stream=True)
    """

    KEY_PREFIX = 'breaker'

    def __init__(self, name, redis_client, failure_threshold=5, reset_timeout=60):
        self.name = name
        self.redis = redis_client
        self.failure_threshold = failure_threshold
        self.reset_timeout = reset_timeout

    @property
    def key(self):
        return f'{self.KEY_PREFIX}:{self.name}'

    def _snapshot(self):
        """Raw hash contents, or None if Redis can't be read."""
        try:
            return self.redis.hgetall(self.key) or {}
        except Exception:
            return None

    def _write(self, **fields):
        try:
            self.redis.hset(self.key, mapping={k: str(v) for k, v in fields.items()})
        except Exception as e:
            logger.debug("Breaker '%s' could not write state: %s", self.name, e)

    def _opened_for(self, data):
        opened_at = data.get('opened_at')
        return time.time() - float(opened_at) if opened_at else None

    # ── State ─────────────────────────────────────────────────────────

    @property
    def state(self):
        data = self._snapshot()
        if not data:
            return CLOSED
        state = data.get('state', CLOSED)
        if state == OPEN:
            elapsed = self._opened_for(data)
            if elapsed is not None and elapsed > self.reset_timeout:
                self._write(state=HALF_OPEN)
                return HALF_OPEN
        return state

    @property
    def failure_count(self):
        data = self._snapshot() or {}
        return int(data.get('failures', 0))

    def get_health(self):
        """Health summary for this service (JSON-friendly)."""
        data = self._snapshot()
        if data is None:
            data, state = {}, 'unknown'
        else:
            state = self.state
        return {
            'name': self.name,
            'state': state,
            'failure_count': int(data.get('failures', 0)),
            'failure_threshold': self.failure_threshold,
            'reset_timeout': self.reset_timeout,
            'total_success': int(data.get('success', 0)),
            'total_failure': int(data.get('failure', 0)),
            'last_success': float(data['last_success']) if data.get('last_success') else None,
            'last_failure': float(data['last_failure']) if data.get('last_failure') else None,
            'last_error': data.get('last_error', ''),
        }

    # ── Calls ─────────────────────────────────────────────────────────

    def call(self, func, *args, **kwargs):
        """Invoke func(*args, **kwargs) unless the circuit is open."""
        if self.state == OPEN:
            elapsed = self._opened_for(self._snapshot() or {})
            retry_after = max(0.0, self.reset_timeout - elapsed) if elapsed is not None else None
            raise ServiceUnavailableError(self.name, retry_after=retry_after)

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            self._on_failure(e)
            raise
        self._on_success()
        return result

    def _on_success(self):
        try:
            self.redis.hincrby(self.key, 'success', 1)
        except Exception:
            logger.debug("Breaker '%s' could not record success", self.name)
        self._write(state=CLOSED, failures=0, last_success=time.time())

    def _on_failure(self, error):
        now = time.time()
        try:
            failures = self.redis.hincrby(self.key, 'failures', 1)
            self.redis.hincrby(self.key, 'failure', 1)
        except Exception:
            return

        fields = {'last_failure': now, 'last_error': str(error)[:200]}
        if failures >= self.failure_threshold:
            fields.update(state=OPEN, opened_at=now)
            logger.warning(
                "Breaker '%s' OPEN after %d failures (threshold=%d): %s",
                self.name, failures, self.failure_threshold, error,
                extra={'service': self.name},
            )
        else:
            logger.info(
                "Breaker '%s' failure %d/%d: %s",
                self.name, failures, self.failure_threshold, error,
                extra={'service': self.name},
            )
        self._write(**fields)

    def record_failure(self, error):
        """Count a failure that surfaced after call() returned, e.g. mid-stream."""
        self._on_failure(error)

    def reset(self):
        """Force the circuit closed and clear the consecutive-failure count."""
        try:
            self.redis.hset(self.key, mapping={'state': CLOSED, 'failures': '0'})
            self.redis.hdel(self.key, 'opened_at')
            logger.info("Breaker '%s' manually reset to CLOSED", self.name)
        except Exception as e:
            logger.error("Failed to reset breaker '%s': %s", self.name, e)

    def protect(self, func):
        """Decorator form of call()."""
        @wraps(func)
        def wrapper(*args, **kwargs):
            return self.call(func, *args, **kwargs)
        return wrapper


# ── Registry ──────────────────────────────────────────────────────────────────

_registry = {}

# name → (failure_threshold, reset_timeout)
DEFAULT_BREAKERS = {
    'openai':    (5, 60),
    'anthropic': (5, 60),
    'ollama':    (3, 30),
}


def get_breaker(name, redis_client=None, **kwargs):
    """Get or create the named breaker (one instance per name)."""
    if name not in _registry:
        if redis_client is None:
            from leadgen.extensions import redis_client as rc
            redis_client = rc
        if not kwargs and name in DEFAULT_BREAKERS:
            threshold, timeout = DEFAULT_BREAKERS[name]
            kwargs = {'failure_threshold': threshold, 'reset_timeout': timeout}
        _registry[name] = ServiceBreaker(name, redis_client, **kwargs)
    return _registry[name]


def get_all_breakers():
    return dict(_registry)


def init_breakers(redis_client):
    """Register a breaker for every AI service this app calls."""
    breakers = {
        name: ServiceBreaker(name, redis_client, failure_threshold=threshold, reset_timeout=timeout)
        for name, (threshold, timeout) in DEFAULT_BREAKERS.items()
    }
    _registry.update(breakers)
    return breakers
