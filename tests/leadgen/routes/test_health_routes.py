"""Tests for /health, /api/health and /api/health/<service>/reset endpoints."""
import pytest


class TestLiveness:

    def test_health_ok(self, client):
        resp = client.get('/health')
        assert resp.status_code == 200
        assert resp.get_json() == {'status': 'healthy'}


class TestApiHealth:
    """GET /api/health returns circuit breaker states."""

    def test_returns_services_dict(self, client):
        resp = client.get('/api/health')
        assert resp.status_code == 200
        # init_breakers runs in create_app, so every AI service is present
        assert set(resp.get_json()['services']) == {'openai', 'anthropic', 'ollama'}

    def test_service_has_expected_fields(self, client):
        svc = client.get('/api/health').get_json()['services']['openai']
        for key in ('name', 'state', 'failure_count', 'failure_threshold',
                    'total_success', 'total_failure', 'last_error'):
            assert key in svc
        assert svc['state'] == 'closed'

    def test_reports_open_circuit(self, client):
        from leadgen.services.circuit_breaker import get_breaker

        breaker = get_breaker('ollama')
        for _ in range(breaker.failure_threshold):
            with pytest.raises(ConnectionError):
                breaker.call(_refuse)

        svc = client.get('/api/health').get_json()['services']['ollama']
        assert svc['state'] == 'open'
        assert svc['last_error'] == 'refused'


class TestResetCircuit:
    """POST /api/health/<service>/reset resets a circuit breaker."""

    def test_reset_known_service(self, client):
        from leadgen.services.circuit_breaker import get_breaker

        breaker = get_breaker('ollama')
        for _ in range(breaker.failure_threshold):
            with pytest.raises(ConnectionError):
                breaker.call(_refuse)

        resp = client.post('/api/health/ollama/reset')

        assert resp.status_code == 200
        assert resp.get_json() == {'ok': True, 'service': 'ollama'}
        assert breaker.state == 'closed'

    def test_reset_unknown_service_404(self, client):
        resp = client.post('/api/health/nonexistent/reset')
        assert resp.status_code == 404


def _refuse():
    raise ConnectionError('refused')
