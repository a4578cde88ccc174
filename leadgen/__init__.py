"""
Streaming lead search.

The parsing core (leadgen.parsing, leadgen.pipeline.stream) is usable as a
plain library:

    from leadgen import generate_leads_stream
    leads = generate_leads_stream("coffee shops in Austin", 10, on_leads, on_sources)

create_app() wraps it in a small Flask API.
"""
from flask import Flask

from leadgen.pipeline.stream import LeadStream, generate_leads_stream

__all__ = ['create_app', 'LeadStream', 'generate_leads_stream']


def create_app():
    """Create and configure the Flask application."""
    from leadgen.config import SECRET_KEY
    from leadgen.logging_config import configure_logging

    app = Flask(__name__)

    configure_logging(app)

    app.secret_key = SECRET_KEY

    from leadgen.routes.health import bp as health_bp
    from leadgen.routes.leads import bp as leads_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(leads_bp)

    # Circuit breakers for the AI services
    from leadgen.extensions import redis_client
    from leadgen.services.circuit_breaker import init_breakers
    init_breakers(redis_client)

    return app
