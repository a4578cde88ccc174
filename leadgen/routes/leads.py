"""
Lead routes — streamed lead search (SSE), CSV export, suggestions, outreach.
"""
import json
import logging

from flask import Blueprint, request, jsonify, Response, stream_with_context

from leadgen.config import DEFAULT_LEAD_COUNT
from leadgen.errors import LeadGenerationError, OutreachGenerationError
from leadgen.models.lead import Lead
from leadgen.pipeline.stream import LeadStream

logger = logging.getLogger('routes.leads')

bp = Blueprint('leads', __name__)

NO_LEADS_MESSAGE = 'Could not find leads for your query using web search. Try a different search.'


def _sse(event, payload):
    """One Server-Sent Event: event name + single-line JSON data."""
    return f"event: {event}\ndata: {json.dumps(payload)}\n\n"


@bp.route('/api/leads/stream', methods=['POST'])
def stream_leads():
    """
    Run a lead search and push every snapshot as it is parsed.

    Events:
        leads   — full current lead list
        sources — full current source list
        done    — final lead list (search finished with results)
        empty   — search finished with no leads
        error   — the search failed; no final result
    """
    from leadgen.services.openai_client import stream_lead_search, clamp_count

    data = request.get_json(silent=True) or {}
    query = (data.get('query') or '').strip()
    if not query:
        return jsonify({'error': 'Please enter a search query.'}), 400
    count = clamp_count(data.get('count', DEFAULT_LEAD_COUNT))

    def generate():
        pending = []
        stream = LeadStream(
            on_leads_update=lambda leads: pending.append(
                ('leads', [lead.to_dict() for lead in leads])),
            on_sources_update=lambda sources: pending.append(
                ('sources', [source.to_dict() for source in sources])),
        )
        stream.start()

        try:
            for _ in stream.consume(stream_lead_search(query, count)):
                while pending:
                    yield _sse(*pending.pop(0))
        except LeadGenerationError as e:
            yield _sse('error', {'error': str(e)})
            return

        leads = stream.complete()
        while pending:
            yield _sse(*pending.pop(0))
        if leads:
            yield _sse('done', {'leads': [lead.to_dict() for lead in leads]})
        else:
            yield _sse('empty', {'message': NO_LEADS_MESSAGE})

    return Response(
        stream_with_context(generate()),
        mimetype='text/event-stream',
        headers={'Cache-Control': 'no-cache', 'X-Accel-Buffering': 'no'},
    )


@bp.route('/api/leads/export', methods=['POST'])
def export_leads():
    """Download the posted lead snapshot as leads.csv."""
    from leadgen.services.export import leads_to_csv

    data = request.get_json(silent=True) or {}
    leads = [Lead.from_dict(item) for item in data.get('leads') or [] if isinstance(item, dict)]
    leads = [lead for lead in leads if lead.name]
    if not leads:
        return jsonify({'error': 'No leads to export'}), 400

    return Response(
        leads_to_csv(leads),
        mimetype='text/csv',
        headers={'Content-Disposition': 'attachment; filename=leads.csv'},
    )


@bp.route('/api/search-suggestions', methods=['POST'])
def search_suggestions():
    from leadgen.services.suggestions import get_search_suggestions

    data = request.get_json(silent=True) or {}
    return jsonify({'suggestions': get_search_suggestions(data.get('query') or '')})


@bp.route('/api/outreach', methods=['POST'])
def outreach_message():
    """Generate a personalized outreach email body for one lead."""
    from leadgen.services.openai_client import generate_outreach_message

    data = request.get_json(silent=True) or {}
    lead = data.get('lead')
    if not isinstance(lead, dict) or not lead.get('name'):
        return jsonify({'error': 'A lead with a name is required'}), 400

    try:
        return jsonify({'message': generate_outreach_message(lead)})
    except OutreachGenerationError as e:
        return jsonify({'error': str(e)}), 502
