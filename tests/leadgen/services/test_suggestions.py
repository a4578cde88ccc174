"""Tests for leadgen.services.suggestions — search suggestions via Anthropic or Ollama."""
import pytest
from unittest.mock import patch, MagicMock


def _mock_anthropic_response(text):
    """Build a mock Anthropic messages.create() response."""
    msg = MagicMock()
    block = MagicMock()
    block.text = text
    msg.content = [block]
    return msg


def _mock_ollama_response(text):
    """Build a mock Ollama /api/chat JSON response."""
    resp = MagicMock()
    resp.status_code = 200
    resp.json.return_value = {"message": {"content": text}}
    resp.raise_for_status = MagicMock()
    return resp


# ---------------------------------------------------------------------------
# clean_suggestion
# ---------------------------------------------------------------------------

class TestCleanSuggestion:

    @pytest.mark.parametrize('line, expected', [
        ('coffee shops in Austin', 'coffee shops in Austin'),
        ('1. **dentists in Boise**', 'dentists in Boise'),
        ('2) "law firms in Reno"', 'law firms in Reno'),
        ('3: plumbers in Mesa', 'plumbers in Mesa'),
        ('- gyms in Tulsa', 'gyms in Tulsa'),
        ('• salons in Ogden', 'salons in Ogden'),
        ("  'bakeries in Provo'  ", 'bakeries in Provo'),
    ])
    def test_strips_numbering_bullets_bold_quotes(self, line, expected):
        from leadgen.services.suggestions import clean_suggestion
        assert clean_suggestion(line) == expected

    def test_bare_markers_clean_to_nothing(self):
        from leadgen.services.suggestions import clean_suggestion
        assert clean_suggestion('-') == ''
        assert clean_suggestion('1.') == ''


# ---------------------------------------------------------------------------
# get_search_suggestions
# ---------------------------------------------------------------------------

class TestGetSearchSuggestions:

    @patch('leadgen.extensions.anthropic_client')
    def test_short_query_skips_model(self, mock_client):
        from leadgen.services.suggestions import get_search_suggestions
        assert get_search_suggestions('ca') == []
        assert get_search_suggestions('   ') == []
        mock_client.messages.create.assert_not_called()

    @patch('leadgen.extensions.anthropic_client')
    def test_uses_anthropic_when_configured(self, mock_client):
        from leadgen.config import SUGGESTION_MODEL
        from leadgen.services.suggestions import get_search_suggestions

        mock_client.messages.create.return_value = _mock_anthropic_response(
            "coffee shops in Austin\nnew cafes in Austin without websites"
        )

        result = get_search_suggestions('coffee')

        assert result == ['coffee shops in Austin', 'new cafes in Austin without websites']
        kwargs = mock_client.messages.create.call_args[1]
        assert kwargs['model'] == SUGGESTION_MODEL
        assert 'coffee' in kwargs['messages'][0]['content']

    @patch('leadgen.extensions.anthropic_client')
    def test_caps_at_five_and_dedupes(self, mock_client):
        from leadgen.services.suggestions import get_search_suggestions

        mock_client.messages.create.return_value = _mock_anthropic_response(
            "coffee\nA one\nA one\nB two\nC three\nD four\nE five\nF six"
        )

        result = get_search_suggestions('coffee')

        assert result == ['A one', 'B two', 'C three', 'D four', 'E five']

    @patch('leadgen.services.suggestions.requests.post')
    @patch('leadgen.extensions.anthropic_client', None)
    def test_falls_back_to_ollama(self, mock_post):
        from leadgen.config import OLLAMA_URL, OLLAMA_MODEL
        from leadgen.services.suggestions import get_search_suggestions

        mock_post.return_value = _mock_ollama_response("1. gyms in Tulsa\n2. yoga studios in Tulsa")

        result = get_search_suggestions('gyms')

        assert result == ['gyms in Tulsa', 'yoga studios in Tulsa']
        assert mock_post.call_args[0][0] == f"{OLLAMA_URL}/api/chat"
        assert mock_post.call_args[1]['json']['model'] == OLLAMA_MODEL
        assert mock_post.call_args[1]['json']['stream'] is False

    @patch('leadgen.extensions.anthropic_client')
    def test_model_error_returns_empty_list(self, mock_client):
        from leadgen.services.suggestions import get_search_suggestions

        mock_client.messages.create.side_effect = Exception("overloaded")

        assert get_search_suggestions('coffee') == []

    @patch('leadgen.services.suggestions.requests.post')
    @patch('leadgen.extensions.anthropic_client', None)
    def test_ollama_down_returns_empty_list(self, mock_post):
        from leadgen.services.suggestions import get_search_suggestions

        mock_post.side_effect = ConnectionError("refused")

        assert get_search_suggestions('coffee') == []

    @patch('leadgen.extensions.anthropic_client')
    def test_cleans_and_drops_leftovers(self, mock_client):
        from leadgen.services.suggestions import get_search_suggestions

        mock_client.messages.create.return_value = _mock_anthropic_response(
            '-\n1.\nx\n\n1. **dentists in Boise**\n2) "law firms in Reno"'
        )

        assert get_search_suggestions('lawyers') == ['dentists in Boise', 'law firms in Reno']

    @patch('leadgen.extensions.anthropic_client')
    def test_anthropic_failures_count_against_breaker(self, mock_client):
        from leadgen.services.circuit_breaker import get_breaker
        from leadgen.services.suggestions import get_search_suggestions

        mock_client.messages.create.side_effect = Exception("overloaded")
        get_search_suggestions('coffee')

        assert get_breaker('anthropic').failure_count == 1
