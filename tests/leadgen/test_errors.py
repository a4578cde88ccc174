"""Tests for leadgen.errors.classify_delivery_error()."""
import openai
import pytest

from leadgen.errors import (
    classify_delivery_error, LeadGenerationError, InvalidCredentialsError,
)


@pytest.mark.parametrize('message', [
    'Incorrect API key provided: sk-***',
    "Error code: 401 - {'code': 'invalid_api_key'}",
    'Unauthorized',
    'missing api_key',
])
def test_credential_messages(message):
    assert isinstance(classify_delivery_error(Exception(message)), InvalidCredentialsError)


@pytest.mark.parametrize('message', [
    'Connection reset by peer',
    '503 Service Unavailable',
    'Lead search stream error: Rate limit reached for request req_40123',
    'Used 4019 of 4096 tokens',
    '',
])
def test_other_failures_are_generic(message):
    error = classify_delivery_error(Exception(message))
    assert type(error) is LeadGenerationError
    assert str(error) == LeadGenerationError.default_message


def test_openai_authentication_error():
    exc = openai.AuthenticationError.__new__(openai.AuthenticationError)
    assert isinstance(classify_delivery_error(exc), InvalidCredentialsError)


def test_classified_error_returned_unchanged():
    error = InvalidCredentialsError()
    assert classify_delivery_error(error) is error


class _HTTPError(Exception):
    def __init__(self, message, status_code):
        super().__init__(message)
        self.status_code = status_code


@pytest.mark.parametrize('status_code', [401, 403])
def test_credential_status_codes(status_code):
    assert isinstance(classify_delivery_error(_HTTPError('denied', status_code)), InvalidCredentialsError)


def test_other_status_codes_are_generic():
    assert type(classify_delivery_error(_HTTPError('slow down', 429))) is LeadGenerationError
