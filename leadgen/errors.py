"""
Exception types surfaced to callers.

Per-field and per-block problems never become exceptions; only whole-request
failures of the generation service do.
"""
import openai


class LeadgenError(Exception):
    """Base class for errors surfaced by leadgen."""


class LeadGenerationError(LeadgenError):
    """The generation service could not deliver the lead stream."""
    default_message = "The AI failed to generate leads using web search. Please try again."

    def __init__(self, message=None):
        super().__init__(message or self.default_message)


class InvalidCredentialsError(LeadGenerationError):
    """Delivery failed because the API key was rejected or missing."""
    default_message = "API key is not valid. Please check your configuration."


class OutreachGenerationError(LeadgenError):
    """The outreach message could not be generated."""
    default_message = "Failed to generate the outreach message. The AI may be temporarily unavailable."

    def __init__(self, message=None):
        super().__init__(message or self.default_message)


class StreamStateError(LeadgenError):
    """A LeadStream was driven out of order (e.g. fed after completion)."""


_CREDENTIAL_MARKERS = ('api key', 'api_key', 'invalid_api_key', 'unauthorized')
_CREDENTIAL_STATUS_CODES = (401, 403)


def classify_delivery_error(exc: Exception) -> LeadGenerationError:
    """
    Map a raw delivery failure to the error surfaced to the caller.

    Credential problems (rejected key, missing key, 401/403 from the provider)
    become InvalidCredentialsError; everything else is a generic
    LeadGenerationError.
    """
    if isinstance(exc, LeadGenerationError):
        return exc

    if isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return InvalidCredentialsError()

    if getattr(exc, 'status_code', None) in _CREDENTIAL_STATUS_CODES:
        return InvalidCredentialsError()

    message = str(exc).lower()
    if any(marker in message for marker in _CREDENTIAL_MARKERS):
        return InvalidCredentialsError()
    return LeadGenerationError()
