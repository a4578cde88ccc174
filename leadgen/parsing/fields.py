"""
Field extraction — pull one labeled value out of a lead block.

The label vocabulary mirrors the format requested in the lead-search prompt:

    **Business Name:** ...
    **Category:** ...
    **Social Media:**
    - Facebook: ...
    **Priority:** High|Medium|Low
    **Notes:** ...

Single-line fields capture to the end of the label's own line, so a label
whose value has not streamed in yet never swallows the next line. Notes is
free text and may span lines.
"""
import re
from typing import Dict, Pattern, Union

# Literal the model writes when a value could not be found
NOT_AVAILABLE = 'n/a'


def _label(name: str) -> Pattern:
    return re.compile(r'\*\*' + re.escape(name) + r':\*\*[ \t]*(.+)', re.IGNORECASE)


def _bullet(name: str) -> Pattern:
    return re.compile(r'-[ \t]*' + re.escape(name) + r':[ \t]*(.+)', re.IGNORECASE)


NAME_PATTERN = _label('Business Name')

FIELD_PATTERNS: Dict[str, Pattern] = {
    'category': _label('Category'),
    'address':  _label('Address'),
    'phone':    _label('Phone'),
    'website':  _label('Website'),
    'email':    _label('Email'),
}

SOCIAL_PATTERNS: Dict[str, Pattern] = {
    'facebook':  _bullet('Facebook'),
    'linkedin':  _bullet('LinkedIn'),
    'instagram': _bullet('Instagram'),
    'twitter':   _bullet('Twitter'),
}

# Whole word only: "High" and "high priority" match, "Highest" and "Urgent" don't
PRIORITY_PATTERN = re.compile(r'\*\*Priority:\*\*[ \t]*(High|Medium|Low)\b', re.IGNORECASE)

NOTES_PATTERN = re.compile(r'\*\*Notes:\*\*\s*(.+)', re.IGNORECASE | re.DOTALL)


def extract_field(block: str, pattern: Union[str, Pattern]) -> str:
    """
    Return the trimmed value captured by `pattern` in `block`, or ''.

    `pattern` must have exactly one capturing group. A captured "N/A" (any
    case) means "confirmed unavailable" and is returned as ''. Never raises
    on a miss.
    """
    if not block:
        return ''
    if isinstance(pattern, str):
        pattern = re.compile(pattern, re.IGNORECASE)

    match = pattern.search(block)
    if not match:
        return ''

    value = (match.group(1) or '').strip()
    if value.lower() == NOT_AVAILABLE:
        return ''
    return value
