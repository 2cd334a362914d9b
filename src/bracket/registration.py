"""
Validation of public team registration submissions.
"""
import re
from typing import Dict

from .errors import ValidationError

EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')

# field name -> (minimum length, message)
MIN_LENGTHS = {
    'team_name': (3, 'Team name must be at least 3 characters.'),
    'player1_pseudo': (2, 'Pseudo required.'),
    'player2_pseudo': (2, 'Pseudo required.'),
    'player1_whatsapp': (8, 'Valid WhatsApp number required.'),
    'player2_whatsapp': (8, 'Valid WhatsApp number required.'),
}
EMAIL_FIELDS = ('player1_email', 'player2_email')
REGISTRATION_FIELDS = tuple(MIN_LENGTHS) + EMAIL_FIELDS


def validate_registration(data) -> Dict[str, str]:
    """
    Check a registration submission and return the cleaned fields.

    All values are stripped strings. Raises ValidationError with a
    field -> message map when any rule fails.
    """
    if not isinstance(data, dict):
        raise ValidationError('Registration data must be a JSON object.')

    cleaned = {}
    errors = {}
    for field in REGISTRATION_FIELDS:
        value = data.get(field)
        cleaned[field] = value.strip() if isinstance(value, str) else ''

    for field, (min_len, message) in MIN_LENGTHS.items():
        if len(cleaned[field]) < min_len:
            errors[field] = message

    for field in EMAIL_FIELDS:
        if not EMAIL_RE.match(cleaned[field]):
            errors[field] = 'Invalid email.'

    if errors:
        raise ValidationError('Invalid registration.', details=errors)
    return cleaned
