"""
utils/validation_utils.py

Purpose: Input validation

- Presence checks for the lead form fields
- Phone number normalization to E.164 shape
- Syntactic checks only: number existence is the provider's concern
"""

import re
from typing import Optional, Tuple

from app.core.exceptions import ValidationError


# Optional "+", a leading digit 1-9, then 6-14 more ASCII digits (7-15 in total).
# \d would also accept non-ASCII digits such as Arabic-Indic ones.
E164_PATTERN = re.compile(r"^\+?[1-9][0-9]{6,14}$")

MISSING_FIELDS_MESSAGE = "missing required fields"
INVALID_PHONE_MESSAGE = (
    "Phone number must be in international E.164 format: digits only, "
    "7-15 digits with an optional leading +, e.g. +15551234567"
)


def validate_presence(
    full_name: Optional[str],
    phone_number: Optional[str],
    message_template: Optional[str]
) -> Tuple[str, str, str]:
    """
    Trims the three required fields and checks none is empty.

    Args:
        full_name: Lead's full name
        phone_number: Lead's phone number as typed
        message_template: Message template with optional {{name}} tokens

    Returns:
        Tuple of trimmed (full_name, phone_number, message_template)

    Raises:
        ValidationError: if any field is absent or blank after trimming
    """
    fields = tuple((value or "").strip() for value in (full_name, phone_number, message_template))

    if not all(fields):
        raise ValidationError(MISSING_FIELDS_MESSAGE)

    return fields


def normalize_phone(raw: Optional[str]) -> str:
    """
    Normalizes a phone number into canonical dialable form.

    Accepts "+15551234567" and "15551234567" alike and always returns
    the "+"-prefixed form. Normalizing an already normalized number
    returns it unchanged.

    Raises:
        ValidationError: if the number is not E.164 shaped
    """
    phone = (raw or "").strip()

    if not E164_PATTERN.match(phone):
        raise ValidationError(INVALID_PHONE_MESSAGE)

    return phone if phone.startswith("+") else f"+{phone}"
