"""
utils/whatsapp_utils.py

Purpose: WhatsApp address helpers

- Applies and strips the Twilio "whatsapp:" channel marker
- Renders lead names into message templates
"""

import re


WHATSAPP_PREFIX = "whatsapp:"

NAME_TOKEN_PATTERN = re.compile(r"{{\s*name\s*}}", re.IGNORECASE)


def to_whatsapp_address(address: str) -> str:
    """
    Qualifies an address for the WhatsApp channel.

    Args:
        address: Phone number (+15551234567) or an already qualified
                 address (whatsapp:+15551234567)

    Returns:
        Address carrying the "whatsapp:" marker exactly once
    """
    if address.startswith(WHATSAPP_PREFIX):
        return address
    return f"{WHATSAPP_PREFIX}{address}"


def strip_whatsapp_prefix(address: str) -> str:
    """Returns the bare phone number of a channel-qualified address."""
    if address.startswith(WHATSAPP_PREFIX):
        return address[len(WHATSAPP_PREFIX):]
    return address


def render_name_tokens(template: str, full_name: str) -> str:
    """
    Replaces every {{name}} merge token with the trimmed full name.

    Tokens are matched case-insensitively and may carry whitespace
    inside the braces ({{ Name }}). Anything else is left untouched.

    Example:
        render_name_tokens("Hi {{ Name }}!", " Alex ") -> "Hi Alex!"
    """
    name = full_name.strip()
    # Callable replacement keeps backslashes in names literal
    return NAME_TOKEN_PATTERN.sub(lambda _match: name, template)
