# stringmailer/policy.py

import hmac


def authorize(secret, configured_secret):
    """Allows the request only on an exact, case-sensitive match with the configured secret word."""
    if not secret or not configured_secret:
        return False
    return hmac.compare_digest(secret.encode('utf-8'), configured_secret.encode('utf-8'))


def resolve_recipient(allow_override, sanitized_input, default_recipient):
    """
    Picks the effective recipient.

    Returns (address, used_override). The caller-supplied address wins only
    when the override policy is on and the address survived sanitization;
    every other case falls back to the configured default.
    """
    if allow_override and sanitized_input is not None:
        return sanitized_input, True
    return default_recipient, False


def resolve_field(value, default):
    return value if value else default
