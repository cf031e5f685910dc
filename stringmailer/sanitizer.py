# stringmailer/sanitizer.py
"""
Normalization and validation of the untrusted request fields.

Every function here is pure: a field either comes back cleaned or as None,
and None means "invalid or empty". What the caller does with None (fall back
to a default, reject the request) is decided in policy.py.
"""

import re
from urllib.parse import unquote_plus

from markupsafe import escape

from stringmailer.verifier import is_valid_format

TAG_PATTERN = re.compile(r"<(?!\s)[^>]*(>|$)")
CONTROL_CHARS = re.compile(r"[\x00-\x1F\x7F]")
# Everything outside letters, digits and !#$%&'*+-=?^_`{|}~@.[]
NON_EMAIL_CHARS = re.compile(r"[^A-Za-z0-9!#$%&'*+\-=?^_`{|}~@.\[\]]")
HEADER_BREAKS = re.compile(r"[\r\n]")
# Space, tab, CR, LF, NUL and VT only; other Unicode whitespace is kept
TRIM_CHARS = " \t\n\r\0\x0b"


def strip_tags(value):
    """Removes markup tags, including an unterminated trailing one. A `<` followed by whitespace is kept."""
    return TAG_PATTERN.sub('', value)


def sanitize_input(raw, is_email=False):
    """
    Cleans a single request field.

    Generic text keeps every printable character (punctuation such as `!`
    included) and only loses markup tags and control characters. Email input
    is HTML-escaped, reduced to the characters an address may contain and
    then validated; an invalid address comes back as None.
    """
    if raw is None or raw.strip(TRIM_CHARS) == '':
        return None

    value = strip_tags(raw.strip(TRIM_CHARS))

    if not is_email:
        value = CONTROL_CHARS.sub('', value)
        return value or None

    value = NON_EMAIL_CHARS.sub('', str(escape(value)))
    if not is_valid_format(value):
        return None
    return value


def decode_secret(raw):
    """Percent-decodes the secret word before sanitizing it, so `%21` survives as `!`."""
    if not isinstance(raw, str):
        return None
    return sanitize_input(unquote_plus(raw))


def strip_header_breaks(value):
    """Removes CR and LF so the value cannot open a new mail header."""
    return HEADER_BREAKS.sub('', value)
