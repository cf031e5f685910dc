# stringmailer/pipeline.py
"""
One request through the gate: sanitize, authorize, resolve, dispatch, respond.

The request ends in exactly one of three states: SENT, SEND_FAILED or
DENIED. A denied request never reaches the transport.
"""

import enum
from dataclasses import dataclass
from typing import Optional

from stringmailer.errors import AuthorizationError, DispatchError
from stringmailer.mailer import send_mail
from stringmailer.policy import authorize, resolve_field, resolve_recipient
from stringmailer.responder import MSG_DENIED, MSG_SEND_FAILED, MSG_SENT, ResponsePayload
from stringmailer.sanitizer import decode_secret, sanitize_input, strip_header_breaks
from stringmailer.verifier import EmailVerifier

# Request field names as they appear in the query string
FIELD_SUBJECT = 'subject'
FIELD_BODY = 'mailbody'
FIELD_RECIPIENT = 'mailadresse'
FIELD_SECRET = 'secret'


class Status(enum.Enum):
    SENT = 'sent'
    SEND_FAILED = 'send_failed'
    DENIED = 'denied'


@dataclass(frozen=True)
class SanitizedFields:
    subject: Optional[str]
    body: Optional[str]
    recipient: Optional[str]
    secret: Optional[str]


@dataclass(frozen=True)
class DispatchOutcome:
    status: Status
    recipient: str
    subject: str
    body: str
    used_override: bool = False
    reason: Optional[str] = None

    @property
    def success(self):
        return self.status is Status.SENT


def sanitize_request(raw):
    """Sanitizes every known field of a raw request mapping. Unknown fields are ignored."""
    return SanitizedFields(
        subject=sanitize_input(raw.get(FIELD_SUBJECT)),
        body=sanitize_input(raw.get(FIELD_BODY)),
        recipient=sanitize_input(raw.get(FIELD_RECIPIENT), is_email=True),
        secret=decode_secret(raw.get(FIELD_SECRET)),
    )


def require_authorized(secret, configured_secret):
    if not authorize(secret, configured_secret):
        raise AuthorizationError(MSG_DENIED)


def dispatch(settings, to, subject, body, send=send_mail):
    if not send(settings, to, subject, body):
        raise DispatchError(f"Failed to send email to {to}.")


def verified_override(settings, address, verifier=None):
    """Drops an override address whose domain publishes no MX record, when that check is enabled."""
    if address is None or not settings.verify_override_domain:
        return address
    verifier = verifier or EmailVerifier()
    return address if verifier.has_mx_records(address) else None


def handle_request(raw, settings, logger, send=send_mail, verifier=None):
    """
    Runs a raw request mapping through the whole gate.

    Returns (DispatchOutcome, ResponsePayload). The payload only ever carries
    one of the generic caller-facing messages; the details go to the log.
    Nothing touches the network before the secret word has been checked.
    """
    logger.info("Request processing started.")

    fields = sanitize_request(raw)
    subject = strip_header_breaks(resolve_field(fields.subject, settings.default_subject))
    body = resolve_field(fields.body, settings.default_body)
    to, used_override = resolve_recipient(settings.allow_to_override, fields.recipient, settings.default_to)

    logger.debug(
        f"Received parameters - Subject: {subject}, MailTo: {to}, Body: {body}, "
        f"Secret: {'provided' if fields.secret is not None else 'not provided'}"
    )

    try:
        require_authorized(fields.secret, settings.secret_word)
        logger.info("Secret word validated successfully.")

        if used_override and verified_override(settings, to, verifier) is None:
            logger.debug(f"Override address {to} has no MX records, ignoring it")
            to, used_override = resolve_recipient(settings.allow_to_override, None, settings.default_to)
        if used_override:
            logger.debug(f"To email overridden via request: {to}")
        else:
            logger.debug(f"To email override not used, using default: {to}")

        dispatch(settings, to, subject, body, send=send)
    except AuthorizationError as e:
        logger.info(str(e))
        outcome = DispatchOutcome(Status.DENIED, to, subject, body, used_override, reason=str(e))
        payload = ResponsePayload(success=False, message=MSG_DENIED)
    except DispatchError as e:
        logger.info(str(e))
        outcome = DispatchOutcome(Status.SEND_FAILED, to, subject, body, used_override, reason=str(e))
        payload = ResponsePayload(success=False, message=MSG_SEND_FAILED)
    else:
        logger.info(f"Email sent successfully to {to} with subject '{subject}'.")
        outcome = DispatchOutcome(Status.SENT, to, subject, body, used_override)
        payload = ResponsePayload(success=True, message=MSG_SENT)

    logger.info("Request processing completed.")
    return outcome, payload
