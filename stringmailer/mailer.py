# stringmailer/mailer.py

import logging
import smtplib
from email.message import EmailMessage
from email.utils import formataddr

logger = logging.getLogger(__name__)


def build_message(settings, to, subject, body):
    """Builds the plain-text UTF-8 message with the configured sender identity."""
    msg = EmailMessage()
    msg['From'] = formataddr((settings.from_name, settings.from_email))
    msg['Reply-To'] = settings.from_email
    msg['To'] = to
    msg['Subject'] = subject
    msg.set_content(body, charset='utf-8')
    return msg


def send_mail(settings, to, subject, body):
    """
    Hands a single message to the host mail transport.

    Returns True when the MTA accepted the message. Any transport failure is
    logged and reported as False; the caller does not get the reason.
    """
    try:
        msg = build_message(settings, to, subject, body)
        with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=settings.smtp_timeout) as server:
            server.send_message(msg)
    except (smtplib.SMTPException, OSError, ValueError) as e:
        logger.error(f"Transport failed for {to}: {e}")
        return False

    return True
