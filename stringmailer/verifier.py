# stringmailer/verifier.py

import logging
import re

import dns.exception
import dns.resolver

logger = logging.getLogger(__name__)

# RFC 5322 dot-atom local part, hostname-style domain of 63-octet labels with at least one dot
EMAIL_PATTERN = re.compile(
    r"^[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+(\.[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r"@([A-Za-z0-9]([A-Za-z0-9-]{0,61}[A-Za-z0-9])?\.)+[A-Za-z0-9]([A-Za-z0-9-]{0,61}[A-Za-z0-9])?$"
)

MAX_LOCAL_LENGTH = 64
MAX_ADDRESS_LENGTH = 254


class EmailVerifier:
    def __init__(self, timeout=5):
        """Initializes the verifier. `timeout` bounds each DNS lookup in seconds."""
        self.timeout = timeout

    def is_valid_format(self, email):
        """Checks an address against the dot-atom grammar and the RFC length limits."""
        if not email or len(email) > MAX_ADDRESS_LENGTH:
            return False
        if not EMAIL_PATTERN.match(email):
            return False
        local_part = email.rsplit('@', 1)[0]
        return len(local_part) <= MAX_LOCAL_LENGTH

    def _get_mx_records(self, domain):
        """Gets MX records for a domain. Returns None if no records are found or domain is invalid."""
        try:
            records = dns.resolver.resolve(domain, 'MX', lifetime=self.timeout)
            return sorted((r.preference, r.exchange.to_text()) for r in records)
        except (dns.resolver.NoAnswer, dns.resolver.NXDOMAIN, dns.resolver.NoNameservers):
            return None
        except dns.exception.Timeout:
            logger.warning(f"MX lookup for {domain} timed out after {self.timeout}s")
            return None
        except dns.exception.DNSException as e:
            logger.warning(f"MX lookup for {domain} failed: {e}")
            return None

    def has_mx_records(self, email):
        """True when the domain of a well-formed address publishes at least one MX record."""
        if not self.is_valid_format(email):
            return False
        domain = email.rsplit('@', 1)[1].lower()
        return bool(self._get_mx_records(domain))


_default_verifier = EmailVerifier()


def is_valid_format(email):
    return _default_verifier.is_valid_format(email)
