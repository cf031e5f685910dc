# stringmailer/errors.py


class StringMailerError(Exception):
    """Base class for all errors raised by stringmailer."""


class ConfigError(StringMailerError):
    """The configuration file could not be loaded or is incomplete. Fatal."""


class AuthorizationError(StringMailerError):
    """The secret word was missing or did not match."""


class DispatchError(StringMailerError):
    """The mail transport refused or failed to take the message."""
