# stringmailer/config.py
"""
Loads config.ini into an immutable Settings snapshot.

The file is read once when the application starts. Every missing section,
missing key or malformed value raises ConfigError right away instead of
surfacing later in the middle of a request.
"""

import configparser
import os
from dataclasses import dataclass

from stringmailer.errors import ConfigError
from stringmailer.verifier import is_valid_format

CONFIG_ENV_VAR = "STRINGMAILER_CONFIG"
DEFAULT_CONFIG_PATH = "config.ini"

DEFAULT_SMTP_HOST = "localhost"
DEFAULT_SMTP_PORT = 25
DEFAULT_SMTP_TIMEOUT = 30

BOOLEAN_TOKENS = {
    '1': True, 'true': True, 'yes': True, 'on': True,
    '0': False, 'false': False, 'no': False, 'off': False,
}


@dataclass(frozen=True)
class Settings:
    from_email: str
    from_name: str
    allow_to_override: bool
    default_subject: str
    default_body: str
    default_to: str
    secret_word: str
    log_file_path: str
    debug_mode: bool
    use_json: bool
    verify_override_domain: bool = False
    smtp_host: str = DEFAULT_SMTP_HOST
    smtp_port: int = DEFAULT_SMTP_PORT
    smtp_timeout: int = DEFAULT_SMTP_TIMEOUT


def resolve_config_path(path=None):
    """Explicit path first, then $STRINGMAILER_CONFIG, then ./config.ini."""
    return path or os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH


def parse_bool(value, where):
    """Accepts only the recognized on/off tokens."""
    token = value.strip().lower()
    if token not in BOOLEAN_TOKENS:
        raise ConfigError(f"{where}: expected one of 1/0, true/false, yes/no, on/off, got {value!r}")
    return BOOLEAN_TOKENS[token]


def _unquote(value):
    """Drops one pair of surrounding double quotes, as written in php-style ini files."""
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value


def _require(parser, section, key):
    if not parser.has_section(section):
        raise ConfigError(f"Missing section [{section}]")
    if not parser.has_option(section, key):
        raise ConfigError(f"Missing key {key} in section [{section}]")
    return _unquote(parser.get(section, key))


def _optional(parser, section, key, default):
    if parser.has_option(section, key):
        return _unquote(parser.get(section, key))
    return default


def _parse_int(value, where):
    try:
        number = int(value)
    except ValueError:
        raise ConfigError(f"{where}: expected an integer, got {value!r}") from None
    if number <= 0:
        raise ConfigError(f"{where}: must be positive, got {number}")
    return number


def settings_from_parser(parser):
    """Builds Settings from an already parsed ConfigParser."""
    from_email = _require(parser, 'MailSettings', 'FromEmail')
    default_to = _require(parser, 'DefaultValues', 'DefaultMailTo')
    for key, address in (('MailSettings.FromEmail', from_email), ('DefaultValues.DefaultMailTo', default_to)):
        if not is_valid_format(address):
            raise ConfigError(f"{key}: {address!r} is not a valid email address")

    secret_word = _require(parser, 'Security', 'SecretWord')
    if not secret_word:
        raise ConfigError("Security.SecretWord must not be empty")

    log_file_path = _require(parser, 'Logging', 'LogFilePath')
    if not log_file_path:
        raise ConfigError("Logging.LogFilePath must not be empty")

    return Settings(
        from_email=from_email,
        from_name=_require(parser, 'MailSettings', 'FromName'),
        allow_to_override=parse_bool(
            _require(parser, 'MailSettings', 'AllowToOverride'), 'MailSettings.AllowToOverride'),
        default_subject=_require(parser, 'DefaultValues', 'DefaultSubject'),
        default_body=_require(parser, 'DefaultValues', 'DefaultMailBody'),
        default_to=default_to,
        secret_word=secret_word,
        log_file_path=log_file_path,
        debug_mode=parse_bool(_require(parser, 'Logging', 'DebugMode'), 'Logging.DebugMode'),
        use_json=parse_bool(_require(parser, 'Output', 'UseJSON'), 'Output.UseJSON'),
        verify_override_domain=parse_bool(
            _optional(parser, 'MailSettings', 'VerifyOverrideDomain', '0'), 'MailSettings.VerifyOverrideDomain'),
        smtp_host=_optional(parser, 'Transport', 'Host', DEFAULT_SMTP_HOST),
        smtp_port=_parse_int(_optional(parser, 'Transport', 'Port', str(DEFAULT_SMTP_PORT)), 'Transport.Port'),
        smtp_timeout=_parse_int(
            _optional(parser, 'Transport', 'Timeout', str(DEFAULT_SMTP_TIMEOUT)), 'Transport.Timeout'),
    )


def load_settings(path=None):
    """Reads and validates the INI file. Raises ConfigError on any problem."""
    path = resolve_config_path(path)
    # '%' is literal in values; ' ;' starts a trailing comment
    parser = configparser.ConfigParser(interpolation=None, inline_comment_prefixes=(';',))
    parser.optionxform = str
    try:
        with open(path, 'r', encoding='utf-8') as f:
            parser.read_file(f)
    except FileNotFoundError:
        raise ConfigError(f"Unable to load {path}: file not found") from None
    except (OSError, UnicodeDecodeError, configparser.Error) as e:
        raise ConfigError(f"Unable to load {path}: {e}") from e
    return settings_from_parser(parser)
