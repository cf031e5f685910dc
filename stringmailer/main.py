# stringmailer/main.py

import argparse
import sys

from stringmailer.config import load_settings
from stringmailer.errors import ConfigError
from stringmailer.logs import setup_logging
from stringmailer.mailer import send_mail
from stringmailer.pipeline import FIELD_BODY, FIELD_RECIPIENT, FIELD_SECRET, FIELD_SUBJECT, handle_request
from stringmailer.responder import format_payload

EXIT_SENT = 0
EXIT_NOT_SENT = 1
EXIT_CONFIG_ERROR = 2


def build_parser():
    parser = argparse.ArgumentParser(description="Send one email through the stringmailer gate.")
    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Path to the config.ini file (default: $STRINGMAILER_CONFIG or ./config.ini)."
    )
    parser.add_argument("--subject", help="Mail subject. Falls back to DefaultSubject.")
    parser.add_argument("--body", help="Mail body. Falls back to DefaultMailBody.")
    parser.add_argument("--to", help="Recipient, only honored when AllowToOverride is on.")
    parser.add_argument("--secret", help="The shared secret word.")
    parser.add_argument(
        "--check-config",
        action="store_true",
        help="Only load and validate the configuration, then exit."
    )
    return parser


def main(argv=None, send=send_mail):
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        print(f"Error: Unable to load configuration: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    if args.check_config:
        print("Configuration OK.")
        return EXIT_SENT

    logger = setup_logging(settings)
    raw = {
        FIELD_SUBJECT: args.subject,
        FIELD_BODY: args.body,
        FIELD_RECIPIENT: args.to,
        FIELD_SECRET: args.secret,
    }
    outcome, payload = handle_request(raw, settings, logger, send=send)

    body, _ = format_payload(payload, settings.use_json)
    print(body)
    return EXIT_SENT if outcome.success else EXIT_NOT_SENT


if __name__ == '__main__':
    sys.exit(main())
