import logging
from dataclasses import replace

from stringmailer.config import Settings

BASE_SETTINGS = Settings(
    from_email="noreply@example.org",
    from_name="String Mailer",
    allow_to_override=True,
    default_subject="Default subject",
    default_body="Default body",
    default_to="default@example.org",
    secret_word="s3cret!",
    log_file_path="stringmailer.log",
    debug_mode=False,
    use_json=False,
)

CONFIG_TEMPLATE = """\
[MailSettings]
FromEmail = noreply@example.org
FromName = "String Mailer"
AllowToOverride = 1

[DefaultValues]
DefaultSubject = Default subject
DefaultMailBody = Default body
DefaultMailTo = default@example.org

[Security]
SecretWord = s3cret!

[Logging]
LogFilePath = {log_path}
DebugMode = 0

[Output]
UseJSON = 0
"""


def make_settings(**overrides):
    return replace(BASE_SETTINGS, **overrides)


def silent_logger():
    logger = logging.getLogger("stringmailer.tests")
    logger.addHandler(logging.NullHandler())
    logger.propagate = False
    return logger
