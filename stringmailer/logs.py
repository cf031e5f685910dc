# stringmailer/logs.py

import logging

LOGGER_NAME = "stringmailer"
LOG_FORMAT = '[%(asctime)s] [%(levelname)s] %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(settings):
    """
    Configures the application logger to append to the configured log file.

    Lines look like `[2024-05-01 12:00:00] [INFO] message`. Request steps are
    written at INFO and DEBUG; DEBUG lines only reach the file when DebugMode
    is on. Transport failures (stringmailer.mailer) add ERROR lines and failed
    MX lookups (stringmailer.verifier) add WARNING lines in the same format.
    Calling this again with new settings replaces the previous file handler.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handler = logging.FileHandler(settings.log_file_path, mode='a', encoding='utf-8', delay=True)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if settings.debug_mode else logging.INFO)
    logger.propagate = False
    return logger
