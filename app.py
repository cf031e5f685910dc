# app.py
import logging

from flask import Flask, request

from stringmailer.config import load_settings
from stringmailer.logs import setup_logging
from stringmailer.mailer import send_mail
from stringmailer.pipeline import handle_request
from stringmailer.responder import render_response


def create_app(settings=None, config_path=None, send=send_mail):
    """
    Builds the Flask app around one Settings snapshot.

    The configuration is loaded here, once; a ConfigError propagates so the
    server refuses to start. Run with `gunicorn 'app:create_app()'`.
    """
    if settings is None:
        settings = load_settings(config_path)

    app = Flask(__name__)
    app.config['STRINGMAILER_SETTINGS'] = settings
    mail_logger = setup_logging(settings)

    @app.route('/', methods=['GET', 'POST'])
    def send_one():
        """
        Receives subject, mailbody, mailadresse and secret, and ONLY sends if the secret matches.
        """
        _, payload = handle_request(request.values, settings, mail_logger, send=send)
        return render_response(payload.message, payload.success, settings.use_json)

    return app


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    create_app().run()
