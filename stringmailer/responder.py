# stringmailer/responder.py

import json
from dataclasses import dataclass

from flask import Response, jsonify

MSG_SENT = "Email sent successfully!"
MSG_SEND_FAILED = "Failed to send email."
MSG_DENIED = "Error: Invalid or missing secret word."


@dataclass(frozen=True)
class ResponsePayload:
    success: bool
    message: str


def format_payload(payload, as_json):
    """Returns (body, mimetype) for a payload outside a request, e.g. on the command line."""
    if as_json:
        body = json.dumps({'success': payload.success, 'message': payload.message})
        return body, 'application/json'
    return payload.message, 'text/plain'


def render_response(message, success, as_json):
    """
    Builds the HTTP response for a finished request.

    Every outcome answers 200; success or failure is carried only in the body.
    """
    if as_json:
        return jsonify(success=success, message=message)
    return Response(message, status=200, mimetype='text/plain')
