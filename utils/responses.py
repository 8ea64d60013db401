# utils/responses.py
from flask import current_app, jsonify, request


def error_response(message, status, exc=None):
    """JSON error body; exception details are only exposed in debug mode."""
    payload = {'error': message}
    if exc is not None and current_app.debug:
        payload['details'] = str(exc)
    return jsonify(payload), status


def get_json_object():
    """Request body as a dict, or None when it is missing or not a JSON object."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None
