"""
Payload Decorators

Contains decorators that check HTTP bodies and WebSocket payloads before a
handler runs.
"""

from functools import wraps
from flask import request, jsonify
from flask_socketio import emit


def require_json_fields(*fields):
    """
    Decorator to require a JSON body carrying the given fields.

    The parsed body is passed to the view as the `data` keyword argument.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                return jsonify({
                    'success': False,
                    'error': 'JSON body required'
                }), 400

            missing = [name for name in fields if data.get(name) in (None, '')]
            if missing:
                return jsonify({
                    'success': False,
                    'error': f"Missing required field(s): {', '.join(missing)}"
                }), 400

            kwargs['data'] = data
            return f(*args, **kwargs)

        return decorated_function
    return decorator


def websocket_payload_required(*fields, error_event='room-error'):
    """Decorator for WebSocket handlers: reply privately when fields are missing."""
    def decorator(f):
        @wraps(f)
        def decorated_function(data=None, *args, **kwargs):
            if not isinstance(data, dict):
                emit(error_event, {'message': 'Invalid payload'})
                return

            missing = [name for name in fields if data.get(name) in (None, '')]
            if missing:
                emit(error_event, {'message': f"Missing required field(s): {', '.join(missing)}"})
                return

            return f(data, *args, **kwargs)

        return decorated_function
    return decorator
