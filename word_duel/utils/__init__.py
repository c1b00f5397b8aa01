"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import require_json_fields, websocket_payload_required
from .helpers import normalize_room_code, parse_game_mode, validate_username
from .game_logger import game_logger

__all__ = [
    'require_json_fields', 'websocket_payload_required',
    'normalize_room_code', 'parse_game_mode', 'validate_username',
    'game_logger'
]
