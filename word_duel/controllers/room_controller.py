"""
Room Controller

Handles room creation, joining and lookup over HTTP, plus the health check.
"""

import time
from datetime import datetime
from flask import Blueprint, request, jsonify

from ..exceptions import WordDuelError
from ..services.room_service import get_room_service
from ..services.session_service import get_session_registry
from ..utils.decorators import require_json_fields
from ..utils.game_logger import game_logger
from ..utils.helpers import normalize_room_code, parse_game_mode, validate_username

room_bp = Blueprint('room', __name__)

_started_at = time.time()


def _service_unavailable():
    return jsonify({
        'success': False,
        'error': 'Room service unavailable'
    }), 500


@room_bp.route('/create-room', methods=['POST'])
@require_json_fields('username')
def create_room(data):
    """Create a waiting room with the requester as host."""
    room_service = get_room_service()
    if not room_service:
        return _service_unavailable()

    mode_value = data.get('mode', 'duel')
    game_logger.log_user_action(request, 'create_room', mode=mode_value)

    try:
        username = validate_username(data['username'])
        mode = parse_game_mode(mode_value)
        if mode is None:
            error_response = {
                'success': False,
                'error': 'Mode must be either "duel" or "battleRoyale"'
            }
            game_logger.log_server_response(request, 'create_room', False, error_response)
            return jsonify(error_response), 400

        room = room_service.create(username, mode)
        response_data = {
            'code': room.code,
            'mode': room.mode.value,
            'maxPlayers': room.max_players,
            'settings': dict(room.settings)
        }
        game_logger.log_server_response(request, 'create_room', True, response_data, room.code)
        return jsonify(response_data)

    except WordDuelError as e:
        error_response = {'success': False, 'error': e.message}
        game_logger.log_server_response(request, 'create_room', False, error_response)
        return jsonify(error_response), e.http_status
    except Exception as e:
        game_logger.log_error(e, 'create_room', request=request)
        error_response = {'success': False, 'error': 'Failed to create room'}
        game_logger.log_server_response(request, 'create_room', False, error_response)
        return jsonify(error_response), 500


@room_bp.route('/join-room', methods=['POST'])
@require_json_fields('code', 'username')
def join_room(data):
    """Add a player to a waiting room."""
    room_service = get_room_service()
    if not room_service:
        return _service_unavailable()

    code = normalize_room_code(data['code'])
    game_logger.log_user_action(request, 'join_room', code)

    try:
        username = validate_username(data['username'])
        with room_service.locked(code) as room:
            room_service.add_player(room, username)
            response_data = {
                'success': True,
                'room': room.to_public_dict()
            }
        game_logger.log_server_response(request, 'join_room', True, response_data, code)
        return jsonify(response_data)

    except WordDuelError as e:
        error_response = {'success': False, 'error': e.message}
        game_logger.log_server_response(request, 'join_room', False, error_response, code)
        return jsonify(error_response), e.http_status
    except Exception as e:
        game_logger.log_error(e, 'join_room', request=request, room_code=code)
        error_response = {'success': False, 'error': 'Failed to join room'}
        game_logger.log_server_response(request, 'join_room', False, error_response, code)
        return jsonify(error_response), 500


@room_bp.route('/room/<code>', methods=['GET'])
def get_room(code):
    """Redacted room view plus statistics."""
    room_service = get_room_service()
    if not room_service:
        return _service_unavailable()

    code = normalize_room_code(code)
    try:
        with room_service.locked(code) as room:
            response_data = {
                'room': room.to_public_dict(include_timestamps=True),
                'stats': room.stats()
            }
        return jsonify(response_data)
    except WordDuelError as e:
        return jsonify({'success': False, 'error': e.message}), e.http_status


@room_bp.route('/rooms', methods=['GET'])
def list_rooms():
    """All rooms with aggregate counts by status."""
    room_service = get_room_service()
    if not room_service:
        return _service_unavailable()

    counts = room_service.count_by_status()
    return jsonify({
        'rooms': room_service.room_summaries(),
        'stats': {
            'total': room_service.get_total_room_count(),
            'active': room_service.get_active_room_count(),
            **counts
        },
        'timestamp': datetime.now().isoformat()
    })


@room_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    room_service = get_room_service()
    sessions = get_session_registry()

    response_data = {
        'status': 'OK' if room_service else 'degraded',
        'timestamp': datetime.now().isoformat(),
        'uptime': round(time.time() - _started_at, 1),
        'rooms': room_service.get_total_room_count() if room_service else 0,
        'connected_players': sessions.count() if sessions else 0,
        'log_stats': game_logger.get_log_stats()
    }
    return jsonify(response_data), 200 if room_service else 503
