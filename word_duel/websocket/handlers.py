"""
WebSocket Event Handlers

Binds inbound Socket.IO events to the room service and game engine and fans
the resulting state out to every connection subscribed to the room.

Each handler does its reads and writes inside RoomService.locked(code) and
builds the outbound payloads there; broadcasting happens after the lock is
released.
"""

from typing import Dict, List, Optional, Tuple
from flask import request
from flask_socketio import emit, join_room, leave_room

from ..exceptions import (
    GameAlreadyInProgress, PlayerNotFoundOrEliminated, RoomNotFound, UsernameTaken, WordDuelError
)
from ..models.room import GameMode, Room, RoomStatus
from ..services.game_engine import GuessResult, get_game_engine
from ..services.room_service import get_room_service
from ..services.session_service import get_session_registry
from ..utils.decorators import websocket_payload_required
from ..utils.game_logger import game_logger
from ..utils.helpers import normalize_room_code, validate_username

Event = Tuple[str, Dict]


def game_over_payload(room: Room, winner: Optional[str], reason: Optional[str] = None) -> Dict:
    payload = {
        'winner': winner,
        'solutionWord': room.solution_word,
        'status': room.status.value,
        'mode': room.mode.value,
        'players': room.players_to_dict()
    }
    if reason:
        payload['reason'] = reason
    return payload


def guess_events(room: Room, result: GuessResult) -> List[Event]:
    """Outbound events for one processed guess, in broadcast order."""
    events: List[Event] = []
    username = result.player.username

    if result.game_over:
        events.append(('game-over', game_over_payload(room, result.winner)))
    elif result.eliminated and room.mode is GameMode.BATTLE_ROYALE:
        events.append(('player-eliminated', {
            'eliminatedPlayer': username,
            'remainingPlayers': result.remaining_players,
            'players': room.players_to_dict()
        }))

    events.append(('guess-submitted', {
        'username': username,
        'guess': result.player.guesses[-1].word,
        'attemptNumber': len(result.player.guesses),
        'players': room.players_to_dict(),
        'won': result.won,
        'eliminated': result.eliminated
    }))
    return events


def remove_member(room_code: str, username: str) -> Optional[List[Event]]:
    """
    Shared path for leave-room and disconnect.

    Returns:
        Events to broadcast to the room, or None if nobody was removed
    """
    room_service = get_room_service()
    game_engine = get_game_engine()

    events: List[Event] = []
    try:
        with room_service.locked(room_code) as room:
            if not room_service.remove_player(room, username):
                return None
            if room.players:
                departure = game_engine.resolve_departure(room)
                if departure is not None:
                    events.append(('game-over', game_over_payload(room, departure.winner, 'player_left')))
                events.append(('room-updated', room.to_dict()))
    except RoomNotFound:
        return None

    get_session_registry().unbind_member(room_code, username)
    return events


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    def broadcast(room_code: str, events: List[Event]):
        for name, payload in events:
            socketio.emit(name, payload, room=room_code)

    def reply_unexpected(error: Exception, action: str, error_event: str, message: str, **context):
        game_logger.log_error(error, action, request=request, **context)
        emit(error_event, {'message': message})

    @socketio.on('connect')
    def handle_connect(auth=None):
        """Handle WebSocket connection."""
        game_logger.log_game_event('socket_connected', sid=request.sid,
                                   address=request.remote_addr)

    @socketio.on('disconnect')
    def handle_disconnect(reason=None):
        """Remove the player this connection spoke for, exactly like leave-room."""
        sid = request.sid
        binding = get_session_registry().unbind(sid)
        game_logger.log_game_event('socket_disconnected', binding.room_code if binding else None,
                                   sid=sid, username=binding.username if binding else None)
        if binding is None:
            return

        try:
            events = remove_member(binding.room_code, binding.username)
        except Exception as e:
            game_logger.log_error(e, 'disconnect_cleanup', room_code=binding.room_code)
            return

        if events is not None:
            broadcast(binding.room_code, events)

    @socketio.on('join-room')
    @websocket_payload_required('username', 'roomCode', error_event='room-error')
    def handle_join_room(data):
        """
        Subscribe to a waiting room, adding the player if they are new to it.

        A player already in the room (e.g. added over HTTP) may attach a
        connection, but a username another live connection speaks for is
        rejected. Once the join is accepted, the membership this connection
        held before is removed before the new channel is joined.
        """
        sid = request.sid
        room_code = normalize_room_code(data.get('roomCode'))
        game_logger.log_game_event('socket_join_room', room_code, sid=sid,
                                   username=data.get('username'))

        room_service = get_room_service()
        sessions = get_session_registry()
        try:
            username = validate_username(data.get('username'))
            with room_service.locked(room_code) as room:
                if room.status is not RoomStatus.WAITING:
                    raise GameAlreadyInProgress()
                bound_sid = sessions.sid_for(room_code, username)
                if bound_sid is not None and bound_sid != sid:
                    raise UsernameTaken()
                if not room.has_player(username):
                    room_service.add_player(room, username)
                room.touch()
                previous = sessions.bind(sid, room_code, username)
        except WordDuelError as e:
            emit('room-error', {'message': e.message})
            return
        except Exception as e:
            reply_unexpected(e, 'join_room', 'room-error', 'Failed to join room', room_code=room_code)
            return

        if previous is not None:
            if previous.room_code != room_code:
                leave_room(previous.room_code)
            events = remove_member(previous.room_code, previous.username)
            if events:
                broadcast(previous.room_code, events)

        join_room(room_code)
        try:
            with room_service.locked(room_code) as room:
                snapshot = room.to_dict()
        except RoomNotFound:
            return
        broadcast(room_code, [('room-updated', snapshot)])

        game_logger.log_game_event('socket_joined_room', room_code, sid=sid, username=username)

    @socketio.on('start-game')
    @websocket_payload_required('roomCode', error_event='game-error')
    def handle_start_game(data):
        room_code = normalize_room_code(data.get('roomCode'))
        custom_word = data.get('customWord')
        game_logger.log_game_event('start_game_requested', room_code, sid=request.sid,
                                   custom_word=bool(custom_word))

        try:
            with get_room_service().locked(room_code) as room:
                get_game_engine().start_game(room, custom_word)
                payload = {
                    'solutionWord': room.solution_word,
                    'status': room.status.value,
                    'mode': room.mode.value,
                    'players': room.players_to_dict(),
                    'settings': dict(room.settings)
                }
        except WordDuelError as e:
            emit('game-error', {'message': e.message})
            return
        except Exception as e:
            reply_unexpected(e, 'start_game', 'game-error', 'Failed to start game', room_code=room_code)
            return

        broadcast(room_code, [('game-started', payload)])

    @socketio.on('submit-guess')
    @websocket_payload_required('roomCode', 'username', 'guess', error_event='game-error')
    def handle_submit_guess(data):
        room_code = normalize_room_code(data.get('roomCode'))
        username = data.get('username')
        attempt_number = data.get('attemptNumber')
        game_logger.log_game_event('guess_submitted', room_code, sid=request.sid,
                                   username=username, attempt_number=attempt_number)

        try:
            with get_room_service().locked(room_code) as room:
                result = get_game_engine().submit_guess(room, username, data.get('guess'), attempt_number)
                events = guess_events(room, result)
        except PlayerNotFoundOrEliminated:
            return
        except WordDuelError as e:
            emit('game-error', {'message': e.message})
            return
        except Exception as e:
            reply_unexpected(e, 'submit_guess', 'game-error', 'Failed to submit guess',
                             room_code=room_code, username=username)
            return

        broadcast(room_code, events)

    @socketio.on('leave-room')
    @websocket_payload_required('roomCode', 'username', error_event='room-error')
    def handle_leave_room(data):
        room_code = normalize_room_code(data.get('roomCode'))
        username = data.get('username')
        game_logger.log_game_event('player_leaving_room', room_code, sid=request.sid,
                                   username=username)

        try:
            events = remove_member(room_code, username)
        except Exception as e:
            reply_unexpected(e, 'leave_room', 'room-error', 'Failed to leave room',
                             room_code=room_code, username=username)
            return

        if events is None:
            return

        leave_room(room_code)
        broadcast(room_code, events)
        game_logger.log_game_event('player_left_room', room_code, sid=request.sid, username=username)

    @socketio.on('get-room-status')
    @websocket_payload_required('roomCode', error_event='room-error')
    def handle_get_room_status(data):
        room_code = normalize_room_code(data.get('roomCode'))
        try:
            with get_room_service().locked(room_code) as room:
                payload = {'room': room.to_public_dict(), 'stats': room.stats()}
        except WordDuelError as e:
            emit('room-error', {'message': e.message})
            return
        except Exception as e:
            reply_unexpected(e, 'get_room_status', 'room-error', 'Failed to get room status',
                             room_code=room_code)
            return

        emit('room-status', payload)

    @socketio.on('reset-room')
    @websocket_payload_required('roomCode', error_event='room-error')
    def handle_reset_room(data):
        """Send a finished room back to its lobby."""
        room_code = normalize_room_code(data.get('roomCode'))
        try:
            with get_room_service().locked(room_code) as room:
                get_game_engine().reset_room(room)
                snapshot = room.to_dict()
        except WordDuelError as e:
            emit('room-error', {'message': e.message})
            return
        except Exception as e:
            reply_unexpected(e, 'reset_room', 'room-error', 'Failed to reset room', room_code=room_code)
            return

        broadcast(room_code, [('room-updated', snapshot)])
