from datetime import datetime, timedelta

from word_duel.models.room import GameMode
from word_duel.services.cleanup_worker import RoomCleanupWorker
from word_duel.services.room_service import get_room_service
from word_duel.services.session_service import SessionRegistry, get_session_registry

from tests.conftest import received


def test_run_once_removes_old_rooms_and_sessions(room_service):
    sessions = SessionRegistry()
    old = room_service.create('alice', GameMode.DUEL)
    fresh = room_service.create('bob', GameMode.DUEL)
    old.created_at = datetime.now() - timedelta(hours=25)
    sessions.bind('sid-1', old.code, 'alice')
    sessions.bind('sid-2', fresh.code, 'bob')

    worker = RoomCleanupWorker(room_service, 24 * 3600, 300, session_registry=sessions)

    assert worker.run_once() == [old.code]
    assert room_service.get(old.code) is None
    assert sessions.get('sid-1') is None
    assert sessions.get('sid-2') is not None


def test_expired_room_is_announced(client, socket_client):
    code = client.post('/api/v1/create-room', json={'username': 'alice'}).get_json()['code']
    sock = socket_client()
    sock.emit('join-room', {'username': 'alice', 'roomCode': code})
    received(sock)

    room_service = get_room_service()
    room_service.get(code).created_at = datetime.now() - timedelta(days=2)
    worker = RoomCleanupWorker(room_service, 3600, 300,
                               session_registry=get_session_registry(),
                               socketio=client.application.socketio)
    worker.run_once()

    assert received(sock, 'room-expired') == [{'roomCode': code}]
    assert get_session_registry().sid_for(code, 'alice') is None


def test_start_and_stop(room_service):
    worker = RoomCleanupWorker(room_service, 3600, 0.01)

    worker.start()
    assert worker.running
    worker.stop()
    assert not worker.running
