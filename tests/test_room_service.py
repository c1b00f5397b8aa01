import threading
from datetime import datetime, timedelta

import pytest

from word_duel.exceptions import (
    CodeGenerationExhausted, GameAlreadyInProgress, RoomFull, RoomNotFound, UsernameTaken
)
from word_duel.models.room import GameMode, RoomStatus
from word_duel.services.room_service import RoomService


def test_create_seeds_host_in_waiting_room(room_service):
    room = room_service.create('alice', GameMode.DUEL)

    assert len(room.code) == 6
    assert room.code.isalnum() and room.code.upper() == room.code
    assert room.host_id == 'alice'
    assert room.status is RoomStatus.WAITING
    assert room.max_players == 2
    assert [p.username for p in room.players] == ['alice']
    assert room.settings == {'allowCustomWords': True, 'maxGuesses': 6, 'wordLength': 5}
    assert room_service.get(room.code) is room


def test_battle_royale_rooms_hold_eight(room_service):
    room = room_service.create('host', GameMode.BATTLE_ROYALE)
    for i in range(7):
        room_service.join(room.code, f'player{i}')

    with pytest.raises(RoomFull):
        room_service.join(room.code, 'latecomer')
    assert len(room.players) == 8


def test_duel_room_rejects_third_player(room_service):
    room = room_service.create('alice', GameMode.DUEL)
    room_service.join(room.code, 'bob')

    with pytest.raises(RoomFull):
        room_service.join(room.code, 'carol')
    assert [p.username for p in room.players] == ['alice', 'bob']


def test_duplicate_username_has_no_effect(room_service):
    room = room_service.create('alice', GameMode.BATTLE_ROYALE)
    before = room.to_dict()

    with pytest.raises(UsernameTaken):
        room_service.join(room.code, 'alice')
    assert room.to_dict() == before


def test_join_rejects_started_and_missing_rooms(room_service):
    room = room_service.create('alice', GameMode.DUEL)
    room.status = RoomStatus.PLAYING

    with pytest.raises(GameAlreadyInProgress):
        room_service.join(room.code, 'bob')
    with pytest.raises(RoomNotFound):
        room_service.join('ZZZZZZ', 'bob')


def test_join_updates_last_activity(room_service):
    room = room_service.create('alice', GameMode.DUEL)
    room.last_activity = datetime.now() - timedelta(minutes=5)
    stale = room.last_activity

    room_service.join(room.code, 'bob')
    assert room.last_activity > stale


def test_last_player_leaving_deletes_room(room_service):
    room = room_service.create('alice', GameMode.DUEL)

    assert room_service.leave(room.code, 'alice') is True
    assert room_service.get(room.code) is None
    assert room_service.leave(room.code, 'alice') is False
    with pytest.raises(RoomNotFound):
        with room_service.locked(room.code):
            pass


def test_host_leaving_hands_host_to_next_in_join_order(room_service):
    room = room_service.create('alice', GameMode.BATTLE_ROYALE)
    room_service.join(room.code, 'bob')
    room_service.join(room.code, 'carol')

    assert room_service.leave(room.code, 'alice') is True
    assert room.host_id == 'bob'
    assert [p.username for p in room.players] == ['bob', 'carol']


def test_leave_unknown_player_returns_false(room_service):
    room = room_service.create('alice', GameMode.DUEL)
    assert room_service.leave(room.code, 'mallory') is False
    assert room_service.get(room.code) is room


def test_sweep_only_removes_rooms_past_max_age(room_service):
    now = datetime.now()
    old = room_service.create('alice', GameMode.DUEL)
    fresh = room_service.create('bob', GameMode.DUEL)
    old.created_at = now - timedelta(hours=25)
    fresh.created_at = now - timedelta(hours=23)

    expired = room_service.sweep(24 * 3600, now=now)

    assert expired == [old.code]
    assert room_service.get(old.code) is None
    assert room_service.get(fresh.code) is fresh


def test_code_generation_gives_up_after_cap():
    service = RoomService(code_generator=lambda: 'AAAAAA', max_code_attempts=5)
    service.create('alice', GameMode.DUEL)

    with pytest.raises(CodeGenerationExhausted):
        service.create('bob', GameMode.DUEL)
    assert service.get_total_room_count() == 1


def test_counts_and_stats(room_service):
    waiting = room_service.create('alice', GameMode.DUEL)
    playing = room_service.create('bob', GameMode.BATTLE_ROYALE)
    playing.status = RoomStatus.PLAYING

    assert room_service.get_total_room_count() == 2
    assert room_service.get_active_room_count() == 2
    assert room_service.count_by_status() == {'waiting': 1, 'playing': 1, 'finished': 0}

    stats = room_service.get_room_stats(waiting.code)
    assert stats['playerCount'] == 1
    assert stats['activePlayers'] == 1
    assert room_service.get_room_stats('NOPE00') is None


def test_concurrent_joins_never_overfill(room_service):
    room = room_service.create('host', GameMode.BATTLE_ROYALE)
    outcomes = []
    outcomes_lock = threading.Lock()

    def attempt(i):
        try:
            room_service.join(room.code, f'player{i}')
            result = 'joined'
        except RoomFull:
            result = 'full'
        with outcomes_lock:
            outcomes.append(result)

    threads = [threading.Thread(target=attempt, args=(i,)) for i in range(20)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert outcomes.count('joined') == 7
    assert outcomes.count('full') == 13
    assert len(room.players) == 8


def test_sweep_waits_for_room_lock(room_service):
    room = room_service.create('alice', GameMode.DUEL)
    room.created_at = datetime.now() - timedelta(days=2)
    swept = []

    with room_service.locked(room.code):
        sweeper = threading.Thread(target=lambda: swept.extend(room_service.sweep(60)))
        sweeper.start()
        sweeper.join(0.2)
        assert sweeper.is_alive()
        assert room_service.get(room.code) is room

    sweeper.join(2)
    assert swept == [room.code]
    assert room_service.get(room.code) is None
