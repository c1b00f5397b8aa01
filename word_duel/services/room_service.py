"""
Room Service

Owns the in-memory room table: creation, lookup, membership changes,
deletion and the age-based sweep.
"""

import random
import string
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Dict, Iterator, List, Optional

from ..config.game_settings import (
    BATTLE_ROYALE_MAX_PLAYERS, DUEL_MAX_PLAYERS, MAX_CODE_ATTEMPTS, MAX_GUESSES,
    ROOM_CODE_LENGTH, WORD_LENGTH
)
from ..exceptions import (
    CodeGenerationExhausted, GameAlreadyInProgress, RoomFull, RoomNotFound, UsernameTaken
)
from ..models.room import GameMode, Player, Room, RoomStatus
from ..utils.game_logger import game_logger


def generate_room_code(length: int = ROOM_CODE_LENGTH) -> str:
    return ''.join(random.choices(string.ascii_uppercase + string.digits, k=length))


class RoomService:
    """
    Thread-safe in-memory room registry.

    Every room has its own re-entrant lock. Callers that read-modify-write a
    room go through `locked(code)`; the registry lock only guards the dict
    structure and is always taken after (never while waiting for) a room lock.
    """

    def __init__(self,
                 max_guesses: int = MAX_GUESSES,
                 word_length: int = WORD_LENGTH,
                 duel_max_players: int = DUEL_MAX_PLAYERS,
                 battle_royale_max_players: int = BATTLE_ROYALE_MAX_PLAYERS,
                 code_generator: Optional[Callable[[], str]] = None,
                 max_code_attempts: int = MAX_CODE_ATTEMPTS):
        self.rooms: Dict[str, Room] = {}
        self._room_locks: Dict[str, threading.RLock] = {}
        self._registry_lock = threading.Lock()

        self.max_guesses = max_guesses
        self.word_length = word_length
        self.max_players = {
            GameMode.DUEL: duel_max_players,
            GameMode.BATTLE_ROYALE: battle_royale_max_players
        }
        self._code_generator = code_generator or generate_room_code
        self.max_code_attempts = max_code_attempts

    # ---------- locking ---------- #

    @contextmanager
    def locked(self, code: str) -> Iterator[Room]:
        """
        Hold the room's lock for the duration of the block and yield the room.

        Raises:
            RoomNotFound: If no room is registered under the code, including
                when it was deleted while this caller waited for the lock
        """
        with self._registry_lock:
            lock = self._room_locks.get(code)
        if lock is None:
            raise RoomNotFound(code)

        with lock:
            with self._registry_lock:
                room = self.rooms.get(code)
                still_registered = self._room_locks.get(code) is lock
            if room is None or not still_registered:
                raise RoomNotFound(code)
            yield room

    # ---------- public API ---------- #

    def create(self, username: str, mode: GameMode = GameMode.DUEL) -> Room:
        """Register a new waiting room seeded with its host."""
        with self._registry_lock:
            code = self._fresh_code()
            room = Room(
                code=code,
                host_id=username,
                mode=mode,
                max_players=self.max_players[mode],
                settings={
                    'allowCustomWords': True,
                    'maxGuesses': self.max_guesses,
                    'wordLength': self.word_length
                },
                players=[Player(username=username)]
            )
            self.rooms[code] = room
            self._room_locks[code] = threading.RLock()

        game_logger.log_room_event('room_created', code, username=username, mode=mode.value)
        return room

    def get(self, code: str) -> Optional[Room]:
        with self._registry_lock:
            return self.rooms.get(code)

    def join(self, code: str, username: str) -> Room:
        with self.locked(code) as room:
            self.add_player(room, username)
            return room

    def add_player(self, room: Room, username: str) -> Player:
        """Append a player to a room whose lock the caller holds."""
        if room.status is not RoomStatus.WAITING:
            raise GameAlreadyInProgress()
        if room.is_full():
            raise RoomFull(room.max_players)
        if room.has_player(username):
            raise UsernameTaken()

        player = Player(username=username)
        room.players.append(player)
        room.touch()

        game_logger.log_room_event('player_joined', room.code,
                                   username=username, total_players=len(room.players))
        return player

    def leave(self, code: str, username: str) -> bool:
        """Remove a player; returns whether anyone was removed."""
        try:
            with self.locked(code) as room:
                return self.remove_player(room, username)
        except RoomNotFound:
            return False

    def remove_player(self, room: Room, username: str) -> bool:
        """
        Remove a player from a room whose lock the caller holds.

        Deletes the room when it becomes empty, otherwise hands the host role
        to the earliest-joined remaining player if the host left.
        """
        player = room.get_player(username)
        if player is None:
            return False

        room.players.remove(player)
        room.touch()

        if not room.players:
            self._discard(room.code)
            game_logger.log_room_event('room_deleted', room.code, reason='no_players_left')
            return True

        if room.host_id == username:
            room.host_id = room.players[0].username
            game_logger.log_room_event('host_changed', room.code, new_host=room.host_id)

        game_logger.log_room_event('player_left', room.code,
                                   username=username, remaining_players=len(room.players))
        return True

    def sweep(self, max_age_seconds: float, now: Optional[datetime] = None) -> List[str]:
        """
        Delete every room older than max_age_seconds.

        Returns:
            List[str]: Codes of the deleted rooms
        """
        now = now or datetime.now()
        with self._registry_lock:
            candidates = [
                code for code, room in self.rooms.items()
                if (now - room.created_at).total_seconds() > max_age_seconds
            ]

        expired = []
        for code in candidates:
            try:
                with self.locked(code) as room:
                    age = (now - room.created_at).total_seconds()
                    if age <= max_age_seconds:
                        continue
                    self._discard(code)
            except RoomNotFound:
                continue
            expired.append(code)
            game_logger.log_room_event('room_expired', code, age_hours=round(age / 3600, 2))

        if expired:
            game_logger.logger.info(f"Cleaned up {len(expired)} expired rooms")
        return expired

    # ---------- statistics ---------- #

    def get_room_stats(self, code: str) -> Optional[Dict]:
        try:
            with self.locked(code) as room:
                return room.stats()
        except RoomNotFound:
            return None

    def list_codes(self) -> List[str]:
        with self._registry_lock:
            return list(self.rooms.keys())

    def room_summaries(self) -> List[Dict]:
        summaries = []
        for code in self.list_codes():
            try:
                with self.locked(code) as room:
                    summaries.append(room.summary())
            except RoomNotFound:
                continue
        return summaries

    def get_total_room_count(self) -> int:
        with self._registry_lock:
            return len(self.rooms)

    def get_active_room_count(self) -> int:
        with self._registry_lock:
            return len([room for room in self.rooms.values() if room.players])

    def count_by_status(self) -> Dict[str, int]:
        counts = {status.value: 0 for status in RoomStatus}
        with self._registry_lock:
            for room in self.rooms.values():
                counts[room.status.value] += 1
        return counts

    # ---------- helpers ---------- #

    def _fresh_code(self) -> str:
        """Generate an unused code; the caller holds the registry lock."""
        for _ in range(self.max_code_attempts):
            code = self._code_generator()
            if code not in self.rooms:
                return code
        game_logger.logger.warning(
            f"Room code generation exhausted after {self.max_code_attempts} attempts"
        )
        raise CodeGenerationExhausted()

    def _discard(self, code: str):
        with self._registry_lock:
            self.rooms.pop(code, None)
            self._room_locks.pop(code, None)


# Global service instance
_room_service = None


def get_room_service() -> Optional[RoomService]:
    """Get the global room service instance."""
    return _room_service


def initialize_room_service(**kwargs) -> RoomService:
    """Initialize the global room service instance."""
    global _room_service
    _room_service = RoomService(**kwargs)
    return _room_service
