"""
Room Data Models

Contains the room, player and guess data structures and their wire format.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional


class GameMode(Enum):
    """Room game mode; fixed when the room is created."""
    DUEL = "duel"
    BATTLE_ROYALE = "battleRoyale"


class RoomStatus(Enum):
    WAITING = "waiting"
    PLAYING = "playing"
    FINISHED = "finished"


class PlayerOutcome(Enum):
    """
    Where a player stands in the current game.

    WON is a Duel win (the game ends with the player still in it).
    WON_AND_RETIRED is a Battle Royale win: the player stops guessing while
    the others keep playing.
    """
    ACTIVE = "active"
    WON = "won"
    WON_AND_RETIRED = "wonAndRetired"
    ELIMINATED = "eliminated"


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass
class Guess:
    word: str
    attempt: int
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict:
        return {
            'word': self.word,
            'attempt': self.attempt,
            'timestamp': _iso(self.timestamp)
        }


@dataclass
class Player:
    """A member of exactly one room; the username doubles as the player id."""
    username: str
    score: int = 0
    outcome: PlayerOutcome = PlayerOutcome.ACTIVE
    guesses: List[Guess] = field(default_factory=list)
    joined_at: datetime = field(default_factory=datetime.now)

    @property
    def won(self) -> bool:
        return self.outcome in (PlayerOutcome.WON, PlayerOutcome.WON_AND_RETIRED)

    @property
    def eliminated(self) -> bool:
        return self.outcome in (PlayerOutcome.WON_AND_RETIRED, PlayerOutcome.ELIMINATED)

    @property
    def is_active(self) -> bool:
        return self.outcome is PlayerOutcome.ACTIVE

    def reset(self):
        """Clear per-game state before a new game."""
        self.score = 0
        self.outcome = PlayerOutcome.ACTIVE
        self.guesses = []

    def to_dict(self) -> Dict:
        return {
            'id': self.username,
            'username': self.username,
            'score': self.score,
            'eliminated': self.eliminated,
            'won': self.won,
            'outcome': self.outcome.value,
            'guesses': [guess.to_dict() for guess in self.guesses],
            'joinedAt': _iso(self.joined_at)
        }

    def to_public_dict(self) -> Dict:
        """Redacted view without guesses."""
        return {
            'username': self.username,
            'score': self.score,
            'eliminated': self.eliminated,
            'won': self.won
        }


@dataclass
class Room:
    """Server-side room state. Players are kept in join order."""
    code: str
    host_id: str
    mode: GameMode
    max_players: int
    settings: Dict
    status: RoomStatus = RoomStatus.WAITING
    solution_word: str = ''
    winner: Optional[str] = None
    players: List[Player] = field(default_factory=list)
    round_number: int = 1
    game_start_time: Optional[datetime] = None
    created_at: datetime = field(default_factory=datetime.now)
    last_activity: datetime = field(default_factory=datetime.now)

    def get_player(self, username: str) -> Optional[Player]:
        for player in self.players:
            if player.username == username:
                return player
        return None

    def has_player(self, username: str) -> bool:
        return self.get_player(username) is not None

    def active_players(self) -> List[Player]:
        return [player for player in self.players if player.is_active]

    def is_full(self) -> bool:
        return len(self.players) >= self.max_players

    def touch(self, now: Optional[datetime] = None):
        self.last_activity = now or datetime.now()

    def finish(self, winner: Optional[str]):
        self.status = RoomStatus.FINISHED
        self.winner = winner

    def to_dict(self) -> Dict:
        """Full snapshot broadcast on room-updated."""
        return {
            'code': self.code,
            'hostId': self.host_id,
            'mode': self.mode.value,
            'maxPlayers': self.max_players,
            'status': self.status.value,
            'solutionWord': self.solution_word,
            'winner': self.winner,
            'players': self.players_to_dict(),
            'roundNumber': self.round_number,
            'gameStartTime': _iso(self.game_start_time),
            'createdAt': _iso(self.created_at),
            'lastActivity': _iso(self.last_activity),
            'settings': dict(self.settings)
        }

    def players_to_dict(self) -> List[Dict]:
        return [player.to_dict() for player in self.players]

    def to_public_dict(self, include_timestamps: bool = False) -> Dict:
        """Redacted view: no guesses and no solution word."""
        public = {
            'code': self.code,
            'mode': self.mode.value,
            'status': self.status.value,
            'players': [player.to_public_dict() for player in self.players],
            'maxPlayers': self.max_players,
            'hostId': self.host_id
        }
        if include_timestamps:
            for entry, player in zip(public['players'], self.players):
                entry['joinedAt'] = _iso(player.joined_at)
            public['createdAt'] = _iso(self.created_at)
            public['lastActivity'] = _iso(self.last_activity)
        return public

    def stats(self) -> Dict:
        return {
            'code': self.code,
            'playerCount': len(self.players),
            'maxPlayers': self.max_players,
            'status': self.status.value,
            'mode': self.mode.value,
            'createdAt': _iso(self.created_at),
            'lastActivity': _iso(self.last_activity),
            'gameStartTime': _iso(self.game_start_time),
            'activePlayers': len([p for p in self.players if not p.eliminated]),
            'eliminatedPlayers': len([p for p in self.players if p.eliminated])
        }

    def summary(self) -> Dict:
        """Row used by the room listing endpoint."""
        return {
            'code': self.code,
            'mode': self.mode.value,
            'status': self.status.value,
            'playerCount': len(self.players),
            'maxPlayers': self.max_players,
            'createdAt': _iso(self.created_at),
            'lastActivity': _iso(self.last_activity)
        }
