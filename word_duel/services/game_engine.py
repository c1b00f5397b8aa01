"""
Game Engine

State transitions for a single room: starting a game, applying guesses and
resolving wins, eliminations and draws for Duel and Battle Royale.

The engine keeps no state of its own. Callers hold the room's lock (see
RoomService.locked) while calling in, and every method finishes validating
before it writes to the room.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from ..config.game_settings import MAX_GUESSES, MIN_PLAYERS_TO_START, WORD_LENGTH
from ..exceptions import (
    GameAlreadyInProgress, GameNotInProgress, InsufficientPlayers, InvalidCustomWord,
    InvalidGuessFormat, PlayerNotFoundOrEliminated
)
from ..models.room import GameMode, Guess, Player, PlayerOutcome, Room, RoomStatus
from ..utils.game_logger import game_logger
from .word_service import WordService

MODE_LABELS = {
    GameMode.DUEL: 'Duel',
    GameMode.BATTLE_ROYALE: 'Battle Royale'
}


@dataclass
class GuessResult:
    """Outcome of one guess, bundled with the mutated player and room."""
    player: Player
    room: Room
    won: bool = False
    eliminated: bool = False
    game_over: bool = False
    winner: Optional[str] = None

    @property
    def continues(self) -> bool:
        return not (self.won or self.eliminated)

    @property
    def remaining_players(self) -> int:
        return len(self.room.active_players())


@dataclass
class DepartureResult:
    """Game end caused by a player leaving mid-game."""
    room: Room
    winner: Optional[str]


class GameEngine:
    """
    Core game rules.

    This class handles:
    - Waiting -> Playing with a custom or random solution word
    - Guess recording and exact-match checks
    - Per-mode end-of-game policy (Duel win/draw, Battle Royale last standing)
    - Finished -> Waiting when a room returns to its lobby
    """

    def __init__(self,
                 word_service: WordService,
                 max_guesses: int = MAX_GUESSES,
                 word_length: int = WORD_LENGTH,
                 min_players: int = MIN_PLAYERS_TO_START):
        self.word_service = word_service
        self.max_guesses = max_guesses
        self.word_length = word_length
        self.min_players = min_players

    def start_game(self, room: Room, custom_word: Optional[str] = None) -> Room:
        """
        Move a waiting room into play.

        Raises:
            GameAlreadyInProgress: Room is not waiting
            InsufficientPlayers: Fewer than the minimum players joined
            InvalidCustomWord: Custom word is not a dictionary word of the right length
        """
        if room.status is not RoomStatus.WAITING:
            raise GameAlreadyInProgress()

        if len(room.players) < self.min_players:
            raise InsufficientPlayers(
                f'{MODE_LABELS[room.mode]} mode requires at least {self.min_players} players'
            )

        custom = custom_word.strip().upper() if isinstance(custom_word, str) else ''
        if custom:
            if not room.settings.get('allowCustomWords', True):
                raise InvalidCustomWord('Custom words are disabled for this room')
            if not self.word_service.is_valid(custom, self.word_length):
                raise InvalidCustomWord()
            solution_word = custom
        else:
            solution_word = self.word_service.random_word(self.word_length).upper()

        now = datetime.now()
        room.solution_word = solution_word
        room.winner = None
        for player in room.players:
            player.reset()
        room.status = RoomStatus.PLAYING
        room.game_start_time = now
        room.round_number = 1
        room.touch(now)

        game_logger.log_game_event('game_started', room.code,
                                   custom_word=bool(custom), player_count=len(room.players),
                                   mode=room.mode.value)
        return room

    def validate_guess(self, guess) -> str:
        """Return the upper-cased guess or raise InvalidGuessFormat."""
        if not self.word_service.is_valid_format(guess, self.word_length):
            raise InvalidGuessFormat(f'Guess must be exactly {self.word_length} letters')
        return guess.upper()

    def submit_guess(self, room: Room, username: str, guess,
                     attempt_number: Optional[int] = None) -> GuessResult:
        """
        Record a guess and resolve its consequences.

        Raises:
            PlayerNotFoundOrEliminated: Unknown player or one who can no longer guess
            GameNotInProgress: Room is not playing
            InvalidGuessFormat: Guess is not exactly word_length letters
        """
        player = room.get_player(username)
        if player is None or not player.is_active:
            raise PlayerNotFoundOrEliminated()

        if room.status is not RoomStatus.PLAYING:
            raise GameNotInProgress()

        word = self.validate_guess(guess)
        if not isinstance(attempt_number, int) or isinstance(attempt_number, bool) or attempt_number < 1:
            attempt_number = len(player.guesses) + 1

        now = datetime.now()
        player.guesses.append(Guess(word=word, attempt=attempt_number, timestamp=now))
        room.touch(now)
        result = GuessResult(player=player, room=room)

        if word == room.solution_word:
            result.won = True
            player.score = attempt_number
            game_logger.log_game_event('player_won', room.code,
                                       username=username, attempts=attempt_number)
            if room.mode is GameMode.DUEL:
                player.outcome = PlayerOutcome.WON
                self._finish(room, result, username)
            else:
                player.outcome = PlayerOutcome.WON_AND_RETIRED
                result.eliminated = True
                self._resolve_battle_royale(room, result)

        elif len(player.guesses) >= self.max_guesses:
            result.eliminated = True
            player.outcome = PlayerOutcome.ELIMINATED
            game_logger.log_game_event('player_eliminated', room.code,
                                       username=username, reason='out_of_attempts')
            if room.mode is GameMode.DUEL:
                self._resolve_duel_exhaustion(room, result, player)
            else:
                self._resolve_battle_royale(room, result)

        return result

    def resolve_departure(self, room: Room) -> Optional[DepartureResult]:
        """
        Re-check a playing room after a player left it.

        Duel ends as a forfeit win for a lone remaining active player; Battle
        Royale ends once at most one active player is left.
        """
        if room.status is not RoomStatus.PLAYING:
            return None

        active = room.active_players()
        if room.mode is GameMode.DUEL:
            if len(room.players) >= 2:
                return None
            winner = active[0].username if active else None
        else:
            if len(active) > 1:
                return None
            winner = active[0].username if active else None

        room.finish(winner)
        room.touch()
        game_logger.log_game_event('game_over', room.code, winner=winner, reason='player_left')
        return DepartureResult(room=room, winner=winner)

    def reset_room(self, room: Room) -> Room:
        """
        Return a finished room to its lobby so it can be joined and started again.

        Raises:
            GameAlreadyInProgress: Room is still playing
        """
        if room.status is RoomStatus.PLAYING:
            raise GameAlreadyInProgress()

        room.status = RoomStatus.WAITING
        room.solution_word = ''
        room.winner = None
        room.game_start_time = None
        for player in room.players:
            player.reset()
        room.touch()

        game_logger.log_room_event('room_reset', room.code, player_count=len(room.players))
        return room

    # ---------- helpers ---------- #

    def _resolve_duel_exhaustion(self, room: Room, result: GuessResult, player: Player):
        others = [p for p in room.players if p is not player]
        if all(len(other.guesses) >= self.max_guesses for other in others):
            self._finish(room, result, None)

    def _resolve_battle_royale(self, room: Room, result: GuessResult):
        active: List[Player] = room.active_players()
        if len(active) == 1:
            self._finish(room, result, active[0].username)
        elif not active:
            # Everyone left is out; the retired winner (if any) takes the game
            self._finish(room, result, result.player.username if result.won else None)

    def _finish(self, room: Room, result: GuessResult, winner: Optional[str]):
        room.finish(winner)
        result.game_over = True
        result.winner = winner
        game_logger.log_game_event('game_over', room.code, winner=winner, mode=room.mode.value)


# Global service instance
_game_engine = None


def get_game_engine() -> Optional[GameEngine]:
    """Get the global game engine instance."""
    return _game_engine


def initialize_game_engine(word_service: WordService, **kwargs) -> GameEngine:
    """Initialize the global game engine instance."""
    global _game_engine
    _game_engine = GameEngine(word_service, **kwargs)
    return _game_engine
