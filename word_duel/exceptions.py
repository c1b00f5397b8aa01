"""
Game Exceptions

All recoverable room and game failures. The socket gateway turns these into a
private error reply and the HTTP controllers into a JSON error with
`http_status`.
"""


class WordDuelError(Exception):
    """Base class for every expected room or game failure."""
    http_status = 400

    def __init__(self, message: str = None):
        self.message = message or self.default_message()
        super().__init__(self.message)

    def default_message(self) -> str:
        return 'Request failed'


# ============ Room errors ============

class RoomError(WordDuelError):
    """Room lookup, membership and lifecycle failures."""


class RoomNotFound(RoomError):
    http_status = 404

    def __init__(self, code: str = None):
        self.code = code
        super().__init__('Room not found')


class GameAlreadyInProgress(RoomError):
    def default_message(self):
        return 'Game already in progress'


class RoomFull(RoomError):
    def __init__(self, max_players: int):
        self.max_players = max_players
        super().__init__(f'Room is full ({max_players} players max)')


class UsernameTaken(RoomError):
    def default_message(self):
        return 'Username already taken in this room'


class InvalidUsername(RoomError):
    pass


class CodeGenerationExhausted(RoomError):
    """No unused room code found within the attempt cap."""
    http_status = 503

    def default_message(self):
        return 'Unable to generate unique room code'


# ============ Game errors ============

class GameError(WordDuelError):
    """Failures while starting or playing a game."""


class InsufficientPlayers(GameError):
    pass


class InvalidCustomWord(GameError):
    def default_message(self):
        return 'Invalid word. Please choose a valid 5-letter word.'


class InvalidGuessFormat(GameError):
    def default_message(self):
        return 'Invalid guess format'


class GameNotInProgress(GameError):
    def default_message(self):
        return 'Game is not in progress'


class PlayerNotFoundOrEliminated(GameError):
    """Raised for guesses from unknown or finished players; never reported to clients."""

    def default_message(self):
        return 'Player not found or already eliminated'
