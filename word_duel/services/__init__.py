"""
Services Package

Contains all business logic and service classes.
"""

from .word_service import WordService, get_word_service, initialize_word_service
from .room_service import RoomService, get_room_service, initialize_room_service
from .game_engine import GameEngine, GuessResult, get_game_engine, initialize_game_engine
from .session_service import SessionRegistry, get_session_registry, initialize_session_registry
from .cleanup_worker import RoomCleanupWorker

__all__ = [
    'WordService', 'get_word_service', 'initialize_word_service',
    'RoomService', 'get_room_service', 'initialize_room_service',
    'GameEngine', 'GuessResult', 'get_game_engine', 'initialize_game_engine',
    'SessionRegistry', 'get_session_registry', 'initialize_session_registry',
    'RoomCleanupWorker'
]
