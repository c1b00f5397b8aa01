"""
Word Duel Game Server Application Package

Real-time multiplayer word guessing: rooms, Duel and Battle Royale game rules,
and the Socket.IO protocol that keeps every player in a room in sync.
"""

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from .config import Config


def initialize_services(config_class=Config, words=None):
    """
    Create fresh instances of every in-memory service.

    Args:
        config_class: Configuration class supplying the game rules
        words: Optional word list replacing the bundled dictionary
    """
    from .services.word_service import initialize_word_service
    from .services.room_service import initialize_room_service
    from .services.game_engine import initialize_game_engine
    from .services.session_service import initialize_session_registry

    word_service = initialize_word_service(words)
    room_service = initialize_room_service(
        max_guesses=config_class.MAX_GUESSES,
        word_length=config_class.WORD_LENGTH,
        duel_max_players=config_class.DUEL_MAX_PLAYERS,
        battle_royale_max_players=config_class.BATTLE_ROYALE_MAX_PLAYERS
    )
    game_engine = initialize_game_engine(
        word_service,
        max_guesses=config_class.MAX_GUESSES,
        word_length=config_class.WORD_LENGTH
    )
    sessions = initialize_session_registry()
    return word_service, room_service, game_engine, sessions


def create_app(config_class=Config, words=None):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use
        words: Optional word list replacing the bundled dictionary

    Returns:
        Flask application instance and its SocketIO server
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    from .utils.game_logger import game_logger
    game_logger.configure(config_class.LOG_DIR, config_class.LOG_LEVEL)

    initialize_services(config_class, words)

    # Initialize extensions
    origins = config_class.cors_origins()
    CORS(app, origins=origins)
    socketio = SocketIO(app, cors_allowed_origins=origins, logger=False, engineio_logger=False)

    # Register blueprints
    from .controllers.room_controller import room_bp
    from .controllers.word_controller import word_bp

    app.register_blueprint(room_bp, url_prefix='/api/v1')
    app.register_blueprint(word_bp, url_prefix='/api/v1')

    # Register WebSocket handlers
    from .websocket.handlers import register_websocket_handlers
    register_websocket_handlers(socketio)

    # Store socketio instance for use in other modules
    app.socketio = socketio

    return app, socketio
