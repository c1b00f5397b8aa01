"""
Word Duel Game Server - Main Entry Point

This is the main entry point for the game server.
It builds the Flask-SocketIO application, starts the room cleanup worker
and serves until interrupted.
"""

import os
from word_duel import create_app
from word_duel.config import config
from word_duel.services.cleanup_worker import RoomCleanupWorker
from word_duel.services.room_service import get_room_service
from word_duel.services.session_service import get_session_registry
from word_duel.utils.game_logger import game_logger


def main():
    """Main function to initialize services and start the server."""
    config_class = config.get(os.getenv('APP_ENV', 'default'), config['default'])
    cleanup_worker = None

    try:
        print("Creating Flask application...")
        app, socketio = create_app(config_class)
        print("✓ Flask application created successfully")

        cleanup_worker = RoomCleanupWorker(
            get_room_service(),
            max_age_seconds=config_class.max_room_age_seconds(),
            interval_seconds=config_class.CLEANUP_INTERVAL_SECONDS,
            session_registry=get_session_registry(),
            socketio=socketio
        )
        cleanup_worker.start()
        print(f"✓ Room cleanup worker started - checking every {config_class.CLEANUP_INTERVAL_SECONDS:g} seconds")

        game_logger.logger.info("Word Duel Server Starting")

        print(f"\nStarting Word Duel Server on {config_class.HOST}:{config_class.PORT}")
        print(f"Debug mode: {config_class.DEBUG}")
        print("=" * 50)

        socketio.run(app, host=config_class.HOST, port=config_class.PORT,
                     debug=config_class.DEBUG, use_reloader=False,
                     allow_unsafe_werkzeug=True)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Word Duel Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise
    finally:
        if cleanup_worker is not None:
            cleanup_worker.stop()


if __name__ == '__main__':
    main()
