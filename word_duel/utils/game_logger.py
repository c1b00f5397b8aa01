"""
Game Logger Module for the Word Duel Server

This module provides structured logging for HTTP requests, server responses,
socket events, room lifecycle events and game events.
"""

import logging
import json
from datetime import datetime
from typing import Dict, Any, Optional
from pathlib import Path

from ..config.app_config import Config


class GameLogger:
    """
    Centralized logging system for the game server.

    Features:
    - User action tracking with IP/connection identification
    - Server response logging
    - Room lifecycle and game event logging
    - JSON structured logs for easy parsing
    """

    def __init__(self, log_dir: str = "logs", level: str = "INFO"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        # Setup main game logger
        self.logger = self._setup_logger(level)

    def _setup_logger(self, level: str) -> logging.Logger:
        """Setup the main game logger with file handler."""
        logger = logging.getLogger('word_duel')
        logger.setLevel(getattr(logging, level.upper(), logging.INFO))

        # Prevent duplicate handlers
        if logger.handlers:
            for handler in list(logger.handlers):
                handler.close()
            logger.handlers.clear()

        # Create log file with date
        log_file = self._log_file_path()

        # File handler for detailed logs
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)

        # Console handler for only important messages (WARNING and above)
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)

        file_formatter = logging.Formatter(
            '%(asctime)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        console_formatter = logging.Formatter(
            '%(levelname)s: %(message)s'
        )

        file_handler.setFormatter(file_formatter)
        console_handler.setFormatter(console_formatter)

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)

        return logger

    def _log_file_path(self) -> Path:
        return self.log_dir / f"game_log_{datetime.now().strftime('%Y-%m-%d')}.log"

    def configure(self, log_dir: str, level: str):
        """Point the file handler at log_dir (re-creating it if it moved) and set the level."""
        if Path(log_dir) != self.log_dir:
            self.log_dir = Path(log_dir)
            self.log_dir.mkdir(parents=True, exist_ok=True)
            self.logger = self._setup_logger(level)
        else:
            self.logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    def _get_user_identity(self, request) -> Dict[str, Optional[str]]:
        """Extract user identity information from a Flask or Socket.IO request."""
        return {
            'user_ip': getattr(request, 'remote_addr', None) or 'unknown',
            'session_id': getattr(request, 'sid', None),
            'username': None
        }

    def _create_log_entry(self,
                         event_type: str,
                         action: str,
                         user_info: Dict[str, Optional[str]],
                         details: Dict[str, Any]) -> str:
        """Create a structured log entry."""
        log_entry = {
            'timestamp': datetime.now().isoformat(),
            'event_type': event_type,
            'action': action,
            'user': user_info,
            'details': details
        }
        return json.dumps(log_entry, ensure_ascii=False, default=str)

    def log_user_action(self,
                       request,
                       action: str,
                       room_code: Optional[str] = None,
                       **kwargs):
        """
        Log user actions with full context.

        Args:
            request: Flask request object
            action: Type of action (e.g., 'create_room', 'join_room', 'validate_word')
            room_code: Room code if applicable
            **kwargs: Additional details to log
        """
        user_info = self._get_user_identity(request)

        details = {
            'room_code': room_code,
            'endpoint': getattr(request, 'endpoint', None),
            'method': getattr(request, 'method', None),
            'url': getattr(request, 'url', None),
            **kwargs
        }

        log_message = self._create_log_entry('USER_ACTION', action, user_info, details)
        self.logger.info(log_message)

    def log_server_response(self,
                           request,
                           action: str,
                           success: bool,
                           response_data: Dict[str, Any],
                           room_code: Optional[str] = None,
                           **kwargs):
        """
        Log server responses with full context.

        Args:
            request: Flask request object
            action: Action that was performed
            success: Whether the action succeeded
            response_data: Data being returned to client
            room_code: Room code if applicable
            **kwargs: Additional details to log
        """
        user_info = self._get_user_identity(request)

        safe_response = self._sanitize_response_data(response_data)

        details = {
            'room_code': room_code,
            'success': success,
            'response_size': len(str(response_data)),
            'response_data': safe_response,
            **kwargs
        }

        event_type = 'SERVER_RESPONSE_SUCCESS' if success else 'SERVER_RESPONSE_ERROR'
        log_message = self._create_log_entry(event_type, action, user_info, details)

        if success:
            self.logger.info(log_message)
        else:
            self.logger.error(log_message)

    def log_room_event(self, event: str, room_code: str, **kwargs):
        """
        Log room lifecycle events (created, joined, left, expired, ...).

        Args:
            event: Type of room event (e.g., 'room_created', 'host_changed')
            room_code: Room code
            **kwargs: Additional room details
        """
        details = {'room_code': room_code, **kwargs}
        log_message = self._create_log_entry('ROOM_EVENT', event, self._system_identity(), details)
        self.logger.info(log_message)

    def log_game_event(self,
                      event: str,
                      room_code: Optional[str] = None,
                      sid: Optional[str] = None,
                      **kwargs):
        """
        Log game-specific events (starts, wins, eliminations, game over).

        Args:
            event: Type of game event (e.g., 'game_started', 'player_won', 'game_over')
            room_code: Room code if applicable
            sid: Socket connection id that triggered the event
            **kwargs: Additional game details
        """
        user_info = {'user_ip': None, 'session_id': sid, 'username': kwargs.get('username')}

        details = {
            'room_code': room_code,
            **kwargs
        }

        log_message = self._create_log_entry('GAME_EVENT', event, user_info, details)
        self.logger.info(log_message)

    def log_error(self,
                 error: Exception,
                 action: str,
                 request=None,
                 room_code: Optional[str] = None,
                 **kwargs):
        """
        Log errors with full context.

        Args:
            error: Exception that occurred
            action: Action that was being performed
            request: Flask request object, if one is active
            room_code: Room code if applicable
        """
        user_info = self._get_user_identity(request) if request is not None else self._system_identity()

        details = {
            'room_code': room_code,
            'error_type': type(error).__name__,
            'error_message': str(error),
            'action': action,
            **kwargs
        }

        log_message = self._create_log_entry('ERROR', action, user_info, details)
        self.logger.error(log_message)

    def _system_identity(self) -> Dict[str, Optional[str]]:
        return {'user_ip': 'system', 'session_id': None, 'username': None}

    def _sanitize_response_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Mask solution words and trim large room snapshots."""
        if not isinstance(data, dict):
            return {'data_type': type(data).__name__}

        # Create a copy to avoid modifying original
        sanitized = data.copy()

        if 'solutionWord' in sanitized:
            sanitized['solutionWord'] = '*****'

        if 'room' in sanitized and isinstance(sanitized['room'], dict):
            room = sanitized['room']
            sanitized['room'] = {
                'code': room.get('code'),
                'mode': room.get('mode'),
                'status': room.get('status'),
                'player_count': len(room.get('players', [])),
                'solution_revealed': bool(room.get('solutionWord'))
            }

        if 'rooms' in sanitized and isinstance(sanitized['rooms'], list):
            sanitized['rooms'] = {'count': len(sanitized['rooms'])}

        return sanitized

    def get_log_stats(self) -> Dict[str, Any]:
        """Get statistics about logged events (useful for monitoring)."""
        try:
            log_file = self._log_file_path()
            if not log_file.exists():
                return {'error': 'No log file found for today'}

            stats = {
                'log_file': str(log_file),
                'file_size_mb': round(log_file.stat().st_size / (1024 * 1024), 2),
                'total_entries': 0,
                'user_actions': 0,
                'server_responses': 0,
                'room_events': 0,
                'game_events': 0,
                'errors': 0
            }

            with open(log_file, 'r', encoding='utf-8') as f:
                for line in f:
                    if line.strip():
                        stats['total_entries'] += 1
                        if 'USER_ACTION' in line:
                            stats['user_actions'] += 1
                        elif 'SERVER_RESPONSE' in line:
                            stats['server_responses'] += 1
                        elif 'ROOM_EVENT' in line:
                            stats['room_events'] += 1
                        elif 'GAME_EVENT' in line:
                            stats['game_events'] += 1
                        elif 'ERROR' in line:
                            stats['errors'] += 1

            return stats

        except OSError as e:
            return {'error': f'Failed to get stats: {str(e)}'}


# Global logger instance
game_logger = GameLogger(Config.LOG_DIR, Config.LOG_LEVEL)
