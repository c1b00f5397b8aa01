"""
Room Cleanup Worker

Background thread that periodically deletes rooms older than the configured
maximum age and tells any still-connected clients their room is gone.
"""

import threading
from typing import List, Optional

from ..utils.game_logger import game_logger
from .room_service import RoomService
from .session_service import SessionRegistry


class RoomCleanupWorker:
    """Runs RoomService.sweep every `interval_seconds` until stopped."""

    def __init__(self,
                 room_service: RoomService,
                 max_age_seconds: float,
                 interval_seconds: float,
                 session_registry: Optional[SessionRegistry] = None,
                 socketio=None):
        self.room_service = room_service
        self.session_registry = session_registry
        self.socketio = socketio
        self.max_age_seconds = max_age_seconds
        self.interval_seconds = interval_seconds
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name='room-cleanup', daemon=True)
        self._thread.start()
        game_logger.logger.info(f"Room cleanup worker started (every {self.interval_seconds}s)")

    def stop(self, timeout: Optional[float] = 5.0):
        """Wake the worker and wait for it to exit."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        game_logger.logger.info("Room cleanup worker stopped")

    def run_once(self) -> List[str]:
        """Sweep expired rooms and notify their channels."""
        expired = self.room_service.sweep(self.max_age_seconds)
        for code in expired:
            if self.session_registry is not None:
                self.session_registry.unbind_room(code)
            if self.socketio is not None:
                self.socketio.emit('room-expired', {'roomCode': code}, room=code)
                self.socketio.close_room(code)
        return expired

    def _run(self):
        while not self._stop_event.wait(self.interval_seconds):
            try:
                self.run_once()
            except Exception as e:
                game_logger.log_error(e, 'room_cleanup')
