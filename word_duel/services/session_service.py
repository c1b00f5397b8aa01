"""
Session Service

Tracks which (room code, username) each socket connection speaks for, so a
dropped connection can be removed from its room the same way an explicit
leave would.
"""

import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class SessionBinding:
    sid: str
    room_code: str
    username: str


class SessionRegistry:
    """Bidirectional connection id <-> (room code, username) table."""

    def __init__(self):
        self._by_sid: Dict[str, SessionBinding] = {}
        self._by_member: Dict[Tuple[str, str], str] = {}
        self._lock = threading.Lock()

    def bind(self, sid: str, room_code: str, username: str) -> Optional[SessionBinding]:
        """
        Bind a connection to a room member.

        Returns:
            The binding this connection held before, if it was for another member
        """
        binding = SessionBinding(sid, room_code, username)
        with self._lock:
            previous = self._by_sid.get(sid)
            if previous is not None:
                self._by_member.pop((previous.room_code, previous.username), None)

            stale_sid = self._by_member.get((room_code, username))
            if stale_sid is not None and stale_sid != sid:
                self._by_sid.pop(stale_sid, None)

            self._by_sid[sid] = binding
            self._by_member[(room_code, username)] = sid

        if previous is not None and previous != binding:
            return previous
        return None

    def unbind(self, sid: str) -> Optional[SessionBinding]:
        with self._lock:
            binding = self._by_sid.pop(sid, None)
            if binding is not None:
                self._by_member.pop((binding.room_code, binding.username), None)
            return binding

    def unbind_member(self, room_code: str, username: str) -> Optional[SessionBinding]:
        with self._lock:
            sid = self._by_member.pop((room_code, username), None)
            if sid is None:
                return None
            return self._by_sid.pop(sid, None)

    def unbind_room(self, room_code: str) -> List[SessionBinding]:
        with self._lock:
            bindings = [b for b in self._by_sid.values() if b.room_code == room_code]
            for binding in bindings:
                self._by_sid.pop(binding.sid, None)
                self._by_member.pop((binding.room_code, binding.username), None)
            return bindings

    def get(self, sid: str) -> Optional[SessionBinding]:
        with self._lock:
            return self._by_sid.get(sid)

    def sid_for(self, room_code: str, username: str) -> Optional[str]:
        with self._lock:
            return self._by_member.get((room_code, username))

    def count(self) -> int:
        with self._lock:
            return len(self._by_sid)


# Global service instance
_session_registry = None


def get_session_registry() -> Optional[SessionRegistry]:
    """Get the global session registry instance."""
    return _session_registry


def initialize_session_registry() -> SessionRegistry:
    """Initialize the global session registry instance."""
    global _session_registry
    _session_registry = SessionRegistry()
    return _session_registry
