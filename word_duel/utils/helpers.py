"""
Helper Functions

Contains utility functions used throughout the application.
"""

import re
from typing import Optional

from ..config.game_settings import MIN_USERNAME_LENGTH, MAX_USERNAME_LENGTH
from ..exceptions import InvalidUsername
from ..models.room import GameMode

_USERNAME_PATTERN = re.compile(r'^[a-zA-Z0-9_-]+$')


def validate_username(username) -> str:
    """Return the trimmed username or raise InvalidUsername."""
    if not isinstance(username, str) or not username.strip():
        raise InvalidUsername('Username is required')

    username = username.strip()
    if not MIN_USERNAME_LENGTH <= len(username) <= MAX_USERNAME_LENGTH:
        raise InvalidUsername(
            f'Username must be between {MIN_USERNAME_LENGTH} and {MAX_USERNAME_LENGTH} characters'
        )
    if not _USERNAME_PATTERN.match(username):
        raise InvalidUsername('Username can only contain letters, numbers, underscores, and hyphens')
    return username


def normalize_room_code(code) -> str:
    """Upper-case and trim a client supplied room code; non-strings become ''."""
    if not isinstance(code, str):
        return ''
    return code.strip().upper()


def parse_game_mode(value) -> Optional[GameMode]:
    """Map a wire mode value to GameMode; None when unknown."""
    for mode in GameMode:
        if mode.value == value:
            return mode
    return None
