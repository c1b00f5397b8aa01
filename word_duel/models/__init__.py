"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .room import GameMode, Guess, Player, PlayerOutcome, Room, RoomStatus

__all__ = ['GameMode', 'Guess', 'Player', 'PlayerOutcome', 'Room', 'RoomStatus']
