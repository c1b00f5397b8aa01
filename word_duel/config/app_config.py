"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

from . import game_settings

# Load environment variables from config.env next to this module
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.env'))


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    TESTING = False

    # Server Settings
    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = int(os.getenv('PORT', 3001))
    CORS_ORIGIN = os.getenv('CORS_ORIGIN', '*')

    # Room Lifecycle Settings
    MAX_ROOM_AGE_HOURS = float(os.getenv('MAX_ROOM_AGE_HOURS', 24))
    CLEANUP_INTERVAL_SECONDS = float(os.getenv('CLEANUP_INTERVAL_SECONDS', 300))

    # Game Settings
    MAX_GUESSES = int(os.getenv('MAX_GUESSES', game_settings.MAX_GUESSES))
    WORD_LENGTH = game_settings.WORD_LENGTH
    DUEL_MAX_PLAYERS = game_settings.DUEL_MAX_PLAYERS
    BATTLE_ROYALE_MAX_PLAYERS = game_settings.BATTLE_ROYALE_MAX_PLAYERS

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')

    @classmethod
    def cors_origins(cls):
        """Return the CORS origin setting in the form Flask-CORS and Socket.IO expect."""
        if cls.CORS_ORIGIN == '*':
            return '*'
        return [origin.strip() for origin in cls.CORS_ORIGIN.split(',') if origin.strip()]

    @classmethod
    def max_room_age_seconds(cls) -> float:
        return cls.MAX_ROOM_AGE_HOURS * 60 * 60


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True
    SECRET_KEY = 'test-secret'


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
