"""
Game Configuration Constants Module

This module defines the rule constants shared by every room and loads the
curated word database used as the default word source.
All game parameters are centralized here to enable easy modification

"""

import json
import os
from typing import List, Final

# Core Game Configuration Constants
WORD_LENGTH: Final[int] = 5
"""Length of every solution word and every guess."""

MAX_GUESSES: Final[int] = 6
"""
Maximum number of guess attempts allowed per player per game.
Type: Final[int] - Immutable to prevent accidental modification
"""

DUEL_MAX_PLAYERS: Final[int] = 2
BATTLE_ROYALE_MAX_PLAYERS: Final[int] = 8

# Both modes need an opponent before a game can start
MIN_PLAYERS_TO_START: Final[int] = 2

ROOM_CODE_LENGTH: Final[int] = 6
MAX_CODE_ATTEMPTS: Final[int] = 100

MIN_USERNAME_LENGTH: Final[int] = 2
MAX_USERNAME_LENGTH: Final[int] = 20

# Words treated as "common" when rating difficulty
COMMON_WORDS: Final[List[str]] = [
    'HELLO', 'WORLD', 'GAMES', 'PLAYS', 'SMART', 'BRAIN', 'QUICK', 'HAPPY',
    'SMILE', 'DANCE', 'MUSIC', 'BOOKS', 'STARS', 'OCEAN', 'WATER', 'SLEEP',
    'DREAM', 'RIVER', 'HOUSE', 'LIGHT'
]

# Letters that make a word harder to find
UNCOMMON_LETTERS: Final[str] = 'QXZJVK'


# Load word list from JSON file
def _load_word_list() -> List[str]:
    """
    Load word list from words.json file.

    Returns:
        List[str]: List of uppercase 5-letter words

    Raises:
        FileNotFoundError: If words.json file is not found
        ValueError: If JSON is malformed, the list is empty or contains invalid words
    """
    config_dir = os.path.dirname(os.path.abspath(__file__))
    json_file_path = os.path.join(config_dir, 'words.json')

    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            word_list = json.load(f)

        if not isinstance(word_list, list):
            raise ValueError("JSON file must contain an array of words")

        if not word_list:
            raise ValueError("Word list cannot be empty")

        # Convert all words to uppercase and validate
        uppercase_words = [word.upper() for word in word_list]

        # Validate word format
        for word in uppercase_words:
            if len(word) != WORD_LENGTH:
                raise ValueError(f"Word '{word}' is not {WORD_LENGTH} characters long")
            if not word.isalpha():
                raise ValueError(f"Word '{word}' contains non-alphabetic characters")

        return uppercase_words

    except FileNotFoundError:
        raise FileNotFoundError(f"Word list file not found: {json_file_path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in words.json: {e}")

# Curated Word Database loaded from JSON file
WORD_LIST: Final[List[str]] = _load_word_list()


def validate_word_list_integrity(words: List[str] = WORD_LIST) -> bool:
    """
    Validates the integrity and consistency of a word database.

    This function performs validation to ensure:
    1. Length validation: All words must be exactly WORD_LENGTH characters
    2. Character validation: Only alphabetic characters allowed
    3. Uniqueness validation: No duplicate entries
    4. Format validation: Consistent uppercase formatting

    Returns:
        bool: True if word list passes all validation checks

    Raises:
        ValueError: If any validation check fails with detailed error message

    """
    if not words:
        raise ValueError("Word list cannot be empty")

    # Validate each word meets game requirements
    for index, word in enumerate(words):
        if len(word) != WORD_LENGTH:
            raise ValueError(f"Word at index {index} '{word}' is not {WORD_LENGTH} characters long")

        if not word.isalpha():
            raise ValueError(f"Word at index {index} '{word}' contains non-alphabetic characters")

        if not word.isupper():
            raise ValueError(f"Word at index {index} '{word}' is not in uppercase format")

    # Validate uniqueness (no duplicates)
    if len(words) != len(set(words)):
        duplicates = sorted({word for word in words if words.count(word) > 1})
        raise ValueError(f"Duplicate words found in word list: {duplicates}")

    return True


def get_word_statistics(words: List[str] = WORD_LIST) -> dict:
    """
    Analyzes a word list and returns statistical information for game balancing.

    Returns:
        dict: Statistical analysis including:
            - total_words: Number of words in database
            - avg_vowel_count: Average vowels per word
            - letter_frequency: Distribution of letters across all words
            - most_common_letters: Top five letters by frequency

    """
    if not words:
        return {"error": "Word list is empty"}

    vowels = set('AEIOU')
    total_vowels = sum(len([char for char in word if char in vowels]) for word in words)

    # Calculate letter frequency distribution
    letter_frequency = {}
    for word in words:
        for char in word:
            letter_frequency[char] = letter_frequency.get(char, 0) + 1

    return {
        "total_words": len(words),
        "word_length": WORD_LENGTH,
        "avg_vowel_count": round(total_vowels / len(words), 2),
        "letter_frequency": letter_frequency,
        "most_common_letters": sorted(letter_frequency.items(), key=lambda x: x[1], reverse=True)[:5]
    }
