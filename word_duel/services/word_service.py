"""
Word Service

Dictionary lookups used by the game engine and the word endpoints: validity
checks, random solution words, suggestions and difficulty ratings.
"""

import random
from typing import Dict, List, Optional

from ..config.game_settings import (
    WORD_LIST, WORD_LENGTH, COMMON_WORDS, UNCOMMON_LETTERS, get_word_statistics
)


class WordService:
    """
    In-memory word source.

    This class handles:
    - Dictionary membership for a given word length
    - Random word selection for new games
    - Shape-only checks for guesses
    - Suggestions and difficulty ratings for the HTTP surface
    """

    def __init__(self, words: Optional[List[str]] = None, rng: Optional[random.Random] = None):
        source = WORD_LIST if words is None else words
        self.words: List[str] = [word.strip().upper() for word in source]
        self._word_set = set(self.words)
        self._rng = rng or random.Random()

    def is_valid(self, word, length: int = WORD_LENGTH) -> bool:
        """True if the word has the given length and is in the dictionary."""
        if not word or not isinstance(word, str):
            return False

        normalized_word = word.strip().upper()
        if len(normalized_word) != length:
            return False

        return normalized_word in self._word_set

    def random_word(self, length: int = WORD_LENGTH) -> str:
        """
        Pick a random dictionary word of the given length.

        Raises:
            LookupError: If the dictionary has no word of that length
        """
        candidates = [word for word in self.words if len(word) == length]
        if not candidates:
            raise LookupError(f"No {length}-letter words available")
        return self._rng.choice(candidates)

    def is_valid_format(self, word, length: int = WORD_LENGTH) -> bool:
        """Shape check only: exact length and ASCII letters, dictionary not consulted."""
        if not word or not isinstance(word, str):
            return False

        return len(word) == length and word.isascii() and word.isalpha()

    def get_suggestions(self, partial_word, max_suggestions: int = 5) -> List[str]:
        """Words starting with the fragment, topped up with words containing it."""
        if not partial_word or not isinstance(partial_word, str):
            return []

        fragment = partial_word.strip().upper()
        if not fragment:
            return []

        suggestions = [word for word in self.words if word.startswith(fragment)][:max_suggestions]

        if len(suggestions) < max_suggestions:
            containing = [
                word for word in self.words
                if fragment in word and word not in suggestions
            ]
            suggestions.extend(containing[:max_suggestions - len(suggestions)])

        return suggestions

    def get_word_difficulty(self, word) -> Optional[int]:
        """
        Rate a dictionary word from 1 (easy) to 3 (hard).

        Uncommon letters and repeated letters each add one level; common words
        drop one level. Returns None for words outside the dictionary.
        """
        if not self.is_valid(word):
            return None

        normalized_word = word.strip().upper()
        difficulty = 1

        if any(letter in normalized_word for letter in UNCOMMON_LETTERS):
            difficulty += 1

        if len(set(normalized_word)) < len(normalized_word):
            difficulty += 1

        if normalized_word in COMMON_WORDS:
            difficulty = max(1, difficulty - 1)

        return min(3, difficulty)

    def get_word_stats(self) -> Dict:
        return get_word_statistics(self.words)


# Global service instance
_word_service = None


def get_word_service() -> Optional[WordService]:
    """Get the global word service instance."""
    return _word_service


def initialize_word_service(words: Optional[List[str]] = None) -> WordService:
    """Initialize the global word service instance."""
    global _word_service
    _word_service = WordService(words)
    return _word_service
