import random

import pytest

from word_duel.config.game_settings import WORD_LIST, validate_word_list_integrity
from word_duel.services.word_service import WordService

from tests.conftest import TEST_WORDS


def test_membership_is_case_insensitive(word_service):
    assert word_service.is_valid('crane')
    assert word_service.is_valid(' Ghost ')
    assert not word_service.is_valid('QQQQQ')
    assert not word_service.is_valid('CRANES')
    assert not word_service.is_valid(None)


def test_random_word_comes_from_dictionary(word_service):
    for _ in range(20):
        assert word_service.random_word() in TEST_WORDS


def test_random_word_without_candidates():
    service = WordService(['CRANE'], rng=random.Random(1))
    with pytest.raises(LookupError):
        service.random_word(6)


@pytest.mark.parametrize('word,expected', [
    ('CRANE', True),
    ('zzzzz', True),
    ('CRAN', False),
    ('CR4NE', False),
    ('ÉCLAT', False),
    ('  ghost  ', False),
    ('', False),
])
def test_format_check_ignores_dictionary(word_service, word, expected):
    assert word_service.is_valid_format(word) is expected


def test_suggestions_prefer_prefix_matches(word_service):
    assert word_service.get_suggestions('cr') == ['CRANE']
    assert word_service.get_suggestions('AN') == ['CRANE', 'PLANT']
    assert word_service.get_suggestions('') == []


@pytest.mark.parametrize('word,difficulty', [
    ('CRANE', 1),
    ('HELLO', 1),
    ('SHEEP', 2),
    ('JAZZY', 3),
    ('QQQQQ', None),
])
def test_word_difficulty(word_service, word, difficulty):
    assert word_service.get_word_difficulty(word) == difficulty


def test_word_stats(word_service):
    stats = word_service.get_word_stats()
    assert stats['total_words'] == len(TEST_WORDS)


def test_bundled_word_list_is_clean():
    assert len(WORD_LIST) > 400
    assert validate_word_list_integrity()
    assert all(word == word.upper() for word in WORD_LIST)
