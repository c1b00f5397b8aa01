import json

import pytest

from word_duel import create_app
from word_duel.utils.game_logger import game_logger

from tests.conftest import TEST_WORDS, TestConfig as QuietConfig


@pytest.fixture()
def log_config(tmp_path):
    class LogDirConfig(QuietConfig):
        LOG_DIR = str(tmp_path / 'game-logs')
        LOG_LEVEL = 'INFO'

    yield LogDirConfig
    game_logger.configure(QuietConfig.LOG_DIR, QuietConfig.LOG_LEVEL)


def test_create_app_writes_logs_to_configured_dir(log_config):
    create_app(log_config, words=TEST_WORDS)

    game_logger.log_room_event('room_created', 'ABC123', username='alice')

    assert str(game_logger.log_dir) == log_config.LOG_DIR
    log_files = list(game_logger.log_dir.glob('game_log_*.log'))
    assert len(log_files) == 1
    assert 'ROOM_EVENT' in log_files[0].read_text(encoding='utf-8')
    assert game_logger.get_log_stats()['room_events'] == 1


def test_solution_word_is_masked(log_config):
    create_app(log_config, words=TEST_WORDS)

    game_logger.log_server_response(None, 'room_status', True,
                                    {'solutionWord': 'CRANE', 'code': 'ABC123'})

    line = next(game_logger.log_dir.glob('game_log_*.log')).read_text(encoding='utf-8')
    payload = json.loads(line.strip().split(' | ', 2)[2])
    assert 'CRANE' not in line
    assert payload['details']['response_data']['code'] == 'ABC123'
