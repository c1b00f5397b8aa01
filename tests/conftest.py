import random

import pytest

from word_duel import create_app
from word_duel.config import TestingConfig
from word_duel.models.room import GameMode
from word_duel.services.game_engine import GameEngine
from word_duel.services.room_service import RoomService
from word_duel.services.word_service import WordService

TEST_WORDS = ['CRANE', 'GHOST', 'PLANT', 'TRAIN', 'HELLO', 'WORLD', 'JAZZY', 'SHEEP']
SOLUTION = 'CRANE'


class TestConfig(TestingConfig):
    LOG_LEVEL = 'WARNING'


@pytest.fixture()
def word_service():
    return WordService(TEST_WORDS, rng=random.Random(7))


@pytest.fixture()
def room_service():
    return RoomService()


@pytest.fixture()
def game_engine(word_service):
    return GameEngine(word_service)


@pytest.fixture()
def started_room(room_service, game_engine):
    """Factory: a playing room with the given players and SOLUTION as the word."""
    def _make(mode=GameMode.DUEL, usernames=('alice', 'bob')):
        room = room_service.create(usernames[0], mode)
        for username in usernames[1:]:
            room_service.join(room.code, username)
        game_engine.start_game(room, SOLUTION)
        return room
    return _make


@pytest.fixture()
def flask_app():
    app, _socketio = create_app(TestConfig, words=TEST_WORDS)
    yield app


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def socket_client(flask_app):
    """Factory for Socket.IO test clients; all are disconnected on teardown."""
    clients = []

    def _connect():
        test_client = flask_app.socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client()
        )
        clients.append(test_client)
        return test_client

    yield _connect

    for test_client in clients:
        if test_client.is_connected():
            test_client.disconnect()


def received(test_client, name=None):
    """Drain a test client's queue, optionally keeping only one event name."""
    packets = test_client.get_received()
    if name is None:
        return packets
    return [packet['args'][0] for packet in packets if packet['name'] == name]
