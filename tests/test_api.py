import pytest

from word_duel.services.room_service import get_room_service


def create(client, username='alice', mode=None):
    body = {'username': username}
    if mode is not None:
        body['mode'] = mode
    return client.post('/api/v1/create-room', json=body)


def test_create_room_defaults_to_duel(client):
    res = create(client)

    assert res.status_code == 200
    data = res.get_json()
    assert len(data['code']) == 6
    assert data['mode'] == 'duel'
    assert data['maxPlayers'] == 2
    assert data['settings'] == {'allowCustomWords': True, 'maxGuesses': 6, 'wordLength': 5}
    assert get_room_service().get(data['code']).host_id == 'alice'


def test_create_battle_royale_room(client):
    data = create(client, 'alice', 'battleRoyale').get_json()
    assert data['mode'] == 'battleRoyale'
    assert data['maxPlayers'] == 8


@pytest.mark.parametrize('body', [
    {'username': 'alice', 'mode': 'teams'},
    {'username': 'a'},
    {'username': 'bad name!'},
    {'mode': 'duel'},
])
def test_create_room_rejects_bad_input(client, body):
    res = client.post('/api/v1/create-room', json=body)

    assert res.status_code == 400
    assert res.get_json()['success'] is False
    assert get_room_service().get_total_room_count() == 0


def test_create_room_requires_json(client):
    res = client.post('/api/v1/create-room', data='username=alice')
    assert res.status_code == 400


def test_join_room(client):
    code = create(client).get_json()['code']

    res = client.post('/api/v1/join-room', json={'code': code.lower(), 'username': 'bob'})

    assert res.status_code == 200
    data = res.get_json()
    assert data['success'] is True
    assert [p['username'] for p in data['room']['players']] == ['alice', 'bob']
    assert 'solutionWord' not in data['room']


def test_join_room_errors(client):
    code = create(client).get_json()['code']

    missing = client.post('/api/v1/join-room', json={'code': 'ZZZZZZ', 'username': 'bob'})
    assert missing.status_code == 404
    assert missing.get_json()['error'] == 'Room not found'

    taken = client.post('/api/v1/join-room', json={'code': code, 'username': 'alice'})
    assert taken.status_code == 400

    client.post('/api/v1/join-room', json={'code': code, 'username': 'bob'})
    full = client.post('/api/v1/join-room', json={'code': code, 'username': 'carol'})
    assert full.status_code == 400
    assert 'full' in full.get_json()['error']


def test_get_room(client):
    code = create(client).get_json()['code']

    res = client.get(f'/api/v1/room/{code}')

    assert res.status_code == 200
    data = res.get_json()
    assert data['room']['code'] == code
    assert data['room']['players'][0]['username'] == 'alice'
    assert 'joinedAt' in data['room']['players'][0]
    assert data['stats']['playerCount'] == 1

    assert client.get('/api/v1/room/NOPE00').status_code == 404


def test_list_rooms(client):
    create(client, 'alice')
    create(client, 'bob', 'battleRoyale')

    data = client.get('/api/v1/rooms').get_json()

    assert len(data['rooms']) == 2
    assert data['stats']['total'] == 2
    assert data['stats']['waiting'] == 2
    assert data['stats']['playing'] == 0


def test_validate_word(client):
    valid = client.post('/api/v1/validate-word', json={'word': 'crane'}).get_json()
    assert valid['isValid'] is True
    assert valid['suggestions'] == []
    assert valid['difficulty'] == 1

    invalid = client.post('/api/v1/validate-word', json={'word': 'crxxx'}).get_json()
    assert invalid['isValid'] is False
    assert invalid['suggestions'] == ['CRANE']
    assert invalid['difficulty'] is None

    assert client.post('/api/v1/validate-word', json={}).status_code == 400


def test_word_stats(client):
    data = client.get('/api/v1/words/stats').get_json()
    assert data['stats']['total_words'] == 8


def test_health(client):
    res = client.get('/api/v1/health')

    assert res.status_code == 200
    data = res.get_json()
    assert data['status'] == 'OK'
    assert data['rooms'] == 0
    assert data['connected_players'] == 0
