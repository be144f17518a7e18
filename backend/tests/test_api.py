import json

from coingame import db, get_coordinator
from coingame.services.games.geometry import parse_position_key


def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert 'message' in res.get_json()


def test_state_empty_game(client):
    res = client.get('/api/state')
    assert res.status_code == 200
    state = res.get_json()
    assert state['positions'] == []
    assert state['scores'] == []
    assert len(state['coins']) == 100


def test_state_after_players_join(client):
    coordinator = get_coordinator()
    coordinator.register_player('alice')
    coordinator.register_player('bob')
    coordinator.registry.update_position('bob', 2, 3)
    coordinator.registry.add_score('bob', 10)

    state = client.get('/api/state').get_json()
    assert dict(state['positions'])['bob'] == '2,3'
    assert state['scores'] == [['bob', 10], ['alice', 0]]


def test_cli_reset_coins_and_show_state(flask_app):
    coordinator = get_coordinator()
    coordinator.coin_field.collect_at(*_first_coin(coordinator))
    assert len(coordinator.coin_field) == 99

    runner = flask_app.test_cli_runner()
    result = runner.invoke(args=['reset-coins'])
    assert result.exit_code == 0
    assert len(coordinator.coin_field) == 100

    result = runner.invoke(args=['show-state'])
    assert result.exit_code == 0
    shown = json.loads(result.output)
    assert len(shown['coins']) == 100


def _first_coin(coordinator):
    return parse_position_key(next(iter(coordinator.snapshot()['coins'])))


def test_state_unavailable_when_storage_fails(sql_app):
    client = sql_app.test_client()
    db.drop_all()
    res = client.get('/api/state')
    assert res.status_code == 503
    assert 'error' in res.get_json()
