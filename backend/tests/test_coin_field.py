import random
from collections import Counter

import pytest

from coingame.services.games.coin_field import CoinField, coin_value
from coingame.services.games.geometry import parse_position_key


@pytest.fixture()
def field():
    return CoinField(64, 64, 100, rng=random.Random(99))


def test_repopulate_places_full_batch_with_value_tiers(field):
    field.repopulate()
    coins = field.snapshot()
    assert len(coins) == 100
    assert Counter(coins.values()) == {1: 50, 2: 25, 5: 20, 10: 5}
    for key in coins:
        row, col = parse_position_key(key)
        assert 0 <= row < 64 and 0 <= col < 64


def test_repopulate_replaces_existing_coins(field):
    field.place(0, 0, 10)
    field.place(1, 1, 10)
    field.repopulate()
    assert len(field) == 100
    assert Counter(field.snapshot().values())[10] == 5


def test_coin_value_ranks():
    assert [coin_value(r) for r in (0, 49, 50, 74, 75, 94, 95, 99)] == [1, 1, 2, 2, 5, 5, 10, 10]


def test_collect_at_removes_coin_once(field):
    field.place(10, 10, 5)
    assert field.collect_at(10, 10) == 5
    assert field.collect_at(10, 10) is None
    assert '10,10' not in field.snapshot()


def test_collect_at_empty_cell_is_not_an_error(field):
    assert field.collect_at(3, 3) is None
    assert field.is_empty()


def test_snapshot_is_a_copy(field):
    field.place(2, 3, 1)
    snapshot = field.snapshot()
    snapshot['2,3'] = 10
    snapshot['4,4'] = 1
    assert field.snapshot() == {'2,3': 1}


def test_place_rejects_bad_values_and_cells(field):
    with pytest.raises(ValueError):
        field.place(1, 1, 3)
    with pytest.raises(ValueError):
        field.place(64, 0, 1)
    with pytest.raises(ValueError):
        field.place(0, -1, 1)


def test_coin_count_capped_by_board_size():
    small = CoinField(3, 3, 100, rng=random.Random(1))
    small.repopulate()
    assert len(small) == 9
    assert set(small.snapshot().values()) == {1}
