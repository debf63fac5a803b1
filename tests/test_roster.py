from __future__ import annotations

import pytest

from kingcards import roster
from kingcards.roster import Roster, contract
from kingcards.state import GameConfig, Player


def _players(*lives: int) -> list[Player]:
    return [Player(player_id=idx, name=f"P{idx}", life=life, index=idx) for idx, life in enumerate(lives)]


@pytest.mark.parametrize(
    ("index", "count", "expected"),
    [
        (0, 4, (1, 3, 2)),
        (3, 4, (0, 2, 1)),
        (2, 3, (0, 1, 1)),
        (1, 2, (0, 0, 1)),
    ],
)
def test_positional_helpers_wrap(index: int, count: int, expected: tuple[int, int, int]) -> None:
    assert (
        roster.next_index(index, count),
        roster.prev_index(index, count),
        roster.next2_index(index, count),
    ) == expected


def test_contract_keeps_order_and_renumbers() -> None:
    players = _players(3, 0, 2, 0, 1)

    survivors, last_eliminated = contract(players)

    assert [player.name for player in survivors] == ["P0", "P2", "P4"]
    assert [player.index for player in survivors] == [0, 1, 2]
    assert last_eliminated == "P3"


def test_contract_without_eliminations() -> None:
    survivors, last_eliminated = contract(_players(1, 2))

    assert len(survivors) == 2
    assert last_eliminated is None


def test_contract_everyone_eliminated() -> None:
    survivors, last_eliminated = contract(_players(0, 0, 0))

    assert survivors == []
    assert last_eliminated == "P2"


def test_roster_sweep_keeps_arena_lookups() -> None:
    table = Roster(_players(2, 0, 1, 0))

    result = table.sweep()

    assert result.eliminated == ("P1", "P3")
    assert result.last_eliminated == "P3"
    assert result.survivors == 2
    assert [player.name for player in table] == ["P0", "P2"]
    assert table[1].index == 1
    assert table.get(3).name == "P3"
    assert len(table.everyone()) == 4


def test_roster_helpers_use_active_count() -> None:
    table = Roster(_players(1, 0, 1, 1))
    table.sweep()

    assert len(table) == 3
    assert table.next_index(2) == 0
    assert table.prev_index(0) == 2
    assert table.next2_index(2) == 1


def test_roster_from_config_seats_everyone() -> None:
    table = Roster.from_config(GameConfig(player_names=("Ada", "Bea", "Cy"), initial_life=4))

    assert [(player.player_id, player.index, player.life) for player in table] == [
        (0, 0, 4),
        (1, 1, 4),
        (2, 2, 4),
    ]


def test_roster_rejects_duplicate_ids() -> None:
    players = _players(1, 1)
    players[1].player_id = 0

    with pytest.raises(ValueError):
        Roster(players)
