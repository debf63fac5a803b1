"""Player registry: the ordered set of active players."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence

from .logging_utils import get_logger
from .state import GameConfig, Player

__all__ = ["Roster", "SweepResult", "contract", "next_index", "prev_index", "next2_index"]

logger = get_logger(__name__)


def next_index(index: int, count: int) -> int:
    return (index + 1) % count


def prev_index(index: int, count: int) -> int:
    return (index - 1 + count) % count


def next2_index(index: int, count: int) -> int:
    return (index + 2) % count


def contract(players: Sequence[Player]) -> tuple[list[Player], str | None]:
    """Drop players at zero life and renumber the survivors.

    Survivors keep their relative order and receive indices ``0..k-1``. The
    second element is the name of the last eliminated player met during the
    pass, or ``None`` when nobody was eliminated.
    """

    survivors: list[Player] = []
    last_eliminated: str | None = None
    for player in players:
        if player.life > 0:
            player.index = len(survivors)
            survivors.append(player)
        else:
            last_eliminated = player.name
    return survivors, last_eliminated


@dataclass(frozen=True, slots=True)
class SweepResult:
    """Outcome of the end-of-round elimination pass."""

    eliminated: tuple[str, ...]
    last_eliminated: str | None
    survivors: int


class Roster:
    """Arena of every seated player plus the ordered view of active ones.

    ``player_id`` is the stable identity; ``Player.index`` is only a seat
    position among the currently active players and changes after sweeps.
    """

    def __init__(self, players: Sequence[Player]) -> None:
        self._arena: dict[int, Player] = {}
        self._active: list[int] = []
        for position, player in enumerate(players):
            if player.player_id in self._arena:
                raise ValueError(f"duplicate player id {player.player_id}")
            player.index = position
            self._arena[player.player_id] = player
            self._active.append(player.player_id)

    @classmethod
    def from_config(cls, config: GameConfig) -> "Roster":
        return cls(
            [
                Player(player_id=player_id, name=name, life=config.initial_life)
                for player_id, name in enumerate(config.player_names)
            ]
        )

    def __len__(self) -> int:
        return len(self._active)

    def __getitem__(self, index: int) -> Player:
        return self._arena[self._active[index]]

    def __iter__(self) -> Iterator[Player]:
        return (self._arena[player_id] for player_id in self._active)

    @property
    def active(self) -> list[Player]:
        return list(self)

    def everyone(self) -> list[Player]:
        """Return all players ever seated, eliminated ones included."""

        return list(self._arena.values())

    def get(self, player_id: int) -> Player:
        return self._arena[player_id]

    def next_index(self, index: int) -> int:
        return next_index(index, len(self))

    def prev_index(self, index: int) -> int:
        return prev_index(index, len(self))

    def next2_index(self, index: int) -> int:
        return next2_index(index, len(self))

    def sweep(self) -> SweepResult:
        """Remove eliminated players from the active view."""

        current = self.active
        survivors, last_eliminated = contract(current)
        alive_ids = {player.player_id for player in survivors}
        eliminated = tuple(player.name for player in current if player.player_id not in alive_ids)
        self._active = [player.player_id for player in survivors]
        for name in eliminated:
            logger.info("%s has been eliminated", name)
        return SweepResult(
            eliminated=eliminated,
            last_eliminated=last_eliminated,
            survivors=len(survivors),
        )
