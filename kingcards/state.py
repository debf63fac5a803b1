"""Core game state data structures."""

from __future__ import annotations

from dataclasses import dataclass

from . import rules
from .cards import Card


@dataclass(slots=True)
class GameConfig:
    """Validated setup values for a single game."""

    player_names: tuple[str, ...]
    initial_life: int

    def __post_init__(self) -> None:
        rules.validate_player_count(len(self.player_names))
        self.player_names = tuple(rules.validate_name(name) for name in self.player_names)
        rules.validate_initial_life(self.initial_life)

    @property
    def num_players(self) -> int:
        return len(self.player_names)


@dataclass(slots=True)
class Hand:
    """The two cards a player holds during a round."""

    primary: Card
    secondary: Card
    secondary_revealed: bool = False


@dataclass(slots=True)
class Player:
    """State tracked for each seated player."""

    player_id: int
    name: str
    life: int
    index: int = 0
    hand: Hand | None = None

    @property
    def is_alive(self) -> bool:
        return self.life > 0

    def lose_life(self, amount: int = 1) -> int:
        """Remove up to ``amount`` life points, never going below zero.

        Returns the number of points actually lost.
        """

        lost = min(self.life, amount)
        self.life -= lost
        return lost

    def gain_life(self, amount: int = 1) -> None:
        self.life += amount

    def require_hand(self) -> Hand:
        if self.hand is None:
            raise RuntimeError(f"{self.name} has not been dealt a hand")
        return self.hand


@dataclass(slots=True)
class SharedPool:
    """Life points deposited on the field, kept across rounds."""

    points: int = 0

    def deposit(self, amount: int = 1) -> None:
        self.points += amount

    def withdraw_all(self) -> int:
        """Empty the pool and return what it held."""

        taken = self.points
        self.points = 0
        return taken
