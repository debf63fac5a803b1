"""Helpers for tracking multi-round match results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

__all__ = ["PlayerStanding", "RoundSummary", "MatchHistory"]


@dataclass(frozen=True, slots=True)
class PlayerStanding:
    """Life total of one player at the end of a round."""

    name: str
    life: int
    eliminated: bool


@dataclass(frozen=True, slots=True)
class RoundSummary:
    """Summary captured after a single round."""

    round_number: int
    first_player: str
    eliminated: tuple[str, ...]
    pool: int
    standings: Sequence[PlayerStanding]
    winner: str | None = None


@dataclass(slots=True)
class MatchHistory:
    """Mutable tracker that accumulates round summaries for a game."""

    rounds: list[RoundSummary] = field(default_factory=list)

    def record(self, summary: RoundSummary) -> None:
        """Record ``summary``; round numbers must be consecutive."""

        expected = len(self.rounds) + 1
        if summary.round_number != expected:
            raise ValueError(f"expected round {expected}, got {summary.round_number}")
        self.rounds.append(summary)

    def elimination_order(self) -> list[str]:
        """Return eliminated player names in the order they fell."""

        return [name for summary in self.rounds for name in summary.eliminated]

    def round_eliminated(self, name: str) -> int | None:
        """Return the round in which ``name`` was eliminated, if any."""

        for summary in self.rounds:
            if name in summary.eliminated:
                return summary.round_number
        return None
