"""Game loop: plays rounds until a single player is left."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Callable

from . import scoreboard
from .cards import Deck
from .logging_utils import get_logger
from .roster import Roster
from .rounds import DecisionRequest, IllegalDecision, Round
from .state import GameConfig, SharedPool

__all__ = ["Game", "play"]

logger = get_logger(__name__)


@dataclass
class Game:
    """Owns the roster, the shared pool and the round counter for one game."""

    roster: Roster
    rng: Any
    pool: SharedPool = field(default_factory=SharedPool)
    round_number: int = 1
    winner: str | None = None
    last_eliminated: str | None = None
    history: scoreboard.MatchHistory = field(default_factory=scoreboard.MatchHistory)
    deck_factory: Callable[[Any], Deck] = Deck.new_shuffled

    @classmethod
    def from_config(cls, config: GameConfig, *, seed: int | None = None) -> "Game":
        return cls(roster=Roster.from_config(config), rng=random.Random(seed))

    @property
    def is_over(self) -> bool:
        return self.winner is not None or len(self.roster) <= 1

    def start_round(self) -> Round:
        """Return a new round ready to ``advance``."""

        if self.is_over:
            raise IllegalDecision("the game is already over")
        return Round(
            number=self.round_number,
            roster=self.roster,
            pool=self.pool,
            rng=self.rng,
            deck_factory=self.deck_factory,
        )

    def complete_round(self, current: Round) -> scoreboard.RoundSummary:
        """Fold a finished round into the game and return its summary."""

        if not current.is_done or current.sweep is None:
            raise IllegalDecision("round is still in progress")
        if current.number != self.round_number:
            raise IllegalDecision(f"expected round {self.round_number}, got {current.number}")

        sweep = current.sweep
        if sweep.last_eliminated is not None:
            self.last_eliminated = sweep.last_eliminated

        if sweep.survivors == 0:
            # Whole field fell in one sweep: the last one swept survived longest.
            self.winner = sweep.last_eliminated
        elif sweep.survivors == 1:
            self.winner = self.roster[0].name

        standings = [
            scoreboard.PlayerStanding(name=player.name, life=player.life, eliminated=player.life <= 0)
            for player in (self.roster.get(player_id) for player_id in current.seated_ids)
        ]
        summary = scoreboard.RoundSummary(
            round_number=current.number,
            first_player=current.first_player,
            eliminated=sweep.eliminated,
            pool=self.pool.points,
            standings=standings,
            winner=self.winner,
        )
        self.history.record(summary)
        if self.winner is not None:
            logger.info("%s wins after %d rounds", self.winner, self.round_number)
        self.round_number += 1
        return summary


def play(game: Game, decide: Callable[[DecisionRequest], bool]) -> str:
    """Drive ``game`` to the end, answering every request with ``decide``."""

    while not game.is_over:
        current = game.start_round()
        request = current.advance()
        while request is not None:
            request = current.decide(decide(request))
        game.complete_round(current)
    if game.winner is None:
        game.winner = game.roster[0].name
    return game.winner
