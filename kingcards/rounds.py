"""
Round Orchestrator - sequences a single round.

Phases:
1. DEALING: fresh shuffled deck, reveal flags reset, random first player,
   two cards dealt to everyone
2. TURN_LOOP: every active player resolves their face-up card, then decides
   about the hidden one
3. SWEEPING: players at zero life leave the roster
4. DONE

The round never waits on input itself. ``advance`` and ``decide`` return a
``DecisionRequest`` whenever a player has to choose, and ``None`` once the
round is over.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Union

from .cards import Card, Deck
from .effects import EffectEvent, resolve_effect
from .logging_utils import get_logger
from .roster import Roster, SweepResult
from .state import Hand, SharedPool

__all__ = [
    "RoundPhase",
    "DecisionKind",
    "DecisionRequest",
    "TurnNote",
    "TurnEvent",
    "RoundEvent",
    "IllegalDecision",
    "Round",
]

logger = get_logger(__name__)


class IllegalDecision(RuntimeError):
    """Raised when a decision arrives while none is pending."""


class RoundPhase(Enum):
    """Lifecycle of a round."""

    DEALING = "dealing"
    TURN_LOOP = "turn_loop"
    SWEEPING = "sweeping"
    DONE = "done"


class DecisionKind(str, Enum):
    REVEAL = "reveal"  # reveal the hidden card?
    APPLY = "apply"  # apply the revealed card's effect?


@dataclass(frozen=True, slots=True)
class DecisionRequest:
    """A yes/no question the shell must put to a player."""

    kind: DecisionKind
    player: str
    player_index: int
    card: Card | None = None


class TurnNote(str, Enum):
    TURN_STARTED = "turn_started"
    SECONDARY_ALREADY_REVEALED = "secondary_already_revealed"
    SECONDARY_KEPT_HIDDEN = "secondary_kept_hidden"
    SECONDARY_NOT_APPLIED = "secondary_not_applied"


@dataclass(frozen=True, slots=True)
class TurnEvent:
    """Turn bookkeeping shown between effect events.

    ``player_index`` is the seat during this round and goes stale once the
    sweep renumbers the roster; ``player_id`` does not. ``life`` is taken
    when the event is recorded, before any effect of that step.
    """

    note: TurnNote
    player: str
    player_id: int
    player_index: int
    life: int


RoundEvent = Union[TurnEvent, EffectEvent]


@dataclass
class Round:
    """State machine driving one round of play."""

    number: int
    roster: Roster
    pool: SharedPool
    rng: Any
    deck_factory: Callable[[Any], Deck] = Deck.new_shuffled
    phase: RoundPhase = RoundPhase.DEALING
    first_index: int = 0
    turns_taken: int = 0
    pending: DecisionRequest | None = None
    events: list[RoundEvent] = field(default_factory=list)
    sweep: SweepResult | None = None
    deck: Deck | None = None
    first_player: str = ""
    seated_ids: tuple[int, ...] = ()

    @property
    def current_index(self) -> int:
        return (self.first_index + self.turns_taken) % len(self.roster)

    @property
    def is_done(self) -> bool:
        return self.phase is RoundPhase.DONE

    def deal(self) -> None:
        """Shuffle a fresh deck and hand two cards to every active player."""

        if self.phase is not RoundPhase.DEALING:
            raise IllegalDecision("round has already been dealt")
        count = len(self.roster)
        if count == 0:
            raise RuntimeError("cannot deal a round without active players")

        self.deck = self.deck_factory(self.rng)
        self.first_index = self.rng.randrange(count)
        self.first_player = self.roster[self.first_index].name
        self.seated_ids = tuple(player.player_id for player in self.roster)

        seat = self.first_index
        for _ in range(count):
            player = self.roster[seat]
            primary, secondary = self.deck.draw_two()
            # Fresh hands start with the second card hidden.
            player.hand = Hand(primary=primary, secondary=secondary)
            seat = self.roster.next_index(seat)

        logger.debug(
            "round %d dealt to %d players, %s starts",
            self.number,
            count,
            self.first_player,
        )
        self.phase = RoundPhase.TURN_LOOP

    def advance(self) -> DecisionRequest | None:
        """Run turns until a decision is needed or the round ends."""

        if self.phase is RoundPhase.DEALING:
            self.deal()
        if self.pending is not None:
            return self.pending

        while self.phase is RoundPhase.TURN_LOOP:
            if self.turns_taken >= len(self.roster):
                self.phase = RoundPhase.SWEEPING
                break
            request = self._start_turn()
            if request is not None:
                self.pending = request
                return request
            self.turns_taken += 1

        if self.phase is RoundPhase.SWEEPING:
            self.sweep = self.roster.sweep()
            self.phase = RoundPhase.DONE
            logger.info("round %d complete, %d players remain", self.number, self.sweep.survivors)
        return None

    def decide(self, answer: bool) -> DecisionRequest | None:
        """Answer the pending request and continue the round."""

        request = self.pending
        if request is None:
            raise IllegalDecision("no decision is pending")
        self.pending = None
        player = self.roster[request.player_index]
        hand = player.require_hand()

        if request.kind is DecisionKind.REVEAL:
            if answer:
                hand.secondary_revealed = True
                self.pending = DecisionRequest(
                    kind=DecisionKind.APPLY,
                    player=player.name,
                    player_index=request.player_index,
                    card=hand.secondary,
                )
                return self.pending
            self._note(TurnNote.SECONDARY_KEPT_HIDDEN, request.player_index)
        elif answer:
            self.events.extend(resolve_effect(hand.secondary, request.player_index, self.roster, self.pool))
        else:
            self._note(TurnNote.SECONDARY_NOT_APPLIED, request.player_index)

        self.turns_taken += 1
        return self.advance()

    def _start_turn(self) -> DecisionRequest | None:
        index = self.current_index
        player = self.roster[index]
        hand = player.require_hand()
        self._note(TurnNote.TURN_STARTED, index)
        self.events.extend(resolve_effect(hand.primary, index, self.roster, self.pool))

        if hand.secondary_revealed:
            self._note(TurnNote.SECONDARY_ALREADY_REVEALED, index)
            return None
        return DecisionRequest(kind=DecisionKind.REVEAL, player=player.name, player_index=index)

    def _note(self, note: TurnNote, index: int) -> None:
        player = self.roster[index]
        self.events.append(
            TurnEvent(note=note, player=player.name, player_index=index, life=player.life, player_id=player.player_id)
        )
