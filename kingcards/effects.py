"""
Effect Resolver - applies the effect of a played card.

Most ranks resolve in a single step. A Seven reveals the next player's
hidden card and hands resolution over to that card with the next player
acting, so one call may walk a chain of reveals around the table. The
chain is followed in a bounded loop: every hop consumes a hidden card,
so it ends within ``len(roster)`` hops.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .cards import Card, Rank
from .logging_utils import get_logger
from .roster import Roster
from .state import SharedPool

__all__ = ["ResolverState", "EffectKind", "EffectEvent", "EffectResolver", "resolve_effect"]

logger = get_logger(__name__)

_INERT_RANKS = frozenset({Rank.TWO, Rank.THREE, Rank.FOUR, Rank.FIVE, Rank.SIX})


class ResolverState(Enum):
    """State of the effect resolver."""

    RESOLVING = "resolving"
    DONE = "done"


class EffectKind(str, Enum):
    """Narrative outcome of one resolution step."""

    LIFE_TO_POOL = "life_to_pool"  # Ace
    NO_EFFECT = "no_effect"  # 2-6
    REVEAL = "reveal"  # Seven, chain continues
    REVEAL_FIZZLED = "reveal_fizzled"  # Seven on an already revealed card
    GIVE_TO_PREVIOUS = "give_to_previous"  # Jack
    GIVE_TO_SECOND_NEXT = "give_to_second_next"  # Queen
    QUEEN_NULLIFIED = "queen_nullified"  # Queen with two players
    POOL_CLAIMED = "pool_claimed"  # King
    POOL_EMPTY = "pool_empty"  # King on an empty field


@dataclass(frozen=True, slots=True)
class EffectEvent:
    """Structured record of one resolution step for the presentation layer.

    ``amount`` is the number of life points that changed hands (for a reveal
    it is zero). ``pool`` is the shared pool after the step.
    """

    kind: EffectKind
    actor: str
    card: Card
    target: str | None = None
    amount: int = 0
    pool: int = 0
    revealed: Card | None = None


@dataclass
class EffectResolver:
    """Resolves a card against the roster and the shared pool.

    Mutates player life totals and the pool in place and returns the events
    describing what happened.
    """

    roster: Roster
    pool: SharedPool
    state: ResolverState = ResolverState.DONE
    events: list[EffectEvent] = field(default_factory=list)

    def resolve(self, card: Card, actor_index: int) -> list[EffectEvent]:
        if not len(self.roster):
            raise RuntimeError("cannot resolve an effect without active players")

        self.events = []
        self.state = ResolverState.RESOLVING
        max_hops = len(self.roster)
        hops = 0

        while self.state is ResolverState.RESOLVING:
            if card.rank is Rank.SEVEN:
                revealed_index = self._reveal_next(card, actor_index)
                if revealed_index is None:
                    self.state = ResolverState.DONE
                    continue
                hops += 1
                if hops > max_hops:
                    raise RuntimeError("seven chain exceeded the number of active players")
                actor_index = revealed_index
                card = self.roster[actor_index].require_hand().secondary
                continue

            self._apply_terminal(card, actor_index)
            self.state = ResolverState.DONE

        return self.events

    def _emit(self, event: EffectEvent) -> None:
        logger.debug("effect %s by %s (%s)", event.kind.value, event.actor, event.card.label())
        self.events.append(event)

    def _reveal_next(self, card: Card, actor_index: int) -> int | None:
        """Reveal the next player's hidden card; ``None`` when it fizzles."""

        actor = self.roster[actor_index]
        target_index = self.roster.next_index(actor_index)
        target = self.roster[target_index]
        hand = target.require_hand()
        if hand.secondary_revealed:
            self._emit(
                EffectEvent(
                    kind=EffectKind.REVEAL_FIZZLED,
                    actor=actor.name,
                    card=card,
                    target=target.name,
                    pool=self.pool.points,
                )
            )
            return None

        hand.secondary_revealed = True
        self._emit(
            EffectEvent(
                kind=EffectKind.REVEAL,
                actor=actor.name,
                card=card,
                target=target.name,
                pool=self.pool.points,
                revealed=hand.secondary,
            )
        )
        return target_index

    def _apply_terminal(self, card: Card, actor_index: int) -> None:
        actor = self.roster[actor_index]
        rank = card.rank

        if rank is Rank.ACE:
            actor.lose_life()
            self.pool.deposit()
            self._emit(
                EffectEvent(
                    kind=EffectKind.LIFE_TO_POOL,
                    actor=actor.name,
                    card=card,
                    amount=1,
                    pool=self.pool.points,
                )
            )
        elif rank in _INERT_RANKS:
            self._emit(EffectEvent(kind=EffectKind.NO_EFFECT, actor=actor.name, card=card, pool=self.pool.points))
        elif rank is Rank.JACK:
            self._transfer(card, actor_index, self.roster.prev_index(actor_index), EffectKind.GIVE_TO_PREVIOUS)
        elif rank is Rank.QUEEN:
            if len(self.roster) == 2:
                self._emit(
                    EffectEvent(kind=EffectKind.QUEEN_NULLIFIED, actor=actor.name, card=card, pool=self.pool.points)
                )
            else:
                self._transfer(
                    card, actor_index, self.roster.next2_index(actor_index), EffectKind.GIVE_TO_SECOND_NEXT
                )
        elif rank is Rank.KING:
            if self.pool.points > 0:
                taken = self.pool.withdraw_all()
                actor.gain_life(taken)
                self._emit(
                    EffectEvent(kind=EffectKind.POOL_CLAIMED, actor=actor.name, card=card, amount=taken, pool=0)
                )
            else:
                self._emit(EffectEvent(kind=EffectKind.POOL_EMPTY, actor=actor.name, card=card, pool=0))
        else:  # pragma: no cover - Card rejects ranks outside the table
            raise RuntimeError(f"no effect defined for rank {rank!r}")

    def _transfer(self, card: Card, giver_index: int, receiver_index: int, kind: EffectKind) -> None:
        # The receiver gains a point even when the giver is already at zero.
        giver = self.roster[giver_index]
        receiver = self.roster[receiver_index]
        giver.lose_life()
        receiver.gain_life()
        self._emit(
            EffectEvent(
                kind=kind,
                actor=giver.name,
                card=card,
                target=receiver.name,
                amount=1,
                pool=self.pool.points,
            )
        )


def resolve_effect(card: Card, actor_index: int, roster: Roster, pool: SharedPool) -> list[EffectEvent]:
    """Resolve ``card`` played by the player at ``actor_index``."""

    return EffectResolver(roster=roster, pool=pool).resolve(card, actor_index)
