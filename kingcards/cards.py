"""Card abstractions and the 40-card deck."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable

__all__ = ["Suit", "Rank", "Card", "Deck", "DeckExhausted", "DECK_SIZE", "iter_full_deck"]


class Suit(str, Enum):
    """Enumeration of the four suits, in canonical deck order."""

    HEARTS = "H"
    CLUBS = "C"
    DIAMONDS = "D"
    SPADES = "S"


class Rank(str, Enum):
    """Enumeration of the ten ranks, in canonical deck order."""

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"

    @classmethod
    def ordered(cls) -> tuple["Rank", ...]:
        """Return ranks in the order a fresh deck is assembled."""

        return tuple(cls)


DECK_SIZE = len(Suit) * len(Rank)


class DeckExhausted(RuntimeError):
    """Raised when more cards are drawn than the deck holds."""


@dataclass(frozen=True, slots=True)
class Card:
    """Value object describing a single card."""

    suit: Suit
    rank: Rank

    def __post_init__(self) -> None:
        if not isinstance(self.suit, Suit):
            raise TypeError(f"unknown suit {self.suit!r}")
        if not isinstance(self.rank, Rank):
            raise TypeError(f"unknown rank {self.rank!r}")

    def label(self) -> str:
        """Create a compact label such as ``QH`` or ``7S``."""

        return f"{self.rank.value}{self.suit.value}"


def iter_full_deck() -> Iterable[Card]:
    """Yield the 40 cards of a fresh deck in suit-major order."""

    for suit in Suit:
        for rank in Rank.ordered():
            yield Card(suit=suit, rank=rank)


@dataclass(slots=True)
class Deck:
    """Ordered pile of cards consumed from the end of ``cards``."""

    cards: list[Card] = field(default_factory=lambda: list(iter_full_deck()))

    @classmethod
    def new_shuffled(cls, rng: Any) -> "Deck":
        """Return a canonical deck permuted with Fisher-Yates.

        ``rng`` only needs a ``randrange`` method; ``random.Random`` works and
        tests inject deterministic stand-ins.
        """

        cards = list(iter_full_deck())
        for i in range(len(cards) - 1, 0, -1):
            j = rng.randrange(i + 1)
            cards[i], cards[j] = cards[j], cards[i]
        return cls(cards=cards)

    def __len__(self) -> int:
        return len(self.cards)

    def draw_two(self) -> tuple[Card, Card]:
        """Remove and return the two top cards as ``(primary, secondary)``."""

        if len(self.cards) < 2:
            raise DeckExhausted(f"cannot draw two cards from a deck of {len(self.cards)}")
        primary = self.cards.pop()
        secondary = self.cards.pop()
        return primary, secondary
