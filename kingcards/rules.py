"""Setup limits, validators and the rulebook."""

from __future__ import annotations

from typing import Final

from .cards import Rank

__all__ = [
    "MIN_PLAYERS",
    "MAX_PLAYERS",
    "MIN_LIFE",
    "MAX_LIFE",
    "MAX_NAME_LENGTH",
    "EFFECT_DESCRIPTIONS",
    "RULEBOOK",
    "validate_player_count",
    "validate_name",
    "validate_initial_life",
]

MIN_PLAYERS: Final[int] = 2
MAX_PLAYERS: Final[int] = 20
MIN_LIFE: Final[int] = 2
MAX_LIFE: Final[int] = 10
MAX_NAME_LENGTH: Final[int] = 14

EFFECT_DESCRIPTIONS: Final[dict[Rank, str]] = {
    Rank.ACE: "Lose 1 life point and put it on the field",
    Rank.SEVEN: "Reveal the next player's hidden card and apply its effect",
    Rank.JACK: "Give 1 life point to the previous player",
    Rank.QUEEN: "Give 1 life point to the player two seats ahead (void with 2 players)",
    Rank.KING: "Take every life point on the field",
}

RULEBOOK: Final[tuple[str, ...]] = (
    "Every player starts with the same number of life points.",
    "Each round every player receives 2 cards: one face up, one hidden.",
    "Card effects:",
    *(f"  {rank.value}: {text}" for rank, text in EFFECT_DESCRIPTIONS.items()),
    "  2-6: No effect",
    "When your hidden card is still covered you may reveal it and choose whether to apply it.",
    "Players at 0 life points are eliminated at the end of the round.",
    "The last player standing wins.",
)


def validate_player_count(count: int) -> int:
    """Return ``count`` when it is an allowed table size."""

    if count < MIN_PLAYERS or count > MAX_PLAYERS:
        raise ValueError(f"between {MIN_PLAYERS} and {MAX_PLAYERS} people can play")
    return count


def validate_name(name: str) -> str:
    """Return the stripped ``name`` when it is a legal display name."""

    cleaned = name.strip()
    if not cleaned:
        raise ValueError("the name cannot be empty")
    if len(cleaned) > MAX_NAME_LENGTH:
        raise ValueError(f"the name can have at most {MAX_NAME_LENGTH} characters")
    if not cleaned.isprintable():
        raise ValueError("the name can only contain printable characters")
    return cleaned


def validate_initial_life(life: int) -> int:
    """Return ``life`` when it is an allowed starting life total."""

    if life < MIN_LIFE or life > MAX_LIFE:
        raise ValueError(f"life points must be between {MIN_LIFE} and {MAX_LIFE}")
    return life
