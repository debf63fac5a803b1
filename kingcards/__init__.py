"""Top-level package for the King delle Cartes game engine."""

from . import cards, effects, game, roster, rounds, rules, state

__all__ = [
    "cards",
    "effects",
    "game",
    "roster",
    "rounds",
    "rules",
    "state",
]
