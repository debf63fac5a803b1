from __future__ import annotations

import pytest

from kingcards import scoreboard


def _summary(number: int, eliminated: tuple[str, ...] = ()) -> scoreboard.RoundSummary:
    return scoreboard.RoundSummary(
        round_number=number,
        first_player="Ada",
        eliminated=eliminated,
        pool=number,
        standings=[scoreboard.PlayerStanding(name="Ada", life=3, eliminated=False)],
    )


def test_match_history_tracks_eliminations() -> None:
    history = scoreboard.MatchHistory()
    history.record(_summary(1))
    history.record(_summary(2, ("Bea",)))
    history.record(_summary(3, ("Cy", "Dan")))

    assert len(history.rounds) == 3
    assert history.elimination_order() == ["Bea", "Cy", "Dan"]
    assert history.round_eliminated("Cy") == 3
    assert history.round_eliminated("Ada") is None


def test_match_history_requires_consecutive_rounds() -> None:
    history = scoreboard.MatchHistory()
    history.record(_summary(1))

    with pytest.raises(ValueError):
        history.record(_summary(3))
