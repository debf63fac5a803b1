from __future__ import annotations

import io
import random

import pytest
import typer
from rich.console import Console
from typer.testing import CliRunner

from kingcards.cards import Card, Deck, Rank, Suit
from kingcards.cli import main as cli_main
from kingcards.cli.render import describe_event, format_card
from kingcards.effects import EffectEvent, EffectKind
from kingcards.game import Game
from kingcards.roster import Roster
from kingcards.rounds import Round, TurnEvent, TurnNote
from kingcards.state import Player, SharedPool

ACE = Card(Suit.HEARTS, Rank.ACE)

runner = CliRunner()


def _ace_game(config, *, seed=None) -> Game:
    game = Game(roster=Roster.from_config(config), rng=random.Random(seed))
    game.deck_factory = lambda _rng: Deck(cards=[ACE] * 40)
    return game


def test_rules_command_prints_rulebook() -> None:
    result = runner.invoke(cli_main.app, ["rules"])

    assert result.exit_code == 0
    assert "last player standing" in result.output


@pytest.mark.parametrize("args", [["--players", "1"], ["--players", "21"], ["--life", "11"]])
def test_play_rejects_out_of_range_options(args: list[str]) -> None:
    result = runner.invoke(cli_main.app, ["play", *args])

    assert result.exit_code == 2


def test_play_runs_a_full_game(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_main.Game, "from_config", staticmethod(_ace_game))

    result = runner.invoke(
        cli_main.app,
        ["play", "--players", "2", "--life", "2", "--name", "Ada", "--name", "Bea", "--no-clear", "--seed", "3"],
        input="n\n" * 40,
    )

    assert result.exit_code == 0, result.output
    assert "Ada has been eliminated!" in result.output
    assert "The winner is Bea, congratulations!" in result.output
    assert "Match Summary" in result.output
    assert "Final Standings" in result.output
    assert "Eliminated in round" in result.output


def test_collect_config_uses_given_values() -> None:
    config = cli_main._collect_config(2, ["Ada", " Bea "], 4)

    assert config.player_names == ("Ada", "Bea")
    assert config.initial_life == 4


def test_collect_config_rejects_extra_names() -> None:
    with pytest.raises(typer.BadParameter):
        cli_main._collect_config(2, ["Ada", "Bea", "Cy"], 4)


def test_collect_config_prompts_until_valid(monkeypatch: pytest.MonkeyPatch) -> None:
    numbers = iter([1, 3, 42, 6])
    names = iter(["", "Bea", "a-name-far-too-long", "Cy"])
    monkeypatch.setattr(cli_main.IntPrompt, "ask", lambda *args, **kwargs: next(numbers))
    monkeypatch.setattr(cli_main.Prompt, "ask", lambda *args, **kwargs: next(names))

    config = cli_main._collect_config(None, ["Ada"], None)

    assert config.player_names == ("Ada", "Bea", "Cy")
    assert config.initial_life == 6


def test_describe_event_covers_effects() -> None:
    event = EffectEvent(kind=EffectKind.POOL_CLAIMED, actor="Ada", card=Card(Suit.SPADES, Rank.KING), amount=3)

    assert "Ada" in describe_event(event)
    assert "3" in describe_event(event)
    assert describe_event(TurnEvent(note=TurnNote.TURN_STARTED, player="Ada", player_id=0, player_index=0, life=3)) is None
    assert "Clubs" in format_card(Card(Suit.CLUBS, Rank.SEVEN))


def test_table_shell_prints_turn_status() -> None:
    buffer = io.StringIO()
    shell = cli_main.TableShell(console=Console(file=buffer, width=100), clear=False)
    table = Roster([Player(player_id=idx, name=name, life=3) for idx, name in enumerate(("Ada", "Bea"))])
    current = Round(
        number=1,
        roster=table,
        pool=SharedPool(),
        rng=random.Random(0),
        deck_factory=lambda _rng: Deck(cards=[ACE] * 4),
    )

    request = current.advance()
    shell.flush(current)

    output = buffer.getvalue()
    assert request is not None
    assert request.player in output
    assert "FACE DOWN" in output
    assert "the Ace costs you a life point" in output


class _FirstSeat:
    def randrange(self, stop: int) -> int:
        return 0


def test_table_shell_follows_players_across_the_sweep(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_main, "_pause", lambda: None)
    hands = [
        (ACE, Card(Suit.CLUBS, Rank.TWO)),
        (Card(Suit.SPADES, Rank.SEVEN), Card(Suit.CLUBS, Rank.THREE)),
        (Card(Suit.DIAMONDS, Rank.THREE), Card(Suit.DIAMONDS, Rank.TWO)),
    ]
    draw_order = [card for hand in hands for card in hand]
    table = Roster([Player(player_id=idx, name=f"P{idx}", life=life) for idx, life in enumerate((1, 3, 3))])
    current = Round(
        number=1,
        roster=table,
        pool=SharedPool(),
        rng=_FirstSeat(),
        deck_factory=lambda _rng: Deck(cards=list(reversed(draw_order))),
    )
    buffer = io.StringIO()
    shell = cli_main.TableShell(console=Console(file=buffer, width=100), clear=False)

    request = current.advance()
    shell.flush(current)
    while request is not None:
        request = current.decide(False)
        shell.flush(current)

    output = buffer.getvalue()
    assert current.is_done
    assert [player.name for player in table] == ["P1", "P2"]
    for name in ("P0", "P1", "P2"):
        assert f"Turn of {name}" in output
    p0_panel = output.split("Turn of P0", 1)[1].split("Turn of P1", 1)[0]
    assert "Life points:  1" in p0_panel
    p2_panel = output.split("Turn of P2", 1)[1]
    assert "Index:  2" in p2_panel
