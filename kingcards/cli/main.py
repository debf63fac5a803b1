"""Typer entry-point wiring for the King delle Cartes CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, TypeVar

import typer
from rich import box
from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt

from .. import rules
from ..game import Game
from ..logging_utils import LOG_LEVEL, get_logger, setup_logging
from ..rounds import DecisionKind, DecisionRequest, Round, TurnEvent, TurnNote
from ..state import GameConfig
from .render import describe_event, format_card, render_player
from .views import FinalStandingsView, MatchHistoryView, RoundSummaryView

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()
logger = get_logger(__name__)

T = TypeVar("T")


def _ask_until_valid(ask: Callable[[], T], validate: Callable[[T], T]) -> T:
    """Repeat ``ask`` until ``validate`` accepts the answer."""

    while True:
        value = ask()
        try:
            return validate(value)
        except ValueError as exc:
            console.print(f"[red]Error - {exc}, try again.[/red]")


def _pause() -> None:
    console.input("\n[bold]Press ENTER to continue...[/bold]")


def _rulebook_panel() -> Panel:
    body = "\n".join(rules.RULEBOOK)
    return Panel(
        body,
        title="[bold yellow]WELCOME TO THE KING DELLE CARTES![/bold yellow]",
        border_style="cyan",
        box=box.DOUBLE,
    )


def _collect_config(players: Optional[int], names: List[str], life: Optional[int]) -> GameConfig:
    if players is None:
        players = _ask_until_valid(
            lambda: IntPrompt.ask("Number of players", console=console),
            rules.validate_player_count,
        )
    if len(names) > players:
        raise typer.BadParameter("more names than players were given", param_hint="--name")

    collected: list[str] = []
    for name in names:
        try:
            collected.append(rules.validate_name(name))
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--name") from exc
    for seat in range(len(collected), players):
        collected.append(
            _ask_until_valid(
                lambda: Prompt.ask(f"Player {seat + 1}, enter your name", console=console),
                rules.validate_name,
            )
        )

    if life is None:
        life = _ask_until_valid(
            lambda: IntPrompt.ask("Starting life points for each player", console=console),
            rules.validate_initial_life,
        )

    console.print(f"[bold green]OK, we are {players} players![/bold green]")
    for seat, name in enumerate(collected, start=1):
        console.print(f"{seat}) {name}")
    console.print(f"[bold green]Everyone starts with {life} life points![/bold green]")
    return GameConfig(player_names=tuple(collected), initial_life=life)


@dataclass(slots=True)
class TableShell:
    """Renders a round as it unfolds and asks players for their decisions."""

    console: Console
    clear: bool = True
    _shown: int = 0
    _turns_seen: int = 0

    def reset(self) -> None:
        self._shown = 0
        self._turns_seen = 0

    def flush(self, current: Round) -> None:
        """Print every event recorded since the last flush."""

        for event in current.events[self._shown :]:
            if isinstance(event, TurnEvent) and event.note is TurnNote.TURN_STARTED:
                if self._turns_seen:
                    self._end_turn()
                self._turns_seen += 1
                player = current.roster.get(event.player_id)
                self.console.print(render_player(player, index=event.player_index, life=event.life))
                self.console.print("[cyan]Checking the effect of card 1:[/cyan]")
                continue
            line = describe_event(event)
            if line is not None:
                self.console.print(line)
        self._shown = len(current.events)

    def ask(self, request: DecisionRequest) -> bool:
        if request.kind is DecisionKind.REVEAL:
            return Confirm.ask(f"{request.player}, do you want to look at your hidden card?", console=self.console)
        if request.card is not None:
            self.console.print(f"[bold]Card 2)[/bold] {format_card(request.card)}")
        answer = Confirm.ask("Do you want to reveal the card and apply its effect?", console=self.console)
        if answer:
            self.console.print("[cyan]Checking the effect of card 2:[/cyan]")
        return answer

    def _end_turn(self) -> None:
        _pause()
        if self.clear:
            self.console.clear()


def _round_header(game: Game) -> Panel:
    return Panel(
        Align.center(
            f"[bold yellow]ROUND {game.round_number}[/bold yellow]\n"
            f"[bold]LIFE POINTS ON THE FIELD:[/bold] [green]{game.pool.points}[/green]"
        ),
        border_style="yellow",
        box=box.DOUBLE,
    )


def _run_round(game: Game, shell: TableShell) -> None:
    current = game.start_round()
    shell.reset()
    console.print(_round_header(game))
    current.deal()
    console.print(f"[bold yellow]First to play this round:[/bold yellow] [bold green]{current.first_player}[/bold green]")

    request = current.advance()
    shell.flush(current)
    while request is not None:
        answer = shell.ask(request)
        request = current.decide(answer)
        shell.flush(current)

    console.print(f"\n[bold magenta]ROUND {current.number} COMPLETE![/bold magenta]")
    summary = game.complete_round(current)
    for name in summary.eliminated:
        console.print(Panel(Align.center(f"[bold]{name} has been eliminated![/bold]"), border_style="red"))
    console.print(RoundSummaryView(summary).render())
    _pause()
    if shell.clear:
        console.clear()


@app.command()
def play(
    players: Optional[int] = typer.Option(
        None,
        min=rules.MIN_PLAYERS,
        max=rules.MAX_PLAYERS,
        help="Number of seated players (prompted when omitted).",
    ),
    life: Optional[int] = typer.Option(
        None,
        min=rules.MIN_LIFE,
        max=rules.MAX_LIFE,
        help="Starting life points for every player (prompted when omitted).",
    ),
    name: List[str] = typer.Option([], "--name", "-n", help="Player name, repeat once per seat."),
    seed: Optional[int] = typer.Option(None, help="Random seed for reproducible games (omit for randomness)."),
    clear: bool = typer.Option(True, "--clear/--no-clear", help="Clear the screen between turns."),
    log_level: str = typer.Option(LOG_LEVEL, "--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)."),
) -> None:
    """Play a game at this terminal."""

    setup_logging(log_level)
    console.print(_rulebook_panel())
    config = _collect_config(players, list(name), life)
    _pause()
    if clear:
        console.clear()

    game = Game.from_config(config, seed=seed)
    logger.info("starting game with %d players, seed=%s", config.num_players, seed)
    shell = TableShell(console=console, clear=clear)
    while not game.is_over:
        _run_round(game, shell)

    winner = game.winner if game.winner is not None else game.roster[0].name
    console.print(
        Panel(
            Align.center(f"[bold green]VICTORY![/bold green]\n\n[bold magenta]The winner is {winner}, congratulations![/bold magenta]"),
            border_style="green",
            box=box.DOUBLE,
        )
    )
    if game.history.rounds:
        console.print(MatchHistoryView(game.history).render())
        console.print(FinalStandingsView(game.roster.everyone(), game.history, winner).render())


@app.command("rules")
def rules_cli() -> None:
    """Print the rules of the game."""

    console.print(_rulebook_panel())


def main() -> None:
    """Entry-point for ``python -m kingcards.cli``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
