"""Composable view primitives for the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from rich import box
from rich.console import Group, RenderableType
from rich.table import Table
from rich.text import Text

from ..cards import Card
from ..scoreboard import MatchHistory, RoundSummary
from ..state import Player


@dataclass(slots=True)
class PlayerStatusView:
    """Renderable with a player's index, life and cards.

    ``index`` and ``life`` override the live values so a turn can be shown as
    it stood when it started.
    """

    player: Player
    card_formatter: Callable[[Card], str]
    index: int | None = None
    life: int | None = None

    def render(self) -> RenderableType:
        index = self.player.index if self.index is None else self.index
        life = self.player.life if self.life is None else self.life
        grid = Table.grid(expand=True)
        grid.add_column(justify="left")
        grid.add_row(
            f"[bold]Index[/bold]: [blue]{index:2d}[/blue]   "
            f"[bold]Life points[/bold]: [red]{life:2d}[/red]"
        )
        hand = self.player.hand
        if hand is None:
            grid.add_row("[dim]No cards dealt yet[/dim]")
            return grid
        grid.add_row(f"[bold]Card 1)[/bold] {self.card_formatter(hand.primary)}")
        if hand.secondary_revealed:
            grid.add_row(f"[bold]Card 2)[/bold] {self.card_formatter(hand.secondary)}")
        else:
            grid.add_row("[bold]Card 2)[/bold] [red]FACE DOWN![/red]")
        return grid


@dataclass(slots=True)
class RoundSummaryView:
    """Renderable describing the outcome of a round."""

    summary: RoundSummary

    def render(self) -> RenderableType:
        table = Table(title=f"Round {self.summary.round_number} Summary", box=box.SIMPLE_HEAVY)
        table.add_column("Player", justify="left")
        table.add_column("Life", justify="right")
        table.add_column("Status", justify="center")
        for standing in self.summary.standings:
            status = "[bold red]Eliminated[/bold red]" if standing.eliminated else "In play"
            table.add_row(standing.name, str(standing.life), status)

        footer = Text(f"Life points on the field: {self.summary.pool}", style="bold")
        return Group(table, footer)


@dataclass(slots=True)
class MatchHistoryView:
    """Renderable listing every round of a finished game."""

    history: MatchHistory

    def render(self) -> RenderableType:
        table = Table(title="Match Summary", box=box.DOUBLE_EDGE)
        table.add_column("Round", justify="right")
        table.add_column("First player", justify="left")
        table.add_column("Eliminated", justify="left")
        table.add_column("Field", justify="right")
        for summary in self.history.rounds:
            eliminated = ", ".join(summary.eliminated) if summary.eliminated else "—"
            table.add_row(str(summary.round_number), summary.first_player, eliminated, str(summary.pool))
        return table


@dataclass(slots=True)
class FinalStandingsView:
    """Renderable listing every seated player once the game is over."""

    players: Sequence[Player]
    history: MatchHistory
    winner: str | None = None

    def render(self) -> RenderableType:
        table = Table(title="Final Standings", box=box.SIMPLE_HEAVY)
        table.add_column("Player", justify="left")
        table.add_column("Life", justify="right")
        table.add_column("Result", justify="left")
        for player in self.players:
            fell_in = self.history.round_eliminated(player.name)
            if player.name == self.winner:
                result = "[bold green]Winner[/bold green]"
            elif fell_in is not None:
                result = f"Eliminated in round {fell_in}"
            else:
                result = "In play"
            table.add_row(player.name, str(player.life), result)
        return table
