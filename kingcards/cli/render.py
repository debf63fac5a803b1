"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from rich.console import RenderableType
from rich.panel import Panel

from ..cards import Card, Rank, Suit
from ..effects import EffectEvent, EffectKind
from ..rounds import RoundEvent, TurnEvent, TurnNote
from ..state import Player
from .views import PlayerStatusView

_SUIT_SYMBOLS = {
    Suit.HEARTS: ("Hearts ♥", "red"),
    Suit.CLUBS: ("Clubs ♣", "green"),
    Suit.DIAMONDS: ("Diamonds ♦", "blue"),
    Suit.SPADES: ("Spades ♠", "magenta"),
}

_RANK_NAMES = {
    Rank.ACE: "Ace",
    Rank.JACK: "Jack",
    Rank.QUEEN: "Queen",
    Rank.KING: "King",
}


def format_card(card: Card) -> str:
    """Return a Rich-rendered label for ``card``."""

    suit_name, color = _SUIT_SYMBOLS[card.suit]
    rank_name = _RANK_NAMES.get(card.rank, card.rank.value)
    return f"{rank_name} of [{color}]{suit_name}[/{color}]"


def describe_event(event: RoundEvent) -> str | None:
    """Return the narrative line for ``event``; ``None`` when nothing is shown."""

    if isinstance(event, TurnEvent):
        return _describe_turn(event)
    return _describe_effect(event)


def _describe_turn(event: TurnEvent) -> str | None:
    if event.note is TurnNote.SECONDARY_ALREADY_REVEALED:
        return (
            f"[bold magenta]{event.player}, your card 2 was revealed by the previous player, "
            "take your revenge![/bold magenta]"
        )
    if event.note is TurnNote.SECONDARY_KEPT_HIDDEN:
        return f"[yellow]{event.player} keeps card 2 face down.[/yellow]"
    if event.note is TurnNote.SECONDARY_NOT_APPLIED:
        return f"[yellow]{event.player} shows card 2 but does not apply it.[/yellow]"
    return None


def _describe_effect(event: EffectEvent) -> str:
    kind = event.kind
    if kind is EffectKind.LIFE_TO_POOL:
        return (
            f"[red]Sorry {event.actor}, the Ace costs you a life point: it goes on the field "
            f"({event.pool} on the field).[/red]"
        )
    if kind is EffectKind.NO_EFFECT:
        return f"[cyan]{format_card(event.card)} has no effect.[/cyan]"
    if kind is EffectKind.REVEAL:
        revealed = format_card(event.revealed) if event.revealed is not None else "?"
        return (
            f"[yellow]Well done {event.actor}, a 7! {event.target}'s hidden card is revealed: "
            f"{revealed}, and its effect applies.[/yellow]"
        )
    if kind is EffectKind.REVEAL_FIZZLED:
        return f"[yellow]{event.actor} plays a 7, but {event.target}'s card is already revealed.[/yellow]"
    if kind is EffectKind.GIVE_TO_PREVIOUS:
        return f"[bold cyan]Sorry {event.actor}, with the Jack you give a life point to {event.target}.[/bold cyan]"
    if kind is EffectKind.GIVE_TO_SECOND_NEXT:
        return f"[bold cyan]Sorry {event.actor}, with the Queen you give a life point to {event.target}.[/bold cyan]"
    if kind is EffectKind.QUEEN_NULLIFIED:
        return "[red]Only two of you are left, the Queen's effect is void.[/red]"
    if kind is EffectKind.POOL_CLAIMED:
        return f"[green]Great {event.actor}, the King takes every life point on the field: {event.amount}![/green]"
    return f"[red]Sorry {event.actor}, the field is empty, no life points for you.[/red]"


def render_player(
    player: Player,
    *,
    index: int | None = None,
    life: int | None = None,
    title: str | None = None,
) -> RenderableType:
    """Return a Rich panel with the player's turn status."""

    view = PlayerStatusView(player=player, card_formatter=format_card, index=index, life=life)
    return Panel(
        view.render(),
        title=title or f"Turn of [bold green]{player.name}[/bold green]",
        padding=(0, 1),
        border_style="cyan",
    )
