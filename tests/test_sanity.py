"""Sanity tests ensuring the package imports correctly."""

from __future__ import annotations

import importlib

import pytest


@pytest.mark.parametrize(
    "module_name",
    [
        "kingcards",
        "kingcards.cards",
        "kingcards.state",
        "kingcards.roster",
        "kingcards.effects",
        "kingcards.rounds",
        "kingcards.game",
        "kingcards.scoreboard",
        "kingcards.cli.main",
    ],
)
def test_modules_import(module_name: str) -> None:
    """Ensure all foundational modules can be imported."""

    assert importlib.import_module(module_name)
