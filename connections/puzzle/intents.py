"""
Intents Module - Discrete player actions accepted by the engine.

Input handling translates raw key presses and clicks into one of these;
the engine never sees raw input events.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class ToggleTile:
    """Select or deselect the tile with this label."""
    label: str


@dataclass(frozen=True)
class Shuffle:
    """Shuffle the tiles on the board."""


@dataclass(frozen=True)
class DeselectAll:
    """Clear the current selection."""


@dataclass(frozen=True)
class Submit:
    """Submit the current selection as a guess."""


@dataclass(frozen=True)
class RevealRemaining:
    """Reveal every unsolved group once mistakes are exhausted."""


@dataclass(frozen=True)
class Quit:
    """End the interactive session."""


Intent = Union[ToggleTile, Shuffle, DeselectAll, Submit, RevealRemaining, Quit]
