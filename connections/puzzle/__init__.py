"""
Puzzle Package - Core data model for the word-grouping puzzle.

This package holds the pieces the game engine is built from. Nothing in here
knows about rendering or input devices.

Public API:
    - TileSet: Unordered set of unique tiles
    - WordGroup: One hidden group with clue, category and revelation status
    - Category / Revealer / RevelationStatus: Group enums and reveal state
    - BoardLayout: Immutable grid of unsolved tiles
    - SelectionTracker: Current selection, capped at the group size
    - GuessHistory: Every selection submitted so far
    - PuzzleDefinition / GroupDefinition: Static puzzle seed data
    - Intents: ToggleTile, Shuffle, DeselectAll, Submit, RevealRemaining, Quit

Usage:
    from connections.puzzle import BoardLayout, DEFAULT_PUZZLE

    definition = DEFAULT_PUZZLE.validate()
    board = BoardLayout.from_groups(g.members for g in definition.groups)
    board = board.shuffle()
"""

# Core data structures
from .sets import TileSet
from .group import (
    Category,
    Revealer,
    RevelationStatus,
    RevelationError,
    WordGroup,
)
from .board import BoardLayout, BoardShapeError, reshape
from .selection import SelectionTracker, GuessHistory
from .definition import (
    GroupDefinition,
    PuzzleDefinition,
    PuzzleDefinitionError,
    DEFAULT_PUZZLE,
)

# Player intents
from .intents import (
    Intent,
    ToggleTile,
    Shuffle,
    DeselectAll,
    Submit,
    RevealRemaining,
    Quit,
)

__all__ = [
    # Data structures
    "TileSet",
    "Category",
    "Revealer",
    "RevelationStatus",
    "RevelationError",
    "WordGroup",
    "BoardLayout",
    "BoardShapeError",
    "reshape",
    "SelectionTracker",
    "GuessHistory",
    # Puzzle definition
    "GroupDefinition",
    "PuzzleDefinition",
    "PuzzleDefinitionError",
    "DEFAULT_PUZZLE",
    # Intents
    "Intent",
    "ToggleTile",
    "Shuffle",
    "DeselectAll",
    "Submit",
    "RevealRemaining",
    "Quit",
]
