"""
Presentation Model

Pure mapping from engine state to what a front end should draw. Holds no
state of its own; build_view() is called again after every intent.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from connections.game_engine import PuzzleEngine
from connections.puzzle import Category, Revealer


HEADER_TEXT = "Create four groups of four!"

SHUFFLE_BUTTON = "Shuffle"
DESELECT_ALL_BUTTON = "Deselect All"
SUBMIT_BUTTON = "Submit"
REVEAL_BUTTON = "Reveal All"

# Display colours per category
CATEGORY_COLORS: Dict[Category, str] = {
    Category.YELLOW: "#F9DF6D",
    Category.GREEN: "#A0C35A",
    Category.BLUE: "#B0C4EF",
    Category.PURPLE: "#BA81C5",
}


@dataclass(frozen=True)
class RevealedRow:
    """A revealed group, words sorted so the row is stable across redraws."""
    words: Tuple[str, ...]
    clue: str
    category: Category
    revealer: Revealer
    color: str


@dataclass(frozen=True)
class TileView:
    """One board cell."""
    label: str
    selected: bool = False
    already_guessed: bool = False  # selected as part of a repeated full guess


@dataclass(frozen=True)
class ButtonView:
    """Action button and whether it currently does anything."""
    label: str
    enabled: bool


@dataclass(frozen=True)
class GameView:
    """Complete presentation model for one frame."""
    header: str
    revealed_rows: Tuple[RevealedRow, ...]
    board: Tuple[Tuple[TileView, ...], ...]
    mistakes_remaining: int
    buttons: Tuple[ButtonView, ...]
    status: str
    finished: bool = False

    @property
    def mistakes_text(self) -> str:
        return f"Mistakes remaining: {self.mistakes_remaining}"

    def button(self, label: str) -> ButtonView:
        """
        Get a button by label.

        Raises:
            KeyError: If no button has this label
        """
        for button in self.buttons:
            if button.label == label:
                return button
        raise KeyError(label)


def category_color(category: Category) -> str:
    return CATEGORY_COLORS[category]


def _build_revealed_rows(engine: PuzzleEngine) -> Tuple[RevealedRow, ...]:
    return tuple(
        RevealedRow(
            words=tuple(group.sorted_members()),
            clue=group.clue,
            category=group.category,
            revealer=group.revealer,
            color=category_color(group.category),
        )
        for group in engine.revealed_groups()
    )


def _build_board(engine: PuzzleEngine) -> Tuple[Tuple[TileView, ...], ...]:
    already_guessed = engine.selection_already_guessed()
    rows: List[Tuple[TileView, ...]] = []
    for row in engine.board.grid:
        cells = []
        for label in row:
            selected = engine.is_selected(label)
            cells.append(TileView(
                label=label,
                selected=selected,
                already_guessed=selected and already_guessed,
            ))
        rows.append(tuple(cells))
    return tuple(rows)


def _build_buttons(engine: PuzzleEngine) -> Tuple[ButtonView, ...]:
    if engine.mistakes_remaining <= 0:
        return (ButtonView(REVEAL_BUTTON, engine.can_reveal_remaining()),)

    return (
        ButtonView(SHUFFLE_BUTTON, engine.can_shuffle()),
        ButtonView(DESELECT_ALL_BUTTON, engine.can_deselect_all()),
        ButtonView(SUBMIT_BUTTON, engine.can_submit()),
    )


def build_view(engine: PuzzleEngine) -> GameView:
    """
    Build the presentation model for the engine's current state.

    Args:
        engine: Puzzle engine to read from (not modified)

    Returns:
        GameView with revealed groups in display order, board cells with
        selection flags, mistake count and button states
    """
    return GameView(
        header=HEADER_TEXT,
        revealed_rows=_build_revealed_rows(engine),
        board=_build_board(engine),
        mistakes_remaining=engine.mistakes_remaining,
        buttons=_build_buttons(engine),
        status=engine.get_state_string(),
        finished=engine.is_over(),
    )
