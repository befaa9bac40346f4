"""
Game Engine Module - Puzzle state machine driven by player intents.

This module provides the PuzzleEngine which owns the single PuzzleState of a
session and applies intents to it one at a time.

Rules:
  - An intent whose precondition fails is ignored (no state change, no error)
  - Every submission is recorded, so an identical selection cannot be resubmitted
  - A wrong guess costs a mistake and keeps the selection on screen
  - Revealed groups always form a prefix of the group list, in reveal order

For the data model, see the connections.puzzle package.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, List, Optional, Tuple

import numpy as np

from connections.puzzle import (
    BoardLayout, GuessHistory, PuzzleDefinition, SelectionTracker, TileSet, WordGroup,
    Intent, ToggleTile, Shuffle, DeselectAll, Submit, RevealRemaining, Quit,
    DEFAULT_PUZZLE,
)

logger = logging.getLogger(__name__)


__all__ = [
    "GamePhase",
    "InvariantError",
    "PuzzleState",
    "PuzzleEngine",
]


class GamePhase(Enum):
    """
    Coarse game phases, derived from PuzzleState.

    States:
        PLAYING: Groups remain and mistakes remain
        OUT_OF_MISTAKES: No mistakes left, unsolved groups not yet revealed
        SOLVED: Every group found by the player
        REVEALED: Game over, remaining groups revealed by the computer
    """
    PLAYING = auto()
    OUT_OF_MISTAKES = auto()
    SOLVED = auto()
    REVEALED = auto()


class InvariantError(RuntimeError):
    """Raised when PuzzleState breaks one of its structural invariants."""


@dataclass
class PuzzleState:
    """
    Everything that changes during a game.

    Attributes:
        groups: Revealed groups first (by reveal time), then unrevealed (by category)
        board: Unsolved tiles
        selection: Current selection
        history: Every submitted selection
        mistakes_remaining: Wrong guesses still allowed
    """
    groups: List[WordGroup]
    board: BoardLayout
    selection: SelectionTracker
    history: GuessHistory
    mistakes_remaining: int


def _reveal_order_key(group: WordGroup):
    """Sort key: revealed groups by reveal time, then unrevealed groups by category."""
    if group.is_unrevealed():
        return (1, int(group.category))
    return (0, group.revealed_at)


class PuzzleEngine:
    """
    Puzzle state machine.

    Accepts the six player intents, validates submissions against the hidden
    groups and keeps the group ordering invariant after every reveal. Intents
    return nothing; callers read state through the query methods.

    State Flow:
        PLAYING --(all groups found)--> SOLVED
           |
        (mistakes exhausted)
           |
        OUT_OF_MISTAKES --(reveal remaining)--> REVEALED
    """

    DEFAULT_MISTAKES = 4

    def __init__(self, definition: PuzzleDefinition = DEFAULT_PUZZLE,
                 mistakes_allowed: int = DEFAULT_MISTAKES,
                 clock: Callable[[], float] = time.time,
                 rng: Optional[np.random.Generator] = None,
                 shuffle_on_start: bool = True):
        """
        Initialize puzzle engine.

        Args:
            definition: Puzzle seed data (validated here)
            mistakes_allowed: Wrong guesses allowed before the game is lost
            clock: Time source for reveal timestamps
            rng: Optional numpy Generator used for shuffling
            shuffle_on_start: Shuffle the initial board (disable for fixed layouts in tests)

        Raises:
            PuzzleDefinitionError: If the definition is malformed
            ValueError: If mistakes_allowed is negative
        """
        definition.validate()
        if mistakes_allowed < 0:
            raise ValueError(f"mistakes_allowed must not be negative, got {mistakes_allowed}")

        self._definition = definition
        self._clock = clock
        self._rng = rng
        self._last_reveal_at: Optional[float] = None
        self._quit_requested = False

        groups = definition.build_groups()
        board = BoardLayout.from_groups(group.sorted_members() for group in groups)

        self._state = PuzzleState(
            groups=sorted(groups, key=_reveal_order_key),
            board=board,
            selection=SelectionTracker(definition.group_size),
            history=GuessHistory(),
            mistakes_remaining=mistakes_allowed,
        )

        if shuffle_on_start:
            self._state.board = board.shuffle(self._rng)

        self.check_invariants()
        logger.info(
            f"Puzzle ready: {len(groups)} groups of {definition.group_size}, "
            f"{mistakes_allowed} mistakes allowed"
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def state(self) -> PuzzleState:
        """Live puzzle state. Read only: mutate through intents."""
        return self._state

    @property
    def board(self) -> BoardLayout:
        return self._state.board

    @property
    def selection(self) -> TileSet[str]:
        """Snapshot of the selected tiles."""
        return self._state.selection.snapshot()

    @property
    def groups(self) -> Tuple[WordGroup, ...]:
        """Groups in display order (revealed prefix, unrevealed suffix)."""
        return tuple(self._state.groups)

    @property
    def mistakes_remaining(self) -> int:
        return self._state.mistakes_remaining

    @property
    def group_size(self) -> int:
        return self._state.selection.capacity

    @property
    def history(self) -> GuessHistory:
        return self._state.history

    @property
    def quit_requested(self) -> bool:
        """True once a Quit intent has been received."""
        return self._quit_requested

    def revealed_groups(self) -> List[WordGroup]:
        """Revealed groups, in reveal order."""
        revealed = []
        for group in self._state.groups:
            if group.is_unrevealed():
                # revealed groups always come first
                break
            revealed.append(group)
        return revealed

    def unrevealed_groups(self) -> List[WordGroup]:
        return [group for group in self._state.groups if group.is_unrevealed()]

    def is_selected(self, label: str) -> bool:
        return self._state.selection.contains(label)

    def selection_already_guessed(self) -> bool:
        """Check whether the full current selection was submitted before."""
        selection = self._state.selection
        return selection.is_full() and self._state.history.contains(selection.tiles)

    def is_solved(self) -> bool:
        """True when the player found every group."""
        return all(group.revelation.is_revealed_by_player() for group in self._state.groups)

    def is_over(self) -> bool:
        """True when no group is left unrevealed."""
        return not self._state.groups[-1].is_unrevealed()

    @property
    def phase(self) -> GamePhase:
        if self.is_over():
            return GamePhase.SOLVED if self.is_solved() else GamePhase.REVEALED
        if self._state.mistakes_remaining <= 0:
            return GamePhase.OUT_OF_MISTAKES
        return GamePhase.PLAYING

    def can_toggle(self, label: str) -> bool:
        return self._state.mistakes_remaining > 0 and self._state.board.contains(label)

    def can_shuffle(self) -> bool:
        return self._state.mistakes_remaining > 0 and not self._state.board.is_empty

    def can_deselect_all(self) -> bool:
        return not self._state.selection.is_empty()

    def can_submit(self) -> bool:
        """
        Check whether the current selection may be submitted.

        Requires all of:
          - mistakes remaining
          - tiles left on the board
          - a full selection
          - a selection that was NOT submitted before
        """
        state = self._state
        return (state.mistakes_remaining > 0
                and not state.board.is_empty
                and state.selection.size() == self.group_size
                and not state.history.contains(state.selection.tiles))

    def can_reveal_remaining(self) -> bool:
        return self._state.mistakes_remaining <= 0 and self._state.groups[-1].is_unrevealed()

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    def dispatch(self, intent: Intent) -> None:
        """
        Apply one intent to the puzzle state.

        Args:
            intent: Player intent

        Raises:
            TypeError: If intent is not one of the known intent types
        """
        if isinstance(intent, ToggleTile):
            self.toggle_tile(intent.label)
        elif isinstance(intent, Shuffle):
            self.shuffle()
        elif isinstance(intent, DeselectAll):
            self.deselect_all()
        elif isinstance(intent, Submit):
            self.submit()
        elif isinstance(intent, RevealRemaining):
            self.reveal_remaining()
        elif isinstance(intent, Quit):
            self.quit()
        else:
            raise TypeError(f"Unknown intent: {intent!r}")

    def toggle_tile(self, label: str) -> None:
        if not self.can_toggle(label):
            logger.debug(f"Ignoring toggle of {label!r}: not on board or no mistakes left")
            return
        self._state.selection.toggle(label)

    def shuffle(self) -> None:
        if self._state.mistakes_remaining <= 0:
            logger.debug("Ignoring shuffle: no mistakes left")
            return
        self._state.board = self._state.board.shuffle(self._rng)

    def deselect_all(self) -> None:
        self._state.selection.clear()

    def submit(self) -> None:
        if not self.can_submit():
            logger.debug("Ignoring submit: selection not submittable")
            return
        self._do_submit()
        self.check_invariants()

    def reveal_remaining(self) -> None:
        """
        Reveal every unsolved group on the player's behalf.

        Only allowed once mistakes are exhausted. All groups revealed here share
        one timestamp, which keeps the revealed prefix ordered by reveal time.
        """
        if not self.can_reveal_remaining():
            logger.debug("Ignoring reveal: mistakes remain or nothing left to reveal")
            return

        revealed_at = self._next_timestamp()
        groups = self._state.groups
        count = 0
        for index in range(len(groups) - 1, -1, -1):
            if not groups[index].is_unrevealed():
                # unrevealed groups always sit at the tail of the list
                break
            groups[index].revelation.reveal_by_computer(revealed_at)
            count += 1

        self._state.board = self._state.board.clear()
        logger.info(f"State[{self.phase.name}]: computer revealed {count} groups")
        self.check_invariants()

    def quit(self) -> None:
        """Flag the end of the session. Puzzle state is left untouched."""
        self._quit_requested = True
        logger.info("Quit requested")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _do_submit(self) -> None:
        state = self._state
        state.history.record(state.selection.tiles)

        for group in state.groups:
            if group.is_unrevealed() and group.matches(state.selection.tiles):
                self._reveal_by_player(group)
                return

        state.mistakes_remaining -= 1
        # Selection is kept so the player can see which tiles were wrong
        logger.info(
            f"State[{self.phase.name}]: wrong guess {state.selection.tiles.sorted()}, "
            f"{state.mistakes_remaining} mistakes remaining"
        )

    def _reveal_by_player(self, group: WordGroup) -> None:
        state = self._state
        group.revelation.reveal_by_player(self._next_timestamp())
        self._sort_groups()

        if state.board.rows <= 1:
            state.board = state.board.clear()
        else:
            state.board = state.board.remove_and_reshape(state.selection.tiles)

        state.selection.clear()
        logger.info(
            f"State[{self.phase.name}]: player found {group.category.name.lower()} group "
            f"{group.clue!r}, {len(self.unrevealed_groups())} groups left"
        )

    def _sort_groups(self) -> None:
        """Stable re-sort: revealed groups by reveal time, then unrevealed groups by category."""
        self._state.groups.sort(key=_reveal_order_key)

    def _next_timestamp(self) -> float:
        """Current time, never earlier than the previous reveal."""
        now = self._clock()
        if self._last_reveal_at is not None and now < self._last_reveal_at:
            now = self._last_reveal_at
        self._last_reveal_at = now
        return now

    def check_invariants(self) -> None:
        """
        Verify the structural invariants of the puzzle state.

        Raises:
            InvariantError: If revealed groups are not a time-ordered prefix,
                unrevealed groups are not category-ordered, or the board does
                not hold exactly the unrevealed groups' words
        """
        groups = self._state.groups

        seen_unrevealed = False
        previous_key = None
        for group in groups:
            if group.is_unrevealed():
                seen_unrevealed = True
            elif seen_unrevealed:
                raise InvariantError(f"Revealed group {group.clue!r} follows an unrevealed group")

            key = _reveal_order_key(group)
            if previous_key is not None and key < previous_key:
                raise InvariantError(f"Group {group.clue!r} is out of order")
            previous_key = key

        expected = sorted(word for group in groups if group.is_unrevealed()
                          for word in group.sorted_members())
        on_board = sorted(self._state.board.flatten())
        if on_board != expected:
            raise InvariantError(
                f"Board holds {len(on_board)} tiles, unrevealed groups hold {len(expected)}"
            )

    def get_state_string(self) -> str:
        """Get human-readable state string for UI display."""
        state_strings = {
            GamePhase.PLAYING: "Playing",
            GamePhase.OUT_OF_MISTAKES: "Out of mistakes",
            GamePhase.SOLVED: "Solved",
            GamePhase.REVEALED: "Game over",
        }
        base = state_strings.get(self.phase, "Unknown")

        found = sum(1 for g in self._state.groups if g.revelation.is_revealed_by_player())
        total = len(self._state.groups)
        return f"{base} ({found}/{total} groups found)"
