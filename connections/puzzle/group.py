"""
Word Group Module - One hidden group of the puzzle and its revelation status.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import FrozenSet, Iterable, List, Optional, Union

from .sets import TileSet


class RevelationError(ValueError):
    """Raised when a group that is already revealed is revealed again."""


class Category(IntEnum):
    """
    Group colour categories.

    Integer order is the tie-break used for unrevealed groups:
    YELLOW < GREEN < BLUE < PURPLE.
    """
    YELLOW = 1
    GREEN = 2
    BLUE = 3
    PURPLE = 4

    @classmethod
    def parse(cls, value) -> "Category":
        """
        Convert a name ("yellow"), a Category or its integer value into a Category.

        Raises:
            ValueError: If value does not name a category
        """
        if isinstance(value, Category):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                available = ", ".join(c.name.lower() for c in cls)
                raise ValueError(f"Unknown category: {value!r}. Available: {available}") from None
        return cls(value)


class Revealer(Enum):
    """Who revealed a group, if anyone."""
    NONE = "none"
    PLAYER = "player"
    COMPUTER = "computer"


@dataclass
class RevelationStatus:
    """
    Revelation state of a group.

    revealed_at is set exactly when revealer is not NONE. Revelation is
    terminal: once revealed, neither field changes again.

    Attributes:
        revealer: Who revealed the group
        revealed_at: Reveal timestamp in seconds since the epoch
    """
    revealer: Revealer = Revealer.NONE
    revealed_at: Optional[float] = None

    def is_unrevealed(self) -> bool:
        return self.revealer is Revealer.NONE

    def is_revealed_by_player(self) -> bool:
        return self.revealer is Revealer.PLAYER

    def is_revealed_by_computer(self) -> bool:
        return self.revealer is Revealer.COMPUTER

    def reveal_by_player(self, at: float) -> None:
        self._reveal(Revealer.PLAYER, at)

    def reveal_by_computer(self, at: float) -> None:
        self._reveal(Revealer.COMPUTER, at)

    def _reveal(self, revealer: Revealer, at: float) -> None:
        if not self.is_unrevealed():
            raise RevelationError(f"Group already revealed by {self.revealer.value}")
        self.revealer = revealer
        self.revealed_at = at


@dataclass
class WordGroup:
    """
    One puzzle group.

    words is a frozenset fixed at construction; the members property hands
    out TileSet copies, so callers cannot change group membership.

    Attributes:
        words: Member words
        clue: Text shown once the group is revealed
        category: Colour category, used for ordering and display only
        revelation: Current revelation status
    """
    words: FrozenSet[str]
    clue: str
    category: Category
    revelation: RevelationStatus = field(default_factory=RevelationStatus)

    @classmethod
    def create(cls, members: Iterable[str], clue: str,
               category: Union[Category, str, int]) -> "WordGroup":
        """
        Create a WordGroup from plain member words.

        Args:
            members: Member words
            clue: Group clue
            category: Category, category name or integer value

        Returns:
            Unrevealed WordGroup
        """
        return cls(words=frozenset(members), clue=clue, category=Category.parse(category))

    @property
    def members(self) -> TileSet[str]:
        """Copy of the member set."""
        return TileSet(self.words)

    @property
    def size(self) -> int:
        return len(self.words)

    def sorted_members(self) -> List[str]:
        return sorted(self.words)

    def has_member(self, word: str) -> bool:
        return word in self.words

    def matches(self, selection: TileSet[str]) -> bool:
        """Check whether a selection is exactly this group's membership."""
        return selection.size() == len(self.words) and all(word in self.words for word in selection)

    # Convenience passthroughs to the revelation status
    def is_unrevealed(self) -> bool:
        return self.revelation.is_unrevealed()

    @property
    def revealer(self) -> Revealer:
        return self.revelation.revealer

    @property
    def revealed_at(self) -> Optional[float]:
        return self.revelation.revealed_at
