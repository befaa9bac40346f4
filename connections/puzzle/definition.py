"""
Puzzle Definition Module - Static seed data for a puzzle.

A definition is loaded once at startup and never changes afterwards.
validate() rejects definitions the engine cannot play correctly.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Tuple, Union

from .group import Category, WordGroup


class PuzzleDefinitionError(ValueError):
    """Raised for a malformed puzzle definition."""


@dataclass(frozen=True)
class GroupDefinition:
    """
    Definition of one group.

    Attributes:
        members: Member words, each unique within the puzzle
        clue: Clue revealed with the group
        category: Colour category
    """
    members: Tuple[str, ...]
    clue: str
    category: Category

    @classmethod
    def create(cls, members: Iterable[str], clue: str,
               category: Union[Category, str, int]) -> 'GroupDefinition':
        """
        Create a GroupDefinition from loose values.

        Raises:
            PuzzleDefinitionError: If members is a single string or holds
                anything other than strings
            ValueError: If category is unknown
        """
        if isinstance(members, str):
            raise PuzzleDefinitionError(f"Members must be a list of words, got the string {members!r}")
        members = tuple(members)
        for word in members:
            if not isinstance(word, str):
                raise PuzzleDefinitionError(f"Member {word!r} is not a string")
        return cls(members=members, clue=clue, category=Category.parse(category))

    def to_group(self) -> WordGroup:
        """Build a fresh, unrevealed WordGroup."""
        return WordGroup.create(self.members, self.clue, self.category)


@dataclass(frozen=True)
class PuzzleDefinition:
    """
    Ordered group definitions for one puzzle.

    Attributes:
        groups: Group definitions in their original order
    """
    groups: Tuple[GroupDefinition, ...]

    @classmethod
    def from_dicts(cls, data: Iterable[Dict[str, Any]]) -> 'PuzzleDefinition':
        """
        Create a PuzzleDefinition from plain dicts.

        Each dict needs "members", "clue" and "category" keys.

        Raises:
            PuzzleDefinitionError: If a key is missing, members is not a list of
                words, or a category is unknown
        """
        groups = []
        for index, item in enumerate(data):
            try:
                groups.append(GroupDefinition.create(item["members"], item["clue"], item["category"]))
            except KeyError as e:
                raise PuzzleDefinitionError(f"Group {index} is missing key {e}") from e
            except ValueError as e:
                raise PuzzleDefinitionError(f"Group {index}: {e}") from e
        return cls(groups=tuple(groups))

    @property
    def group_size(self) -> int:
        """Tiles per group (all groups share one size once validated)."""
        return len(self.groups[0].members) if self.groups else 0

    def validate(self) -> 'PuzzleDefinition':
        """
        Check the definition can be played.

        Returns:
            self, for chaining

        Raises:
            PuzzleDefinitionError: If there are no groups, a group is empty,
                is not a list of words or has repeated or blank words, groups
                differ in size, or a word appears in more than one group
        """
        if not self.groups:
            raise PuzzleDefinitionError("Puzzle has no groups")

        size = self.group_size
        if size < 1:
            raise PuzzleDefinitionError("Groups must have at least one member")

        seen: Dict[str, int] = {}
        for index, group in enumerate(self.groups):
            if isinstance(group.members, str) or not all(isinstance(w, str) for w in group.members):
                raise PuzzleDefinitionError(f"Group {index} ({group.clue!r}) members must be a list of words")
            if len(group.members) != size:
                raise PuzzleDefinitionError(
                    f"Group {index} ({group.clue!r}) has {len(group.members)} members, expected {size}"
                )
            if len(set(group.members)) != len(group.members):
                raise PuzzleDefinitionError(f"Group {index} ({group.clue!r}) repeats a word")
            for word in group.members:
                if not word or not word.strip():
                    raise PuzzleDefinitionError(f"Group {index} ({group.clue!r}) contains a blank word")
                if word in seen:
                    raise PuzzleDefinitionError(
                        f"Word {word!r} appears in groups {seen[word]} and {index}"
                    )
                seen[word] = index

        return self

    def build_groups(self) -> List[WordGroup]:
        return [group.to_group() for group in self.groups]


DEFAULT_PUZZLE = PuzzleDefinition.from_dicts([
    {
        "members": ["Amazon", "Nile", "Yangtze", "Danube"],
        "clue": "Rivers of the world.",
        "category": "green",
    },
    {
        "members": ["Plum", "Apple", "Orange", "Kiwi"],
        "clue": "Fruits.",
        "category": "blue",
    },
    {
        "members": ["Basket", "Hand", "Base", "Foot"],
        "clue": "___ball",
        "category": "yellow",
    },
    {
        "members": ["MIT", "Apache", "Mozilla", "BSD"],
        "clue": "OSI-approved Open Source licenses",
        "category": "purple",
    },
])
