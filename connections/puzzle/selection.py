"""
Selection Module - The player's in-progress guess and the guesses already made.
"""

from typing import Iterator, List

from .sets import TileSet


class SelectionTracker:
    """
    Currently selected tiles, capped at the group size.

    Attributes:
        capacity: Maximum number of tiles that can be selected at once
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"Selection capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._tiles: TileSet[str] = TileSet.empty()

    def toggle(self, label: str) -> bool:
        """
        Deselect label if selected, otherwise select it if there is room.

        Args:
            label: Tile label

        Returns:
            True if the selection changed
        """
        if self._tiles.contains(label):
            self._tiles.remove(label)
            return True
        if self._tiles.size() < self.capacity:
            self._tiles.add(label)
            return True
        return False

    def clear(self) -> None:
        self._tiles.clear()

    def size(self) -> int:
        return self._tiles.size()

    def is_empty(self) -> bool:
        return self._tiles.size() == 0

    def is_full(self) -> bool:
        return self._tiles.size() == self.capacity

    def contains(self, label: str) -> bool:
        return self._tiles.contains(label)

    def snapshot(self) -> TileSet[str]:
        """Independent copy of the selected tiles."""
        return self._tiles.copy()

    @property
    def tiles(self) -> TileSet[str]:
        """Live view of the selection. Callers must not mutate it."""
        return self._tiles

    def __len__(self) -> int:
        return self._tiles.size()


class GuessHistory:
    """
    Append-only record of every submitted selection, in submission order.

    Only used for exact-set lookups to reject repeated guesses.
    """

    def __init__(self):
        self._entries: List[TileSet[str]] = []

    def record(self, selection: TileSet[str]) -> None:
        """Append a copy of selection."""
        self._entries.append(selection.copy())

    def contains(self, selection: TileSet[str]) -> bool:
        """Check whether an identical selection was submitted before."""
        return any(entry.equals(selection) for entry in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TileSet[str]]:
        # Hand out copies so recorded guesses stay untouched
        return iter([entry.copy() for entry in self._entries])
