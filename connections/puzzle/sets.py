"""
Tile Set Module - Unordered collection of unique tiles.

Backs group membership, the current selection and guess history snapshots.
Iteration order is unspecified; use sorted() when a stable order is needed.
"""

from typing import Callable, Generic, Hashable, Iterable, Iterator, List, TypeVar

T = TypeVar("T", bound=Hashable)


class TileSet(Generic[T]):
    """
    Set of unique hashable elements.

    Equality depends only on the elements, never on insertion order.
    copy() returns an independent set: mutating one never affects the other.
    """

    __slots__ = ("_elements",)

    def __init__(self, elements: Iterable[T] = ()):
        self._elements = set(elements)

    @classmethod
    def empty(cls) -> "TileSet[T]":
        """Create an empty set."""
        return cls()

    def add(self, element: T) -> None:
        self._elements.add(element)

    def remove(self, element: T) -> None:
        """Remove element if present. Missing elements are ignored."""
        self._elements.discard(element)

    def contains(self, element: T) -> bool:
        return element in self._elements

    def size(self) -> int:
        return len(self._elements)

    def clear(self) -> None:
        self._elements = set()

    def equals(self, other: "TileSet[T]") -> bool:
        """
        Check whether both sets hold exactly the same elements.

        Args:
            other: Set to compare against

        Returns:
            True if same cardinality and every element of one is in the other
        """
        if self.size() != other.size():
            return False
        return all(other.contains(element) for element in self._elements)

    def copy(self) -> "TileSet[T]":
        return TileSet(self._elements)

    def for_each(self, func: Callable[[T], None]) -> None:
        """Apply func to every element (order unspecified)."""
        for element in list(self._elements):
            func(element)

    def sorted(self) -> List[T]:
        """Elements in ascending order, for deterministic display."""
        return sorted(self._elements)

    def __contains__(self, element: object) -> bool:
        return element in self._elements

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._elements))

    def __eq__(self, other):
        """Enable set equality comparison."""
        if not isinstance(other, TileSet):
            return False
        return self.equals(other)

    # Mutable container, so not usable as a dict key
    __hash__ = None

    def __repr__(self) -> str:
        return "{" + ", ".join(str(e) for e in self._elements) + "}"
