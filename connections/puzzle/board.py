"""
Board Layout Module - Immutable grid of the tiles still in play.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .sets import TileSet


# Process-wide generator, seeded from OS entropy so shuffles are not predictable
_RNG = np.random.default_rng()


class BoardShapeError(ValueError):
    """Raised when tiles cannot be laid out in the requested rectangle."""


def reshape(tiles: Sequence[str], num_rows: int) -> Tuple[Tuple[str, ...], ...]:
    """
    Lay a flat tile sequence out as num_rows equal rows.

    Args:
        tiles: Flat tile labels in reading order
        num_rows: Number of rows in the result

    Returns:
        Grid as a tuple of row tuples (empty when there are no rows)

    Raises:
        BoardShapeError: If num_rows is negative, or the tiles do not divide
            evenly into num_rows rows
    """
    if num_rows < 0:
        raise BoardShapeError(f"Cannot reshape into {num_rows} rows")
    if num_rows == 0:
        if len(tiles) > 0:
            raise BoardShapeError(f"Cannot lay out {len(tiles)} tiles in zero rows")
        return ()

    num_cols, remainder = divmod(len(tiles), num_rows)
    if remainder != 0:
        raise BoardShapeError(
            f"{len(tiles)} tiles do not fill {num_rows} rows evenly ({remainder} left over)"
        )

    grid = np.array(list(tiles), dtype=object).reshape(num_rows, num_cols)
    return tuple(tuple(row) for row in grid.tolist())


@dataclass(frozen=True)
class BoardLayout:
    """
    Immutable board of unsolved tiles.

    Uses tuple-of-tuples so a board is never partially mutated: shuffling,
    removing a group and clearing all return a new BoardLayout.

    Attributes:
        grid: Rows of tile labels; () is the empty board
    """
    grid: Tuple[Tuple[str, ...], ...] = ()

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[str]]) -> 'BoardLayout':
        """
        Create BoardLayout from nested lists of labels.

        Args:
            rows: 2D list of tile labels

        Returns:
            BoardLayout instance
        """
        grid = tuple(tuple(row) for row in rows)
        if grid and len({len(row) for row in grid}) != 1:
            raise BoardShapeError("All board rows must have the same length")
        return cls(grid=grid)

    @classmethod
    def from_groups(cls, groups: Iterable[Iterable[str]]) -> 'BoardLayout':
        """Create a board with one row per group, words in sorted order."""
        return cls.from_rows(sorted(group) for group in groups)

    @classmethod
    def empty(cls) -> 'BoardLayout':
        return cls(grid=())

    @property
    def rows(self) -> int:
        """Get number of rows in board."""
        return len(self.grid)

    @property
    def cols(self) -> int:
        """Get number of columns in board."""
        return len(self.grid[0]) if self.rows > 0 else 0

    @property
    def tile_count(self) -> int:
        return sum(len(row) for row in self.grid)

    @property
    def is_empty(self) -> bool:
        return self.rows == 0

    def contains(self, label: str) -> bool:
        """Check whether a tile with this label is on the board."""
        return any(label in row for row in self.grid)

    def flatten(self) -> List[str]:
        """
        Flatten the grid into reading order.

        Returns:
            List of labels ([] for the empty board)
        """
        if self.rows == 0:
            return []
        if self.rows == 1:
            return list(self.grid[0])
        return [label for row in self.grid for label in row]

    def shuffle(self, rng: Optional[np.random.Generator] = None) -> 'BoardLayout':
        """
        Randomly permute all tiles, keeping the board dimensions.

        Every permutation of the flattened tiles is equally likely.

        Args:
            rng: Optional numpy Generator (defaults to the process generator)

        Returns:
            New BoardLayout with the same tiles and shape
        """
        if self.is_empty:
            return self

        generator = rng if rng is not None else _RNG
        flattened = self.flatten()
        order = generator.permutation(len(flattened))
        shuffled = [flattened[i] for i in order]
        return BoardLayout(grid=reshape(shuffled, self.rows))

    def remove_and_reshape(self, removed: TileSet[str]) -> 'BoardLayout':
        """
        Remove a solved group's tiles and reflow the rest into one row fewer.

        Args:
            removed: Labels of the solved group

        Returns:
            New BoardLayout with rows - 1 rows, or the empty board when the
            board had a single row

        Raises:
            BoardShapeError: If the remaining tiles do not fill the smaller
                board evenly
        """
        if self.rows <= 1:
            return BoardLayout.empty()

        remaining = [label for label in self.flatten() if not removed.contains(label)]
        return BoardLayout(grid=reshape(remaining, self.rows - 1))

    def clear(self) -> 'BoardLayout':
        return BoardLayout.empty()
