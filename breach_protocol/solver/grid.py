"""
Grid Module - Fixed-size 2D storage for per-cell matrix data.

Coordinates are (x, y) with (0, 0) at the top left. Storage is a row-major
numpy array of shape (height, width).
"""

from typing import Any, Iterator, Optional, Sequence, Tuple

import numpy as np


class Grid:
    """
    Fixed width x height array of cells.

    get() and set() are the bounds-checked accessors. Item access
    (grid[x, y]) is meant for coordinates that were already validated and
    raises IndexError otherwise; numpy's negative-index wrap-around is never
    applied.

    Attributes:
        width: Number of columns
        height: Number of rows
    """

    def __init__(self, width: int, height: int, fill: Any = None, dtype: Any = object):
        if width < 0 or height < 0:
            raise ValueError(f"grid dimensions must be non-negative, got {width}x{height}")
        self.width = width
        self.height = height
        self._cells = np.full((height, width), fill, dtype=dtype)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Any]], dtype: Any = object) -> 'Grid':
        """
        Create a Grid from a row-major list of rows.

        Args:
            rows: Rows of cell values, all the same length

        Returns:
            Grid holding the values

        Raises:
            ValueError: If the rows have different lengths
        """
        height = len(rows)
        width = len(rows[0]) if height > 0 else 0
        grid = cls(width, height, dtype=dtype)
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(
                    f"row {y} has {len(row)} cells, expected {width}"
                )
            for x, value in enumerate(row):
                grid._cells[y, x] = value
        return grid

    @property
    def shape(self) -> Tuple[int, int]:
        """(width, height) of the grid."""
        return self.width, self.height

    def index(self, x: int, y: int) -> Optional[int]:
        """
        Get the row-major index of a cell.

        Returns:
            Flat index, or None if (x, y) is out of bounds
        """
        if 0 <= x < self.width and 0 <= y < self.height:
            return y * self.width + x
        return None

    def contains(self, x: int, y: int) -> bool:
        """Check whether (x, y) lies inside the grid."""
        return self.index(x, y) is not None

    def get(self, x: int, y: int, default: Any = None) -> Any:
        """
        Get the value at (x, y).

        Returns:
            Cell value, or default if out of bounds
        """
        if not self.contains(x, y):
            return default
        return self._cells[y, x]

    def set(self, x: int, y: int, value: Any) -> bool:
        """
        Store a value at (x, y).

        Returns:
            True if stored, False if (x, y) is out of bounds
        """
        if not self.contains(x, y):
            return False
        self._cells[y, x] = value
        return True

    def count(self, value: Any) -> int:
        """Count cells equal to value."""
        return int(np.count_nonzero(self._cells == value))

    def __getitem__(self, point: Tuple[int, int]) -> Any:
        x, y = point
        if not self.contains(x, y):
            raise IndexError(f"grid access at ({x}, {y}) outside {self.width}x{self.height}")
        return self._cells[y, x]

    def __setitem__(self, point: Tuple[int, int], value: Any) -> None:
        x, y = point
        if not self.contains(x, y):
            raise IndexError(f"grid access at ({x}, {y}) outside {self.width}x{self.height}")
        self._cells[y, x] = value

    def __iter__(self) -> Iterator[Tuple[int, int, Any]]:
        """Iterate (x, y, value) in row-major order."""
        for y in range(self.height):
            for x in range(self.width):
                yield x, y, self._cells[y, x]

    def __len__(self) -> int:
        return self.width * self.height

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height})"
