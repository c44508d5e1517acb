"""
Matrix Module - Selection state machine over a grid of tokens.

The player picks cells one at a time. Only cells on the active line may be
picked, and each pick moves the active line to the orthogonal line through
the picked cell: a pick on Row(r) activates Column(x), a pick on Column(c)
activates Row(y). Applying the same toggle twice at one point restores the
original line, which is how deselect() undoes a pick.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .errors import AlreadySelectedError, NotActiveError, OutOfBoundsError
from .grid import Grid
from .interner import Token

Point = Tuple[int, int]


class Axis(Enum):
    ROW = "row"
    COLUMN = "column"


@dataclass(frozen=True)
class ActiveLine:
    """
    The single row or column whose cells may currently be selected.

    Attributes:
        axis: Whether the line is a row or a column
        index: Row number (y) for rows, column number (x) for columns
    """
    axis: Axis
    index: int

    @classmethod
    def row(cls, y: int) -> 'ActiveLine':
        return cls(Axis.ROW, y)

    @classmethod
    def column(cls, x: int) -> 'ActiveLine':
        return cls(Axis.COLUMN, x)

    def contains(self, x: int, y: int) -> bool:
        """Check whether (x, y) lies on this line."""
        if self.axis is Axis.ROW:
            return y == self.index
        return x == self.index

    def toggle(self, x: int, y: int) -> 'ActiveLine':
        """
        Get the line that becomes active after picking (x, y).

        Raises:
            NotActiveError: If (x, y) is not on this line
        """
        if not self.contains(x, y):
            raise NotActiveError(x, y, self)
        if self.axis is Axis.ROW:
            return ActiveLine.column(x)
        return ActiveLine.row(y)

    def points(self, width: int, height: int) -> List[Point]:
        """In-bounds points of this line in increasing order."""
        if self.axis is Axis.ROW:
            if not 0 <= self.index < height:
                return []
            return [(x, self.index) for x in range(width)]
        if not 0 <= self.index < width:
            return []
        return [(self.index, y) for y in range(height)]

    def __str__(self) -> str:
        return f"{self.axis.value.capitalize()}({self.index})"


class Matrix:
    """
    Grid of cell tokens plus the selections made on it.

    The selection stack is the buffer: selected_values() reads the tokens at
    the stacked points in the order they were picked.
    """

    def __init__(self, values: Grid):
        self._values = values
        self._chosen = Grid(values.width, values.height, fill=False, dtype=bool)
        self._selections: List[Point] = []
        self._active = ActiveLine.row(0)

    @classmethod
    def from_tokens(cls, width: int, height: int, tokens: Sequence[Token]) -> 'Matrix':
        """
        Create a Matrix from a row-major list of tokens.

        Raises:
            ValueError: If the token count does not match width x height
        """
        if len(tokens) != width * height:
            raise ValueError(
                f"expected {width * height} tokens for a {width}x{height} matrix, "
                f"got {len(tokens)}"
            )
        rows = [tokens[y * width:(y + 1) * width] for y in range(height)]
        if height == 0:
            return cls(Grid(width, 0))
        return cls(Grid.from_rows(rows))

    @property
    def width(self) -> int:
        return self._values.width

    @property
    def height(self) -> int:
        return self._values.height

    @property
    def active(self) -> ActiveLine:
        """Currently selectable line."""
        return self._active

    @property
    def selections(self) -> Tuple[Point, ...]:
        """Selected points in selection order."""
        return tuple(self._selections)

    def _check_bounds(self, x: int, y: int) -> None:
        if not self._values.contains(x, y):
            raise OutOfBoundsError(x, y, self.width, self.height)

    def value_at(self, x: int, y: int) -> Token:
        """
        Get the token at (x, y).

        Raises:
            OutOfBoundsError: If (x, y) is outside the matrix
        """
        self._check_bounds(x, y)
        return self._values[x, y]

    def is_chosen(self, x: int, y: int) -> bool:
        """Check whether (x, y) is currently selected. False when out of bounds."""
        return bool(self._chosen.get(x, y, False))

    def select(self, x: int, y: int) -> Token:
        """
        Select the point at (x, y) if it is legal to do so.

        Args:
            x: Column
            y: Row

        Returns:
            Token at that point

        Raises:
            OutOfBoundsError: If (x, y) is outside the matrix
            AlreadySelectedError: If (x, y) was already selected
            NotActiveError: If (x, y) is not on the active line
        """
        self._check_bounds(x, y)
        if self._chosen[x, y]:
            raise AlreadySelectedError(x, y)
        # nothing may change before toggle() has accepted the point
        self._active = self._active.toggle(x, y)
        self._chosen[x, y] = True
        self._selections.append((x, y))
        return self._values[x, y]

    def deselect(self) -> Optional[Point]:
        """
        Deselect the most recently selected point.

        Does nothing if nothing is selected.

        Returns:
            The point that was deselected, or None
        """
        if not self._selections:
            return None
        x, y = self._selections.pop()
        self._chosen[x, y] = False
        self._active = self._active.toggle(x, y)
        return x, y

    def reset(self) -> None:
        """Deselect everything, returning to the initial state."""
        while self._selections:
            self.deselect()

    def selected_values(self) -> Tuple[Token, ...]:
        """Tokens at the selected points, in selection order."""
        return tuple(self._values[x, y] for x, y in self._selections)

    def selected_len(self) -> int:
        """Number of selected points."""
        return len(self._selections)

    def legal_selections(self) -> List[Point]:
        """
        Points that select() would accept right now.

        These are the unchosen points on the active line, in increasing order
        along the line. The list is a snapshot, so the matrix may be changed
        while iterating it.
        """
        return [
            (x, y)
            for x, y in self._active.points(self.width, self.height)
            if not self._chosen[x, y]
        ]

    def __len__(self) -> int:
        return len(self._selections)

    def __repr__(self) -> str:
        return (
            f"Matrix({self.width}x{self.height}, active={self._active}, "
            f"selected={self._selections})"
        )
