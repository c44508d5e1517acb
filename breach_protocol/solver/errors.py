"""
Errors Module - Exception taxonomy for the breach protocol solver.

Selection failures carry the offending coordinate so callers can report it
without re-deriving state from the matrix.
"""

from typing import Any


class BreachError(Exception):
    """Base class for all solver errors."""


class TokenNotFoundError(BreachError, KeyError):
    """A raw value has no token in the interner."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(value)

    def __str__(self) -> str:
        return f"item not found in interner: {self.value!r}"


class IncomparableTokensError(BreachError, TypeError):
    """Two tokens from different interners were compared."""


class StaleTokenError(BreachError):
    """A token outlived a change to its interner's store."""


class SelectionError(BreachError):
    """
    Base class for rejected matrix selections.

    Attributes:
        x: Column of the rejected point
        y: Row of the rejected point
    """

    def __init__(self, message: str, x: int, y: int):
        super().__init__(message)
        self.x = x
        self.y = y


class OutOfBoundsError(SelectionError):
    """The point lies outside the matrix."""

    def __init__(self, x: int, y: int, width: int, height: int):
        super().__init__(
            f"the point ({x}, {y}) is out of bounds. size: ({width}, {height})",
            x, y
        )
        self.width = width
        self.height = height


class NotActiveError(SelectionError):
    """The point is in bounds but not on the active line."""

    def __init__(self, x: int, y: int, active: Any):
        super().__init__(
            f"the point ({x}, {y}) is not a member of the active line: {active}",
            x, y
        )
        self.active = active


class AlreadySelectedError(SelectionError):
    """The point has already been chosen."""

    def __init__(self, x: int, y: int):
        super().__init__(f"the point ({x}, {y}) has already been selected", x, y)


class SearchContractError(BreachError, RuntimeError):
    """The move enumerator offered a point the matrix refused."""


class PuzzleFormatError(BreachError, ValueError):
    """A puzzle definition is structurally invalid."""
