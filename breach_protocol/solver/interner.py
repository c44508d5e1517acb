"""
Interner Module - Sorted, deduplicated value store issuing comparable tokens.

Every distinct cell value and sequence item is stored once. Tokens are cheap
handles into the store: comparing two tokens compares indices, which is the
same as comparing the values because the store is kept sorted.

Inserting into the store shifts the indices of larger values, so each
interner tracks a generation that changes with every such mutation. Tokens
remember the generation they were minted under and refuse to be used once it
has moved on.
"""

import bisect
from typing import Any, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

from .errors import IncomparableTokensError, StaleTokenError, TokenNotFoundError

T = TypeVar("T")


class Token(Generic[T]):
    """
    Handle for a value owned by an Interner.

    Tokens compare equal or ordered only against tokens of the same
    interner instance; anything else raises IncomparableTokensError.

    Attributes:
        interner: Owning interner
        index: Position of the value in the interner's sorted store
    """

    __slots__ = ("interner", "index", "_generation")

    def __init__(self, interner: "Interner[T]", index: int, generation: int):
        self.interner = interner
        self.index = index
        self._generation = generation

    def _check(self) -> None:
        if self._generation != self.interner._generation:
            raise StaleTokenError(
                f"token #{self.index} was issued before its interner changed"
            )

    def _key(self, other: "Token[T]") -> Tuple[int, int]:
        if self.interner is not other.interner:
            raise IncomparableTokensError(
                "tokens from different interners have no ordering"
            )
        self._check()
        other._check()
        return self.index, other.index

    @property
    def value(self) -> T:
        """The interned value."""
        self._check()
        return self.interner._values[self.index]

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        mine, theirs = self._key(other)
        return mine == theirs

    def __ne__(self, other: Any) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        mine, theirs = self._key(other)
        return mine != theirs

    def __lt__(self, other: "Token[T]") -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        mine, theirs = self._key(other)
        return mine < theirs

    def __le__(self, other: "Token[T]") -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        mine, theirs = self._key(other)
        return mine <= theirs

    def __gt__(self, other: "Token[T]") -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        mine, theirs = self._key(other)
        return mine > theirs

    def __ge__(self, other: "Token[T]") -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        mine, theirs = self._key(other)
        return mine >= theirs

    def __hash__(self) -> int:
        return hash((id(self.interner), self.index))

    def __str__(self) -> str:
        return str(self.value)

    def __repr__(self) -> str:
        return f"Token(idx={self.index})"


class Interner(Generic[T]):
    """
    Deduplicated store of orderable values, always sorted ascending.

    Populate it once with insert() or extend(), then treat it as read-only
    while any Matrix, Sequence or Solution built from its tokens is in use.
    """

    def __init__(self, values: Optional[Iterable[T]] = None):
        self._values: List[T] = []
        self._generation = 0
        if values is not None:
            self.extend(values)

    def _token(self, index: int) -> Token[T]:
        return Token(self, index, self._generation)

    def _find(self, value: T) -> Tuple[int, bool]:
        idx = bisect.bisect_left(self._values, value)
        found = idx < len(self._values) and self._values[idx] == value
        return idx, found

    def get(self, value: T) -> Optional[Token[T]]:
        """
        Get the token for a value if it has been interned.

        Args:
            value: Value to look up

        Returns:
            Token, or None if the value is absent
        """
        idx, found = self._find(value)
        return self._token(idx) if found else None

    def token_for(self, value: T) -> Token[T]:
        """
        Get the token for a value that must already be interned.

        Raises:
            TokenNotFoundError: If the value is absent
        """
        token = self.get(value)
        if token is None:
            raise TokenNotFoundError(value)
        return token

    def insert(self, value: T) -> Token[T]:
        """
        Insert a value, returning its token.

        An equal value already in the store is kept and its token returned.
        For many values, extend() is cheaper.

        Args:
            value: Value to intern

        Returns:
            Token for the value
        """
        idx, found = self._find(value)
        if not found:
            self._values.insert(idx, value)
            self._generation += 1
        return self._token(idx)

    def extend(self, values: Iterable[T]) -> None:
        """
        Merge a batch of values into the store.

        The batch is sorted, then merged linearly with the existing store.
        When an incoming value compares equal to an existing one, the
        existing entry is kept.

        Args:
            values: Values to intern
        """
        batch = sorted(values)
        if not batch:
            return

        existing = self._values
        merged: List[T] = []
        i = j = 0
        while i < len(existing) and j < len(batch):
            left, right = existing[i], batch[j]
            if left < right:
                item = left
                i += 1
            elif right < left:
                item = right
                j += 1
            else:
                item = left
                i += 1
                j += 1

            if merged and merged[-1] == item:
                continue
            merged.append(item)

        # at most one side still has items
        for item in existing[i:] + batch[j:]:
            if merged and merged[-1] == item:
                continue
            merged.append(item)

        if len(merged) != len(existing):
            self._generation += 1
        self._values = merged

    @property
    def values(self) -> Tuple[T, ...]:
        """Snapshot of the stored values in sorted order."""
        return tuple(self._values)

    @property
    def generation(self) -> int:
        """Counter bumped whenever stored indices may have shifted."""
        return self._generation

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[T]:
        return iter(tuple(self._values))

    def __contains__(self, value: T) -> bool:
        return self._find(value)[1]

    def __repr__(self) -> str:
        return f"Interner({self._values!r})"
