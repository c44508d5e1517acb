"""
Sequence Module - Target patterns and the contiguous-run matcher.
"""

from typing import Any, Iterable, Iterator, List, Optional, Tuple

from .interner import Interner, Token


def make_tokens(interner: Interner, items: Iterable[Any]) -> List[Token]:
    """
    Resolve raw values to tokens of an interner.

    Args:
        interner: Interner already holding every item
        items: Raw values

    Returns:
        Tokens in the same order as items

    Raises:
        TokenNotFoundError: For the first item missing from the interner
    """
    return [interner.token_for(item) for item in items]


class Sequence:
    """
    An ordered target pattern of tokens, optionally named.

    Attributes:
        name: Display name, or None
    """

    def __init__(self, interner: Interner, items: Iterable[Any], name: Optional[str] = None):
        self._tokens: Tuple[Token, ...] = tuple(make_tokens(interner, items))
        self.name = name

    @classmethod
    def from_tokens(cls, tokens: Iterable[Token], name: Optional[str] = None) -> 'Sequence':
        """Create a Sequence from tokens that were already resolved."""
        sequence = cls.__new__(cls)
        sequence._tokens = tuple(tokens)
        sequence.name = name
        return sequence

    @property
    def tokens(self) -> Tuple[Token, ...]:
        return self._tokens

    @property
    def label(self) -> str:
        """Name if set, otherwise the items joined by spaces."""
        if self.name:
            return self.name
        return " ".join(str(token) for token in self._tokens)

    def find(self, stream: Iterable[Token]) -> Optional[int]:
        """
        Find the first offset where this pattern occurs as a contiguous run.

        One pass over the stream. Each stream position opens a candidate
        offset; every later token either extends a candidate or kills it.
        A candidate that survives len(pattern) tokens is a match. Candidates
        still open when the stream ends are partial and do not count.

        Example, pattern 1A 2B 1A 3C against 1A 2B 3C 1A 2B 1A 3C:
            offset 0 dies at index 2 (3C, wanted 1A)
            offset 3 survives 1A 2B 1A 3C and matches at index 6

        Args:
            stream: Observed tokens, e.g. a matrix buffer

        Returns:
            Offset of the first complete run, or None
        """
        pattern = self._tokens
        length = len(pattern)
        if length == 0:
            return None

        # open candidate offsets, oldest first; at most `length` are live
        live: List[int] = []
        for index, token in enumerate(stream):
            live = [offset for offset in live if pattern[index - offset] == token]
            if pattern[0] == token:
                live.append(index)
            if live and index - live[0] == length - 1:
                return live[0]
        return None

    def is_matched(self, stream: Iterable[Token]) -> bool:
        """True when this pattern occurs as a contiguous run of stream."""
        return self.find(stream) is not None

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    def __repr__(self) -> str:
        items = " ".join(str(token) for token in self._tokens)
        if self.name:
            return f"Sequence({self.name!r}: {items})"
        return f"Sequence({items})"
