"""
Solution Module - Search results and their metrics.
"""

from dataclasses import dataclass, field
from typing import Any, List, Sequence as SequenceType, Tuple

from .interner import Token
from .sequence import Sequence


@dataclass(frozen=True)
class Solution:
    """
    One full buffer together with the target sequences it contains.

    Attributes:
        buffer: Tokens of the buffer, in selection order
        matched: Indices into the caller's sequence list, ascending
        path: Points selected to produce the buffer
    """
    buffer: Tuple[Token, ...]
    matched: Tuple[int, ...]
    path: Tuple[Tuple[int, int], ...] = ()

    @property
    def values(self) -> Tuple[Any, ...]:
        """Raw values of the buffer."""
        return tuple(token.value for token in self.buffer)

    @property
    def length(self) -> int:
        return len(self.buffer)

    def matched_sequences(self, sequences: SequenceType[Sequence]) -> List[Sequence]:
        """
        Look up the matched sequences in the list that was searched.

        Args:
            sequences: The same list passed to the search

        Returns:
            Matched Sequence objects in index order
        """
        return [sequences[i] for i in self.matched]


@dataclass
class SearchMetrics:
    """
    Performance metrics for one search.

    Attributes:
        computation_time_ms: Time taken in milliseconds
        states_explored: Number of selections made
        leaves_evaluated: Number of full buffers tested against the sequences
        buffer_size: Depth the search was run to
    """
    computation_time_ms: float = 0.0
    states_explored: int = 0
    leaves_evaluated: int = 0
    buffer_size: int = 0


@dataclass
class SearchResult:
    """
    Result of an exhaustive search.

    Attributes:
        solutions: Solutions in depth-first order
        was_cancelled: True if stopped before the search space was exhausted
        metrics: Performance statistics
    """
    solutions: List[Solution] = field(default_factory=list)
    was_cancelled: bool = False
    metrics: SearchMetrics = field(default_factory=SearchMetrics)

    @property
    def solution_count(self) -> int:
        return len(self.solutions)

    @property
    def has_solutions(self) -> bool:
        return len(self.solutions) > 0
