"""
Search Module - Exhaustive backtracking over every legal buffer.

The engine walks the matrix depth first, selecting each legal point, recursing
and deselecting again, so matrix state is never copied. At full buffer depth
every target sequence is tested against the buffer and a Solution is recorded
when at least one matches. Branches that run out of legal points early are
dropped without evaluation.

Work is bounded by max(width, height) ** buffer_size selections, which is
small for real puzzles (up to about 7x7 with buffers up to about 8).
"""

import logging
import time
from typing import List, Optional, Sequence as SequenceType

from .context import SearchContext
from .errors import SearchContractError, SelectionError
from .matrix import Matrix
from .sequence import Sequence
from .solution import SearchMetrics, SearchResult, Solution

logger = logging.getLogger(__name__)


class ExhaustiveSearch:
    """
    Depth-bounded enumeration of every buffer of a fixed size.

    Solutions come out in depth-first pre-order, which is lexicographic in
    the order legal_selections() lists points at each step. No ranking is
    applied.

    Attributes:
        sequences: Target sequences, indexed by Solution.matched
        buffer_size: Number of selections that make a full buffer
    """

    def __init__(self, sequences: SequenceType[Sequence], buffer_size: int):
        if buffer_size < 0:
            raise ValueError(f"buffer_size must be non-negative, got {buffer_size}")
        self.sequences = list(sequences)
        self.buffer_size = buffer_size

    def run(self, matrix: Matrix, context: Optional[SearchContext] = None) -> SearchResult:
        """
        Search every legal buffer reachable from the matrix's current state.

        The matrix is borrowed for the duration of the call and is returned
        to the state it was in, even when the search is cancelled.

        Args:
            matrix: Matrix to search; usually freshly constructed
            context: Optional cancellation and progress context

        Returns:
            SearchResult with solutions and metrics

        Raises:
            ValueError: If the matrix already holds more than buffer_size selections
            SearchContractError: If the matrix rejects a point it listed as legal
        """
        if matrix.selected_len() > self.buffer_size:
            raise ValueError(
                f"matrix already has {matrix.selected_len()} selections, "
                f"more than buffer_size {self.buffer_size}"
            )
        start_time = time.perf_counter()
        metrics = SearchMetrics(buffer_size=self.buffer_size)
        solutions: List[Solution] = []

        logger.debug(
            f"Searching {matrix.width}x{matrix.height} matrix, "
            f"buffer {self.buffer_size}, {len(self.sequences)} sequences"
        )

        base_depth = matrix.selected_len()
        try:
            completed = self._descend(matrix, context, metrics, solutions, root=True)
        finally:
            while matrix.selected_len() > base_depth:
                matrix.deselect()

        metrics.computation_time_ms = (time.perf_counter() - start_time) * 1000

        if not completed:
            logger.warning(
                f"Search cancelled after {metrics.states_explored} selections, "
                f"{len(solutions)} solutions kept"
            )
        else:
            logger.info(
                f"Search finished: {len(solutions)} solutions, "
                f"{metrics.leaves_evaluated} buffers evaluated in "
                f"{metrics.computation_time_ms:.1f}ms"
            )

        return SearchResult(
            solutions=solutions,
            was_cancelled=not completed,
            metrics=metrics
        )

    def _descend(
        self,
        matrix: Matrix,
        context: Optional[SearchContext],
        metrics: SearchMetrics,
        solutions: List[Solution],
        root: bool = False
    ) -> bool:
        """Explore one node. Returns False if the search was cancelled."""
        if context is not None and context.is_cancelled():
            return False

        if matrix.selected_len() >= self.buffer_size:
            self._evaluate_leaf(matrix, metrics, solutions)
            return True

        moves = matrix.legal_selections()
        for i, (x, y) in enumerate(moves):
            try:
                matrix.select(x, y)
            except SelectionError as e:
                raise SearchContractError(
                    f"legal_selections() offered ({x}, {y}) but select() refused it"
                ) from e
            metrics.states_explored += 1

            completed = self._descend(matrix, context, metrics, solutions)
            matrix.deselect()
            if not completed:
                return False

            if root and context is not None:
                context.report_progress(
                    (i + 1) / len(moves),
                    f"{i + 1}/{len(moves)} branches, {len(solutions)} solutions"
                )
        return True

    def _evaluate_leaf(
        self,
        matrix: Matrix,
        metrics: SearchMetrics,
        solutions: List[Solution]
    ) -> None:
        """Test the full buffer against every sequence."""
        metrics.leaves_evaluated += 1
        buffer = matrix.selected_values()
        matched = tuple(
            i for i, sequence in enumerate(self.sequences)
            if sequence.is_matched(buffer)
        )
        if matched:
            solutions.append(Solution(
                buffer=buffer,
                matched=matched,
                path=matrix.selections
            ))


def solve(
    matrix: Matrix,
    sequences: SequenceType[Sequence],
    buffer_size: int,
    context: Optional[SearchContext] = None
) -> List[Solution]:
    """
    Find every buffer of buffer_size selections that contains a target sequence.

    Args:
        matrix: Matrix to search; left unchanged on return
        sequences: Target sequences; Solution.matched indexes into this list
        buffer_size: Number of selections in a full buffer
        context: Optional cancellation and progress context

    Returns:
        Solutions in depth-first order
    """
    return ExhaustiveSearch(sequences, buffer_size).run(matrix, context).solutions
