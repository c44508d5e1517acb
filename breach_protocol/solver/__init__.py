"""
Solver Package - Breach protocol matrix model and exhaustive solver.

Public API:
    - Interner / Token: Deduplicated value store and its comparable handles
    - Grid: Fixed-size 2D cell storage
    - Matrix / ActiveLine: Selection state machine
    - Sequence: Target pattern and contiguous-run matcher
    - Solution, SearchResult, SearchMetrics: Search results
    - SearchContext: Cooperative cancellation and progress
    - ExhaustiveSearch, solve(): The search engine

Usage:
    from breach_protocol.solver import Interner, Matrix, Sequence, solve

    # Intern every value before building anything from tokens
    interner = Interner(["1C", "55", "BD", "E9"])

    matrix = Matrix.from_tokens(2, 2, [interner.token_for(v) for v in ("1C", "55", "BD", "E9")])
    sequences = [Sequence(interner, ["1C", "BD"], name="datamine")]

    for solution in solve(matrix, sequences, buffer_size=2):
        print(solution.path, solution.values, solution.matched)
"""

from .errors import (
    BreachError,
    TokenNotFoundError,
    IncomparableTokensError,
    StaleTokenError,
    SelectionError,
    OutOfBoundsError,
    NotActiveError,
    AlreadySelectedError,
    SearchContractError,
    PuzzleFormatError,
)
from .interner import Interner, Token
from .grid import Grid
from .matrix import ActiveLine, Axis, Matrix
from .sequence import Sequence, make_tokens
from .solution import Solution, SearchMetrics, SearchResult
from .context import SearchContext
from .search import ExhaustiveSearch, solve

__all__ = [
    # Errors
    "BreachError",
    "TokenNotFoundError",
    "IncomparableTokensError",
    "StaleTokenError",
    "SelectionError",
    "OutOfBoundsError",
    "NotActiveError",
    "AlreadySelectedError",
    "SearchContractError",
    "PuzzleFormatError",
    # Data structures
    "Interner",
    "Token",
    "Grid",
    "ActiveLine",
    "Axis",
    "Matrix",
    "Sequence",
    "make_tokens",
    # Results
    "Solution",
    "SearchMetrics",
    "SearchResult",
    "SearchContext",
    # Search
    "ExhaustiveSearch",
    "solve",
]
