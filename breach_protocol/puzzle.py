"""
Puzzle Module - Build a solvable puzzle from a JSON definition.

A definition looks like:

    {
        "buffer_size": 4,
        "matrix": [
            ["1C", "BD", "55"],
            ["E9", "1C", "BD"],
            ["55", "55", "1C"]
        ],
        "sequences": [
            ["1C", "BD"],
            {"name": "datamine", "items": ["55", "1C"]}
        ]
    }

Every raw value is interned in one batch before any token is taken, so all
tokens of a Puzzle share one interner.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .solver import (
    Grid,
    Interner,
    Matrix,
    PuzzleFormatError,
    SearchContext,
    SearchResult,
    Sequence,
    ExhaustiveSearch,
)

logger = logging.getLogger(__name__)


@dataclass
class Puzzle:
    """
    A matrix and its target sequences, built against one interner.

    Attributes:
        interner: Interner owning every token of the puzzle
        matrix: Selection state machine over the cell values
        sequences: Target sequences in definition order
        buffer_size: Buffer length from the definition, or None
    """
    interner: Interner
    matrix: Matrix
    sequences: List[Sequence]
    buffer_size: Optional[int] = None

    def solve(
        self,
        buffer_size: Optional[int] = None,
        context: Optional[SearchContext] = None
    ) -> SearchResult:
        """
        Run the exhaustive search on this puzzle.

        Args:
            buffer_size: Overrides the definition's buffer size
            context: Optional cancellation and progress context

        Raises:
            PuzzleFormatError: If no buffer size is known
        """
        size = buffer_size if buffer_size is not None else self.buffer_size
        if size is None:
            raise PuzzleFormatError("no buffer size given")
        return ExhaustiveSearch(self.sequences, size).run(self.matrix, context)


def _require_strings(values: List[Any], where: str) -> None:
    for value in values:
        if not isinstance(value, str):
            raise PuzzleFormatError(f"{where}: expected string items, got {value!r}")


def _parse_rows(data: Dict[str, Any]) -> List[List[str]]:
    rows = data.get("matrix")
    if not isinstance(rows, list) or not rows:
        raise PuzzleFormatError("'matrix' must be a non-empty list of rows")
    for y, row in enumerate(rows):
        if not isinstance(row, list):
            raise PuzzleFormatError(f"matrix row {y} must be a list")
        _require_strings(row, f"matrix row {y}")
    width = len(rows[0])
    for y, row in enumerate(rows):
        if len(row) != width:
            raise PuzzleFormatError(
                f"matrix row {y} has {len(row)} cells, expected {width}"
            )
    return rows


def _parse_sequences(data: Dict[str, Any]) -> List[Tuple[Optional[str], List[str]]]:
    entries = data.get("sequences")
    if not isinstance(entries, list):
        raise PuzzleFormatError("'sequences' must be a list")

    parsed = []
    for i, entry in enumerate(entries):
        name = None
        if isinstance(entry, dict):
            name = entry.get("name")
            if name is not None and not isinstance(name, str):
                raise PuzzleFormatError(f"sequence {i}: name must be a string, got {name!r}")
            items = entry.get("items")
        else:
            items = entry
        if not isinstance(items, list) or not items:
            raise PuzzleFormatError(f"sequence {i} must have a non-empty item list")
        _require_strings(items, f"sequence {i}")
        parsed.append((name, items))
    return parsed


def _parse_buffer_size(data: Dict[str, Any]) -> Optional[int]:
    size = data.get("buffer_size")
    if size is None:
        return None
    if isinstance(size, bool) or not isinstance(size, int) or size < 0:
        raise PuzzleFormatError(f"'buffer_size' must be a non-negative integer, got {size!r}")
    return size


def parse_puzzle(data: Dict[str, Any]) -> Puzzle:
    """
    Build a Puzzle from a decoded JSON definition.

    Args:
        data: Definition with 'matrix', 'sequences' and optional 'buffer_size'

    Returns:
        Puzzle ready to solve

    Raises:
        PuzzleFormatError: If the definition is malformed
    """
    if not isinstance(data, dict):
        raise PuzzleFormatError("puzzle definition must be a JSON object")

    rows = _parse_rows(data)
    sequence_defs = _parse_sequences(data)
    buffer_size = _parse_buffer_size(data)

    # intern everything first; tokens taken before this would go stale
    interner: Interner[str] = Interner()
    raw_values = [value for row in rows for value in row]
    raw_values.extend(item for _, items in sequence_defs for item in items)
    interner.extend(raw_values)

    values = Grid.from_rows([[interner.token_for(v) for v in row] for row in rows])
    matrix = Matrix(values)
    sequences = [Sequence(interner, items, name=name) for name, items in sequence_defs]

    logger.debug(
        f"Puzzle loaded: {matrix.width}x{matrix.height} matrix, "
        f"{len(sequences)} sequences, {len(interner)} distinct values"
    )
    return Puzzle(
        interner=interner,
        matrix=matrix,
        sequences=sequences,
        buffer_size=buffer_size
    )


def load_puzzle(path: Path) -> Puzzle:
    """
    Load a Puzzle from a JSON file.

    Args:
        path: Path to the definition file

    Raises:
        PuzzleFormatError: If the file is not valid JSON or is malformed
        OSError: If the file cannot be read
    """
    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise PuzzleFormatError(f"{path}: invalid JSON: {e}") from e
    return parse_puzzle(data)
