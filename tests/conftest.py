"""Shared pytest fixtures for breach protocol solver tests."""

import sys
from pathlib import Path

import pytest

# Add project root to sys.path so main.py and breach_protocol can be imported
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from breach_protocol.solver import Grid, Interner, Matrix  # noqa: E402


# 3x3 board used across tests
#   x:  0    1    2
#   y0: 1C   BD   55
#   y1: E9   1C   BD
#   y2: 55   55   1C
SAMPLE_ROWS = [
    ["1C", "BD", "55"],
    ["E9", "1C", "BD"],
    ["55", "55", "1C"],
]


@pytest.fixture
def interner():
    """Interner holding the tokens used by the matcher examples."""
    return Interner(["1A", "2B", "3C"])


@pytest.fixture
def board_interner():
    """Interner holding every value of SAMPLE_ROWS."""
    return Interner(value for row in SAMPLE_ROWS for value in row)


@pytest.fixture
def sample_matrix(board_interner):
    """Fresh 3x3 matrix built from SAMPLE_ROWS."""
    grid = Grid.from_rows([[board_interner.token_for(v) for v in row] for row in SAMPLE_ROWS])
    return Matrix(grid)


@pytest.fixture
def sample_definition():
    """Puzzle definition as decoded JSON."""
    return {
        "buffer_size": 3,
        "matrix": [list(row) for row in SAMPLE_ROWS],
        "sequences": [
            ["BD", "1C"],
            {"name": "datamine", "items": ["1C", "BD", "55"]},
        ],
    }
