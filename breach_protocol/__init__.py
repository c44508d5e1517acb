"""
Breach Protocol Solver

Models the breach protocol minigame and enumerates every buffer that
uploads at least one target sequence.
"""

from .puzzle import Puzzle, load_puzzle, parse_puzzle

__version__ = "0.1.0"

__all__ = ["Puzzle", "load_puzzle", "parse_puzzle"]
