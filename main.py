"""
Breach Protocol Solver - Entry Point

Loads a puzzle definition, searches every buffer of the configured size and
prints the ones that upload at least one sequence.

Example:
    python main.py puzzle.json
    python main.py puzzle.json --buffer-size 6 --timeout 10
    python main.py puzzle.json --buffer-size 6 --save-config  # Remember as default
"""

import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from breach_protocol import Puzzle, load_puzzle
from breach_protocol.settings import load_settings, save_settings
from breach_protocol.solver import BreachError, SearchContext, SearchResult, Sequence, Solution


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_LOAD_ERROR = 1
EXIT_CANCELLED = 2


def configure_logging(level: str, log_file: Optional[str] = None) -> None:
    """
    Configure logging to the console and optionally a file.

    Args:
        level: Level name, e.g. "INFO"
        log_file: Optional path of a log file (overwritten)
    """
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True
    )


def format_solution(index: int, solution: Solution, sequences: List[Sequence]) -> str:
    """
    Render one solution as a single line.

    Example:
        "3. (0,0) -> (0,2) -> (1,2) | 1C 55 BD | datamine, 1C BD"
    """
    path = " -> ".join(f"({x},{y})" for x, y in solution.path)
    values = " ".join(str(value) for value in solution.values)
    labels = ", ".join(seq.label for seq in solution.matched_sequences(sequences))
    return f"{index}. {path} | {values} | {labels}"


def print_result(result: SearchResult, puzzle: Puzzle, limit: int) -> None:
    """Print solutions (at most limit of them) and a summary line."""
    limit = max(0, limit)
    for i, solution in enumerate(result.solutions[:limit]):
        print(format_solution(i + 1, solution, puzzle.sequences))

    hidden = result.solution_count - limit
    if hidden > 0:
        print(f"... and {hidden} more")

    metrics = result.metrics
    status = "cancelled" if result.was_cancelled else "complete"
    print(
        f"{result.solution_count} solutions ({status}), "
        f"buffer {metrics.buffer_size}, {metrics.leaves_evaluated} buffers evaluated, "
        f"{metrics.computation_time_ms:.1f}ms"
    )


def non_negative_int(text: str) -> int:
    """argparse type for counts that may not be negative."""
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or more, got {value}")
    return value


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Breach Protocol Solver - list every buffer that uploads a sequence"
    )
    parser.add_argument(
        "puzzle",
        type=Path,
        help="Puzzle definition (JSON)"
    )
    parser.add_argument(
        "--buffer-size", "-b",
        type=non_negative_int,
        default=None,
        help="Buffer length (default: puzzle file, then config.json)"
    )
    parser.add_argument(
        "--timeout", "-t",
        type=float,
        default=None,
        help="Stop searching after this many seconds (default: config.json)"
    )
    parser.add_argument(
        "--limit", "-n",
        type=non_negative_int,
        default=None,
        help="Maximum number of solutions to print"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write the log to this file"
    )
    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Store --buffer-size/--timeout/--limit as new defaults"
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Load, solve and print a puzzle. Returns the process exit code."""
    args = parse_args(argv)
    settings = load_settings()

    configure_logging("DEBUG" if args.debug else settings["log_level"], args.log_file)

    try:
        puzzle = load_puzzle(args.puzzle)
    except (BreachError, OSError) as e:
        logger.error(f"Failed to load puzzle: {e}")
        return EXIT_LOAD_ERROR

    if args.buffer_size is not None:
        buffer_size = args.buffer_size
    elif puzzle.buffer_size is not None:
        buffer_size = puzzle.buffer_size
    else:
        buffer_size = settings["buffer_size"]

    timeout = args.timeout if args.timeout is not None else settings["timeout_sec"]
    limit = args.limit if args.limit is not None else settings["max_printed_solutions"]

    if args.save_config:
        if args.buffer_size is not None:
            settings["buffer_size"] = args.buffer_size
        if args.timeout is not None:
            settings["timeout_sec"] = args.timeout
        if args.limit is not None:
            settings["max_printed_solutions"] = args.limit
        save_settings(settings)

    logger.info(
        f"Solving {args.puzzle} ({puzzle.matrix.width}x{puzzle.matrix.height}, "
        f"buffer {buffer_size})"
    )
    context = SearchContext(timeout_sec=timeout)
    try:
        result = puzzle.solve(buffer_size=buffer_size, context=context)
    except ValueError as e:
        logger.error(f"Cannot solve puzzle: {e}")
        return EXIT_LOAD_ERROR

    print_result(result, puzzle, limit)
    return EXIT_CANCELLED if result.was_cancelled else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
