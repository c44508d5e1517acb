"""Tests for the exhaustive search engine."""

import threading

import pytest

from breach_protocol.solver import (
    ExhaustiveSearch,
    Grid,
    Interner,
    Matrix,
    SearchContext,
    SearchContractError,
    Sequence,
    solve,
)


def state_of(matrix):
    return matrix.selections, matrix.active, matrix.legal_selections()


def buffers(solutions):
    return [list(solution.values) for solution in solutions]


def test_single_cell_board():
    interner = Interner(["1C"])
    matrix = Matrix.from_tokens(1, 1, [interner.get("1C")])
    sequences = [Sequence(interner, ["1C"])]

    solutions = solve(matrix, sequences, buffer_size=1)

    assert len(solutions) == 1
    assert solutions[0].matched == (0,)
    assert solutions[0].path == ((0, 0),)
    assert solutions[0].values == ("1C",)


def test_no_matching_path_yields_nothing(sample_matrix, board_interner):
    # E9 sits at (0, 1) and can only be reached as the second pick
    sequences = [Sequence(board_interner, ["E9", "E9"])]
    assert solve(sample_matrix, sequences, buffer_size=3) == []


def test_short_branches_are_not_evaluated():
    interner = Interner(["1C", "BD"])
    matrix = Matrix.from_tokens(2, 1, [interner.get("1C"), interner.get("BD")])
    # a 2x1 board allows at most two picks: (x, 0) then column x has no free cell
    result = ExhaustiveSearch([Sequence(interner, ["1C"])], buffer_size=2).run(matrix)
    assert result.solutions == []
    assert result.metrics.leaves_evaluated == 0


def test_solutions_in_depth_first_order(sample_matrix, board_interner):
    sequences = [Sequence(board_interner, ["55"])]
    solutions = solve(sample_matrix, sequences, buffer_size=2)

    paths = [solution.path for solution in solutions]
    assert paths == [
        ((0, 0), (0, 2)),
        ((1, 0), (1, 2)),
        ((2, 0), (2, 1)),
        ((2, 0), (2, 2)),
    ]
    # (2, 0) is 55 itself, so both of its continuations match
    assert buffers(solutions)[2] == ["55", "BD"]


def test_reports_every_matched_index(sample_matrix, board_interner):
    sequences = [
        Sequence(board_interner, ["BD", "1C"]),
        Sequence(board_interner, ["E9"]),
        Sequence(board_interner, ["1C", "BD"], name="datamine"),
    ]
    solutions = solve(sample_matrix, sequences, buffer_size=3)

    by_path = {solution.path: solution.matched for solution in solutions}
    # 1C (0,0) -> E9 (0,1) -> BD (2,1)
    assert by_path[((0, 0), (0, 1), (2, 1))] == (1,)
    # BD (1,0) -> 1C (1,1) -> BD (2,1)
    assert by_path[((1, 0), (1, 1), (2, 1))] == (0, 2)
    assert all(solution.matched for solution in solutions)


def test_matrix_is_left_untouched(sample_matrix, board_interner):
    sample_matrix.select(1, 0)
    before = state_of(sample_matrix)

    solve(sample_matrix, [Sequence(board_interner, ["1C"])], buffer_size=3)

    assert state_of(sample_matrix) == before


def test_search_continues_from_existing_selection(sample_matrix, board_interner):
    sample_matrix.select(1, 0)
    solutions = solve(sample_matrix, [Sequence(board_interner, ["BD", "55"])], buffer_size=2)
    assert [solution.path for solution in solutions] == [((1, 0), (1, 2))]


def test_solutions_are_snapshots(sample_matrix, board_interner):
    solutions = solve(sample_matrix, [Sequence(board_interner, ["1C"])], buffer_size=2)
    first = solutions[0]
    sample_matrix.select(2, 0)
    assert first.path == ((0, 0), (0, 1))
    assert first.values == ("1C", "E9")


def test_solve_is_deterministic(sample_matrix, board_interner):
    sequences = [Sequence(board_interner, ["1C", "BD"]), Sequence(board_interner, ["55", "55"])]
    first = solve(sample_matrix, sequences, buffer_size=4)
    second = solve(sample_matrix, sequences, buffer_size=4)
    assert first
    assert first == second


def test_zero_buffer_has_no_solutions(sample_matrix, board_interner):
    result = ExhaustiveSearch([Sequence(board_interner, ["1C"])], buffer_size=0).run(sample_matrix)
    assert result.solutions == []
    assert result.metrics.leaves_evaluated == 1


def test_selection_deeper_than_buffer_rejected(sample_matrix, board_interner):
    sample_matrix.select(0, 0)
    sample_matrix.select(0, 1)
    before = state_of(sample_matrix)

    with pytest.raises(ValueError):
        solve(sample_matrix, [Sequence(board_interner, ["1C"])], buffer_size=1)
    assert state_of(sample_matrix) == before


def test_selection_equal_to_buffer_is_one_leaf(sample_matrix, board_interner):
    sample_matrix.select(0, 0)
    solutions = solve(sample_matrix, [Sequence(board_interner, ["1C"])], buffer_size=1)
    assert [s.path for s in solutions] == [((0, 0),)]
    assert all(s.length == 1 for s in solutions)


def test_negative_buffer_rejected(board_interner):
    with pytest.raises(ValueError):
        ExhaustiveSearch([], buffer_size=-1)


def test_metrics(sample_matrix, board_interner):
    result = ExhaustiveSearch([Sequence(board_interner, ["1C"])], buffer_size=2).run(sample_matrix)
    # 3 picks on row 0, each followed by 2 picks on its column
    assert result.metrics.states_explored == 3 + 3 * 2
    assert result.metrics.leaves_evaluated == 6
    assert result.metrics.buffer_size == 2
    assert not result.was_cancelled


def test_cancelled_search_unwinds(sample_matrix, board_interner):
    context = SearchContext(cancel_flag=threading.Event())
    context.cancel()
    before = state_of(sample_matrix)

    result = ExhaustiveSearch([Sequence(board_interner, ["1C"])], buffer_size=3).run(
        sample_matrix, context
    )

    assert result.was_cancelled
    assert result.solutions == []
    assert state_of(sample_matrix) == before


def test_cancel_midway_keeps_found_solutions(sample_matrix, board_interner):
    context = SearchContext()

    def stop_after_first_branch(percent, message):
        context.cancel()

    context.progress_callback = stop_after_first_branch
    result = ExhaustiveSearch([Sequence(board_interner, ["1C"])], buffer_size=2).run(
        sample_matrix, context
    )

    assert result.was_cancelled
    assert [s.path[0] for s in result.solutions] == [(0, 0), (0, 0)]
    assert sample_matrix.selected_len() == 0


def test_progress_is_reported(sample_matrix, board_interner):
    reports = []
    context = SearchContext(progress_callback=lambda p, m: reports.append(p))
    ExhaustiveSearch([Sequence(board_interner, ["1C"])], buffer_size=2).run(sample_matrix, context)
    assert reports == pytest.approx([1 / 3, 2 / 3, 1.0])


class _LyingMatrix(Matrix):
    """Matrix whose move list includes an already chosen point."""

    def legal_selections(self):
        return self.active.points(self.width, self.height)


def test_rejected_legal_move_is_a_contract_error(board_interner):
    grid = Grid.from_rows([[board_interner.get("1C"), board_interner.get("BD")]])
    matrix = _LyingMatrix(grid)

    with pytest.raises(SearchContractError):
        solve(matrix, [Sequence(board_interner, ["1C"])], buffer_size=2)
    assert matrix.selected_len() == 0
