"""
Test script for solver validation

Tests:
1. Single-end advance outcomes
2. Sweep accounting
3. Full solves, including recovery from a wrong guess
4. Failure reporting and determinism

Usage:
    pytest tests/test_solver.py
    python tests/test_solver.py
"""

import sys
from collections import deque
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from flowplot.solver import (
    Checkpoint,
    ContractViolation,
    Grid,
    GuessTarget,
    HeadPair,
    Outcome,
    Side,
    SolveContext,
    SweepReport,
    UNSET,
    advance,
    build_puzzle,
    puzzle_from_heads,
    solve,
    solve_context,
    sweep,
)
from flowplot.solver import propagation


FIVE_BY_FIVE_PAIRS = [
    ((0, 1), (1, 3)),
    ((1, 1), (3, 1)),
    ((0, 2), (4, 4)),
    ((2, 3), (4, 3)),
]


def connected(grid: Grid, start, goal) -> bool:
    """True if start reaches goal through cells of start's color."""
    color = grid.read(*start)
    seen = {start}
    queue = deque([start])
    while queue:
        cell = queue.popleft()
        if cell == goal:
            return True
        for _, neighbor in grid.neighbors(*cell):
            if neighbor not in seen and grid.get(*neighbor) == color:
                seen.add(neighbor)
                queue.append(neighbor)
    return False


def assert_valid_solution(grid: Grid, pairs):
    assert not grid.contains_empty_cell()
    for color, (a, b) in enumerate(pairs, start=1):
        assert grid.read(*a) == color
        assert grid.read(*b) == color
        assert connected(grid, a, b), f"color {color} is not connected"


# --- advance -----------------------------------------------------------------

def test_advance_degenerate_head_completes_immediately():
    grid = Grid(3, 3)
    grid.write(1, 1, 1)
    before = grid.clone()

    result = advance((1, 1), (1, 1), grid)

    assert result.outcome is Outcome.COMPLETED
    assert result.end == (1, 1)
    assert grid == before


def test_advance_completes_next_to_partner():
    grid = Grid.from_rows([[1, 1, 0]])
    result = advance((0, 0), (1, 0), grid)
    assert result.outcome is Outcome.COMPLETED
    assert grid.to_list() == [[1, 1, 0]]


def test_advance_single_candidate_moves_end():
    grid = Grid.from_rows([[1, 0, 1]])
    result = advance((0, 0), (2, 0), grid)

    assert result.outcome is Outcome.ADVANCED
    assert result.end == (1, 0)
    assert grid.to_list() == [[1, 1, 1]]


def test_advance_ambiguous_lists_candidates_in_scan_order():
    grid = Grid(3, 3)
    grid.write(1, 1, 2)
    grid.write(0, 0, 2)
    before = grid.clone()

    result = advance((1, 1), (0, 0), grid)

    assert result.outcome is Outcome.AMBIGUOUS
    assert result.candidates == ((2, 1), (0, 1), (1, 2), (1, 0))
    assert result.end == (1, 1)
    assert grid == before


def test_advance_stuck_without_empty_neighbor():
    grid = Grid.from_rows([[1, 2], [2, 1]])
    result = advance((0, 0), (1, 1), grid)
    assert result.outcome is Outcome.STUCK


def test_advance_unset_end_is_stuck():
    grid = Grid.from_rows([[0, 1, 0]])
    result = advance(UNSET, (1, 0), grid)
    assert result.outcome is Outcome.STUCK


# --- sweep -------------------------------------------------------------------

def test_first_sweep_of_five_by_five():
    puzzle = puzzle_from_heads(5, 5, FIVE_BY_FIVE_PAIRS)
    grid, heads = puzzle.grid, puzzle.heads

    report = sweep(grid, heads)

    assert report.progressed
    assert not report.stuck
    assert report.completed == 0
    # Forced moves: color 1 north into the corner, color 3 west along the bottom
    assert heads[0].first == (0, 0)
    assert heads[2].second == (3, 4)
    assert grid.read(0, 0) == 1
    assert grid.read(3, 4) == 3
    # Only the last ambiguous end is kept
    assert report.guess_target == GuessTarget(
        candidates=((3, 3), (4, 2)), color=4, index=3, side=Side.SECOND
    )


def test_sweep_counts_completed_ends():
    grid = Grid.from_rows([[1, 1], [2, 2]])
    heads = [HeadPair((0, 0), (1, 0)), HeadPair((0, 1), (1, 1))]
    report = sweep(grid, heads)
    assert report == SweepReport(completed=4)


# --- solve -------------------------------------------------------------------

def test_five_by_five_scenario_solves():
    """Four colors on a 5x5 board fill every cell."""
    print("\n" + "=" * 60)
    print("TEST: 5x5 scenario")
    print("=" * 60)

    puzzle = puzzle_from_heads(5, 5, FIVE_BY_FIVE_PAIRS)
    result = solve(puzzle.grid, puzzle.heads)

    print(result.grid)
    print(f"  {result.metrics}")

    assert result.solved
    assert not result.grid.contains_empty_cell()
    assert_valid_solution(result.grid, FIVE_BY_FIVE_PAIRS)


def test_wrong_first_guess_is_recovered():
    """The first guess on the 5x5 board dead-ends and must be undone."""
    puzzle = puzzle_from_heads(5, 5, FIVE_BY_FIVE_PAIRS)
    result = solve(puzzle.grid, puzzle.heads)

    assert result.solved
    assert result.metrics.guesses >= 1
    assert result.metrics.backtracks >= 1
    assert result.metrics.max_depth >= 1
    # No stray cells left over from abandoned branches
    assert_valid_solution(result.grid, FIVE_BY_FIVE_PAIRS)


def test_result_unpacks_as_grid_and_flag():
    puzzle = build_puzzle(3, 1, [1, 0, 1])
    grid, solved = solve(puzzle.grid, puzzle.heads)
    assert solved
    assert grid.to_list() == [[1, 1, 1]]


def test_straight_line_takes_two_sweeps():
    puzzle = build_puzzle(3, 1, [1, 0, 1])
    result = solve(puzzle.grid, puzzle.heads)
    assert result.solved
    assert result.metrics.sweeps == 2
    assert result.metrics.guesses == 0


def test_solve_does_not_mutate_inputs():
    puzzle = puzzle_from_heads(5, 5, FIVE_BY_FIVE_PAIRS)
    grid_before = puzzle.grid.clone()
    heads_before = [pair.copy() for pair in puzzle.heads]

    solve(puzzle.grid, puzzle.heads)

    assert puzzle.grid == grid_before
    assert puzzle.heads == heads_before


def test_impossible_puzzle_reports_failure():
    puzzle = build_puzzle(2, 2, [1, 2, 2, 1])
    result = solve(puzzle.grid, puzzle.heads)

    assert not result.solved
    assert result.metrics.sweeps == 1
    assert result.grid.to_list() == [[1, 2], [2, 1]]


def test_unpaired_color_reports_failure():
    puzzle = build_puzzle(3, 1, [1, 0, 0])
    result = solve(puzzle.grid, puzzle.heads)
    assert not result.solved


def test_joined_ends_with_empty_cells_is_not_solved():
    """Touching endpoints close the path but leave a cell unfilled."""
    puzzle = build_puzzle(3, 1, [1, 1, 0])
    result = solve(puzzle.grid, puzzle.heads)

    assert not result.solved
    assert result.metrics.sweeps == 1
    assert result.grid.to_list() == [[1, 1, 0]]


def test_joined_guess_with_empty_cells_is_backtracked():
    """A guess that joins the ends early is undone, then both options fail."""
    puzzle = build_puzzle(2, 2, [1, 0, 0, 1])
    result = solve(puzzle.grid, puzzle.heads)

    assert not result.solved
    assert result.metrics.guesses == 1
    assert result.metrics.backtracks == 1
    assert result.metrics.discarded_checkpoints == 1
    assert result.grid.contains_empty_cell()


def test_unfillable_three_by_three_is_not_solved():
    # Corner endpoints on a 3x3 board cannot cover all nine cells
    puzzle = build_puzzle(3, 3, [1, 0, 1, 0, 0, 0, 2, 0, 2])
    result = solve(puzzle.grid, puzzle.heads)

    assert not result.solved
    assert result.grid.contains_empty_cell()


@pytest.mark.parametrize("cells", [
    [1, 1, 0],
    [1, 0, 1],
    [0, 1, 1],
])
def test_solved_implies_full_grid(cells):
    puzzle = build_puzzle(3, 1, cells)
    result = solve(puzzle.grid, puzzle.heads)
    assert not (result.solved and result.grid.contains_empty_cell())
    assert result.solved == (cells == [1, 0, 1])


def test_failure_is_deterministic():
    puzzle = build_puzzle(2, 2, [1, 2, 2, 1])
    first = solve(puzzle.copy().grid, puzzle.copy().heads)
    second = solve(puzzle.copy().grid, puzzle.copy().heads)
    assert first.solved == second.solved
    assert first.grid == second.grid
    assert first.metrics.sweeps == second.metrics.sweeps


def test_sweep_bound_reports_failure():
    puzzle = puzzle_from_heads(5, 5, FIVE_BY_FIVE_PAIRS)
    result = solve(puzzle.grid, puzzle.heads, max_sweeps=3)
    assert not result.solved
    assert result.metrics.sweeps == 3

    again = solve(puzzle.grid, puzzle.heads, max_sweeps=3)
    assert again.grid == result.grid


def test_solve_is_reproducible():
    puzzle = puzzle_from_heads(5, 5, FIVE_BY_FIVE_PAIRS)
    first = solve(puzzle.grid, puzzle.heads)
    second = solve(puzzle.grid, puzzle.heads)
    assert first.grid == second.grid
    assert first.metrics.sweeps == second.metrics.sweeps
    assert first.metrics.backtracks == second.metrics.backtracks


def test_no_colors():
    assert not solve(Grid(2, 2), []).solved
    assert solve(Grid.from_rows([[255]]), []).solved


def test_progress_callback_called_every_sweep():
    calls = []
    puzzle = puzzle_from_heads(5, 5, FIVE_BY_FIVE_PAIRS)
    context = SolveContext.from_puzzle(
        puzzle, progress_callback=lambda sweep_no, done, total: calls.append((sweep_no, done, total))
    )

    result = solve_context(context)

    assert len(calls) == result.metrics.sweeps
    assert [c[0] for c in calls] == list(range(1, result.metrics.sweeps + 1))
    assert all(total == 8 for _, _, total in calls)
    assert calls[-1][1] == 8


def test_stall_without_guess_target_is_contract_violation(monkeypatch):
    monkeypatch.setattr(propagation, "sweep", lambda grid, heads: SweepReport())
    puzzle = build_puzzle(3, 1, [1, 0, 1])
    with pytest.raises(ContractViolation):
        solve(puzzle.grid, puzzle.heads)


# --- checkpoints -------------------------------------------------------------

def test_checkpoint_restore_is_isolated_from_live_state():
    puzzle = puzzle_from_heads(3, 3, [((0, 0), (2, 2))])
    grid, heads = puzzle.grid, puzzle.heads
    target = GuessTarget(candidates=((1, 0), (0, 1)), color=1, index=0, side=Side.FIRST)

    checkpoint = Checkpoint.capture(grid, heads, target, target.candidates[:-1])

    # Mutate the live state as a failed branch would
    grid.write(0, 1, 1)
    grid.write(0, 2, 1)
    heads[0].first = (0, 2)

    restored_grid, restored_heads = checkpoint.restore()
    assert restored_grid.to_list() == [[1, 0, 0], [0, 0, 0], [0, 0, 1]]
    assert restored_heads == [HeadPair((0, 0), (2, 2))]

    # Restored copies do not alias the snapshot either
    restored_grid.write(1, 1, 1)
    restored_heads[0].second = (1, 1)
    again_grid, again_heads = checkpoint.restore()
    assert again_grid.read(1, 1) == 0
    assert again_heads[0].second == (2, 2)


def test_checkpoint_without_last_shortens_candidates():
    grid = Grid(2, 2)
    target = GuessTarget(candidates=((1, 0), (0, 1), (1, 1)), color=1, index=0, side=Side.SECOND)
    checkpoint = Checkpoint.capture(grid, [HeadPair()], target, target.candidates[:-1])

    shorter = checkpoint.without_last()

    assert checkpoint.candidates == ((1, 0), (0, 1))
    assert shorter.candidates == ((1, 0),)
    assert shorter.side is Side.SECOND


def main():
    """Run the solver tests without pytest."""
    tests = [
        test_five_by_five_scenario_solves,
        test_wrong_first_guess_is_recovered,
        test_impossible_puzzle_reports_failure,
        test_failure_is_deterministic,
        test_checkpoint_restore_is_isolated_from_live_state,
    ]

    failed = 0
    for test in tests:
        try:
            test()
            print(f"  {test.__name__}: [PASS]")
        except AssertionError as e:
            failed += 1
            print(f"  {test.__name__}: [FAIL] {e}")

    print()
    if failed:
        print("Some tests FAILED!")
        return 1
    print("All tests PASSED!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
