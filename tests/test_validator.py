from kakuro_solver.board import Board, Cell, Run
from kakuro_solver.common import ACROSS, DIGITS
from kakuro_solver.validator import (
    can_place,
    can_place_in_cell,
    run_is_valid,
)


def make_run(target: int, *values: int) -> Run:
    cells = []
    for i, value in enumerate(values):
        cell = Cell(0, i)
        cell.value = value
        cells.append(cell)
    return Run(target, cells, ACROSS)


def test_duplicates_rejected():
    run = make_run(20, 5, 0, 0)
    assert not can_place(run, 5)
    assert can_place(run, 6)


def test_sum_may_not_exceed_target():
    run = make_run(10, 6, 0, 0)
    assert can_place(run, 3)
    assert not can_place(run, 5)


def test_last_cell_must_hit_target():
    run = make_run(10, 6, 0)
    assert [d for d in DIGITS if can_place(run, d)] == [4]
    # ... but not when the only digit that fits is a repeat
    assert [d for d in DIGITS if can_place(make_run(12, 6, 0), d)] == []


def test_single_cell_run_accepts_only_its_target():
    for target in DIGITS:
        run = make_run(target, 0)
        assert [d for d in DIGITS if can_place(run, d)] == [target]


def test_out_of_range_digits():
    run = make_run(10, 0, 0)
    assert not can_place(run, 0)
    assert not can_place(run, 10)


def test_cell_needs_both_runs(contradiction_board: Board):
    cell = contradiction_board.cell_at(1, 1)
    # Down run wants 5; across run (target 3) cannot take it
    assert not can_place_in_cell(contradiction_board, cell, 5)
    # Across run would take 1; down run wants exactly 5
    assert not can_place_in_cell(contradiction_board, cell, 1)


def test_can_place_does_not_modify():
    run = make_run(10, 6, 0)
    can_place(run, 4)
    assert [c.value for c in run.cells] == [6, 0]


def test_run_is_valid():
    assert run_is_valid(make_run(17, 8, 9))
    assert not run_is_valid(make_run(17, 8, 0))
    assert not run_is_valid(make_run(16, 8, 8))
