import pytest

from kakuro_solver.board import Board, Cell, Run, Square
from kakuro_solver.common import ACROSS, DOWN, PuzzleStructureError

from conftest import BOARDS_DIR, CANONICAL, NO_CELLS, board_from_text


# =============================================================================
# Run
# =============================================================================

def make_run(target: int, *values: int) -> Run:
    cells = []
    for i, value in enumerate(values):
        cell = Cell(0, i)
        cell.value = value
        cells.append(cell)
    return Run(target, cells, ACROSS)


def test_run_sum_ignores_empty_cells():
    run = make_run(10, 3, 0, 4)
    assert run.current_sum() == 7
    assert run.assigned_values() == [3, 4]
    assert run.n_empty() == 1


def test_run_duplicates():
    assert make_run(10, 3, 3, 0).has_duplicate()
    assert not make_run(10, 3, 0, 0).has_duplicate()
    # Empty cells are not duplicates of each other
    assert not make_run(10, 0, 0, 0).has_duplicate()


def test_run_overfull():
    assert make_run(10, 9, 2, 0).is_overfull()  # sum too big already
    assert make_run(10, 1, 2, 3).is_overfull()  # full, wrong sum
    assert not make_run(10, 1, 2, 0).is_overfull()
    assert not make_run(10, 1, 2, 7).is_overfull()


def test_run_satisfied():
    assert make_run(6, 1, 2, 3).is_satisfied()
    assert not make_run(6, 1, 2, 0).is_satisfied()
    assert not make_run(6, 1, 5, 0).is_satisfied()
    assert not make_run(6, 3, 3).is_satisfied()


def test_run_rejects_bad_length_and_target():
    with pytest.raises(PuzzleStructureError):
        Run(10, [], ACROSS)
    with pytest.raises(PuzzleStructureError):
        Run(45, [Cell(0, c) for c in range(10)], ACROSS)
    with pytest.raises(PuzzleStructureError):
        Run(46, [Cell(0, c) for c in range(9)], DOWN)
    with pytest.raises(PuzzleStructureError):
        Run(0, [Cell(0, 0)], DOWN)


# =============================================================================
# Board
# =============================================================================

def test_board_cells_and_runs(canonical_board: Board):
    board = canonical_board
    assert board.n_rows == 3
    assert board.n_cols == 3
    assert board.cell_at(0, 0) is None
    assert board.cell_at(1, 0) is None  # clue
    assert board.cell_at(5, 5) is None  # off the board
    cell = board.cell_at(1, 1)
    assert (cell.row, cell.col, cell.value) == (1, 1, 0)
    assert board.horizontal_run_of(cell).target == 3
    assert board.vertical_run_of(cell).target == 10
    assert board.horizontal_run_of(board.cell_at(2, 2)).target == 17
    assert [r.target for r in board.horizontal_runs] == [3, 17]
    assert [r.target for r in board.vertical_runs] == [10, 10]


def test_board_cells_are_shared_with_runs(canonical_board: Board):
    board = canonical_board
    cell = board.cell_at(2, 1)
    cell.value = 4
    assert board.horizontal_run_of(cell).current_sum() == 4
    assert board.vertical_run_of(cell).current_sum() == 4


def test_assignable_cells_are_row_major(canonical_board: Board):
    positions = [(c.row, c.col)
                 for c in canonical_board.all_assignable_cells()]
    assert positions == [(1, 1), (1, 2), (2, 1), (2, 2)]


def test_is_complete(canonical_board: Board):
    board = canonical_board
    assert not board.is_complete()
    board.set_values([
        [None, None, None],
        [None, 1, 2],
        [None, 9, 8],
    ])
    assert board.is_complete()
    board.cell_at(2, 2).value = 7
    assert not board.is_complete()
    board.reset()
    assert all(c.value == 0 for c in board.all_assignable_cells())


def test_each_cell_in_one_run_per_direction():
    board = board_from_text((BOARDS_DIR / "kakuro_example.txt").read_text())
    cells = board.all_assignable_cells()
    across = [c for run in board.horizontal_runs for c in run.cells]
    down = [c for run in board.vertical_runs for c in run.cells]
    assert len(across) == len(down) == len(cells)
    assert set(map(id, across)) == set(map(id, down)) == set(map(id, cells))
    for cell in cells:
        assert cell in board.horizontal_run_of(cell).cells
        assert cell in board.vertical_run_of(cell).cells


def test_clue_without_cells_is_ignored():
    board = board_from_text("""
        X     4/-   6/3
        -/3   .     .
        -/7   .     .
    """)
    # The across 3 at top right points off the board
    assert [r.target for r in board.horizontal_runs] == [3, 7]


def test_board_without_cells():
    board = board_from_text(NO_CELLS)
    assert board.all_assignable_cells() == []
    assert board.is_complete()


def test_cell_without_down_run_is_rejected():
    with pytest.raises(PuzzleStructureError, match="no down run"):
        board_from_text("""
            X     X     X
            -/3   .     .
        """)


def test_cell_without_across_run_is_rejected():
    with pytest.raises(PuzzleStructureError, match="no across run"):
        board_from_text("""
            X     3/-
            X     .
        """)


def test_overlong_run_is_rejected():
    with pytest.raises(PuzzleStructureError):
        board_from_text("-/45 " + " ".join(["."] * 10))


def test_board_must_be_rectangular():
    squares = [
        [Square.blocked(), Square.clue(down=3)],
        [Square.clue(across=3)],
    ]
    with pytest.raises(PuzzleStructureError):
        Board(squares)


def test_canonical_text_matches(canonical_board: Board):
    assert board_from_text(CANONICAL).values() == canonical_board.values()
