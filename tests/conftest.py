from pathlib import Path

import pytest

from kakuro_solver.board import Board
from kakuro_solver.kakuro import parse_squares

BOARDS_DIR = Path(__file__).resolve().parents[1] / "boards"

# Across 3 over two cells; columns sum to 10; second row is across 17.
CANONICAL = """
X     10/-  10/-
-/3   .     .
-/17  .     .
"""

# Across 3 over two cells, each forced to 5 by a one-cell down run.
CONTRADICTION = """
X     5/-   5/-
-/3   .     .
"""

NO_CELLS = """
X  X
X  X
"""


def board_from_text(text: str) -> Board:
    return Board(parse_squares(text))


@pytest.fixture
def canonical_board() -> Board:
    return board_from_text(CANONICAL)


@pytest.fixture
def contradiction_board() -> Board:
    return board_from_text(CONTRADICTION)
