#!/usr/bin/env python

"""
kakuro_solver/solver.py

===============================================================================

    Copyright (C) 2019-2019 Rudolf Cardinal (rudolf@pobox.com).

    This is free software: you can redistribute it and/or modify
    it under the terms of the GNU General Public License as published by
    the Free Software Foundation, either version 3 of the License, or
    (at your option) any later version.

    This software is distributed in the hope that it will be useful,
    but WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
    GNU General Public License for more details.

    You should have received a copy of the GNU General Public License
    along with this software. If not, see <http://www.gnu.org/licenses/>.

===============================================================================

**Backtracking search for Kakuro.**

Cells are visited in the board's fixed (row-major) order and digits are tried
in ascending order, so the solution found, and the number of calls taken to
find it, are reproducible. Each placement is checked against both of the
cell's runs before we go deeper; a branch that fails undoes its own
placement.

"""

import logging
import sys
from typing import List, Optional

from kakuro_solver.board import Board, Cell
from kakuro_solver.common import DIGITS, EMPTY
from kakuro_solver.validator import can_place_in_cell

log = logging.getLogger(__name__)

# Stack frames we allow for things other than the search itself
RECURSION_HEADROOM = 100


# =============================================================================
# KakuroSolver
# =============================================================================

class KakuroSolver(object):
    """
    Solves a :class:`Board` in place by depth-first backtracking.
    """

    def __init__(self, board: Board) -> None:
        self.board = board
        self.cells = board.all_assignable_cells()  # type: List[Cell]
        self.call_count = 0
        self.result = None  # type: Optional[bool]

    def get_call_count(self) -> int:
        """
        Number of invocations of the recursive search function, including
        the final one that finds every cell filled.
        """
        return self.call_count

    def solve(self) -> bool:
        """
        Fills the board. Returns ``True`` if a solution was found (the cells
        then hold it), or ``False`` if there is none (the cells are then all
        empty again).
        """
        if self.result is not None:
            log.info("Already solved")
            return self.result
        n = len(self.cells)
        needed = n + RECURSION_HEADROOM
        if sys.getrecursionlimit() < needed:
            sys.setrecursionlimit(needed)
        log.debug(f"Searching {n} cells")
        self.result = self._search(0)
        log.debug(f"Search {'succeeded' if self.result else 'failed'} "
                  f"after {self.call_count} calls")
        return self.result

    def _search(self, index: int) -> bool:
        """
        Tries to fill cells ``index`` onwards.
        """
        self.call_count += 1
        if index == len(self.cells):
            return True
        cell = self.cells[index]
        for digit in DIGITS:
            if not can_place_in_cell(self.board, cell, digit):
                continue
            cell.value = digit
            if self._search(index + 1):
                return True
            cell.value = EMPTY  # undo
        return False
