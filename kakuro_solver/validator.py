#!/usr/bin/env python

"""
kakuro_solver/validator.py

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

Checks on whether a digit may go into a run. None of these modify anything.

"""

from kakuro_solver.board import Board, Cell, Run
from kakuro_solver.common import MAX_DIGIT, MIN_DIGIT


def can_place(run: Run, value: int) -> bool:
    """
    May ``value`` go into an empty cell of ``run``, given what is already
    there?

    - no repeats within a run;
    - the sum may never exceed the target;
    - if this fills the last empty cell, the sum must hit the target exactly.
    """
    if not MIN_DIGIT <= value <= MAX_DIGIT:
        return False
    assigned = run.assigned_values()
    if value in assigned:
        return False
    new_sum = sum(assigned) + value
    if new_sum > run.target:
        return False
    n_empty = len(run.cells) - len(assigned)
    if n_empty <= 1 and new_sum != run.target:
        return False
    return True


def can_place_in_cell(board: Board, cell: Cell, value: int) -> bool:
    """
    A digit is legal for a cell only if both its across and its down run
    accept it.
    """
    return (can_place(board.horizontal_run_of(cell), value) and
            can_place(board.vertical_run_of(cell), value))


def run_is_valid(run: Run) -> bool:
    """
    Final check of a complete run: full, right sum, no repeats.
    """
    return run.is_satisfied()
