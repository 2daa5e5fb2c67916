#!/usr/bin/env python

"""
kakuro_solver/board.py

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

**The Kakuro board: cells, runs, and which runs each cell belongs to.**

A board is built from a rectangular grid of :class:`Square` objects (as
produced by the text loader). Each white square becomes a :class:`Cell`. Each
clue square with an across sum owns the contiguous white cells to its right;
each clue square with a down sum owns the contiguous white cells below it.
Every cell must end up in exactly one horizontal and one vertical run, or the
board is rejected with :exc:`PuzzleStructureError`.

"""

import logging
from typing import Iterable, List, Optional, Sequence

from kakuro_solver.common import (
    ACROSS,
    DOWN,
    EMPTY,
    MAX_DIGIT,
    MAX_RUN_LENGTH,
    MAX_TARGET,
    MIN_TARGET,
    PuzzleStructureError,
    describe_position,
)

log = logging.getLogger(__name__)


# =============================================================================
# Square
# =============================================================================

class Square(object):
    """
    One position of the parsed grid, before any runs are worked out.
    """
    BLOCKED = "blocked"
    WHITE = "white"
    CLUE = "clue"

    def __init__(self, kind: str,
                 down: Optional[int] = None,
                 across: Optional[int] = None) -> None:
        """
        Args:
            kind:
                one of :attr:`BLOCKED`, :attr:`WHITE`, :attr:`CLUE`
            down:
                for clues: target for the run below, or ``None``
            across:
                for clues: target for the run to the right, or ``None``
        """
        assert kind in (self.BLOCKED, self.WHITE, self.CLUE), (
            f"Bad square kind: {kind!r}"
        )
        self.kind = kind
        self.down = down
        self.across = across

    def __repr__(self) -> str:
        return (f"Square(kind={self.kind!r}, down={self.down!r}, "
                f"across={self.across!r})")

    @classmethod
    def blocked(cls) -> "Square":
        return cls(cls.BLOCKED)

    @classmethod
    def white(cls) -> "Square":
        return cls(cls.WHITE)

    @classmethod
    def clue(cls, down: Optional[int] = None,
             across: Optional[int] = None) -> "Square":
        return cls(cls.CLUE, down=down, across=across)

    @property
    def is_white(self) -> bool:
        return self.kind == self.WHITE

    @property
    def is_clue(self) -> bool:
        return self.kind == self.CLUE


# =============================================================================
# Cell
# =============================================================================

class Cell(object):
    """
    A single assignable position. ``value`` is 0 when unassigned.
    """

    def __init__(self, row_zb: int, col_zb: int) -> None:
        self.row = row_zb
        self.col = col_zb
        self.value = EMPTY
        self.horizontal_run = None  # type: Optional[Run]
        self.vertical_run = None  # type: Optional[Run]

    def __repr__(self) -> str:
        return f"Cell(row={self.row}, col={self.col}, value={self.value})"

    def __str__(self) -> str:
        return describe_position(self.row, self.col)

    @property
    def assigned(self) -> bool:
        return self.value != EMPTY


# =============================================================================
# Run
# =============================================================================

class Run(object):
    """
    An ordered group of cells that must sum to ``target`` without repeating
    a digit. The run refers to the board's cells; it does not own them.
    """

    def __init__(self, target: int, cells: Sequence[Cell],
                 direction: str = ACROSS) -> None:
        assert direction in (ACROSS, DOWN), f"Bad direction: {direction!r}"
        self.target = target
        self.cells = list(cells)  # type: List[Cell]
        self.direction = direction
        where = str(self.cells[0]) if self.cells else "?"
        if not 1 <= len(self.cells) <= MAX_RUN_LENGTH:
            raise PuzzleStructureError(
                f"The {direction} run starting at {where} has "
                f"{len(self.cells)} cells; must have 1-{MAX_RUN_LENGTH}")
        if not MIN_TARGET <= target <= MAX_TARGET:
            raise PuzzleStructureError(
                f"The {direction} run starting at {where} has target "
                f"{target}; must be {MIN_TARGET}-{MAX_TARGET}")

    def __repr__(self) -> str:
        return (f"Run(target={self.target}, direction={self.direction!r}, "
                f"cells={self.cells!r})")

    def __str__(self) -> str:
        return (f"{self.direction} run of {len(self.cells)} from "
                f"{self.cells[0]} = {self.target}")

    def __len__(self) -> int:
        return len(self.cells)

    def assigned_values(self) -> List[int]:
        """
        Values of the cells that currently hold a digit, in run order.
        """
        return [cell.value for cell in self.cells if cell.value != EMPTY]

    def n_empty(self) -> int:
        """
        Number of cells still unassigned.
        """
        return sum(1 for cell in self.cells if cell.value == EMPTY)

    def current_sum(self) -> int:
        return sum(self.assigned_values())

    def has_duplicate(self) -> bool:
        """
        Do two or more cells currently share the same (nonzero) digit?
        """
        values = self.assigned_values()
        return len(values) != len(set(values))

    def is_overfull(self) -> bool:
        """
        Early-prune signal: the sum is already too big, or the run is full
        and the sum is wrong.
        """
        total = self.current_sum()
        if total > self.target:
            return True
        return self.n_empty() == 0 and total != self.target

    def is_satisfied(self) -> bool:
        """
        Every cell assigned, no repeats, and the sum is right.
        """
        return (
            self.n_empty() == 0 and
            not self.has_duplicate() and
            self.current_sum() == self.target
        )


# =============================================================================
# Board
# =============================================================================

class Board(object):
    """
    Grid topology, run membership, and whole-board validation.
    """

    def __init__(self, squares: Sequence[Sequence[Square]]) -> None:
        """
        Args:
            squares:
                rectangular grid, indexed as ``squares[row_zb][col_zb]``

        Raises:
            PuzzleStructureError: if the grid is not a valid Kakuro layout
        """
        self.n_rows = len(squares)
        self.n_cols = len(squares[0]) if squares else 0
        for row_zb, row in enumerate(squares):
            if len(row) != self.n_cols:
                raise PuzzleStructureError(
                    f"Grid is not rectangular: row {row_zb + 1} has "
                    f"{len(row)} squares, expected {self.n_cols}")
        self.squares = [list(row) for row in squares]  # type: List[List[Square]]  # noqa

        # Cells, in row-major order. This order is the solver's search order.
        self.cells = [
            [
                Cell(r, c) if self.squares[r][c].is_white else None
                for c in range(self.n_cols)
            ] for r in range(self.n_rows)
        ]  # type: List[List[Optional[Cell]]]
        # ... index as: self.cells[row_zb][col_zb]
        self._assignable = [
            cell
            for row in self.cells
            for cell in row
            if cell is not None
        ]  # type: List[Cell]

        self.horizontal_runs = []  # type: List[Run]
        self.vertical_runs = []  # type: List[Run]
        self._build_runs()
        self._check_membership()
        log.debug(f"Board {self.n_rows}x{self.n_cols}: "
                  f"{len(self._assignable)} white cells, "
                  f"{len(self.horizontal_runs)} across runs, "
                  f"{len(self.vertical_runs)} down runs")

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def _collect(self, row_zb: int, col_zb: int,
                 d_row: int, d_col: int) -> List[Cell]:
        """
        Collects the contiguous white cells starting one step from the
        given square, in the given direction.
        """
        cells = []  # type: List[Cell]
        r, c = row_zb + d_row, col_zb + d_col
        while r < self.n_rows and c < self.n_cols:
            cell = self.cells[r][c]
            if cell is None:
                break
            cells.append(cell)
            r += d_row
            c += d_col
        return cells

    def _build_runs(self) -> None:
        for r in range(self.n_rows):
            for c in range(self.n_cols):
                square = self.squares[r][c]
                if not square.is_clue:
                    continue
                if square.across:
                    cells = self._collect(r, c, 0, 1)
                    if cells:
                        run = Run(square.across, cells, ACROSS)
                        self._claim(run)
                        self.horizontal_runs.append(run)
                    else:
                        log.debug(f"Across clue at {describe_position(r, c)} "
                                  f"has no cells; ignored")
                if square.down:
                    cells = self._collect(r, c, 1, 0)
                    if cells:
                        run = Run(square.down, cells, DOWN)
                        self._claim(run)
                        self.vertical_runs.append(run)
                    else:
                        log.debug(f"Down clue at {describe_position(r, c)} "
                                  f"has no cells; ignored")

    @staticmethod
    def _claim(run: Run) -> None:
        """
        Records the run against each of its cells.
        """
        for cell in run.cells:
            if run.direction == ACROSS:
                cell.horizontal_run = run
            else:
                cell.vertical_run = run

    def _check_membership(self) -> None:
        for cell in self._assignable:
            missing = []  # type: List[str]
            if cell.horizontal_run is None:
                missing.append(ACROSS)
            if cell.vertical_run is None:
                missing.append(DOWN)
            if missing:
                raise PuzzleStructureError(
                    f"White cell at {cell} has no "
                    f"{' or '.join(missing)} run")

    # -------------------------------------------------------------------------
    # Access
    # -------------------------------------------------------------------------

    def cell_at(self, row_zb: int, col_zb: int) -> Optional[Cell]:
        """
        The assignable cell at a position, or ``None`` for blocked/clue
        squares (and for positions off the board).
        """
        if 0 <= row_zb < self.n_rows and 0 <= col_zb < self.n_cols:
            return self.cells[row_zb][col_zb]
        return None

    @staticmethod
    def horizontal_run_of(cell: Cell) -> Run:
        return cell.horizontal_run

    @staticmethod
    def vertical_run_of(cell: Cell) -> Run:
        return cell.vertical_run

    def all_assignable_cells(self) -> List[Cell]:
        """
        All white cells, in row-major order (top row first, left to right).
        The solver visits cells in exactly this order.
        """
        return list(self._assignable)

    def all_runs(self) -> Iterable[Run]:
        yield from self.horizontal_runs
        yield from self.vertical_runs

    def values(self) -> List[List[Optional[int]]]:
        """
        Snapshot of current values; ``None`` where there is no cell.
        """
        return [
            [cell.value if cell is not None else None for cell in row]
            for row in self.cells
        ]

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    def reset(self) -> None:
        """
        Clears every cell back to unassigned.
        """
        for cell in self._assignable:
            cell.value = EMPTY

    def set_values(self, values: Sequence[Sequence[Optional[int]]]) -> None:
        """
        Writes values into the cells, e.g. from :meth:`values`. Entries at
        non-cell positions are ignored.
        """
        for cell in self._assignable:
            value = values[cell.row][cell.col]
            assert value is not None and 0 <= value <= MAX_DIGIT, (
                f"Bad value for {cell}: {value!r}"
            )
            cell.value = value

    def is_complete(self) -> bool:
        """
        Does every run, in both directions, hit its target with no repeats?
        Used as a final check of a solution, not during the search.
        """
        return all(run.is_satisfied() for run in self.all_runs())
