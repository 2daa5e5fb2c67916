#!/usr/bin/env python

"""
kakuro_solver/kakuro.py

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

**Solves Kakuro puzzles.**

Reads a board from text, fills it by plain backtracking (try 1-9 in each
white cell, in reading order, checking the across and down runs as we go),
and reports how long that took and how many recursive calls it needed.

"""

import argparse
import logging
import sys
import time
from typing import List, Optional

from cardinal_pythonlib.argparse_func import RawDescriptionArgumentDefaultsHelpFormatter  # noqa
from cardinal_pythonlib.logs import main_only_quicksetup_rootlogger

from kakuro_solver.board import Board, Square
from kakuro_solver.common import (
    BLOCKED,
    CLUE_SEPARATOR,
    EMPTY,
    EXIT_FAILURE,
    EXIT_SUCCESS,
    HASH,
    NEWLINE,
    NO_CLUE,
    NO_CLUE_ALT,
    PuzzleStructureError,
    run_guard,
    SolutionFailure,
    SPACE,
    UNKNOWN,
    UNKNOWN_ALT,
)
from kakuro_solver.solver import KakuroSolver
from kakuro_solver.validator import run_is_valid

log = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

DEMO_KAKURO_1 = """
# Wikipedia, "Kakuro" (7x7 example)

X     23/-  30/-  X     X     27/-  12/-  16/-
-/16  .     .     X     17/24 .     .     .
-/17  .     .     15/29 .     .     .     .
-/35  .     .     .     .     .     12/-  X
X     -/7   .     .     7/8   .     .     7/-
X     11/-  10/16 .     .     .     .     .
-/21  .     .     .     .     -/5   .     .
-/6   .     .     .     X     -/3   .     .
"""

FORMAT_HELP = f"""
- One row per line; squares separated by whitespace.
- Blank lines, and lines starting with {HASH}, are ignored.
- {BLOCKED} is a blocked square.
- {UNKNOWN} (or {UNKNOWN_ALT}) is a white square, to be filled with 1-9.
- d{CLUE_SEPARATOR}a is a clue: d is the sum of the run below, a the sum of
  the run to the right; use {NO_CLUE} (or {NO_CLUE_ALT}) for "no run".
"""


# =============================================================================
# Reading
# =============================================================================

def _parse_sum(part: str, token: str, line_number: int) -> Optional[int]:
    """
    One side of a clue: an integer, or ``None`` for "no run".
    """
    if part in (NO_CLUE, NO_CLUE_ALT):
        return None
    try:
        value = int(part)
    except ValueError:
        raise ValueError(f"Line {line_number}: bad sum {part!r} in clue "
                         f"{token!r}")
    if value < 0:
        raise ValueError(f"Line {line_number}: negative sum in clue "
                         f"{token!r}")
    return value or None


def parse_token(token: str, line_number: int = 0) -> Square:
    """
    Converts a single textual token to a :class:`Square`.
    """
    if token.upper() == BLOCKED:
        return Square.blocked()
    if token in (UNKNOWN, UNKNOWN_ALT):
        return Square.white()
    if CLUE_SEPARATOR in token:
        parts = token.split(CLUE_SEPARATOR)
        if len(parts) != 2:
            raise ValueError(f"Line {line_number}: bad clue {token!r}")
        down = _parse_sum(parts[0], token, line_number)
        across = _parse_sum(parts[1], token, line_number)
        return Square.clue(down=down, across=across)
    raise ValueError(f"Line {line_number}: unknown token {token!r}")


def parse_squares(string_version: str) -> List[List[Square]]:
    """
    Converts the textual board (see :data:`FORMAT_HELP`) to a rectangular
    grid of :class:`Square` objects.
    """
    lines = string_version.splitlines()
    rows = []  # type: List[List[Square]]
    width = None  # type: Optional[int]
    for line_number, line in enumerate(lines, start=1):
        line = line.strip()
        if not line or line.startswith(HASH):
            continue
        tokens = line.split()
        if width is None:
            width = len(tokens)
        elif len(tokens) != width:
            raise ValueError(
                f"Line {line_number} has {len(tokens)} squares; previous "
                f"lines had {width} ({line!r})")
        rows.append([parse_token(t, line_number) for t in tokens])
    if not rows:
        raise ValueError("No data")
    return rows


# =============================================================================
# Kakuro
# =============================================================================

class Kakuro(object):
    """
    Represents and solves Kakuro puzzles.
    """

    def __init__(self, string_version: str) -> None:
        """
        Args:
            string_version:
                String representation of the puzzle; see
                :data:`FORMAT_HELP`.

        Raises:
            ValueError: if the text cannot be read
            PuzzleStructureError: if it reads but is not a valid board
        """
        self.squares = parse_squares(string_version)
        self.board = Board(self.squares)
        self.solved = False
        self.call_count = 0
        self.elapsed_s = None  # type: Optional[float]
        self.working = []  # type: List[str]

    # -------------------------------------------------------------------------
    # String representations
    # -------------------------------------------------------------------------

    def __str__(self) -> str:
        return self.solution_str() if self.solved else self.problem_str()

    def problem_str(self) -> str:
        """
        Creates the string representation of the problem.
        """
        return self._make_string(show_values=False)

    def solution_str(self) -> str:
        """
        Creates the string representation of the current cell values.
        """
        return self._make_string(show_values=True)

    @staticmethod
    def _square_str(square: Square) -> str:
        if square.is_clue:
            down = NO_CLUE if square.down is None else str(square.down)
            across = NO_CLUE if square.across is None else str(square.across)
            return f"{down}{CLUE_SEPARATOR}{across}"
        return BLOCKED

    def _make_string(self, show_values: bool) -> str:
        board = self.board
        texts = []  # type: List[List[str]]
        for r in range(board.n_rows):
            row = []  # type: List[str]
            for c in range(board.n_cols):
                cell = board.cell_at(r, c)
                if cell is None:
                    row.append(self._square_str(self.squares[r][c]))
                elif show_values and cell.value != EMPTY:
                    row.append(str(cell.value))
                else:
                    row.append(UNKNOWN)
            texts.append(row)
        widths = [
            max(len(texts[r][c]) for r in range(board.n_rows))
            for c in range(board.n_cols)
        ]
        return NEWLINE.join(
            SPACE.join(
                texts[r][c].ljust(widths[c]) for c in range(board.n_cols)
            ).rstrip()
            for r in range(board.n_rows)
        )

    # -------------------------------------------------------------------------
    # Show your working
    # -------------------------------------------------------------------------

    def note(self, msg: str) -> None:
        """
        Save some working.
        """
        self.working.append(msg)
        log.info(msg)

    @property
    def n_cells(self) -> int:
        return len(self.board.all_assignable_cells())

    @property
    def elapsed_ms(self) -> Optional[float]:
        return None if self.elapsed_s is None else self.elapsed_s * 1000

    # -------------------------------------------------------------------------
    # Solve by backtracking
    # -------------------------------------------------------------------------

    def solve(self) -> bool:
        """
        Solves the problem, writing to :attr:`solved`, :attr:`call_count`,
        :attr:`elapsed_s`, and the board's cells.

        Returns: solved?
        """
        if self.solved:
            log.info("Already solved")
            return True
        n = self.n_cells
        self.note(f"White cells to fill: {n} "
                  f"(search space up to 9^{n})")
        solver = KakuroSolver(self.board)
        start = time.perf_counter()
        success = solver.solve()
        self.elapsed_s = time.perf_counter() - start
        self.call_count = solver.get_call_count()
        self.note(f"Time: {self.elapsed_ms:.3f} ms; "
                  f"recursive calls: {self.call_count}")
        if success:
            bad_runs = [
                run for run in self.board.all_runs() if not run_is_valid(run)
            ]
            if bad_runs:
                raise SolutionFailure(
                    f"Search reported success but runs are invalid: "
                    f"{bad_runs}")
            self.solved = True
            self.note("Solved via backtracking")
        else:
            self.note("No solution exists for this puzzle")
        return success


# =============================================================================
# Batteries of puzzles
# =============================================================================

def solve_file(filename: str) -> Kakuro:
    """
    Reads and solves a puzzle file.
    """
    log.info(f"Reading {filename}")
    with open(filename, "rt") as f:
        string_version = f.read()
    problem = Kakuro(string_version)
    log.info(f"Solving:\n{problem}")
    problem.solve()
    return problem


def run_battery(filenames: List[str]) -> int:
    """
    Solves several puzzle files, reporting each and then a summary. A file
    that cannot be read or is ill-formed counts as a failure but does not
    stop the battery.

    Returns: number of puzzles solved
    """
    n_solved = 0
    n_failed = 0
    total_s = 0.0
    total_calls = 0
    for i, filename in enumerate(filenames, start=1):
        log.info(f"Test #{i}: {filename}")
        try:
            problem = solve_file(filename)
        except (OSError, ValueError, PuzzleStructureError) as e:
            log.error(f"Could not load {filename}: {e}")
            n_failed += 1
            continue
        total_s += problem.elapsed_s or 0.0
        total_calls += problem.call_count
        if problem.solved:
            n_solved += 1
            log.info(f"Solution:\n{problem}")
        else:
            n_failed += 1
    log.info(
        f"Summary: {len(filenames)} puzzle(s); "
        f"{n_solved} solved; {n_failed} unsolved or in error; "
        f"total time {total_s * 1000:.3f} ms; "
        f"total recursive calls {total_calls}")
    return n_solved


# =============================================================================
# main
# =============================================================================

def main() -> None:
    """
    Command-line entry point.
    """
    cmd_battery = "battery"
    cmd_demo = "demo"
    cmd_solve = "solve"

    help_filename = (
        "Puzzle filename to read. Must contain text in format as above.")

    parser = argparse.ArgumentParser(
        formatter_class=RawDescriptionArgumentDefaultsHelpFormatter,
        description=(
            f"Solve Kakuro puzzles by backtracking. Format is:\n"
            f"{FORMAT_HELP}\n"
            f"Example:\n"
            f"{DEMO_KAKURO_1}"
        )
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Be verbose")
    subparsers = parser.add_subparsers(
        dest="command",
        help="Append --help for more help")

    parser_solve = subparsers.add_parser(cmd_solve, help="Solve from a file")
    parser_solve.add_argument(
        "filename", type=str, default="", help=help_filename)

    parser_battery = subparsers.add_parser(
        cmd_battery,
        help="Solve several files in turn, then summarize")
    parser_battery.add_argument(
        "filenames", type=str, nargs="+", help=help_filename)

    _parser_demo = subparsers.add_parser(cmd_demo, help="Run demo")

    args = parser.parse_args()
    main_only_quicksetup_rootlogger(level=logging.DEBUG if args.verbose
                                    else logging.INFO)

    if not args.command:
        print("Must specify command")
        sys.exit(EXIT_FAILURE)
    if args.command == cmd_battery:
        n_solved = run_battery(args.filenames)
        sys.exit(EXIT_SUCCESS if n_solved == len(args.filenames)
                 else EXIT_FAILURE)
    if args.command == cmd_demo:
        problem = Kakuro(DEMO_KAKURO_1)
        log.info(f"Solving:\n{problem}")
        problem.solve()
    else:
        problem = solve_file(args.filename)
    if not problem.solved:
        log.error("Unable to solve!")
        sys.exit(EXIT_FAILURE)
    log.info(f"Answer:\n{problem}")
    sys.exit(EXIT_SUCCESS)


def command_line_entry_point() -> None:
    run_guard(main)


# =============================================================================
# Command-line entry point
# =============================================================================

if __name__ == "__main__":
    run_guard(main)
