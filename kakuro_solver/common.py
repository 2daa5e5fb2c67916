#!/usr/bin/env python

"""
kakuro_solver/common.py

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

Common constants and functions for the Kakuro solver.

"""

import logging
import sys
import traceback
from typing import Callable

log = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# Tokens in the textual board format
BLOCKED = "X"
UNKNOWN = "."
UNKNOWN_ALT = "0"
CLUE_SEPARATOR = "/"
NO_CLUE = "-"
NO_CLUE_ALT = "0"
HASH = "#"

NEWLINE = "\n"
SPACE = " "

# Digits and run limits
EMPTY = 0
MIN_DIGIT = 1
MAX_DIGIT = 9
DIGITS = tuple(range(MIN_DIGIT, MAX_DIGIT + 1))
MAX_RUN_LENGTH = len(DIGITS)
MIN_TARGET = MIN_DIGIT
MAX_TARGET = sum(DIGITS)  # 45

# Directions
ACROSS = "across"
DOWN = "down"

EXIT_FAILURE = 1
EXIT_SUCCESS = 0


# =============================================================================
# Exceptions
# =============================================================================

class PuzzleStructureError(Exception):
    """
    The puzzle is ill-formed: e.g. a white cell that does not belong to both
    a horizontal and a vertical run. This is distinct from a well-formed
    puzzle that has no solution, which is not an error.
    """
    pass


class SolutionFailure(Exception):
    """
    The search reported success but the filled board breaks a run.
    """
    pass


# =============================================================================
# Generic helper functions
# =============================================================================

def run_guard(function: Callable[[], None]) -> None:
    try:
        function()
    except Exception as e:
        log.critical(str(e))
        traceback.print_exc()
        sys.exit(EXIT_FAILURE)


def describe_position(row_zb: int, col_zb: int) -> str:
    """
    Human-readable (one-based) description of a grid position.
    """
    return f"(row={row_zb + 1}, col={col_zb + 1})"
