#
# IRV Reporter (IRVR) - instant-runoff election report generator
# Copyright (C) 2026  The IRVR Authors
#
# This file is part of IRV Reporter (IRVR).
#
# IRVR is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
#

"""
Validating and normalizing ranked ballots.

The input is a table of strings: the first row holds the candidate names
and each following row is a ballot, with one cell per candidate.  A cell
is either empty (the candidate is unranked) or a rank, where 1 is the
most preferred.

A candidate is identified by the (0-based) index of its column.  A
normalized ballot is a tuple of candidates, highest preference first.
"""

from collections import namedtuple
import logging


_log = logging.getLogger(__name__)

# The kinds of RowProblem.
TOO_MANY_COLUMNS = 'too_many_columns'
INVALID_RANKINGS = 'invalid_rankings'
NO_CANDIDATES = 'no_candidates'
NO_BALLOTS = 'no_ballots'

NO_CANDIDATES_MESSAGE = 'The header row has no candidate names.'
NO_BALLOTS_MESSAGE = 'There are no ballots ranking any candidate.'

# Attributes:
#   line_num: the 1-based line number of the row, counting the header row
#     as line 1, or None if the problem is not about a particular row.
#   kind: one of the kind constants above.
#   message: a human-readable description.
RowProblem = namedtuple('RowProblem', 'line_num, kind, message')


class BallotError(ValueError):

    """
    Raised when the input can't be tabulated.

    Attributes:
      problems: the list of RowProblem objects found.
    """

    def __init__(self, problems):
        self.problems = list(problems)
        super().__init__(self.format_problems())

    def format_problems(self):
        return '\n'.join(problem.message for problem in self.problems)


def parse_rank(cell):
    """
    Return the rank in a non-empty cell as an int, or None if the cell
    doesn't hold an integer written with ASCII digits (and an optional
    leading minus sign).
    """
    # int() alone would also accept forms like "1_0", "+1" and "١".
    digits = cell[1:] if cell.startswith('-') else cell
    if not (digits.isascii() and digits.isdigit()):
        return None

    return int(cell)


def get_ranks(row):
    """
    Return the ranks in a ballot row as a list of (candidate, rank) pairs,
    skipping empty cells.  The rank is None for cells that aren't integers.
    """
    return [(candidate, parse_rank(cell)) for candidate, cell in enumerate(row) if cell]


def check_row(row, candidate_count, line_num):
    """
    Return the list of RowProblem objects for a single ballot row.

    Args:
      row: the cells of the row, as a list of strings.
      candidate_count: the number of candidates in the header.
      line_num: the line number to report.
    """
    problems = []

    # Trailing empty cells are okay.
    if any(row[candidate_count:]):
        msg = f'Line #{line_num} has more columns than there are candidates.'
        problems.append(RowProblem(line_num, TOO_MANY_COLUMNS, msg))

    # Sorted from smallest to largest, the ranks should be 1, 2, 3...
    ranks = [rank for candidate, rank in get_ranks(row)]
    if None in ranks or sorted(ranks) != list(range(1, len(ranks) + 1)):
        msg = f'Line #{line_num} has invalid rankings.'
        problems.append(RowProblem(line_num, INVALID_RANKINGS, msg))

    return problems


def check_rows(rows, line_nums=None):
    """
    Check a table of rows (starting with the header row), and return
    the list of RowProblem objects found.  An empty list means the rows
    can be normalized.

    Args:
      rows: a list of rows, each a list of strings.
      line_nums: the file line number of each row, for reporting.
        Defaults to 1, 2, 3, ..., i.e. a file with no blank lines.
    """
    if not rows or not any(rows[0]):
        return [RowProblem(None, NO_CANDIDATES, NO_CANDIDATES_MESSAGE)]

    if line_nums is None:
        line_nums = range(1, len(rows) + 1)

    headers = rows[0]
    candidate_count = len(headers)

    problems = []
    for line_num, row in zip(line_nums[1:], rows[1:]):
        problems.extend(check_row(row, candidate_count, line_num=line_num))

    if problems:
        return problems

    if not any(any(row) for row in rows[1:]):
        problems.append(RowProblem(None, NO_BALLOTS, NO_BALLOTS_MESSAGE))

    return problems


def make_ballot(row):
    """
    Convert a valid ballot row to a ballot: a tuple of candidates,
    highest preference first.
    """
    ballot = [None] * len([cell for cell in row if cell])
    for candidate, rank in get_ranks(row):
        ballot[rank - 1] = candidate

    return tuple(ballot)


def make_row(ballot, candidate_count):
    """
    Convert a ballot back to a row of cells (the inverse of make_ballot()).
    """
    row = candidate_count * ['']
    for rank, candidate in enumerate(ballot, start=1):
        row[candidate] = str(rank)

    return row


def normalize(rows, line_nums=None):
    """
    Validate a table of rows and return (candidate_names, ballots).

    Raises BallotError with every problem found if any row is invalid,
    or if there is nothing to tabulate.

    Args:
      rows: a list of rows, each a list of strings.  The first row is
        the header row of candidate names.
      line_nums: the file line number of each row (see check_rows()).

    Returns:
      candidate_names: the list of candidate names, indexed by candidate.
      ballots: a list with one ballot per ballot row.  A row with no
        rankings gives an empty ballot.
    """
    problems = check_rows(rows, line_nums=line_nums)
    if problems:
        for problem in problems:
            _log.debug(f'invalid input: {problem}')
        raise BallotError(problems)

    candidate_names = list(rows[0])
    ballots = [make_ballot(row) for row in rows[1:]]
    _log.info(f'normalized {len(ballots)} ballots for {len(candidate_names)} candidates')

    return (candidate_names, ballots)
