# -*- coding: utf-8 -*-
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
Reader class to process delimited ballot files.

A ballot file is unquoted delimited text.  The first line is a header
with one candidate name per column.  Each following line is one ballot,
where each cell is either empty (the candidate is unranked) or the rank
the voter gave the candidate in that column (1 is the most preferred).

Lines that are entirely blank are skipped.  Cells are stripped of
surrounding whitespace, but a line is otherwise split as is: rows are
neither padded nor truncated to the header width, since checking the
width is part of validating the ballots.

A BallotLines object maintains a context with delimiter and line number,
and records the file line number of each row it yields.
"""

import logging

from irvr.utils import UTF8_ENCODING


_log = logging.getLogger(__name__)

COMMA_CHAR = ','
TAB_CHAR = '\t'

DEFAULT_DELIMITER = COMMA_CHAR


def split_line(line, delimiter=None):
    """
    Remove the line ending, split fields by the delimiter, and return a
    list of stripped strings.
    """
    if delimiter is None:
        delimiter = DEFAULT_DELIMITER

    line = line.rstrip('\r\n')

    return [f.strip() for f in line.split(delimiter)]


def read_rows(path, delimiter=None):
    """
    Read a ballot file, and return (rows, line_nums).

    Returns:
      rows: the non-blank rows as lists of strings, starting with the
        header row.
      line_nums: the 1-based file line number of each row, so problems
        can be reported against the file even when blank lines were
        skipped.
    """
    with BallotReader(path, delimiter=delimiter) as lines:
        rows = list(lines)
        line_nums = lines.line_nums

    _log.info(f'read {len(rows)} rows from: {path}')

    return (rows, line_nums)


class BallotLines:

    def __init__(self, lines, path=None, delimiter=None):
        """
        Args:
          lines: an iterable of lines.
          path: the path for logging purposes.
          delimiter: the cell separator.  Defaults to a comma.
        """
        if delimiter is None:
            delimiter = DEFAULT_DELIMITER

        self.lines = lines
        self.path = path
        self.delimiter = delimiter

        # The line number of each row yielded so far.
        self.line_nums = []
        self.line_num = 0
        self.line = None

    def __repr__(self):
        return f'<BallotLines: {self.path!r} delimiter={self.delimiter!r}>'

    def _store_line(self, line):
        self.line_num += 1
        self.line = line.rstrip()

    def __iter__(self):
        for line in self.lines:
            self._store_line(line)
            if not self.line:
                _log.debug(f'skipping blank line {self.line_num} in: {self.path}')
                continue

            self.line_nums.append(self.line_num)

            yield split_line(line, delimiter=self.delimiter)


class BallotReader:

    """
    The BallotReader class opens a ballot file for reading.

    Attributes:
        path:       the path to the file
        delimiter:  delimiter separating fields
    """

    def __init__(self, path, delimiter=None):
        """
        Args:
          path: the path to open, as a path-like object.
          delimiter: the cell separator.  Defaults to a comma.
        """
        self.delimiter = delimiter
        self.path = path
        self.stream = None

    def __enter__(self):
        path = self.path
        _log.info(f'reading ballots from: {path}')
        stream = open(path, encoding=UTF8_ENCODING)
        self.stream = stream

        return BallotLines(stream, path=path, delimiter=self.delimiter)

    def __exit__(self, type, value, traceback):
        """
        Defines an context manager exit to so this can be used in a with/as
        """
        self.stream.close()
        self.stream = None

    def __repr__(self):
        return f'<BallotReader {self.path}>'
