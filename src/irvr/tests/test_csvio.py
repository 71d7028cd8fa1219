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
Test the irvr.csvio module.
"""

from pathlib import Path
from tempfile import TemporaryDirectory
from textwrap import dedent
from unittest import TestCase

import irvr.csvio as csvio
from irvr.csvio import BallotLines, BallotReader, TAB_CHAR


class CsvioModuleTest(TestCase):

    """
    Test the functions in irvr.csvio.
    """

    def test_split_line(self):
        cases = [
            ('A,B,C\n', None, ['A', 'B', 'C']),
            ('1,,\r\n', None, ['1', '', '']),
            (' 1 , 2 ,\n', None, ['1', '2', '']),
            ('1\t\t2\n', TAB_CHAR, ['1', '', '2']),
            # Commas are ordinary characters in a tab-delimited file.
            ('Smith, Jo\tLee\n', TAB_CHAR, ['Smith, Jo', 'Lee']),
        ]
        for line, delimiter, expected in cases:
            with self.subTest(line=line, delimiter=delimiter):
                actual = csvio.split_line(line, delimiter=delimiter)
                self.assertEqual(actual, expected)

    def test_read_rows(self):
        text = dedent("""\
        A,B,C
        1,2,

        ,,1
        \x20\x20\x20
        1
        1,2,3,4
        """)
        with TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / 'ballots.csv'
            path.write_text(text, encoding='utf-8')
            rows, line_nums = csvio.read_rows(path)

        expected = [
            ['A', 'B', 'C'],
            ['1', '2', ''],
            ['', '', '1'],
            # Rows aren't padded or truncated to the header width.
            ['1'],
            ['1', '2', '3', '4'],
        ]
        self.assertEqual(rows, expected)
        # Blank lines are skipped but still counted.
        self.assertEqual(line_nums, [1, 2, 4, 6, 7])


class BallotLinesTest(TestCase):

    """
    Test the BallotLines class.
    """

    def test_line_nums(self):
        lines = ['\n', 'A,B\n', '1,\n', '\n', ',1\n']
        ballot_lines = BallotLines(lines, path='test.csv')
        rows = list(ballot_lines)

        self.assertEqual(rows, [['A', 'B'], ['1', ''], ['', '1']])
        self.assertEqual(ballot_lines.line_nums, [2, 3, 5])
        self.assertEqual(ballot_lines.line_num, 5)

    def test_repr(self):
        ballot_lines = BallotLines([], path='test.csv')
        self.assertEqual(repr(ballot_lines), "<BallotLines: 'test.csv' delimiter=','>")


class BallotReaderTest(TestCase):

    """
    Test the BallotReader class.
    """

    def test(self):
        text = dedent("""\
        Alice\tBob\tCathy
        1\t2\t
        \t\t1
        """)
        expected = [
            ['Alice', 'Bob', 'Cathy'],
            ['1', '2', ''],
            ['', '', '1'],
        ]
        with TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / 'ballots.tsv'
            path.write_text(text, encoding='utf-8')
            with BallotReader(path, delimiter=TAB_CHAR) as lines:
                actual = list(lines)

        self.assertEqual(actual, expected)
