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
Test the irvr.main module.
"""

from contextlib import redirect_stderr, redirect_stdout
from datetime import datetime
import io
import json
from pathlib import Path
from tempfile import TemporaryDirectory
from textwrap import dedent
from unittest import TestCase

from irvr.ballots import BallotError
import irvr.main as main
from irvr.main import Config
import irvr.tests.testhelpers as testhelpers


BUILD_TIME = datetime(2026, 10, 19, 12, 0, 0)


class ConfigTest(TestCase):

    """
    Test the Config class.
    """

    def test_defaults(self):
        config = Config()
        self.assertEqual(config.title, 'Instant Runoff Results')
        self.assertEqual(config.delimiter, ',')
        self.assertEqual(config.page_size, 'letter')
        self.assertEqual(config.lang, 'en')

    def test_config_file(self):
        with TemporaryDirectory() as temp_dir:
            temp_dir = Path(temp_dir)
            path = temp_dir / 'config.yaml'
            path.write_text(dedent("""\
            title: City Council
            include_config: defaults.yaml
            """))
            (temp_dir / 'defaults.yaml').write_text(dedent("""\
            title: Ignored Title
            page_size: A4
            """))
            config = Config(path)

        # The including file takes precedence over the included file.
        self.assertEqual(config.title, 'City Council')
        self.assertEqual(config.page_size, 'A4')
        self.assertEqual(config.delimiter, ',')

    def test_config_file__empty(self):
        with TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / 'config.yaml'
            path.write_text('')
            config = Config(path)

        self.assertEqual(config.title, 'Instant Runoff Results')

    def test_config_file__invalid(self):
        cases = [
            ('unknown key', 'color: blue\n'),
            ('not a mapping', '- title\n'),
        ]
        for label, text in cases:
            with self.subTest(label=label):
                with TemporaryDirectory() as temp_dir:
                    path = Path(temp_dir) / 'config.yaml'
                    path.write_text(text)
                    with self.assertRaises(RuntimeError):
                        Config(path)


class MainModuleTest(TestCase):

    """
    Test the functions in irvr.main.
    """

    def test_parse_args(self):
        ns = main.parse_args(['--markdown', 'out.md', '-v', 'in.csv', 'out.pdf'])
        self.assertEqual(ns.input_path, 'in.csv')
        self.assertEqual(ns.output_path, 'out.pdf')
        self.assertEqual(ns.markdown_path, 'out.md')
        self.assertTrue(ns.verbose)
        self.assertIsNone(ns.config_path)
        self.assertIsNone(ns.delimiter)

    def test_run(self):
        with TemporaryDirectory() as temp_dir:
            temp_dir = Path(temp_dir)
            input_path = temp_dir / 'ballots.csv'
            input_path.write_text(testhelpers.MULTI_PHASE_CSV)
            output_path = temp_dir / 'report.pdf'
            markdown_path = temp_dir / 'report.md'

            actual = main.run(input_path, output_path, markdown_path=markdown_path,
                              build_time=BUILD_TIME, deterministic=True)

            report = markdown_path.read_text()
            pdf_bytes = output_path.read_bytes()

        expected = dict(output_path=str(output_path), phases=3, tied=None, winner='A')
        self.assertEqual(actual, expected)
        self.assertEqual(report, testhelpers.MULTI_PHASE_REPORT)
        self.assertTrue(pdf_bytes.startswith(b'%PDF'))

    def test_run__tie(self):
        with TemporaryDirectory() as temp_dir:
            temp_dir = Path(temp_dir)
            input_path = temp_dir / 'ballots.csv'
            input_path.write_text(testhelpers.TIE_CSV)
            output_path = temp_dir / 'report.pdf'

            actual = main.run(input_path, output_path, build_time=BUILD_TIME)

        self.assertEqual(actual['tied'], ['A', 'B'])
        self.assertIsNone(actual['winner'])

    def test_run__invalid_ballots(self):
        text = dedent("""\
        A,B,C
        1,1,
        1,,
        1,3,
        """)
        with TemporaryDirectory() as temp_dir:
            temp_dir = Path(temp_dir)
            input_path = temp_dir / 'ballots.csv'
            input_path.write_text(text)
            output_path = temp_dir / 'report.pdf'
            markdown_path = temp_dir / 'report.md'

            with self.assertRaises(BallotError) as cm:
                main.run(input_path, output_path, markdown_path=markdown_path)

            # Nothing is written.
            self.assertFalse(output_path.exists())
            self.assertFalse(markdown_path.exists())

        lines = [problem.line_num for problem in cm.exception.problems]
        self.assertEqual(lines, [2, 4])

    def test_main(self):
        with TemporaryDirectory() as temp_dir:
            temp_dir = Path(temp_dir)
            input_path = temp_dir / 'ballots.csv'
            input_path.write_text(testhelpers.IMMEDIATE_WIN_CSV)
            output_path = temp_dir / 'report.pdf'

            argv = ['--build-time', '2026-10-19 12:00:00', str(input_path), str(output_path)]
            stdout = io.StringIO()
            with redirect_stdout(stdout):
                main.main(argv)

            self.assertTrue(output_path.exists())

        output_data = json.loads(stdout.getvalue())
        self.assertEqual(output_data['winner'], 'A')
        self.assertEqual(output_data['phases'], 1)

    def test_main__invalid_ballots(self):
        text = dedent("""\
        A,B
        1,,3
        2,2
        """)
        with TemporaryDirectory() as temp_dir:
            temp_dir = Path(temp_dir)
            input_path = temp_dir / 'ballots.csv'
            input_path.write_text(text)
            output_path = temp_dir / 'report.pdf'

            stderr = io.StringIO()
            with redirect_stderr(stderr):
                with self.assertRaises(SystemExit) as cm:
                    main.main([str(input_path), str(output_path)])

            self.assertFalse(output_path.exists())

        self.assertEqual(cm.exception.code, 1)
        expected = dedent("""\
        Line #2 has more columns than there are candidates.
        Line #2 has invalid rankings.
        Line #3 has invalid rankings.
        """)
        self.assertEqual(stderr.getvalue(), expected)

    def test_main__invalid_ballots_after_blank_lines(self):
        # Problems are reported against the file's own line numbers.
        text = 'A,B\n\n1,1\n1,\n\n2,\n'
        with TemporaryDirectory() as temp_dir:
            temp_dir = Path(temp_dir)
            input_path = temp_dir / 'ballots.csv'
            input_path.write_text(text)
            output_path = temp_dir / 'report.pdf'

            stderr = io.StringIO()
            with redirect_stderr(stderr):
                with self.assertRaises(SystemExit):
                    main.main([str(input_path), str(output_path)])

        expected = dedent("""\
        Line #3 has invalid rankings.
        Line #6 has invalid rankings.
        """)
        self.assertEqual(stderr.getvalue(), expected)
