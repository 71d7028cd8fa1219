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
Test the irvr.writers.pdfwriting module.
"""

from datetime import datetime
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest import TestCase

from reportlab.lib.pagesizes import A4, letter
from reportlab.platypus import ListFlowable, Paragraph, Table

from irvr.reporting import ResultsTable, TableRow
import irvr.templating as templating
import irvr.tests.testhelpers as testhelpers
import irvr.writers.pdfwriting as pdfwriting
from irvr.writers.pdfwriting import DocumentTemplate


class PdfWritingModuleTest(TestCase):

    """
    Test the functions in irvr.writers.pdfwriting.
    """

    def test_get_page_size(self):
        cases = [
            (None, letter),
            ('letter', letter),
            ('A4', A4),
            ('a4', A4),
        ]
        for name, expected in cases:
            with self.subTest(name=name):
                actual = pdfwriting.get_page_size(name)
                self.assertEqual(actual, expected)

    def test_get_page_size__unsupported(self):
        with self.assertRaises(RuntimeError):
            pdfwriting.get_page_size('legal')

    def test_strip_heading_marker(self):
        cases = [
            ('# Instant Runoff Results\n', 'Instant Runoff Results'),
            ('## Phase 2\n', 'Phase 2'),
        ]
        for text, expected in cases:
            with self.subTest(text=text):
                actual = pdfwriting.strip_heading_marker(text)
                self.assertEqual(actual, expected)

    def test_make_table_data(self):
        section = ResultsTable((
            TableRow('Alice', percent=200 / 3, count=2),
            TableRow('Bob', percent=100 / 3, count=1),
        ))
        actual = pdfwriting.make_table_data(section)
        expected = [
            ['Candidate', 'Percent', 'Votes'],
            ['Alice', '66.67%', '2'],
            ['Bob', '33.33%', '1'],
        ]
        self.assertEqual(actual, expected)

    def test_make_footer_text(self):
        build_time = datetime(2026, 10, 19, 8, 30)
        actual = pdfwriting.make_footer_text(build_time)
        self.assertEqual(actual, 'Generated October 19, 2026')

    def test_iter_flowables(self):
        sections = testhelpers.make_csv_sections(testhelpers.MULTI_PHASE_CSV)
        env = templating.create_jinja_env()
        flowables = list(pdfwriting.iter_flowables(sections, env=env))

        tables = [f for f in flowables if isinstance(f, Table)]
        lists = [f for f in flowables if isinstance(f, ListFlowable)]
        paragraphs = [f for f in flowables if isinstance(f, Paragraph)]

        # One results table per phase.
        self.assertEqual(len(tables), 3)
        # Candidates with no votes, then phases 2 and 3.
        self.assertEqual(len(lists), 3)
        self.assertEqual(paragraphs[0].getPlainText(), 'Instant Runoff Results')
        self.assertEqual(paragraphs[1].getPlainText(), 'Initial results (phase 1)')

    def test_make_paragraph__escapes_markup(self):
        paragraph = pdfwriting.make_paragraph('"A & B" wins\n')
        self.assertEqual(paragraph.getPlainText(), '"A & B" wins')

    def test_make_pdf(self):
        sections = testhelpers.make_csv_sections(testhelpers.MULTI_PHASE_CSV)
        with TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / 'report.pdf'
            contents = []
            for _ in range(2):
                pdfwriting.make_pdf(path, sections, title='Test', page_size_name='a4',
                                    build_time=datetime(2026, 10, 19), deterministic=True)
                contents.append(path.read_bytes())

        first, second = contents
        self.assertTrue(first.startswith(b'%PDF'))
        # Deterministic output depends only on the input.
        self.assertEqual(first, second)


class DocumentTemplateTest(TestCase):

    """
    Test the DocumentTemplate class.
    """

    def test_make_footer(self):
        cases = [
            (None, 'Page 2'),
            ('Generated October 19, 2026', 'Page 2 - Generated October 19, 2026'),
        ]
        for footer_text, expected in cases:
            with self.subTest(footer_text=footer_text):
                document = DocumentTemplate('sample.pdf', footer_text=footer_text)
                actual = document.make_footer(2)
                self.assertEqual(actual, expected)
