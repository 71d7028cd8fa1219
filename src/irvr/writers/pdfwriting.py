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
Support for creating PDF files from report sections.

The wording of each section comes from the same templates used for the
Markdown report, so the two documents always say the same thing.
"""

import logging
import os
from xml.sax.saxutils import escape

import reportlab.lib.colors as colors
from reportlab.lib.pagesizes import A4, letter
from reportlab.lib.styles import getSampleStyleSheet
# The "inch" value equals 72.0.
from reportlab.lib.units import inch
from reportlab.platypus import (ListFlowable, ListItem, Paragraph, SimpleDocTemplate,
    Spacer, Table, TableStyle)

import irvr.reporting as reporting
import irvr.templating as templating
import irvr.utils as utils


_log = logging.getLogger(__name__)

PAGE_SIZES = {
    'a4': A4,
    'letter': letter,
}

# ReportLab defaults to A4, so make the American standard more available.
DEFAULT_PAGE_SIZE_NAME = 'letter'

# The names of ReportLab's BaseDocTemplate margin attributes.
MARGIN_NAMES = [
    'bottomMargin',
    'leftMargin',
    'rightMargin',
    'topMargin'
]

STYLES = getSampleStyleSheet()
NORMAL_STYLE = STYLES['Normal']
TITLE_STYLE = STYLES['Title']
HEADING_STYLE = STYLES['Heading2']


def get_page_size(name=None):
    """
    Return a ReportLab page size, given its name (case-insensitive).
    """
    if name is None:
        name = DEFAULT_PAGE_SIZE_NAME

    try:
        return PAGE_SIZES[name.lower()]
    except KeyError:
        raise RuntimeError(f'unsupported page size {name!r}: choose from {sorted(PAGE_SIZES)}')


def strip_heading_marker(text):
    """
    Return the text of a Markdown heading, without the leading "#" marks.

    >>> strip_heading_marker('## Phase 2\\n')
    'Phase 2'
    """
    return text.lstrip('#').strip()


def make_paragraph(text, style=None):
    if style is None:
        style = NORMAL_STYLE
    # Paragraph text is parsed as markup, so escape names like "A & B".
    return Paragraph(escape(text.strip()), style)


def make_table_data(section):
    """
    Return the rows of data for a ResultsTable, starting with the header.
    """
    data = [list(section.headers)]
    data.extend(
        [row.name, utils.format_percent(row.percent), utils.format_number(row.count)]
        for row in section.rows
    )

    return data


def make_results_table(section):
    """
    Return a ReportLab Table for a ResultsTable section.
    """
    table = Table(make_table_data(section), repeatRows=1, hAlign='LEFT')

    table.setStyle(TableStyle([
        # Add grid lines to the table.
        # The third element is the width of the grid lines.
        ('GRID', (0, 0), (-1, -1), 0.5, colors.black),
        # Shade the first (header) row.
        ('BACKGROUND', (0, 0), (-1, 0), colors.lightgoldenrodyellow),
        # Right-align the percent and vote columns.
        ('ALIGN', (1, 1), (-1, -1), 'RIGHT'),
    ]))

    return table


def make_elimination_flowables(text, section):
    """
    Return the flowables for an EliminationList: the introductory
    sentence followed by a bulleted list of names.
    """
    # The rendered Markdown is the sentence, a blank line, then the list.
    intro = text.partition('\n\n')[0]
    items = [ListItem(make_paragraph(name)) for name in section.names]

    return [make_paragraph(intro), ListFlowable(items, bulletType='bullet', start='•')]


def iter_flowables(sections, env):
    """
    Yield the ReportLab flowables for the given report sections.

    Args:
      env: a Jinja2 Environment object, used to word the sections.
    """
    for section in sections:
        text = templating.render_section(env, section)

        if isinstance(section, reporting.Title):
            yield make_paragraph(strip_heading_marker(text), style=TITLE_STYLE)
            continue
        if isinstance(section, reporting.PhaseHeading):
            yield make_paragraph(strip_heading_marker(text), style=HEADING_STYLE)
            continue

        if isinstance(section, reporting.ResultsTable):
            yield make_results_table(section)
        elif isinstance(section, reporting.EliminationList):
            yield from make_elimination_flowables(text, section)
        else:
            yield make_paragraph(text)

        yield Spacer(1, 0.15 * inch)


class DocumentTemplate(SimpleDocTemplate):

    """
    Our customized DocTemplate, which adds a page footer.
    """

    def __init__(self, *args, footer_text=None, **kwargs):
        """
        Args:
          footer_text: optional text to add to the footer of every page,
            after the page number.
        """
        super().__init__(*args, **kwargs)
        self.footer_text = footer_text

    def make_footer(self, page_number):
        text = f'Page {page_number}'
        if self.footer_text:
            text = f'{text} - {self.footer_text}'

        return text

    def write_centered_text(self, canvas, text, height):
        page_width = self.pagesize[0]
        width = canvas.stringWidth(text)
        x = (page_width - width) / 2
        canvas.drawString(x=x, y=height, text=text)

    # We use afterPage() to draw the page footer because it's called after
    # the flowables have been drawn on the page.
    def afterPage(self):
        canvas = self.canv
        page_number = canvas.getPageNumber()
        text = self.make_footer(page_number)
        _log.debug(f'writing page footer: {text!r}')

        # Center the footer near the very bottom.
        self.write_centered_text(canvas, text=text, height=(0.5 * inch))


def make_doc_template(path, page_size, title=None, footer_text=None, deterministic=False):
    """
    Return a DocumentTemplate object.
    """
    # Add a little margin cushion to prevent overflow.
    margin = 0.9 * inch
    margins = {key: margin for key in MARGIN_NAMES}

    # ReportLab's "invariant" option omits the creation time and
    # randomness from the file, so the same input gives the same bytes.
    invariant = 1 if deterministic else 0
    doc_template = DocumentTemplate(path, pagesize=page_size, title=title,
                                    footer_text=footer_text, invariant=invariant,
                                    **margins)

    return doc_template


def make_footer_text(build_time, lang=None):
    """
    Return the footer text for a build time (a datetime object), e.g.
    "Generated October 19, 2026".
    """
    if lang is None:
        lang = utils.ENGLISH_LANG

    date = utils.format_date(build_time.date(), lang=lang)

    return f'Generated {date}'


def make_pdf(path, sections, title=None, page_size_name=None, build_time=None,
    lang=None, deterministic=False, env=None):
    """
    Write the report sections to a PDF file.

    Args:
      path: a path-like object.
      sections: an iterable of section objects from irvr.reporting.
      title: an optional title to set on the PDF's properties.
      page_size_name: "letter" (the default) or "a4".
      build_time: an optional datetime to show in the page footer.
      lang: the language to use when formatting the build time.
      deterministic: whether the PDF bytes should depend only on the input.
      env: a Jinja2 Environment object.  Defaults to a new environment
        from irvr.templating.create_jinja_env().
    """
    if env is None:
        env = templating.create_jinja_env()

    _log.info(f'writing PDF to: {path}')

    # Convert the path to a string for reportlab.
    path = os.fspath(path)
    page_size = get_page_size(page_size_name)

    footer_text = None if build_time is None else make_footer_text(build_time, lang=lang)

    flowables = list(iter_flowables(sections, env=env))
    document = make_doc_template(path, page_size=page_size, title=title,
                                 footer_text=footer_text, deterministic=deterministic)

    document.build(flowables)
