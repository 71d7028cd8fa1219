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
Rendering report sections as Markdown using Jinja2 templates.

Each section class in irvr.reporting has a `template_name` attribute
naming a template in the package's "templates" directory.  The template
is rendered with the section available as `section`.
"""

import logging
from pathlib import Path

import jinja2
from jinja2 import Environment, FileSystemLoader

import irvr.utils as utils


_log = logging.getLogger(__name__)

# The templates included with the package.
PACKAGE_TEMPLATE_DIR = Path(__file__).parent / 'templates'

# Each section renders to text ending in a newline, and consecutive
# sections are separated by a blank line.
SECTION_SEPARATOR = '\n'


def create_jinja_env(template_dirs=None):
    """
    Create and return the Jinja2 Environment object.

    Args:
      template_dirs: optional directories to search for templates, before
        the templates included with the package.  This lets a user
        override the wording of a section.
    """
    if template_dirs is None:
        template_dirs = []

    search_path = [Path(path) for path in template_dirs]
    search_path.append(PACKAGE_TEMPLATE_DIR)

    env = Environment(
        loader=FileSystemLoader(search_path),
        # The output is Markdown, so nothing is escaped.
        autoescape=False,
        # Remove excess whitespace with lstrip_blocks and trim_blocks.
        lstrip_blocks=True,
        trim_blocks=True,
        keep_trailing_newline=True,
        undefined=jinja2.StrictUndefined,
    )

    filters = dict(
        format_number=utils.format_number,
        format_percent=utils.format_percent,
        format_percent2=utils.format_percent2,
    )
    env.filters.update(filters)

    return env


def render_section(env, section):
    """
    Render a single report section, and return the text.
    """
    template = env.get_template(section.template_name)
    _log.debug(f'rendering {type(section).__name__} with: {section.template_name}')

    return template.render(section=section)


def render_report(sections, env=None):
    """
    Render the report sections as a single Markdown document, and return
    the text.

    Args:
      sections: an iterable of section objects from irvr.reporting.
      env: a Jinja2 Environment object.  Defaults to a new environment
        from create_jinja_env().
    """
    if env is None:
        env = create_jinja_env()

    texts = [render_section(env, section) for section in sections]
    report = SECTION_SEPARATOR.join(texts)

    # Strip trailing whitespace as a normalization step to simplify
    # testing and comparing reports.
    return utils.strip_trailing_whitespace(report)
