#!/usr/bin/env python3
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
Program to tabulate an instant-runoff election from a ballot file and
write the report as a PDF (and optionally Markdown) file.
"""

import argparse
from datetime import datetime
import json
import logging
from pathlib import Path
import sys

import irvr.ballots as ballots_
from irvr.ballots import BallotError
import irvr.csvio as csvio
from irvr.csvio import DEFAULT_DELIMITER
import irvr.reporting as reporting
import irvr.tabulation as tabulation
import irvr.templating as templating
import irvr.utils as utils
from irvr.utils import DEFAULT_JSON_DUMPS_ARGS, UTF8_ENCODING
import irvr.writers.pdfwriting as pdfwriting


_log = logging.getLogger(__name__)

VERSION='0.0.1'     # Program version


#--- Command line arguments: ---

DESCRIPTION = """\
Tabulate an instant-runoff election and write the report as a PDF file.

A JSON summary of the result is written to stdout at the end of the
script.
"""

EPILOG = """\
The input file should have one header row of candidate names followed by
all the ballot rows.

Each ballot row value should either be an empty string or a ranking where
the highest ranking is 1 and lower rankings are higher numbers.

No ballot row should have any duplicate rankings or gaps.
"""


def parse_args(argv=None):
    """
    Parse sys.argv (or the given list) and return a Namespace object.
    """
    parser = argparse.ArgumentParser(description=DESCRIPTION, epilog=EPILOG,
                    formatter_class=argparse.RawDescriptionHelpFormatter)

    parser.add_argument('--version', action='version', version='%(prog)s '+VERSION)
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='enable verbose info printout')
    parser.add_argument('--debug', action='store_true', help='enable debug printout')
    parser.add_argument('--config-path', '-c', dest='config_path', metavar='PATH',
                        help='path to the YAML configuration file to use')
    parser.add_argument('--delimiter', metavar='CHAR',
                        help=('the cell separator used in the input file. '
                              f'Defaults to: {DEFAULT_DELIMITER!r}.'))
    parser.add_argument('--markdown', metavar='PATH', dest='markdown_path',
                        help='also write the report as Markdown to this path.')
    parser.add_argument('--template-dirs', metavar='DIR', nargs='+',
                        help=('directories to search for templates before the '
                              'ones included with the program.'))
    parser.add_argument('--build-time', metavar='DATETIME',
                        help=('the datetime to show in the PDF footer, '
                              'in the format "2018-06-01 20:48:12". '
                              'Defaults to the current datetime.'))
    parser.add_argument('--deterministic', action='store_true',
                        help='make PDF generation deterministic.')
    parser.add_argument('input_path', metavar='INPUT',
                        help='path to the input ballot file (e.g. a CSV file).')
    parser.add_argument('output_path', metavar='OUTPUT',
                        help='path to the PDF file to write.')

    ns = parser.parse_args(argv)

    return ns


#--- Configuration file processing: ---

class Config:

    """
    Configuration values, read from one or more YAML files.

    A configuration file is a mapping with any of the keys in DEFAULTS.
    The special key "include_config" gives a whitespace-separated list of
    further files to load (relative to the including file), which only
    supply values not already set.
    """

    DEFAULTS = dict(
        delimiter=DEFAULT_DELIMITER,
        lang=utils.ENGLISH_LANG,
        page_size=pdfwriting.DEFAULT_PAGE_SIZE_NAME,
        title=reporting.DEFAULT_TITLE,
    )

    def __init__(self, config_path=None):
        """
        Args:
          config_path: optional path to the YAML configuration file to load.
        """
        self._config_path = config_path

        # Collect other include files to merge
        self.include_config = []

        if config_path is not None:
            config_path = Path(config_path)
            self.overlay_config_file(config_path, replace=True)

            while len(self.include_config) > 0:
                path = config_path.parent / self.include_config.pop(0)
                self.overlay_config_file(path)

        self.overlay_config(self.DEFAULTS)

    def __repr__(self):
        return f'<Config: {self._config_path}>'

    def load_config_file(self, filepath):
        """
        Load the parsed contents of the specified file.

        Returns: the parsed data, as a dict.

        Raises an exception if the file is not present or is invalid.
        """
        _log.info(f'Loading config data from {filepath}')
        config = utils.read_yaml(filepath)
        if config is None:
            return {}
        if not isinstance(config, dict):
            raise RuntimeError(f'config file does not contain a mapping: {filepath}')

        return config

    def overlay_config(self, newconfig, replace=False):
        """
        Overlay a configuration dict onto the configuration data, either
        replacing any existing values, or setting values only if not
        already defined (the new config provides defaults).

        Args:
          newconfig: parsed configuration data dict.
          replace: if true, replace defined entries, otherwise not.
        """
        for k, v in newconfig.items():
            if k == 'include_config':
                # push nested whitespace separated list of config files
                self.include_config += v.split()
                continue

            if k not in self.DEFAULTS:
                raise RuntimeError(f'unknown config key {k!r} in: {self._config_path}')

            if not replace and hasattr(self, k): continue
            _log.debug(f'set Config.{k}={utils.truncate(v)}')
            setattr(self, k, v)

    def overlay_config_file(self, filepath, replace=False):
        """
        Shorthand combination of load_config_file() and overlay_config()
        """
        self.overlay_config(self.load_config_file(filepath), replace=replace)


#--- Top level processing: ---

def make_summary(candidate_names, outcome, output_path):
    """
    Return a dict summarizing the outcome, for printing.
    """
    if outcome.winner is None:
        winner = None
    else:
        winner = candidate_names[outcome.winner]

    if outcome.tied is None:
        tied = None
    else:
        tied = [candidate_names[candidate] for candidate in outcome.tied]

    return dict(
        output_path=str(output_path),
        phases=len(outcome.phases),
        tied=tied,
        winner=winner,
    )


def run(input_path, output_path, config=None, delimiter=None, markdown_path=None,
    template_dirs=None, build_time=None, deterministic=False):
    """
    Tabulate the ballots in a file and write the report.

    Returns a dict summarizing the outcome.

    Raises BallotError without writing any files if the input is invalid.

    Args:
      input_path: the path to the ballot file.
      output_path: the path to the PDF file to write.
      config: a Config object.  Defaults to a Config with default values.
      delimiter: the cell separator.  Defaults to the config's.
      markdown_path: an optional path to write the Markdown report to.
      template_dirs: optional directories to search for templates first.
      build_time: the datetime to show in the PDF footer.  Defaults to now.
      deterministic: for deterministic PDF generation.
    """
    if config is None:
        config = Config()
    if delimiter is None:
        delimiter = config.delimiter
    if build_time is None:
        build_time = datetime.now()

    rows, line_nums = csvio.read_rows(input_path, delimiter=delimiter)
    candidate_names, ballots = ballots_.normalize(rows, line_nums=line_nums)

    outcome = tabulation.tabulate(len(candidate_names), ballots)
    sections = reporting.make_sections(candidate_names, outcome, title=config.title)

    env = templating.create_jinja_env(template_dirs=template_dirs)

    if markdown_path is not None:
        markdown_path = Path(markdown_path)
        report = templating.render_report(sections, env=env)
        markdown_path.write_text(report, encoding=UTF8_ENCODING)
        _log.info(f'wrote Markdown report to: {markdown_path}')

    pdfwriting.make_pdf(output_path, sections, title=config.title,
                        page_size_name=config.page_size, build_time=build_time,
                        lang=config.lang, deterministic=deterministic, env=env)

    return make_summary(candidate_names, outcome, output_path=output_path)


def main(argv=None):
    ns = parse_args(argv)

    if ns.debug:
        level = logging.DEBUG
    elif ns.verbose:
        level = logging.INFO
    else:
        level = logging.ERROR

    logging.basicConfig(level=level)

    build_time = ns.build_time
    if build_time is not None:
        build_time = utils.parse_datetime(build_time)

    config = Config(ns.config_path)

    try:
        output_data = run(ns.input_path, ns.output_path, config=config,
                          delimiter=ns.delimiter, markdown_path=ns.markdown_path,
                          template_dirs=ns.template_dirs, build_time=build_time,
                          deterministic=ns.deterministic)
    except BallotError as exc:
        # Report every problem so they can all be fixed in one pass.
        for problem in exc.problems:
            print(problem.message, file=sys.stderr)
        sys.exit(1)

    output = json.dumps(output_data, **DEFAULT_JSON_DUMPS_ARGS)
    print(output)


if __name__ == '__main__':
    main()
