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
Simple helper functions.
"""

from datetime import datetime
import logging

import babel.dates
import yaml


_log = logging.getLogger(__name__)

ENGLISH_LANG = 'en'

UTF8_ENCODING = 'utf-8'

# Our options for pretty-printing JSON for increased human readability.
DEFAULT_JSON_DUMPS_ARGS = dict(sort_keys=True, indent=4, ensure_ascii=False)


def truncate(obj):
    """
    Return an object representation guaranteed not to exceed a reasonable
    length.  This is useful e.g. for logging.
    """
    if type(obj) != str:
        obj = repr(obj)
    if len(obj) > 40:
        # Add an ellipsis to indicate that a truncation occurred.
        return f'{obj[:40]!r}...'

    return repr(obj)


def format_number(num):
    """
    Format an integer for display, e.g.

    >>> format_number(9999)
    '9999'
    """
    if num is None: return ''
    return f'{num:d}'


def compute_percent(numer, denom):
    """
    Compute a numeric percent, given a numerator and denominator.

    This returns a number even if the denominator is 0.

    >>> compute_percent(1, 3)
    33.333333333333336
    >>> compute_percent(1, 0)
    0
    """
    if not denom:
        return 0

    if numer == denom:
        # Special-casing equality ensures e.g. that 100 is returned instead
        # of 99.99999999999 in certain floating-point edge cases (like 1/3).
        quotient = 1
    else:
        quotient = numer / denom

    return 100 * quotient


def format_percent(percent):
    """
    Format a percentage for display.

    >>> format_percent(12.4)
    '12.40%'
    """
    if percent is None:
        return ''
    return f'{percent:.2f}%'


def format_percent2(num, denom):
    """
    Format a percentage for display as num/denom.
    """
    if denom is None or num is None or denom == 0:
        return ''
    else:
        return(format_percent(100 * num/denom))


def strip_trailing_whitespace(text):
    """
    Strip trailing whitespace from the end of each line.
    """
    lines = text.splitlines()
    text = ''.join(line.rstrip() + '\n' for line in lines)

    return text


def parse_datetime(dt_string):
    """
    Parse a string in a standard format representing a datetime, and
    return a datetime.datetime object.

    Args:
      dt_string: a datetime string in the format, "2018-06-01 20:48:12".
    """
    return datetime.strptime(dt_string, '%Y-%m-%d %H:%M:%S')


def format_date(date, lang, format_=None):
    """
    Args:
      date: a datetime.date object.
      lang: a 2-letter language code.
    """
    if format_ is None:
        format_ = 'long'
    return babel.dates.format_date(date, format=format_, locale=lang)


def read_yaml(filepath):
    """
    Read the specified YAML file into a python data structure.
    """
    _log.debug(f'read_yaml({filepath})')
    with open(filepath, encoding=UTF8_ENCODING) as f:
        data = yaml.safe_load(f)

    return data
