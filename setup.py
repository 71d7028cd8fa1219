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
This file lets the project be installed locally using `pip install`.

This setup.py is not meant to support publishing the project to PyPI!
"""

from pathlib import Path
import sys

from setuptools import setup, find_packages


SOURCE_DIR = 'src'

PACKAGE_DATA_EXTS = [
    '.md',
]


def _log(msg):
    # Print to stderr instead of using the logging module because using
    # the logging module is probably overkill for this simple case.
    print(f'setup.py: {msg}', file=sys.stderr)


def compute_package_data(name):
    """
    Return glob patterns of the data files the package needs at runtime
    (e.g. "templates/*").
    """
    package_dir = Path(__file__).parent / SOURCE_DIR / name
    # Replace individual files with the directory containing the file,
    # concatenated with "*", and use set() to remove duplicates.
    patterns = set(
        str((p.parent / '*').relative_to(package_dir))
        for p in package_dir.glob('**/*')
        if (p.is_file() and not p.name.startswith('.') and
            p.suffix in PACKAGE_DATA_EXTS)
    )
    patterns = sorted(patterns)

    return patterns


def parse_install_requires():
    """
    Parse requirements.in, and return the list to pass as the
    install_requires argument to setup().
    """
    path = Path(__file__).parent / 'requirements.in'
    text = path.read_text()
    reqs = [line.strip() for line in text.splitlines()
            if line.strip() and not line.startswith('#')]

    _log(f'parsed install_requires from requirements.in: {reqs}')

    return reqs


setup(
    name='irv-reporter',
    # TODO: DRY up with irvr.main.VERSION.
    version='0.0.1',
    description='instant-runoff voting tabulator and PDF report generator',
    classifiers=[
        'Development Status :: 3 - Alpha',
        'License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)',
        'Programming Language :: Python :: 3',
    ],
    python_requires='>=3.8',
    package_dir={'': SOURCE_DIR},
    packages=find_packages(SOURCE_DIR),
    install_requires=parse_install_requires(),
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'irvr=irvr.main:main',
        ],
    },
    package_data={
        'irvr': compute_package_data('irvr'),
    },
)
