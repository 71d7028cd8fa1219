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
Model classes for the sections of a tabulation report, and the function
to narrate an Outcome as a list of sections.

Each section class names the template used to render it as Markdown
(see irvr.templating).  The PDF writer dispatches on the section class.
"""

from collections import namedtuple
import logging

from irvr.tabulation import WIN_THRESHOLD


_log = logging.getLogger(__name__)

DEFAULT_TITLE = 'Instant Runoff Results'

# The values of EliminationList.reason.
NO_VOTES_REASON = 'no_votes'
LOWEST_REASON = 'lowest'

# A row of a ResultsTable.
TableRow = namedtuple('TableRow', 'name, percent, count')


class Title(namedtuple('Title', 'text')):
    __slots__ = ()
    template_name = 'title.md'


class PhaseHeading(namedtuple('PhaseHeading', 'number')):
    __slots__ = ()
    template_name = 'phase_heading.md'

    @property
    def is_initial(self):
        return self.number == 1


class WinnerNotice(namedtuple('WinnerNotice', 'name, percent, phase_number')):

    """
    Announces the winner.  A winner in phase 1 wins "right away."
    """

    __slots__ = ()
    template_name = 'winner_notice.md'

    @property
    def is_immediate(self):
        return self.phase_number == 1


class NoWinnerNotice(namedtuple('NoWinnerNotice', 'threshold')):
    __slots__ = ()
    template_name = 'no_winner_notice.md'


class BallotsCast(namedtuple('BallotsCast', 'count, blank_count')):

    """
    The number of ballots counted in phase 1, and the number of ballots
    set aside for ranking no candidates.
    """

    __slots__ = ()
    template_name = 'ballots_cast.md'


class EliminationList(namedtuple('EliminationList', 'reason, names')):
    __slots__ = ()
    template_name = 'elimination_list.md'

    @property
    def for_no_votes(self):
        return self.reason == NO_VOTES_REASON


class BallotAttrition(namedtuple('BallotAttrition', 'eliminated, total, is_final')):

    """
    How many of the counted ballots have been eliminated so far because
    every candidate they rank has been eliminated.
    """

    __slots__ = ()
    template_name = 'ballot_attrition.md'


class ResultsTable(namedtuple('ResultsTable', 'rows')):

    """
    A results table, with one TableRow per candidate in the running.
    """

    __slots__ = ()
    template_name = 'results_table.md'

    headers = ('Candidate', 'Percent', 'Votes')


class TieNotice(namedtuple('TieNotice', 'size')):
    __slots__ = ()
    template_name = 'tie_notice.md'


def make_results_table(candidate_names, distribution):
    """
    Return a ResultsTable for a distribution (a list of ShareOfVotes).
    """
    rows = tuple(
        TableRow(candidate_names[share.candidate], percent=share.percent, count=share.count)
        for share in distribution
    )

    return ResultsTable(rows)


def make_elimination_list(candidate_names, candidates, reason):
    names = tuple(candidate_names[candidate] for candidate in candidates)

    return EliminationList(reason, names=names)


def iter_phase_sections(candidate_names, outcome, phase):
    """
    Yield the sections for a phase after phase 1, starting with the list
    of candidates eliminated going into the phase.
    """
    yield make_elimination_list(candidate_names, phase.eliminated, reason=LOWEST_REASON)
    yield PhaseHeading(phase.number)

    distribution = phase.distribution
    is_final = (phase is outcome.last_phase and outcome.winner is not None)
    if is_final:
        leader = distribution[0]
        yield WinnerNotice(candidate_names[leader.candidate], percent=leader.percent,
                           phase_number=phase.number)
    else:
        yield NoWinnerNotice(WIN_THRESHOLD)

    eliminated = outcome.eliminated_ballot_count(phase)
    yield BallotAttrition(eliminated, total=outcome.initial_ballot_count, is_final=is_final)
    yield make_results_table(candidate_names, distribution)


def iter_sections(candidate_names, outcome, title=None):
    """
    Yield the sections of the report for an Outcome, in order.
    """
    if title is None:
        title = DEFAULT_TITLE

    yield Title(title)
    yield PhaseHeading(1)

    first_phase, *later_phases = outcome.phases
    distribution = first_phase.distribution
    if not later_phases and outcome.winner is not None:
        leader = distribution[0]
        yield WinnerNotice(candidate_names[leader.candidate], percent=leader.percent,
                           phase_number=1)
        yield make_results_table(candidate_names, distribution)
        return

    yield NoWinnerNotice(WIN_THRESHOLD)
    yield make_results_table(candidate_names, distribution)
    yield BallotsCast(outcome.initial_ballot_count, blank_count=outcome.blank_count)

    if outcome.no_votes:
        yield make_elimination_list(candidate_names, outcome.no_votes, reason=NO_VOTES_REASON)

    for phase in later_phases:
        yield from iter_phase_sections(candidate_names, outcome=outcome, phase=phase)

    if outcome.tied is not None:
        yield TieNotice(len(outcome.tied))


def make_sections(candidate_names, outcome, title=None):
    """
    Return the sections of the report for an Outcome, as a list.

    Args:
      candidate_names: the list of candidate names, indexed by candidate.
      outcome: an irvr.tabulation.Outcome object.
      title: the report title.  Defaults to DEFAULT_TITLE.
    """
    sections = list(iter_sections(candidate_names, outcome=outcome, title=title))
    _log.debug(f'assembled {len(sections)} report sections')

    return sections
