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
Instant-runoff tabulation.

The functions in this module never mutate their arguments.  Each phase
of the count takes the current (candidates, ballots) pair and produces
a new one.

Ties for last place are not broken: every candidate tied for the lowest
vote count is eliminated in the same phase.  If that would eliminate
all of the remaining candidates, the count ends in a tie.
"""

from collections import namedtuple
import logging

from irvr.ballots import (BallotError, RowProblem, NO_BALLOTS, NO_BALLOTS_MESSAGE,
    NO_CANDIDATES, NO_CANDIDATES_MESSAGE)
import irvr.utils as utils


_log = logging.getLogger(__name__)

# A candidate wins once their percent of the live ballots is strictly
# greater than this.
WIN_THRESHOLD = 50

# Attributes:
#   candidate: the candidate, as an int.
#   count: the number of live ballots ranking the candidate first.
#   percent: the count as a percent of the live ballots.
ShareOfVotes = namedtuple('ShareOfVotes', 'candidate, count, percent')

# Attributes:
#   number: the phase number, starting at 1.
#   eliminated: the candidates eliminated just before this phase, as a
#     tuple (empty for phase 1).
#   distribution: the list of ShareOfVotes objects for the phase.
#   ballot_count: the number of live ballots in the phase.
Phase = namedtuple('Phase', 'number, eliminated, distribution, ballot_count')


class Outcome:

    """
    The result of tabulating an election.
    """

    def __init__(self, phases, initial_ballot_count, winner=None, tied=None,
        no_votes=None, blank_count=0):
        """
        Args:
          phases: the list of Phase objects, starting with phase 1.
          initial_ballot_count: the number of ballots counted in phase 1.
          winner: the winning candidate, or None if there is a tie.
          tied: the tuple of tied candidates, or None if there is a winner.
          no_votes: the tuple of candidates eliminated after phase 1 for
            receiving no votes.
          blank_count: the number of ballots that ranked no candidates
            and so were never counted.
        """
        if no_votes is None:
            no_votes = ()

        self.blank_count = blank_count
        self.initial_ballot_count = initial_ballot_count
        self.no_votes = no_votes
        self.phases = phases
        self.tied = tied
        self.winner = winner

    def __repr__(self):
        return (f'<Outcome: winner={self.winner!r} tied={self.tied!r} '
                f'phases={len(self.phases)}>')

    @property
    def last_phase(self):
        return self.phases[-1]

    def eliminated_ballot_count(self, phase):
        """
        Return how many of the initially counted ballots were no longer
        live in the given phase.
        """
        return self.initial_ballot_count - phase.ballot_count


def compute_distribution(candidates, ballots):
    """
    Count how many ballots rank each candidate first, and return the
    list of ShareOfVotes objects, with the most votes first.

    Candidates with equal counts keep their order in `candidates`.

    Args:
      candidates: the candidates still in the running.
      ballots: the live ballots, each a sequence of candidates.
    """
    total = len(ballots)
    counts = {candidate: 0 for candidate in candidates}
    for ballot in ballots:
        first = ballot[0]
        if first in counts:
            counts[first] += 1

    shares = [
        ShareOfVotes(candidate, count=count, percent=utils.compute_percent(count, total))
        for candidate, count in counts.items()
    ]

    # sorted() is stable, so ties keep the candidate order.
    return sorted(shares, key=lambda share: -share.count)


def eliminate(candidates, ballots, to_remove):
    """
    Remove candidates from the running, and return (candidates, ballots).

    The candidates are removed from every ballot, and ballots left empty
    are dropped.  The return values are new tuples.
    """
    to_remove = set(to_remove)
    candidates = tuple(c for c in candidates if c not in to_remove)

    stripped = (tuple(c for c in ballot if c not in to_remove) for ballot in ballots)
    ballots = tuple(ballot for ballot in stripped if ballot)

    return (candidates, ballots)


def find_lowest(distribution):
    """
    Return the candidates tied for the lowest vote count, as a list.
    """
    lowest_count = min(share.count for share in distribution)

    return [share.candidate for share in distribution if share.count == lowest_count]


def find_no_votes(distribution):
    """
    Return the candidates that received no votes, as a list.
    """
    return [share.candidate for share in distribution if share.count == 0]


def has_winner(distribution):
    """
    Return whether the leading candidate has a majority.
    """
    return distribution[0].percent > WIN_THRESHOLD


def tabulate(candidate_count, ballots):
    """
    Run an instant-runoff count, and return an Outcome object.

    Args:
      candidate_count: the number of candidates.  The candidates are
        the integers 0, 1, ..., candidate_count - 1.
      ballots: the normalized ballots (see irvr.ballots.normalize()).
        Empty ballots are set aside before counting.

    Raises BallotError if there are no candidates, or no ballot ranks
    any candidate.
    """
    if candidate_count < 1:
        raise BallotError([RowProblem(None, NO_CANDIDATES, NO_CANDIDATES_MESSAGE)])

    candidates = tuple(range(candidate_count))
    all_ballots = ballots
    ballots = tuple(tuple(ballot) for ballot in all_ballots if ballot)
    blank_count = len(all_ballots) - len(ballots)
    if not ballots:
        raise BallotError([RowProblem(None, NO_BALLOTS, NO_BALLOTS_MESSAGE)])

    if blank_count:
        _log.info(f'setting aside {blank_count} ballots ranking no candidates')

    initial_ballot_count = len(ballots)
    _log.info(f'tabulating {initial_ballot_count} ballots for {candidate_count} candidates')

    def make_outcome(winner=None, tied=None):
        return Outcome(phases, initial_ballot_count=initial_ballot_count,
                       winner=winner, tied=tied, no_votes=no_votes,
                       blank_count=blank_count)

    distribution = compute_distribution(candidates, ballots)
    phases = [Phase(1, eliminated=(), distribution=distribution,
                    ballot_count=len(ballots))]
    no_votes = ()

    if has_winner(distribution):
        winner = distribution[0].candidate
        _log.info(f'candidate {winner} won in phase 1')
        return make_outcome(winner=winner)

    # Candidates with no votes can be dropped all at once.  This doesn't
    # change anyone's share, so it isn't counted as a phase.
    no_votes = tuple(find_no_votes(distribution))
    if no_votes:
        _log.info(f'eliminating candidates with no votes: {no_votes}')
        candidates, ballots = eliminate(candidates, ballots, no_votes)
        distribution = compute_distribution(candidates, ballots)

    phase_number = 1
    while True:
        phase_number += 1
        lowest = find_lowest(distribution)

        # Eliminating everyone would leave no winner.
        if len(lowest) == len(candidates):
            tied = tuple(share.candidate for share in distribution)
            _log.info(f'{len(tied)}-way tie after phase {phase_number - 1}: {tied}')
            return make_outcome(tied=tied)

        lowest = tuple(lowest)
        _log.debug(f'phase {phase_number}: eliminating {lowest}')
        candidates, ballots = eliminate(candidates, ballots, lowest)
        distribution = compute_distribution(candidates, ballots)
        phases.append(Phase(phase_number, eliminated=lowest, distribution=distribution,
                            ballot_count=len(ballots)))

        if has_winner(distribution):
            winner = distribution[0].candidate
            _log.info(f'candidate {winner} won in phase {phase_number}')
            return make_outcome(winner=winner)
