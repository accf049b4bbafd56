'''Evaluators that operate sequentially on ranked votes.

This hosts the instant-runoff evaluator (:class:`InstantRunoff`), used when
there is no Condorcet winner.
'''

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from rankvote.vote import Vote
from rankvote.evaluate.core import (
    ElectionResult, SingleWinnerEvaluator, TieBreaker, VotingSystemError
)
from rankvote.evaluate.auxiliary import (
    EARLIEST_FIRST_PREFERENCE, LATEST_FIRST_PREFERENCE
)

METHOD_NAME = 'Instant Runoff'

logger = logging.getLogger(__name__)


def active_ballots(votes: Iterable[Vote],
                   candidates: List[str],
                   ) -> List[List[str]]:
    '''Restrict the ballots to the candidates still in contention.

    Ballots that rank none of the candidates are exhausted and dropped.
    '''
    in_play = frozenset(candidates)
    ballots = []
    for vote in votes:
        rankings = vote.restricted_to(in_play)
        if rankings:
            ballots.append(rankings)
    return ballots


def first_preference_totals(candidates: List[str],
                            ballots: List[List[str]],
                            ) -> Dict[str, int]:
    totals = {cand: 0 for cand in candidates}
    for ballot in ballots:
        totals[ballot[0]] += 1
    return totals


class InstantRunoff(SingleWinnerEvaluator):
    '''Select a single winner by instant-runoff voting (IRV).

    In every round, the ballots are restricted to the candidates still in
    contention and their first preferences are counted. A candidate with
    more than half of the non-exhausted ballots wins. Otherwise, the candidate
    with the fewest first preferences is eliminated and the next round begins.

    Ties are resolved by the tie-breakers instead of by lot:

    -   If all remaining candidates are tied, the winner is chosen by
        ``winner_breaker`` (by default, the candidate ranked first the
        earliest) and the result is marked as tie-broken.
    -   If several but not all candidates are tied for the fewest
        first preferences, ``loser_breaker`` chooses which of them to
        eliminate (by default, the one whose earliest first preference came
        the latest).

    :param winner_breaker: Tie-breaker selecting the winner from a complete
        tie. Must return a 2-tuple of the candidate and the deciding time.
    :param loser_breaker: Tie-breaker selecting the candidate to eliminate
        from those tied for the last place.
    '''
    def __init__(self,
                 winner_breaker: TieBreaker = EARLIEST_FIRST_PREFERENCE,
                 loser_breaker: TieBreaker = LATEST_FIRST_PREFERENCE,
                 ):
        self.winner_breaker = winner_breaker
        self.loser_breaker = loser_breaker

    def evaluate(self,
                 candidates: List[str],
                 votes: Iterable[Vote],
                 ) -> ElectionResult:
        '''Select the winner by instant runoff.

        :param candidates: Nomination ids standing in the election.
        :param votes: Ranked ballots; their creation times are used
            for tiebreaking.
        :returns: The result. Its winner is None if there are no candidates
            or no votes.
        '''
        votes = list(votes)
        if not candidates or not votes:
            return ElectionResult(None, METHOD_NAME)
        remaining = list(candidates)
        round_i = 0
        while len(remaining) > 1:
            round_i += 1
            logger.info('proceeding to round %d', round_i)
            result, next_remaining = self.next_round(remaining, votes)
            if result is not None:
                return result
            if next_remaining == remaining:
                logger.info('all ballots exhausted, terminating')
                break
            remaining = next_remaining
        return ElectionResult(
            remaining[0] if remaining else None, METHOD_NAME
        )

    def next_round(self,
                   remaining: List[str],
                   votes: List[Vote],
                   ) -> Tuple[Optional[ElectionResult], List[str]]:
        '''Advance the runoff by one round.

        :param remaining: Candidates still in contention.
        :param votes: All ballots of the election.
        :returns: A 2-tuple of the result, if the round decided the election
            (None otherwise), and the candidates remaining for the next round.
        '''
        ballots = active_ballots(votes, remaining)
        if not ballots:
            return None, remaining
        totals = first_preference_totals(remaining, ballots)
        logger.info('current first-preference totals: %s', totals)
        n_ballots = len(ballots)
        for cand in remaining:
            if 2 * totals[cand] > n_ballots:
                logger.info('%s elected by majority', cand)
                return ElectionResult(cand, METHOD_NAME), remaining
        min_total = min(totals[cand] for cand in remaining)
        losers = [cand for cand in remaining if totals[cand] == min_total]
        if len(losers) == len(remaining):
            winner, vote_time = self.winner_breaker.select(remaining, votes)
            if winner is None:
                raise VotingSystemError(
                    f'tie-breaker selected nobody from {remaining}'
                )
            logger.info(
                'complete tie among %s, %s elected by tiebreak',
                remaining, winner
            )
            return ElectionResult(
                winner, METHOD_NAME,
                tie_broken=True,
                winner_vote_time=vote_time,
            ), remaining
        if len(losers) > 1:
            eliminated, _ = self.loser_breaker.select(losers, votes)
        else:
            eliminated = losers[0]
        logger.info('eliminating %s', eliminated)
        return None, [cand for cand in remaining if cand != eliminated]


def calculate_irv(candidates: List[str],
                  votes: Iterable[Vote],
                  ) -> ElectionResult:
    '''Select the winner among the candidates by default instant runoff.'''
    return InstantRunoff().evaluate(candidates, votes)
