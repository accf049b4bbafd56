'''Evaluators for special partial purposes, especially tiebreaking.

Ranked counting alone cannot separate a true tie. Instead of drawing lots,
these tie-breakers look at *when* the tied candidates first received
first-preference support: the candidate who was ranked first the earliest
is preferred. This gives a deterministic and auditable answer that rewards
early, decisive voters.
'''

import logging
from typing import Iterable, List, Optional, Tuple

import rankvote.util
from rankvote.vote import Vote
from rankvote.evaluate.core import TieBreaker

logger = logging.getLogger(__name__)


class FirstPreferenceTiming(TieBreaker):
    '''Break ties by the time of the earliest first-preference vote.

    Each tied candidate is assigned the creation time of the earliest ballot
    that ranks them first (looking at the original first preferences,
    not at transferred ones). A candidate never ranked first has an
    infinitely late time. Remaining ties keep the order in which the tied
    candidates were given.

    :param prefer_earliest: If True (default), select the candidate with
        the earliest time (to elect them). If False, select the candidate
        whose earliest first preference came latest (to eliminate them).
    '''
    def __init__(self, prefer_earliest: bool = True):
        self.prefer_earliest = prefer_earliest

    def select(self,
               tied: List[str],
               votes: Iterable[Vote],
               ) -> Tuple[Optional[str], Optional[int]]:
        '''Select one of the tied candidates.

        :param tied: Tied candidates, in nomination order.
        :param votes: All ballots of the election.
        :returns: A 2-tuple of the selected candidate and the time of their
            earliest first-preference vote (None if they were never ranked
            first). The candidate is None if nobody is tied.
        '''
        if not tied:
            return None, None
        times = rankvote.util.first_preference_times(votes)

        def key(cand):
            return rankvote.util.first_preference_time(times, cand)

        chooser = min if self.prefer_earliest else max
        selected = chooser(tied, key=key)
        logger.debug(
            'first preference times of %s: %s, selected %s',
            tied, {cand: key(cand) for cand in tied}, selected
        )
        return selected, rankvote.util.finite_or_none(key(selected))


EARLIEST_FIRST_PREFERENCE = FirstPreferenceTiming(prefer_earliest=True)
LATEST_FIRST_PREFERENCE = FirstPreferenceTiming(prefer_earliest=False)
