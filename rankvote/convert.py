'''Converters between ballot representations.

The only conversion the evaluators need is from ranked ballots to a pairwise
(head-to-head) matrix, the input format of Condorcet methods.
'''

import logging
from typing import Dict, Iterable, List

from rankvote.vote import Vote

PairwiseMatrix = Dict[str, Dict[str, int]]

logger = logging.getLogger(__name__)


class RankedToPairwiseMatrix:
    '''Aggregate ranked votes to counts of pairwise wins.

    Basic component for Condorcet methods. For each ballot and each ordered
    pair of distinct candidates ``(a, b)``, adds one to ``wins[a][b]`` if the
    ballot ranks ``a`` above ``b``. A candidate ranked on the ballot is
    considered above every candidate not ranked on it; a ballot ranking
    neither of the pair contributes nothing to either direction.

    Ballot entries that are not among the candidates are ignored; if an id
    appears on a ballot more than once, its first position counts.
    '''
    def convert(self,
                candidates: List[str],
                votes: Iterable[Vote],
                ) -> PairwiseMatrix:
        '''Convert ranked votes to a matrix of pairwise wins.

        :param candidates: Nomination ids forming the candidate universe.
        :param votes: Ranked ballots.
        :returns: Nested mapping ``wins[a][b]`` - the number of ballots
            preferring ``a`` to ``b`` - defined for every ordered pair of
            distinct candidates (zero where no ballot prefers ``a``).
        '''
        wins = {
            upper: {lower: 0 for lower in candidates if lower != upper}
            for upper in candidates
        }
        for vote in votes:
            positions = self.positions(vote)
            for upper in candidates:
                upper_rank = positions.get(upper)
                if upper_rank is None:
                    continue
                for lower in candidates:
                    if lower == upper:
                        continue
                    lower_rank = positions.get(lower)
                    if lower_rank is None or upper_rank < lower_rank:
                        wins[upper][lower] += 1
        logger.debug('pairwise matrix: %s', wins)
        return wins

    @staticmethod
    def positions(vote: Vote) -> Dict[str, int]:
        positions = {}
        for rank_i, cand in enumerate(vote.rankings):
            positions.setdefault(cand, rank_i)
        return positions


RANKED_TO_PAIRWISE = RankedToPairwiseMatrix()


def pairwise_matrix(candidates: List[str],
                    votes: Iterable[Vote],
                    ) -> PairwiseMatrix:
    '''Build the pairwise win matrix of the candidates from the votes.'''
    return RANKED_TO_PAIRWISE.convert(candidates, votes)
