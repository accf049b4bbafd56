'''Condorcet winner evaluation.

These evaluators work by examining pairwise orderings between candidates
(how many voters prefer one candidate to another), produced from ranked
ballots by :class:`rankvote.convert.RankedToPairwiseMatrix`.

A Condorcet winner beats every other candidate head-to-head. There is at most
one, but there may be none at all when the collective preferences are cyclic
(A beats B beats C beats A) or some head-to-head comparison is tied; use
a fallback evaluator such as instant runoff for those cases.
'''

import logging
from typing import Dict, Iterable, List, Optional, Tuple

import rankvote.convert
from rankvote.convert import PairwiseMatrix
from rankvote.vote import Vote
from rankvote.evaluate.core import ElectionResult, SingleWinnerEvaluator

METHOD_NAME = 'Condorcet'

logger = logging.getLogger(__name__)


def pairwise_wins(matrix: PairwiseMatrix,
                  include_ties: bool = False,
                  ) -> List[Tuple[str, str]]:
    """Select pairs of candidates where the first is preferred to the second.

    :param matrix: Pairwise win counts; use
        :func:`rankvote.convert.pairwise_matrix` to produce them from ranked
        votes.
    :param include_ties: Whether to include pairs of candidates that are tied.
        Such a pair will be included in both directions.
    :returns: Ordered pairs that are preferred to the opposite ordering
        by more voters.
    """
    wins = []
    for upper, row in matrix.items():
        for lower, count in row.items():
            anti_count = matrix.get(lower, {}).get(upper, 0)
            if anti_count < count or include_ties and anti_count == count:
                wins.append((upper, lower))
    return wins


def beat_counts(matrix: PairwiseMatrix) -> Dict[str, int]:
    """Count the number of candidates a given candidate beats pairwise."""
    n_beats = {cand: 0 for cand in matrix}
    for winner, loser in pairwise_wins(matrix):
        n_beats[winner] += 1
    return n_beats


class CondorcetWinner:
    """Condorcet winner selector.

    Selects a candidate that strictly beats all other candidates pairwise,
    if there is one.
    """
    def evaluate(self, matrix: PairwiseMatrix) -> Optional[str]:
        """Select the Condorcet winner.

        :param matrix: Pairwise win counts; use
            :func:`rankvote.convert.pairwise_matrix` to produce them from
            ranked votes.
        :returns: The winner's nomination id, or None if there is no
            Condorcet winner.
        """
        for cand, row in matrix.items():
            if all(
                count > matrix[other][cand]
                for other, count in row.items()
            ):
                return cand
        return None


class CondorcetSelector(SingleWinnerEvaluator):
    """Elect the Condorcet winner from ranked votes.

    :param converter: Converter of ranked votes to the pairwise matrix.
    """
    def __init__(self,
                 converter: rankvote.convert.RankedToPairwiseMatrix =
                     rankvote.convert.RANKED_TO_PAIRWISE,
                 ):
        self.converter = converter
        self.selector = CondorcetWinner()

    def evaluate(self,
                 candidates: List[str],
                 votes: Iterable[Vote],
                 ) -> ElectionResult:
        matrix = self.converter.convert(candidates, votes)
        winner = self.selector.evaluate(matrix)
        if winner is None:
            logger.info('no Condorcet winner among %s', candidates)
        else:
            logger.info('%s is the Condorcet winner', winner)
        return ElectionResult(winner, METHOD_NAME)


def determine_condorcet_winner(candidates: List[str],
                               votes: Iterable[Vote],
                               ) -> Optional[str]:
    '''Return the Condorcet winner among the candidates, if there is one.'''
    return CondorcetSelector().evaluate(candidates, votes).winner
