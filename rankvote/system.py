'''Named voting systems.

The system used to finalize elections is :data:`DEFAULT_SYSTEM`: the
Condorcet winner if there is one, instant runoff otherwise.
'''

import logging
from typing import Dict, Iterable, List

import rankvote.evaluate.condorcet
import rankvote.evaluate.sequential
from rankvote.vote import Vote
from rankvote.evaluate.core import ElectionResult, SingleWinnerEvaluator

logger = logging.getLogger(__name__)


class VotingSystem:
    """A named voting system. Wraps an election evaluator.

    :param name: Name of the system.
    :param evaluator: Evaluator representing the system.
    """
    def __init__(self, name: str, evaluator: SingleWinnerEvaluator):
        self.name = name
        self.evaluator = evaluator

    def evaluate(self, *args, **kwargs) -> ElectionResult:
        """Return the evaluator's results of the system for the votes given."""
        return self.evaluator.evaluate(*args, **kwargs)


class CondorcetFallback(SingleWinnerEvaluator):
    '''Elect the Condorcet winner, falling back to another evaluator.

    :param condorcet: Evaluator finding the Condorcet winner.
    :param fallback: Evaluator used when there is no Condorcet winner.
    '''
    def __init__(self,
                 condorcet: SingleWinnerEvaluator =
                     rankvote.evaluate.condorcet.CondorcetSelector(),
                 fallback: SingleWinnerEvaluator =
                     rankvote.evaluate.sequential.InstantRunoff(),
                 ):
        self.condorcet = condorcet
        self.fallback = fallback

    def evaluate(self,
                 candidates: List[str],
                 votes: Iterable[Vote],
                 ) -> ElectionResult:
        votes = list(votes)
        result = self.condorcet.evaluate(candidates, votes)
        if result:
            return result
        logger.info('no Condorcet winner, attempting instant runoff')
        return self.fallback.evaluate(candidates, votes)


DEFAULT_SYSTEM = VotingSystem('Condorcet-IRV', CondorcetFallback())

SYSTEMS: Dict[str, VotingSystem] = {
    'condorcet_irv': DEFAULT_SYSTEM,
    'condorcet': VotingSystem(
        'Condorcet', rankvote.evaluate.condorcet.CondorcetSelector()
    ),
    'irv': VotingSystem(
        'Instant Runoff', rankvote.evaluate.sequential.InstantRunoff()
    ),
}
