'''General election evaluator machinery.'''

from __future__ import annotations

import abc
import dataclasses
from typing import Any, Iterable, List, Optional

from rankvote.vote import Vote


class VotingSystemError(Exception):
    '''A voting system with a valid setup ended up in an unresolvable state.'''
    pass


@dataclasses.dataclass(frozen=True)
class ElectionResult:
    '''Outcome of a single-winner evaluation.

    :param winner: Nomination id of the winner, or None if nobody could be
        elected (no candidates or no usable votes).
    :param method: Name of the method that determined the winner.
    :param tie_broken: Whether the winner was chosen by a tie-break rather
        than by the counting itself.
    :param winner_vote_time: Time of the vote that decided the tie-break.
    '''
    winner: Optional[str]
    method: Optional[str] = None
    tie_broken: bool = False
    winner_vote_time: Optional[int] = None

    def __bool__(self) -> bool:
        return self.winner is not None


class Evaluator(metaclass=abc.ABCMeta):
    '''Evaluate ranked votes for candidates.

    A root abstract base class for all evaluators. Candidates are given
    as a list of nomination ids, which is the universe of the election;
    ballot entries outside it are ignored.
    '''
    @abc.abstractmethod
    def evaluate(self,
                 candidates: List[str],
                 votes: Iterable[Vote],
                 ) -> Any:
        raise NotImplementedError


class SingleWinnerEvaluator(Evaluator):
    '''Elect at most one candidate, reporting how the winner was found.'''

    @abc.abstractmethod
    def evaluate(self,
                 candidates: List[str],
                 votes: Iterable[Vote],
                 ) -> ElectionResult:
        '''Elect a single candidate.

        :param candidates: Nomination ids standing in the election.
        :param votes: Ranked ballots.
        :returns: The result; its winner is None if nobody can be elected.
        '''
        raise NotImplementedError


class TieBreaker(metaclass=abc.ABCMeta):
    '''Choose among candidates the counting could not separate.'''

    @abc.abstractmethod
    def select(self,
               tied: List[str],
               votes: Iterable[Vote],
               ) -> Any:
        raise NotImplementedError
