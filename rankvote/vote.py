'''Ranked votes (ballots).

A vote is an ordered list of nomination ids, most preferred first. It may
omit candidates: an unranked candidate counts as less preferred than every
ranked one, and two unranked candidates are not compared at all. Rankings
are not validated - ids that do not refer to a current nomination are
simply ignored by the evaluators.
'''

import dataclasses
from typing import List

import rankvote.util
from rankvote.persist import record_serialization


@record_serialization
@dataclasses.dataclass
class Vote:
    '''A single voter's ballot.

    :param voter_name: Name of the voter. An election holds at most one
        vote per voter name (compared case-sensitively).
    :param rankings: Nomination ids in the order of preference.
    :param created_at: Time the vote was recorded, in epoch milliseconds.
        Set when the vote is stored; used to break ties in instant runoff.
    '''
    voter_name: str
    rankings: List[str] = dataclasses.field(default_factory=list)
    created_at: int = 0

    def __post_init__(self):
        self.rankings = list(self.rankings)
        self.created_at = rankvote.util.to_timestamp(self.created_at)

    def first_preference(self):
        return self.rankings[0] if self.rankings else None

    def restricted_to(self, candidates) -> List[str]:
        '''Return the rankings with candidates outside the given set removed.'''
        return [cand for cand in self.rankings if cand in candidates]
