'''The election aggregate and its lifecycle states.

An :class:`Election` holds everything about one group decision: its
participants, the nominated candidates, the ballots cast and, once
finalized, the result. It is always loaded, mutated and stored as a whole.

The stored lifecycle state moves along::

    nomination -> voting -> completed
         |          |
         +----------+----> cancelled

``completed`` and ``cancelled`` are terminal. The phase shown to clients
before finalization is derived from the voting start time (see
:mod:`rankvote.report`).
'''

from __future__ import annotations

import enum
import dataclasses
from typing import List, Optional

import rankvote.util
from rankvote.candidate import Nomination
from rankvote.vote import Vote
from rankvote.persist import record_serialization


class ElectionError(Exception):
    '''An election operation could not be performed.'''
    pass


class ElectionNotFoundError(ElectionError, LookupError):
    '''The election does not exist (never created, deleted or expired).

    :param election_id: Identifier of the missing election.
    '''
    def __init__(self, election_id: str):
        self.election_id = election_id
        super().__init__(f'election not found: {election_id}')


class ElectionStatus(str, enum.Enum):
    NOMINATION = 'nomination'
    VOTING = 'voting'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'

    @property
    def is_terminal(self) -> bool:
        return self in (ElectionStatus.COMPLETED, ElectionStatus.CANCELLED)


class BallotVisibility(str, enum.Enum):
    SECRET = 'secret'
    OPEN = 'open'

    @classmethod
    def parse(cls, value) -> BallotVisibility:
        '''Normalize a visibility value; anything but open is secret.'''
        if value == cls.OPEN or value == cls.OPEN.value:
            return cls.OPEN
        return cls.SECRET


class WinnerMethod(str, enum.Enum):
    CONDORCET = 'Condorcet'
    INSTANT_RUNOFF = 'Instant Runoff'


@record_serialization
@dataclasses.dataclass
class Election:
    '''An election aggregate.

    :param id: Unique identifier.
    :param name: Free-text name of the election.
    :param group_codeword: Shared secret of the group. Checked by the
        request layer, never by this library.
    :param admin_name: Name of the participant who created the election.
    :param vote_start_time: When the voting phase starts or started,
        in epoch milliseconds.
    :param created_at: Creation time in epoch milliseconds; drives retention.
    :param state: Stored lifecycle state.
    :param ballot_visibility: Whether ballots are revealed after completion.
    :param participants: Names of participants; unique case-insensitively.
    :param nominations: Candidates in submission order.
    :param votes: Ballots, at most one per voter name.
    :param winner: Nomination id of the winner once finalized, if any.
    :param winner_method: Method that determined the winner.
    :param tie_broken: Whether the winner was decided by the earliest
        first-preference tie-break.
    :param winner_vote_time: Time of the deciding first-preference vote
        when the tie-break was used.
    :param retention_exempt: Keep the election beyond the retention window.
    '''
    id: str
    name: str
    group_codeword: str = ''
    admin_name: str = ''
    vote_start_time: int = 0
    created_at: int = 0
    state: ElectionStatus = ElectionStatus.NOMINATION
    ballot_visibility: BallotVisibility = BallotVisibility.SECRET
    participants: List[str] = dataclasses.field(default_factory=list)
    nominations: List[Nomination] = dataclasses.field(
        default_factory=list, metadata={'record': Nomination}
    )
    votes: List[Vote] = dataclasses.field(
        default_factory=list, metadata={'record': Vote}
    )
    winner: Optional[str] = None
    winner_method: Optional[WinnerMethod] = None
    tie_broken: bool = False
    winner_vote_time: Optional[int] = None
    retention_exempt: bool = False

    def __post_init__(self):
        self.state = ElectionStatus(self.state or ElectionStatus.NOMINATION)
        self.ballot_visibility = BallotVisibility.parse(self.ballot_visibility)
        if self.winner_method is not None:
            self.winner_method = WinnerMethod(self.winner_method)
        self.participants = list(self.participants or [])
        self.nominations = list(self.nominations or [])
        self.votes = list(self.votes or [])
        self.tie_broken = bool(self.tie_broken)
        self.vote_start_time = rankvote.util.to_timestamp(self.vote_start_time)
        self.created_at = rankvote.util.to_timestamp(self.created_at)
        self.winner_vote_time = rankvote.util.to_timestamp(
            self.winner_vote_time, optional=True
        )

    @property
    def candidates(self) -> List[str]:
        '''Nomination ids in nomination order.'''
        return [nom.id for nom in self.nominations]

    def nomination(self, nomination_id: str) -> Optional[Nomination]:
        for nom in self.nominations:
            if nom.id == nomination_id:
                return nom
        return None

    def has_participant(self, name: str) -> bool:
        lowered = name.lower()
        return any(part.lower() == lowered for part in self.participants)

    def add_participant(self, name: str) -> bool:
        '''Add a participant unless already present (case-insensitively).

        :returns: Whether the participant was added.
        '''
        if self.has_participant(name):
            return False
        self.participants.append(name)
        return True

    def put_nomination(self, nomination: Nomination) -> None:
        '''Add a nomination, replacing the nominator's previous one.

        Write-ins are always appended. A regular nomination takes the place
        of the earlier regular nomination by the same nominator, if any.
        '''
        if not nomination.is_write_in:
            for i, existing in enumerate(self.nominations):
                if existing.is_nominated_by(nomination.nominator_name):
                    self.nominations[i] = nomination
                    return
        self.nominations.append(nomination)

    def remove_nomination(self, nomination_id: str) -> None:
        self.nominations = [
            nom for nom in self.nominations if nom.id != nomination_id
        ]

    def put_vote(self, vote: Vote) -> None:
        '''Add a vote, replacing any previous vote by the same voter.'''
        for i, existing in enumerate(self.votes):
            if existing.voter_name == vote.voter_name:
                self.votes[i] = vote
                return
        self.votes.append(vote)

    def clear_result(self) -> None:
        self.winner = None
        self.winner_method = None
        self.tie_broken = False
        self.winner_vote_time = None
