'''Nominations - the candidates standing in an election.

Candidates are referred to everywhere else (ballot rankings, pairwise
matrices, results) by their nomination id, a plain string. The
:class:`Nomination` object carries the label displayed to voters and
whatever opaque metadata the nominating client attached to it
(address, rating, price level, photo...); none of that is looked at by the
evaluators.
'''

from __future__ import annotations

import dataclasses
from typing import Any, Callable, Dict, Optional

import rankvote.util
from rankvote.persist import record_serialization


@record_serialization
@dataclasses.dataclass
class Nomination:
    '''A candidate entry in an election.

    :param id: Unique identifier of the nomination within the election.
        Ballots rank nominations by this identifier.
    :param nominator_name: Name of the participant who submitted it.
    :param restaurant_name: Label of the candidate as displayed to voters.
    :param is_write_in: Write-ins are always added as new candidates;
        a regular nomination replaces the earlier regular nomination
        of the same nominator.
    :param created_at: Submission time in epoch milliseconds.
    :param metadata: Opaque additional information about the candidate.
    '''
    id: str
    nominator_name: str
    restaurant_name: str
    is_write_in: bool = False
    created_at: int = 0
    metadata: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        self.is_write_in = bool(self.is_write_in)
        self.created_at = rankvote.util.to_timestamp(self.created_at)

    @classmethod
    def create(cls,
               nominator_name: str,
               restaurant_name: str,
               is_write_in: bool = False,
               metadata: Optional[Dict[str, Any]] = None,
               clock: Callable[[], int] = rankvote.util.now_ms,
               ) -> Nomination:
        '''Create a new nomination with a fresh id and creation time.'''
        return cls(
            id=rankvote.util.generate_id(),
            nominator_name=nominator_name,
            restaurant_name=restaurant_name,
            is_write_in=is_write_in,
            created_at=clock(),
            metadata=metadata,
        )

    def is_nominated_by(self, name: str) -> bool:
        '''Whether this is a regular nomination by the given participant.

        Nominator names are compared case-insensitively; write-ins never
        match.
        '''
        return (
            not self.is_write_in
            and self.nominator_name.lower() == name.lower()
        )
