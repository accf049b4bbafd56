'''Election lifecycle management.

The :class:`ElectionManager` is the public surface of the library. Every
operation is a read-modify-write of the whole election aggregate through an
:class:`rankvote.store.ElectionRepository`; no election state is cached
between operations, so any number of manager instances (in any number of
processes) can share one store.

There is no locking or versioning: two concurrent mutations of the same
election race, and the last write of the whole aggregate wins.

Elections expire after a retention window (two hours by default) counted
from their creation. Expiry is checked lazily whenever an election is read:
an expired election is deleted from the store and treated as if it never
existed. Elections created with ``retention_exempt`` never expire.
'''

from __future__ import annotations

import dataclasses
import logging
from typing import Callable, List, Optional, Union

import rankvote.util
import rankvote.store
import rankvote.system
from rankvote.config import DEFAULT_RETENTION_SECONDS, Settings
from rankvote.candidate import Nomination
from rankvote.election import (
    BallotVisibility, Election, ElectionNotFoundError, ElectionStatus,
    WinnerMethod,
)
from rankvote.store import ElectionRepository, StorageError
from rankvote.vote import Vote

logger = logging.getLogger(__name__)


class RetentionPolicy:
    '''Decides when elections expire.

    :param window_ms: Age in milliseconds after which an election expires.
    '''
    def __init__(self, window_ms: int = DEFAULT_RETENTION_SECONDS * 1000):
        self.window_ms = window_ms

    def is_expired(self, election: Election, now: int) -> bool:
        if election.retention_exempt:
            return False
        return now - election.created_at > self.window_ms


class ElectionManager:
    '''Owns the election state machine and mutates elections in storage.

    Reads (:meth:`get_election`, :meth:`get_all_elections`) never raise and
    report missing or expired elections as None or by omission. Mutations
    raise :class:`rankvote.election.ElectionNotFoundError` for those and
    propagate :class:`rankvote.store.StorageError` when the write fails.

    :param repository: Storage backend of the elections.
    :param retention: Expiry policy applied on every read.
    :param clock: Callable returning the current time in epoch
        milliseconds.
    :param system: Voting system determining the winner on finalization.
    '''
    def __init__(self,
                 repository: ElectionRepository,
                 retention: Optional[RetentionPolicy] = None,
                 clock: Callable[[], int] = rankvote.util.now_ms,
                 system: rankvote.system.VotingSystem =
                     rankvote.system.DEFAULT_SYSTEM,
                 ):
        self.repository = repository
        self.retention = retention if retention is not None else RetentionPolicy()
        self.clock = clock
        self.system = system

    @classmethod
    def from_settings(cls,
                      settings: Settings,
                      repository: Optional[ElectionRepository] = None,
                      **kwargs,
                      ) -> ElectionManager:
        '''Create a manager using the storage and retention settings.'''
        if repository is None:
            repository = rankvote.store.create_repository(settings)
        return cls(
            repository,
            retention=RetentionPolicy(settings.retention_ms),
            **kwargs
        )

    def create_election(self,
                        name: str,
                        admin_name: str,
                        group_codeword: str,
                        vote_start_time: int,
                        ballot_visibility: Union[str, BallotVisibility] =
                            BallotVisibility.SECRET,
                        retention_exempt: bool = False,
                        ) -> Election:
        '''Create and store a new election in the nomination phase.'''
        election = Election(
            id=rankvote.util.generate_id(),
            name=name,
            group_codeword=group_codeword,
            admin_name=admin_name,
            vote_start_time=vote_start_time,
            created_at=self.clock(),
            ballot_visibility=ballot_visibility,
            retention_exempt=retention_exempt,
        )
        self.repository.save_election(election)
        logger.info('created election %s (%s)', election.id, election.name)
        return election

    def get_election(self, election_id: str) -> Optional[Election]:
        '''Return the election, or None if it does not exist or expired.'''
        election = self.repository.get_election(election_id)
        if election is None:
            return None
        return self._retain(election, self.clock())

    def get_all_elections(self) -> List[Election]:
        '''Return all elections that have not expired.'''
        now = self.clock()
        retained = []
        for election in self.repository.get_all_elections():
            if self._retain(election, now) is not None:
                retained.append(election)
        return retained

    def delete_election(self, election_id: str) -> None:
        self.repository.delete_election(election_id)

    def add_participant(self, election_id: str, name: str) -> Election:
        '''Add a participant; names already present are accepted silently.'''
        election = self._load(election_id)
        if election.add_participant(name):
            self.repository.save_election(election)
        return election

    def add_nomination(self,
                       election_id: str,
                       nomination: Nomination,
                       ) -> Election:
        '''Add a nomination, replacing the nominator's previous regular one.

        Write-ins are always appended as new candidates.
        '''
        election = self._load(election_id)
        election.put_nomination(nomination)
        self.repository.save_election(election)
        return election

    def remove_nomination(self,
                          election_id: str,
                          nomination_id: str,
                          ) -> Election:
        '''Remove a nomination; removing an unknown one changes nothing.'''
        election = self._load(election_id)
        election.remove_nomination(nomination_id)
        self.repository.save_election(election)
        return election

    def add_vote(self, election_id: str, vote: Vote) -> Election:
        '''Record a vote, replacing the voter's previous vote.

        The vote creation time is set to the current time.
        '''
        election = self._load(election_id)
        election.put_vote(dataclasses.replace(vote, created_at=self.clock()))
        self.repository.save_election(election)
        return election

    def start_voting(self, election_id: str) -> Election:
        '''Start the voting phase now.

        Only moves the voting start time; the phase seen by clients is
        derived from it (see :func:`rankvote.report.effective_status`).
        '''
        election = self._load(election_id)
        election.vote_start_time = self.clock()
        self.repository.save_election(election)
        return election

    def finalize_election(self, election_id: str) -> Election:
        '''Complete the election and determine its winner.

        A cancelled election is returned unchanged. Otherwise, the election
        is marked completed and stored even if the winner cannot be
        determined; failures of the evaluation are logged, never raised.
        '''
        election = self._load(election_id)
        if election.state == ElectionStatus.CANCELLED:
            return election
        election.state = ElectionStatus.COMPLETED
        try:
            result = self.system.evaluate(election.candidates, election.votes)
            election.winner = result.winner
            election.winner_method = WinnerMethod(result.method)
            election.tie_broken = result.tie_broken
            election.winner_vote_time = result.winner_vote_time
        except Exception:
            logger.exception('failed to determine winner of election %s',
                             election_id)
        else:
            logger.info('election %s won by %s (%s)',
                        election_id, election.winner, result.method)
        self.repository.save_election(election)
        return election

    def cancel_election(self, election_id: str) -> Election:
        '''Cancel the election and clear any result.

        Cancelling a cancelled election changes nothing.
        '''
        election = self._load(election_id)
        if election.state == ElectionStatus.CANCELLED:
            return election
        election.state = ElectionStatus.CANCELLED
        election.clear_result()
        self.repository.save_election(election)
        return election

    def _load(self, election_id: str) -> Election:
        election = self.get_election(election_id)
        if election is None:
            raise ElectionNotFoundError(election_id)
        return election

    def _retain(self, election: Election, now: int) -> Optional[Election]:
        if not self.retention.is_expired(election, now):
            return election
        logger.info('election %s expired, deleting', election.id)
        try:
            self.repository.delete_election(election.id)
        except StorageError:
            logger.warning('could not delete expired election %s',
                           election.id)
        return None
