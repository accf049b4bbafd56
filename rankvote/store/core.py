"""Shared functionality of the election storage backends."""

from __future__ import annotations

import abc
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

import rankvote.persist
from rankvote.election import Election

Record = Union[Dict[str, Any], str]

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """A storage backend failed to write or delete an election.

    :param backend: Name of the failing backend.
    :param message: Description of the failure.
    """
    def __init__(self, backend: str, message: str):
        self.backend = backend
        super().__init__(f'{backend} storage failure: {message}')


class ElectionRepository(metaclass=abc.ABCMeta):
    """Persistence of whole election aggregates.

    Every backend stores each election as one opaque JSON record keyed by
    the election id. The public methods implement a uniform error contract
    on top of the backend primitives:

    -   reads (:meth:`get_election`, :meth:`get_all_elections`) never raise;
        backend failures are logged and reported as a missing election or
        an empty list, corrupt records are logged and skipped,
    -   writes (:meth:`save_election`, :meth:`delete_election`) raise
        :class:`StorageError` on any backend failure.

    Subclasses implement the record primitives and list the exception
    classes their client library raises in :attr:`errors`.
    """

    backend_name: str = NotImplemented
    errors: Tuple[type, ...] = (OSError, )

    def get_election(self, election_id: str) -> Optional[Election]:
        """Load an election, or None if there is none with the given id."""
        try:
            record = self.load_record(election_id)
        except self.errors as e:
            logger.error('%s: failed to load election %s: %s',
                         self.backend_name, election_id, e)
            return None
        if record is None:
            return None
        return self.parse_record(record)

    def get_all_elections(self) -> List[Election]:
        """Load all stored elections, in no particular order."""
        try:
            records = list(self.load_all_records())
        except self.errors as e:
            logger.error('%s: failed to list elections: %s',
                         self.backend_name, e)
            return []
        elections = []
        for record in records:
            election = self.parse_record(record)
            if election is not None:
                elections.append(election)
        return elections

    def save_election(self, election: Election) -> None:
        """Insert or overwrite the whole election record.

        :raises StorageError: If the backend fails to store the record.
        """
        record = rankvote.persist.to_dict(election)
        try:
            self.store_record(election.id, record)
        except self.errors as e:
            logger.error('%s: failed to save election %s: %s',
                         self.backend_name, election.id, e)
            raise StorageError(self.backend_name, str(e)) from e

    def delete_election(self, election_id: str) -> None:
        """Delete the election record; deleting a missing one is a no-op.

        :raises StorageError: If the backend fails to delete the record.
        """
        try:
            self.remove_record(election_id)
        except self.errors as e:
            logger.error('%s: failed to delete election %s: %s',
                         self.backend_name, election_id, e)
            raise StorageError(self.backend_name, str(e)) from e

    def parse_record(self, record: Record) -> Optional[Election]:
        try:
            if isinstance(record, str):
                return rankvote.persist.from_json(Election, record)
            else:
                return rankvote.persist.from_dict(Election, record)
        except ValueError as e:
            logger.error('%s: skipping corrupt election record: %s',
                         self.backend_name, e)
            return None

    @abc.abstractmethod
    def load_record(self, election_id: str) -> Optional[Record]:
        raise NotImplementedError

    @abc.abstractmethod
    def load_all_records(self) -> Iterable[Record]:
        raise NotImplementedError

    @abc.abstractmethod
    def store_record(self, election_id: str, record: Dict[str, Any]) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    def remove_record(self, election_id: str) -> None:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__}({self.backend_name})>'
