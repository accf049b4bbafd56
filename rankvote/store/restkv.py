"""Remote key-value storage over HTTP (Redis-compatible REST API).

Commands are posted as JSON arrays (``["GET", "election:abc"]``) with
a bearer token; the response carries either a ``result`` or an ``error``.
The key scheme is the same as in :mod:`rankvote.store.rediskv`.
"""

import json
from typing import Any, Dict, List, Optional

import requests

from rankvote.config import DEFAULT_HTTP_TIMEOUT
from rankvote.store.core import ElectionRepository
from rankvote.store.rediskv import IDS_KEY, election_key


class RestKVError(Exception):
    """The key-value service rejected a command."""
    pass


class RestKVElectionRepository(ElectionRepository):
    """Store elections in a key-value store reachable over HTTPS.

    :param url: Base URL of the REST API.
    :param token: Bearer token authorizing the requests.
    :param timeout: Request timeout in seconds.
    :param session: A requests session to use; a new one is created if not
        given.
    """
    backend_name = 'rest'
    errors = (requests.RequestException, RestKVError)

    def __init__(self,
                 url: str,
                 token: str,
                 timeout: float = DEFAULT_HTTP_TIMEOUT,
                 session: Optional[requests.Session] = None,
                 ):
        self.url = url.rstrip('/')
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.session.headers.update({'Authorization': f'Bearer {token}'})

    def command(self, *args: Any) -> Any:
        """Run a single command and return its result."""
        return self._unwrap(self._post(self.url, list(args)))

    def transaction(self, *commands: List[Any]) -> List[Any]:
        """Run the commands atomically and return their results."""
        body = self._post(self.url + '/multi-exec', [list(c) for c in commands])
        if not isinstance(body, list):
            return [self._unwrap(body)]
        return [self._unwrap(item) for item in body]

    def load_record(self, election_id: str) -> Optional[str]:
        return self.command('GET', election_key(election_id))

    def load_all_records(self) -> List[str]:
        ids = sorted(self.command('SMEMBERS', IDS_KEY) or [])
        if not ids:
            return []
        values = self.command('MGET', *[election_key(eid) for eid in ids])
        return [value for value in values if value is not None]

    def store_record(self, election_id: str, record: Dict[str, Any]) -> None:
        self.transaction(
            ['SET', election_key(election_id), json.dumps(record)],
            ['SADD', IDS_KEY, election_id],
        )

    def remove_record(self, election_id: str) -> None:
        self.transaction(
            ['DEL', election_key(election_id)],
            ['SREM', IDS_KEY, election_id],
        )

    def _post(self, url: str, payload: Any) -> Any:
        response = self.session.post(url, json=payload, timeout=self.timeout)
        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = None
            error = body.get('error') if isinstance(body, dict) else None
            if error:
                raise RestKVError(error)
            response.raise_for_status()
        return response.json()

    @staticmethod
    def _unwrap(body: Any) -> Any:
        if not isinstance(body, dict):
            raise RestKVError(f'unexpected response: {body!r}')
        if body.get('error'):
            raise RestKVError(body['error'])
        return body.get('result')
