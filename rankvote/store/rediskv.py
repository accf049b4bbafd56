"""Redis key-value storage over TCP.

Each election is stored as a JSON string under ``election:<id>``; the set
``elections:ids`` holds all known ids to support listing.
"""

import json
from typing import Any, Dict, List, Optional

import redis

from rankvote.store.core import ElectionRepository

KEY_PREFIX = 'election:'
IDS_KEY = 'elections:ids'


def election_key(election_id: str) -> str:
    return KEY_PREFIX + election_id


class RedisElectionRepository(ElectionRepository):
    """Store elections in Redis.

    :param client: A Redis client or a connection URL to create one from.
        The client must decode responses to strings.
    """
    backend_name = 'redis'
    errors = (redis.RedisError, )

    def __init__(self, client):
        if isinstance(client, str):
            client = redis.Redis.from_url(client, decode_responses=True)
        self.client = client

    def load_record(self, election_id: str) -> Optional[str]:
        return self.client.get(election_key(election_id))

    def load_all_records(self) -> List[str]:
        ids = sorted(self.client.smembers(IDS_KEY))
        if not ids:
            return []
        values = self.client.mget([election_key(eid) for eid in ids])
        return [value for value in values if value is not None]

    def store_record(self, election_id: str, record: Dict[str, Any]) -> None:
        pipe = self.client.pipeline(transaction=True)
        pipe.set(election_key(election_id), json.dumps(record))
        pipe.sadd(IDS_KEY, election_id)
        pipe.execute()

    def remove_record(self, election_id: str) -> None:
        pipe = self.client.pipeline(transaction=True)
        pipe.delete(election_key(election_id))
        pipe.srem(IDS_KEY, election_id)
        pipe.execute()
