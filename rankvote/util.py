'''Various utility functions for other modules of Rankvote.

There should normally be no need to use these functions directly.
'''

import time
import string
import secrets
from typing import Any, Dict, Iterable, Optional
from numbers import Number

ID_ALPHABET = string.ascii_lowercase + string.digits
ID_LENGTH = 7

INF = float('inf')


def now_ms() -> int:
    '''Return the current time as integer milliseconds since the epoch.'''
    return int(time.time() * 1000)


def generate_id(length: int = ID_LENGTH) -> str:
    '''Generate a short random lowercase alphanumeric identifier.'''
    return ''.join(secrets.choice(ID_ALPHABET) for _ in range(length))


def first_preference_times(votes: Iterable[Any]) -> Dict[str, int]:
    '''Find the earliest time each candidate was ranked first on a ballot.

    Only the raw first preference of each ballot is considered, regardless
    of which candidates are still in contention.

    :param votes: Ballots (:class:`rankvote.vote.Vote`).
    :returns: Mapping of candidate ids to the earliest creation time of
        a ballot ranking them first. Candidates never ranked first are absent.
    '''
    times = {}
    for vote in votes:
        first = vote.first_preference()
        if first is None:
            continue
        if first not in times or vote.created_at < times[first]:
            times[first] = vote.created_at
    return times


def first_preference_time(times: Dict[str, int],
                          candidate: str,
                          ) -> Number:
    '''Look up the earliest first-preference time, infinite if never first.'''
    return times.get(candidate, INF)


def finite_or_none(value: Number) -> Optional[int]:
    return None if value == INF else value


def to_timestamp(value: Any, optional: bool = False) -> Optional[int]:
    '''Validate a stored epoch milliseconds value and make it an integer.

    :param value: The stored value; floats are truncated.
    :param optional: Whether None is an allowed value.
    :raises ValueError: If the value is not a finite number.
    '''
    if value is None and optional:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f'invalid timestamp: {value!r}')
    if value != value or value in (INF, -INF):
        raise ValueError(f'invalid timestamp: {value!r}')
    return int(value)
