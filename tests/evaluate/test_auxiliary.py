import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import rankvote.evaluate.auxiliary
from rankvote.vote import Vote

VOTES = [
    Vote('ann', ['b', 'a'], created_at=300),
    Vote('bob', ['a', 'b'], created_at=200),
    Vote('cid', ['b'], created_at=100),
    Vote('dan', ['c', 'a'], created_at=400),
    Vote('eve', [], created_at=50),
]


@pytest.mark.parametrize('tied, selected, vote_time', [
    (['a', 'b'], 'b', 100),
    (['a', 'c'], 'a', 200),
    (['d', 'a'], 'a', 200),
    (['d', 'e'], 'd', None),
    ([], None, None),
])
def test_earliest(tied, selected, vote_time):
    breaker = rankvote.evaluate.auxiliary.EARLIEST_FIRST_PREFERENCE
    assert breaker.select(tied, VOTES) == (selected, vote_time)


@pytest.mark.parametrize('tied, selected, vote_time', [
    (['a', 'b'], 'a', 200),
    (['a', 'c'], 'c', 400),
    (['a', 'd'], 'd', None),
])
def test_latest(tied, selected, vote_time):
    breaker = rankvote.evaluate.auxiliary.LATEST_FIRST_PREFERENCE
    assert breaker.select(tied, VOTES) == (selected, vote_time)


def test_transferred_preferences_ignored():
    # b is ranked first only after a is dropped from the ballot
    votes = [
        Vote('ann', ['x', 'b'], created_at=10),
        Vote('bob', ['a'], created_at=20),
    ]
    breaker = rankvote.evaluate.auxiliary.EARLIEST_FIRST_PREFERENCE
    assert breaker.select(['a', 'b'], votes) == ('a', 20)


def test_equal_times_keep_order():
    votes = [
        Vote('ann', ['b'], created_at=10),
        Vote('bob', ['a'], created_at=10),
    ]
    breaker = rankvote.evaluate.auxiliary.EARLIEST_FIRST_PREFERENCE
    assert breaker.select(['a', 'b'], votes) == ('a', 10)
    assert breaker.select(['b', 'a'], votes) == ('b', 10)
