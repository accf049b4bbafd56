import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from rankvote.candidate import Nomination
from rankvote.election import (
    BallotVisibility, Election, ElectionNotFoundError, ElectionStatus,
    WinnerMethod,
)
from rankvote.vote import Vote


def test_participants_case_insensitive():
    election = Election('e1', 'Lunch')
    assert election.add_participant('Ann')
    assert not election.add_participant('ann')
    assert election.add_participant('Bob')
    assert election.participants == ['Ann', 'Bob']
    assert election.has_participant('BOB')


def test_vote_upsert():
    election = Election('e1', 'Lunch')
    election.put_vote(Vote('ann', ['n1'], created_at=1))
    election.put_vote(Vote('bob', ['n2'], created_at=2))
    election.put_vote(Vote('ann', ['n2', 'n1'], created_at=3))
    assert [vote.voter_name for vote in election.votes] == ['ann', 'bob']
    assert election.votes[0].rankings == ['n2', 'n1']
    assert election.votes[0].created_at == 3


def test_vote_names_case_sensitive():
    election = Election('e1', 'Lunch')
    election.put_vote(Vote('ann', ['n1']))
    election.put_vote(Vote('Ann', ['n1']))
    assert len(election.votes) == 2


def test_nomination_replaced_in_place():
    election = Election('e1', 'Lunch')
    election.put_nomination(Nomination('n1', 'Ann', 'Thai Palace'))
    election.put_nomination(Nomination('n2', 'bob', 'Pizza Hut'))
    election.put_nomination(Nomination('n3', 'ann', 'Sushi Bar'))
    assert election.candidates == ['n3', 'n2']


def test_write_ins_appended():
    election = Election('e1', 'Lunch')
    election.put_nomination(Nomination('n1', 'ann', 'Thai Palace'))
    election.put_nomination(Nomination('n2', 'ann', 'Taco Stand', True))
    election.put_nomination(Nomination('n3', 'ann', 'Noodle Bar', True))
    election.put_nomination(Nomination('n4', 'ann', 'Sushi Bar'))
    assert election.candidates == ['n4', 'n2', 'n3']


def test_remove_nomination():
    election = Election('e1', 'Lunch', nominations=[
        Nomination('n1', 'ann', 'Thai Palace'),
        Nomination('n2', 'bob', 'Pizza Hut'),
    ])
    election.remove_nomination('n1')
    election.remove_nomination('unknown')
    assert election.candidates == ['n2']
    assert election.nomination('n2').restaurant_name == 'Pizza Hut'
    assert election.nomination('n1') is None


def test_coercion():
    election = Election(
        'e1', 'Lunch',
        state='voting',
        ballot_visibility='open',
        winner_method='Instant Runoff',
        participants=None,
    )
    assert election.state == ElectionStatus.VOTING
    assert election.ballot_visibility == BallotVisibility.OPEN
    assert election.winner_method == WinnerMethod.INSTANT_RUNOFF
    assert election.participants == []


def test_clear_result():
    election = Election(
        'e1', 'Lunch',
        winner='n1',
        winner_method=WinnerMethod.INSTANT_RUNOFF,
        tie_broken=True,
        winner_vote_time=100,
    )
    election.clear_result()
    assert election.winner is None
    assert election.winner_method is None
    assert not election.tie_broken
    assert election.winner_vote_time is None


@pytest.mark.parametrize('status, terminal', [
    (ElectionStatus.NOMINATION, False),
    (ElectionStatus.VOTING, False),
    (ElectionStatus.COMPLETED, True),
    (ElectionStatus.CANCELLED, True),
])
def test_terminal_states(status, terminal):
    assert status.is_terminal == terminal


def test_not_found_error():
    err = ElectionNotFoundError('e1')
    assert isinstance(err, LookupError)
    assert err.election_id == 'e1'
    assert 'e1' in str(err)


def test_nomination_create():
    nomination = Nomination.create(
        'ann', 'Thai Palace', metadata={'price': 2}, clock=lambda: 1234
    )
    assert len(nomination.id) == 7
    assert nomination.created_at == 1234
    assert not nomination.is_write_in
    assert nomination.metadata == {'price': 2}
    assert nomination.is_nominated_by('ANN')
    assert not Nomination.create('ann', 'Taco Stand', True).is_nominated_by('ann')


def test_vote_helpers():
    vote = Vote('ann', ('n1', 'x', 'n2'))
    assert vote.rankings == ['n1', 'x', 'n2']
    assert vote.first_preference() == 'n1'
    assert vote.restricted_to({'n2', 'n1'}) == ['n1', 'n2']
    assert Vote('bob').first_preference() is None
