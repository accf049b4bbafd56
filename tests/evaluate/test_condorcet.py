import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import rankvote.convert
import rankvote.evaluate.condorcet
from rankvote.vote import Vote


def ballots(*rankings):
    return [
        Vote(f'voter{i}', list(ranking), created_at=i)
        for i, ranking in enumerate(rankings)
    ]


CONDORCET_WINNER_CASES = [
    (['a', 'b', 'c'], ballots('abc', 'abc', 'bca'), 'a'),
    (['a', 'b', 'c'], ballots('abc', 'bca', 'cab'), None),
    (['a', 'b'], ballots('ab', 'ba'), None),
    (['a', 'b', 'c'], ballots('c', 'c', 'ab'), 'c'),
    (['a'], [], 'a'),
    ([], ballots('ab'), None),
]


@pytest.mark.parametrize('candidates, votes, winner', CONDORCET_WINNER_CASES)
def test_condorcet_winner(candidates, votes, winner):
    assert rankvote.evaluate.condorcet.determine_condorcet_winner(
        candidates, votes
    ) == winner


def test_result_method():
    result = rankvote.evaluate.condorcet.CondorcetSelector().evaluate(
        ['a', 'b'], ballots('ab', 'ab', 'ba')
    )
    assert result.winner == 'a'
    assert result.method == 'Condorcet'
    assert not result.tie_broken
    assert result.winner_vote_time is None


def test_cycle_beat_counts():
    matrix = rankvote.convert.pairwise_matrix(
        ['a', 'b', 'c'], ballots('abc', 'bca', 'cab')
    )
    assert rankvote.evaluate.condorcet.beat_counts(matrix) == {
        'a': 1, 'b': 1, 'c': 1
    }


def test_pairwise_ties():
    matrix = rankvote.convert.pairwise_matrix(['a', 'b'], ballots('ab', 'ba'))
    assert rankvote.evaluate.condorcet.pairwise_wins(matrix) == []
    assert sorted(rankvote.evaluate.condorcet.pairwise_wins(
        matrix, include_ties=True
    )) == [('a', 'b'), ('b', 'a')]
