import sys
import os
import io

import environ
import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import rankvote.persist
import rankvote.util
import rankvote.__main__
from rankvote.candidate import Nomination
from rankvote.election import Election
from rankvote.store.file import FileElectionRepository
from rankvote.vote import Vote


def make_election(created_at=0):
    return Election(
        id='e1',
        name='Friday dinner',
        created_at=created_at,
        nominations=[
            Nomination('n1', 'ann', 'Thai Palace'),
            Nomination('n2', 'bob', 'Pizza Hut'),
            Nomination('n3', 'cid', 'Sushi Bar'),
        ],
        votes=[
            Vote('ann', ['n1', 'n2', 'n3'], created_at=100),
            Vote('bob', ['n2', 'n3', 'n1'], created_at=200),
            Vote('cid', ['n3', 'n1', 'n2'], created_at=300),
        ],
    )


@pytest.fixture
def input_file(tmp_path):
    path = tmp_path / 'election.json'
    path.write_text(rankvote.persist.to_json(make_election()))
    with open(path, encoding='utf8') as infile:
        yield infile


@pytest.fixture
def data_file(monkeypatch, tmp_path):
    path = str(tmp_path / 'elections.json')
    monkeypatch.setattr(environ.Env, 'ENVIRON', {
        'RANKVOTE_STORAGE': 'file',
        'RANKVOTE_DATA_FILE': path,
    })
    return path


def test_evaluate_file(input_file, capsys):
    assert rankvote.__main__.main(input_file=input_file, matrix=True) == 0
    out = capsys.readouterr().out
    assert 'Received 3 votes for 3 candidates' in out
    assert 'Pairwise wins' in out
    assert out.count('beats 1') == 3
    assert 'Thai Palace (Instant Runoff)' in out
    assert 'Tie broken by the earliest first preference at 100' in out


def test_evaluate_condorcet_only(input_file, capsys):
    assert rankvote.__main__.main(
        input_file=input_file, system='condorcet'
    ) == 0
    assert 'Nobody elected' in capsys.readouterr().out


def test_invalid_input():
    with pytest.raises(ValueError):
        rankvote.__main__.load_election(io.StringIO('{"id": '))


def test_list_empty(data_file, capsys):
    assert rankvote.__main__.main(list_elections=True) == 0
    assert 'No elections' in capsys.readouterr().out


def test_list_and_load(data_file, capsys):
    election = make_election(created_at=rankvote.util.now_ms())
    FileElectionRepository(data_file).save_election(election)
    assert rankvote.__main__.main(list_elections=True) == 0
    out = capsys.readouterr().out
    assert 'e1' in out
    assert 'Friday dinner' in out
    assert '(3 nominations)' in out
    assert rankvote.__main__.main(election_id='e1', system='irv') == 0
    assert 'Thai Palace' in capsys.readouterr().out


def test_missing_election(data_file):
    with pytest.warns(UserWarning):
        assert rankvote.__main__.main(election_id='missing') == 1


def test_argparser():
    args = rankvote.__main__.argparser.parse_args(['-e', 'e1', '-s', 'irv'])
    assert args.election_id == 'e1'
    assert args.system == 'irv'
    assert not args.list_elections


def test_list_custom_voting_window(data_file, capsys):
    now = rankvote.util.now_ms()
    election = Election(
        id='e2', name='Lunch', created_at=now, vote_start_time=now - 120000
    )
    FileElectionRepository(data_file).save_election(election)
    assert rankvote.__main__.main(list_elections=True) == 0
    assert 'voting' in capsys.readouterr().out
    environ.Env.ENVIRON['RANKVOTE_VOTING_WINDOW_SECONDS'] = '60'
    assert rankvote.__main__.main(list_elections=True) == 0
    assert 'completed' in capsys.readouterr().out
