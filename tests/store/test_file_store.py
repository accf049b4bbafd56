import sys
import os
import json

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
from rankvote.election import Election
from rankvote.store import StorageError
from rankvote.store.file import FileElectionRepository
from rankvote.vote import Vote


@pytest.fixture
def path(tmp_path):
    return str(tmp_path / 'data' / 'elections.json')


@pytest.fixture
def repository(path):
    return FileElectionRepository(path)


def test_empty(repository):
    assert repository.get_election('e1') is None
    assert repository.get_all_elections() == []


def test_save_and_load(repository, path):
    election = Election('e1', 'Lunch', votes=[Vote('ann', ['n1'], 10)])
    repository.save_election(election)
    assert repository.get_election('e1') == election
    with open(path, encoding='utf8') as infile:
        records = json.load(infile)
    assert records[0]['id'] == 'e1'
    assert records[0]['votes'][0]['voterName'] == 'ann'


def test_overwrite(repository):
    repository.save_election(Election('e1', 'Lunch'))
    repository.save_election(Election('e2', 'Dinner'))
    repository.save_election(Election('e1', 'Brunch'))
    elections = repository.get_all_elections()
    assert [(e.id, e.name) for e in elections] == [
        ('e1', 'Brunch'), ('e2', 'Dinner')
    ]


def test_delete(repository):
    repository.save_election(Election('e1', 'Lunch'))
    repository.save_election(Election('e2', 'Dinner'))
    repository.delete_election('e1')
    repository.delete_election('missing')
    assert [e.id for e in repository.get_all_elections()] == ['e2']


def test_corrupt_records_skipped(repository, path):
    os.makedirs(os.path.dirname(path))
    with open(path, 'w', encoding='utf8') as outfile:
        json.dump([{'id': 'bad'}, 5, {'id': 'e1', 'name': 'Lunch'}], outfile)
    assert [e.id for e in repository.get_all_elections()] == ['e1']
    assert repository.get_election('bad') is None


def test_unreadable_file(repository, path):
    os.makedirs(os.path.dirname(path))
    with open(path, 'w', encoding='utf8') as outfile:
        outfile.write('{"not": "a list"')
    assert repository.get_election('e1') is None
    assert repository.get_all_elections() == []
    with pytest.raises(StorageError) as excinfo:
        repository.save_election(Election('e1', 'Lunch'))
    assert excinfo.value.backend == 'file'


def test_unwritable_location(tmp_path):
    blocker = tmp_path / 'blocker'
    blocker.write_text('')
    repository = FileElectionRepository(str(blocker / 'elections.json'))
    with pytest.raises(StorageError):
        repository.save_election(Election('e1', 'Lunch'))
    assert repository.get_election('e1') is None
