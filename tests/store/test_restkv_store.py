import sys
import os
import json
from unittest import mock

import pytest
import requests

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import rankvote.persist
from rankvote.election import Election
from rankvote.store import StorageError
from rankvote.store.restkv import RestKVElectionRepository, RestKVError

URL = 'https://kv.example.com'


def make_response(body, status_code=200):
    response = mock.Mock()
    response.status_code = status_code
    response.json.return_value = body
    return response


@pytest.fixture
def session():
    session = mock.Mock()
    session.headers = {}
    return session


@pytest.fixture
def repository(session):
    return RestKVElectionRepository(URL + '/', 'secret', session=session)


def test_authorization(repository, session):
    assert session.headers['Authorization'] == 'Bearer secret'
    assert repository.url == URL


def test_get(repository, session):
    election = Election('e1', 'Lunch')
    session.post.return_value = make_response(
        {'result': rankvote.persist.to_json(election)}
    )
    assert repository.get_election('e1') == election
    session.post.assert_called_once_with(
        URL, json=['GET', 'election:e1'], timeout=10.0
    )


def test_get_missing(repository, session):
    session.post.return_value = make_response({'result': None})
    assert repository.get_election('e1') is None


def test_get_all(repository, session):
    election = Election('a', 'Lunch')
    session.post.side_effect = [
        make_response({'result': ['b', 'a']}),
        make_response({'result': [rankvote.persist.to_json(election), None]}),
    ]
    assert repository.get_all_elections() == [election]
    session.post.assert_called_with(
        URL, json=['MGET', 'election:a', 'election:b'], timeout=10.0
    )


def test_save(repository, session):
    session.post.return_value = make_response([{'result': 'OK'}, {'result': 1}])
    election = Election('e1', 'Lunch')
    repository.save_election(election)
    url, = session.post.call_args.args
    commands = session.post.call_args.kwargs['json']
    assert url == URL + '/multi-exec'
    assert commands[0][:2] == ['SET', 'election:e1']
    assert json.loads(commands[0][2]) == rankvote.persist.to_dict(election)
    assert commands[1] == ['SADD', 'elections:ids', 'e1']


def test_delete(repository, session):
    session.post.return_value = make_response([{'result': 1}, {'result': 1}])
    repository.delete_election('e1')
    session.post.assert_called_once_with(
        URL + '/multi-exec',
        json=[['DEL', 'election:e1'], ['SREM', 'elections:ids', 'e1']],
        timeout=10.0,
    )


def test_command_error(repository, session):
    session.post.return_value = make_response({'error': 'WRONGTYPE'})
    with pytest.raises(RestKVError):
        repository.command('GET', 'election:e1')
    assert repository.get_election('e1') is None


def test_transaction_error(repository, session):
    session.post.return_value = make_response(
        [{'result': 'OK'}, {'error': 'ERR'}]
    )
    with pytest.raises(StorageError) as excinfo:
        repository.save_election(Election('e1', 'Lunch'))
    assert excinfo.value.backend == 'rest'


def test_http_error_with_message(repository, session):
    session.post.return_value = make_response(
        {'error': 'Unauthorized'}, status_code=401
    )
    with pytest.raises(StorageError):
        repository.delete_election('e1')


def test_http_error_without_body(repository, session):
    response = make_response(None, status_code=500)
    response.json.side_effect = ValueError('no JSON')
    response.raise_for_status.side_effect = requests.HTTPError('500')
    session.post.return_value = response
    assert repository.get_election('e1') is None
    with pytest.raises(StorageError):
        repository.save_election(Election('e1', 'Lunch'))


def test_connection_failure(repository, session):
    session.post.side_effect = requests.ConnectionError('unreachable')
    assert repository.get_all_elections() == []
    with pytest.raises(StorageError):
        repository.save_election(Election('e1', 'Lunch'))
