'''Election storage backends.

All backends implement the :class:`core.ElectionRepository` interface and
store whole election aggregates as JSON records:

-   :mod:`sql` - a managed relational database (SQLAlchemy),
-   :mod:`restkv` - a remote key-value store over HTTP,
-   :mod:`rediskv` - a Redis key-value store over TCP,
-   :mod:`file` - a local JSON file, usable without any configuration.

Use :func:`create_repository` to construct the backend selected by the
settings, or :func:`get_default_repository` to get the one configured by
the environment, constructed once per process.
'''

import functools
import logging
from typing import Callable, Dict, Optional

from rankvote.config import Settings
from rankvote.store.core import ElectionRepository, StorageError    # noqa: F401

logger = logging.getLogger(__name__)


def _sql(settings: Settings) -> ElectionRepository:
    from rankvote.store.sql import SqlElectionRepository
    return SqlElectionRepository(settings.database_url)


def _rest(settings: Settings) -> ElectionRepository:
    from rankvote.store.restkv import RestKVElectionRepository
    return RestKVElectionRepository(
        settings.kv_rest_api_url,
        settings.kv_rest_api_token,
        timeout=settings.http_timeout,
    )


def _redis(settings: Settings) -> ElectionRepository:
    from rankvote.store.rediskv import RedisElectionRepository
    return RedisElectionRepository(settings.redis_url)


def _file(settings: Settings) -> ElectionRepository:
    from rankvote.store.file import FileElectionRepository
    return FileElectionRepository(settings.data_file)


BACKENDS: Dict[str, Callable[[Settings], ElectionRepository]] = {
    'sql': _sql,
    'rest': _rest,
    'redis': _redis,
    'file': _file,
}


def detect_backend(settings: Settings) -> str:
    '''Select the backend name from the settings.

    An explicit ``storage`` setting wins. Otherwise, the first configured
    backend is used in the order of priority: managed database, REST
    key-value store, Redis, local file.

    :raises ValueError: If an unknown backend is requested explicitly.
    '''
    if settings.storage:
        if settings.storage not in BACKENDS:
            raise ValueError(
                f'unknown storage backend {settings.storage!r}, available: '
                + ', '.join(BACKENDS.keys())
            )
        return settings.storage
    if settings.database_url:
        return 'sql'
    elif settings.kv_rest_api_url and settings.kv_rest_api_token:
        return 'rest'
    elif settings.redis_url:
        return 'redis'
    else:
        return 'file'


def create_repository(settings: Settings) -> ElectionRepository:
    '''Construct the storage backend selected by the settings.'''
    name = detect_backend(settings)
    logger.info('using %s election storage', name)
    return BACKENDS[name](settings)


@functools.lru_cache(maxsize=None)
def get_default_repository(env_file: Optional[str] = None
                           ) -> ElectionRepository:
    '''Return the repository configured by the environment.

    The backend is selected and constructed on the first call only; later
    calls return the same instance.
    '''
    return create_repository(Settings.from_env(env_file))
