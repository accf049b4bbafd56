'''Runtime settings read from the environment.'''

from __future__ import annotations

import dataclasses
import os
from typing import Optional

import environ

DEFAULT_DATA_FILE = os.path.join('data', 'elections.json')
DEFAULT_RETENTION_SECONDS = 2 * 60 * 60
DEFAULT_VOTING_WINDOW_SECONDS = 10 * 60
DEFAULT_HTTP_TIMEOUT = 10.0


@dataclasses.dataclass(frozen=True)
class Settings:
    '''Storage and policy settings.

    :param storage: Explicit storage backend name (``sql``, ``rest``,
        ``redis`` or ``file``). If None, the first configured backend wins
        in that order.
    :param database_url: SQLAlchemy URL of the managed database.
    :param kv_rest_api_url: Base URL of the REST key-value store.
    :param kv_rest_api_token: Bearer token of the REST key-value store.
    :param redis_url: Connection URL of the Redis key-value store.
    :param data_file: Path of the local JSON file fallback.
    :param retention_seconds: Age after which elections expire.
    :param voting_window_seconds: Length of the voting phase after its start.
    :param http_timeout: Timeout of REST key-value requests in seconds.
    '''
    storage: Optional[str] = None
    database_url: Optional[str] = None
    kv_rest_api_url: Optional[str] = None
    kv_rest_api_token: Optional[str] = None
    redis_url: Optional[str] = None
    data_file: str = DEFAULT_DATA_FILE
    retention_seconds: int = DEFAULT_RETENTION_SECONDS
    voting_window_seconds: int = DEFAULT_VOTING_WINDOW_SECONDS
    http_timeout: float = DEFAULT_HTTP_TIMEOUT

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> Settings:
        '''Read the settings from environment variables.

        :param env_file: Path to a ``.env`` file to read first. Variables
            already set in the environment take precedence over it.
        '''
        if env_file is not None:
            environ.Env.read_env(env_file)
        env = environ.Env()
        return cls(
            storage=env.str('RANKVOTE_STORAGE', default=None) or None,
            database_url=env.str('DATABASE_URL', default=None) or None,
            kv_rest_api_url=env.str('KV_REST_API_URL', default=None) or None,
            kv_rest_api_token=(
                env.str('KV_REST_API_TOKEN', default=None) or None
            ),
            redis_url=env.str('REDIS_URL', default=None) or None,
            data_file=env.str('RANKVOTE_DATA_FILE', default=DEFAULT_DATA_FILE),
            retention_seconds=env.int(
                'RANKVOTE_RETENTION_SECONDS',
                default=DEFAULT_RETENTION_SECONDS,
            ),
            voting_window_seconds=env.int(
                'RANKVOTE_VOTING_WINDOW_SECONDS',
                default=DEFAULT_VOTING_WINDOW_SECONDS,
            ),
            http_timeout=env.float(
                'RANKVOTE_HTTP_TIMEOUT', default=DEFAULT_HTTP_TIMEOUT
            ),
        )

    @property
    def retention_ms(self) -> int:
        return self.retention_seconds * 1000

    @property
    def voting_window_ms(self) -> int:
        return self.voting_window_seconds * 1000
