"""Postgres connection pools."""

import os
from contextlib import contextmanager
from typing import Any, Dict, Generator

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from ..logging_config import create_logger

logger = create_logger(__name__)


class DatabaseConfig:
    """Connection settings resolved from the ``postgres`` config section."""

    def __init__(self, config: Dict[str, Any]) -> None:
        self.host = config.get("host", "localhost")
        self.port = config.get("port", 5432)
        self.database = config.get("database", "rsspress")
        self.user = config.get("user", "rsspress_user")
        self.pool_size = config.get("pool_size", 10)
        self.connect_timeout = config.get("connect_timeout", 5)

        # Environment wins over an inline password
        password_env = config.get("password_env")
        if password_env and os.environ.get(password_env):
            self.password = os.environ[password_env]
        else:
            self.password = config.get("password") or ""

    @property
    def connection_string(self) -> str:
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"


# One pool per connection string
_pools: Dict[str, ConnectionPool] = {}


def get_connection_pool(config: Dict[str, Any]) -> ConnectionPool:
    """Get or create the pool for ``config``."""
    db_config = DatabaseConfig(config)
    pool = _pools.get(db_config.connection_string)
    if pool is None:
        logger.debug("Opening connection pool for %s:%s/%s", db_config.host, db_config.port, db_config.database)
        pool = ConnectionPool(
            db_config.connection_string,
            min_size=1,
            max_size=db_config.pool_size,
            kwargs={"row_factory": dict_row, "connect_timeout": db_config.connect_timeout},
            open=True,
        )
        _pools[db_config.connection_string] = pool
    return pool


def close_connection_pools() -> None:
    """Close every open pool; the next connection request opens a new one."""
    while _pools:
        _, pool = _pools.popitem()
        pool.close()


@contextmanager
def get_connection(config: Dict[str, Any]) -> Generator[psycopg.Connection, None, None]:
    """Borrow a connection from the pool."""
    pool = get_connection_pool(config)
    with pool.connection() as conn:
        yield conn
