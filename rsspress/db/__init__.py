"""Newspaper storage for rsspress."""

from ..config import Config
from .connection import close_connection_pools, get_connection, get_connection_pool
from .init import init_database, validate_connection
from .memory import InMemoryNewspaperStore
from .postgres import PostgresNewspaperStore
from .store import IndexEntry, IndexPage, NewspaperStore


def create_store(config: Config) -> NewspaperStore:
    """Build the store selected by ``storage.backend``."""
    if config.config.storage.backend == "memory":
        return InMemoryNewspaperStore()
    return PostgresNewspaperStore(config.get_db_config())


__all__ = [
    "IndexEntry",
    "IndexPage",
    "InMemoryNewspaperStore",
    "NewspaperStore",
    "PostgresNewspaperStore",
    "close_connection_pools",
    "create_store",
    "get_connection",
    "get_connection_pool",
    "init_database",
    "validate_connection",
]
