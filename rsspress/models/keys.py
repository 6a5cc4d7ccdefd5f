"""Composite key helpers for the newspaper store."""

from typing import NamedTuple

from ..constants import DATE_PREFIX, NEWSPAPER_PREFIX


class ItemKey(NamedTuple):
    """Primary key of a stored item."""

    pk: str
    sk: str


def newspaper_pk(newspaper_id: str) -> str:
    return f"{NEWSPAPER_PREFIX}{newspaper_id}"


def date_sk(date: str) -> str:
    return f"{DATE_PREFIX}{date}"


def index_sort_key(date: str, newspaper_id: str) -> str:
    """Secondary index sort key of a date bucket."""
    return f"{DATE_PREFIX}{date}#{newspaper_id}"


def views_sort_key(view_count: int, newspaper_id: str) -> str:
    """Secondary index sort key of a public newspaper's metadata item."""
    return f"VIEWS#{view_count:010d}#{newspaper_id}"


def date_from_sk(sk: str) -> str:
    """Extract the date from a ``DATE#`` sort key, or "" for other items."""
    if not sk.startswith(DATE_PREFIX):
        return ""
    return sk[len(DATE_PREFIX):]
