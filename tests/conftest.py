import pytest

from rsspress.db import InMemoryNewspaperStore


@pytest.fixture
def store():
    return InMemoryNewspaperStore()
