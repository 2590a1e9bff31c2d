import pytest

from slicestore import create_store
from slicestore.books import reduce_books
from slicestore.todos import reduce_todos


class FakePipeline:
    def __init__(self, client):
        self._client = client
        self._queued = []

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self._queued.clear()

    def mset(self, mapping):
        self._queued.append(dict(mapping))

    def execute(self):
        for mapping in self._queued:
            self._client.mset(mapping)
        self._client.transactions += 1
        self._queued.clear()


class FakeRedis:
    """In-memory stand-in for the handful of commands persistence uses."""

    def __init__(self):
        self.data = {}
        self.transactions = 0

    def mget(self, keys):
        return [self.data.get(key) for key in keys]

    def mset(self, mapping):
        for key, value in mapping.items():
            self.data[key] = value if isinstance(value, bytes) else str(value).encode()

    def pipeline(self, transaction=True):
        return FakePipeline(self)


@pytest.fixture
def redis_client():
    return FakeRedis()


@pytest.fixture
def reducers():
    return {"todos": reduce_todos, "books": reduce_books}


@pytest.fixture
def store(reducers):
    return create_store(reducers)
