"""Tests for Redis persistence, against an in-memory client."""

import pytest

from slicestore import PersistenceError, create_store
from slicestore.books import Book, Books
from slicestore.redis import RedisPersistence
from slicestore.todos import AddTodo, Todo, Todos, ToggleTodo


MILK = Todo(id=1, text="buy milk")


@pytest.fixture
def persistence(redis_client):
    return RedisPersistence(redis_client, {"todos": Todos, "books": Books})


class TestRedisPersistence:
    def test_load_empty(self, persistence):
        assert persistence.load() == {}

    def test_save_then_load(self, persistence, redis_client):
        persistence.save({"todos": (MILK,), "books": (Book(id="a", title="Dune"),)})
        assert set(redis_client.data) == {"slicestore:todos", "slicestore:books"}
        assert redis_client.transactions == 1

        loaded = persistence.load()
        assert loaded == {"todos": (MILK,), "books": (Book(id="a", title="Dune"),)}

    def test_bind_saves_after_dispatch(self, persistence, reducers, redis_client):
        store = create_store(reducers, persistence.load())
        persistence.bind(store)

        store.dispatch(AddTodo(todo=MILK))
        store.dispatch(ToggleTodo(id=1))

        restored = create_store(reducers, persistence.load())
        assert restored.get_state()["todos"] == (MILK.model_copy(update={"completed": True}),)

    def test_unbind(self, persistence, store, redis_client):
        unsubscribe = persistence.bind(store)
        unsubscribe()
        store.dispatch(AddTodo(todo=MILK))
        assert redis_client.data == {}

    def test_only_schema_slices(self, redis_client):
        persistence = RedisPersistence(redis_client, {"todos": Todos})
        persistence.save({"todos": (MILK,), "books": ()})
        assert list(redis_client.data) == ["slicestore:todos"]

    def test_custom_keys(self, redis_client):
        persistence = RedisPersistence(
            redis_client,
            {"todos": Todos},
            namespace="app",
            key_factory=lambda namespace, name: f"{name}@{namespace}"
        )
        persistence.save({"todos": ()})
        assert list(redis_client.data) == ["todos@app"]

    def test_corrupt_value(self, persistence, redis_client):
        redis_client.data["slicestore:todos"] = b'[{"text": 1}]'
        with pytest.raises(PersistenceError):
            persistence.load()

    def test_id_types_survive_round_trip(self, persistence):
        generated = AddTodo.new("buy bread").todo
        persistence.save({"todos": (MILK, generated), "books": ()})

        milk, bread = persistence.load()["todos"]
        assert milk == MILK
        assert type(milk.id) is int
        assert bread == generated
        assert type(bread.id) is str

    def test_from_url(self):
        persistence = RedisPersistence.from_url(
            "redis://localhost:6379/0", {"todos": Todos}, namespace="app"
        )
        assert persistence.key("todos") == "app:todos"
