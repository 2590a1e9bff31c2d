from __future__ import annotations

import logging

from typing import Any, Callable, Mapping

from pydantic import TypeAdapter, ValidationError
from redis import Redis

from ._errors import PersistenceError
from ._reducer import State
from ._store import Store, Unsubscribe


__all__ = (
    "RedisKeyFactory",
    "RedisPersistence",

    "default_redis_key",
)


logger = logging.getLogger(__name__)


RedisKeyFactory = Callable[[str, str], str]


def default_redis_key(namespace: str, name: str) -> str:
    return f"{namespace}:{name}"


class RedisPersistence:
    """Keeps slices of a store's snapshot in Redis, one JSON value per slice.

    ``schema`` maps each persisted slice name to its Python type; slices
    outside it are neither saved nor loaded. Call :meth:`load` before
    building the store to seed it, then :meth:`bind` to save after every
    dispatch::

        persistence = RedisPersistence(client, {"todos": Todos})
        store = create_store(reducers, persistence.load())
        persistence.bind(store)
    """

    _client: Redis
    _adapters: dict[str, TypeAdapter]
    _namespace: str
    _key_factory: RedisKeyFactory

    def __init__(
        self,
        client: Redis,
        schema: Mapping[str, Any],
        namespace: str = "slicestore",
        key_factory: RedisKeyFactory = default_redis_key
    ) -> None:
        self._client = client
        self._adapters = {
            name: TypeAdapter(slice_type)
            for name, slice_type in schema.items()
        }
        self._namespace = namespace
        self._key_factory = key_factory

    @classmethod
    def from_url(
        cls,
        url: str,
        schema: Mapping[str, Any],
        **kwargs: Any
    ) -> RedisPersistence:
        return cls(Redis.from_url(url), schema, **kwargs)

    def key(self, name: str) -> str:
        return self._key_factory(self._namespace, name)

    def load(self) -> dict[str, Any]:
        names = list(self._adapters)
        values = self._client.mget([self.key(name) for name in names])
        state = {}

        for name, data in zip(names, values):
            if data is None:
                continue

            try:
                state[name] = self._adapters[name].validate_json(data)
            except ValidationError as e:
                logger.warning("Could not decode %s: %s", self.key(name), e)

                raise PersistenceError(
                    f"Stored slice {name!r} could not be decoded"
                ) from e

        logger.debug("Loaded slices %s from %s", sorted(state), self._namespace)

        return state

    def save(self, state: State) -> None:
        data = {
            self.key(name): adapter.dump_json(state[name])
            for name, adapter in self._adapters.items()
            if name in state
        }

        if not data:
            return

        with self._client.pipeline(transaction=True) as pipe:
            pipe.mset(data)
            pipe.execute()

        logger.debug("Saved slices %s to %s", sorted(data), self._namespace)

    def bind(self, store: Store) -> Unsubscribe:
        return store.subscribe(lambda: self.save(store.get_state()))
