from ._errors import InvalidStateError, PersistenceError, StoreError
from ._reducer import Init, Reducer, State, combine_reducers
from ._store import Store, Subscriber, Unsubscribe, create_store


__all__ = (
    "Init",
    "InvalidStateError",
    "PersistenceError",
    "Reducer",
    "State",
    "Store",
    "StoreError",
    "Subscriber",
    "Unsubscribe",

    "combine_reducers",
    "create_store",
)
