__all__ = (
    "InvalidStateError",
    "PersistenceError",
    "StoreError",
)


class StoreError(Exception):
    pass


class InvalidStateError(StoreError):
    pass


class PersistenceError(StoreError):
    pass
