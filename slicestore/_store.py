from __future__ import annotations

import logging

from collections import deque
from itertools import count
from threading import RLock
from typing import Any, Callable, Mapping, Optional

from ._errors import StoreError
from ._reducer import Init, Reducer, State, combine_reducers


__all__ = (
    "Store",
    "Subscriber",
    "Unsubscribe",

    "create_store",
)


logger = logging.getLogger(__name__)


Subscriber = Callable[[], None]
Unsubscribe = Callable[[], None]


class Store:
    """Owns the current root snapshot and the subscriber registry.

    Actions dispatched from inside a subscriber are queued and reduced after
    the running notification round, each with a round of its own.
    """

    _reducer: Reducer[State]
    _state: State

    _subscribers: dict[int, Subscriber]
    _tokens: count

    _lock: RLock
    _dispatching: bool
    _pending: deque

    def __init__(
        self,
        reducer: Reducer[State],
        initial_state: Optional[State] = None
    ) -> None:
        self._reducer = reducer
        self._state = reducer(initial_state, Init())

        self._subscribers = {}
        self._tokens = count()

        self._lock = RLock()
        self._dispatching = False
        self._pending = deque()

    def _notify(self) -> None:
        for subscriber in list(self._subscribers.values()):
            subscriber()

    def get_state(self) -> State:
        return self._state

    def dispatch(self, action: Any) -> None:
        with self._lock:
            if self._dispatching:
                logger.debug("Queueing %r dispatched during notification", action)
                self._pending.append(action)

                return

            self._dispatching = True
            self._pending.append(action)

            try:
                while self._pending:
                    action = self._pending.popleft()
                    logger.debug("Dispatching %r", action)

                    self._state = self._reducer(self._state, action)
                    self._notify()
            finally:
                if self._pending:
                    logger.warning(
                        "Discarding %d queued action(s) after a failed dispatch",
                        len(self._pending)
                    )
                    self._pending.clear()

                self._dispatching = False

    def subscribe(self, subscriber: Subscriber) -> Unsubscribe:
        with self._lock:
            token = next(self._tokens)
            self._subscribers[token] = subscriber

        logger.debug("Subscribed %r as #%d", subscriber, token)

        def unsubscribe() -> None:
            with self._lock:
                if self._subscribers.pop(token, None) is not None:
                    logger.debug("Unsubscribed #%d", token)

        return unsubscribe


def create_store(
    reducers: Mapping[str, Reducer],
    initial_state: Optional[Mapping[str, Any]] = None
) -> Store:
    if not reducers:
        raise StoreError("At least one slice reducer is required")

    seed = dict(initial_state or {})
    unknown = seed.keys() - reducers.keys()

    if unknown:
        raise StoreError(f"Unknown slices in initial state: {sorted(unknown)}")

    return Store(combine_reducers(reducers), seed)
