from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable, Literal, Mapping, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

from ._errors import InvalidStateError


__all__ = (
    "Init",
    "Reducer",
    "State",

    "combine_reducers",
    "replace_record",
)


R = TypeVar("R", bound=BaseModel)
S = TypeVar("S")


State = Mapping[str, Any]
Reducer = Callable[[Optional[S], Any], S]


class Init(BaseModel):
    """Dispatched once at construction to obtain unseeded slice values.

    Slice reducers receive ``None`` alongside it and answer with their
    initial value.
    """

    model_config = ConfigDict(frozen=True)

    type: Literal["@@INIT"] = "@@INIT"


def combine_reducers(reducers: Mapping[str, Reducer]) -> Reducer[State]:
    slices = dict(reducers)

    def combination(state: Optional[State], action: Any) -> State:
        state = state or {}
        updated = {}

        for name, reducer in slices.items():
            value = reducer(state.get(name), action)

            if value is None:
                raise InvalidStateError(
                    f"Reducer for slice {name!r} returned None"
                )

            updated[name] = value

        return MappingProxyType(updated)

    return combination


def replace_record(
    records: tuple[R, ...],
    id: Any,
    changes: Callable[[R], dict[str, Any]]
) -> tuple[R, ...]:
    """Return ``records`` with the one whose ``id`` matches updated.

    ``changes`` receives the matching record and returns the fields to
    update. Without a match ``records`` itself is returned.
    """
    for index, record in enumerate(records):
        if record.id == id:
            updated = record.model_copy(update=changes(record))

            return (*records[:index], updated, *records[index + 1:])

    return records
