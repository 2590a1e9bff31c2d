from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from ._reducer import replace_record


__all__ = (
    "AddBook",
    "Book",
    "BookAction",
    "BookId",
    "Books",
    "RemoveBook",
    "RenameBook",

    "parse_book_action",
    "reduce_books",
)


BookId = Union[int, str]


class Book(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: BookId
    title: str


Books = tuple[Book, ...]


class AddBook(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["ADD_BOOK"] = "ADD_BOOK"
    book: Book

    @classmethod
    def new(cls, title: str) -> AddBook:
        return cls(book=Book(id=str(uuid4()), title=title))


class RenameBook(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["RENAME_BOOK"] = "RENAME_BOOK"
    id: BookId
    title: str


class RemoveBook(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["REMOVE_BOOK"] = "REMOVE_BOOK"
    id: BookId


BookAction = Annotated[
    Union[AddBook, RenameBook, RemoveBook],
    Field(discriminator="type")
]

_book_action_adapter: TypeAdapter[BookAction] = TypeAdapter(BookAction)


def parse_book_action(data: Union[str, bytes, dict[str, Any]]) -> BookAction:
    if isinstance(data, (str, bytes)):
        return _book_action_adapter.validate_json(data)

    return _book_action_adapter.validate_python(data)


def reduce_books(state: Optional[Books], action: Any) -> Books:
    if state is None:
        state = ()

    match action:
        case AddBook(book=book):
            return (*state, book)
        case RenameBook(id=id, title=title):
            return replace_record(state, id, lambda book: {"title": title})
        case RemoveBook(id=id):
            return tuple(book for book in state if book.id != id)
        case _:
            return state
