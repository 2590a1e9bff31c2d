"""The ``todos`` slice: an ordered tuple of to-do records."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from ._reducer import replace_record


__all__ = (
    "AddTodo",
    "ClearCompleted",
    "DeleteTodo",
    "EditTodo",
    "Todo",
    "TodoAction",
    "TodoId",
    "Todos",
    "ToggleTodo",

    "parse_todo_action",
    "reduce_todos",
)


TodoId = Union[int, str]


class Todo(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: TodoId
    text: str
    completed: bool = False


Todos = tuple[Todo, ...]


class AddTodo(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["ADD_TODO"] = "ADD_TODO"
    todo: Todo

    @classmethod
    def new(cls, text: str) -> AddTodo:
        return cls(todo=Todo(id=str(uuid4()), text=text))


class ToggleTodo(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["TOGGLE_TODO"] = "TOGGLE_TODO"
    id: TodoId


class EditTodo(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["EDIT_TODO"] = "EDIT_TODO"
    id: TodoId
    text: str


class DeleteTodo(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["DELETE_TODO"] = "DELETE_TODO"
    id: TodoId


class ClearCompleted(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["CLEAR_COMPLETED"] = "CLEAR_COMPLETED"


TodoAction = Annotated[
    Union[AddTodo, ToggleTodo, EditTodo, DeleteTodo, ClearCompleted],
    Field(discriminator="type")
]

_todo_action_adapter: TypeAdapter[TodoAction] = TypeAdapter(TodoAction)


def parse_todo_action(data: Union[str, bytes, dict[str, Any]]) -> TodoAction:
    if isinstance(data, (str, bytes)):
        return _todo_action_adapter.validate_json(data)

    return _todo_action_adapter.validate_python(data)


def reduce_todos(state: Optional[Todos], action: Any) -> Todos:
    if state is None:
        state = ()

    match action:
        case AddTodo(todo=todo):
            return (*state, todo)
        case ToggleTodo(id=id):
            return replace_record(
                state, id, lambda todo: {"completed": not todo.completed}
            )
        case EditTodo(id=id, text=text):
            return replace_record(state, id, lambda todo: {"text": text})
        case DeleteTodo(id=id):
            return tuple(todo for todo in state if todo.id != id)
        case ClearCompleted():
            return tuple(todo for todo in state if not todo.completed)
        case _:
            return state
