"""
ToDo service - owns the in-memory collection and every operation on it
"""

import logging
import threading
from typing import List, Union

from todo_service.config.settings import ID_STRATEGIES, ID_STRATEGY_COUNTER, ID_STRATEGY_LENGTH
from todo_service.models.todo import ToDo
from todo_service.services.exceptions import TodoNotFoundError
from todo_service.utils.helpers import decode_payload

logger = logging.getLogger(__name__)

class TodoService:
    """
    In-memory, insertion-ordered collection of ToDo records.

    A single lock guards every read and every scan-and-mutate sequence, so
    the service can be shared by the request threads of either HTTP server.
    Records handed out are copies; callers never alias stored state.
    """

    def __init__(self, id_strategy: str = ID_STRATEGY_LENGTH):
        if id_strategy not in ID_STRATEGIES:
            raise ValueError(f"Unknown id strategy: {id_strategy}")

        self.id_strategy = id_strategy
        self._todos: List[ToDo] = []
        self._last_id = 0
        self._lock = threading.Lock()
        logger.info(f"TodoService initialized with '{id_strategy}' id strategy")

    def __len__(self) -> int:
        with self._lock:
            return len(self._todos)

    def _next_id(self) -> int:
        # Caller holds the lock
        if self.id_strategy == ID_STRATEGY_COUNTER:
            self._last_id += 1
            return self._last_id
        # len + 1 can hand out an id a surviving record still holds once
        # anything has been deleted
        return len(self._todos) + 1

    def _index_of(self, todo_id: int) -> int:
        # Caller holds the lock; first match wins
        for index, todo in enumerate(self._todos):
            if todo.id == todo_id:
                return index
        raise TodoNotFoundError()

    def list_todos(self) -> List[ToDo]:
        """Return every record in collection order"""
        with self._lock:
            return [todo.model_copy() for todo in self._todos]

    def create_todo(self, body: Union[bytes, str]) -> ToDo:
        """
        Decode a request body and append it as a new record

        Args:
            body: Raw JSON request body; any id it carries is ignored

        Returns:
            The stored record with its server-assigned id

        Raises:
            MalformedInputError: body is not a JSON object of the record shape
        """
        payload = decode_payload(body)

        with self._lock:
            todo = ToDo(
                id=self._next_id(),
                title=payload.title if payload.title is not None else "",
                done=payload.done if payload.done is not None else False
            )
            self._todos.append(todo)

        logger.info(f"Created ToDo {todo.id}")
        return todo.model_copy()

    def get_todo(self, todo_id: int) -> ToDo:
        """Return the first record with the given id, or raise TodoNotFoundError"""
        with self._lock:
            return self._todos[self._index_of(todo_id)].model_copy()

    def update_todo(self, todo_id: int, body: Union[bytes, str]) -> ToDo:
        """
        Merge a request body over the record with the given id

        The record is looked up before the body is decoded, so an unknown id
        reports TodoNotFoundError even when the body is malformed. Fields the
        body carries overwrite the stored ones; absent or null fields keep
        their value. The id is always forced back to todo_id.

        Raises:
            TodoNotFoundError: no record has this id
            MalformedInputError: body is not a JSON object of the record shape
        """
        with self._lock:
            index = self._index_of(todo_id)
            payload = decode_payload(body)

            changes = payload.present_fields()
            changes["id"] = todo_id
            updated = self._todos[index].model_copy(update=changes)
            self._todos[index] = updated

        logger.info(f"Updated ToDo {todo_id} (fields: {', '.join(sorted(changes))})")
        return updated.model_copy()

    def delete_todo(self, todo_id: int) -> None:
        """Remove the first record with the given id, or raise TodoNotFoundError"""
        with self._lock:
            del self._todos[self._index_of(todo_id)]

        logger.info(f"Deleted ToDo {todo_id}")
