"""
Utility functions shared by both HTTP front ends
"""

import logging
import re
from typing import Union

from pydantic import ValidationError

from todo_service.models.todo import ToDoPayload
from todo_service.services.exceptions import InvalidTodoIdError, MalformedInputError

logger = logging.getLogger(__name__)

# Optional sign followed by ASCII digits, nothing else
_TODO_ID_PATTERN = re.compile(r"[+-]?[0-9]+")

def parse_todo_id(raw_id: str) -> int:
    """Parse the id path segment, raising InvalidTodoIdError if it is not an integer"""
    if raw_id is None or not _TODO_ID_PATTERN.fullmatch(raw_id):
        raise InvalidTodoIdError()
    return int(raw_id)

def decode_payload(body: Union[bytes, str]) -> ToDoPayload:
    """Decode a request body into a ToDoPayload, raising MalformedInputError on failure"""
    if not body:
        raise MalformedInputError()
    try:
        return ToDoPayload.model_validate_json(body)
    except ValidationError as e:
        logger.debug(f"Rejected request body: {e.error_count()} validation errors")
        raise MalformedInputError() from e
