"""
Domain errors raised by the ToDo service layer
"""

from typing import Optional

class TodoServiceError(Exception):
    """Base error; carries the HTTP status and the message clients see"""
    status_code = 500
    message = "internal server error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        if message:
            self.message = message

class MalformedInputError(TodoServiceError):
    """Request body is not JSON or does not match the record shape"""
    status_code = 400
    message = "cannot parse JSON"

class InvalidTodoIdError(TodoServiceError):
    """Id path segment is not an integer"""
    status_code = 400
    message = "invalid ID"

class TodoNotFoundError(TodoServiceError):
    status_code = 404
    message = "ToDo not found"
