"""
ToDo Pydantic models
"""

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, StrictBool, StrictInt, StrictStr, model_validator

class ToDo(BaseModel):
    """A task with an id, a title and a completion flag"""
    id: int
    title: str = ""
    done: bool = False

class ToDoPayload(BaseModel):
    """
    Request body for create and update.

    Every field is optional: absent or null fields are left alone on update
    and fall back to the zero value on create. A bare `null` body is an empty
    payload. Keys match field names case-insensitively, a later key winning
    over an earlier one for the same field; unknown keys are ignored.
    """
    model_config = ConfigDict(extra="ignore")

    id: Optional[StrictInt] = None
    title: Optional[StrictStr] = None
    done: Optional[StrictBool] = None

    @model_validator(mode="before")
    @classmethod
    def fold_keys(cls, data: Any) -> Any:
        if data is None:
            return {}
        if not isinstance(data, dict):
            return data

        folded = {}
        for key, value in data.items():
            name = key.casefold() if isinstance(key, str) else key
            if name not in cls.model_fields:
                folded[key] = value
            elif value is not None or name not in folded:
                # null never overwrites a value sent under another spelling
                folded[name] = value
        return folded

    def present_fields(self) -> dict:
        """Fields the client actually sent with a non-null value"""
        return self.model_dump(exclude_none=True)

class ErrorResponse(BaseModel):
    error: str
