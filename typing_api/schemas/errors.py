"""Field-tagged errors returned as data alongside (or instead of) a payload."""

from enum import Enum

from pydantic import BaseModel


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    STORE_FAILURE = "store_failure"


class FieldError(BaseModel):
    field: str
    message: str
    kind: ErrorKind

    @classmethod
    def not_found(cls, field: str, message: str) -> "FieldError":
        return cls(field=field, message=message, kind=ErrorKind.NOT_FOUND)

    @classmethod
    def validation(cls, field: str, message: str) -> "FieldError":
        return cls(field=field, message=message, kind=ErrorKind.VALIDATION)

    @classmethod
    def store_failure(cls) -> "FieldError":
        return cls(field="unknown", message="An error occurred", kind=ErrorKind.STORE_FAILURE)
