"""
Result envelope returned by every data-access operation.

The data-access layer never raises across its boundary. Success and failure
both come back as a `Result`, and the HTTP layer decides what the caller sees.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not found"
    QUERY = "query"


class ValidationError(Exception):
    """Raised by validators when caller input is malformed or incomplete."""

    def __init__(self, message: str, field: str = None):
        self.field = field
        super().__init__(message)


@dataclass(frozen=True)
class DataError:
    kind: ErrorKind
    message: str


@dataclass(frozen=True)
class Result:
    success: bool
    payload: Any = None
    error: Optional[DataError] = None
    status: Optional[str] = None

    @classmethod
    def ok(cls, payload: Any, status: str = None) -> "Result":
        return cls(success=True, payload=payload, status=status)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "Result":
        return cls(success=False, error=DataError(kind=kind, message=message))

    @classmethod
    def not_found(cls, message: str = "not found") -> "Result":
        return cls.failure(ErrorKind.NOT_FOUND, message)

    @property
    def is_not_found(self) -> bool:
        return self.error is not None and self.error.kind is ErrorKind.NOT_FOUND
