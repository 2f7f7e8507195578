"""Error types raised along the submission and catalog paths.

Each error carries a machine-readable ``kind`` so callers can branch without
matching on message text, and a ``message`` that is safe to show to a visitor.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

UNIQUE_VIOLATION = "23505"


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    RATE_LIMITED = "rate_limited"
    DUPLICATE = "duplicate"
    STORE = "store"


@dataclass(eq=False)
class GateError(Exception):
    message: str

    kind: ClassVar[ErrorKind]

    def __post_init__(self) -> None:
        super().__init__(self.message)


class InvalidSubmissionError(GateError):
    """Missing required field or malformed email."""

    kind = ErrorKind.VALIDATION


class RateLimitedError(GateError):
    kind = ErrorKind.RATE_LIMITED


class DuplicateSubscriptionError(GateError):
    kind = ErrorKind.DUPLICATE


@dataclass(eq=False)
class RecordStoreError(GateError):
    """Failure reported by the record store.

    ``message`` holds the raw store text and must not be shown to visitors on
    the write paths.
    """

    code: str | None = None
    details: Any = None

    kind: ClassVar[ErrorKind] = ErrorKind.STORE

    @property
    def is_unique_violation(self) -> bool:
        return self.code == UNIQUE_VIOLATION
