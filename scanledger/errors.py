"""
Error outcomes for ledger operations.

Operations never raise for business-rule failures. Each mutating entry point
returns a Result holding either a value or exactly one ErrorKind, and a
failed Result guarantees that nothing was written.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Closed set of operation failures.

    - NOT_AUTHORIZED: caller failed an identity-equality check
    - SCAN_NOT_FOUND / TRANSACTION_NOT_FOUND: lookup miss
    - INVALID_TX_TYPE: label not in the type registry at call time
    - SCAN_ALREADY_COMPLETED / SCAN_NOT_STARTED: status-transition guards
    - INVALID_BLOCK_RANGE: start/end heights out of order or in the past
    - DUPLICATE_EVENT: reserved, no operation produces it
    - INVALID_PARAMETERS: argument outside its storage bounds, or the
      type registry is at capacity
    """
    NOT_AUTHORIZED = "not-authorized"
    SCAN_NOT_FOUND = "scan-not-found"
    TRANSACTION_NOT_FOUND = "transaction-not-found"
    INVALID_TX_TYPE = "invalid-tx-type"
    SCAN_ALREADY_COMPLETED = "scan-already-completed"
    SCAN_NOT_STARTED = "scan-not-started"
    INVALID_BLOCK_RANGE = "invalid-block-range"
    DUPLICATE_EVENT = "duplicate-event"
    INVALID_PARAMETERS = "invalid-parameters"

    @property
    def code(self) -> int:
        """Numeric error code, stable across releases."""
        return _ERROR_CODES[self]


_ERROR_CODES: dict[ErrorKind, int] = {
    ErrorKind.NOT_AUTHORIZED: 100,
    ErrorKind.SCAN_NOT_FOUND: 101,
    ErrorKind.TRANSACTION_NOT_FOUND: 102,
    ErrorKind.INVALID_TX_TYPE: 103,
    ErrorKind.SCAN_ALREADY_COMPLETED: 104,
    ErrorKind.SCAN_NOT_STARTED: 105,
    ErrorKind.INVALID_BLOCK_RANGE: 106,
    ErrorKind.DUPLICATE_EVENT: 107,
    ErrorKind.INVALID_PARAMETERS: 108,
}


class LedgerError(ValueError):
    """Raised by Result.unwrap() for a failed operation."""

    def __init__(self, kind: ErrorKind):
        super().__init__(f"{kind.value} (u{kind.code})")
        self.kind = kind


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a ledger operation: a value or one ErrorKind."""

    value: T | None = None
    error: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind) -> Result[T]:
        return cls(error=kind)

    def unwrap(self) -> T:
        """Return the value, raising LedgerError if the operation failed."""
        if self.error is not None:
            raise LedgerError(self.error)
        return self.value  # type: ignore[return-value]

    def to_dict(self) -> dict:
        if self.error is not None:
            return {"ok": False, "error": self.error.value, "code": self.error.code}
        return {"ok": True, "value": self.value}
