"""
Host execution context.

The host supplies two trusted inputs per call: the calling identity and the
current block height. It also enforces the storage types of arguments
(bounded text, unsigned integers) before an operation body runs; the
helpers here reproduce those checks.
"""

from __future__ import annotations

from dataclasses import dataclass

UINT128_MAX = (1 << 128) - 1


@dataclass(frozen=True)
class CallContext:
    """Caller identity and block height for the duration of one call."""

    caller: str
    height: int

    def __post_init__(self) -> None:
        if not self.caller:
            raise ValueError("caller identity is required")
        if not is_uint(self.height):
            raise ValueError(f"height must be an unsigned integer, got {self.height!r}")

    def at(self, height: int) -> CallContext:
        """Same caller, different block height."""
        return CallContext(caller=self.caller, height=height)


def is_uint(value: object) -> bool:
    """True for integers in the unsigned 128-bit range (bool excluded)."""
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= UINT128_MAX


def fits_text(value: object, limit: int, *, ascii_only: bool = False) -> bool:
    """True when value is a string no longer than limit characters."""
    if not isinstance(value, str) or len(value) > limit:
        return False
    if ascii_only and not value.isascii():
        return False
    return True
