"""
Immutable events emitted by committed ledger operations.

Each successful state transition records exactly one event in the same
write-set as its state changes. Rejected operations record nothing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .host import CallContext

# Event type constants
PARTICIPANT_REGISTERED = "participant.registered"
TX_TYPE_ADDED = "tx_type.added"
TRANSACTION_LOGGED = "transaction.logged"
SCAN_CREATED = "scan.created"
SCAN_STARTED = "scan.started"
SCAN_COMPLETED = "scan.completed"

EVENT_TYPES = frozenset({
    PARTICIPANT_REGISTERED,
    TX_TYPE_ADDED,
    TRANSACTION_LOGGED,
    SCAN_CREATED,
    SCAN_STARTED,
    SCAN_COMPLETED,
})


@dataclass(frozen=True)
class LedgerEvent:
    """
    A single committed state transition.

    Events carry the block height rather than a wall-clock timestamp so that
    replaying the same calls always yields the same event stream.
    """

    event_type: str  # One of EVENT_TYPES
    height: int
    caller: str
    payload: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.event_type not in EVENT_TYPES:
            raise ValueError(f"Invalid event_type: {self.event_type}")

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "event_type": self.event_type,
            "height": self.height,
            "caller": self.caller,
        }
        if self.payload:
            result["payload"] = self.payload
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LedgerEvent:
        return cls(
            event_type=data["event_type"],
            height=int(data["height"]),
            caller=data["caller"],
            payload=data.get("payload", {}),
        )


def create_event(
    event_type: str,
    ctx: CallContext,
    *,
    payload: dict[str, Any] | None = None,
) -> LedgerEvent:
    """Build an event stamped with the caller and height of the current call."""
    return LedgerEvent(
        event_type=event_type,
        height=ctx.height,
        caller=ctx.caller,
        payload=payload or {},
    )
