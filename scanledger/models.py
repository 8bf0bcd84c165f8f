"""
Records held in the ledger store.

Records are stored as plain dicts (see to_dict/from_dict) so that any host
store, including the JSONL journal, can persist them unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any


class ScanStatus(str, Enum):
    """Scan lifecycle: pending -> in-progress -> completed (terminal)."""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


@dataclass(frozen=True)
class Participant:
    """A registered network participant.

    total_scans is initialised to zero and no operation increments it.
    """

    identity: str
    display_name: str
    registered_at: int
    total_scans: int = 0
    last_activity: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "identity": self.identity,
            "display_name": self.display_name,
            "registered_at": self.registered_at,
            "total_scans": self.total_scans,
            "last_activity": self.last_activity,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Participant:
        return cls(
            identity=data["identity"],
            display_name=data["display_name"],
            registered_at=int(data["registered_at"]),
            total_scans=int(data.get("total_scans", 0)),
            last_activity=data.get("last_activity"),
        )

    def with_activity(self, height: int) -> Participant:
        return replace(self, last_activity=height)


@dataclass(frozen=True)
class Transaction:
    """An immutable transaction record, keyed by (tx_id, participant)."""

    tx_id: int
    participant: str
    tx_type: str
    volume: int
    height: int
    note: str | None = None

    @property
    def key(self) -> tuple[int, str]:
        return (self.tx_id, self.participant)

    def to_dict(self) -> dict[str, Any]:
        return {
            "tx_id": self.tx_id,
            "participant": self.participant,
            "tx_type": self.tx_type,
            "volume": self.volume,
            "height": self.height,
            "note": self.note,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Transaction:
        return cls(
            tx_id=int(data["tx_id"]),
            participant=data["participant"],
            tx_type=data["tx_type"],
            volume=int(data["volume"]),
            height=int(data["height"]),
            note=data.get("note"),
        )


@dataclass(frozen=True)
class Scan:
    """A creator-owned scan task bounded by [start_height, end_height).

    total_transactions is initialised to zero and no operation increments it.
    active is set at creation and never toggled.
    """

    scan_id: int
    name: str
    description: str
    creator: str
    start_height: int
    end_height: int
    total_transactions: int = 0
    status: ScanStatus = ScanStatus.PENDING
    active: bool = True

    @property
    def is_live(self) -> bool:
        return self.status is ScanStatus.IN_PROGRESS and self.active

    def with_status(self, status: ScanStatus) -> Scan:
        return replace(self, status=status)

    def to_dict(self) -> dict[str, Any]:
        return {
            "scan_id": self.scan_id,
            "name": self.name,
            "description": self.description,
            "creator": self.creator,
            "start_height": self.start_height,
            "end_height": self.end_height,
            "total_transactions": self.total_transactions,
            "status": self.status.value,
            "active": self.active,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Scan:
        return cls(
            scan_id=int(data["scan_id"]),
            name=data["name"],
            description=data["description"],
            creator=data["creator"],
            start_height=int(data["start_height"]),
            end_height=int(data["end_height"]),
            total_transactions=int(data.get("total_transactions", 0)),
            status=ScanStatus(data.get("status", ScanStatus.PENDING.value)),
            active=bool(data.get("active", True)),
        )
