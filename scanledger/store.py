"""
Key-value storage with all-or-nothing commits.

Operations stage reads and writes in a WriteSet opened by store.atomic().
Staged writes become visible only when the block exits normally; any
exception discards them. A single re-entrant lock serializes every atomic
block, so a counter increment and the record it identifies are committed
together or not at all.

JournalStore persists each committed write-set as one JSON line in
<state_dir>/journal.jsonl and replays the journal on open. The journal is
append-only and never rewritten.
"""

from __future__ import annotations

import json
import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Hashable, Iterator

from .events import LedgerEvent

logger = logging.getLogger(__name__)

Key = Hashable


class WriteSet:
    """Writes and events staged by one atomic block."""

    def __init__(self, store: MemoryStore):
        self._store = store
        self.writes: dict[tuple[str, Key], Any] = {}
        self.events: list[LedgerEvent] = []

    @property
    def is_empty(self) -> bool:
        return not self.writes and not self.events

    def get(self, space: str, key: Key, default: Any = None) -> Any:
        """Read through staged writes to committed state."""
        if (space, key) in self.writes:
            return self.writes[(space, key)]
        return self._store._read(space, key, default)

    def put(self, space: str, key: Key, value: Any) -> None:
        self.writes[(space, key)] = value

    def emit(self, event: LedgerEvent) -> None:
        self.events.append(event)


class MemoryStore:
    """In-process key-value store, grouped into named spaces."""

    def __init__(self) -> None:
        self._spaces: dict[str, dict[Key, Any]] = {}
        self._events: list[LedgerEvent] = []
        self._lock = threading.RLock()
        self._active: WriteSet | None = None

    def _read(self, space: str, key: Key, default: Any = None) -> Any:
        return self._spaces.get(space, {}).get(key, default)

    def get(self, space: str, key: Key, default: Any = None) -> Any:
        """Read committed state."""
        with self._lock:
            return self._read(space, key, default)

    def keys(self, space: str) -> list[Key]:
        with self._lock:
            return list(self._spaces.get(space, {}))

    def events(self) -> list[LedgerEvent]:
        """All committed events, in commit order."""
        with self._lock:
            return list(self._events)

    @contextmanager
    def atomic(self) -> Iterator[WriteSet]:
        """Open a write-set; nested blocks on the same thread join the outer one."""
        with self._lock:
            if self._active is not None:
                yield self._active
                return

            ws = WriteSet(self)
            self._active = ws
            try:
                yield ws
            except BaseException:
                logger.debug("Discarding %d staged writes", len(ws.writes))
                raise
            else:
                if not ws.is_empty:
                    self._commit(ws)
            finally:
                self._active = None

    def _commit(self, ws: WriteSet) -> None:
        for (space, key), value in ws.writes.items():
            self._spaces.setdefault(space, {})[key] = value
        self._events.extend(ws.events)
        logger.debug("Committed %d writes, %d events", len(ws.writes), len(ws.events))


def _encode_key(key: Key) -> Any:
    return list(key) if isinstance(key, tuple) else key


def _decode_key(key: Any) -> Key:
    return tuple(key) if isinstance(key, list) else key


class JournalStore(MemoryStore):
    """MemoryStore backed by an append-only JSON Lines journal.

    Storage format: one committed write-set per line
    Location: <state_dir>/journal.jsonl
    """

    def __init__(self, state_dir: Path):
        super().__init__()
        self.state_dir = state_dir.resolve()
        self.journal_path = self.state_dir / "journal.jsonl"
        self.replayed = self._replay()

    def _ensure_dir(self) -> None:
        self.state_dir.mkdir(parents=True, exist_ok=True)

    def _commit(self, ws: WriteSet) -> None:
        entry = {
            "writes": [[space, _encode_key(key), value] for (space, key), value in ws.writes.items()],
            "events": [e.to_dict() for e in ws.events],
        }
        self._ensure_dir()
        with self.journal_path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(entry, separators=(",", ":")) + "\n")
        super()._commit(ws)

    def _replay(self) -> int:
        """Rebuild committed state from the journal. Returns entries applied."""
        if not self.journal_path.exists():
            return 0
        applied = 0
        with self.journal_path.open("r", encoding="utf-8") as f:
            for lineno, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    data = json.loads(line)
                except json.JSONDecodeError as e:
                    raise ValueError(f"{self.journal_path}:{lineno}: corrupt journal entry") from e

                ws = WriteSet(self)
                for space, key, value in data.get("writes", []):
                    ws.put(space, _decode_key(key), value)
                ws.events = [LedgerEvent.from_dict(e) for e in data.get("events", [])]
                MemoryStore._commit(self, ws)
                applied += 1
        logger.debug("Replayed %d journal entries from %s", applied, self.journal_path)
        return applied
