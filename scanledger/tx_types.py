"""
Transaction type registry.

An ordered, fixed-capacity list of allowed transaction type labels. Only the
contract's own identity may append to it. That identity is what a self-call
resolves to, so ordinary external callers always fail the check; there is no
separate deployer or admin role.

Appends are not deduplicated. Membership is checked when a transaction is
written; later edits never re-validate stored transactions.
"""

from __future__ import annotations

import logging

from .config import LedgerConfig
from .errors import ErrorKind, Result
from .events import TX_TYPE_ADDED, create_event
from .host import CallContext, fits_text
from .store import MemoryStore, WriteSet

logger = logging.getLogger(__name__)

VARS = "vars"
TX_TYPES_KEY = "tx-types"


class TypeRegistry:
    def __init__(self, store: MemoryStore, config: LedgerConfig):
        self.store = store
        self.config = config

    @property
    def owner(self) -> str:
        return self.config.contract_identity

    def seed(self) -> None:
        """Install the default labels if the store has no registry yet."""
        with self.store.atomic() as ws:
            if ws.get(VARS, TX_TYPES_KEY) is None:
                ws.put(VARS, TX_TYPES_KEY, list(self.config.default_types))
                logger.debug("Seeded %d default transaction types", len(self.config.default_types))

    def labels(self, view: MemoryStore | WriteSet | None = None) -> tuple[str, ...]:
        """Ordered snapshot of the registry as seen by view (committed state by default)."""
        source = view if view is not None else self.store
        return tuple(source.get(VARS, TX_TYPES_KEY, ()))

    def is_valid_type(self, label: str, view: MemoryStore | WriteSet | None = None) -> bool:
        return label in self.labels(view)

    def add_type(self, ctx: CallContext, label: str) -> Result[bool]:
        """Append a label. Owner only; fails once the registry is full."""
        if ctx.caller != self.owner:
            logger.info("add_type rejected for %s: %s", ctx.caller, ErrorKind.NOT_AUTHORIZED.value)
            return Result.failure(ErrorKind.NOT_AUTHORIZED)
        if not fits_text(label, self.config.limits.tx_type, ascii_only=True):
            logger.info("add_type rejected: %s", ErrorKind.INVALID_PARAMETERS.value)
            return Result.failure(ErrorKind.INVALID_PARAMETERS)

        with self.store.atomic() as ws:
            current = self.labels(ws)
            if len(current) >= self.config.type_capacity:
                logger.info(
                    "add_type rejected: registry at capacity %d", self.config.type_capacity
                )
                return Result.failure(ErrorKind.INVALID_PARAMETERS)
            ws.put(VARS, TX_TYPES_KEY, [*current, label])
            ws.emit(create_event(TX_TYPE_ADDED, ctx, payload={"label": label}))
        logger.debug("Added transaction type %r (%d/%d)", label, len(current) + 1, self.config.type_capacity)
        return Result.success(True)
