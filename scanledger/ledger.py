"""
Append-only transaction ledger.

Transactions draw their ids from one global counter shared by all
participants, but are stored under (tx_id, participant): a lookup must name
both. Records are never modified after they are written.
"""

from __future__ import annotations

import logging

from .config import LedgerConfig
from .errors import ErrorKind, Result
from .events import TRANSACTION_LOGGED, create_event
from .host import CallContext, fits_text, is_uint
from .models import Transaction
from .registry import IdentityRegistry
from .store import MemoryStore
from .tx_types import VARS, TypeRegistry

logger = logging.getLogger(__name__)

TRANSACTIONS = "transactions"
TX_COUNTER = "tx-counter"


class TransactionLedger:
    def __init__(
        self,
        store: MemoryStore,
        config: LedgerConfig,
        types: TypeRegistry,
        registry: IdentityRegistry,
    ):
        self.store = store
        self.config = config
        self.types = types
        self.registry = registry

    def last_tx_id(self) -> int:
        """Most recently issued transaction id (0 before the first)."""
        return self.store.get(VARS, TX_COUNTER, 0)

    def log_transaction(
        self,
        ctx: CallContext,
        tx_type: str,
        volume: int,
        note: str | None = None,
    ) -> Result[int]:
        """
        Record a transaction for the caller and return its id.

        The id issue, the record insert and the caller's last_activity update
        commit together. Callers without a profile are logged without
        touching the identity registry.
        """
        if not fits_text(tx_type, self.config.limits.tx_type, ascii_only=True) or not is_uint(volume):
            logger.info("log_transaction rejected for %s: %s", ctx.caller, ErrorKind.INVALID_PARAMETERS.value)
            return Result.failure(ErrorKind.INVALID_PARAMETERS)
        if note is not None and not fits_text(note, self.config.limits.note):
            logger.info("log_transaction rejected for %s: %s", ctx.caller, ErrorKind.INVALID_PARAMETERS.value)
            return Result.failure(ErrorKind.INVALID_PARAMETERS)

        with self.store.atomic() as ws:
            if not self.types.is_valid_type(tx_type, ws):
                logger.info("log_transaction rejected for %s: unknown type %r", ctx.caller, tx_type)
                return Result.failure(ErrorKind.INVALID_TX_TYPE)

            tx_id = ws.get(VARS, TX_COUNTER, 0) + 1
            record = Transaction(
                tx_id=tx_id,
                participant=ctx.caller,
                tx_type=tx_type,
                volume=volume,
                height=ctx.height,
                note=note,
            )
            ws.put(VARS, TX_COUNTER, tx_id)
            ws.put(TRANSACTIONS, record.key, record.to_dict())
            touched = self.registry.touch(ws, ctx.caller, ctx.height)
            ws.emit(create_event(
                TRANSACTION_LOGGED,
                ctx,
                payload={"tx_id": tx_id, "tx_type": tx_type, "volume": volume},
            ))
        logger.debug(
            "Logged transaction %d (%s) for %s (profile updated=%s)", tx_id, tx_type, ctx.caller, touched
        )
        return Result.success(tx_id)

    def get_transaction(self, tx_id: int, participant: str) -> Transaction | None:
        data = self.store.get(TRANSACTIONS, (tx_id, participant))
        return Transaction.from_dict(data) if data is not None else None

    def require_transaction(self, tx_id: int, participant: str) -> Result[Transaction]:
        """Like get_transaction, but a miss is a TRANSACTION_NOT_FOUND outcome."""
        record = self.get_transaction(tx_id, participant)
        if record is None:
            return Result.failure(ErrorKind.TRANSACTION_NOT_FOUND)
        return Result.success(record)
