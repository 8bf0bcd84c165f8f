"""
ScanLedger: the four ledger components wired over one host store.

Mutating entry points take a CallContext and return a Result; queries are
pure reads of committed state.
"""

from __future__ import annotations

from .config import LedgerConfig
from .errors import Result
from .events import LedgerEvent
from .host import CallContext
from .ledger import TransactionLedger
from .models import Participant, Scan, Transaction
from .registry import IdentityRegistry
from .scans import ScanManager
from .store import MemoryStore
from .tx_types import TypeRegistry


class ScanLedger:
    def __init__(self, store: MemoryStore | None = None, config: LedgerConfig | None = None):
        self.store = store if store is not None else MemoryStore()
        self.config = config or LedgerConfig()
        self.registry = IdentityRegistry(self.store, self.config)
        self.types = TypeRegistry(self.store, self.config)
        self.ledger = TransactionLedger(self.store, self.config, self.types, self.registry)
        self.scans = ScanManager(self.store, self.config)
        self.types.seed()

    @property
    def owner(self) -> str:
        """The contract's own identity, the only caller allowed to add types."""
        return self.types.owner

    # --- Entry points ---

    def register(self, ctx: CallContext, display_name: str) -> Result[bool]:
        return self.registry.register(ctx, display_name)

    def add_type(self, ctx: CallContext, label: str) -> Result[bool]:
        return self.types.add_type(ctx, label)

    def log_transaction(
        self,
        ctx: CallContext,
        tx_type: str,
        volume: int,
        note: str | None = None,
    ) -> Result[int]:
        return self.ledger.log_transaction(ctx, tx_type, volume, note)

    def create_scan(
        self,
        ctx: CallContext,
        name: str,
        description: str,
        start_height: int,
        end_height: int,
    ) -> Result[int]:
        return self.scans.create_scan(ctx, name, description, start_height, end_height)

    def start_scan(self, ctx: CallContext, scan_id: int) -> Result[bool]:
        return self.scans.start_scan(ctx, scan_id)

    def complete_scan(self, ctx: CallContext, scan_id: int) -> Result[bool]:
        return self.scans.complete_scan(ctx, scan_id)

    # --- Queries ---

    def get_profile(self, identity: str) -> Participant | None:
        return self.registry.get_profile(identity)

    def is_valid_type(self, label: str) -> bool:
        return self.types.is_valid_type(label)

    def list_types(self) -> tuple[str, ...]:
        return self.types.labels()

    def get_transaction(self, tx_id: int, participant: str) -> Transaction | None:
        return self.ledger.get_transaction(tx_id, participant)

    def get_scan(self, scan_id: int) -> Scan | None:
        return self.scans.get_scan(scan_id)

    def is_live(self, scan_id: int) -> bool:
        return self.scans.is_live(scan_id)

    def events(self) -> list[LedgerEvent]:
        return self.store.events()
