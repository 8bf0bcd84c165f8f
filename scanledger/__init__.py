"""
scanledger - deterministic ledger-state tracker.

Records network participants, logs typed transactions against them, and
manages block-height-bounded scan tasks with an explicit status lifecycle.

Components:
- registry: participant profiles keyed by caller identity
- tx_types: owner-restricted, fixed-capacity set of transaction type labels
- ledger: append-only transaction log keyed by (tx_id, participant)
- scans: creator-owned scan tasks (pending -> in-progress -> completed)
- contract: facade wiring the components over one host store
"""

__version__ = "0.1.0"

from .contract import ScanLedger
from .errors import ErrorKind, LedgerError, Result
from .host import CallContext
from .models import Participant, Scan, ScanStatus, Transaction

__all__ = [
    "__version__",
    "CallContext",
    "ErrorKind",
    "LedgerError",
    "Participant",
    "Result",
    "Scan",
    "ScanLedger",
    "ScanStatus",
    "Transaction",
]
