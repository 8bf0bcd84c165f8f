"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from scanledger.contract import ScanLedger
from scanledger.host import CallContext
from scanledger.store import JournalStore


@pytest.fixture
def ledger() -> ScanLedger:
    """Fresh ledger over an in-memory store."""
    return ScanLedger()


@pytest.fixture
def alice() -> CallContext:
    return CallContext(caller="ST1ALICE", height=10)


@pytest.fixture
def bob() -> CallContext:
    return CallContext(caller="ST2BOB", height=10)


@pytest.fixture
def owner(ledger: ScanLedger) -> CallContext:
    """Call context resolving to the contract's own identity."""
    return CallContext(caller=ledger.owner, height=10)


@pytest.fixture
def state_dir(tmp_path: Path) -> Path:
    return tmp_path / ".scanledger"


@pytest.fixture
def journal_ledger(state_dir: Path) -> ScanLedger:
    """Ledger persisted to a journal under tmp_path."""
    return ScanLedger(JournalStore(state_dir))
