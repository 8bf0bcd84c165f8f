"""Tests for the transaction type registry."""

from __future__ import annotations

import pytest

from scanledger.config import DEFAULT_TX_TYPES, LedgerConfig
from scanledger.contract import ScanLedger
from scanledger.errors import ErrorKind
from scanledger.events import TX_TYPE_ADDED
from scanledger.host import CallContext


class TestDefaults:
    def test_seeded_with_defaults(self, ledger: ScanLedger):
        assert ledger.list_types() == DEFAULT_TX_TYPES

    @pytest.mark.parametrize("label", ["transfer", "contract-call", "vote"])
    def test_common_labels_are_valid(self, ledger: ScanLedger, label: str):
        assert ledger.is_valid_type(label)

    def test_unknown_label_is_invalid(self, ledger: ScanLedger):
        assert not ledger.is_valid_type("unknown-type")

    def test_seeding_is_not_an_event(self, ledger: ScanLedger):
        assert ledger.events() == []


class TestAddType:
    def test_external_caller_is_rejected(self, ledger: ScanLedger, alice: CallContext):
        before = ledger.list_types()

        result = ledger.add_type(alice, "airdrop")

        assert result.error is ErrorKind.NOT_AUTHORIZED
        assert ledger.list_types() == before
        assert not ledger.is_valid_type("airdrop")

    def test_owner_context_appends(self, ledger: ScanLedger, owner: CallContext):
        result = ledger.add_type(owner, "airdrop")

        assert result.ok
        assert ledger.list_types() == (*DEFAULT_TX_TYPES, "airdrop")
        assert ledger.is_valid_type("airdrop")
        assert ledger.events()[-1].event_type == TX_TYPE_ADDED

    def test_duplicates_are_appended(self, ledger: ScanLedger, owner: CallContext):
        assert ledger.add_type(owner, "transfer").ok
        assert ledger.list_types().count("transfer") == 2

    def test_capacity(self, ledger: ScanLedger, owner: CallContext):
        free = ledger.config.type_capacity - len(DEFAULT_TX_TYPES)
        for i in range(free):
            assert ledger.add_type(owner, f"extra-{i}").ok
        full = ledger.list_types()
        assert len(full) == 9

        result = ledger.add_type(owner, "one-too-many")

        assert result.error is ErrorKind.INVALID_PARAMETERS
        assert ledger.list_types() == full

    def test_authorization_checked_before_capacity(self, alice: CallContext):
        ledger = ScanLedger(config=LedgerConfig(type_capacity=2, default_types=("a", "b")))
        assert ledger.add_type(alice, "c").error is ErrorKind.NOT_AUTHORIZED

    @pytest.mark.parametrize("label", ["x" * 21, "café"])
    def test_label_must_be_short_ascii(self, ledger: ScanLedger, owner: CallContext, label: str):
        assert ledger.add_type(owner, label).error is ErrorKind.INVALID_PARAMETERS

    def test_custom_owner_identity(self):
        ledger = ScanLedger(config=LedgerConfig(contract_identity="ST3SELF.ledger"))
        assert ledger.owner == "ST3SELF.ledger"
        assert ledger.add_type(CallContext("ST3SELF.ledger", 1), "bridge").ok
        assert ledger.add_type(CallContext("ST3SELF", 1), "bridge").error is ErrorKind.NOT_AUTHORIZED


class TestHistoricalValidity:
    def test_registry_edits_do_not_touch_stored_transactions(self, alice: CallContext):
        owner_id = "ST3SELF.ledger"
        ledger = ScanLedger(config=LedgerConfig(contract_identity=owner_id, default_types=("transfer",)))
        tx_id = ledger.log_transaction(alice, "transfer", 5).unwrap()

        ledger.add_type(CallContext(owner_id, 11), "vote")

        record = ledger.get_transaction(tx_id, alice.caller)
        assert record is not None
        assert record.tx_type == "transfer"
