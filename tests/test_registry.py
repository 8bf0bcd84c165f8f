"""Tests for the identity registry."""

from __future__ import annotations

from scanledger.contract import ScanLedger
from scanledger.errors import ErrorKind
from scanledger.events import PARTICIPANT_REGISTERED
from scanledger.host import CallContext


class TestRegister:
    def test_creates_profile(self, ledger: ScanLedger, alice: CallContext):
        result = ledger.register(alice, "Alice")

        assert result.ok
        assert result.value is True
        profile = ledger.get_profile(alice.caller)
        assert profile is not None
        assert profile.identity == alice.caller
        assert profile.display_name == "Alice"
        assert profile.registered_at == 10
        assert profile.total_scans == 0
        assert profile.last_activity is None

    def test_unknown_identity_has_no_profile(self, ledger: ScanLedger):
        assert ledger.get_profile("ST9NOBODY") is None

    def test_reregister_overwrites_instead_of_merging(self, ledger: ScanLedger, alice: CallContext):
        ledger.register(alice, "Alice")
        ledger.log_transaction(alice.at(15), "transfer", 100)
        assert ledger.get_profile(alice.caller).last_activity == 15

        ledger.register(alice.at(20), "Alice v2")

        profile = ledger.get_profile(alice.caller)
        assert profile.display_name == "Alice v2"
        assert profile.registered_at == 20
        assert profile.last_activity is None

    def test_any_caller_may_register_itself(self, ledger: ScanLedger, alice: CallContext, bob: CallContext):
        assert ledger.register(alice, "Alice").ok
        assert ledger.register(bob, "Bob").ok
        assert ledger.get_profile(bob.caller).display_name == "Bob"
        assert ledger.get_profile(alice.caller).display_name == "Alice"

    def test_display_name_too_long(self, ledger: ScanLedger, alice: CallContext):
        result = ledger.register(alice, "x" * 51)

        assert result.error is ErrorKind.INVALID_PARAMETERS
        assert ledger.get_profile(alice.caller) is None
        assert ledger.events() == []

    def test_display_name_at_limit(self, ledger: ScanLedger, alice: CallContext):
        assert ledger.register(alice, "x" * 50).ok

    def test_emits_event(self, ledger: ScanLedger, alice: CallContext):
        ledger.register(alice, "Alice")
        ledger.register(alice, "Alice again")

        events = ledger.events()
        assert [e.event_type for e in events] == [PARTICIPANT_REGISTERED, PARTICIPANT_REGISTERED]
        assert events[0].payload == {"display_name": "Alice", "replaced": False}
        assert events[1].payload == {"display_name": "Alice again", "replaced": True}
        assert events[0].caller == alice.caller
        assert events[0].height == 10
