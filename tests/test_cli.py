"""Tests for the scanledger CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from scanledger.cli import cli
from scanledger.config import DEFAULT_CONTRACT_IDENTITY


@pytest.fixture
def invoke(tmp_path: Path):
    """Run the CLI against a journal under tmp_path."""
    runner = CliRunner()
    state = tmp_path / "state"

    def _invoke(*args: str, caller: str | None = "ST1ALICE", height: int = 10):
        base = ["--state", str(state), "--height", str(height)]
        if caller is not None:
            base += ["--caller", caller]
        return runner.invoke(cli, [*base, *args])

    return _invoke


def test_register_and_show_profile(invoke):
    result = invoke("register", "Alice")
    assert result.exit_code == 0, result.output

    result = invoke("profile", "ST1ALICE", "--json")
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["display_name"] == "Alice"
    assert data["registered_at"] == 10
    assert data["last_activity"] is None


def test_log_tx_persists_between_invocations(invoke):
    invoke("register", "Alice")
    result = invoke("log-tx", "transfer", "250", "--note", "rent", "--json", height=14)
    assert result.exit_code == 0
    assert json.loads(result.output) == {"ok": True, "value": 1}

    result = invoke("tx", "1", "ST1ALICE", "--json")
    data = json.loads(result.output)
    assert data["volume"] == 250
    assert data["height"] == 14
    assert data["note"] == "rent"

    assert json.loads(invoke("profile", "ST1ALICE", "--json").output)["last_activity"] == 14


def test_invalid_tx_type_exits_nonzero(invoke):
    result = invoke("log-tx", "unknown-type", "100", "--json")
    assert result.exit_code == 1
    assert json.loads(result.output) == {"ok": False, "error": "invalid-tx-type", "code": 103}


def test_tx_lookup_needs_matching_participant(invoke):
    invoke("log-tx", "transfer", "1")
    assert invoke("tx", "1", "ST2BOB").exit_code == 1


def test_scan_lifecycle(invoke):
    result = invoke("create-scan", "weekly", "20", "30", "-d", "volume", "--json")
    assert json.loads(result.output)["value"] == 1

    assert invoke("start-scan", "1", caller="ST2BOB").exit_code == 1
    assert invoke("start-scan", "1").exit_code == 0

    data = json.loads(invoke("scan", "1", "--json").output)
    assert data["status"] == "in-progress"
    assert data["live"] is True

    assert invoke("complete-scan", "1").exit_code == 0
    data = json.loads(invoke("scan", "1", "--json").output)
    assert data["status"] == "completed"
    assert data["live"] is False


def test_create_scan_in_the_past(invoke):
    result = invoke("create-scan", "late", "5", "10", "--json", height=20)
    assert result.exit_code == 1
    assert json.loads(result.output)["error"] == "invalid-block-range"


def test_add_type_requires_contract_identity(invoke):
    assert invoke("add-type", "airdrop").exit_code == 1
    assert invoke("add-type", "airdrop", caller=DEFAULT_CONTRACT_IDENTITY).exit_code == 0

    data = json.loads(invoke("types", "--json").output)
    assert data["types"][-1] == "airdrop"
    assert data["capacity"] == 9


def test_mutation_without_caller_is_usage_error(invoke):
    result = invoke("register", "Nobody", caller=None)
    assert result.exit_code == 2
    assert "caller identity is required" in result.output


def test_events_listing(invoke):
    invoke("register", "Alice")
    invoke("log-tx", "vote", "1")

    events = json.loads(invoke("events", "--json").output)
    assert [e["event_type"] for e in events] == ["participant.registered", "transaction.logged"]

    last = json.loads(invoke("events", "-n", "1", "--json").output)
    assert len(last) == 1


def test_rich_output(invoke):
    invoke("register", "Alice")
    result = invoke("profile", "ST1ALICE")
    assert result.exit_code == 0
    assert "Alice" in result.output

    assert invoke("types").exit_code == 0
    assert invoke("scan", "42").exit_code == 1


class TestMarkupInUserText:
    def test_bracketed_display_name_is_shown_verbatim(self, invoke):
        assert invoke("register", "[/]").exit_code == 0

        result = invoke("profile", "ST1ALICE")
        assert result.exit_code == 0, result.output
        assert "[/]" in result.output

    def test_style_tags_are_not_interpreted(self, invoke):
        invoke("register", "[bold]Alice[/bold] [red]x")

        result = invoke("profile", "ST1ALICE")
        assert result.exit_code == 0
        assert "[bold]Alice[/bold] [red]x" in result.output

    def test_bracketed_caller_succeeds_after_write(self, invoke):
        result = invoke("register", "Alice", caller="[/]")
        assert result.exit_code == 0, result.output
        assert "[/]" in result.output

        assert json.loads(invoke("profile", "[/]", "--json").output)["display_name"] == "Alice"
        assert invoke("profile", "[/]").exit_code == 0

    def test_bracketed_scan_and_transaction_text(self, invoke):
        invoke("create-scan", "[/]", "20", "30", "-d", "[red]desc")
        result = invoke("scan", "1")
        assert result.exit_code == 0, result.output
        assert "[red]desc" in result.output

        invoke("log-tx", "transfer", "1", "--note", "[/]")
        assert invoke("tx", "1", "ST1ALICE").exit_code == 0
        assert invoke("events").exit_code == 0
        assert invoke("tx", "9", "[/]").exit_code == 1


def test_height_above_uint128_is_bad_parameter(invoke):
    result = invoke("register", "Alice", height=2**128)
    assert result.exit_code == 2
    assert "--height" in result.output


def test_failed_operation_prints_error_kind(invoke):
    result = invoke("start-scan", "5")
    assert result.exit_code == 1
    assert "scan-not-found (u101)" in result.output
