"""Ledger CLI commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import LedgerConfig
from ..contract import ScanLedger
from ..errors import Result
from ..host import CallContext
from ..models import ScanStatus
from ..store import JournalStore

_STATUS_STYLES = {
    ScanStatus.PENDING: "yellow",
    ScanStatus.IN_PROGRESS: "cyan",
    ScanStatus.COMPLETED: "green",
}


def open_ledger(state_dir: Path, config: LedgerConfig) -> ScanLedger:
    return ScanLedger(JournalStore(state_dir), config)


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, sort_keys=True))


def _report(result: Result, message: str, *, output_json: bool) -> int:
    """Print an operation outcome and return the exit code."""
    if output_json:
        _print_json(result.to_dict())
        return 0 if result.ok else 1

    if result.error is not None:
        console = Console(stderr=True)
        console.print(f"[red]Error:[/] {result.error.value} (u{result.error.code})")
        return 1
    Console().print(escape(message.format(value=result.value)), style="green")
    return 0


# --- Entry points ---


def run_register(ledger: ScanLedger, ctx: CallContext, display_name: str, *, output_json: bool = False) -> int:
    result = ledger.register(ctx, display_name)
    return _report(result, f"Registered {ctx.caller} at height {ctx.height}", output_json=output_json)


def run_add_type(ledger: ScanLedger, ctx: CallContext, label: str, *, output_json: bool = False) -> int:
    result = ledger.add_type(ctx, label)
    return _report(result, f"Added transaction type {label!r}", output_json=output_json)


def run_log_tx(
    ledger: ScanLedger,
    ctx: CallContext,
    tx_type: str,
    volume: int,
    note: str | None,
    *,
    output_json: bool = False,
) -> int:
    result = ledger.log_transaction(ctx, tx_type, volume, note)
    return _report(result, "Logged transaction {value}", output_json=output_json)


def run_create_scan(
    ledger: ScanLedger,
    ctx: CallContext,
    name: str,
    description: str,
    start_height: int,
    end_height: int,
    *,
    output_json: bool = False,
) -> int:
    result = ledger.create_scan(ctx, name, description, start_height, end_height)
    return _report(result, "Created scan {value}", output_json=output_json)


def run_start_scan(ledger: ScanLedger, ctx: CallContext, scan_id: int, *, output_json: bool = False) -> int:
    result = ledger.start_scan(ctx, scan_id)
    return _report(result, f"Scan {scan_id} in progress", output_json=output_json)


def run_complete_scan(ledger: ScanLedger, ctx: CallContext, scan_id: int, *, output_json: bool = False) -> int:
    result = ledger.complete_scan(ctx, scan_id)
    return _report(result, f"Scan {scan_id} completed", output_json=output_json)


# --- Queries ---


def _not_found(what: str, output_json: bool) -> int:
    if output_json:
        _print_json(None)
    else:
        Console(stderr=True).print(f"[red]Not found:[/] {escape(what)}")
    return 1


def run_profile(ledger: ScanLedger, identity: str, *, output_json: bool = False) -> int:
    profile = ledger.get_profile(identity)
    if profile is None:
        return _not_found(f"participant {identity}", output_json)
    if output_json:
        _print_json(profile.to_dict())
        return 0

    table = Table(title=f"Participant {escape(profile.identity)}", show_header=False)
    table.add_column("field", style="cyan")
    table.add_column("value")
    table.add_row("display name", escape(profile.display_name))
    table.add_row("registered at", str(profile.registered_at))
    table.add_row("total scans", str(profile.total_scans))
    table.add_row("last activity", "-" if profile.last_activity is None else str(profile.last_activity))
    Console().print(table)
    return 0


def run_tx(ledger: ScanLedger, tx_id: int, participant: str, *, output_json: bool = False) -> int:
    record = ledger.get_transaction(tx_id, participant)
    if record is None:
        return _not_found(f"transaction {tx_id} for {participant}", output_json)
    if output_json:
        _print_json(record.to_dict())
        return 0

    table = Table(title=f"Transaction {record.tx_id}", show_header=False)
    table.add_column("field", style="cyan")
    table.add_column("value")
    table.add_row("participant", escape(record.participant))
    table.add_row("type", escape(record.tx_type))
    table.add_row("volume", str(record.volume))
    table.add_row("height", str(record.height))
    table.add_row("note", escape(record.note or ""))
    Console().print(table)
    return 0


def run_scan(ledger: ScanLedger, scan_id: int, *, output_json: bool = False) -> int:
    scan = ledger.get_scan(scan_id)
    if scan is None:
        return _not_found(f"scan {scan_id}", output_json)
    if output_json:
        data = scan.to_dict()
        data["live"] = scan.is_live
        _print_json(data)
        return 0

    style = _STATUS_STYLES[scan.status]
    table = Table(title=f"Scan {scan.scan_id}: {escape(scan.name)}", show_header=False)
    table.add_column("field", style="cyan")
    table.add_column("value")
    table.add_row("description", escape(scan.description))
    table.add_row("creator", escape(scan.creator))
    table.add_row("range", f"{scan.start_height}..{scan.end_height}")
    table.add_row("status", f"[{style}]{scan.status.value}[/]")
    table.add_row("active", str(scan.active).lower())
    table.add_row("live", str(scan.is_live).lower())
    table.add_row("transactions", str(scan.total_transactions))
    Console().print(table)
    return 0


def run_types(ledger: ScanLedger, *, output_json: bool = False) -> int:
    labels = ledger.list_types()
    if output_json:
        _print_json({"types": list(labels), "capacity": ledger.config.type_capacity})
        return 0

    table = Table(title=f"Transaction types ({len(labels)}/{ledger.config.type_capacity})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("label", style="magenta")
    for i, label in enumerate(labels, start=1):
        table.add_row(str(i), escape(label))
    Console().print(table)
    return 0


def run_events(ledger: ScanLedger, *, limit: int | None = None, output_json: bool = False) -> int:
    events = ledger.events()
    if limit is not None:
        events = events[-limit:]
    if output_json:
        _print_json([e.to_dict() for e in events])
        return 0

    if not events:
        Console().print("No events recorded.", style="dim")
        return 0

    table = Table(title="Events")
    table.add_column("height", justify="right")
    table.add_column("event", style="magenta")
    table.add_column("caller", style="cyan")
    table.add_column("payload", style="dim")
    for e in events:
        table.add_row(
            str(e.height),
            e.event_type,
            escape(e.caller),
            escape(json.dumps(e.payload, separators=(",", ":"), sort_keys=True)),
        )
    Console().print(table)
    return 0
