"""CLI entrypoint for scanledger.

The CLI plays the host: it supplies the caller identity and block height for
each call and persists committed state in a JSONL journal.
"""

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .config import load_config
from .host import UINT128_MAX, CallContext


@click.group()
@click.version_option(__version__, prog_name="scanledger")
@click.option(
    "--state",
    "state_dir",
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
    default=Path(".scanledger"),
    show_default=True,
    help="Directory holding the ledger journal",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to scanledger.toml (defaults to ./scanledger.toml if present)",
)
@click.option(
    "--caller",
    envvar="SCANLEDGER_CALLER",
    default=None,
    help="Calling identity (env: SCANLEDGER_CALLER)",
)
@click.option(
    "--height",
    envvar="SCANLEDGER_HEIGHT",
    type=click.IntRange(min=0, max=UINT128_MAX),
    default=0,
    show_default=True,
    help="Current block height (env: SCANLEDGER_HEIGHT)",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="warning",
    show_default=True,
)
@click.pass_context
def cli(
    ctx: click.Context,
    state_dir: Path,
    config_path: Path | None,
    caller: str | None,
    height: int,
    log_level: str,
) -> None:
    """scanledger - participant, transaction and scan ledger.

    Mutating commands need a caller identity (--caller or SCANLEDGER_CALLER).
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    try:
        config = load_config(config_path)
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e

    from .commands.ledger_cmd import open_ledger

    try:
        ctx.obj["ledger"] = open_ledger(state_dir, config)
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    ctx.obj["caller"] = caller
    ctx.obj["height"] = height


def _call_context(ctx: click.Context) -> CallContext:
    caller = ctx.obj["caller"]
    if not caller:
        raise click.UsageError("A caller identity is required (--caller or SCANLEDGER_CALLER).")
    return CallContext(caller=caller, height=ctx.obj["height"])


json_option = click.option("--json", "output_json", is_flag=True, help="Output results as JSON")


@cli.command()
@click.argument("display_name")
@json_option
@click.pass_context
def register(ctx: click.Context, display_name: str, output_json: bool) -> None:
    """Register (or re-register) the caller. Replaces any existing profile."""
    from .commands.ledger_cmd import run_register

    sys.exit(run_register(ctx.obj["ledger"], _call_context(ctx), display_name, output_json=output_json))


@cli.command("add-type")
@click.argument("label")
@json_option
@click.pass_context
def add_type(ctx: click.Context, label: str, output_json: bool) -> None:
    """Append a transaction type label (contract identity only)."""
    from .commands.ledger_cmd import run_add_type

    sys.exit(run_add_type(ctx.obj["ledger"], _call_context(ctx), label, output_json=output_json))


@cli.command("log-tx")
@click.argument("tx_type")
@click.argument("volume", type=click.IntRange(min=0))
@click.option("--note", default=None, help="Optional free-text note")
@json_option
@click.pass_context
def log_tx(ctx: click.Context, tx_type: str, volume: int, note: str | None, output_json: bool) -> None:
    """Log a transaction of TX_TYPE with VOLUME for the caller."""
    from .commands.ledger_cmd import run_log_tx

    sys.exit(run_log_tx(ctx.obj["ledger"], _call_context(ctx), tx_type, volume, note, output_json=output_json))


@cli.command("create-scan")
@click.argument("name")
@click.argument("start_height", type=click.IntRange(min=0))
@click.argument("end_height", type=click.IntRange(min=0))
@click.option("--description", "-d", default="", help="Scan description")
@json_option
@click.pass_context
def create_scan(
    ctx: click.Context,
    name: str,
    start_height: int,
    end_height: int,
    description: str,
    output_json: bool,
) -> None:
    """Create a pending scan covering START_HEIGHT..END_HEIGHT."""
    from .commands.ledger_cmd import run_create_scan

    sys.exit(run_create_scan(
        ctx.obj["ledger"],
        _call_context(ctx),
        name,
        description,
        start_height,
        end_height,
        output_json=output_json,
    ))


@cli.command("start-scan")
@click.argument("scan_id", type=int)
@json_option
@click.pass_context
def start_scan(ctx: click.Context, scan_id: int, output_json: bool) -> None:
    """Move a scan to in-progress (creator only)."""
    from .commands.ledger_cmd import run_start_scan

    sys.exit(run_start_scan(ctx.obj["ledger"], _call_context(ctx), scan_id, output_json=output_json))


@cli.command("complete-scan")
@click.argument("scan_id", type=int)
@json_option
@click.pass_context
def complete_scan(ctx: click.Context, scan_id: int, output_json: bool) -> None:
    """Move an in-progress scan to completed (creator only)."""
    from .commands.ledger_cmd import run_complete_scan

    sys.exit(run_complete_scan(ctx.obj["ledger"], _call_context(ctx), scan_id, output_json=output_json))


@cli.command()
@click.argument("identity")
@json_option
@click.pass_context
def profile(ctx: click.Context, identity: str, output_json: bool) -> None:
    """Show a participant profile."""
    from .commands.ledger_cmd import run_profile

    sys.exit(run_profile(ctx.obj["ledger"], identity, output_json=output_json))


@cli.command()
@click.argument("tx_id", type=int)
@click.argument("participant")
@json_option
@click.pass_context
def tx(ctx: click.Context, tx_id: int, participant: str, output_json: bool) -> None:
    """Show a transaction. Both the id and the participant are required."""
    from .commands.ledger_cmd import run_tx

    sys.exit(run_tx(ctx.obj["ledger"], tx_id, participant, output_json=output_json))


@cli.command()
@click.argument("scan_id", type=int)
@json_option
@click.pass_context
def scan(ctx: click.Context, scan_id: int, output_json: bool) -> None:
    """Show a scan."""
    from .commands.ledger_cmd import run_scan

    sys.exit(run_scan(ctx.obj["ledger"], scan_id, output_json=output_json))


@cli.command()
@json_option
@click.pass_context
def types(ctx: click.Context, output_json: bool) -> None:
    """List allowed transaction types."""
    from .commands.ledger_cmd import run_types

    sys.exit(run_types(ctx.obj["ledger"], output_json=output_json))


@cli.command()
@click.option("--limit", "-n", type=click.IntRange(min=1), default=None, help="Show only the last N events")
@json_option
@click.pass_context
def events(ctx: click.Context, limit: int | None, output_json: bool) -> None:
    """Show committed ledger events."""
    from .commands.ledger_cmd import run_events

    sys.exit(run_events(ctx.obj["ledger"], limit=limit, output_json=output_json))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
