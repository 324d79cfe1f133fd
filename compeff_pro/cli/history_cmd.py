"""CLI commands for the calculation history."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from compeff_pro.core.history import HistoryStore
from compeff_pro.cycle.solver import CalculationMode

_MODES = [m.value for m in CalculationMode]


def _store(ctx: click.Context) -> HistoryStore:
    store = ctx.obj.get("history")
    return store if store is not None else HistoryStore()


@click.group("history")
@click.pass_context
def history(ctx: click.Context) -> None:
    """Recent calculations."""
    pass


@history.command("list")
@click.option("--mode", type=click.Choice(_MODES), default=None, help="Only entries of this mode.")
@click.option("--limit", type=int, default=20, show_default=True, help="Number of entries to show.")
@click.pass_context
def history_list(ctx: click.Context, mode: str | None, limit: int) -> None:
    """List recent calculations, newest first."""
    console: Console = ctx.obj.get("console", Console())
    entries = _store(ctx).list(mode)
    if not entries:
        console.print("[dim]No calculations in history.[/dim]")
        return

    table = Table(title="Calculation History")
    table.add_column("ID", style="cyan")
    table.add_column("Time", style="dim")
    table.add_column("Mode", style="yellow")
    table.add_column("Label", style="green")

    for e in entries[:limit]:
        table.add_row(e["id"], e["timestamp"][:19].replace("T", " "), CalculationMode(e["mode"]).label, e["label"])
    console.print(table)


@history.command("show")
@click.argument("entry_id")
@click.pass_context
def history_show(ctx: click.Context, entry_id: str) -> None:
    """Show inputs and results of one entry."""
    console: Console = ctx.obj.get("console", Console())
    try:
        entry = _store(ctx).get(entry_id)
    except KeyError as exc:
        raise click.BadParameter(str(exc.args[0]), param_hint="ENTRY_ID") from exc

    console.print(f"\n[bold]{CalculationMode(entry['mode']).label}: {entry['label']}[/bold]")
    console.print(f"[dim]{entry['timestamp']}[/dim]\n")

    inputs = Table(title="Inputs")
    inputs.add_column("Parameter", style="cyan")
    inputs.add_column("Value", style="green", justify="right")
    for k, v in entry["inputs"].items():
        inputs.add_row(k, str(v))
    console.print(inputs)

    summary = Table(title="Results")
    summary.add_column("Parameter", style="cyan")
    summary.add_column("Value", style="green", justify="right")
    for k, v in entry["summary"].items():
        summary.add_row(k, f"{v:.4g}" if isinstance(v, float) else str(v))
    console.print(summary)


@history.command("delete")
@click.argument("entry_id")
@click.pass_context
def history_delete(ctx: click.Context, entry_id: str) -> None:
    """Remove one entry."""
    console: Console = ctx.obj.get("console", Console())
    if not _store(ctx).delete(entry_id):
        raise click.BadParameter(f"No history entry with id '{entry_id}'", param_hint="ENTRY_ID")
    console.print(f"[green]Deleted[/green] {entry_id}")


@history.command("clear")
@click.confirmation_option(prompt="Delete all history entries?")
@click.pass_context
def history_clear(ctx: click.Context) -> None:
    """Remove every entry."""
    console: Console = ctx.obj.get("console", Console())
    count = _store(ctx).clear()
    console.print(f"[green]Cleared[/green] {count} entries")
