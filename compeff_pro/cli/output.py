"""Shared plumbing for the calculation commands.

Rich tables for results and state points, the ``-o`` / ``--no-history``
options, database displacement lookup and the common finish step that
saves and records a calculation.
"""

from __future__ import annotations

from typing import Any, Callable

import click
from rich.console import Console
from rich.table import Table

from compeff_pro.core.compressors import find_model, get_model_detail
from compeff_pro.core.config import build_state, save_calculation_json
from compeff_pro.core.fluids import FluidPropertyError
from compeff_pro.core.history import HistoryStore
from compeff_pro.cycle.solver import CalculationMode, ModeInput, ModeResult, inputs_to_dict, solve, summary_dict
from compeff_pro.utils.validation import CalculationError


class CalculationFailed(click.ClickException):
    """A solver rejected its inputs; shown in red, exit code 1."""

    def show(self, file: Any = None) -> None:
        Console(stderr=True).print(f"[bold red]Error:[/bold red] {self.message}")


def calculation_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add ``--output/-o`` and ``--no-history`` to a calculation command."""
    func = click.option("--no-history", is_flag=True, default=False, help="Do not record in history.")(func)
    func = click.option("--output", "-o", type=click.Path(), default=None, help="Save calculation (JSON).")(func)
    return func


def database_displacement(brand: str | None, series: str | None, model: str | None) -> dict[str, Any] | None:
    """Model entry for ``--brand/--series/--model``, or None when no model is given.

    A model alone is searched across the whole database.
    """
    if not model:
        return None
    if brand and series:
        detail = get_model_detail(brand, series, model)
        if detail is None:
            raise click.BadParameter(f"Model '{model}' not found in {brand} / {series}", param_hint="--model")
        return detail
    try:
        return find_model(model)[2]
    except KeyError as exc:
        raise click.BadParameter(str(exc.args[0]), param_hint="--model") from exc


def run_calculation(mode: CalculationMode, inputs: ModeInput) -> ModeResult:
    """Solve, turning input and property errors into a CLI error."""
    try:
        return solve(mode, inputs)
    except (CalculationError, FluidPropertyError) as exc:
        raise CalculationFailed(str(exc)) from exc


def print_summary(console: Console, title: str, result: ModeResult) -> None:
    table = Table(title=title)
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_column("Unit", style="dim")

    for name, value, unit in result.summary_rows():
        table.add_row(name, _format(value), unit)
    console.print(table)


def print_state_points(console: Console, result: ModeResult) -> None:
    if not result.state_points:
        return
    table = Table(title="State Points")
    table.add_column("Point", style="cyan")
    table.add_column("Description")
    table.add_column("T [°C]", justify="right")
    table.add_column("P [bar]", justify="right")
    table.add_column("h [kJ/kg]", justify="right")
    table.add_column("s [kJ/kg·K]", justify="right")
    table.add_column("ṁ [kg/s]", justify="right")

    for p in result.state_points:
        table.add_row(
            p.name,
            p.description,
            f"{p.T_C:.1f}",
            f"{p.P_bar:.3f}",
            f"{p.h_kJ:.1f}",
            _format(p.s_kJ),
            f"{p.m_dot:.4f}",
        )
    console.print(table)


def print_warnings(console: Console, warnings: list[str]) -> None:
    for w in warnings:
        console.print(f"[yellow]Warning:[/yellow] {w}")


def _format(value: Any) -> str:
    if isinstance(value, float):
        if value != value:
            return "—"
        if value != 0.0 and abs(value) < 0.01:
            return f"{value:.4f}"
        return f"{value:.3f}"
    return str(value)


def finish(
    ctx: click.Context,
    mode: CalculationMode,
    inputs: ModeInput,
    result: ModeResult,
    output: str | None,
    no_history: bool,
) -> None:
    """Print, save and record a solved calculation."""
    console: Console = ctx.obj.get("console", Console())

    console.print(f"\n[bold]CompEff Pro: {mode.label}[/bold]\n")
    print_summary(console, "Performance", result)
    print_state_points(console, result)
    print_warnings(console, result.warnings)

    if output:
        save_calculation_json(build_state(mode.value, inputs, result), output)
        console.print(f"\n[dim]Saved to {output}[/dim]")

    if not no_history:
        store = ctx.obj.get("history")
        if store is None:
            store = HistoryStore()
        store.add(mode.value, result.history_label(), inputs_to_dict(inputs), summary_dict(result))
