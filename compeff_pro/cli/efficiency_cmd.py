"""CLI commands for compressor efficiency estimates."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from compeff_pro.core.efficiency import EfficiencyEstimate, empirical_efficiencies, screw_efficiency


@click.group("efficiency")
@click.pass_context
def efficiency(ctx: click.Context) -> None:
    """Empirical compressor efficiency estimates."""
    pass


def _print_estimate(console: Console, title: str, est: EfficiencyEstimate) -> None:
    table = Table(title=title)
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_column("Unit", style="dim")

    table.add_row("Pressure Ratio", f"{est.pressure_ratio:.3f}", "—")
    table.add_row("Volumetric Efficiency", f"{est.eta_v:.3f}", "—")
    table.add_row("Isentropic Efficiency", f"{est.eta_s:.3f}", "—")
    table.add_row("Isothermal Efficiency", f"{est.eta_iso:.3f}", "—")
    console.print(table)


@efficiency.command("empirical")
@click.option("--pr", type=float, required=True, help="Pressure ratio (discharge / suction).")
@click.pass_context
def empirical_cmd(ctx: click.Context, pr: float) -> None:
    """Generic oil-injected screw efficiencies from pressure ratio."""
    console: Console = ctx.obj.get("console", Console())
    try:
        est = empirical_efficiencies(pr)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--pr") from exc
    _print_estimate(console, "Empirical Efficiency", est)


@efficiency.command("screw")
@click.option("--pd", type=float, required=True, help="Discharge pressure [bar].")
@click.option("--ps", type=float, required=True, help="Suction pressure [bar].")
@click.option("--vi", type=float, default=3.6, show_default=True, help="Built-in volume ratio.")
@click.option("--economizer", is_flag=True, default=False, help="Economizer port active.")
@click.pass_context
def screw_cmd(ctx: click.Context, pd: float, ps: float, vi: float, economizer: bool) -> None:
    """Ammonia screw efficiencies for a fixed built-in volume ratio."""
    console: Console = ctx.obj.get("console", Console())
    try:
        est = screw_efficiency(pd, ps, vi=vi, economizer=economizer)
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc
    _print_estimate(console, f"Screw Efficiency (Vi = {vi:g})", est)
