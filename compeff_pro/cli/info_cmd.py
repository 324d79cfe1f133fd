"""CLI command for inspecting calculation files, fluids and the compressor database."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from compeff_pro.core.compressors import (
    get_all_brands,
    get_filtered_brands,
    get_filtered_series_by_brand,
    get_models_by_series,
    get_series_by_brand,
)
from compeff_pro.core.config import load_calculation_json
from compeff_pro.core.fluids import FluidPropertyError, fluid_summary, get_fluid_info, list_fluids
from compeff_pro.cycle.solver import CalculationMode

_MODES = [m.value for m in CalculationMode]


@click.group("info")
@click.pass_context
def info(ctx: click.Context) -> None:
    """Inspect calculation files, fluids and compressors."""
    pass


@info.command("calc")
@click.argument("path", type=click.Path(exists=True))
@click.pass_context
def info_calc(ctx: click.Context, path: str) -> None:
    """Display summary of a saved calculation."""
    console: Console = ctx.obj.get("console", Console())
    state = load_calculation_json(path)

    tree = Tree(f"[bold]{state.meta.name}[/bold]")
    meta = tree.add("[cyan]Metadata[/cyan]")
    meta.add(f"Author: {state.meta.author or '—'}")
    meta.add(f"Version: {state.meta.version}")
    meta.add(f"Modified: {state.meta.modified or '—'}")

    op = tree.add("[cyan]Operating Point[/cyan]")
    op.add(f"Mode: {CalculationMode(state.mode).label}")
    op.add(f"Fluid: {state.fluid}")
    for k, v in state.inputs.items():
        if isinstance(v, list) and not v:
            continue
        op.add(f"{k}: {v}")

    if state.summary:
        perf = tree.add("[cyan]Performance[/cyan]")
        for row in state.summary:
            value = row["value"]
            text = f"{value:.4g}" if isinstance(value, float) else str(value)
            perf.add(f"{row['parameter']}: {text} {row['unit']}")

    if state.warnings:
        warn = tree.add("[yellow]Warnings[/yellow]")
        for w in state.warnings:
            warn.add(w)

    console.print(tree)


@info.command("fluids")
@click.option("--mode", type=click.Choice(_MODES), default=None, help="Only fluids offered in this mode.")
@click.pass_context
def info_fluids(ctx: click.Context, mode: str | None) -> None:
    """List catalogue fluids."""
    console: Console = ctx.obj.get("console", Console())
    table = Table(title="Available Fluids")
    table.add_column("Name", style="cyan")
    table.add_column("Formula", style="green")
    table.add_column("Type", style="yellow")
    table.add_column("Safety", justify="center")
    table.add_column("GWP", justify="right")
    table.add_column("CoolProp Name", style="dim")

    for name in list_fluids(mode):
        data = get_fluid_info(name)
        table.add_row(
            name,
            data.get("formula", "—"),
            data.get("type", "—"),
            data.get("safety_class") or "—",
            str(data.get("gwp", "—")),
            data.get("coolprop_name", "—"),
        )
    console.print(table)


@info.command("fluid")
@click.argument("name")
@click.pass_context
def info_fluid(ctx: click.Context, name: str) -> None:
    """Critical point and boiling point of one fluid."""
    console: Console = ctx.obj.get("console", Console())
    try:
        summary = fluid_summary(name)
    except FluidPropertyError as exc:
        raise click.BadParameter(f"Unknown fluid '{name}'", param_hint="NAME") from exc

    table = Table(title=f"Fluid: {name}")
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_column("Unit", style="dim")

    table.add_row("Critical Temperature", f"{summary['T_critical_C']:.2f}", "°C")
    table.add_row("Critical Pressure", f"{summary['P_critical_bar']:.2f}", "bar")
    table.add_row("Molar Mass", f"{summary['molar_mass_g_mol']:.3f}", "g/mol")
    table.add_row("Normal Boiling Point", f"{summary['T_boiling_C']:.2f}", "°C")
    console.print(table)


@info.command("compressors")
@click.option("--mode", type=click.Choice(_MODES), default=None, help="Only brands and series offered in this mode.")
@click.pass_context
def info_compressors(ctx: click.Context, mode: str | None) -> None:
    """List compressor brands and series."""
    console: Console = ctx.obj.get("console", Console())
    brands = get_filtered_brands(mode) if mode else get_all_brands()

    tree = Tree("[bold]Compressor Database[/bold]")
    for brand in brands:
        series_list = get_filtered_series_by_brand(mode, brand) if mode else get_series_by_brand(brand)
        node = tree.add(f"[cyan]{brand}[/cyan]")
        for series in series_list:
            node.add(f"{series} [dim]({len(get_models_by_series(brand, series))} models)[/dim]")
    console.print(tree)


@info.command("models")
@click.argument("brand")
@click.argument("series")
@click.pass_context
def info_models(ctx: click.Context, brand: str, series: str) -> None:
    """List the models of one compressor series."""
    console: Console = ctx.obj.get("console", Console())
    models = get_models_by_series(brand, series)
    if not models:
        raise click.BadParameter(f"No models for {brand} / {series}", param_hint="BRAND SERIES")

    two_stage = any("disp_hp" in m for m in models)
    table = Table(title=f"{brand}: {series}")
    table.add_column("Model", style="cyan")
    table.add_column("Displacement [m³/h]", style="green", justify="right")
    if two_stage:
        table.add_column("LP [m³/h]", justify="right")
        table.add_column("HP [m³/h]", justify="right")
        table.add_column("Vi", justify="right")
    table.add_column("Note", style="dim")

    for m in models:
        row = [m["model"], f"{m['displacement']:g}"]
        if two_stage:
            row += [
                f"{m['disp_lp']:g}" if "disp_lp" in m else "—",
                f"{m['disp_hp']:g}" if "disp_hp" in m else "—",
                f"{m['vi_ratio']:g}" if "vi_ratio" in m else "—",
            ]
        row.append(m.get("note") or m.get("rotor_code", ""))
        table.add_row(*row)
    console.print(table)
