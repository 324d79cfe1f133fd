"""``compeff report``: text / HTML summaries of a saved calculation."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

from compeff_pro.core.config import load_calculation_json
from compeff_pro.reports.summary import generate_text_report, save_html_report, save_text_report

_WRITERS = {"text": (".txt", save_text_report), "html": (".html", save_html_report)}


def _report_paths(calc: Path, fmt: str, output: str | None) -> dict[str, Path]:
    """Target file per format; with no ``-o`` files land next to *calc*."""
    kinds = ["text", "html"] if fmt == "both" else [fmt]
    base = Path(output) if output else calc.with_name(f"{calc.stem}_report")
    if len(kinds) == 1 and output:
        return {kinds[0]: base}
    return {kind: base.with_suffix(_WRITERS[kind][0]) for kind in kinds}


@click.command("report")
@click.option("--calc", type=click.Path(exists=True, dir_okay=False), required=True, help="Saved calculation JSON.")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["text", "html", "both"], case_sensitive=False),
    default="text",
    show_default=True,
)
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None, help="Report file (or base name for both).")
@click.pass_context
def report(ctx: click.Context, calc: str, fmt: str, output: str | None) -> None:
    """Render a report for a calculation saved with ``-o``.

    A text report without ``-o`` goes to the console only.
    """
    console: Console = ctx.obj.get("console", Console())
    fmt = fmt.lower()
    state = load_calculation_json(calc)

    if fmt == "text" and output is None:
        console.print(generate_text_report(state), markup=False, highlight=False)
        return

    for kind, path in _report_paths(Path(calc), fmt, output).items():
        _WRITERS[kind][1](state, path)
        console.print(f"[green]{kind.upper()} report saved:[/green] {path}")
