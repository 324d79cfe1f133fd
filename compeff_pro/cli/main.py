"""CompEff Pro command-line interface.

Entry point for the ``compeff`` CLI tool.
"""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from compeff_pro import __app_name__, __version__
from compeff_pro.core.history import HistoryStore

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name=__app_name__)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Show debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """CompEff Pro: Compressor Efficiency Pro.

    Performance and efficiency calculations for oil-injected
    refrigeration, gas and heat-pump compressors.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    ctx.ensure_object(dict)
    ctx.obj["console"] = console
    ctx.obj.setdefault("history", HistoryStore())


# Import and register sub-command groups
from compeff_pro.cli.efficiency_cmd import efficiency  # noqa: E402
from compeff_pro.cli.gas_cmd import gas  # noqa: E402
from compeff_pro.cli.gui_cmd import gui  # noqa: E402
from compeff_pro.cli.heat_pump_cmd import heat_pump  # noqa: E402
from compeff_pro.cli.history_cmd import history  # noqa: E402
from compeff_pro.cli.info_cmd import info  # noqa: E402
from compeff_pro.cli.refrig_cmd import refrig  # noqa: E402
from compeff_pro.cli.report_cmd import report  # noqa: E402
from compeff_pro.cli.two_stage_cmd import two_stage  # noqa: E402

cli.add_command(refrig)
cli.add_command(gas)
cli.add_command(two_stage)
cli.add_command(heat_pump)
cli.add_command(efficiency)
cli.add_command(info)
cli.add_command(history)
cli.add_command(report)
cli.add_command(gui)


def main() -> None:
    """Convenience wrapper for entry-point scripts."""
    cli()
