"""CLI command to launch the CompEff Pro desktop GUI."""

from __future__ import annotations

import click


@click.command("gui")
def gui() -> None:
    """Launch the CompEff Pro desktop application."""
    try:
        from compeff_pro.ui.app import run
    except ImportError as e:
        click.echo(
            f"GUI dependencies not installed: {e}\n"
            f"Install with: pip install -e '.[ui]'"
        )
        raise SystemExit(1)
    run()
