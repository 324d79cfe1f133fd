"""CompEff Pro command-line interface package.

Supports ``python -m compeff_pro.cli`` as an alternative to the ``compeff`` entry point.
"""

from compeff_pro.cli.main import cli, main

__all__ = ["cli", "main"]
