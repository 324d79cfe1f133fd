"""PySide6 desktop front end for CompEff Pro (requires the ``ui`` extra)."""
