"""CompEff Pro GUI application entry point.

Launch with:
    python -m compeff_pro.ui.app
    compeff gui        (via CLI command)
"""

from __future__ import annotations

import sys


def run() -> None:
    """Launch the CompEff Pro desktop application."""
    from PySide6.QtWidgets import QApplication

    from compeff_pro import __app_name__
    from compeff_pro.ui.main_window import MainWindow
    from compeff_pro.ui.styles.theme import STYLESHEET

    app = QApplication(sys.argv)
    app.setApplicationName(__app_name__)
    app.setStyle("Fusion")
    app.setStyleSheet(STYLESHEET)

    window = MainWindow()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
