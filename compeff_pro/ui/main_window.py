"""Main application window for CompEff Pro GUI."""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import QObject, Signal
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QFileDialog,
    QMainWindow,
    QMessageBox,
    QStatusBar,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from compeff_pro import __app_name__, __version__
from compeff_pro.core.config import CalculationState, build_state, save_calculation_json
from compeff_pro.reports.summary import save_html_report, save_text_report
from compeff_pro.ui.modules.database_tab import DatabaseTab
from compeff_pro.ui.modules.gas_tab import GasTab
from compeff_pro.ui.modules.heat_pump_tab import HeatPumpTab
from compeff_pro.ui.modules.mode_tab import ModeTab
from compeff_pro.ui.modules.refrigeration_tab import RefrigerationTab
from compeff_pro.ui.modules.two_stage_double_tab import TwoStageDoubleTab
from compeff_pro.ui.modules.two_stage_single_tab import TwoStageSingleTab


class SharedState(QObject):
    """Latest result per calculation mode, shared between tabs.

    Tabs publish via ``update(mode, result)``; the ``changed`` signal
    carries the mode key.
    """

    changed = Signal(str)

    def __init__(self) -> None:
        super().__init__()
        self._data: dict[str, Any] = {}

    def update(self, key: str, value: Any) -> None:
        self._data[key] = value
        self.changed.emit(key)

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def keys(self) -> list[str]:
        return list(self._data.keys())


class MainWindow(QMainWindow):
    """CompEff Pro main application window, one tab per calculation mode."""

    def __init__(self) -> None:
        super().__init__()

        self.setWindowTitle(f"{__app_name__} v{__version__}")
        self.setMinimumSize(1100, 750)
        self.resize(1300, 850)

        self.shared = SharedState()

        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(4, 4, 4, 4)

        self.tabs = QTabWidget()
        self.tabs.setTabPosition(QTabWidget.TabPosition.North)
        self.tabs.setDocumentMode(True)
        layout.addWidget(self.tabs)

        self.refrigeration_tab = RefrigerationTab(shared=self.shared)
        self.gas_tab = GasTab(shared=self.shared)
        self.two_stage_single_tab = TwoStageSingleTab(shared=self.shared)
        self.two_stage_double_tab = TwoStageDoubleTab(shared=self.shared)
        self.heat_pump_tab = HeatPumpTab(shared=self.shared)
        self.database_tab = DatabaseTab(shared=self.shared)

        self.tabs.addTab(self.refrigeration_tab, "Refrigeration")
        self.tabs.addTab(self.gas_tab, "Gas")
        self.tabs.addTab(self.two_stage_single_tab, "Two-Stage (Single)")
        self.tabs.addTab(self.two_stage_double_tab, "Two-Stage (Double)")
        self.tabs.addTab(self.heat_pump_tab, "NH3 Heat Pump")
        self.tabs.addTab(self.database_tab, "Compressors & History")

        self.shared.changed.connect(self._on_state_changed)

        self.status = QStatusBar()
        self.setStatusBar(self.status)
        self.status.showMessage(f"{__app_name__} v{__version__} - Ready")

        self._build_menu()

    def _build_menu(self) -> None:
        menu = self.menuBar()

        file_menu = menu.addMenu("&File")

        save_action = QAction("&Save Calculation...", self)
        save_action.setShortcut("Ctrl+S")
        save_action.triggered.connect(self._save_calculation)
        file_menu.addAction(save_action)

        report_action = QAction("&Export Report...", self)
        report_action.triggered.connect(self._export_report)
        file_menu.addAction(report_action)

        file_menu.addSeparator()

        quit_action = QAction("&Quit", self)
        quit_action.setShortcut("Ctrl+Q")
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

        view_menu = menu.addMenu("&View")
        for i in range(self.tabs.count()):
            action = QAction(f"&{self.tabs.tabText(i)}", self)
            action.triggered.connect(lambda checked, idx=i: self.tabs.setCurrentIndex(idx))
            view_menu.addAction(action)

        help_menu = menu.addMenu("&Help")
        about_action = QAction("&About", self)
        about_action.triggered.connect(self._show_about)
        help_menu.addAction(about_action)

    def _current_state(self) -> CalculationState | None:
        tab = self.tabs.currentWidget()
        if not isinstance(tab, ModeTab) or tab.last_result is None:
            QMessageBox.information(self, __app_name__, "Run a calculation in this tab first.")
            return None
        return build_state(tab.mode, tab.last_inputs, tab.last_result)

    def _save_calculation(self) -> None:
        state = self._current_state()
        if state is None:
            return
        path, _ = QFileDialog.getSaveFileName(self, "Save Calculation", "calculation.json", "JSON (*.json)")
        if path:
            save_calculation_json(state, path)
            self.status.showMessage(f"Saved {path}", 3000)

    def _export_report(self) -> None:
        state = self._current_state()
        if state is None:
            return
        path, selected = QFileDialog.getSaveFileName(
            self, "Export Report", "report.html", "HTML (*.html);;Text (*.txt)"
        )
        if not path:
            return
        if selected.startswith("Text") or path.endswith(".txt"):
            save_text_report(state, path)
        else:
            save_html_report(state, path)
        self.status.showMessage(f"Report written to {path}", 3000)

    def _on_state_changed(self, key: str) -> None:
        self.status.showMessage(f"Updated: {key}", 3000)

    def _show_about(self) -> None:
        QMessageBox.about(
            self,
            f"About {__app_name__}",
            f"<h3>{__app_name__} v{__version__}</h3>"
            f"<p>Oil-injected compressor efficiency calculator</p>"
            f"<p>Single-stage refrigeration, gas compression, two-stage "
            f"economised cycles and NH3 heat pumps, with a compressor "
            f"database and calculation history.</p>",
        )
