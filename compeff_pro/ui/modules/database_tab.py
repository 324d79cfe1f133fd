"""Compressor catalogue browser and calculation history."""

from __future__ import annotations

import json

from PySide6.QtWidgets import (
    QComboBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QHeaderView,
    QPlainTextEdit,
    QPushButton,
    QSplitter,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)
from PySide6.QtCore import Qt

from compeff_pro.core.compressors import get_all_brands, get_models_by_series, get_series_by_brand
from compeff_pro.core.history import HistoryStore
from compeff_pro.ui.widgets.result_display import LogPanel

_MODEL_HEADERS = ["Model", "Displacement [m³/h]", "LP [m³/h]", "HP [m³/h]", "Vi", "Note"]
_HISTORY_HEADERS = ["Time", "Mode", "Result"]


class DatabaseTab(QWidget):
    """Browse brands, series and models; review and prune past calculations."""

    def __init__(self, shared=None, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.shared = shared
        self.history = HistoryStore()
        self._entry_ids: list[str] = []

        splitter = QSplitter()
        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.addWidget(splitter)

        # --- Catalogue ---
        catalogue = QGroupBox("Compressor Database")
        cl = QVBoxLayout(catalogue)
        picker = QFormLayout()
        self.brand = QComboBox()
        self.series = QComboBox()
        picker.addRow("Brand", self.brand)
        picker.addRow("Series", self.series)
        cl.addLayout(picker)

        self.models = QTableWidget()
        self.models.setColumnCount(len(_MODEL_HEADERS))
        self.models.setHorizontalHeaderLabels(_MODEL_HEADERS)
        self.models.horizontalHeader().setSectionResizeMode(len(_MODEL_HEADERS) - 1, QHeaderView.ResizeMode.Stretch)
        self.models.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.models.setAlternatingRowColors(True)
        self.models.verticalHeader().setVisible(False)
        cl.addWidget(self.models)

        self.brand.currentTextChanged.connect(self._on_brand)
        self.series.currentTextChanged.connect(self._on_series)
        self.brand.addItems(get_all_brands())

        # --- History ---
        history = QGroupBox("Calculation History")
        hl = QVBoxLayout(history)
        self.entries = QTableWidget()
        self.entries.setColumnCount(len(_HISTORY_HEADERS))
        self.entries.setHorizontalHeaderLabels(_HISTORY_HEADERS)
        self.entries.horizontalHeader().setSectionResizeMode(2, QHeaderView.ResizeMode.Stretch)
        self.entries.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.entries.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        self.entries.verticalHeader().setVisible(False)
        self.entries.currentCellChanged.connect(lambda row, *_: self._show_entry(row))
        hl.addWidget(self.entries, stretch=3)

        self.detail = QPlainTextEdit()
        self.detail.setReadOnly(True)
        hl.addWidget(self.detail, stretch=2)

        buttons = QHBoxLayout()
        for text, slot in (("Refresh", self.refresh), ("Delete", self._delete), ("Clear All", self._clear)):
            btn = QPushButton(text)
            if text != "Refresh":
                btn.setProperty("secondary", True)
            btn.clicked.connect(slot)
            buttons.addWidget(btn)
        hl.addLayout(buttons)

        self.log = LogPanel("Log")
        self.log.setMaximumHeight(90)
        hl.addWidget(self.log)

        splitter.addWidget(catalogue)
        splitter.addWidget(history)
        splitter.setSizes([550, 550])

        if shared is not None:
            shared.changed.connect(lambda _: self.refresh())
        self.refresh()

    # --- Catalogue ---

    def _on_brand(self, brand: str) -> None:
        self.series.blockSignals(True)
        self.series.clear()
        self.series.addItems(get_series_by_brand(brand) if brand else [])
        self.series.blockSignals(False)
        self._on_series(self.series.currentText())

    def _on_series(self, series: str) -> None:
        models = get_models_by_series(self.brand.currentText(), series) if series else []
        self.models.setRowCount(len(models))
        for i, m in enumerate(models):
            cells = [
                m["model"],
                f"{m['displacement']:.1f}",
                f"{m['disp_lp']:.1f}" if "disp_lp" in m else "",
                f"{m['disp_hp']:.1f}" if "disp_hp" in m else "",
                f"{m['vi_ratio']:.2f}" if "vi_ratio" in m else "",
                m.get("note", ""),
            ]
            for j, text in enumerate(cells):
                item = QTableWidgetItem(text)
                if 1 <= j <= 4:
                    item.setTextAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
                self.models.setItem(i, j, item)

    # --- History ---

    def refresh(self) -> None:
        entries = self.history.list()
        self._entry_ids = [e["id"] for e in entries]
        self.entries.setRowCount(len(entries))
        for i, e in enumerate(entries):
            for j, text in enumerate((e["timestamp"][:19].replace("T", " "), e["mode"], e["label"])):
                self.entries.setItem(i, j, QTableWidgetItem(text))
        self.detail.clear()

    def _show_entry(self, row: int) -> None:
        if not 0 <= row < len(self._entry_ids):
            return
        entry = self.history.get(self._entry_ids[row])
        lines = [f"{name}: {value:.4g}" for name, value in entry["summary"].items()]
        lines += ["", "Inputs:", json.dumps(entry["inputs"], indent=2)]
        self.detail.setPlainText("\n".join(lines))

    def _delete(self) -> None:
        row = self.entries.currentRow()
        if not 0 <= row < len(self._entry_ids):
            return
        entry_id = self._entry_ids[row]
        if self.history.delete(entry_id):
            self.log.log(f"Deleted {entry_id}")
        self.refresh()

    def _clear(self) -> None:
        count = self.history.clear()
        self.log.log(f"Cleared {count} entries")
        self.refresh()
