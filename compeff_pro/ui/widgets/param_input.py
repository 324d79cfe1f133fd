"""Reusable parameter input form builder for CompEff Pro GUI.

Provides a declarative way to build input forms with validated fields,
combo boxes, check boxes and free-text fields.
"""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDoubleSpinBox,
    QFormLayout,
    QLabel,
    QLineEdit,
    QSpinBox,
    QWidget,
)


class ParamForm(QWidget):
    """Declarative parameter input form.

    Usage::

        form = ParamForm()
        form.add_float("T_evap", "Evaporating Temp", -10.0, unit="°C", min_val=-100, max_val=100)
        form.add_combo("fluid", "Refrigerant", ["R717", "R134a"])
        form.add_check("economizer", "Economizer", False)
        values = form.get_values()
    """

    value_changed = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._layout = QFormLayout(self)
        self._layout.setContentsMargins(4, 4, 4, 4)
        self._layout.setSpacing(4)
        self._fields: dict[str, QWidget] = {}
        self._types: dict[str, str] = {}

    def add_header(self, text: str) -> None:
        """Add a bold header label."""
        label = QLabel(f"<b>{text}</b>")
        self._layout.addRow(label)

    def add_separator(self) -> None:
        """Add a visual separator line."""
        line = QLabel("")
        line.setFixedHeight(8)
        self._layout.addRow(line)

    def add_float(
        self,
        name: str,
        label: str,
        default: float = 0.0,
        *,
        unit: str = "",
        min_val: float = -1e15,
        max_val: float = 1e15,
        decimals: int = 3,
        step: float = 0.0,
    ) -> QDoubleSpinBox:
        """Add a floating-point input field."""
        spin = QDoubleSpinBox()
        spin.setRange(min_val, max_val)
        spin.setDecimals(decimals)
        spin.setValue(default)
        spin.setMinimumWidth(140)
        if step > 0:
            spin.setSingleStep(step)
        else:
            spin.setSingleStep(abs(default) * 0.1 if default != 0 else 1.0)
        spin.valueChanged.connect(self.value_changed.emit)

        lbl = f"{label}" if not unit else f"{label} [{unit}]"
        self._layout.addRow(lbl, spin)
        self._fields[name] = spin
        self._types[name] = "float"
        return spin

    def add_int(
        self,
        name: str,
        label: str,
        default: int = 0,
        *,
        unit: str = "",
        min_val: int = 0,
        max_val: int = 999999,
    ) -> QSpinBox:
        """Add an integer input field."""
        spin = QSpinBox()
        spin.setRange(min_val, max_val)
        spin.setValue(default)
        spin.setMinimumWidth(140)
        spin.valueChanged.connect(self.value_changed.emit)

        lbl = f"{label}" if not unit else f"{label} [{unit}]"
        self._layout.addRow(lbl, spin)
        self._fields[name] = spin
        self._types[name] = "int"
        return spin

    def add_combo(
        self,
        name: str,
        label: str,
        options: list[str],
        default: str | None = None,
    ) -> QComboBox:
        """Add a combo-box selection field."""
        combo = QComboBox()
        combo.addItems(options)
        combo.setMinimumWidth(140)
        if default and default in options:
            combo.setCurrentText(default)
        combo.currentTextChanged.connect(lambda _: self.value_changed.emit())

        self._layout.addRow(label, combo)
        self._fields[name] = combo
        self._types[name] = "combo"
        return combo

    def add_check(self, name: str, label: str, default: bool = False) -> QCheckBox:
        """Add an on/off field."""
        check = QCheckBox()
        check.setChecked(default)
        check.toggled.connect(lambda _: self.value_changed.emit())

        self._layout.addRow(label, check)
        self._fields[name] = check
        self._types[name] = "check"
        return check

    def add_text(self, name: str, label: str, default: str = "", placeholder: str = "") -> QLineEdit:
        """Add a free-text field (e.g. a coefficient list)."""
        edit = QLineEdit(default)
        edit.setPlaceholderText(placeholder)
        edit.setMinimumWidth(140)
        edit.textChanged.connect(lambda _: self.value_changed.emit())

        self._layout.addRow(label, edit)
        self._fields[name] = edit
        self._types[name] = "text"
        return edit

    def get_values(self) -> dict[str, Any]:
        """Return all current field values as a dictionary."""
        return {name: self.get(name) for name in self._fields}

    def get(self, name: str) -> Any:
        """Get a single field value."""
        widget = self._fields[name]
        t = self._types[name]
        if t in ("float", "int"):
            return widget.value()
        elif t == "combo":
            return widget.currentText()
        elif t == "check":
            return widget.isChecked()
        elif t == "text":
            return widget.text()
        return None

    def set_value(self, name: str, value: Any) -> None:
        """Set a field value programmatically."""
        widget = self._fields[name]
        t = self._types[name]
        if t == "float":
            widget.setValue(float(value))
        elif t == "int":
            widget.setValue(int(value))
        elif t == "combo":
            widget.setCurrentText(str(value))
        elif t == "check":
            widget.setChecked(bool(value))
        elif t == "text":
            widget.setText(str(value))

    def set_options(self, name: str, options: list[str]) -> None:
        """Replace the entries of a combo field, keeping the selection if possible."""
        combo = self._fields[name]
        current = combo.currentText()
        combo.blockSignals(True)
        combo.clear()
        combo.addItems(options)
        if current in options:
            combo.setCurrentText(current)
        combo.blockSignals(False)
        combo.currentTextChanged.emit(combo.currentText())

    def widget(self, name: str) -> QWidget:
        return self._fields[name]
