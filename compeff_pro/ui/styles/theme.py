"""Application theme and stylesheet for CompEff Pro GUI."""

ACCENT = "#0d9488"
ACCENT_DARK = "#115e59"
ACCENT_LIGHT = "#ccfbf1"

# Plot colours
DOME_COLOR = "#64748b"
CYCLE_COLOR = ACCENT
POINT_COLOR = "#b45309"

STYLESHEET = f"""
QMainWindow {{
    background-color: #f8fafc;
}}
QTabWidget::pane {{
    border: 1px solid #cbd5e1;
    background-color: #ffffff;
}}
QTabBar::tab {{
    background-color: #e2e8f0;
    color: #334155;
    padding: 8px 16px;
    border: 1px solid #cbd5e1;
    border-bottom: none;
    border-top-left-radius: 4px;
    border-top-right-radius: 4px;
    margin-right: 2px;
    font-size: 11px;
}}
QTabBar::tab:selected {{
    background-color: #ffffff;
    color: {ACCENT_DARK};
    border-bottom: 2px solid {ACCENT};
}}
QTabBar::tab:hover {{
    background-color: {ACCENT_LIGHT};
}}
QWidget {{
    background-color: #ffffff;
    color: #1e293b;
    font-size: 11px;
}}
QGroupBox {{
    border: 1px solid #cbd5e1;
    border-radius: 4px;
    margin-top: 12px;
    padding-top: 12px;
    font-weight: bold;
    color: {ACCENT_DARK};
}}
QGroupBox::title {{
    subcontrol-origin: margin;
    left: 10px;
    padding: 0 4px;
}}
QPushButton {{
    background-color: {ACCENT};
    color: #ffffff;
    border: none;
    border-radius: 4px;
    padding: 6px 16px;
    font-weight: bold;
    font-size: 11px;
    min-height: 28px;
}}
QPushButton:hover {{
    background-color: #14b8a6;
}}
QPushButton:pressed {{
    background-color: {ACCENT_DARK};
}}
QPushButton:disabled {{
    background-color: #cbd5e1;
    color: #64748b;
}}
QPushButton[secondary="true"] {{
    background-color: #e2e8f0;
    color: #1e293b;
}}
QPushButton[secondary="true"]:hover {{
    background-color: #cbd5e1;
}}
QDoubleSpinBox, QSpinBox, QLineEdit {{
    background-color: #ffffff;
    color: #1e293b;
    border: 1px solid #cbd5e1;
    border-radius: 3px;
    padding: 3px 6px;
    min-height: 22px;
}}
QDoubleSpinBox:focus, QSpinBox:focus, QLineEdit:focus {{
    border: 1px solid {ACCENT};
}}
QComboBox {{
    background-color: #ffffff;
    color: #1e293b;
    border: 1px solid #cbd5e1;
    border-radius: 3px;
    padding: 3px 6px;
    min-height: 22px;
}}
QComboBox:focus {{
    border: 1px solid {ACCENT};
}}
QComboBox::drop-down {{
    border: none;
    width: 20px;
}}
QComboBox QAbstractItemView {{
    background-color: #ffffff;
    color: #1e293b;
    selection-background-color: {ACCENT_LIGHT};
    border: 1px solid #cbd5e1;
}}
QCheckBox::indicator:checked {{
    background-color: {ACCENT};
    border: 1px solid {ACCENT_DARK};
}}
QTableWidget {{
    background-color: #ffffff;
    alternate-background-color: #f0fdfa;
    color: #1e293b;
    gridline-color: #e2e8f0;
    border: 1px solid #cbd5e1;
    border-radius: 3px;
    font-size: 11px;
}}
QTableWidget::item {{
    padding: 2px 6px;
}}
QTableWidget::item:selected {{
    background-color: {ACCENT_LIGHT};
    color: #1e293b;
}}
QHeaderView::section {{
    background-color: #f0fdfa;
    color: {ACCENT_DARK};
    padding: 4px 6px;
    border: none;
    border-bottom: 1px solid #cbd5e1;
    font-weight: bold;
    font-size: 10px;
}}
QPlainTextEdit {{
    background-color: #f8fafc;
    color: #334155;
    border: 1px solid #cbd5e1;
    border-radius: 3px;
    font-family: "Consolas", "Courier New", monospace;
    font-size: 10px;
}}
QLabel {{
    color: #1e293b;
}}
QScrollBar:vertical {{
    background-color: #f8fafc;
    width: 10px;
}}
QScrollBar::handle:vertical {{
    background-color: #cbd5e1;
    border-radius: 4px;
    min-height: 20px;
}}
QScrollBar::handle:vertical:hover {{
    background-color: #94a3b8;
}}
QScrollBar::add-line:vertical, QScrollBar::sub-line:vertical {{
    height: 0px;
}}
QSplitter::handle {{
    background-color: #e2e8f0;
}}
QStatusBar {{
    background-color: {ACCENT_DARK};
    color: #f0fdfa;
    font-size: 10px;
}}
"""
