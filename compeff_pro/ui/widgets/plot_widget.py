"""Matplotlib-based plot widget for PySide6, with P-h and T-s cycle charts."""

from __future__ import annotations

from typing import Sequence

from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure
from PySide6.QtWidgets import QVBoxLayout, QWidget

from compeff_pro.cycle.diagrams import DiagramPoint, SaturationLines
from compeff_pro.ui.styles.theme import CYCLE_COLOR, DOME_COLOR, POINT_COLOR


class PlotCanvas(QWidget):
    """Embeddable matplotlib figure canvas.

    Usage::

        plot = PlotCanvas(title="P-h Diagram")
        plot.ph_diagram(dome, path, points)
    """

    def __init__(
        self,
        title: str = "",
        parent: QWidget | None = None,
        figsize: tuple[float, float] = (5.0, 3.5),
    ) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self._figure = Figure(figsize=figsize, dpi=100)
        self._canvas = FigureCanvas(self._figure)
        layout.addWidget(self._canvas)

        self._ax = self._figure.add_subplot(111)
        if title:
            self._ax.set_title(title, fontsize=10)
        self._figure.tight_layout()

    @property
    def ax(self):
        return self._ax

    @property
    def figure(self):
        return self._figure

    def clear(self) -> None:
        """Clear the axes."""
        self._ax.clear()
        self._canvas.draw()

    def _cycle_chart(
        self,
        dome: SaturationLines | None,
        path: Sequence[DiagramPoint],
        points: Sequence[DiagramPoint],
        xlabel: str,
        ylabel: str,
        title: str,
        log_y: bool = False,
    ) -> None:
        self._ax.clear()
        if dome is not None and dome.liquid:
            x_l, y_l = zip(*dome.liquid)
            x_v, y_v = zip(*dome.vapour)
            self._ax.plot(x_l, y_l, color=DOME_COLOR, linewidth=1.0, label="Saturated liquid")
            self._ax.plot(x_v, y_v, color=DOME_COLOR, linewidth=1.0, linestyle="--", label="Saturated vapour")
        if path:
            self._ax.plot([p.x for p in path], [p.y for p in path], color=CYCLE_COLOR, linewidth=1.8, label="Cycle")
        for p in points:
            self._ax.plot(p.x, p.y, "o", color=POINT_COLOR, markersize=4)
            self._ax.annotate(p.name, (p.x, p.y), textcoords="offset points", xytext=(4, 4), fontsize=7)
        if log_y:
            self._ax.set_yscale("log")
        self._ax.set_xlabel(xlabel, fontsize=9)
        self._ax.set_ylabel(ylabel, fontsize=9)
        self._ax.set_title(title, fontsize=10)
        self._ax.grid(True, alpha=0.3)
        self._ax.legend(fontsize=7, loc="best")
        self._ax.tick_params(labelsize=8)
        self._figure.tight_layout()
        self._canvas.draw()

    def ph_diagram(
        self,
        dome: SaturationLines | None,
        path: Sequence[DiagramPoint],
        points: Sequence[DiagramPoint] = (),
        title: str = "P-h Diagram",
    ) -> None:
        """Pressure-enthalpy chart: dome, cycle path and labelled state points."""
        self._cycle_chart(dome, path, points or path, "h [kJ/kg]", "P [bar]", title, log_y=True)

    def ts_diagram(
        self,
        dome: SaturationLines | None,
        path: Sequence[DiagramPoint],
        points: Sequence[DiagramPoint] = (),
        title: str = "T-s Diagram",
    ) -> None:
        """Temperature-entropy chart: dome, cycle path and labelled state points."""
        self._cycle_chart(dome, path, points or path, "s [kJ/(kg·K)]", "T [°C]", title)

    def bar(
        self,
        labels: list[str],
        values: list[float],
        xlabel: str = "",
        ylabel: str = "",
        title: str = "",
        color: str = CYCLE_COLOR,
    ) -> None:
        """Draw a bar chart."""
        self._ax.clear()
        x = range(len(labels))
        self._ax.bar(x, values, color=color, alpha=0.8)
        self._ax.set_xticks(x)
        self._ax.set_xticklabels(labels, fontsize=8, rotation=30, ha="right")
        if xlabel:
            self._ax.set_xlabel(xlabel, fontsize=9)
        if ylabel:
            self._ax.set_ylabel(ylabel, fontsize=9)
        if title:
            self._ax.set_title(title, fontsize=10)
        self._ax.grid(True, alpha=0.3, axis="y")
        self._figure.tight_layout()
        self._canvas.draw()
