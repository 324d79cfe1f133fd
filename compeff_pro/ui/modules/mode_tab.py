"""Common layout and compute flow of the calculation-mode tabs.

Each tab names its form fields after the mode's input dataclass fields,
so the form values go straight through
:func:`compeff_pro.cycle.solver.inputs_from_dict`.
"""

from __future__ import annotations

import traceback
from typing import Any, Sequence

from PySide6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QPushButton,
    QScrollArea,
    QSplitter,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from compeff_pro.core.compressors import (
    get_filtered_brands,
    get_filtered_series_by_brand,
    get_model_detail,
    get_models_by_series,
)
from compeff_pro.core.fluids import get_fluid
from compeff_pro.core.history import HistoryStore
from compeff_pro.cycle.diagrams import DiagramPoint, cycle_path, points_to_ts, saturation_lines_ph, saturation_lines_ts
from compeff_pro.cycle.solver import CalculationMode, ModeResult, inputs_from_dict, inputs_to_dict, solve, summary_dict
from compeff_pro.ui.widgets.param_input import ParamForm
from compeff_pro.ui.widgets.plot_widget import PlotCanvas
from compeff_pro.ui.widgets.result_display import LogPanel, ResultTable, StatePointTable

MANUAL_MODEL = "(manual)"

# Form fields used only by the compressor selector
_SELECTOR_FIELDS = ("brand", "series", "model")


class ModeTab(QWidget):
    """Form on the left; results, state points, charts and log on the right.

    Subclasses set ``mode`` and ``main_path`` and implement
    :meth:`build_form`; :meth:`prepare_inputs` may adjust the raw form
    values before they become the input dataclass.
    """

    mode: CalculationMode = CalculationMode.M2
    main_path: Sequence[str] | None = None
    has_dome = True
    compute_label = "Calculate"

    def __init__(self, shared: Any = None, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.shared = shared
        self.history = HistoryStore()
        self._flow_field: str | None = None
        self.last_result: ModeResult | None = None
        self.last_inputs: Any = None
        self._level: str | None = None

        splitter = QSplitter()
        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.addWidget(splitter)

        # --- Left ---
        left = QWidget()
        ll = QVBoxLayout(left)
        ll.setContentsMargins(4, 4, 4, 4)

        self.form = ParamForm()
        self.build_form(self.form)

        scroll = QScrollArea()
        scroll.setWidget(self.form)
        scroll.setWidgetResizable(True)
        ll.addWidget(scroll)

        btn = QPushButton(self.compute_label)
        btn.clicked.connect(self._compute)
        ll.addWidget(btn)

        # --- Right ---
        right = QWidget()
        rl = QVBoxLayout(right)
        rl.setContentsMargins(4, 4, 4, 4)

        views = QTabWidget()
        self.results = ResultTable("Performance")
        self.points = StatePointTable()
        views.addTab(self.results, "Results")
        views.addTab(self.points, "State Points")
        rl.addWidget(views, stretch=3)

        self.chart_kind = QComboBox()
        self.chart_kind.addItems(["P-h", "T-s"])
        self.chart_kind.currentTextChanged.connect(lambda _: self._plot())
        rl.addWidget(self.chart_kind)

        self.plot = PlotCanvas("P-h Diagram")
        rl.addWidget(self.plot, stretch=4)

        self.log = LogPanel("Log")
        self.log.setMaximumHeight(110)
        rl.addWidget(self.log)

        splitter.addWidget(left)
        splitter.addWidget(right)
        splitter.setSizes([400, 700])

    # --- Subclass hooks ---

    def build_form(self, form: ParamForm) -> None:
        raise NotImplementedError

    def prepare_inputs(self, values: dict[str, Any]) -> dict[str, Any]:
        return values

    def extra_rows(self, result: ModeResult) -> list[tuple[str, object, str]]:
        return []

    # --- Compressor selection ---

    def add_compressor_selector(self, form: ParamForm, flow_field: str, level: str | None = None) -> None:
        """Brand / series / model combos that fill *flow_field* with the model displacement."""
        self._flow_field = flow_field
        self._level = level
        brands = get_filtered_brands(self.mode.value)
        form.add_combo("brand", "Brand", brands)
        form.add_combo("series", "Series", [])
        form.add_combo("model", "Model", [MANUAL_MODEL])
        form.widget("brand").currentTextChanged.connect(self._on_brand)
        form.widget("series").currentTextChanged.connect(self._on_series)
        form.widget("model").currentTextChanged.connect(self._on_model)
        if brands:
            self._on_brand(brands[0])

    def _on_brand(self, brand: str) -> None:
        self.form.set_options("series", get_filtered_series_by_brand(self.mode.value, brand, self._level))

    def _on_series(self, series: str) -> None:
        brand = self.form.get("brand")
        models = [m["model"] for m in get_models_by_series(brand, series)]
        self.form.set_options("model", [MANUAL_MODEL] + models)

    def _on_model(self, model: str) -> None:
        detail = self.selected_model()
        if detail is None or self._flow_field is None:
            return
        self.form.set_value(self._flow_field, detail.get("disp_lp", detail["displacement"]))
        self.on_model_selected(detail)

    def on_model_selected(self, detail: dict[str, Any]) -> None:
        """Called with the database entry when a model is picked."""

    def selected_model(self) -> dict[str, Any] | None:
        model = self.form.get("model")
        if not model or model == MANUAL_MODEL:
            return None
        return get_model_detail(self.form.get("brand"), self.form.get("series"), model)

    # --- Compute ---

    def _compute(self) -> None:
        self.log.clear()
        self.results.clear()
        self.points.clear()
        try:
            values = self.form.get_values()
            for key in _SELECTOR_FIELDS:
                values.pop(key, None)
            inputs = inputs_from_dict(self.mode, self.prepare_inputs(values))
            result = solve(self.mode, inputs)

            self.results.set_data(result.summary_rows() + self.extra_rows(result))
            self.points.set_points(result.state_points)
            self.last_result = result
            self.last_inputs = inputs
            self._plot()

            self.history.add(self.mode.value, result.history_label(), inputs_to_dict(inputs), summary_dict(result))
            if self.shared is not None:
                self.shared.update(self.mode.value, result)

            self.log.log(f"{self.mode.label}: {result.history_label()}")
            for w in result.warnings:
                self.log.log(f"WARNING: {w}")

        except Exception as e:
            self.log.log(f"ERROR: {e}")
            self.log.log(traceback.format_exc())

    def _plot(self) -> None:
        result = self.last_result
        if result is None:
            return
        try:
            if self.chart_kind.currentText() == "T-s":
                self._plot_ts(result)
            else:
                self._plot_ph(result)
        except Exception as e:
            self.log.log(f"Plot failed: {e}")

    def _path(self, points: Sequence[DiagramPoint]) -> list[DiagramPoint]:
        if self.main_path is None:
            return list(points)
        return cycle_path(points, self.main_path)

    def _plot_ph(self, result: ModeResult) -> None:
        dome = None
        if self.has_dome:
            dome = saturation_lines_ph(get_fluid(result.fluid), result.Pe, result.Pc)
        self.plot.ph_diagram(dome, self._path(result.ph_points), result.ph_points)

    def _plot_ts(self, result: ModeResult) -> None:
        fluid = get_fluid(result.fluid)
        ts_points = getattr(result, "ts_points", None) or points_to_ts(fluid, result.ph_points)
        dome = None
        if self.has_dome:
            dome = saturation_lines_ts(fluid, self.last_inputs.T_evap, self.last_inputs.T_cond)
        self.plot.ts_diagram(dome, self._path(ts_points), ts_points)
