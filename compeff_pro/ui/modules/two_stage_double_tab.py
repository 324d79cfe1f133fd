"""Two-stage, two-compressor tab with LP / intercooler / HP economizers."""

from __future__ import annotations

from typing import Any

from compeff_pro.core.compressors import (
    get_filtered_brands,
    get_filtered_series_by_brand,
    get_model_detail,
    get_models_by_series,
)
from compeff_pro.core.fluids import list_fluids
from compeff_pro.cycle.solver import CalculationMode
from compeff_pro.cycle.two_stage_double import MAIN_PATH, TwoStageDoubleResult
from compeff_pro.ui.modules.mode_tab import MANUAL_MODEL, ModeTab
from compeff_pro.ui.widgets.param_input import ParamForm

_ECO_POSITIONS = (("lp", "LP"), ("ic", "Intercooler"), ("hp", "HP"))
_ECO_TITLES = {"lp": "LP", "intercooler": "Intercooler", "hp": "HP"}
_HP_SELECTOR_FIELDS = ("hp_brand", "hp_series", "hp_model")


class TwoStageDoubleTab(ModeTab):
    mode = CalculationMode.M6
    main_path = MAIN_PATH

    def build_form(self, form: ParamForm) -> None:
        form.add_header("Operating Point")
        form.add_combo("fluid", "Refrigerant", list_fluids("m6"), default="R717")
        form.add_float("T_evap", "Evaporating Temp", -35.0, unit="°C", min_val=-100, max_val=50, step=1)
        form.add_float("T_cond", "Condensing Temp", 35.0, unit="°C", min_val=-50, max_val=150, step=1)
        form.add_float("superheat", "Superheat", 5.0, unit="K", min_val=0, max_val=50, step=1)
        form.add_float("subcooling", "Subcooling", 5.0, unit="K", min_val=0, max_val=50, step=1)
        form.add_combo("pressure_mode", "Intermediate Pressure", ["auto", "manual"])
        form.add_float("T_mid_sat", "Intermediate Sat. Temp", -5.0, unit="°C", min_val=-100, max_val=100, step=1)

        form.add_separator()
        form.add_header("LP Compressor")
        form.add_float("flow_m3h_lp", "LP Swept Volume", 500.0, unit="m³/h", min_val=0.1, max_val=1e5, step=10)
        self.add_compressor_selector(form, "flow_m3h_lp", level="lt")
        form.add_float("eta_v_lp", "LP Volumetric Eff.", 0.80, min_val=0.01, max_val=1.0, step=0.01)
        form.add_float("eta_s_lp", "LP Isentropic Eff.", 0.75, min_val=0.01, max_val=1.0, step=0.01)

        form.add_separator()
        form.add_header("HP Compressor")
        form.add_float("flow_m3h_hp", "HP Swept Volume", 200.0, unit="m³/h", min_val=0.1, max_val=1e5, step=10)
        brands = get_filtered_brands(self.mode.value)
        form.add_combo("hp_brand", "Brand", brands)
        form.add_combo("hp_series", "Series", [])
        form.add_combo("hp_model", "Model", [MANUAL_MODEL])
        form.widget("hp_brand").currentTextChanged.connect(self._on_hp_brand)
        form.widget("hp_series").currentTextChanged.connect(self._on_hp_series)
        form.widget("hp_model").currentTextChanged.connect(self._on_hp_model)
        if brands:
            self._on_hp_brand(brands[0])
        form.add_float("eta_v_hp", "HP Volumetric Eff.", 0.80, min_val=0.01, max_val=1.0, step=0.01)
        form.add_float("eta_s_hp", "HP Isentropic Eff.", 0.75, min_val=0.01, max_val=1.0, step=0.01)
        form.add_check("auto_efficiency", "Auto Efficiency")

        for prefix, title in _ECO_POSITIONS:
            form.add_separator()
            form.add_header(f"{title} Economizer")
            default_type = "subcooler" if prefix == "hp" else "flash_tank"
            form.add_check(f"{prefix}_eco", "Enabled")
            form.add_combo(f"{prefix}_eco_type", "Type", ["flash_tank", "subcooler"], default=default_type)
            form.add_float(f"{prefix}_eco_superheat", "Injection Superheat", 5.0, unit="K", min_val=0, max_val=30, step=1)
            form.add_float(f"{prefix}_eco_dt", "Liquid Approach", 5.0, unit="K", min_val=0, max_val=30, step=1)

    def _on_hp_brand(self, brand: str) -> None:
        self.form.set_options("hp_series", get_filtered_series_by_brand(self.mode.value, brand, "ht"))

    def _on_hp_series(self, series: str) -> None:
        models = [m["model"] for m in get_models_by_series(self.form.get("hp_brand"), series)]
        self.form.set_options("hp_model", [MANUAL_MODEL] + models)

    def _on_hp_model(self, model: str) -> None:
        if not model or model == MANUAL_MODEL:
            return
        detail = get_model_detail(self.form.get("hp_brand"), self.form.get("hp_series"), model)
        if detail is not None:
            self.form.set_value("flow_m3h_hp", detail["displacement"])

    def prepare_inputs(self, values: dict[str, Any]) -> dict[str, Any]:
        for key in _HP_SELECTOR_FIELDS:
            values.pop(key, None)
        if values["pressure_mode"] == "auto":
            values["T_mid_sat"] = None
        return values

    def extra_rows(self, result: TwoStageDoubleResult) -> list[tuple[str, object, str]]:
        rows: list[tuple[str, object, str]] = []
        for eco in result.economizers:
            label = f"{_ECO_TITLES[eco.position]} economizer ({eco.kind.value})"
            rows.append((f"{label} injection", eco.injection_flow, "kg/s"))
            rows.append((f"{label} duty", eco.duty / 1e3, "kW"))
        return rows
