"""Two-stage single-compressor (internal intermediate port) tab."""

from __future__ import annotations

from typing import Any

from compeff_pro.core.fluids import list_fluids
from compeff_pro.cycle.solver import CalculationMode
from compeff_pro.cycle.two_stage_single import MAIN_PATH, TwoStageSingleResult
from compeff_pro.ui.modules.mode_tab import ModeTab
from compeff_pro.ui.widgets.param_input import ParamForm


class TwoStageSingleTab(ModeTab):
    mode = CalculationMode.M5
    main_path = MAIN_PATH

    def build_form(self, form: ParamForm) -> None:
        form.add_header("Operating Point")
        form.add_combo("fluid", "Refrigerant", list_fluids("m5"), default="R717")
        form.add_float("T_evap", "Evaporating Temp", -35.0, unit="°C", min_val=-100, max_val=50, step=1)
        form.add_float("T_cond", "Condensing Temp", 35.0, unit="°C", min_val=-50, max_val=150, step=1)
        form.add_float("superheat", "Superheat", 5.0, unit="K", min_val=0, max_val=50, step=1)
        form.add_float("subcooling", "Subcooling", 5.0, unit="K", min_val=0, max_val=50, step=1)
        form.add_combo("pressure_mode", "Intermediate Pressure", ["auto", "manual"])
        form.add_float("T_mid_sat", "Intermediate Sat. Temp", -5.0, unit="°C", min_val=-100, max_val=100, step=1)

        form.add_separator()
        form.add_header("Compressor")
        form.add_float("flow_m3h", "LP Swept Volume", 500.0, unit="m³/h", min_val=0.1, max_val=1e5, step=10)
        form.add_float("disp_hp", "HP Swept Volume", 0.0, unit="m³/h", min_val=0, max_val=1e5, step=10)
        form.add_float("vi_ratio", "LP/HP Volume Ratio", 0.0, min_val=0, max_val=20, step=0.1)
        self.add_compressor_selector(form, "flow_m3h")

        form.add_separator()
        form.add_header("Efficiency")
        form.add_check("auto_efficiency", "Auto Efficiency")
        form.add_float("eta_v_lp", "LP Volumetric Eff.", 0.80, min_val=0.01, max_val=1.0, step=0.01)
        form.add_float("eta_s_lp", "LP Isentropic Eff.", 0.75, min_val=0.01, max_val=1.0, step=0.01)
        form.add_float("eta_s_hp", "HP Isentropic Eff.", 0.75, min_val=0.01, max_val=1.0, step=0.01)

        form.add_separator()
        form.add_header("Economizer / SLHX")
        form.add_float("economizer_superheat", "Injection Superheat", 5.0, unit="K", min_val=0, max_val=30, step=1)
        form.add_float("economizer_approach", "Subcooler Approach", 5.0, unit="K", min_val=0, max_val=30, step=1)
        form.add_check("slhx", "Suction-Line HX")
        form.add_float("slhx_effectiveness", "SLHX Effectiveness", 0.5, min_val=0, max_val=1.0, step=0.05)

    def on_model_selected(self, detail: dict[str, Any]) -> None:
        self.form.set_value("disp_hp", detail.get("disp_hp", 0.0))
        self.form.set_value("vi_ratio", detail.get("vi_ratio", 0.0))

    def prepare_inputs(self, values: dict[str, Any]) -> dict[str, Any]:
        detail = self.selected_model()
        values["compressor_model"] = detail["model"] if detail else None
        if values["pressure_mode"] == "auto":
            values["T_mid_sat"] = None
        # zero means "not given"
        for key in ("disp_hp", "vi_ratio"):
            if not values[key]:
                values[key] = None
        return values

    def extra_rows(self, result: TwoStageSingleResult) -> list[tuple[str, object, str]]:
        sub = result.subcooler
        if sub is None:
            return []
        return [
            ("Subcooler hot side in", sub.hot_in.T_C, "°C"),
            ("Subcooler hot side out", sub.hot_out.T_C, "°C"),
            ("Subcooler cold side in", sub.cold_in.T_C, "°C"),
            ("Subcooler cold side out", sub.cold_out.T_C, "°C"),
            ("Subcooler duty", sub.hot_duty / 1e3, "kW"),
        ]
