"""Oil + refrigerant (single-stage) tab for CompEff Pro GUI."""

from __future__ import annotations

from typing import Any

from compeff_pro.core.fluids import list_fluids
from compeff_pro.cycle.refrigeration import MAIN_PATH
from compeff_pro.cycle.solver import CalculationMode
from compeff_pro.ui.modules.mode_tab import ModeTab
from compeff_pro.ui.widgets.param_input import ParamForm


class RefrigerationTab(ModeTab):
    mode = CalculationMode.M2
    main_path = MAIN_PATH

    def build_form(self, form: ParamForm) -> None:
        form.add_header("Operating Point")
        form.add_combo("fluid", "Refrigerant", list_fluids("m2"), default="R134a")
        form.add_float("T_evap", "Evaporating Temp", -10.0, unit="°C", min_val=-100, max_val=100, step=1)
        form.add_float("T_cond", "Condensing Temp", 40.0, unit="°C", min_val=-50, max_val=150, step=1)
        form.add_float("superheat", "Superheat", 5.0, unit="K", min_val=0, max_val=50, step=1)
        form.add_float("subcooling", "Subcooling", 5.0, unit="K", min_val=0, max_val=50, step=1)
        form.add_float("T_discharge", "Discharge Estimate", 80.0, unit="°C", min_val=-50, max_val=200, step=1)

        form.add_separator()
        form.add_header("Compressor")
        form.add_combo("flow_mode", "Flow Input", ["volume", "rpm"])
        form.add_float("flow_m3h", "Swept Volume", 100.0, unit="m³/h", min_val=0.1, max_val=1e5, step=10)
        form.add_float("rpm", "Speed", 2900.0, unit="rpm", min_val=100, max_val=20000, step=50)
        form.add_float("displacement_cm3", "Displacement", 500.0, unit="cm³/rev", min_val=1, max_val=1e6, step=10)
        self.add_compressor_selector(form, "flow_m3h")

        form.add_separator()
        form.add_header("Efficiency")
        form.add_check("auto_efficiency", "Auto Efficiency")
        form.add_float("eta_v", "Volumetric Eff.", 0.85, min_val=0.01, max_val=1.0, step=0.01)
        form.add_float("eta_s", "Isentropic Eff.", 0.70, min_val=0.01, max_val=1.0, step=0.01)
        form.add_combo("efficiency_basis", "Efficiency Basis", ["shaft", "input"])
        form.add_float("motor_efficiency", "Motor Eff.", 0.95, min_val=0.01, max_val=1.0, step=0.01)

        form.add_separator()
        form.add_header("Economizer")
        form.add_check("economizer", "Economizer")
        form.add_combo("economizer_type", "Type", ["subcooler", "flash_tank"])
        form.add_combo("economizer_pressure_mode", "Pressure", ["auto", "manual"])
        form.add_float("economizer_T_sat", "Saturation Temp", 10.0, unit="°C", min_val=-100, max_val=150, step=1)
        form.add_float("economizer_superheat", "Injection Superheat", 5.0, unit="K", min_val=0, max_val=30, step=1)

    def prepare_inputs(self, values: dict[str, Any]) -> dict[str, Any]:
        if values["economizer_pressure_mode"] == "auto":
            values["economizer_T_sat"] = None
        return values
