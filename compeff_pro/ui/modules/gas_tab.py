"""Oil + gas compression tab for CompEff Pro GUI."""

from __future__ import annotations

from compeff_pro.core.fluids import list_fluids
from compeff_pro.cycle.solver import CalculationMode
from compeff_pro.ui.modules.mode_tab import ModeTab
from compeff_pro.ui.widgets.param_input import ParamForm


class GasTab(ModeTab):
    mode = CalculationMode.M3
    has_dome = False

    def build_form(self, form: ParamForm) -> None:
        form.add_header("Gas")
        form.add_combo("fluid", "Gas", list_fluids("m3"), default="Air")
        form.add_float("P_in", "Suction Pressure", 1.0, unit="bar(a)", min_val=0.01, max_val=500, step=0.1)
        form.add_float("T_in", "Suction Temp", 20.0, unit="°C", min_val=-100, max_val=200, step=1)
        form.add_float("P_out", "Discharge Pressure", 8.0, unit="bar(a)", min_val=0.02, max_val=1000, step=0.5)
        form.add_float("T_discharge", "Discharge Temp", 80.0, unit="°C", min_val=-50, max_val=300, step=1)

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
        form.add_float("eta_v", "Volumetric Eff.", 0.90, min_val=0.01, max_val=1.0, step=0.01)
        form.add_combo("efficiency_type", "Efficiency Type", ["isothermal", "isentropic"])
        form.add_float("efficiency", "Efficiency", 0.70, min_val=0.01, max_val=1.0, step=0.01)
        form.add_combo("efficiency_basis", "Efficiency Basis", ["shaft", "input"])
        form.add_float("motor_efficiency", "Motor Eff.", 0.95, min_val=0.01, max_val=1.0, step=0.01)

        form.add_separator()
        form.add_header("Aftercooler")
        form.add_check("aftercooler", "Aftercooler")
        form.add_float("aftercooler_T_out", "Outlet Temp", 35.0, unit="°C", min_val=-50, max_val=200, step=1)
        form.add_float("aftercooler_pressure_drop", "Pressure Drop", 0.2, unit="bar", min_val=0, max_val=10, step=0.05)
