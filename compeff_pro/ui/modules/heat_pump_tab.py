"""NH3 heat pump tab: geometry or polynomial compressor, hot-water circuit."""

from __future__ import annotations

from typing import Any

from compeff_pro.cycle.heat_pump import MAIN_PATH, HeatPumpResult
from compeff_pro.cycle.solver import CalculationMode
from compeff_pro.ui.modules.mode_tab import ModeTab
from compeff_pro.ui.widgets.param_input import ParamForm

_COEFF_FIELDS = ("mass_flow_coeffs", "power_coeffs", "correction_coeffs")
_WATER_EXCHANGERS = (
    ("subcooler", "Subcooler", False, 5.0),
    ("oil_cooler", "Oil Cooler", True, 10.0),
    ("condenser", "Condenser", True, 5.0),
    ("desuperheater", "Desuperheater", False, 8.0),
)


def parse_coefficients(text: str) -> list[float]:
    """Comma- or space-separated numbers to a list of floats."""
    parts = text.replace(";", ",").replace(",", " ").split()
    try:
        return [float(p) for p in parts]
    except ValueError as e:
        raise ValueError(f"Invalid coefficient list '{text}': {e}") from e


class HeatPumpTab(ModeTab):
    mode = CalculationMode.M7
    main_path = MAIN_PATH

    def build_form(self, form: ParamForm) -> None:
        form.add_header("Operating Point (R717)")
        form.add_float("T_evap", "Evaporating Temp", 5.0, unit="°C", min_val=-60, max_val=60, step=1)
        form.add_float("T_cond", "Condensing Temp", 75.0, unit="°C", min_val=0, max_val=130, step=1)
        form.add_float("superheat", "Superheat", 5.0, unit="K", min_val=0, max_val=50, step=1)
        form.add_float("subcooling", "Subcooling", 5.0, unit="K", min_val=0, max_val=50, step=1)
        form.add_float("T_discharge", "Discharge Estimate", 110.0, unit="°C", min_val=0, max_val=200, step=1)

        form.add_separator()
        form.add_header("Compressor")
        form.add_combo("flow_model", "Flow Model", ["geometry", "polynomial"])
        form.add_combo("flow_mode", "Flow Input", ["volume", "rpm"])
        form.add_float("flow_m3h", "Swept Volume", 100.0, unit="m³/h", min_val=0.1, max_val=1e5, step=10)
        form.add_float("rpm", "Speed", 2900.0, unit="rpm", min_val=100, max_val=20000, step=50)
        form.add_float("displacement_cm3", "Displacement", 500.0, unit="cm³/rev", min_val=1, max_val=1e6, step=10)
        self.add_compressor_selector(form, "flow_m3h", level="ht")
        form.add_float("vi_ratio", "Built-in Vi", 3.6, min_val=1.0, max_val=10.0, step=0.1)
        form.add_check("auto_efficiency", "Auto Efficiency")
        form.add_float("eta_v", "Volumetric Eff.", 0.85, min_val=0.01, max_val=1.0, step=0.01)
        form.add_float("eta_s", "Isentropic Eff.", 0.75, min_val=0.01, max_val=1.0, step=0.01)

        form.add_separator()
        form.add_header("Polynomial")
        form.add_text("mass_flow_coeffs", "Mass Flow Coeffs", placeholder="c1, c2, ... c10")
        form.add_text("power_coeffs", "Power Coeffs", placeholder="c1, c2, ... c10")
        form.add_text("correction_coeffs", "Correction Coeffs", placeholder="optional")
        form.add_check("vsd_enabled", "VSD")
        form.add_float("rated_rpm", "Rated Speed", 2900.0, unit="rpm", min_val=100, max_val=20000, step=50)
        form.add_float("current_rpm", "Current Speed", 2900.0, unit="rpm", min_val=100, max_val=20000, step=50)

        form.add_separator()
        form.add_header("Water Circuit")
        form.add_float("T_water_in", "Water Inlet", 40.0, unit="°C", min_val=0, max_val=120, step=1)
        form.add_float("T_water_out", "Water Outlet", 70.0, unit="°C", min_val=0, max_val=120, step=1)
        for name, label, enabled, approach in _WATER_EXCHANGERS:
            form.add_check(name, label, enabled)
            form.add_float(f"{name}_approach", f"{label} Approach", approach, unit="K", min_val=0, max_val=50, step=1)
        form.add_float("desuperheater_T_out", "Desuperheater Gas Out", 90.0, unit="°C", min_val=0, max_val=200, step=1)

    def prepare_inputs(self, values: dict[str, Any]) -> dict[str, Any]:
        for key in _COEFF_FIELDS:
            values[key] = parse_coefficients(values[key])
        return values

    def extra_rows(self, result: HeatPumpResult) -> list[tuple[str, object, str]]:
        rows: list[tuple[str, object, str]] = []
        for ex in result.water.exchangers:
            if not ex.enabled:
                continue
            status = "ok" if ex.approach_satisfied else "approach not met"
            rows.append((f"{ex.name} duty", ex.duty / 1e3, "kW"))
            rows.append((f"{ex.name} water {ex.T_water_in:.1f} → {ex.T_water_out:.1f} °C", status, ""))
        return rows
