"""Ammonia (R717) high-temperature heat pump.

Single-stage oil-injected screw on ammonia delivering hot water through up
to four refrigerant-to-water exchangers (subcooler, oil cooler, condenser
and desuperheater) piped in series on the water side.

Compressor performance comes from one of two flow models:

- geometry: swept volume × volumetric efficiency, shaft power from the
  isentropic efficiency (optionally estimated with
  :func:`~compeff_pro.core.efficiency.screw_efficiency`);
- polynomial: AHRI 540 maps for mass flow [kg/s] and shaft power [kW],
  with optional speed correction for a variable-speed drive.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from compeff_pro.core.efficiency import screw_efficiency
from compeff_pro.core.fluids import get_fluid
from compeff_pro.core.polynomial import FlowModel, PolynomialState
from compeff_pro.cycle.common import FlowMode, celsius, operating_point, swept_volume_flow
from compeff_pro.cycle.components.base import FluidState, StatePoint
from compeff_pro.cycle.components.compressor import CompressorStage, apply_oil_cooling
from compeff_pro.cycle.components.heat_exchanger import WaterCircuit, WaterCircuitResult, WaterExchanger
from compeff_pro.cycle.components.valve import ExpansionValve
from compeff_pro.cycle.diagrams import DiagramPoint, ph_point, points_to_ts
from compeff_pro.utils.constants import (
    CM3_TO_M3,
    PA_TO_BAR,
    REFERENCE_DISPLACEMENT_CM3,
    REFERENCE_RPM,
    SECONDS_PER_MINUTE,
    T_CELSIUS_OFFSET,
)
from compeff_pro.utils.validation import (
    CalculationError,
    ValidationResult,
    validate_discharge_estimate,
    validate_efficiency,
    validate_temperature_lift,
)

logger = logging.getLogger(__name__)

HEAT_PUMP_FLUID = "R717"

# Oil leaves the separator roughly this far below the gas discharge temperature
OIL_OUTLET_OFFSET = 20.0  # K

MAIN_PATH = ("1", "2", "2b", "3", "3'", "4")


@dataclass
class HeatPumpInput:
    """Ammonia heat pump inputs. Temperatures in °C, differences in K."""

    T_evap: float = 5.0
    T_cond: float = 75.0
    superheat: float = 5.0
    subcooling: float = 5.0
    T_discharge: float = 110.0

    flow_model: FlowModel = FlowModel.GEOMETRY

    # geometry model
    flow_mode: FlowMode = FlowMode.VOLUME
    rpm: float = 2900.0
    displacement_cm3: float = 500.0
    flow_m3h: float = 100.0
    eta_v: float = 0.85
    eta_s: float = 0.75
    auto_efficiency: bool = False
    vi_ratio: float = 3.6

    # polynomial model
    mass_flow_coeffs: list[float] = field(default_factory=list)
    power_coeffs: list[float] = field(default_factory=list)
    correction_coeffs: list[float] = field(default_factory=list)
    vsd_enabled: bool = False
    rated_rpm: float = REFERENCE_RPM
    current_rpm: float = REFERENCE_RPM

    # water circuit
    T_water_in: float = 40.0
    T_water_out: float = 70.0
    subcooler: bool = False
    subcooler_approach: float = 5.0
    oil_cooler: bool = True
    oil_cooler_approach: float = 10.0
    condenser: bool = True
    condenser_approach: float = 5.0
    desuperheater: bool = False
    desuperheater_approach: float = 8.0
    desuperheater_T_out: float = 90.0


@dataclass
class HeatPumpResult:
    """Ammonia heat pump results (SI units)."""

    Pe: float
    Pc: float
    flow_model: FlowModel
    eta_v: float
    eta_s: float
    mass_flow: float  # kg/s
    ideal_power: float  # W
    shaft_power: float  # W
    cooling_capacity: float  # W
    heating_capacity: float  # W, enabled exchangers only
    oil_load: float  # W
    T_discharge: float  # K
    discharge_corrected: bool
    water: WaterCircuitResult
    state_points: list[StatePoint] = field(default_factory=list)
    ph_points: list[DiagramPoint] = field(default_factory=list)
    ts_points: list[DiagramPoint] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    fluid: str = HEAT_PUMP_FLUID

    @property
    def cop_cooling(self) -> float:
        return self.cooling_capacity / self.shaft_power

    @property
    def cop_heating(self) -> float:
        return self.heating_capacity / self.shaft_power

    def exchanger_duty(self, name: str) -> float:
        for x in self.water.exchangers:
            if x.name == name:
                return x.duty
        return 0.0

    def summary_rows(self) -> list[tuple[str, float, str]]:
        return [
            ("Evaporating pressure", self.Pe * PA_TO_BAR, "bar"),
            ("Condensing pressure", self.Pc * PA_TO_BAR, "bar"),
            ("Pressure ratio", self.Pc / self.Pe, "-"),
            ("Mass flow", self.mass_flow, "kg/s"),
            ("Volumetric efficiency", self.eta_v, "-"),
            ("Isentropic efficiency", self.eta_s, "-"),
            ("Discharge temperature", self.T_discharge - T_CELSIUS_OFFSET, "°C"),
            ("Shaft power", self.shaft_power / 1e3, "kW"),
            ("Cooling capacity", self.cooling_capacity / 1e3, "kW"),
            ("Heating capacity", self.heating_capacity / 1e3, "kW"),
            ("Oil load", self.oil_load / 1e3, "kW"),
            ("Water mass flow", self.water.mass_flow, "kg/s"),
            ("COP cooling", self.cop_cooling, "-"),
            ("COP heating", self.cop_heating, "-"),
        ]

    def history_label(self) -> str:
        return f"{self.fluid} • {self.heating_capacity / 1e3:.1f} kW"


def _validate(inp: HeatPumpInput, mode: FlowModel) -> None:
    result = ValidationResult()
    validate_temperature_lift(inp.T_evap, inp.T_cond, result)
    validate_discharge_estimate(inp.T_discharge, inp.T_cond, result)
    if mode == FlowModel.GEOMETRY and not inp.auto_efficiency:
        validate_efficiency("eta_v", inp.eta_v, result)
        validate_efficiency("eta_s", inp.eta_s, result)
    result.raise_for_errors()


def _flow_state(inp: HeatPumpInput) -> PolynomialState:
    state = PolynomialState()
    if not state.set_mode(inp.flow_model):
        raise CalculationError(f"Unknown flow model {inp.flow_model!r}")
    state.update_coeffs("mass_flow", inp.mass_flow_coeffs)
    state.update_coeffs("power", inp.power_coeffs)
    state.update_coeffs("correction", inp.correction_coeffs)
    state.update_vsd(inp.vsd_enabled, inp.rated_rpm, inp.current_rpm)
    return state


def solve_heat_pump(inp: HeatPumpInput) -> HeatPumpResult:
    """Rate an ammonia heat pump and size its hot-water circuit.

    Raises:
        CalculationError: For invalid inputs or a polynomial map that
            yields no flow or power.
        FluidPropertyError: If a property evaluation fails.
    """
    state = _flow_state(inp)
    _validate(inp, state.mode)
    fluid = get_fluid(HEAT_PUMP_FLUID)
    op = operating_point(fluid, inp.T_evap, inp.T_cond, inp.superheat, inp.subcooling)
    Pe, Pc = op.Pe, op.Pc
    suction, liquid = op.suction, op.liquid
    h1, h3 = suction.enthalpy, liquid.enthalpy

    ideal = CompressorStage(fluid, "isentropic", eta_s=1.0)
    if state.mode == FlowModel.GEOMETRY:
        eta_v, eta_s = inp.eta_v, inp.eta_s
        if inp.auto_efficiency:
            est = screw_efficiency(Pc * PA_TO_BAR, Pe * PA_TO_BAR, vi=inp.vi_ratio)
            eta_v, eta_s = est.eta_v, est.eta_s
        V_th = swept_volume_flow(inp.flow_mode, inp.rpm, inp.displacement_cm3, inp.flow_m3h)
        m = V_th * eta_v * suction.density
        ideal.compute(suction.with_flow(m), outlet_pressure=Pc)
        W_ideal = ideal.power()
        W_shaft = W_ideal / eta_s
    else:
        m = state.mass_flow(inp.T_evap, inp.T_cond)
        W_shaft = state.power(inp.T_evap, inp.T_cond) * 1e3
        if m <= 0 or W_shaft <= 0:
            raise CalculationError(
                f"Polynomial model gives non-positive mass flow ({m:.4f} kg/s) "
                f"or power ({W_shaft / 1e3:.2f} kW); check the coefficients"
            )
        ideal.compute(suction.with_flow(m), outlet_pressure=Pc)
        W_ideal = ideal.power()
        eta_s = W_ideal / W_shaft
        rpm = state.current_rpm if state.vsd_enabled else REFERENCE_RPM
        V_ref = rpm * REFERENCE_DISPLACEMENT_CM3 * CM3_TO_M3 / SECONDS_PER_MINUTE
        eta_v = m / (suction.density * V_ref)

    suction = suction.with_flow(m)
    oil = apply_oil_cooling(fluid, Pc, m, m * h1, W_shaft, celsius(inp.T_discharge))
    h2a = oil.h_discharge
    T2a_C = oil.T_discharge - T_CELSIUS_OFFSET

    warnings: list[str] = []
    if oil.corrected:
        warnings.append(
            f"Discharge estimate {inp.T_discharge:.1f} °C not reachable; "
            f"discharge recalculated as {T2a_C:.1f} °C with no oil load"
        )

    # --- Refrigerant side of the water exchangers ---
    h2b, T2b_C = h2a, T2a_C
    Q_ds = 0.0
    if inp.desuperheater:
        if inp.desuperheater_T_out >= T2a_C or inp.desuperheater_T_out <= inp.T_cond:
            warnings.append(
                f"Desuperheater outlet {inp.desuperheater_T_out:.1f} °C must lie between "
                f"condensing ({inp.T_cond:.1f} °C) and discharge ({T2a_C:.1f} °C) temperature"
            )
        else:
            h2b = fluid.enthalpy(celsius(inp.desuperheater_T_out), Pc)
            T2b_C = inp.desuperheater_T_out
            Q_ds = m * (h2a - h2b)

    Q_cond = m * (h2b - h3) if inp.condenser else 0.0

    liquid_out = liquid
    Q_sc = 0.0
    if inp.subcooler:
        T3p = min(celsius(inp.T_water_in + inp.subcooler_approach), liquid.temperature)
        if T3p < liquid.temperature:
            liquid_out = FluidState.from_tp(fluid, T3p, Pc, m)
            Q_sc = m * (h3 - liquid_out.enthalpy)

    Q_oil = oil.oil_load if inp.oil_cooler else 0.0

    exchangers = [
        WaterExchanger(
            "subcooler", inp.subcooler, inp.subcooler_approach, Q_sc, liquid_out.temperature_C
        ),
        WaterExchanger(
            "oil_cooler", inp.oil_cooler, inp.oil_cooler_approach, Q_oil, T2a_C - OIL_OUTLET_OFFSET
        ),
        WaterExchanger("condenser", inp.condenser, inp.condenser_approach, Q_cond, inp.T_cond),
        WaterExchanger("desuperheater", inp.desuperheater, inp.desuperheater_approach, Q_ds, T2b_C),
    ]
    water = WaterCircuit(inp.T_water_in, inp.T_water_out).solve(exchangers)
    warnings.extend(water.warnings)

    Q_evap = m * (h1 - liquid_out.enthalpy)
    heating = water.total_duty

    # --- State points ---
    evap_in = ExpansionValve(fluid).compute(liquid_out.with_flow(m), outlet_pressure=Pe)
    discharge = FluidState.from_ph(fluid, Pc, h2a, m)
    points = [suction.to_point("1", "Compressor suction"), discharge.to_point("2", "Discharge")]
    ph = [ph_point("1", h1, Pe), ph_point("2", h2a, Pc)]
    if h2b != h2a:
        points.append(FluidState.from_ph(fluid, Pc, h2b, m).to_point("2b", "Desuperheater outlet"))
        ph.append(ph_point("2b", h2b, Pc))
    points.append(liquid.with_flow(m).to_point("3", "Condenser outlet"))
    ph.append(ph_point("3", h3, Pc))
    if liquid_out is not liquid:
        points.append(liquid_out.to_point("3'", "Subcooler outlet"))
        ph.append(ph_point("3'", liquid_out.enthalpy, Pc))
    points.append(evap_in.to_point("4", "Evaporator inlet"))
    ph.append(ph_point("4", liquid_out.enthalpy, Pe))

    logger.info(
        "Heat pump R717: Q_heat=%.2f kW, W_shaft=%.2f kW, COP_H=%.2f, water %.3f kg/s",
        heating / 1e3, W_shaft / 1e3, heating / W_shaft, water.mass_flow,
    )

    return HeatPumpResult(
        Pe=Pe,
        Pc=Pc,
        flow_model=state.mode,
        eta_v=eta_v,
        eta_s=eta_s,
        mass_flow=m,
        ideal_power=W_ideal,
        shaft_power=W_shaft,
        cooling_capacity=Q_evap,
        heating_capacity=heating,
        oil_load=oil.oil_load,
        T_discharge=oil.T_discharge,
        discharge_corrected=oil.corrected,
        water=water,
        state_points=points,
        ph_points=ph,
        ts_points=points_to_ts(fluid, ph),
        warnings=warnings,
    )
