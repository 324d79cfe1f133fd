"""Single-stage oil-injected refrigeration / heat-pump compressor.

Rates an oil-injected screw running on a refrigerant between a given
evaporating and condensing temperature, optionally with an economizer
port fed by a flash tank or a subcooler. The gas discharge temperature is
an input (oil injection holds it well below the adiabatic value) and the
oil cooler duty follows from the compressor energy balance.

With an economizer, ideal work is taken as two isentropic steps:
suction → economizer pressure, adiabatic mixing with the injected
vapour, then mixed state → condensing pressure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from compeff_pro.core.efficiency import empirical_efficiencies
from compeff_pro.core.fluids import get_fluid
from compeff_pro.cycle.common import (
    EfficiencyBasis,
    FlowMode,
    PressureMode,
    celsius,
    intermediate_pressure,
    operating_point,
    swept_volume_flow,
)
from compeff_pro.cycle.components.base import FluidState, StatePoint
from compeff_pro.cycle.components.compressor import CompressorStage, apply_oil_cooling
from compeff_pro.cycle.components.economizer import EconomizerType, make_economizer, mix_enthalpy
from compeff_pro.cycle.components.valve import ExpansionValve
from compeff_pro.cycle.diagrams import DiagramPoint, ph_point
from compeff_pro.utils.constants import SECONDS_PER_HOUR, T_CELSIUS_OFFSET
from compeff_pro.utils.validation import (
    ValidationResult,
    validate_discharge_estimate,
    validate_efficiency,
    validate_temperature_lift,
)

logger = logging.getLogger(__name__)

# Subcooler economizer liquid leaves this far above the economizer saturation temperature
SUBCOOLER_APPROACH = 5.0  # K

MAIN_PATH = ("1", "2", "3", "5", "4")


@dataclass
class RefrigerationInput:
    """Single-stage refrigeration / heat-pump inputs.

    Temperatures in °C, temperature differences in K.
    """

    fluid: str = "R134a"
    T_evap: float = -10.0
    T_cond: float = 40.0
    superheat: float = 5.0
    subcooling: float = 5.0
    T_discharge: float = 80.0  # oil-cooled gas discharge estimate

    flow_mode: FlowMode = FlowMode.VOLUME
    rpm: float = 2900.0
    displacement_cm3: float = 500.0
    flow_m3h: float = 100.0

    eta_v: float = 0.85
    eta_s: float = 0.70
    motor_efficiency: float = 0.95
    efficiency_basis: EfficiencyBasis = EfficiencyBasis.SHAFT
    auto_efficiency: bool = False

    economizer: bool = False
    economizer_type: EconomizerType = EconomizerType.SUBCOOLER
    economizer_pressure_mode: PressureMode = PressureMode.AUTO
    economizer_T_sat: float | None = None
    economizer_superheat: float = 5.0


@dataclass
class RefrigerationResult:
    """Single-stage rating results (SI units)."""

    fluid: str
    Pe: float  # Pa
    Pc: float  # Pa
    eta_v: float
    eta_s: float
    mass_flow: float  # kg/s, suction
    injection_flow: float  # kg/s
    volume_flow_actual: float  # m³/h at suction
    ideal_power: float  # W
    shaft_power: float  # W
    input_power: float  # W
    eta_total: float
    cooling_capacity: float  # W
    condenser_duty: float  # W
    oil_load: float  # W
    heating_capacity: float  # W
    cop_cooling: float
    cop_heating: float
    T_discharge: float  # K
    discharge_corrected: bool = False
    economizer_pressure: float | None = None  # Pa
    economizer_T_sat: float | None = None  # K
    economizer_gain_pct: float | None = None
    state_points: list[StatePoint] = field(default_factory=list)
    ph_points: list[DiagramPoint] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def total_flow(self) -> float:
        return self.mass_flow + self.injection_flow

    @property
    def pressure_ratio(self) -> float:
        return self.Pc / self.Pe

    def summary_rows(self) -> list[tuple[str, float, str]]:
        rows = [
            ("Evaporating pressure", self.Pe / 1e5, "bar"),
            ("Condensing pressure", self.Pc / 1e5, "bar"),
            ("Pressure ratio", self.pressure_ratio, "-"),
            ("Suction mass flow", self.mass_flow, "kg/s"),
            ("Suction volume flow", self.volume_flow_actual, "m³/h"),
            ("Discharge temperature", self.T_discharge - T_CELSIUS_OFFSET, "°C"),
            ("Cooling capacity", self.cooling_capacity / 1e3, "kW"),
            ("Heating capacity", self.heating_capacity / 1e3, "kW"),
            ("Condenser duty", self.condenser_duty / 1e3, "kW"),
            ("Oil cooler duty", self.oil_load / 1e3, "kW"),
            ("Shaft power", self.shaft_power / 1e3, "kW"),
            ("Input power", self.input_power / 1e3, "kW"),
            ("Overall isentropic efficiency", self.eta_total, "-"),
            ("COP cooling", self.cop_cooling, "-"),
            ("COP heating", self.cop_heating, "-"),
        ]
        if self.economizer_pressure is not None:
            rows += [
                ("Economizer pressure", self.economizer_pressure / 1e5, "bar"),
                ("Injection mass flow", self.injection_flow, "kg/s"),
                ("Economizer capacity gain", self.economizer_gain_pct or 0.0, "%"),
            ]
        return rows

    def history_label(self) -> str:
        return f"{self.fluid} • {self.cooling_capacity / 1e3:.1f} kW"


def _validate(inp: RefrigerationInput) -> None:
    result = ValidationResult()
    validate_temperature_lift(inp.T_evap, inp.T_cond, result)
    validate_discharge_estimate(inp.T_discharge, inp.T_cond, result)
    validate_efficiency("motor_efficiency", inp.motor_efficiency, result)
    if not inp.auto_efficiency:
        validate_efficiency("eta_v", inp.eta_v, result)
        validate_efficiency("eta_s", inp.eta_s, result)
    if (
        inp.economizer
        and PressureMode(inp.economizer_pressure_mode) == PressureMode.MANUAL
        and inp.economizer_T_sat is None
    ):
        result.error("economizer_T_sat", "Manual economizer pressure requires a saturation temperature")
    result.raise_for_errors()


def solve_refrigeration(inp: RefrigerationInput) -> RefrigerationResult:
    """Rate a single-stage oil-injected compressor.

    Raises:
        CalculationError: For infeasible inputs.
        FluidPropertyError: If a property evaluation fails.
    """
    _validate(inp)
    fluid = get_fluid(inp.fluid)
    op = operating_point(fluid, inp.T_evap, inp.T_cond, inp.superheat, inp.subcooling)
    Pe, Pc = op.Pe, op.Pc

    eta_v, eta_s = inp.eta_v, inp.eta_s
    if inp.auto_efficiency:
        est = empirical_efficiencies(op.pressure_ratio)
        eta_v, eta_s = est.eta_v, est.eta_s
        logger.info("Auto efficiency at PR=%.2f: eta_v=%.3f, eta_s=%.3f", op.pressure_ratio, eta_v, eta_s)

    V_th = swept_volume_flow(inp.flow_mode, inp.rpm, inp.displacement_cm3, inp.flow_m3h)
    m = V_th * eta_v * op.suction.density
    suction = op.suction.with_flow(m)
    liquid = op.liquid.with_flow(m)
    h1, h3 = suction.enthalpy, liquid.enthalpy

    # --- Economizer ---
    m_inj = 0.0
    h_inj = 0.0
    liquid_to_valve = liquid
    eco_result = None
    P_eco = T_eco = None
    if inp.economizer:
        P_eco, T_eco = intermediate_pressure(
            fluid, Pe, Pc, inp.economizer_pressure_mode, inp.economizer_T_sat
        )
        eco_type = EconomizerType(inp.economizer_type)
        eco = make_economizer(
            eco_type,
            fluid,
            "economizer",
            injection_superheat=0.0 if eco_type == EconomizerType.FLASH_TANK else inp.economizer_superheat,
            approach=SUBCOOLER_APPROACH,
            strict=True,
        )
        liquid_to_valve = eco.compute(liquid, pressure=P_eco, liquid_pressure=Pc, T_sat=T_eco)
        eco_result = eco.result
        m_inj = eco_result.injection_flow
        h_inj = eco_result.injection.enthalpy
    m_tot = m + m_inj

    # --- Ideal compression work ---
    ideal = CompressorStage(fluid, "isentropic", eta_s=1.0)
    if eco_result is None:
        ideal.compute(suction, outlet_pressure=Pc)
        W_ideal = ideal.power()
    else:
        mid = ideal.compute(suction, outlet_pressure=P_eco)
        W_ideal = ideal.power()
        h_mix = mix_enthalpy(m, mid.enthalpy, m_inj, h_inj)
        mixed = FluidState.from_ph(fluid, P_eco, h_mix, m_tot)
        ideal.compute(mixed, outlet_pressure=Pc)
        W_ideal += ideal.power()

    if EfficiencyBasis(inp.efficiency_basis) == EfficiencyBasis.SHAFT:
        W_shaft = W_ideal / eta_s
        W_input = W_shaft / inp.motor_efficiency
        eta_total = W_ideal / W_input
    else:
        W_input = W_ideal / eta_s
        W_shaft = W_input * inp.motor_efficiency
        eta_total = eta_s

    # --- Energy balance and oil load ---
    oil = apply_oil_cooling(fluid, Pc, m_tot, m * h1 + m_inj * h_inj, W_shaft, celsius(inp.T_discharge))
    h2a = oil.h_discharge
    h4 = liquid_to_valve.enthalpy

    Q_evap = m * (h1 - h4)
    Q_cond = m_tot * (h2a - h3)
    heating = Q_cond + oil.oil_load

    warnings: list[str] = []
    if oil.corrected:
        warnings.append(
            f"Discharge estimate {inp.T_discharge:.1f} °C not reachable; "
            f"discharge recalculated as {oil.T_discharge - T_CELSIUS_OFFSET:.1f} °C with no oil load"
        )

    eco_gain = None
    if eco_result is not None:
        Q_evap_plain = m * (h1 - h3)
        eco_gain = (Q_evap - Q_evap_plain) / Q_evap_plain * 100.0

    # --- State points ---
    evap_in = ExpansionValve(fluid).compute(liquid_to_valve, outlet_pressure=Pe)
    discharge = FluidState.from_ph(fluid, Pc, h2a, m_tot)
    points = [
        suction.to_point("1", "Compressor suction"),
        discharge.to_point("2", "Discharge (oil separated)"),
        liquid.to_point("3", "Condenser outlet"),
    ]
    ph = [ph_point("1", h1, Pe), ph_point("2", h2a, Pc), ph_point("3", h3, Pc)]
    if eco_result is not None:
        throttled = FluidState.from_ph(fluid, P_eco, eco_result.h_throttled, m_inj)
        points += [
            throttled.to_point("7", "Economizer side stream in"),
            eco_result.injection.to_point("6", "Economizer injection"),
            liquid_to_valve.to_point("5", "Economizer liquid out"),
        ]
        ph += [
            ph_point("7", eco_result.h_throttled, P_eco),
            ph_point("6", h_inj, P_eco),
            ph_point("5", h4, liquid_to_valve.pressure),
        ]
    points.append(evap_in.to_point("4", "Evaporator inlet"))
    ph.append(ph_point("4", h4, Pe))

    logger.info(
        "Refrigeration %s: Q_evap=%.2f kW, W_input=%.2f kW, COP_R=%.2f",
        inp.fluid, Q_evap / 1e3, W_input / 1e3, Q_evap / W_input,
    )

    return RefrigerationResult(
        fluid=inp.fluid,
        Pe=Pe,
        Pc=Pc,
        eta_v=eta_v,
        eta_s=eta_s,
        mass_flow=m,
        injection_flow=m_inj,
        volume_flow_actual=V_th * eta_v * SECONDS_PER_HOUR,
        ideal_power=W_ideal,
        shaft_power=W_shaft,
        input_power=W_input,
        eta_total=eta_total,
        cooling_capacity=Q_evap,
        condenser_duty=Q_cond,
        oil_load=oil.oil_load,
        heating_capacity=heating,
        cop_cooling=Q_evap / W_input,
        cop_heating=heating / W_input,
        T_discharge=oil.T_discharge,
        discharge_corrected=oil.corrected,
        economizer_pressure=P_eco,
        economizer_T_sat=T_eco,
        economizer_gain_pct=eco_gain,
        state_points=points,
        ph_points=ph,
        warnings=warnings,
    )
