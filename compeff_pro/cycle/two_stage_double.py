"""Two-stage cycle on two separate compressors.

A low-pressure (booster) compressor lifts suction gas to the intermediate
pressure and a high-pressure compressor takes it on to condensing
pressure. Three economizer positions can be switched on independently,
all feeding vapour at the intermediate pressure:

- ``lp``: injects into the LP compressor; its liquid is cooled at the
  intermediate pressure.
- ``intercooler``: flash tank or subcooler between the machines; the
  injection mixes with the LP discharge.
- ``hp``: injects into the HP compressor, sized on the flow leaving the
  intercooler.

The evaporator is fed from the last active economizer in the liquid line
(HP, then intercooler, then LP).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from compeff_pro.core.efficiency import auto_efficiency_two_stage
from compeff_pro.core.fluids import Fluid, get_fluid
from compeff_pro.cycle.common import (
    PressureMode,
    celsius,
    intermediate_pressure,
    operating_point,
)
from compeff_pro.cycle.components.base import FluidState, StatePoint
from compeff_pro.cycle.components.compressor import CompressorStage, apply_oil_cooling
from compeff_pro.cycle.components.economizer import (
    EconomizerResult,
    EconomizerType,
    make_economizer,
    mix_enthalpy,
)
from compeff_pro.cycle.components.valve import ExpansionValve
from compeff_pro.cycle.diagrams import DiagramPoint, ph_point
from compeff_pro.utils.constants import SECONDS_PER_HOUR, T_CELSIUS_OFFSET
from compeff_pro.utils.validation import (
    ValidationResult,
    validate_efficiency,
    validate_positive,
    validate_temperature_lift,
)

logger = logging.getLogger(__name__)

MAIN_PATH = ("LP-1", "LP-2", "HP-1", "HP-2", "3", "4")

ECONOMIZER_POSITIONS = ("lp", "intercooler", "hp")
_POINT_PREFIX = {"lp": "LP", "intercooler": "IC", "hp": "HP"}
_LABELS = {"lp": "LP", "intercooler": "Intercooler", "hp": "HP"}


@dataclass
class TwoStageDoubleInput:
    """Two-compressor inputs. Temperatures in °C, differences in K."""

    fluid: str = "R717"
    T_evap: float = -35.0
    T_cond: float = 35.0
    superheat: float = 5.0
    subcooling: float = 5.0

    flow_m3h_lp: float = 500.0
    eta_v_lp: float = 0.80
    eta_s_lp: float = 0.75
    flow_m3h_hp: float = 200.0
    eta_v_hp: float = 0.80
    eta_s_hp: float = 0.75
    auto_efficiency: bool = False

    pressure_mode: PressureMode = PressureMode.AUTO
    T_mid_sat: float | None = None

    lp_eco: bool = False
    lp_eco_type: EconomizerType = EconomizerType.FLASH_TANK
    lp_eco_superheat: float = 5.0
    lp_eco_dt: float = 5.0  # liquid subcooled below the intermediate saturation

    ic_eco: bool = False
    ic_eco_type: EconomizerType = EconomizerType.FLASH_TANK
    ic_eco_superheat: float = 5.0
    ic_eco_dt: float = 5.0  # liquid approach above the intermediate saturation

    hp_eco: bool = False
    hp_eco_type: EconomizerType = EconomizerType.SUBCOOLER
    hp_eco_superheat: float = 5.0
    hp_eco_dt: float = 5.0

    T_discharge_lp: float | None = None
    T_discharge: float | None = None  # HP discharge estimate


@dataclass
class EconomizerSummary:
    """One active economizer position."""

    position: str
    kind: EconomizerType
    injection_flow: float  # kg/s
    h_liquid_out: float  # J/kg
    h_injection: float  # J/kg
    duty: float  # W


@dataclass
class TwoStageDoubleResult:
    """Two-compressor rating results (SI units)."""

    fluid: str
    Pe: float
    Pc: float
    P_mid: float
    T_mid_sat: float  # K
    eta_v_lp: float
    eta_s_lp: float
    eta_v_hp: float
    eta_s_hp: float
    mass_flow: float  # kg/s, evaporator / LP suction
    lp_flow: float  # kg/s, LP discharge incl. LP injection
    hp_flow: float  # kg/s, HP discharge
    hp_capacity_flow: float  # kg/s the HP geometry can pass
    lp_power: float  # W
    hp_power: float  # W
    cooling_capacity: float  # W
    condenser_duty: float  # W
    oil_load_lp: float  # W
    oil_load_hp: float  # W
    T_lp_discharge: float  # K
    T_discharge: float  # K
    discharge_corrected: bool = False
    economizers: list[EconomizerSummary] = field(default_factory=list)
    state_points: list[StatePoint] = field(default_factory=list)
    ph_points: list[DiagramPoint] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def shaft_power(self) -> float:
        return self.lp_power + self.hp_power

    @property
    def oil_load(self) -> float:
        return self.oil_load_lp + self.oil_load_hp

    @property
    def hp_utilisation(self) -> float:
        """Required over available HP mass flow."""
        if self.hp_capacity_flow <= 0:
            return float("inf")
        return self.hp_flow / self.hp_capacity_flow

    @property
    def cop_cooling(self) -> float:
        return self.cooling_capacity / self.shaft_power

    @property
    def cop_heating(self) -> float:
        return self.condenser_duty / self.shaft_power

    def summary_rows(self) -> list[tuple[str, float, str]]:
        return [
            ("Evaporating pressure", self.Pe / 1e5, "bar"),
            ("Intermediate pressure", self.P_mid / 1e5, "bar"),
            ("Condensing pressure", self.Pc / 1e5, "bar"),
            ("LP suction mass flow", self.mass_flow, "kg/s"),
            ("HP mass flow", self.hp_flow, "kg/s"),
            ("HP capacity mass flow", self.hp_capacity_flow, "kg/s"),
            ("HP utilisation", self.hp_utilisation, "-"),
            ("LP discharge temperature", self.T_lp_discharge - T_CELSIUS_OFFSET, "°C"),
            ("HP discharge temperature", self.T_discharge - T_CELSIUS_OFFSET, "°C"),
            ("Cooling capacity", self.cooling_capacity / 1e3, "kW"),
            ("Condenser duty", self.condenser_duty / 1e3, "kW"),
            ("LP shaft power", self.lp_power / 1e3, "kW"),
            ("HP shaft power", self.hp_power / 1e3, "kW"),
            ("Total shaft power", self.shaft_power / 1e3, "kW"),
            ("LP oil cooler duty", self.oil_load_lp / 1e3, "kW"),
            ("HP oil cooler duty", self.oil_load_hp / 1e3, "kW"),
            ("COP cooling", self.cop_cooling, "-"),
            ("COP heating", self.cop_heating, "-"),
        ]

    def history_label(self) -> str:
        return f"{self.fluid} • {self.cooling_capacity / 1e3:.1f} kW"


def _validate(inp: TwoStageDoubleInput) -> None:
    result = ValidationResult()
    validate_temperature_lift(inp.T_evap, inp.T_cond, result)
    validate_positive("flow_m3h_lp", inp.flow_m3h_lp, result)
    validate_positive("flow_m3h_hp", inp.flow_m3h_hp, result)
    if not inp.auto_efficiency:
        for name in ("eta_v_lp", "eta_s_lp", "eta_v_hp", "eta_s_hp"):
            validate_efficiency(name, getattr(inp, name), result)
    if PressureMode(inp.pressure_mode) == PressureMode.MANUAL and inp.T_mid_sat is None:
        result.error("T_mid_sat", "Manual intermediate pressure requires a saturation temperature")
    result.raise_for_errors()


def _run_economizer(
    fluid: Fluid,
    position: str,
    kind: EconomizerType,
    superheat: float,
    approach: float,
    liquid: FluidState,
    P_mid: float,
    T_mid_sat: float,
    liquid_pressure: float,
) -> EconomizerResult:
    eco = make_economizer(
        kind,
        fluid,
        f"{position}_economizer",
        injection_superheat=superheat,
        approach=approach,
        strict=False,
    )
    eco.compute(liquid, pressure=P_mid, liquid_pressure=liquid_pressure, T_sat=T_mid_sat)
    return eco.result


def solve_two_stage_double(inp: TwoStageDoubleInput) -> TwoStageDoubleResult:
    """Rate a two-compressor (booster + high stage) cycle.

    Raises:
        CalculationError: For invalid inputs or an intermediate pressure
            outside (Pe, Pc).
        FluidPropertyError: If a property evaluation fails.
    """
    _validate(inp)
    fluid = get_fluid(inp.fluid)
    op = operating_point(fluid, inp.T_evap, inp.T_cond, inp.superheat, inp.subcooling)
    Pe, Pc = op.Pe, op.Pc
    P_mid, T_mid_sat = intermediate_pressure(fluid, Pe, Pc, inp.pressure_mode, inp.T_mid_sat)

    eta_v_lp, eta_s_lp = inp.eta_v_lp, inp.eta_s_lp
    eta_v_hp, eta_s_hp = inp.eta_v_hp, inp.eta_s_hp
    if inp.auto_efficiency:
        lp_est, hp_est = auto_efficiency_two_stage(inp.fluid, inp.T_evap, inp.T_cond)
        eta_v_lp, eta_s_lp = lp_est.eta_v, lp_est.eta_s
        eta_v_hp, eta_s_hp = hp_est.eta_v, hp_est.eta_s

    suction = op.suction
    liquid = op.liquid
    h1, h3 = suction.enthalpy, liquid.enthalpy
    m_suc = inp.flow_m3h_lp / SECONDS_PER_HOUR * eta_v_lp * suction.density
    suction = suction.with_flow(m_suc)

    ecos: dict[str, EconomizerResult] = {}
    kinds = {
        "lp": EconomizerType(inp.lp_eco_type),
        "intercooler": EconomizerType(inp.ic_eco_type),
        "hp": EconomizerType(inp.hp_eco_type),
    }

    # --- LP stage with optional LP economizer ---
    m_lp_inj, h_lp_inj = 0.0, 0.0
    if inp.lp_eco:
        eco = _run_economizer(
            fluid, "lp", kinds["lp"], inp.lp_eco_superheat, -inp.lp_eco_dt,
            liquid.with_flow(m_suc), P_mid, T_mid_sat, liquid_pressure=P_mid,
        )
        ecos["lp"] = eco
        m_lp_inj, h_lp_inj = eco.injection_flow, eco.injection.enthalpy
    m_lp = m_suc + m_lp_inj

    lp_stage = CompressorStage(fluid, "lp_compressor", eta_s=eta_s_lp)
    lp_stage.compute(suction, outlet_pressure=P_mid)
    W_lp = lp_stage.power()
    T_lp_est = celsius(inp.T_discharge_lp) if inp.T_discharge_lp is not None else None
    lp_oil = apply_oil_cooling(fluid, P_mid, m_lp, m_suc * h1 + m_lp_inj * h_lp_inj, W_lp, T_lp_est)

    # --- Intercooler economizer ---
    h_mix = lp_oil.h_discharge
    m_inter = m_lp
    if inp.ic_eco:
        eco = _run_economizer(
            fluid, "intercooler", kinds["intercooler"], _flash_or(kinds["intercooler"], inp.ic_eco_superheat),
            inp.ic_eco_dt, liquid.with_flow(m_lp), P_mid, T_mid_sat, liquid_pressure=Pc,
        )
        ecos["intercooler"] = eco
        if eco.is_active:
            h_mix = mix_enthalpy(m_lp, h_mix, eco.injection_flow, eco.injection.enthalpy)
            m_inter = m_lp + eco.injection_flow

    # --- HP economizer ---
    m_hp = m_inter
    if inp.hp_eco:
        eco = _run_economizer(
            fluid, "hp", kinds["hp"], _flash_or(kinds["hp"], inp.hp_eco_superheat),
            inp.hp_eco_dt, liquid.with_flow(m_inter), P_mid, T_mid_sat, liquid_pressure=Pc,
        )
        ecos["hp"] = eco
        if eco.is_active:
            h_mix = mix_enthalpy(m_inter, h_mix, eco.injection_flow, eco.injection.enthalpy)
            m_hp = m_inter + eco.injection_flow

    # --- HP stage ---
    hp_inlet = FluidState.from_ph(fluid, P_mid, h_mix, m_hp)
    hp_stage = CompressorStage(fluid, "hp_compressor", eta_s=eta_s_hp)
    hp_stage.compute(hp_inlet, outlet_pressure=Pc)
    W_hp = hp_stage.power()
    T_hp_est = celsius(inp.T_discharge) if inp.T_discharge is not None else None
    hp_oil = apply_oil_cooling(fluid, Pc, m_hp, m_hp * h_mix, W_hp, T_hp_est)
    h2a = hp_oil.h_discharge

    m_hp_capacity = inp.flow_m3h_hp / SECONDS_PER_HOUR * eta_v_hp * hp_inlet.density

    # --- Throttling ---
    feeding = next((ecos[p] for p in reversed(ECONOMIZER_POSITIONS) if p in ecos and ecos[p].is_active), None)
    liquid_to_valve = feeding.liquid_out if feeding is not None else liquid
    evap_in = ExpansionValve(fluid).compute(liquid_to_valve.with_flow(m_suc), outlet_pressure=Pe)
    h4 = evap_in.enthalpy

    Q_evap = m_suc * (h1 - h4)
    Q_cond = m_hp * (h2a - h3)

    warnings: list[str] = []
    for position, eco in ecos.items():
        if not eco.is_active:
            warnings.append(f"{_LABELS[position]} economizer inactive: no injection flow")
    if hp_oil.corrected:
        warnings.append(
            f"HP discharge estimate {inp.T_discharge:.1f} °C not reachable; "
            f"discharge recalculated as {hp_oil.T_discharge - T_CELSIUS_OFFSET:.1f} °C"
        )
    if m_hp_capacity > 0 and m_hp / m_hp_capacity > 1.0:
        msg = (
            f"HP compressor undersized: needs {m_hp:.4f} kg/s, "
            f"geometry passes {m_hp_capacity:.4f} kg/s"
        )
        logger.warning(msg)
        warnings.append(msg)

    # --- State points ---
    lp_out = FluidState.from_ph(fluid, P_mid, lp_oil.h_discharge, m_lp)
    discharge = FluidState.from_ph(fluid, Pc, h2a, m_hp)
    points = [
        suction.to_point("LP-1", "LP suction"),
        lp_out.to_point("LP-2", "LP discharge"),
        hp_inlet.to_point("HP-1", "HP suction (mixed)"),
        discharge.to_point("HP-2", "HP discharge"),
        liquid.with_flow(m_hp).to_point("3", "Condenser outlet"),
        evap_in.to_point("4", "Evaporator inlet"),
    ]
    ph = [
        ph_point("LP-1", h1, Pe),
        ph_point("LP-2", lp_oil.h_discharge, P_mid),
        ph_point("HP-1", h_mix, P_mid),
        ph_point("HP-2", h2a, Pc),
        ph_point("3", h3, Pc),
        ph_point("4", h4, Pe),
    ]
    summaries: list[EconomizerSummary] = []
    for position in ECONOMIZER_POSITIONS:
        eco = ecos.get(position)
        if eco is None or not eco.is_active:
            continue
        prefix = _POINT_PREFIX[position]
        throttled = FluidState.from_ph(fluid, P_mid, eco.h_throttled, eco.injection_flow)
        points += [
            throttled.to_point(f"{prefix}-7", f"{_LABELS[position]} economizer side stream in"),
            eco.injection.to_point(f"{prefix}-6", f"{_LABELS[position]} economizer injection"),
            eco.liquid_out.to_point(f"{prefix}-5", f"{_LABELS[position]} economizer liquid out"),
        ]
        ph += [
            ph_point(f"{prefix}-7", eco.h_throttled, P_mid),
            ph_point(f"{prefix}-6", eco.injection.enthalpy, P_mid),
            ph_point(f"{prefix}-5", eco.liquid_out.enthalpy, eco.liquid_out.pressure),
        ]
        summaries.append(
            EconomizerSummary(
                position=position,
                kind=kinds[position],
                injection_flow=eco.injection_flow,
                h_liquid_out=eco.liquid_out.enthalpy,
                h_injection=eco.injection.enthalpy,
                duty=eco.duty,
            )
        )

    logger.info(
        "Two-stage (double) %s: Q_evap=%.2f kW, W=%.2f kW, HP utilisation=%.2f",
        inp.fluid, Q_evap / 1e3, (W_lp + W_hp) / 1e3, m_hp / m_hp_capacity if m_hp_capacity > 0 else float("inf"),
    )

    return TwoStageDoubleResult(
        fluid=inp.fluid,
        Pe=Pe,
        Pc=Pc,
        P_mid=P_mid,
        T_mid_sat=T_mid_sat,
        eta_v_lp=eta_v_lp,
        eta_s_lp=eta_s_lp,
        eta_v_hp=eta_v_hp,
        eta_s_hp=eta_s_hp,
        mass_flow=m_suc,
        lp_flow=m_lp,
        hp_flow=m_hp,
        hp_capacity_flow=m_hp_capacity,
        lp_power=W_lp,
        hp_power=W_hp,
        cooling_capacity=Q_evap,
        condenser_duty=Q_cond,
        oil_load_lp=lp_oil.oil_load,
        oil_load_hp=hp_oil.oil_load,
        T_lp_discharge=lp_oil.T_discharge,
        T_discharge=hp_oil.T_discharge,
        discharge_corrected=hp_oil.corrected,
        economizers=summaries,
        state_points=points,
        ph_points=ph,
        warnings=warnings,
    )


def _flash_or(kind: EconomizerType | str, superheat: float) -> float:
    """Flash tanks above the booster deliver saturated vapour."""
    return 0.0 if EconomizerType(kind) == EconomizerType.FLASH_TANK else superheat
