"""Two-stage cycle on a single compound screw compressor.

A compound screw carries both stages on one casing: the low-pressure
rotors compress suction gas to the intermediate pressure, where vapour
from a subcooler economizer is injected, and the high-pressure rotors
finish the compression. The economizer is always present.

Solution sequence:

1. Intermediate pressure: manual saturation temperature, or the pressure
   at which the HP rotors' swept volume exactly passes the LP discharge
   plus injection (:func:`optimal_intermediate_pressure`). The geometric
   mean is the fallback.
2. Suction mass flow, subcooler balance and optional suction-line heat
   exchanger, iterated until the suction enthalpy settles.
3. LP stage with optional discharge estimate (oil cooling), mixing with
   the injection vapour, HP stage with optional discharge estimate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from scipy.optimize import brentq

from compeff_pro.core.compressors import find_model
from compeff_pro.core.efficiency import empirical_efficiencies
from compeff_pro.core.fluids import Fluid, FluidPropertyError, get_fluid
from compeff_pro.cycle.common import (
    OperatingPoint,
    PressureMode,
    celsius,
    check_intermediate_pressure,
    geometric_mean_pressure,
    intermediate_pressure,
    operating_point,
)
from compeff_pro.cycle.components.base import FluidState, StatePoint
from compeff_pro.cycle.components.compressor import CompressorStage, apply_oil_cooling
from compeff_pro.cycle.components.economizer import SubcoolerEconomizer, mix_enthalpy
from compeff_pro.cycle.components.heat_exchanger import SuctionLineHeatExchanger
from compeff_pro.cycle.components.valve import ExpansionValve
from compeff_pro.cycle.diagrams import DiagramPoint, ph_point
from compeff_pro.utils.constants import SECONDS_PER_HOUR, T_CELSIUS_OFFSET
from compeff_pro.utils.validation import (
    CalculationError,
    ValidationResult,
    validate_efficiency,
    validate_positive,
    validate_temperature_lift,
)

logger = logging.getLogger(__name__)

SLHX_MAX_ITERATIONS = 5
SLHX_TOLERANCE = 100.0  # J/kg

MAIN_PATH = ("1", "1'", "mid", "mix", "2a", "3", "5", "5'", "4")


@dataclass
class TwoStageSingleInput:
    """Compound screw inputs. Temperatures in °C, differences in K."""

    fluid: str = "R717"
    T_evap: float = -35.0
    T_cond: float = 35.0
    superheat: float = 5.0
    subcooling: float = 5.0

    flow_m3h: float = 500.0  # LP swept volume
    eta_v_lp: float = 0.80
    eta_s_lp: float = 0.75
    eta_s_hp: float = 0.75
    auto_efficiency: bool = False

    pressure_mode: PressureMode = PressureMode.AUTO
    T_mid_sat: float | None = None

    compressor_model: str | None = None
    vi_ratio: float | None = None  # LP over HP swept volume
    disp_lp: float | None = None  # m³/h
    disp_hp: float | None = None  # m³/h

    economizer_superheat: float = 5.0
    economizer_approach: float = 5.0

    slhx: bool = False
    slhx_effectiveness: float = 0.5

    T_discharge: float | None = None  # HP discharge estimate
    T_discharge_lp: float | None = None  # LP discharge estimate


@dataclass
class SubcoolerSelection:
    """Both sides of the economizer subcooler, for exchanger selection."""

    hot_in: StatePoint
    hot_out: StatePoint
    cold_in: StatePoint
    cold_out: StatePoint
    hot_duty: float  # W
    cold_duty: float  # W


@dataclass
class TwoStageSingleResult:
    """Compound screw rating results (SI units)."""

    fluid: str
    Pe: float
    Pc: float
    P_mid: float
    T_mid_sat: float  # K
    P_mid_method: str
    eta_v_lp: float
    eta_s_lp: float
    eta_s_hp: float
    mass_flow: float  # kg/s, LP suction
    injection_flow: float  # kg/s
    lp_power: float  # W
    hp_power: float  # W
    cooling_capacity: float  # W
    condenser_duty: float  # W
    oil_load_lp: float  # W
    oil_load_hp: float  # W
    T_mid: float  # K, LP discharge after oil cooling
    T_discharge: float  # K, HP discharge
    discharge_corrected: bool = False
    slhx_duty: float = 0.0  # W
    subcooler: SubcoolerSelection | None = None
    state_points: list[StatePoint] = field(default_factory=list)
    ph_points: list[DiagramPoint] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def total_flow(self) -> float:
        return self.mass_flow + self.injection_flow

    @property
    def shaft_power(self) -> float:
        return self.lp_power + self.hp_power

    @property
    def oil_load(self) -> float:
        return self.oil_load_lp + self.oil_load_hp

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
            ("Intermediate saturation temperature", self.T_mid_sat - T_CELSIUS_OFFSET, "°C"),
            ("Condensing pressure", self.Pc / 1e5, "bar"),
            ("Suction mass flow", self.mass_flow, "kg/s"),
            ("Injection mass flow", self.injection_flow, "kg/s"),
            ("LP discharge temperature", self.T_mid - T_CELSIUS_OFFSET, "°C"),
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


def _hp_swept_volume(inp: TwoStageSingleInput) -> float | None:
    """HP swept volume [m³/h] from explicit data or the compressor model."""
    disp_hp, vi_ratio = inp.disp_hp, inp.vi_ratio
    if inp.compressor_model and (disp_hp is None or vi_ratio is None):
        try:
            _, _, detail = find_model(inp.compressor_model)
        except KeyError as exc:
            raise CalculationError(str(exc.args[0])) from exc
        disp_hp = disp_hp if disp_hp is not None else detail.get("disp_hp")
        vi_ratio = vi_ratio if vi_ratio is not None else detail.get("vi_ratio")
    if disp_hp is not None and disp_hp > 0:
        return float(disp_hp)
    if vi_ratio is not None and vi_ratio > 0 and inp.flow_m3h > 0:
        return inp.flow_m3h / vi_ratio
    return None


def optimal_intermediate_pressure(
    fluid: Fluid,
    op: OperatingPoint,
    flow_m3h: float,
    V_hp_m3h: float,
    eta_v_lp: float,
    eta_s_lp: float,
    eta_v_hp: float | None = None,
    economizer_superheat: float = 5.0,
    economizer_approach: float = 5.0,
) -> float | None:
    """Intermediate pressure matching the HP rotors' swept volume.

    For a trial pressure the LP discharge (at ``eta_s_lp``) is mixed with
    the subcooler injection vapour; the HP volume needed to pass the
    combined flow at the mixed density is

        V_hp_required = ṁ_total · 3600 / (η_v,hp · ρ_mix)

    and the root of ``V_hp_required - V_hp`` is bracketed on
    [1.01·Pe, 0.99·Pc] with :func:`scipy.optimize.brentq`.

    Returns:
        Pressure [Pa], or None if the root is not bracketed or a property
        evaluation fails.
    """
    if eta_v_hp is None:
        eta_v_hp = eta_v_lp
    suction, liquid = op.suction, op.liquid
    m_lp = flow_m3h / SECONDS_PER_HOUR * eta_v_lp * suction.density

    def residual(P_mid: float) -> float:
        T_sat = fluid.saturation_temperature(P_mid, 0.0)
        h_mid_s = fluid.enthalpy_ps(P_mid, suction.entropy)
        h_mid = suction.enthalpy + (h_mid_s - suction.enthalpy) / eta_s_lp
        h5 = fluid.enthalpy(T_sat + economizer_approach, op.Pc)
        h6 = fluid.enthalpy(T_sat + economizer_superheat, P_mid)
        dh_main = liquid.enthalpy - h5
        dh_inj = h6 - liquid.enthalpy
        m_inj = m_lp * dh_main / dh_inj if dh_main > 0 and dh_inj > 0 else 0.0
        m_tot = m_lp + m_inj
        rho_mix = fluid.density_ph(P_mid, mix_enthalpy(m_lp, h_mid, m_inj, h6))
        return m_tot * SECONDS_PER_HOUR / (eta_v_hp * rho_mix) - V_hp_m3h

    try:
        P_opt = brentq(residual, 1.01 * op.Pe, 0.99 * op.Pc, rtol=0.01)
    except (ValueError, FluidPropertyError) as exc:
        logger.warning("Intermediate pressure search failed (%s), using geometric mean", exc)
        return None
    if not op.Pe < P_opt < op.Pc:
        logger.warning("Intermediate pressure %.2f bar out of range, using geometric mean", P_opt / 1e5)
        return None
    return P_opt


def _validate(inp: TwoStageSingleInput) -> None:
    result = ValidationResult()
    validate_temperature_lift(inp.T_evap, inp.T_cond, result)
    validate_positive("flow_m3h", inp.flow_m3h, result)
    if not inp.auto_efficiency:
        validate_efficiency("eta_v_lp", inp.eta_v_lp, result)
        validate_efficiency("eta_s_lp", inp.eta_s_lp, result)
        validate_efficiency("eta_s_hp", inp.eta_s_hp, result)
    if inp.slhx:
        validate_efficiency("slhx_effectiveness", inp.slhx_effectiveness, result)
    if PressureMode(inp.pressure_mode) == PressureMode.MANUAL and inp.T_mid_sat is None:
        result.error("T_mid_sat", "Manual intermediate pressure requires a saturation temperature")
    result.raise_for_errors()


def _resolve_intermediate_pressure(
    fluid: Fluid,
    inp: TwoStageSingleInput,
    op: OperatingPoint,
    eta_v_lp: float,
    eta_s_lp: float,
) -> tuple[float, float, str]:
    if PressureMode(inp.pressure_mode) == PressureMode.MANUAL:
        P_mid, T_mid = intermediate_pressure(fluid, op.Pe, op.Pc, PressureMode.MANUAL, inp.T_mid_sat)
        return P_mid, T_mid, "manual"

    P_mid = None
    V_hp = _hp_swept_volume(inp)
    if V_hp is not None:
        P_mid = optimal_intermediate_pressure(
            fluid,
            op,
            inp.flow_m3h,
            V_hp,
            eta_v_lp,
            eta_s_lp,
            economizer_superheat=inp.economizer_superheat,
            economizer_approach=inp.economizer_approach,
        )
    method = "volume match"
    if P_mid is None:
        P_mid = geometric_mean_pressure(op.Pe, op.Pc)
        method = "geometric mean"
    check_intermediate_pressure(P_mid, op.Pe, op.Pc)
    return P_mid, fluid.saturation_temperature(P_mid, 0.0), method


def solve_two_stage_single(inp: TwoStageSingleInput) -> TwoStageSingleResult:
    """Rate a compound (single-casing two-stage) screw with subcooler economizer.

    Raises:
        CalculationError: For invalid inputs, an intermediate pressure
            outside (Pe, Pc) or an infeasible subcooler balance.
        FluidPropertyError: If a property evaluation fails.
    """
    _validate(inp)
    fluid = get_fluid(inp.fluid)
    op = operating_point(fluid, inp.T_evap, inp.T_cond, inp.superheat, inp.subcooling)
    Pe, Pc = op.Pe, op.Pc

    eta_v_lp, eta_s_lp, eta_s_hp = inp.eta_v_lp, inp.eta_s_lp, inp.eta_s_hp
    if inp.auto_efficiency:
        P_gm = geometric_mean_pressure(Pe, Pc)
        lp = empirical_efficiencies(P_gm / Pe)
        hp = empirical_efficiencies(Pc / P_gm)
        eta_v_lp, eta_s_lp, eta_s_hp = lp.eta_v, lp.eta_s, hp.eta_s

    P_mid, T_mid_sat, method = _resolve_intermediate_pressure(fluid, inp, op, eta_v_lp, eta_s_lp)
    logger.info("Intermediate pressure %.3f bar (%s)", P_mid / 1e5, method)

    V_lp = inp.flow_m3h / SECONDS_PER_HOUR
    subcooler = SubcoolerEconomizer(
        fluid,
        "subcooler",
        injection_superheat=inp.economizer_superheat,
        approach=inp.economizer_approach,
        strict=True,
    )
    slhx = SuctionLineHeatExchanger(fluid, effectiveness=inp.slhx_effectiveness) if inp.slhx else None

    # --- Suction flow, subcooler and SLHX ---
    suction = op.suction
    m = 0.0
    liquid_final = op.liquid
    for _ in range(SLHX_MAX_ITERATIONS):
        m = V_lp * eta_v_lp * suction.density
        liquid_eco = subcooler.compute(op.liquid.with_flow(m), pressure=P_mid, liquid_pressure=Pc, T_sat=T_mid_sat)
        if slhx is None:
            liquid_final = liquid_eco
            suction = suction.with_flow(m)
            break
        liquid_final = slhx.compute(liquid_eco, vapour_inlet=op.suction.with_flow(m))
        new_suction = slhx.vapour_outlet
        diff = abs(new_suction.enthalpy - suction.enthalpy)
        suction = new_suction
        if diff < SLHX_TOLERANCE:
            break
    eco = subcooler.result
    m_inj = eco.injection_flow
    h6 = eco.injection.enthalpy
    m_tot = m + m_inj

    # --- LP stage ---
    lp_stage = CompressorStage(fluid, "lp_stage", eta_s=eta_s_lp)
    lp_stage.compute(suction, outlet_pressure=P_mid)
    W_lp = lp_stage.power()
    T_lp_est = celsius(inp.T_discharge_lp) if inp.T_discharge_lp is not None else None
    lp_oil = lp_stage.apply_discharge_estimate(T_lp_est)

    # --- Mixing and HP stage ---
    h_mix = mix_enthalpy(m, lp_oil.h_discharge, m_inj, h6)
    mixed = FluidState.from_ph(fluid, P_mid, h_mix, m_tot)
    hp_stage = CompressorStage(fluid, "hp_stage", eta_s=eta_s_hp)
    hp_out = hp_stage.compute(mixed, outlet_pressure=Pc)
    W_hp = hp_stage.power()
    T_hp_est = celsius(inp.T_discharge) if inp.T_discharge is not None else None
    hp_oil = apply_oil_cooling(fluid, Pc, m_tot, m_tot * h_mix, W_hp, T_hp_est)
    h2a = hp_oil.h_discharge

    h1 = op.suction.enthalpy
    h3 = op.liquid.enthalpy
    Q_evap = m * (h1 - liquid_final.enthalpy)
    Q_cond = m_tot * (h2a - h3)

    warnings: list[str] = []
    if method == "geometric mean" and _hp_swept_volume(inp) is not None:
        warnings.append("Intermediate pressure search did not converge; geometric mean used")
    if hp_oil.corrected:
        warnings.append(
            f"HP discharge estimate {inp.T_discharge:.1f} °C not reachable; "
            f"discharge recalculated as {hp_oil.T_discharge - T_CELSIUS_OFFSET:.1f} °C"
        )

    # --- Subcooler selection ---
    throttled = FluidState.from_ph(fluid, P_mid, eco.h_throttled, m_inj)
    liquid_in = op.liquid.with_flow(m)
    liquid_eco = eco.liquid_out
    selection = SubcoolerSelection(
        hot_in=liquid_in.to_point("3", "Subcooler hot side in"),
        hot_out=liquid_eco.to_point("5", "Subcooler hot side out"),
        cold_in=throttled.to_point("7", "Subcooler cold side in"),
        cold_out=eco.injection.to_point("6", "Subcooler cold side out"),
        hot_duty=m * (h3 - liquid_eco.enthalpy),
        cold_duty=m_inj * (h6 - eco.h_throttled),
    )

    # --- State points ---
    evap_in = ExpansionValve(fluid).compute(liquid_final, outlet_pressure=Pe)
    lp_out = FluidState.from_ph(fluid, P_mid, lp_oil.h_discharge, m)
    discharge = FluidState.from_ph(fluid, Pc, h2a, m_tot)

    points = [op.suction.with_flow(m).to_point("1", "Evaporator outlet")]
    ph = [ph_point("1", h1, Pe)]
    if slhx is not None:
        points.append(suction.to_point("1'", "LP suction (after SLHX)"))
        ph.append(ph_point("1'", suction.enthalpy, Pe))
    points += [
        lp_out.to_point("mid", "LP discharge"),
        mixed.to_point("mix", "HP suction (mixed)"),
        hp_out.to_point("2", "HP discharge (no oil cooling)"),
        discharge.to_point("2a", "HP discharge"),
        liquid_in.to_point("3", "Condenser outlet"),
        throttled.to_point("7", "Economizer side stream in"),
        eco.injection.to_point("6", "Economizer injection"),
        liquid_eco.to_point("5", "Subcooler liquid out"),
    ]
    ph += [
        ph_point("mid", lp_oil.h_discharge, P_mid),
        ph_point("mix", h_mix, P_mid),
        ph_point("2a", h2a, Pc),
        ph_point("3", h3, Pc),
        ph_point("7", eco.h_throttled, P_mid),
        ph_point("6", h6, P_mid),
        ph_point("5", liquid_eco.enthalpy, Pc),
    ]
    if slhx is not None:
        points.append(liquid_final.to_point("5'", "Liquid after SLHX"))
        ph.append(ph_point("5'", liquid_final.enthalpy, Pc))
    points.append(evap_in.to_point("4", "Evaporator inlet"))
    ph.append(ph_point("4", liquid_final.enthalpy, Pe))

    logger.info(
        "Two-stage (single) %s: Q_evap=%.2f kW, W=%.2f kW, P_mid=%.2f bar",
        inp.fluid, Q_evap / 1e3, (W_lp + W_hp) / 1e3, P_mid / 1e5,
    )

    return TwoStageSingleResult(
        fluid=inp.fluid,
        Pe=Pe,
        Pc=Pc,
        P_mid=P_mid,
        T_mid_sat=T_mid_sat,
        P_mid_method=method,
        eta_v_lp=eta_v_lp,
        eta_s_lp=eta_s_lp,
        eta_s_hp=eta_s_hp,
        mass_flow=m,
        injection_flow=m_inj,
        lp_power=W_lp,
        hp_power=W_hp,
        cooling_capacity=Q_evap,
        condenser_duty=Q_cond,
        oil_load_lp=lp_oil.oil_load,
        oil_load_hp=hp_oil.oil_load,
        T_mid=lp_oil.T_discharge,
        T_discharge=hp_oil.T_discharge,
        discharge_corrected=hp_oil.corrected,
        slhx_duty=slhx.result.heat_transfer if slhx is not None else 0.0,
        subcooler=selection,
        state_points=points,
        ph_points=ph,
        warnings=warnings,
    )
