"""Oil-injected gas compression.

Rates a screw compressor on a permanent gas (air, nitrogen, methane,
...). Pressures are entered directly in bar(a). The compressor efficiency
is given either as isothermal (the usual figure for air compressors) or
isentropic; the other is derived from the same shaft power.

The measured discharge temperature fixes the gas-side heat; whatever
remains of the shaft power leaves through the oil cooler. An optional
aftercooler brings the delivered gas to a target temperature.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum

from compeff_pro.core.efficiency import empirical_efficiencies
from compeff_pro.core.fluids import get_fluid
from compeff_pro.cycle.common import EfficiencyBasis, FlowMode, celsius, swept_volume_flow
from compeff_pro.cycle.components.base import FluidState, StatePoint
from compeff_pro.cycle.components.compressor import CompressorStage
from compeff_pro.cycle.diagrams import DiagramPoint, ph_point
from compeff_pro.utils.constants import BAR_TO_PA, SECONDS_PER_HOUR, T_CELSIUS_OFFSET
from compeff_pro.utils.validation import (
    CalculationError,
    ValidationResult,
    validate_efficiency,
    validate_positive,
)

logger = logging.getLogger(__name__)


class GasEfficiencyType(Enum):
    """Which efficiency the entered value refers to."""

    ISOTHERMAL = "isothermal"
    ISENTROPIC = "isentropic"


@dataclass
class GasCompressionInput:
    """Gas compression inputs. Pressures in bar(a), temperatures in °C."""

    fluid: str = "Air"
    P_in: float = 1.0
    T_in: float = 20.0
    P_out: float = 8.0
    T_discharge: float = 80.0

    flow_mode: FlowMode = FlowMode.VOLUME
    rpm: float = 2900.0
    displacement_cm3: float = 500.0
    flow_m3h: float = 100.0

    eta_v: float = 0.90
    efficiency_type: GasEfficiencyType = GasEfficiencyType.ISOTHERMAL
    efficiency: float = 0.70
    efficiency_basis: EfficiencyBasis = EfficiencyBasis.SHAFT
    motor_efficiency: float = 0.95
    auto_efficiency: bool = False

    aftercooler: bool = False
    aftercooler_T_out: float = 35.0
    aftercooler_pressure_drop: float = 0.2  # bar


@dataclass
class GasCompressionResult:
    """Gas compression results (SI units)."""

    fluid: str
    P_in: float  # Pa
    P_out: float  # Pa
    eta_v: float
    eta_iso: float  # shaft basis
    eta_s: float  # shaft basis
    mass_flow: float  # kg/s
    volume_flow_actual: float  # m³/h at inlet
    gas_constant: float  # J/(kg·K)
    isothermal_power: float  # W
    isentropic_power: float  # W
    shaft_power: float  # W
    input_power: float  # W
    gas_heat: float  # W
    oil_load: float  # W
    T_discharge: float  # K
    aftercooler_duty: float = 0.0  # W
    P_delivery: float | None = None  # Pa, after the aftercooler
    T_delivery: float | None = None  # K
    state_points: list[StatePoint] = field(default_factory=list)
    ph_points: list[DiagramPoint] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def pressure_ratio(self) -> float:
        return self.P_out / self.P_in

    @property
    def specific_power(self) -> float:
        """Input power per delivered inlet volume flow [kW/(m³/min)]."""
        if self.volume_flow_actual <= 0:
            return 0.0
        return (self.input_power / 1e3) / (self.volume_flow_actual / 60.0)

    def summary_rows(self) -> list[tuple[str, float, str]]:
        rows = [
            ("Inlet pressure", self.P_in / 1e5, "bar"),
            ("Discharge pressure", self.P_out / 1e5, "bar"),
            ("Pressure ratio", self.pressure_ratio, "-"),
            ("Discharge temperature", self.T_discharge - T_CELSIUS_OFFSET, "°C"),
            ("Mass flow", self.mass_flow, "kg/s"),
            ("Inlet volume flow", self.volume_flow_actual, "m³/h"),
            ("Isothermal efficiency", self.eta_iso, "-"),
            ("Isentropic efficiency", self.eta_s, "-"),
            ("Shaft power", self.shaft_power / 1e3, "kW"),
            ("Input power", self.input_power / 1e3, "kW"),
            ("Specific power", self.specific_power, "kW/(m³/min)"),
            ("Gas heat", self.gas_heat / 1e3, "kW"),
            ("Oil cooler duty", self.oil_load / 1e3, "kW"),
        ]
        if self.P_delivery is not None:
            rows += [
                ("Aftercooler duty", self.aftercooler_duty / 1e3, "kW"),
                ("Delivery pressure", self.P_delivery / 1e5, "bar"),
            ]
        return rows

    def history_label(self) -> str:
        return f"{self.fluid} • {self.shaft_power / 1e3:.1f} kW"


def _validate(inp: GasCompressionInput) -> None:
    result = ValidationResult()
    validate_positive("P_in", inp.P_in, result)
    if inp.P_out <= inp.P_in:
        result.error("P_out", "Discharge pressure must be higher than inlet pressure", value=inp.P_out)
    if inp.T_discharge <= inp.T_in:
        result.error("T_discharge", "Discharge temperature must be higher than inlet temperature")
    validate_efficiency("motor_efficiency", inp.motor_efficiency, result)
    if not inp.auto_efficiency:
        validate_efficiency("eta_v", inp.eta_v, result)
        validate_efficiency("efficiency", inp.efficiency, result)
    if inp.aftercooler and inp.aftercooler_pressure_drop >= inp.P_out:
        result.error("aftercooler_pressure_drop", "Aftercooler pressure drop exceeds discharge pressure")
    result.raise_for_errors()


def solve_gas_compression(inp: GasCompressionInput) -> GasCompressionResult:
    """Rate an oil-injected gas compressor.

    Raises:
        CalculationError: For invalid inputs or a negative oil load.
        FluidPropertyError: If a property evaluation fails.
    """
    _validate(inp)
    fluid = get_fluid(inp.fluid)
    Pe = inp.P_in * BAR_TO_PA
    Pc = inp.P_out * BAR_TO_PA
    T1 = celsius(inp.T_in)
    eff_type = GasEfficiencyType(inp.efficiency_type)

    eta_v, eta_value = inp.eta_v, inp.efficiency
    if inp.auto_efficiency:
        est = empirical_efficiencies(Pc / Pe)
        eta_v = est.eta_v
        eta_value = est.eta_iso if eff_type == GasEfficiencyType.ISOTHERMAL else est.eta_s

    V_th = swept_volume_flow(inp.flow_mode, inp.rpm, inp.displacement_cm3, inp.flow_m3h)
    inlet = FluidState.from_tp(fluid, T1, Pe)
    m = V_th * eta_v * inlet.density
    inlet = inlet.with_flow(m)

    R = fluid.gas_constant
    W_iso = m * R * T1 * math.log(Pc / Pe)
    isentropic = CompressorStage(fluid, "isentropic", eta_s=1.0)
    isentropic.compute(inlet, outlet_pressure=Pc)
    W_s = isentropic.power()

    eta_shaft = eta_value
    if EfficiencyBasis(inp.efficiency_basis) == EfficiencyBasis.INPUT:
        eta_shaft = eta_value / inp.motor_efficiency

    if eff_type == GasEfficiencyType.ISOTHERMAL:
        eta_iso = eta_shaft
        W_shaft = W_iso / eta_iso
        eta_s = W_s / W_shaft
    else:
        eta_s = eta_shaft
        W_shaft = W_s / eta_s
        eta_iso = W_iso / W_shaft
    W_input = W_shaft / inp.motor_efficiency

    T2 = celsius(inp.T_discharge)
    discharge = FluidState.from_tp(fluid, T2, Pc, m)
    Q_gas = m * (discharge.enthalpy - inlet.enthalpy)
    Q_oil = W_shaft - Q_gas
    if Q_oil < 0:
        raise CalculationError(
            f"Negative oil load ({Q_oil / 1e3:.2f} kW): discharge temperature "
            f"{inp.T_discharge:.1f} °C is too high for the shaft power"
        )

    warnings: list[str] = []
    if eta_shaft > 1.0:
        warnings.append(f"Shaft-basis efficiency {eta_shaft:.3f} exceeds 1; check motor efficiency")

    points = [inlet.to_point("1", "Inlet"), discharge.to_point("2", "Discharge")]
    ph = [ph_point("1", inlet.enthalpy, Pe), ph_point("2", discharge.enthalpy, Pc)]

    Q_ac = 0.0
    P3 = T3 = None
    if inp.aftercooler:
        P3 = (inp.P_out - inp.aftercooler_pressure_drop) * BAR_TO_PA
        T3 = celsius(inp.aftercooler_T_out)
        delivered = FluidState.from_tp(fluid, T3, P3, m)
        Q_ac = m * (discharge.enthalpy - delivered.enthalpy)
        if Q_ac < 0:
            warnings.append("Aftercooler outlet is hotter than the discharge; duty is negative")
        points.append(delivered.to_point("3", "Aftercooler outlet"))
        ph.append(ph_point("3", delivered.enthalpy, P3))

    logger.info(
        "Gas compression %s: PR=%.2f, W_shaft=%.2f kW, Q_oil=%.2f kW",
        inp.fluid, Pc / Pe, W_shaft / 1e3, Q_oil / 1e3,
    )

    return GasCompressionResult(
        fluid=inp.fluid,
        P_in=Pe,
        P_out=Pc,
        eta_v=eta_v,
        eta_iso=eta_iso,
        eta_s=eta_s,
        mass_flow=m,
        volume_flow_actual=V_th * eta_v * SECONDS_PER_HOUR,
        gas_constant=R,
        isothermal_power=W_iso,
        isentropic_power=W_s,
        shaft_power=W_shaft,
        input_power=W_input,
        gas_heat=Q_gas,
        oil_load=Q_oil,
        T_discharge=T2,
        aftercooler_duty=Q_ac,
        P_delivery=P3,
        T_delivery=T3,
        state_points=points,
        ph_points=ph,
        warnings=warnings,
    )
