"""Shared operating-point helpers for the cycle solvers.

Every calculation mode starts from the same pieces: saturation pressures
from evaporating and condensing temperature, the suction state after
superheat, the liquid state after subcooling, the compressor's swept
volume flow and (for economized and two-stage cycles) an intermediate
pressure.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from compeff_pro.core.fluids import Fluid
from compeff_pro.cycle.components.base import FluidState
from compeff_pro.utils.constants import (
    CM3_TO_M3,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
    T_CELSIUS_OFFSET,
)
from compeff_pro.utils.validation import CalculationError


class FlowMode(Enum):
    """How the compressor swept volume is specified."""

    RPM = "rpm"  # speed × displacement per revolution
    VOLUME = "volume"  # swept volume flow in m³/h


class EfficiencyBasis(Enum):
    """What the entered isentropic efficiency refers to."""

    SHAFT = "shaft"  # W_shaft = W_ideal / η; motor losses on top
    INPUT = "input"  # W_input = W_ideal / η; η includes the motor


class PressureMode(Enum):
    """How the intermediate (economizer) pressure is chosen."""

    AUTO = "auto"
    MANUAL = "manual"


@dataclass
class OperatingPoint:
    """Saturation pressures and the two fixed cycle states.

    Attributes:
        Pe: Evaporating (suction dew) pressure [Pa].
        Pc: Condensing (discharge dew) pressure [Pa].
        suction: Point 1, evaporator outlet at T_evap + superheat.
        liquid: Point 3, condenser outlet at T_cond - subcooling.
    """

    T_evap: float  # K
    T_cond: float  # K
    Pe: float
    Pc: float
    suction: FluidState
    liquid: FluidState

    @property
    def pressure_ratio(self) -> float:
        return self.Pc / self.Pe


def celsius(T_C: float) -> float:
    """°C to K."""
    return T_C + T_CELSIUS_OFFSET


def operating_point(
    fluid: Fluid,
    T_evap_C: float,
    T_cond_C: float,
    superheat: float,
    subcooling: float,
) -> OperatingPoint:
    """Evaluate Pe, Pc and states 1 and 3 for a vapour-compression cycle."""
    if T_cond_C <= T_evap_C:
        raise CalculationError(
            f"Condensing temperature ({T_cond_C} °C) must be higher than "
            f"evaporating temperature ({T_evap_C} °C)"
        )
    if superheat < 0 or subcooling < 0:
        raise CalculationError("Superheat and subcooling cannot be negative")

    T_evap = celsius(T_evap_C)
    T_cond = celsius(T_cond_C)
    Pe = fluid.saturation_pressure(T_evap, 1.0)
    Pc = fluid.saturation_pressure(T_cond, 1.0)
    # T,P inputs are ill-posed exactly on the saturation line
    if superheat > 0:
        suction = FluidState.from_tp(fluid, T_evap + superheat, Pe)
    else:
        suction = FluidState.from_ph(fluid, Pe, fluid.saturated_enthalpy_p(Pe, 1.0))
    if subcooling > 0:
        liquid = FluidState.from_tp(fluid, T_cond - subcooling, Pc)
    else:
        liquid = FluidState.from_ph(fluid, Pc, fluid.saturated_enthalpy_p(Pc, 0.0))
    return OperatingPoint(T_evap=T_evap, T_cond=T_cond, Pe=Pe, Pc=Pc, suction=suction, liquid=liquid)


def swept_volume_flow(
    flow_mode: FlowMode,
    rpm: float = 0.0,
    displacement_cm3: float = 0.0,
    flow_m3h: float = 0.0,
) -> float:
    """Theoretical swept volume flow [m³/s].

    Args:
        flow_mode: RPM (speed × displacement) or VOLUME (m³/h).
        rpm: Shaft speed [rev/min].
        displacement_cm3: Swept volume per revolution [cm³].
        flow_m3h: Swept volume flow [m³/h].
    """
    if FlowMode(flow_mode) == FlowMode.RPM:
        V = rpm * displacement_cm3 * CM3_TO_M3 / SECONDS_PER_MINUTE
    else:
        V = flow_m3h / SECONDS_PER_HOUR
    if V <= 0:
        raise CalculationError("Compressor swept volume flow must be positive")
    return V


def geometric_mean_pressure(Pe: float, Pc: float) -> float:
    """Classic √(Pe·Pc) intermediate pressure [Pa]."""
    return math.sqrt(Pe * Pc)


def intermediate_pressure(
    fluid: Fluid,
    Pe: float,
    Pc: float,
    mode: PressureMode | str = PressureMode.AUTO,
    T_sat_C: float | None = None,
) -> tuple[float, float]:
    """Intermediate pressure and its saturation temperature.

    AUTO uses the geometric mean; MANUAL takes a saturation temperature
    and evaluates the pressure at mid-quality, which matters only for
    zeotropic blends.

    Returns:
        (pressure [Pa], saturation temperature [K]).

    Raises:
        CalculationError: If MANUAL lacks a temperature or the pressure
            does not lie strictly between Pe and Pc.
    """
    if PressureMode(mode) == PressureMode.AUTO:
        P = geometric_mean_pressure(Pe, Pc)
        T_sat = fluid.saturation_temperature(P, 0.0)
    else:
        if T_sat_C is None:
            raise CalculationError("Manual intermediate pressure requires a saturation temperature")
        T_sat = celsius(T_sat_C)
        P = fluid.saturation_pressure(T_sat, 0.5)

    check_intermediate_pressure(P, Pe, Pc)
    return P, T_sat


def check_intermediate_pressure(P: float, Pe: float, Pc: float) -> None:
    if P <= Pe or P >= Pc:
        raise CalculationError(
            f"Invalid intermediate pressure {P / 1e5:.2f} bar: must lie between "
            f"{Pe / 1e5:.2f} and {Pc / 1e5:.2f} bar"
        )
