"""Oil-injected compressor stage model.

A stage compresses its inlet state to a target pressure with an
isentropic efficiency. In an oil-injected screw most of the compression
heat leaves with the oil, so the gas discharge temperature is an input
(measured or estimated) and the oil cooler duty follows from the stage
energy balance:

    Q_oil = W_shaft - (ṁ_out · h(T_discharge, P_out) - Σ ṁ_in · h_in)

If that balance comes out negative the estimate is too hot for the
supplied work; the oil load is then zero and the discharge state follows
from the adiabatic balance instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from compeff_pro.cycle.components.base import CycleComponent, FluidState
from compeff_pro.utils.validation import CalculationError

if TYPE_CHECKING:
    from compeff_pro.core.fluids import Fluid

logger = logging.getLogger(__name__)


@dataclass
class CompressionResult:
    """Compressor stage analysis result."""

    inlet: FluidState
    outlet: FluidState
    h_isentropic: float = 0.0  # J/kg at outlet pressure
    ideal_power: float = 0.0  # W
    shaft_power: float = 0.0  # W
    efficiency: float = 0.0

    @property
    def pressure_ratio(self) -> float:
        return self.outlet.pressure / self.inlet.pressure


@dataclass
class OilCoolingResult:
    """Discharge state of an oil-cooled stage."""

    h_discharge: float  # J/kg
    T_discharge: float  # K
    oil_load: float = 0.0  # W
    corrected: bool = False  # estimate was infeasible and replaced


def apply_oil_cooling(
    fluid: Fluid,
    P_out: float,
    mass_flow_out: float,
    enthalpy_flow_in: float,
    work: float,
    T_estimate: float | None = None,
) -> OilCoolingResult:
    """Split stage work between gas enthalpy rise and oil cooler duty.

    Args:
        fluid: Working fluid.
        P_out: Discharge pressure [Pa].
        mass_flow_out: Gas mass flow leaving the stage [kg/s].
        enthalpy_flow_in: Σ ṁ·h of every gas stream entering the stage [W].
        work: Shaft work absorbed by the stage [W].
        T_estimate: Measured or estimated discharge temperature [K].
            Without it the stage is treated as adiabatic.

    Returns:
        OilCoolingResult. ``corrected`` is set when the estimate implied a
        negative oil load (or a discharge below the inlet state) and the
        adiabatic discharge was used instead.
    """
    if mass_flow_out <= 0:
        raise CalculationError(f"Stage mass flow must be positive, got {mass_flow_out}")

    h_adiabatic = (enthalpy_flow_in + work) / mass_flow_out
    if T_estimate is None:
        return OilCoolingResult(
            h_discharge=h_adiabatic,
            T_discharge=fluid.temperature_ph(P_out, h_adiabatic),
        )

    h_target = fluid.enthalpy(T_estimate, P_out)
    h_in_mixed = enthalpy_flow_in / mass_flow_out
    oil_load = work - (mass_flow_out * h_target - enthalpy_flow_in)

    if oil_load < 0 or h_target <= h_in_mixed:
        T_adiabatic = fluid.temperature_ph(P_out, h_adiabatic)
        logger.warning(
            "Discharge estimate %.1f K not reachable (adiabatic discharge %.1f K); oil load set to 0",
            T_estimate,
            T_adiabatic,
        )
        return OilCoolingResult(
            h_discharge=h_adiabatic,
            T_discharge=T_adiabatic,
            oil_load=0.0,
            corrected=True,
        )

    return OilCoolingResult(h_discharge=h_target, T_discharge=T_estimate, oil_load=oil_load)


class CompressorStage(CycleComponent):
    """Single compression stage with isentropic efficiency.

        h2s = h(P_out, s_in)
        W_ideal = ṁ · (h2s - h_in)
        W_shaft = W_ideal / η_s
        h_out = h_in + (h2s - h_in) / η_s

    Args:
        fluid: Working fluid.
        name: Component name.
        eta_s: Isentropic efficiency (0–1).
    """

    component_type = "compressor"

    def __init__(self, fluid: Fluid, name: str = "compressor", eta_s: float = 0.75):
        if not 0.0 < eta_s <= 1.0:
            raise CalculationError(f"Isentropic efficiency must be in (0, 1], got {eta_s}")
        self.fluid = fluid
        self.name = name
        self._eta_s = eta_s
        self._result: CompressionResult | None = None
        self._oil: OilCoolingResult | None = None

    @property
    def result(self) -> CompressionResult | None:
        return self._result

    def compute(self, inlet: FluidState, outlet_pressure: float = 0.0, **kwargs: Any) -> FluidState:
        """Compress *inlet* to *outlet_pressure* [Pa].

        Returns:
            Outlet state at the efficiency-corrected enthalpy (before any
            oil cooling).
        """
        if outlet_pressure <= inlet.pressure:
            raise CalculationError(
                f"{self.name}: outlet pressure {outlet_pressure:.0f} Pa must exceed "
                f"inlet pressure {inlet.pressure:.0f} Pa"
            )
        h_in = inlet.enthalpy
        h2s = self.fluid.enthalpy_ps(outlet_pressure, inlet.entropy)
        dh_s = h2s - h_in
        h_out = h_in + dh_s / self._eta_s

        outlet = FluidState.from_ph(self.fluid, outlet_pressure, h_out, inlet.mass_flow)
        ideal = inlet.mass_flow * dh_s
        self._result = CompressionResult(
            inlet=inlet,
            outlet=outlet,
            h_isentropic=h2s,
            ideal_power=ideal,
            shaft_power=ideal / self._eta_s,
            efficiency=self._eta_s,
        )
        self._oil = None
        return outlet

    def apply_discharge_estimate(self, T_estimate: float | None) -> OilCoolingResult:
        """Apply oil cooling to the last computed compression."""
        if self._result is None:
            raise RuntimeError(f"{self.name}: compute() must run before apply_discharge_estimate()")
        r = self._result
        self._oil = apply_oil_cooling(
            self.fluid,
            r.outlet.pressure,
            r.inlet.mass_flow,
            r.inlet.mass_flow * r.inlet.enthalpy,
            r.shaft_power,
            T_estimate,
        )
        return self._oil

    def power(self) -> float:
        """Shaft power consumed [W]."""
        return self._result.shaft_power if self._result else 0.0

    def summary(self) -> dict[str, Any]:
        d = super().summary()
        if self._result:
            d["pressure_ratio"] = self._result.pressure_ratio
            d["efficiency"] = self._result.efficiency
            d["ideal_power_W"] = self._result.ideal_power
        if self._oil:
            d["oil_load_W"] = self._oil.oil_load
            d["discharge_corrected"] = self._oil.corrected
        return d
