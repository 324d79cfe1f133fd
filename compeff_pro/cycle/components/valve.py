"""Expansion valve component model.

Models the isenthalpic throttling of refrigerant liquid down to the
evaporating (or intermediate) pressure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from compeff_pro.cycle.components.base import CycleComponent, FluidState
from compeff_pro.utils.validation import CalculationError

if TYPE_CHECKING:
    from compeff_pro.core.fluids import Fluid


@dataclass
class ValveResult:
    """Valve analysis result."""

    inlet: FluidState
    outlet: FluidState
    pressure_drop: float = 0.0  # Pa


class ExpansionValve(CycleComponent):
    """Isenthalpic expansion valve.

    Args:
        fluid: Working fluid.
        name: Component name.
    """

    component_type = "valve"

    def __init__(self, fluid: Fluid, name: str = "expansion_valve"):
        self.fluid = fluid
        self.name = name
        self._result: ValveResult | None = None

    def compute(self, inlet: FluidState, outlet_pressure: float = 0.0, **kwargs: Any) -> FluidState:
        """Throttle *inlet* to *outlet_pressure* [Pa] at constant enthalpy."""
        if outlet_pressure > inlet.pressure:
            raise CalculationError(
                f"{self.name}: cannot throttle from {inlet.pressure:.0f} Pa up to {outlet_pressure:.0f} Pa"
            )
        outlet = FluidState.from_ph(self.fluid, outlet_pressure, inlet.enthalpy, inlet.mass_flow)
        self._result = ValveResult(
            inlet=inlet,
            outlet=outlet,
            pressure_drop=inlet.pressure - outlet_pressure,
        )
        return outlet

    def power(self) -> float:
        """Valves consume no shaft power."""
        return 0.0

    def summary(self) -> dict[str, Any]:
        d = super().summary()
        if self._result:
            d["pressure_drop_bar"] = self._result.pressure_drop / 1e5
            d["outlet_quality"] = self._result.outlet.quality
        return d
