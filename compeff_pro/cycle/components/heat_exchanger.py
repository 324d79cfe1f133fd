"""Heat exchanger component models.

- :class:`SuctionLineHeatExchanger`: liquid-to-suction exchanger using the
  effectiveness method on the refrigerant's own flow.
- :class:`WaterCircuit`: hot-water side of a heat pump, routing one
  water stream in series through the subcooler, oil cooler, condenser
  and desuperheater and checking each exchanger's approach temperature.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from compeff_pro.cycle.components.base import CycleComponent, FluidState
from compeff_pro.utils.constants import CP_WATER

if TYPE_CHECKING:
    from compeff_pro.core.fluids import Fluid

logger = logging.getLogger(__name__)


@dataclass
class SuctionHXResult:
    """Suction-line heat exchanger result."""

    liquid_in: FluidState
    liquid_out: FluidState
    vapour_in: FluidState
    vapour_out: FluidState
    heat_transfer: float = 0.0  # W
    effectiveness: float = 0.0


class SuctionLineHeatExchanger(CycleComponent):
    """Liquid-line / suction-line heat exchanger (SLHX).

    Both sides carry the same refrigerant flow ṁ, so

        C_min = ṁ · min(cp_liquid, cp_vapour)
        Q = ε · C_min · (T_liquid_in - T_vapour_in)

    The liquid is subcooled by Q/ṁ and the suction gas superheated by the
    same enthalpy.

    Args:
        fluid: Working fluid.
        name: Component name.
        effectiveness: Exchanger effectiveness (0–1).
    """

    component_type = "heat_exchanger"

    def __init__(self, fluid: Fluid, name: str = "slhx", effectiveness: float = 0.5):
        self.fluid = fluid
        self.name = name
        self._effectiveness = effectiveness
        self._result: SuctionHXResult | None = None

    @property
    def result(self) -> SuctionHXResult | None:
        return self._result

    def compute(
        self,
        inlet: FluidState,
        vapour_inlet: FluidState | None = None,
        **kwargs: Any,
    ) -> FluidState:
        """Exchange heat between liquid *inlet* and *vapour_inlet*.

        Returns:
            Liquid outlet state. The superheated suction state is
            available as ``self.vapour_outlet``.
        """
        if vapour_inlet is None:
            raise ValueError(f"{self.name}: vapour_inlet is required")

        m = inlet.mass_flow
        cp_liq = self.fluid.cp_ph(inlet.pressure, inlet.enthalpy)
        cp_vap = self.fluid.cp_ph(vapour_inlet.pressure, vapour_inlet.enthalpy)
        C_min = m * min(cp_liq, cp_vap)

        Q_max = C_min * (inlet.temperature - vapour_inlet.temperature)
        Q = self._effectiveness * max(Q_max, 0.0)
        dh = Q / m if m > 0 else 0.0

        liquid_out = FluidState.from_ph(self.fluid, inlet.pressure, inlet.enthalpy - dh, m)
        vapour_out = FluidState.from_ph(
            self.fluid, vapour_inlet.pressure, vapour_inlet.enthalpy + dh, vapour_inlet.mass_flow
        )

        self._result = SuctionHXResult(
            liquid_in=inlet,
            liquid_out=liquid_out,
            vapour_in=vapour_inlet,
            vapour_out=vapour_out,
            heat_transfer=Q,
            effectiveness=self._effectiveness,
        )
        return liquid_out

    @property
    def vapour_outlet(self) -> FluidState | None:
        """Suction-side outlet state (available after compute)."""
        return self._result.vapour_out if self._result else None

    def power(self) -> float:
        """Heat exchangers consume no shaft power."""
        return 0.0

    def summary(self) -> dict[str, Any]:
        d = super().summary()
        if self._result:
            d["heat_transfer_kW"] = self._result.heat_transfer / 1e3
            d["effectiveness"] = self._result.effectiveness
        return d


# --- Heat-pump water circuit ---

# Water flows through the exchangers in this order
WATER_SEQUENCE = ("subcooler", "oil_cooler", "condenser", "desuperheater")


@dataclass
class WaterExchanger:
    """One refrigerant-to-water exchanger on the hot-water circuit.

    ``reference_temperature`` is the refrigerant-side temperature the
    approach is measured against [°C]: the refrigerant outlet for the
    subcooler, the estimated oil outlet for the oil cooler, the gas
    outlet for the desuperheater and the condensing temperature for the
    condenser (compared with the water outlet).
    """

    name: str
    enabled: bool = False
    approach: float = 5.0  # K, required
    duty: float = 0.0  # W
    reference_temperature: float = 0.0  # °C

    T_water_in: float = 0.0  # °C
    T_water_out: float = 0.0  # °C
    approach_actual: float = 0.0  # K
    approach_satisfied: bool = True

    @property
    def active(self) -> bool:
        return self.enabled and self.duty > 0


@dataclass
class WaterCircuitResult:
    """Hot-water side of a heat pump."""

    T_water_in: float  # °C
    T_water_out: float  # °C
    mass_flow: float = 0.0  # kg/s
    total_duty: float = 0.0  # W
    exchangers: list[WaterExchanger] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


class WaterCircuit:
    """Series water circuit through the heat-pump exchangers.

    The water flow follows from the total duty and the requested water
    temperature rise:

        ṁ_w = ΣQ / (cp_w · (T_out - T_in))

    Water temperatures are then marched exchanger by exchanger; the last
    active exchanger delivers exactly the requested outlet temperature.

    Args:
        T_water_in: Water supply temperature [°C].
        T_water_out: Water delivery temperature [°C].
        cp_water: Water specific heat [J/(kg·K)].
    """

    def __init__(self, T_water_in: float = 40.0, T_water_out: float = 70.0, cp_water: float = CP_WATER):
        self.T_water_in = T_water_in
        self.T_water_out = T_water_out
        self.cp_water = cp_water

    def solve(self, exchangers: list[WaterExchanger]) -> WaterCircuitResult:
        """Distribute the water temperature rise over *exchangers*."""
        order = {name: i for i, name in enumerate(WATER_SEQUENCE)}
        ordered = sorted(exchangers, key=lambda x: order.get(x.name, len(order)))

        result = WaterCircuitResult(T_water_in=self.T_water_in, T_water_out=self.T_water_out)
        result.total_duty = sum(x.duty for x in ordered if x.enabled)

        dT_total = self.T_water_out - self.T_water_in
        if dT_total > 0 and result.total_duty > 0:
            result.mass_flow = result.total_duty / (self.cp_water * dT_total)
        elif result.total_duty > 0:
            msg = "Water outlet temperature must be higher than inlet temperature"
            logger.warning(msg)
            result.warnings.append(msg)

        active = [x for x in ordered if x.active]
        last = active[-1] if active else None

        T_current = self.T_water_in
        for x in ordered:
            x.T_water_in = T_current
            if not x.active:
                x.T_water_out = T_current
                continue

            if x is last:
                x.T_water_out = self.T_water_out
            elif result.mass_flow > 0:
                x.T_water_out = T_current + x.duty / (result.mass_flow * self.cp_water)
            else:
                x.T_water_out = T_current

            self._check_approach(x, result)
            T_current = x.T_water_out
            result.exchangers.append(x)

        return result

    def _check_approach(self, x: WaterExchanger, result: WaterCircuitResult) -> None:
        if x.name == "condenser":
            # Closest approach at the water outlet for a condenser
            x.approach_actual = x.reference_temperature - x.T_water_out
        else:
            x.approach_actual = x.reference_temperature - x.T_water_in
        x.approach_satisfied = x.approach_actual >= x.approach
        if not x.approach_satisfied:
            msg = (
                f"{x.name.replace('_', ' ').capitalize()}: approach {x.approach_actual:.1f} K "
                f"is below required {x.approach:.1f} K"
            )
            logger.warning(msg)
            result.warnings.append(msg)
