"""Economizer component models.

An economizer splits liquid from the condenser at an intermediate
pressure: a side stream is throttled, evaporated and injected into the
compressor, while the main liquid stream leaves colder so the evaporator
gains capacity.

Two arrangements are modelled:

- :class:`FlashTank`: open flash vessel; the main liquid leaves saturated
  at the intermediate pressure.
- :class:`SubcoolerEconomizer`: closed plate exchanger; the main liquid
  is subcooled by the evaporating side stream and stays at its own
  pressure.

Point naming follows the usual economizer diagram: 7 is the throttled
side stream entering the exchanger, 6 the injection vapour and 5 the main
liquid outlet.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from compeff_pro.cycle.components.base import CycleComponent, FluidState
from compeff_pro.utils.validation import CalculationError

if TYPE_CHECKING:
    from compeff_pro.core.fluids import Fluid

logger = logging.getLogger(__name__)


class EconomizerType(Enum):
    """Economizer arrangement."""

    FLASH_TANK = "flash_tank"
    SUBCOOLER = "subcooler"


def mix_enthalpy(m_a: float, h_a: float, m_b: float, h_b: float) -> float:
    """Adiabatic mixing of two streams; returns the mixed enthalpy [J/kg]."""
    m = m_a + m_b
    if m <= 0:
        raise CalculationError("Cannot mix streams with zero total mass flow")
    return (m_a * h_a + m_b * h_b) / m


@dataclass
class EconomizerResult:
    """Economizer analysis result."""

    pressure: float  # Pa, injection side
    T_saturation: float  # K
    liquid_in: FluidState
    liquid_out: FluidState  # point 5
    injection: FluidState  # point 6
    h_throttled: float  # J/kg, point 7
    main_flow: float = 0.0  # kg/s
    injection_flow: float = 0.0  # kg/s
    flash_quality: float = -1.0
    duty: float = 0.0  # W transferred from main liquid to side stream

    @property
    def total_flow(self) -> float:
        return self.main_flow + self.injection_flow

    @property
    def is_active(self) -> bool:
        return self.injection_flow > 0


class _Economizer(CycleComponent):
    """Shared plumbing for economizer models."""

    component_type = "economizer"

    def __init__(self, fluid: Fluid, name: str, injection_superheat: float, strict: bool):
        self.fluid = fluid
        self.name = name
        self._superheat = injection_superheat
        self._strict = strict
        self._result: EconomizerResult | None = None

    @property
    def result(self) -> EconomizerResult | None:
        return self._result

    def _saturation(self, pressure: float, T_sat: float | None) -> float:
        return T_sat if T_sat is not None else self.fluid.saturation_temperature(pressure, 0.0)

    def _injection_enthalpy(self, T_sat: float, pressure: float) -> float:
        if self._superheat > 0:
            return self.fluid.enthalpy(T_sat + self._superheat, pressure)
        return self.fluid.saturated_enthalpy(T_sat, 1.0)

    def _reject(self, message: str) -> None:
        if self._strict:
            raise CalculationError(f"{self.name}: {message}")
        logger.warning("%s: %s; no injection", self.name, message)

    def power(self) -> float:
        """Economizers consume no shaft power."""
        return 0.0

    def summary(self) -> dict[str, Any]:
        d = super().summary()
        if self._result:
            d["pressure_bar"] = self._result.pressure / 1e5
            d["injection_flow_kg_s"] = self._result.injection_flow
            d["duty_W"] = self._result.duty
        return d


class FlashTank(_Economizer):
    """Open flash economizer.

    Condenser liquid (h_in) throttles into the vessel; the flash fraction

        x = (h_in - h_l) / (h_v - h_l)

    is drawn off as injection vapour, so feeding ṁ of saturated liquid to
    the evaporator requires ṁ_inj = ṁ · x / (1 - x).

    Args:
        fluid: Working fluid.
        name: Component name.
        injection_superheat: Superheat [K] of the injected vapour; 0 for
            saturated vapour. The flash fraction always uses saturated
            vapour.
        strict: Raise instead of disabling injection when the inlet is
            not two-phase after throttling.
    """

    def __init__(
        self,
        fluid: Fluid,
        name: str = "flash_tank",
        injection_superheat: float = 0.0,
        strict: bool = False,
    ):
        super().__init__(fluid, name, injection_superheat, strict)

    def compute(
        self,
        inlet: FluidState,
        pressure: float = 0.0,
        T_sat: float | None = None,
        **kwargs: Any,
    ) -> FluidState:
        """Flash *inlet* liquid at *pressure* [Pa].

        ``inlet.mass_flow`` is the liquid flow leaving towards the
        evaporator. Returns the saturated liquid outlet (point 5).
        """
        T_sat = self._saturation(pressure, T_sat)
        h_l = self.fluid.saturated_enthalpy(T_sat, 0.0)
        h_v = self.fluid.saturated_enthalpy(T_sat, 1.0)
        x = (inlet.enthalpy - h_l) / (h_v - h_l)

        m = inlet.mass_flow
        m_inj = 0.0
        if 0.0 < x < 1.0:
            m_inj = m * x / (1.0 - x)
        else:
            self._reject(f"flash quality {x:.3f} outside (0, 1)")

        h_inj = self._injection_enthalpy(T_sat, pressure)
        liquid_out = FluidState.from_ph(self.fluid, pressure, h_l, m)
        injection = FluidState.from_ph(self.fluid, pressure, h_inj, m_inj)

        self._result = EconomizerResult(
            pressure=pressure,
            T_saturation=T_sat,
            liquid_in=inlet,
            liquid_out=liquid_out,
            injection=injection,
            h_throttled=inlet.enthalpy,
            main_flow=m,
            injection_flow=m_inj,
            flash_quality=x,
            duty=m_inj * (h_v - inlet.enthalpy) if m_inj > 0 else 0.0,
        )
        return liquid_out


class SubcoolerEconomizer(_Economizer):
    """Closed (plate) subcooler economizer.

    The main liquid leaves at ``T_sat + approach`` on its own pressure
    side; the side stream throttled from the inlet (h7 = h_in) leaves as
    vapour at ``T_sat + superheat``. The energy balance sets the injection
    flow:

        ṁ_inj = ṁ · (h_in - h5) / (h6 - h7)

    Args:
        fluid: Working fluid.
        name: Component name.
        injection_superheat: Superheat of the injected vapour [K].
        approach: Liquid outlet temperature offset from the intermediate
            saturation temperature [K]; negative values subcool below it.
        strict: Raise CalculationError instead of disabling injection
            when either side of the balance is not positive.
    """

    def __init__(
        self,
        fluid: Fluid,
        name: str = "subcooler",
        injection_superheat: float = 5.0,
        approach: float = 5.0,
        strict: bool = False,
    ):
        super().__init__(fluid, name, injection_superheat, strict)
        self._approach = approach

    def compute(
        self,
        inlet: FluidState,
        pressure: float = 0.0,
        liquid_pressure: float | None = None,
        T_sat: float | None = None,
        **kwargs: Any,
    ) -> FluidState:
        """Subcool *inlet* liquid against a side stream evaporating at *pressure* [Pa].

        Args:
            inlet: Main liquid; ``mass_flow`` is the flow being subcooled.
            pressure: Side-stream (injection) pressure [Pa].
            liquid_pressure: Pressure of the main liquid outlet [Pa];
                defaults to the inlet pressure.
            T_sat: Saturation temperature at *pressure* if already known.

        Returns:
            Subcooled liquid outlet (point 5).
        """
        T_sat = self._saturation(pressure, T_sat)
        P_liq = liquid_pressure if liquid_pressure is not None else inlet.pressure

        h7 = inlet.enthalpy
        h6 = self._injection_enthalpy(T_sat, pressure)
        h5 = self.fluid.enthalpy(T_sat + self._approach, P_liq)

        m = inlet.mass_flow
        dh_main = inlet.enthalpy - h5
        dh_inj = h6 - h7
        m_inj = 0.0
        if dh_main > 0 and dh_inj > 0:
            m_inj = m * dh_main / dh_inj
        else:
            self._reject(
                f"invalid energy balance (main Δh = {dh_main / 1e3:.2f} kJ/kg, "
                f"injection Δh = {dh_inj / 1e3:.2f} kJ/kg)"
            )

        liquid_out = FluidState.from_ph(self.fluid, P_liq, h5, m)
        injection = FluidState.from_ph(self.fluid, pressure, h6, m_inj)

        self._result = EconomizerResult(
            pressure=pressure,
            T_saturation=T_sat,
            liquid_in=inlet,
            liquid_out=liquid_out,
            injection=injection,
            h_throttled=h7,
            main_flow=m,
            injection_flow=m_inj,
            duty=m * dh_main if m_inj > 0 else 0.0,
        )
        return liquid_out


def make_economizer(
    kind: EconomizerType | str,
    fluid: Fluid,
    name: str,
    injection_superheat: float = 5.0,
    approach: float = 5.0,
    strict: bool = False,
) -> FlashTank | SubcoolerEconomizer:
    """Construct the economizer model for *kind*."""
    kind = EconomizerType(kind)
    if kind == EconomizerType.FLASH_TANK:
        return FlashTank(fluid, name, injection_superheat=injection_superheat, strict=strict)
    return SubcoolerEconomizer(
        fluid, name, injection_superheat=injection_superheat, approach=approach, strict=strict
    )
