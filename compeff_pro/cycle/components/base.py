"""Base classes for cycle components.

Defines the common interface for refrigeration cycle components
(compressor stages, economizers, valves, heat exchangers) and the
state-point record used in result tables and diagrams.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from compeff_pro.utils.constants import J_TO_KJ, PA_TO_BAR, T_CELSIUS_OFFSET

if TYPE_CHECKING:
    from compeff_pro.core.fluids import Fluid


@dataclass
class FluidState:
    """Thermodynamic state of a fluid at a point in the cycle.

    All properties in SI units.
    """

    pressure: float = 0.0  # Pa
    temperature: float = 0.0  # K
    mass_flow: float = 0.0  # kg/s
    density: float = 0.0  # kg/m³
    enthalpy: float = 0.0  # J/kg
    entropy: float = 0.0  # J/(kg·K)
    quality: float = -1.0  # vapour quality (-1 = subcooled/superheated)
    fluid_name: str = ""

    @property
    def is_two_phase(self) -> bool:
        return 0.0 <= self.quality <= 1.0

    @property
    def temperature_C(self) -> float:
        return self.temperature - T_CELSIUS_OFFSET

    @property
    def pressure_bar(self) -> float:
        return self.pressure * PA_TO_BAR

    @property
    def enthalpy_kJ(self) -> float:
        return self.enthalpy * J_TO_KJ

    @classmethod
    def from_ph(cls, fluid: Fluid, P: float, h: float, mass_flow: float = 0.0) -> FluidState:
        """Build a state from pressure [Pa] and enthalpy [J/kg]."""
        p = fluid.props_at_PH(P, h)
        return cls(
            pressure=P,
            temperature=p["T"],
            mass_flow=mass_flow,
            density=p["rho"],
            enthalpy=h,
            entropy=p["s"],
            quality=p["Q"],
            fluid_name=fluid.name,
        )

    @classmethod
    def from_tp(cls, fluid: Fluid, T: float, P: float, mass_flow: float = 0.0) -> FluidState:
        """Build a single-phase state from temperature [K] and pressure [Pa]."""
        p = fluid.props_at_TP(T, P)
        return cls(
            pressure=P,
            temperature=T,
            mass_flow=mass_flow,
            density=p["rho"],
            enthalpy=p["h"],
            entropy=p["s"],
            quality=p["Q"],
            fluid_name=fluid.name,
        )

    def with_flow(self, mass_flow: float) -> FluidState:
        """Copy of this state carrying a different mass flow."""
        return FluidState(
            pressure=self.pressure,
            temperature=self.temperature,
            mass_flow=mass_flow,
            density=self.density,
            enthalpy=self.enthalpy,
            entropy=self.entropy,
            quality=self.quality,
            fluid_name=self.fluid_name,
        )

    def to_point(self, name: str, description: str = "") -> StatePoint:
        return StatePoint(
            name=name,
            description=description,
            T_C=self.temperature_C,
            P_bar=self.pressure_bar,
            h_kJ=self.enthalpy_kJ,
            s_kJ=self.entropy * J_TO_KJ,
            m_dot=self.mass_flow,
        )


@dataclass
class StatePoint:
    """One row of a cycle state-point table, in display units."""

    name: str
    description: str
    T_C: float
    P_bar: float
    h_kJ: float
    s_kJ: float = float("nan")  # kJ/(kg·K)
    m_dot: float = 0.0  # kg/s

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "T_C": self.T_C,
            "P_bar": self.P_bar,
            "h_kJ": self.h_kJ,
            "s_kJ": self.s_kJ,
            "m_dot": self.m_dot,
        }


class CycleComponent(ABC):
    """Abstract base class for a cycle component.

    Every component takes an inlet FluidState and produces an outlet
    FluidState, along with power and performance metrics.
    """

    name: str = ""
    component_type: str = ""

    @abstractmethod
    def compute(self, inlet: FluidState, **kwargs: Any) -> FluidState:
        """Run the component model.

        Args:
            inlet: Inlet fluid state.
            **kwargs: Component-specific parameters.

        Returns:
            Outlet fluid state.
        """
        ...

    @abstractmethod
    def power(self) -> float:
        """Net power [W] consumed (positive) or produced (negative)."""
        ...

    def summary(self) -> dict[str, Any]:
        """Return a summary dictionary of the component state."""
        return {
            "name": self.name,
            "type": self.component_type,
            "power_W": self.power(),
        }
