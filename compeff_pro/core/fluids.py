"""Fluid property interface wrapping CoolProp.

Provides a cached interface to refrigerant and gas properties with
consistent error handling, plus the bundled fluid catalogue used to offer
working fluids per calculation mode.
"""

from __future__ import annotations

import json
import logging
import math
from functools import lru_cache
from pathlib import Path
from typing import Any

import CoolProp.CoolProp as CP
from CoolProp.CoolProp import PropsSI

from compeff_pro.utils.constants import PA_TO_BAR, R_UNIVERSAL, T_CELSIUS_OFFSET

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"
_FLUID_DB_PATH = _DATA_DIR / "fluids.json"


class FluidPropertyError(Exception):
    """Raised when a fluid property calculation fails."""


class Fluid:
    """Interface to thermodynamic properties of a single fluid.

    Bundled state lookups go through CoolProp's low-level AbstractState;
    scalar lookups use PropsSI. Every failure surfaces as
    :class:`FluidPropertyError`.

    Args:
        name: CoolProp fluid name (e.g. "Ammonia", "R134a", "Nitrogen").
        backend: CoolProp backend string.  ``"HEOS"`` for built-in,
                 ``"REFPROP"`` if RefProp is installed.
    """

    def __init__(self, name: str, backend: str = "HEOS"):
        self.name = name
        self.backend = backend
        try:
            self._state = CP.AbstractState(backend, name)
        except Exception as exc:
            raise FluidPropertyError(
                f"Cannot create fluid '{name}' with backend '{backend}': {exc}"
            ) from exc

        # Cache critical point
        self.T_critical = self._state.T_critical()
        self.P_critical = self._state.p_critical()
        self.T_min = self._state.Tmin()
        self.molar_mass = self._state.molar_mass()  # kg/mol

    @property
    def gas_constant(self) -> float:
        """Specific gas constant [J/(kg·K)]."""
        return R_UNIVERSAL / self.molar_mass

    @property
    def _props_name(self) -> str:
        if self.backend == "HEOS":
            return self.name
        return f"{self.backend}::{self.name}"

    # --- Core property access ---

    def _update(self, input_pair: int, val1: float, val2: float) -> None:
        """Update the internal state; raise FluidPropertyError on failure."""
        try:
            self._state.update(input_pair, val1, val2)
        except Exception as exc:
            raise FluidPropertyError(f"State update failed for {self.name}: {exc}") from exc

    def _props(self, output: str, key1: str, val1: float, key2: str, val2: float) -> float:
        try:
            value = PropsSI(output, key1, val1, key2, val2, self._props_name)
        except Exception as exc:
            raise FluidPropertyError(
                f"{output}({key1}={val1:g}, {key2}={val2:g}) failed for {self.name}: {exc}"
            ) from exc
        if not math.isfinite(value):
            raise FluidPropertyError(
                f"{output}({key1}={val1:g}, {key2}={val2:g}) is not finite for {self.name}"
            )
        return value

    def props_at_TP(self, T: float, P: float) -> dict[str, float]:
        """Return a property bundle at given temperature [K] and pressure [Pa]."""
        self._update(CP.PT_INPUTS, P, T)
        return self._extract_props()

    def props_at_PH(self, P: float, H: float) -> dict[str, float]:
        """Return a property bundle at given pressure [Pa] and enthalpy [J/kg]."""
        self._update(CP.HmassP_INPUTS, H, P)
        return self._extract_props()

    def props_at_PS(self, P: float, S: float) -> dict[str, float]:
        """Return a property bundle at given pressure [Pa] and entropy [J/(kg·K)]."""
        self._update(CP.PSmass_INPUTS, P, S)
        return self._extract_props()

    def _extract_props(self) -> dict[str, float]:
        s = self._state
        two_phase = s.phase() == CP.iphase_twophase
        return {
            "T": s.T(),
            "P": s.p(),
            "rho": s.rhomass(),
            "h": s.hmass(),
            "s": s.smass(),
            "cp": s.cpmass() if not two_phase else float("nan"),
            "Q": s.Q() if two_phase else -1.0,
        }

    # --- Single-phase lookups ---

    def enthalpy(self, T: float, P: float) -> float:
        """Mass-specific enthalpy [J/kg] at T [K], P [Pa]."""
        return self._props("H", "T", T, "P", P)

    def entropy(self, T: float, P: float) -> float:
        """Mass-specific entropy [J/(kg·K)] at T [K], P [Pa]."""
        return self._props("S", "T", T, "P", P)

    def density(self, T: float, P: float) -> float:
        """Density [kg/m³] at T [K], P [Pa]."""
        return self._props("D", "T", T, "P", P)

    def enthalpy_ps(self, P: float, S: float) -> float:
        """Enthalpy [J/kg] at P [Pa], S [J/(kg·K)]; the isentropic end point."""
        return self._props("H", "P", P, "S", S)

    def entropy_ph(self, P: float, H: float) -> float:
        return self._props("S", "P", P, "H", H)

    def temperature_ph(self, P: float, H: float) -> float:
        return self._props("T", "P", P, "H", H)

    def density_ph(self, P: float, H: float) -> float:
        return self._props("D", "P", P, "H", H)

    def cp_ph(self, P: float, H: float) -> float:
        """Isobaric specific heat [J/(kg·K)] at P [Pa], H [J/kg]."""
        return self._props("C", "P", P, "H", H)

    # --- Saturation ---

    def saturation_pressure(self, T: float, Q: float = 1.0) -> float:
        """Saturation pressure [Pa] at temperature T [K].

        ``Q`` matters for zeotropic blends, where dew (Q=1) and bubble (Q=0)
        pressures differ.
        """
        return self._props("P", "T", T, "Q", Q)

    def saturation_temperature(self, P: float, Q: float = 0.0) -> float:
        """Saturation temperature [K] at pressure P [Pa]."""
        return self._props("T", "P", P, "Q", Q)

    def saturated_enthalpy(self, T: float, Q: float) -> float:
        """Enthalpy [J/kg] of saturated liquid (Q=0) or vapour (Q=1) at T [K]."""
        return self._props("H", "T", T, "Q", Q)

    def saturated_enthalpy_p(self, P: float, Q: float) -> float:
        return self._props("H", "P", P, "Q", Q)

    def saturated_entropy(self, T: float, Q: float) -> float:
        return self._props("S", "T", T, "Q", Q)

    def quality(self, P: float, H: float) -> float:
        """Vapour quality at given P [Pa] and H [J/kg]. Returns -1 if single-phase."""
        try:
            q = PropsSI("Q", "P", P, "H", H, self._props_name)
        except ValueError:
            return -1.0
        return q if 0.0 <= q <= 1.0 else -1.0

    def __repr__(self) -> str:
        return f"Fluid('{self.name}', backend='{self.backend}')"


# --- Fluid catalogue ---


@lru_cache(maxsize=1)
def _load_fluid_db() -> dict[str, Any]:
    """Load the fluid catalogue JSON file."""
    if not _FLUID_DB_PATH.exists():
        logger.warning("Fluid catalogue not found at %s", _FLUID_DB_PATH)
        return {}
    with open(_FLUID_DB_PATH, encoding="utf-8") as f:
        return json.load(f)


def list_fluids(mode: str | None = None) -> list[str]:
    """Return catalogue fluid names, optionally only those offered in *mode* (e.g. "m3")."""
    db = _load_fluid_db()
    if mode is None:
        return list(db.keys())
    return [name for name, info in db.items() if mode in info.get("modes", [])]


def get_fluid_info(name: str) -> dict[str, Any]:
    """Get fluid metadata from the catalogue.

    Args:
        name: Fluid name (case-insensitive lookup).

    Returns:
        Dictionary with fluid metadata.

    Raises:
        KeyError: If the fluid is not in the catalogue.
    """
    db = _load_fluid_db()
    for key, val in db.items():
        if key.lower() == name.lower():
            return val
    raise KeyError(f"Fluid '{name}' not found. Available: {list(db.keys())}")


@lru_cache(maxsize=32)
def get_fluid(name: str, backend: str = "HEOS") -> Fluid:
    """Fluid for a catalogue name or a raw CoolProp fluid name.

    Catalogue names ("R717") are mapped to their CoolProp identifier
    ("Ammonia"); anything else is handed to CoolProp unchanged. Instances
    are cached per (name, backend) and shared between callers.
    """
    try:
        coolprop_name = get_fluid_info(name).get("coolprop_name", name)
    except KeyError:
        logger.debug("'%s' not in catalogue, using it as a CoolProp name", name)
        coolprop_name = name
    return Fluid(coolprop_name, backend=backend)


def fluid_summary(name: str) -> dict[str, float]:
    """Key reference data for a fluid in engineering units.

    Returns:
        Dict with critical temperature [°C], critical pressure [bar],
        molar mass [g/mol] and normal boiling point [°C] (NaN if the fluid
        is supercritical at 1 atm).
    """
    fluid = get_fluid(name)
    try:
        t_nbp = fluid.saturation_temperature(101325.0, 0.0) - T_CELSIUS_OFFSET
    except FluidPropertyError:
        t_nbp = float("nan")
    return {
        "T_critical_C": fluid.T_critical - T_CELSIUS_OFFSET,
        "P_critical_bar": fluid.P_critical * PA_TO_BAR,
        "molar_mass_g_mol": fluid.molar_mass * 1000.0,
        "T_boiling_C": t_nbp,
    }
