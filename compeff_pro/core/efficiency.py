"""Empirical efficiency correlations for oil-injected screw compressors.

Used to pre-fill volumetric and isentropic efficiencies when no
manufacturer data is at hand. Two correlations are provided:

- :func:`empirical_efficiencies`: generic oil-injected screw, a function of
  pressure ratio only.
- :func:`screw_efficiency`: ammonia screw with a fixed built-in volume
  ratio, penalising under- and over-compression against the internal
  pressure ratio ``Vi^k``.

All values are clamped to physically sensible bands and rounded to three
decimals, as they are meant to be shown and edited by the user.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from compeff_pro.core.fluids import get_fluid
from compeff_pro.utils.constants import T_CELSIUS_OFFSET

logger = logging.getLogger(__name__)

# Pressure ratio at which a typical oil-injected screw peaks
_PR_OPTIMUM = 3.8
_K_GENERIC = 1.3
_K_AMMONIA = 1.31


@dataclass
class EfficiencyEstimate:
    """Estimated compressor efficiencies at one pressure ratio."""

    eta_v: float
    eta_s: float
    eta_iso: float
    pressure_ratio: float


def isothermal_from_isentropic(eta_s: float, pressure_ratio: float, k: float = _K_GENERIC) -> float:
    """Convert an isentropic efficiency to the equivalent isothermal one.

    Uses ideal-gas work ratios:
        W_iso / W_s = ln(PR) / (k/(k-1) · (PR^((k-1)/k) - 1))
    """
    if pressure_ratio <= 1.0:
        raise ValueError(f"Pressure ratio must be > 1, got {pressure_ratio}")
    w_iso = math.log(pressure_ratio)
    w_s = k / (k - 1.0) * (pressure_ratio ** ((k - 1.0) / k) - 1.0)
    return eta_s * w_iso / w_s


def empirical_efficiencies(pressure_ratio: float) -> EfficiencyEstimate:
    """Generic oil-injected screw efficiencies from pressure ratio.

    Args:
        pressure_ratio: Discharge over suction pressure (> 1).

    Returns:
        EfficiencyEstimate rounded to three decimals.

    Raises:
        ValueError: If the pressure ratio is not above 1.
    """
    if pressure_ratio <= 1.0:
        raise ValueError(f"Pressure ratio must be > 1, got {pressure_ratio}")

    eta_v = float(np.clip(0.97 - 0.02 * (pressure_ratio - 1.0), 0.60, 0.97))
    eta_s = float(
        np.clip(0.78 - 0.08 * math.log(pressure_ratio / _PR_OPTIMUM) ** 2, 0.50, 0.82)
    )
    eta_iso = isothermal_from_isentropic(eta_s, pressure_ratio, _K_GENERIC)

    return EfficiencyEstimate(
        eta_v=round(eta_v, 3),
        eta_s=round(eta_s, 3),
        eta_iso=round(eta_iso, 3),
        pressure_ratio=pressure_ratio,
    )


def screw_efficiency(
    pd_bar: float,
    ps_bar: float,
    vi: float = 3.6,
    economizer: bool = False,
) -> EfficiencyEstimate:
    """Ammonia screw efficiencies for a fixed built-in volume ratio.

    Args:
        pd_bar: Discharge pressure [bar].
        ps_bar: Suction pressure [bar].
        vi: Built-in volume ratio.
        economizer: Whether an economizer port is active; it costs some
            volumetric and isentropic efficiency on the main flow.

    Returns:
        EfficiencyEstimate with ``eta_s`` the adiabatic efficiency.
    """
    if ps_bar <= 0 or pd_bar <= ps_bar:
        raise ValueError(f"Discharge pressure ({pd_bar}) must exceed suction pressure ({ps_bar})")
    if vi <= 1.0:
        raise ValueError(f"Volume ratio must be > 1, got {vi}")

    pr = pd_bar / ps_bar
    pi_internal = vi**_K_AMMONIA

    eta_is = 0.80 - 0.12 * math.log(pr / pi_internal) ** 2
    eta_v = 0.96 - 0.012 * pr
    if economizer:
        eta_is -= 0.015
        eta_v -= 0.01

    eta_is = float(np.clip(eta_is, 0.45, 0.85))
    eta_v = float(np.clip(eta_v, 0.60, 0.97))
    eta_iso = isothermal_from_isentropic(eta_is, pr, _K_AMMONIA)

    logger.debug("Screw efficiency: PR=%.2f, pi_i=%.2f, eta_s=%.3f, eta_v=%.3f", pr, pi_internal, eta_is, eta_v)

    return EfficiencyEstimate(
        eta_v=round(eta_v, 3),
        eta_s=round(eta_is, 3),
        eta_iso=round(eta_iso, 3),
        pressure_ratio=pr,
    )


def auto_efficiency_two_stage(
    fluid_name: str,
    T_evap_C: float,
    T_cond_C: float,
) -> tuple[EfficiencyEstimate, EfficiencyEstimate]:
    """Stage efficiencies for a two-stage machine at the geometric-mean pressure.

    Returns:
        (low-stage estimate, high-stage estimate).
    """
    fluid = get_fluid(fluid_name)
    pe = fluid.saturation_pressure(T_evap_C + T_CELSIUS_OFFSET, 1.0)
    pc = fluid.saturation_pressure(T_cond_C + T_CELSIUS_OFFSET, 1.0)
    p_mid = math.sqrt(pe * pc)
    return empirical_efficiencies(p_mid / pe), empirical_efficiencies(pc / p_mid)
