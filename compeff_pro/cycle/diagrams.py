"""Diagram data for pressure–enthalpy and temperature–entropy charts.

Produces the saturation dome and cycle point coordinates in the units
charts are drawn in: P-h in kJ/kg and bar, T-s in kJ/(kg·K) and °C.
Plotting itself lives in the UI layer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import NamedTuple, Sequence

import numpy as np

from compeff_pro.core.fluids import Fluid, FluidPropertyError
from compeff_pro.utils.constants import BAR_TO_PA, J_TO_KJ, PA_TO_BAR, T_CELSIUS_OFFSET

logger = logging.getLogger(__name__)

# Keep the dome just below the critical point, where CoolProp's saturation
# solver becomes unreliable
_CRITICAL_MARGIN = 0.995


class DiagramPoint(NamedTuple):
    """A labelled chart point."""

    name: str
    x: float
    y: float


@dataclass
class SaturationLines:
    """Saturated liquid and vapour lines as (x, y) pairs."""

    liquid: list[tuple[float, float]] = field(default_factory=list)
    vapour: list[tuple[float, float]] = field(default_factory=list)


def saturation_lines_ph(fluid: Fluid, Pe: float, Pc: float, n_points: int = 100) -> SaturationLines:
    """Saturation dome on the P-h chart.

    Pressures are log-spaced from 0.8·min(Pe, Pc) to 1.2·max(Pe, Pc),
    capped below the critical pressure. Points CoolProp cannot evaluate
    are skipped.

    Returns:
        Lines of (h [kJ/kg], P [bar]).
    """
    P_min = min(Pe, Pc) * 0.8
    P_max = min(max(Pe, Pc) * 1.2, fluid.P_critical * _CRITICAL_MARGIN)
    lines = SaturationLines()
    for P in np.logspace(np.log10(P_min), np.log10(P_max), n_points + 1):
        try:
            h_l = fluid.saturated_enthalpy_p(P, 0.0)
            h_v = fluid.saturated_enthalpy_p(P, 1.0)
        except FluidPropertyError:
            continue
        lines.liquid.append((h_l * J_TO_KJ, P * PA_TO_BAR))
        lines.vapour.append((h_v * J_TO_KJ, P * PA_TO_BAR))
    logger.debug("P-h dome for %s: %d points", fluid.name, len(lines.liquid))
    return lines


def saturation_lines_ts(fluid: Fluid, T_evap_C: float, T_cond_C: float, n_points: int = 100) -> SaturationLines:
    """Saturation dome on the T-s chart.

    Temperatures span 20 K beyond the evaporating and condensing
    temperatures, capped below the critical temperature.

    Returns:
        Lines of (s [kJ/(kg·K)], T [°C]).
    """
    T_min = min(T_evap_C, T_cond_C) - 20.0 + T_CELSIUS_OFFSET
    T_max = min(max(T_evap_C, T_cond_C) + 20.0 + T_CELSIUS_OFFSET, fluid.T_critical * _CRITICAL_MARGIN)
    T_min = max(T_min, fluid.T_min)
    lines = SaturationLines()
    for T in np.linspace(T_min, T_max, n_points + 1):
        try:
            s_l = fluid.saturated_entropy(T, 0.0)
            s_v = fluid.saturated_entropy(T, 1.0)
        except FluidPropertyError:
            continue
        T_C = T - T_CELSIUS_OFFSET
        lines.liquid.append((s_l * J_TO_KJ, T_C))
        lines.vapour.append((s_v * J_TO_KJ, T_C))
    return lines


def points_to_ts(fluid: Fluid, points: Sequence[DiagramPoint]) -> list[DiagramPoint]:
    """Convert P-h chart points (h kJ/kg, P bar) to T-s points (s kJ/(kg·K), T °C).

    Points that cannot be evaluated are dropped.
    """
    out: list[DiagramPoint] = []
    for p in points:
        P = p.y * BAR_TO_PA
        h = p.x / J_TO_KJ
        try:
            s = fluid.entropy_ph(P, h)
            T = fluid.temperature_ph(P, h)
        except FluidPropertyError:
            logger.debug("Skipping T-s conversion of point %s", p.name)
            continue
        out.append(DiagramPoint(p.name, s * J_TO_KJ, T - T_CELSIUS_OFFSET))
    return out


def ph_point(name: str, h: float, P: float) -> DiagramPoint:
    """P-h chart point from SI enthalpy [J/kg] and pressure [Pa]."""
    return DiagramPoint(name, h * J_TO_KJ, P * PA_TO_BAR)


def cycle_path(points: Sequence[DiagramPoint], order: Sequence[str] | None = None) -> list[DiagramPoint]:
    """Order points for drawing a closed cycle.

    Args:
        points: Available points.
        order: Point names in drawing order; unknown names are ignored.
            Defaults to the given order.

    Returns:
        Points in order with the first point repeated at the end.
    """
    if order is None:
        path = list(points)
    else:
        by_name = {p.name: p for p in points}
        path = [by_name[n] for n in order if n in by_name]
    if path and path[0] != path[-1]:
        path.append(path[0])
    return path
