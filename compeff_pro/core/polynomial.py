"""AHRI 540 compressor polynomials and variable-speed scaling.

Manufacturer performance maps are published as ten-coefficient
polynomials in suction (S) and discharge (D) saturation temperature:

    X = C0 + C1·S + C2·D + C3·S² + C4·S·D + C5·D² + C6·S³ + C7·D·S² + C8·S·D² + C9·D³

For variable-speed drives the rated-speed value is multiplied by a
correction polynomial in speed ratio r, ``K = Σ Ci·r^i``. Without
correction data, flow and power are scaled linearly with r.

This module also holds :class:`PolynomialState`, the flow-model selection
shared between the calculation front ends.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Sequence

logger = logging.getLogger(__name__)

N_COEFFS = 10
_ZERO_TOL = 1e-9


def poly10(C: Sequence[float], S: float, D: float) -> float:
    """Evaluate the AHRI 540 ten-term polynomial.

    Args:
        C: Coefficients C0..C9.
        S: Suction parameter (usually evaporating temperature [°C]).
        D: Discharge parameter (usually condensing temperature [°C]).

    Returns:
        Polynomial value, or 0.0 if fewer than ten coefficients are given.
    """
    if len(C) < N_COEFFS:
        logger.warning("AHRI polynomial needs %d coefficients, got %d", N_COEFFS, len(C))
        return 0.0

    S2 = S * S
    D2 = D * D
    return (
        C[0]
        + C[1] * S
        + C[2] * D
        + C[3] * S2
        + C[4] * S * D
        + C[5] * D2
        + C[6] * S2 * S
        + C[7] * D * S2
        + C[8] * S * D2
        + C[9] * D2 * D
    )


def correction_factor(C: Sequence[float], r: float) -> float:
    """Speed correction factor K = Σ C[i]·r^i (1.0 when no coefficients)."""
    if len(C) == 0:
        return 1.0
    k = 0.0
    r_pow = 1.0
    for c in C:
        k += c * r_pow
        r_pow *= r
    return k


def has_correction_data(C: Sequence[float]) -> bool:
    """True if any correction coefficient is non-zero."""
    return any(abs(c) > _ZERO_TOL for c in C)


def poly_vsd(
    base: Sequence[float],
    corr: Sequence[float],
    S: float,
    D: float,
    rpm_ratio: float = 1.0,
) -> float:
    """Rated-speed polynomial value corrected to the current speed.

    Args:
        base: Rated-speed coefficients C0..C9.
        corr: Speed correction coefficients; all zero means none given.
        S: Suction parameter.
        D: Discharge parameter.
        rpm_ratio: Current over rated speed.

    Returns:
        Corrected value. Zero if the rated-speed value is zero or NaN.
    """
    value = poly10(base, S, D)
    if value == 0.0 or math.isnan(value):
        return 0.0

    if has_correction_data(corr):
        return value * correction_factor(corr, rpm_ratio)
    # Positive-displacement default: flow and power proportional to speed
    return value * rpm_ratio


# --- Flow-model state ---


class FlowModel(Enum):
    """How compressor mass flow and power are obtained."""

    GEOMETRY = "geometry"  # displacement × speed × volumetric efficiency
    POLYNOMIAL = "polynomial"  # AHRI 540 coefficients


def _parse_coeff(value: Any) -> float:
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return 0.0
    return parsed if math.isfinite(parsed) else 0.0


@dataclass
class PolynomialState:
    """Selected flow model, AHRI coefficients and VSD settings."""

    mode: FlowModel = FlowModel.GEOMETRY
    mass_flow_coeffs: list[float] = field(default_factory=lambda: [0.0] * N_COEFFS)
    power_coeffs: list[float] = field(default_factory=lambda: [0.0] * N_COEFFS)
    correction_coeffs: list[float] = field(default_factory=list)
    units: dict[str, str] = field(default_factory=lambda: {"mass_flow": "kg/s", "power": "kW"})

    vsd_enabled: bool = False
    rated_rpm: float = 2900.0
    current_rpm: float = 2900.0

    def set_mode(self, mode: FlowModel | str) -> bool:
        """Switch the flow model.

        Invalid values are logged and leave the current mode unchanged.

        Returns:
            True if the mode was applied.
        """
        try:
            new_mode = mode if isinstance(mode, FlowModel) else FlowModel(mode)
        except ValueError:
            logger.error("Invalid flow model: %r", mode)
            return False
        self.mode = new_mode
        logger.info("Flow model switched to: %s", new_mode.value)
        return True

    def update_coeffs(self, kind: str, values: Sequence[Any]) -> None:
        """Replace a coefficient set.

        Args:
            kind: "mass_flow", "power" or "correction".
            values: Raw values; anything that does not parse becomes 0.0.
                Mass-flow and power sets keep only the first ten.
        """
        parsed = [_parse_coeff(v) for v in values]
        if kind == "mass_flow":
            self.mass_flow_coeffs = parsed[:N_COEFFS]
        elif kind == "power":
            self.power_coeffs = parsed[:N_COEFFS]
        elif kind == "correction":
            self.correction_coeffs = parsed
        else:
            logger.warning("Unknown coefficient set '%s' ignored", kind)

    def update_vsd(self, enabled: bool, rated_rpm: float | None = None, current_rpm: float | None = None) -> None:
        self.vsd_enabled = enabled
        if rated_rpm is not None:
            self.rated_rpm = rated_rpm
        if current_rpm is not None:
            self.current_rpm = current_rpm

    @property
    def rpm_ratio(self) -> float:
        """Current over rated speed; 1.0 when the drive is fixed-speed."""
        if not self.vsd_enabled or self.rated_rpm <= 0:
            return 1.0
        return self.current_rpm / self.rated_rpm

    def mass_flow(self, T_evap_C: float, T_cond_C: float) -> float:
        """Mass flow [kg/s] from the AHRI map at the current speed."""
        return poly_vsd(self.mass_flow_coeffs, self.correction_coeffs, T_evap_C, T_cond_C, self.rpm_ratio)

    def power(self, T_evap_C: float, T_cond_C: float) -> float:
        """Shaft power [kW] from the AHRI map at the current speed."""
        return poly_vsd(self.power_coeffs, self.correction_coeffs, T_evap_C, T_cond_C, self.rpm_ratio)
