"""Utility modules for CompEff Pro."""

from compeff_pro.utils.constants import BAR_TO_PA, CP_WATER, R_UNIVERSAL, T_CELSIUS_OFFSET
from compeff_pro.utils.units import convert, get_unit_registry

__all__ = [
    "BAR_TO_PA",
    "CP_WATER",
    "R_UNIVERSAL",
    "T_CELSIUS_OFFSET",
    "convert",
    "get_unit_registry",
]
