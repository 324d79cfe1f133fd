"""Unit conversion utilities for CompEff Pro.

The solvers work in °C, K differences, bar(a) and m³/h, which is how
compressor data sheets are written. These helpers bring user input given
in other units onto that basis through a shared pint registry.
"""

from __future__ import annotations

from functools import lru_cache

import pint

_ureg = pint.UnitRegistry()
_ureg.formatter.default_format = "~P"

Q_ = _ureg.Quantity

# Units accepted for absolute temperatures and pressures on input
TEMPERATURE_UNITS = ["degC", "degF", "K"]
PRESSURE_UNITS = ["bar", "kPa", "MPa", "psi", "Pa"]
FLOW_UNITS = ["m**3/hour", "ft**3/min", "L/s"]


def get_unit_registry() -> pint.UnitRegistry:
    """Return the shared pint UnitRegistry instance."""
    return _ureg


@lru_cache(maxsize=256)
def convert(value: float, from_unit: str, to_unit: str) -> float:
    """General-purpose unit conversion.

    Offset units (degC, degF) are treated as absolute temperatures.
    """
    return Q_(value, from_unit).to(to_unit).magnitude


def to_celsius(value: float | None, unit: str) -> float | None:
    """Absolute temperature in °C; ``None`` passes through."""
    if value is None or unit == "degC":
        return value
    return convert(value, unit, "degC")


def to_bar(value: float, unit: str) -> float:
    """Absolute pressure in bar."""
    if unit == "bar":
        return value
    return convert(value, unit, "bar")


def pressure_to_si(value: float, unit: str) -> float:
    """Pressure in Pa."""
    return convert(value, unit, "Pa")


def temperature_to_si(value: float, unit: str) -> float:
    """Absolute temperature in K."""
    return convert(value, unit, "K")


def volume_flow_to_m3h(value: float, unit: str) -> float:
    """Volume flow in m³/h, e.g. from "ft**3/min" (CFM) or "L/s"."""
    return convert(value, unit, "m**3/hour")


def pressure_from_si(value: float, unit: str) -> float:
    return convert(value, "Pa", unit)


def temperature_from_si(value: float, unit: str) -> float:
    return convert(value, "K", unit)


def volume_flow_to_si(value: float, unit: str) -> float:
    """Volume flow in m³/s."""
    return convert(value, unit, "m**3/s")


def power_from_si(value: float, unit: str) -> float:
    """Power given in W expressed in *unit* ("kW", "hp", ...)."""
    return convert(value, "W", unit)
