"""Screw compressor model database.

Bundled catalogue of industrial screw compressors, organised as
brand → series → models. Each model carries its theoretical swept volume
``displacement`` [m³/h] at nominal speed; compound two-stage machines also
list the low- and high-stage swept volumes (``disp_lp``, ``disp_hp``) and
the internal volume ratio between them (``vi_ratio``).

Brand and series lists can be narrowed per calculation mode so that each
mode only offers machines that fit its cycle.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from compeff_pro.utils.constants import SECONDS_PER_MINUTE

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"
_COMPRESSOR_DB_PATH = _DATA_DIR / "compressors.json"

MAYEKAWA = "Mayekawa (MYCOM)"
HANBELL = "Hanbell"
CARRIER = "Carrier"

# Series offered per mode group; brands not listed keep every series
_SERIES_FILTERS: dict[str, dict[str, tuple[str, ...]]] = {
    MAYEKAWA: {
        "two_stage": ("LSC two-stage", "MS", "SS"),
        "default": ("N",),
    },
    HANBELL: {
        "two_stage": ("LT-S",),
        "default": ("RC2-G", "RC2-T", "RC2-B"),
    },
}
_CARRIER_HIGH_TEMP = ("06TU-G",)
_CARRIER_STANDARD = ("06TS", "06TT", "06TU", "06TV", "06TX")

# Modes whose compressor list is restricted to compound two-stage machines
_TWO_STAGE_MODES = ("m5",)


@lru_cache(maxsize=1)
def _load_compressor_db() -> dict[str, dict[str, list[dict[str, Any]]]]:
    """Load the compressor database JSON file."""
    if not _COMPRESSOR_DB_PATH.exists():
        logger.warning("Compressor database not found at %s", _COMPRESSOR_DB_PATH)
        return {}
    with open(_COMPRESSOR_DB_PATH, encoding="utf-8") as f:
        return json.load(f)


def get_all_brands() -> list[str]:
    """Return all brand names in catalogue order."""
    return list(_load_compressor_db().keys())


def get_series_by_brand(brand: str) -> list[str]:
    """Return the series of *brand*, or an empty list if the brand is unknown."""
    return list(_load_compressor_db().get(brand, {}).keys())


def get_models_by_series(brand: str, series: str) -> list[dict[str, Any]]:
    """Return model entries of one series, or an empty list."""
    return list(_load_compressor_db().get(brand, {}).get(series, []))


def get_model_detail(brand: str, series: str, model: str) -> dict[str, Any] | None:
    """Full model entry including two-stage fields, or None if not found."""
    for entry in get_models_by_series(brand, series):
        if entry["model"] == model:
            return dict(entry)
    return None


def get_displacement_by_model(brand: str, series: str, model: str) -> float | None:
    """Theoretical displacement [m³/h] of a model, or None if not found."""
    detail = get_model_detail(brand, series, model)
    return detail["displacement"] if detail else None


def find_displacement_by_model_string(model: str) -> float | None:
    """Search every brand and series for *model* and return its displacement [m³/h]."""
    for brand in get_all_brands():
        for series in get_series_by_brand(brand):
            displacement = get_displacement_by_model(brand, series, model)
            if displacement is not None:
                return displacement
    return None


def find_model(model: str) -> tuple[str, str, dict[str, Any]]:
    """Locate a model by name anywhere in the catalogue.

    Returns:
        (brand, series, model entry).

    Raises:
        KeyError: If no brand carries the model.
    """
    available: list[str] = []
    for brand in get_all_brands():
        for series in get_series_by_brand(brand):
            detail = get_model_detail(brand, series, model)
            if detail is not None:
                return brand, series, detail
            available.extend(m["model"] for m in get_models_by_series(brand, series))
    raise KeyError(f"Compressor model '{model}' not found. Available: {available}")


def get_filtered_brands(mode: str) -> list[str]:
    """Brands offered in calculation *mode* ("m2", "m3", "m5", "m6", "m7")."""
    brands = get_all_brands()
    if mode in _TWO_STAGE_MODES:
        return [b for b in brands if b in (MAYEKAWA, HANBELL)]
    return brands


def get_filtered_series_by_brand(mode: str, brand: str, level: str | None = None) -> list[str]:
    """Series of *brand* offered in *mode*.

    Args:
        mode: Calculation mode identifier.
        brand: Brand name.
        level: Stage level for two-compressor cycles: "ht" for the
            high-temperature stage, "lt" or None otherwise.
    """
    all_series = get_series_by_brand(brand)

    if brand in _SERIES_FILTERS:
        group = "two_stage" if mode in _TWO_STAGE_MODES else "default"
        allowed = _SERIES_FILTERS[brand][group]
        return [s for s in all_series if s in allowed]

    if brand == CARRIER:
        allowed = _CARRIER_HIGH_TEMP if level == "ht" else _CARRIER_STANDARD
        return [s for s in all_series if s in allowed]

    return all_series


def displacement_m3h_to_cm3(displacement_m3h: float, rpm: float) -> float:
    """Swept volume per revolution [cm³] from hourly displacement at *rpm*."""
    if rpm <= 0:
        raise ValueError(f"Speed must be positive, got {rpm}")
    return displacement_m3h / SECONDS_PER_MINUTE / rpm * 1.0e6
