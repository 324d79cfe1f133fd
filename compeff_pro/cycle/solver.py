"""Calculation-mode dispatch for CompEff Pro.

Maps each calculation mode to its input dataclass and solver, and
flattens inputs and results to JSON-safe dictionaries for persistence,
history and reports.

Modes:
- m2: single-stage refrigeration / heat pump (oil + refrigerant)
- m3: gas compression (oil + gas)
- m5: two-stage, single compound compressor
- m6: two-stage, two compressors
- m7: ammonia heat pump
"""

from __future__ import annotations

import logging
from dataclasses import asdict, fields, is_dataclass
from enum import Enum
from typing import Any, Callable, Union

from compeff_pro.core.polynomial import FlowModel
from compeff_pro.cycle.common import EfficiencyBasis, FlowMode, PressureMode
from compeff_pro.cycle.components.economizer import EconomizerType
from compeff_pro.cycle.gas import GasCompressionInput, GasCompressionResult, GasEfficiencyType, solve_gas_compression
from compeff_pro.cycle.heat_pump import HeatPumpInput, HeatPumpResult, solve_heat_pump
from compeff_pro.cycle.refrigeration import RefrigerationInput, RefrigerationResult, solve_refrigeration
from compeff_pro.cycle.two_stage_double import (
    TwoStageDoubleInput,
    TwoStageDoubleResult,
    solve_two_stage_double,
)
from compeff_pro.cycle.two_stage_single import (
    TwoStageSingleInput,
    TwoStageSingleResult,
    solve_two_stage_single,
)

logger = logging.getLogger(__name__)

ModeInput = Union[
    RefrigerationInput, GasCompressionInput, TwoStageSingleInput, TwoStageDoubleInput, HeatPumpInput
]
ModeResult = Union[
    RefrigerationResult, GasCompressionResult, TwoStageSingleResult, TwoStageDoubleResult, HeatPumpResult
]


class CalculationMode(Enum):
    """Calculation mode identifiers."""

    M2 = "m2"
    M3 = "m3"
    M5 = "m5"
    M6 = "m6"
    M7 = "m7"

    @property
    def label(self) -> str:
        return MODE_LABELS[self]


MODE_LABELS = {
    CalculationMode.M2: "Oil + Refrigerant",
    CalculationMode.M3: "Oil + Gas",
    CalculationMode.M5: "Two-Stage (Single Compressor)",
    CalculationMode.M6: "Two-Stage (Double Compressor)",
    CalculationMode.M7: "NH3 Heat Pump",
}

_MODES: dict[CalculationMode, tuple[type, Callable[[Any], Any]]] = {
    CalculationMode.M2: (RefrigerationInput, solve_refrigeration),
    CalculationMode.M3: (GasCompressionInput, solve_gas_compression),
    CalculationMode.M5: (TwoStageSingleInput, solve_two_stage_single),
    CalculationMode.M6: (TwoStageDoubleInput, solve_two_stage_double),
    CalculationMode.M7: (HeatPumpInput, solve_heat_pump),
}

# Input fields holding enum values, by field name
_ENUM_FIELDS: dict[str, type[Enum]] = {
    "flow_mode": FlowMode,
    "efficiency_basis": EfficiencyBasis,
    "economizer_type": EconomizerType,
    "economizer_pressure_mode": PressureMode,
    "pressure_mode": PressureMode,
    "efficiency_type": GasEfficiencyType,
    "flow_model": FlowModel,
    "lp_eco_type": EconomizerType,
    "ic_eco_type": EconomizerType,
    "hp_eco_type": EconomizerType,
}


def input_class(mode: CalculationMode | str) -> type:
    """Input dataclass for *mode*."""
    return _MODES[CalculationMode(mode)][0]


def inputs_from_dict(mode: CalculationMode | str, data: dict[str, Any]) -> ModeInput:
    """Build the mode's input dataclass from a plain dictionary.

    Unknown keys are ignored with a warning; enum fields accept their
    string values.
    """
    cls = input_class(mode)
    known = {f.name for f in fields(cls)}
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        if key not in known:
            logger.warning("Ignoring unknown input '%s' for mode %s", key, CalculationMode(mode).value)
            continue
        enum_cls = _ENUM_FIELDS.get(key)
        kwargs[key] = enum_cls(value) if enum_cls is not None and value is not None else value
    return cls(**kwargs)


def solve(mode: CalculationMode | str, inputs: ModeInput | dict[str, Any]) -> ModeResult:
    """Run the solver for *mode*.

    Args:
        mode: Calculation mode.
        inputs: The mode's input dataclass, or a dictionary of its fields.

    Raises:
        TypeError: If *inputs* is a dataclass of another mode.
    """
    mode = CalculationMode(mode)
    cls, solver = _MODES[mode]
    if isinstance(inputs, dict):
        inputs = inputs_from_dict(mode, inputs)
    elif not isinstance(inputs, cls):
        raise TypeError(f"Mode {mode.value} expects {cls.__name__}, got {type(inputs).__name__}")
    logger.debug("Solving mode %s", mode.value)
    return solver(inputs)


def _jsonable(obj: Any) -> Any:
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, dict):
        return {str(k): _jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_jsonable(v) for v in obj]
    return obj


def inputs_to_dict(inputs: ModeInput) -> dict[str, Any]:
    """Flatten an input dataclass to a JSON-safe dictionary."""
    return _jsonable(asdict(inputs))


def summary_dict(result: ModeResult) -> dict[str, float]:
    """Headline figures as {parameter: value} in display units."""
    return {name: value for name, value, _unit in result.summary_rows()}


def result_to_dict(result: ModeResult) -> dict[str, Any]:
    """Flatten a mode result to a JSON-safe dictionary.

    Adds ``summary`` (rows of parameter / value / unit) and ``label``
    alongside the dataclass fields.
    """
    if not is_dataclass(result):
        raise TypeError(f"Expected a result dataclass, got {type(result).__name__}")
    data = _jsonable(asdict(result))
    data["summary"] = [
        {"parameter": name, "value": value, "unit": unit} for name, value, unit in result.summary_rows()
    ]
    data["label"] = result.history_label()
    return data
