"""Calculation state management and project I/O for CompEff Pro.

A saved calculation is one JSON document holding the project metadata,
the calculation mode, its inputs and the flattened results.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import numpy as np

from compeff_pro import __version__

logger = logging.getLogger(__name__)


# --- Project metadata ---


@dataclass
class ProjectMeta:
    """Top-level project metadata."""

    name: str = "Untitled"
    description: str = ""
    author: str = ""
    version: str = __version__
    created: str = ""
    modified: str = ""

    def __post_init__(self) -> None:
        if not self.created:
            self.created = datetime.now(timezone.utc).isoformat()

    def touch(self) -> None:
        """Update the modified timestamp."""
        self.modified = datetime.now(timezone.utc).isoformat()


@dataclass
class CalculationState:
    """One persisted calculation.

    ``inputs`` and ``results`` are the JSON-safe dictionaries produced by
    :func:`compeff_pro.cycle.solver.inputs_to_dict` and
    :func:`compeff_pro.cycle.solver.result_to_dict`.
    """

    meta: ProjectMeta = field(default_factory=ProjectMeta)
    mode: str = "m2"
    fluid: str = ""
    inputs: dict[str, Any] = field(default_factory=dict)
    results: dict[str, Any] = field(default_factory=dict)
    state_points: list[dict[str, Any]] = field(default_factory=list)

    @property
    def warnings(self) -> list[str]:
        return list(self.results.get("warnings", []))

    @property
    def summary(self) -> list[dict[str, Any]]:
        return list(self.results.get("summary", []))


def build_state(mode: str, inputs: Any, result: Any, name: str = "") -> CalculationState:
    """Assemble a CalculationState from a solved calculation."""
    from compeff_pro.cycle.solver import CalculationMode, inputs_to_dict, result_to_dict

    mode_enum = CalculationMode(mode)
    results = result_to_dict(result)
    return CalculationState(
        meta=ProjectMeta(name=name or f"{mode_enum.label}: {results['label']}"),
        mode=mode_enum.value,
        fluid=result.fluid,
        inputs=inputs_to_dict(inputs),
        results=results,
        state_points=[p.as_dict() for p in result.state_points],
    )


# --- JSON serialization ---


class _NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy types."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, (np.integer,)):
            return int(obj)
        if isinstance(obj, (np.floating,)):
            return float(obj)
        if isinstance(obj, (np.bool_,)):
            return bool(obj)
        return super().default(obj)


def save_calculation_json(state: CalculationState, path: str | Path) -> None:
    """Save a calculation to a JSON file."""
    path = Path(path)
    state.meta.touch()
    data = asdict(state)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, cls=_NumpyEncoder, ensure_ascii=False)

    logger.info("Saved calculation to %s", path)


def load_calculation_json(path: str | Path) -> CalculationState:
    """Load a calculation from a JSON file."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    meta = ProjectMeta(**data.pop("meta", {}))
    state = CalculationState(meta=meta, **data)
    logger.info("Loaded calculation from %s", path)
    return state
