"""Tests for calculation state persistence."""

import json

import numpy as np
import pytest

from compeff_pro import __version__
from compeff_pro.core.config import (
    CalculationState,
    ProjectMeta,
    build_state,
    load_calculation_json,
    save_calculation_json,
)
from compeff_pro.cycle.refrigeration import RefrigerationInput, solve_refrigeration


class TestCalculationState:
    def test_defaults(self):
        state = CalculationState()
        assert state.mode == "m2"
        assert state.meta.version == __version__
        assert state.meta.created != ""
        assert state.warnings == []
        assert state.summary == []

    def test_meta_touch(self):
        meta = ProjectMeta(name="Test")
        meta.touch()
        assert meta.modified != ""

    def test_build_state(self):
        inputs = RefrigerationInput(fluid="R717", T_evap=-10.0, T_cond=35.0)
        result = solve_refrigeration(inputs)
        state = build_state("m2", inputs, result)
        assert state.fluid == "R717"
        assert state.meta.name.startswith("Oil + Refrigerant: R717")
        assert state.inputs["flow_mode"] == "volume"
        assert state.state_points[0]["name"] == result.state_points[0].name
        assert state.summary[0]["unit"] == "bar"

    def test_build_state_name(self):
        inputs = RefrigerationInput()
        state = build_state("m2", inputs, solve_refrigeration(inputs), name="Chiller A")
        assert state.meta.name == "Chiller A"


class TestJsonPersistence:
    def test_save_and_load(self, tmp_path):
        inputs = RefrigerationInput(fluid="R717", T_evap=-10.0, T_cond=35.0)
        state = build_state("m2", inputs, solve_refrigeration(inputs), name="Test Plant")
        path = tmp_path / "calc.json"
        save_calculation_json(state, path)

        loaded = load_calculation_json(path)
        assert loaded.meta.name == "Test Plant"
        assert loaded.meta.modified != ""
        assert loaded.mode == "m2"
        assert loaded.inputs["T_evap"] == pytest.approx(-10.0)
        assert loaded.results["label"] == state.results["label"]
        assert len(loaded.state_points) == len(state.state_points)

    def test_numpy_serialization(self, tmp_path):
        """Numpy values in results should be written as plain JSON."""
        state = CalculationState(results={"curve": np.linspace(0, 1, 5), "peak": np.float64(2.5)})
        path = tmp_path / "np.json"
        save_calculation_json(state, path)

        with open(path) as f:
            data = json.load(f)
        assert data["results"]["curve"] == pytest.approx([0.0, 0.25, 0.5, 0.75, 1.0])
        assert data["results"]["peak"] == pytest.approx(2.5)
