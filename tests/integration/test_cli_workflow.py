"""Integration tests for end-to-end CLI workflows.

Tests the calculation pipeline: calculate → save → report → history.
"""

import json
import os

import pytest
from click.testing import CliRunner

from compeff_pro.cli.main import cli
from compeff_pro.core.history import HistoryStore


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def store(tmp_path):
    return HistoryStore(tmp_path / "history.json")


def _invoke(runner, store, args):
    return runner.invoke(cli, args, obj={"history": store})


class TestCalculationCommands:
    def test_refrig_saves_json(self, runner, store, tmp_path):
        out = str(tmp_path / "refrig.json")
        result = _invoke(runner, store, ["refrig", "--fluid", "R717", "--te", "-10", "--tc", "35", "-o", out])
        assert result.exit_code == 0, result.output
        assert "Cooling capacity" in result.output

        with open(out) as f:
            data = json.load(f)
        assert data["mode"] == "m2"
        assert data["fluid"] == "R717"
        assert data["results"]["cooling_capacity"] > 0

    def test_refrig_fahrenheit(self, runner, store, tmp_path):
        out = str(tmp_path / "refrig.json")
        result = _invoke(runner, store, [
            "refrig", "--fluid", "R717", "--te", "14", "--tc", "95", "--temp-unit", "degF", "-o", out,
        ])
        assert result.exit_code == 0, result.output
        with open(out) as f:
            data = json.load(f)
        assert data["inputs"]["T_evap"] == pytest.approx(-10.0)
        assert data["inputs"]["T_cond"] == pytest.approx(35.0)

    def test_refrig_flow_in_litres_per_second(self, runner, store, tmp_path):
        out = str(tmp_path / "refrig.json")
        result = _invoke(runner, store, [
            "refrig", "--fluid", "R717", "--flow", "50", "--flow-unit", "L/s", "-o", out,
        ])
        assert result.exit_code == 0, result.output
        with open(out) as f:
            data = json.load(f)
        assert data["inputs"]["flow_m3h"] == pytest.approx(180.0)

    def test_refrig_economizer(self, runner, store):
        result = _invoke(runner, store, ["refrig", "--fluid", "R717", "--te", "-20", "--tc", "35", "--eco"])
        assert result.exit_code == 0, result.output
        assert "Economizer pressure" in result.output

    def test_refrig_invalid_temperatures(self, runner, store):
        result = _invoke(runner, store, ["refrig", "--te", "40", "--tc", "10"])
        assert result.exit_code == 1
        assert len(store) == 0

    def test_gas(self, runner, store):
        result = _invoke(runner, store, ["gas", "--fluid", "Air", "--p-in", "1", "--p-out", "8"])
        assert result.exit_code == 0, result.output
        assert "Shaft power" in result.output

    def test_two_stage_single(self, runner, store):
        result = _invoke(runner, store, ["two-stage", "single", "--flow", "500"])
        assert result.exit_code == 0, result.output
        assert store.list()[0]["mode"] == "m5"

    def test_two_stage_double(self, runner, store):
        result = _invoke(runner, store, [
            "two-stage", "double", "--flow-lp", "500", "--flow-hp", "200", "--ic-eco",
        ])
        assert result.exit_code == 0, result.output
        assert store.list()[0]["mode"] == "m6"

    def test_heat_pump(self, runner, store):
        result = _invoke(runner, store, ["heat-pump", "--desuperheater"])
        assert result.exit_code == 0, result.output
        assert "Heating capacity" in result.output
        assert "desuperheater" in result.output

    def test_heat_pump_polynomial_needs_coefficients(self, runner, store):
        result = _invoke(runner, store, ["heat-pump", "--flow-model", "polynomial"])
        assert result.exit_code != 0

    def test_no_history(self, runner, store):
        result = _invoke(runner, store, ["gas", "--no-history"])
        assert result.exit_code == 0, result.output
        assert len(store) == 0


class TestReportPipeline:
    def test_calculation_to_reports(self, runner, store, tmp_path):
        calc = str(tmp_path / "calc.json")
        result = _invoke(runner, store, ["heat-pump", "-o", calc])
        assert result.exit_code == 0, result.output

        out = str(tmp_path / "report.html")
        result = _invoke(runner, store, ["report", "--calc", calc, "--format", "both", "-o", out])
        assert result.exit_code == 0, result.output
        assert os.path.exists(str(tmp_path / "report.txt"))
        assert os.path.exists(out)

    def test_text_report_to_console(self, runner, store, tmp_path):
        calc = str(tmp_path / "calc.json")
        _invoke(runner, store, ["refrig", "-o", calc])
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = _invoke(runner, store, ["report", "--calc", calc])
            assert result.exit_code == 0, result.output
            assert "OPERATING POINT" in result.output

    def test_info_calc(self, runner, store, tmp_path):
        calc = str(tmp_path / "calc.json")
        _invoke(runner, store, ["two-stage", "double", "-o", calc])
        result = _invoke(runner, store, ["info", "calc", calc])
        assert result.exit_code == 0, result.output
        assert "Two-Stage (Double Compressor)" in result.output


class TestHistoryCommands:
    def test_list_show_delete_clear(self, runner, store):
        _invoke(runner, store, ["refrig", "--fluid", "R717"])
        _invoke(runner, store, ["gas"])
        entries = store.list()
        assert len(entries) == 2

        result = _invoke(runner, store, ["history", "list"])
        assert result.exit_code == 0, result.output
        assert entries[0]["id"] in result.output

        result = _invoke(runner, store, ["history", "list", "--mode", "m3"])
        assert entries[1]["id"] not in result.output

        result = _invoke(runner, store, ["history", "show", entries[1]["id"]])
        assert result.exit_code == 0, result.output
        assert "R717" in result.output

        result = _invoke(runner, store, ["history", "delete", entries[0]["id"]])
        assert result.exit_code == 0, result.output
        assert len(store) == 1

        result = _invoke(runner, store, ["history", "clear", "--yes"])
        assert result.exit_code == 0, result.output
        assert len(store) == 0

    def test_show_missing(self, runner, store):
        result = _invoke(runner, store, ["history", "show", "missing"])
        assert result.exit_code != 0

    def test_empty_list(self, runner, store):
        result = _invoke(runner, store, ["history", "list"])
        assert "No calculations" in result.output


class TestInfoAndEfficiency:
    def test_fluids(self, runner, store):
        result = _invoke(runner, store, ["info", "fluids", "--mode", "m2"])
        assert result.exit_code == 0, result.output
        assert "R717" in result.output

    def test_compressors(self, runner, store):
        result = _invoke(runner, store, ["info", "compressors", "--mode", "m5"])
        assert result.exit_code == 0, result.output
        assert "Hanbell" in result.output

    def test_empirical(self, runner, store):
        result = _invoke(runner, store, ["efficiency", "empirical", "--pr", "4"])
        assert result.exit_code == 0, result.output

    def test_screw(self, runner, store):
        result = _invoke(runner, store, ["efficiency", "screw", "--pd", "13.5", "--ps", "2.9", "--vi", "3.6"])
        assert result.exit_code == 0, result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "CompEff Pro" in result.output
