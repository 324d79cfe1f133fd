"""Tests for the report generation module."""

import pytest

from compeff_pro.core.config import build_state
from compeff_pro.cycle.heat_pump import HeatPumpInput, solve_heat_pump
from compeff_pro.cycle.refrigeration import RefrigerationInput, solve_refrigeration
from compeff_pro.cycle.two_stage_single import TwoStageSingleInput, solve_two_stage_single
from compeff_pro.reports.summary import (
    generate_html_report,
    generate_text_report,
    save_html_report,
    save_text_report,
)


def _refrigeration_state():
    inputs = RefrigerationInput(fluid="R717", T_evap=-10.0, T_cond=35.0)
    return build_state("m2", inputs, solve_refrigeration(inputs), name="Test Plant")


class TestTextReport:
    def test_sections(self):
        text = generate_text_report(_refrigeration_state())
        assert "CompEff Pro" in text
        assert "Test Plant" in text
        assert "OPERATING POINT" in text
        assert "PERFORMANCE" in text
        assert "STATE POINTS" in text
        assert "Oil + Refrigerant" in text
        assert "Cooling capacity" in text

    def test_no_water_section_for_refrigeration(self):
        text = generate_text_report(_refrigeration_state())
        assert "WATER CIRCUIT" not in text

    def test_water_circuit(self):
        inputs = HeatPumpInput()
        state = build_state("m7", inputs, solve_heat_pump(inputs))
        text = generate_text_report(state)
        assert "WATER CIRCUIT" in text
        assert "Oil cooler Duty" in text
        assert "Water Inlet" in text

    def test_subcooler_selection(self):
        inputs = TwoStageSingleInput(fluid="R717", T_evap=-35.0, T_cond=35.0, flow_m3h=500.0)
        state = build_state("m5", inputs, solve_two_stage_single(inputs))
        text = generate_text_report(state)
        assert "SUBCOOLER SELECTION" in text
        assert "Liquid Side T" in text

    def test_warnings(self):
        inputs = HeatPumpInput(T_water_out=72.0)
        state = build_state("m7", inputs, solve_heat_pump(inputs))
        text = generate_text_report(state)
        assert "WARNINGS" in text
        assert "Condenser: approach" in text


class TestHtmlReport:
    def test_structure(self):
        html = generate_html_report(_refrigeration_state())
        assert html.startswith("<!DOCTYPE html>")
        assert "<h2>Performance</h2>" in html
        assert "<h2>State Points</h2>" in html
        assert "</html>" in html

    def test_escaping(self):
        state = _refrigeration_state()
        state.meta.name = "A <b> & B"
        html = generate_html_report(state)
        assert "A &lt;b&gt; &amp; B" in html


class TestSaveReports:
    def test_save_text(self, tmp_path):
        path = tmp_path / "report.txt"
        save_text_report(_refrigeration_state(), path)
        assert "PERFORMANCE" in path.read_text(encoding="utf-8")

    def test_save_html(self, tmp_path):
        path = tmp_path / "report.html"
        save_html_report(_refrigeration_state(), path)
        assert "<table>" in path.read_text(encoding="utf-8")
